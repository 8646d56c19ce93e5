import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from newsdesk.core.errors import Conflict, NotFound
from newsdesk.crud.base import commit, get_paged
from newsdesk.crud.filters import all_of, text_contains
from newsdesk.models.news import news_tag
from newsdesk.models.tag import Tag
from newsdesk.schemas.tag import TagCreate, TagQuery, TagUpdate

logger = logging.getLogger(__name__)

NAME_TAKEN = "Tag with the same name already exists."
DROPDOWN_LIMIT = 5


def get_tag(db: Session, tag_id: int) -> Optional[Tag]:
    return db.query(Tag).filter(Tag.id == tag_id).first()


def get_tag_or_404(db: Session, tag_id: int) -> Tag:
    tag = get_tag(db, tag_id)
    if not tag:
        raise NotFound("Tag not found")
    return tag


def get_tags_by_ids(db: Session, tag_ids: Iterable[int]) -> List[Tag]:
    """
    Load tags for the given ids, in id order.

    Raises NotFound naming the ids that do not exist.
    """
    wanted = set(tag_ids)
    if not wanted:
        return []
    tags = db.query(Tag).filter(Tag.id.in_(wanted)).order_by(Tag.id).all()
    missing = sorted(wanted - {t.id for t in tags})
    if missing:
        raise NotFound(f"Tag(s) not found: {', '.join(str(i) for i in missing)}")
    return tags


def name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Tag.id).filter(func.lower(Tag.name) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Tag.id != exclude_id)
    return db.query(query.exists()).scalar()


def get_tags(db: Session, query: TagQuery) -> Tuple[List[Tag], int]:
    criteria = all_of(text_contains(Tag.name, query.name))
    return get_paged(
        db,
        Tag,
        criteria,
        sort_by=query.sort_by,
        descending=query.descending,
        page_number=query.page_number,
        page_size=query.page_size,
        default_order=[Tag.name],
    )


def get_tag_dropdown(db: Session, name: Optional[str]) -> List[Tag]:
    """
    Tag suggestions for a typed keyword.

    Nothing is suggested until a keyword is typed.
    """
    keyword = text_contains(Tag.name, name)
    if keyword is None:
        return []
    return (
        db.query(Tag)
        .filter(keyword.clause())
        .order_by(Tag.name, Tag.id)
        .limit(DROPDOWN_LIMIT)
        .all()
    )


def create_tag(db: Session, tag_in: TagCreate) -> Tag:
    if name_taken(db, tag_in.name):
        raise Conflict(NAME_TAKEN)

    db_tag = Tag(name=tag_in.name, note=tag_in.note)
    db.add(db_tag)
    commit(db, conflict_message=NAME_TAKEN)
    db.refresh(db_tag)
    logger.info(f"Created tag {db_tag.id} ({db_tag.name})")
    return db_tag


def apply_tag_patch(tag: Tag, patch: TagUpdate) -> Tag:
    if patch.name is not None and patch.name.strip():
        tag.name = patch.name.strip()
    if patch.note is not None:
        tag.note = patch.note
    return tag


def update_tag(db: Session, tag_id: int, tag_in: TagUpdate) -> Tag:
    tag = get_tag_or_404(db, tag_id)

    if tag_in.name is not None and name_taken(db, tag_in.name, exclude_id=tag_id):
        raise Conflict("Another tag with the same name exists.")

    apply_tag_patch(tag, tag_in)
    commit(db, conflict_message=NAME_TAKEN)
    db.refresh(tag)
    logger.info(f"Updated tag {tag.id}")
    return tag


def delete_tag(db: Session, tag_id: int) -> None:
    tag = get_tag_or_404(db, tag_id)

    in_use = db.query(news_tag.c.news_article_id).filter(news_tag.c.tag_id == tag_id)
    if db.query(in_use.exists()).scalar():
        raise Conflict("Cannot delete tag because it is used by news articles.")

    db.delete(tag)
    commit(db)
    logger.info(f"Deleted tag {tag_id}")
