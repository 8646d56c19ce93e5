import datetime
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload

from newsdesk.core.errors import Forbidden, NotFound
from newsdesk.crud.base import commit, get_paged
from newsdesk.crud.category import get_all_categories, get_hierarchy
from newsdesk.crud.filters import all_of, between, contains_all, equals, text_contains, value_in, AllOf
from newsdesk.crud.tag import get_tags_by_ids
from newsdesk.models.account import AccountRole, SystemAccount
from newsdesk.models.category import Category
from newsdesk.models.news import NewsArticle, NewsStatus
from newsdesk.models.tag import Tag
from newsdesk.schemas.news import MyNewsQuery, NewsCreate, NewsQuery, NewsUpdate
from newsdesk.schemas.statistics import StatisticsReport
from newsdesk.services.statistics import build_report, report_window

logger = logging.getLogger(__name__)

# Accepted sort_by names that are not plain column names
SORT_ALIASES = {
    "createdBy": NewsArticle.created_by_id,
    "updatedBy": NewsArticle.updated_by_id,
    "category": NewsArticle.category_id,
}

SUMMARY_OPTIONS = [
    joinedload(NewsArticle.category),
    joinedload(NewsArticle.created_by),
]


def get_article(db: Session, article_id: int) -> Optional[NewsArticle]:
    return db.query(NewsArticle).filter(NewsArticle.id == article_id).first()


def get_article_or_404(db: Session, article_id: int) -> NewsArticle:
    article = get_article(db, article_id)
    if not article:
        raise NotFound("News article not found")
    return article


def get_article_detail(db: Session, article_id: int) -> NewsArticle:
    article = db.query(NewsArticle).options(
        joinedload(NewsArticle.category),
        joinedload(NewsArticle.created_by),
        joinedload(NewsArticle.updated_by),
        selectinload(NewsArticle.tags),
    ).filter(NewsArticle.id == article_id).first()
    if not article:
        raise NotFound("News article not found")
    return article


def _shared_criteria(db: Session, query: MyNewsQuery) -> AllOf:
    tag_ids = list(query.tag_ids or [])
    if query.tag_id is not None:
        tag_ids.append(query.tag_id)

    criteria = all_of(
        text_contains(NewsArticle.title, query.title),
        text_contains(NewsArticle.headline, query.headline),
        text_contains(NewsArticle.source, query.source),
        equals(NewsArticle.category_id, query.category_id),
        equals(NewsArticle.status, None if query.status is None else int(query.status)),
        between(NewsArticle.created_date, query.created_from, query.created_to),
        contains_all(NewsArticle.tags, Tag.id, tag_ids),
    )

    if not query.include_inactive_categories:
        # Only categories whose whole ancestor chain is active
        criteria = criteria & value_in(NewsArticle.category_id, get_hierarchy(db).active_ids())
    return criteria


def _paged_articles(db: Session, query: MyNewsQuery, criteria: AllOf) -> Tuple[List[NewsArticle], int]:
    return get_paged(
        db,
        NewsArticle,
        criteria,
        sort_by=query.sort_by,
        descending=query.descending,
        page_number=query.page_number,
        page_size=query.page_size,
        default_order=[NewsArticle.created_date.desc()],
        aliases=SORT_ALIASES,
        options=SUMMARY_OPTIONS,
    )


def get_articles(db: Session, query: NewsQuery) -> Tuple[List[NewsArticle], int]:
    criteria = all_of(
        equals(NewsArticle.created_by_id, query.created_by),
        equals(NewsArticle.updated_by_id, query.updated_by),
        _shared_criteria(db, query),
    )
    return _paged_articles(db, query, criteria)


def get_my_articles(db: Session, owner_id: int, query: MyNewsQuery) -> Tuple[List[NewsArticle], int]:
    """Articles created by owner_id; the owner always comes from the caller's token"""
    criteria = all_of(
        equals(NewsArticle.created_by_id, owner_id),
        _shared_criteria(db, query),
    )
    return _paged_articles(db, query, criteria)


def _check_category(db: Session, category_id: int) -> None:
    exists = db.query(db.query(Category.id).filter(Category.id == category_id).exists()).scalar()
    if not exists:
        raise NotFound("Category not found")


def _check_owner(article: NewsArticle, account: SystemAccount) -> None:
    if account.role == AccountRole.ADMIN:
        return
    if article.created_by_id != account.id:
        logger.warning(f"Account {account.id} tried to change article {article.id} owned by {article.created_by_id}")
        raise Forbidden("You can only modify news articles you created")


def create_article(db: Session, article_in: NewsCreate, author: SystemAccount) -> NewsArticle:
    _check_category(db, article_in.category_id)
    tags = get_tags_by_ids(db, article_in.tag_ids or [])

    db_article = NewsArticle(
        title=article_in.title,
        headline=article_in.headline,
        content=article_in.content,
        source=article_in.source,
        category_id=article_in.category_id,
        status=int(article_in.status),
        created_by_id=author.id,
        created_date=datetime.datetime.utcnow(),
    )
    db_article.tags = tags
    db.add(db_article)
    commit(db)
    db.refresh(db_article)
    logger.info(f"Account {author.id} created news article {db_article.id}")
    return db_article


def sync_tags(article: NewsArticle, tags: List[Tag]) -> None:
    """
    Make article.tags equal to tags.

    Only the difference is applied: tags no longer wanted are removed and
    missing ones appended, links that stay are left untouched.
    """
    desired = {t.id: t for t in tags}
    for tag in [t for t in article.tags if t.id not in desired]:
        article.tags.remove(tag)
    current = {t.id for t in article.tags}
    for tag_id, tag in desired.items():
        if tag_id not in current:
            article.tags.append(tag)


def apply_article_patch(article: NewsArticle, patch: NewsUpdate) -> NewsArticle:
    """Copy the non-null scalar fields of patch onto article; tags are synced separately"""
    if patch.title is not None:
        article.title = patch.title
    if patch.headline is not None:
        article.headline = patch.headline
    if patch.content is not None:
        article.content = patch.content
    if patch.source is not None:
        article.source = patch.source
    if patch.category_id is not None:
        article.category_id = patch.category_id
    if patch.status is not None:
        article.status = int(patch.status)
    return article


def update_article(db: Session, article_id: int, article_in: NewsUpdate, editor: SystemAccount) -> NewsArticle:
    article = get_article_or_404(db, article_id)
    _check_owner(article, editor)

    if article_in.category_id is not None and article_in.category_id != article.category_id:
        _check_category(db, article_in.category_id)

    apply_article_patch(article, article_in)
    if article_in.tag_ids is not None:
        sync_tags(article, get_tags_by_ids(db, article_in.tag_ids))

    article.updated_by_id = editor.id
    article.modified_date = datetime.datetime.utcnow()
    commit(db)
    db.refresh(article)
    logger.info(f"Account {editor.id} updated news article {article.id}")
    return article


def delete_article(db: Session, article_id: int, editor: SystemAccount) -> NewsArticle:
    """Soft delete: the article stays but is marked inactive"""
    article = get_article_or_404(db, article_id)
    _check_owner(article, editor)

    article.status = int(NewsStatus.INACTIVE)
    article.updated_by_id = editor.id
    article.modified_date = datetime.datetime.utcnow()
    commit(db)
    logger.info(f"Account {editor.id} deactivated news article {article_id}")
    return article


def get_statistics_report(db: Session, start_date: datetime.date, end_date: datetime.date) -> StatisticsReport:
    start, end = report_window(start_date, end_date)

    articles = db.query(NewsArticle).options(
        joinedload(NewsArticle.created_by),
    ).filter(
        NewsArticle.created_date >= start,
        NewsArticle.created_date <= end,
    ).all()

    return build_report(articles, get_all_categories(db), start, end)
