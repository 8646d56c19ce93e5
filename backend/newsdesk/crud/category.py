import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from newsdesk.core.errors import Conflict, NotFound, ValidationFailure
from newsdesk.crud.base import commit, get_paged
from newsdesk.crud.filters import all_of, equals, text_contains, value_in
from newsdesk.models.category import Category
from newsdesk.models.news import NewsArticle
from newsdesk.schemas.category import CategoryCreate, CategoryNode, CategoryQuery, CategoryUpdate, DropdownQuery
from newsdesk.services.category_tree import build_category_tree
from newsdesk.services.hierarchy import CategoryHierarchy

logger = logging.getLogger(__name__)

NAME_TAKEN = "Category with the same name already exists."


def get_category(db: Session, category_id: int) -> Optional[Category]:
    return db.query(Category).options(
        joinedload(Category.parent)
    ).filter(Category.id == category_id).first()


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = get_category(db, category_id)
    if not category:
        raise NotFound("Category not found")
    return category


def get_all_categories(db: Session) -> List[Category]:
    return db.query(Category).all()


def get_hierarchy(db: Session) -> CategoryHierarchy:
    """Resolver over a fresh snapshot of every category"""
    return CategoryHierarchy(get_all_categories(db))


def name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Category.id).filter(func.lower(Category.name) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return db.query(query.exists()).scalar()


def get_categories(db: Session, query: CategoryQuery) -> Tuple[List[Category], int]:
    effective = None
    if query.effective_active is not None:
        hierarchy = get_hierarchy(db)
        ids = hierarchy.active_ids() if query.effective_active else hierarchy.inactive_ids()
        effective = value_in(Category.id, ids)

    criteria = all_of(
        text_contains(Category.name, query.name),
        equals(Category.parent_id, query.parent_id),
        equals(Category.is_active, query.is_active),
        effective,
    )
    return get_paged(
        db,
        Category,
        criteria,
        sort_by=query.sort_by,
        descending=query.descending,
        page_number=query.page_number,
        page_size=query.page_size,
        default_order=[Category.name],
        options=[joinedload(Category.parent)],
    )


def get_category_dropdown(db: Session, query: DropdownQuery) -> List[CategoryNode]:
    categories = get_all_categories(db)

    if not query.include_inactive:
        hierarchy = CategoryHierarchy(categories)
        categories = [c for c in categories if hierarchy.is_effectively_active(c.id)]

    if query.parent_only:
        categories = [c for c in categories if c.parent_id is None]

    return build_category_tree(categories)


def _check_parent(db: Session, category_id: Optional[int], parent_id: int) -> None:
    if not db.query(db.query(Category.id).filter(Category.id == parent_id).exists()).scalar():
        raise NotFound("Parent category not found")
    if category_id is None:
        return
    if get_hierarchy(db).would_create_cycle(category_id, parent_id):
        raise ValidationFailure.for_field(
            "parent_id", "A category cannot be its own parent or a child of its descendants"
        )


def create_category(db: Session, category_in: CategoryCreate) -> Category:
    if name_taken(db, category_in.name):
        raise Conflict(NAME_TAKEN)
    if category_in.parent_id is not None:
        _check_parent(db, None, category_in.parent_id)

    db_category = Category(
        name=category_in.name,
        description=category_in.description,
        parent_id=category_in.parent_id,
        is_active=category_in.is_active,
    )
    db.add(db_category)
    commit(db, conflict_message=NAME_TAKEN)
    db.refresh(db_category)
    logger.info(f"Created category {db_category.id} ({db_category.name})")
    return db_category


def apply_category_patch(category: Category, patch: CategoryUpdate) -> Category:
    """
    Copy the non-null fields of patch onto category.

    parent_id is the one exception: sending it explicitly as null moves the
    category back to the root level.
    """
    if patch.name is not None and patch.name.strip():
        category.name = patch.name.strip()
    if patch.description is not None:
        category.description = patch.description
    if patch.parent_id is not None or "parent_id" in patch.model_fields_set:
        category.parent_id = patch.parent_id
    if patch.is_active is not None:
        category.is_active = patch.is_active
    return category


def update_category(db: Session, category_id: int, category_in: CategoryUpdate) -> Category:
    category = get_category_or_404(db, category_id)

    if category_in.name is not None and name_taken(db, category_in.name, exclude_id=category_id):
        raise Conflict("Another category with the same name exists.")
    if category_in.parent_id is not None and category_in.parent_id != category.parent_id:
        _check_parent(db, category_id, category_in.parent_id)

    apply_category_patch(category, category_in)
    commit(db, conflict_message=NAME_TAKEN)
    db.refresh(category)
    logger.info(f"Updated category {category.id}")
    return category


def delete_category(db: Session, category_id: int) -> bool:
    """
    Remove a category, or deactivate it when something still points at it.

    Returns True when the row was deleted, False when it was only
    deactivated because it has articles or child categories.
    """
    category = get_category_or_404(db, category_id)

    has_articles = db.query(
        db.query(NewsArticle.id).filter(NewsArticle.category_id == category_id).exists()
    ).scalar()
    has_children = db.query(
        db.query(Category.id).filter(Category.parent_id == category_id).exists()
    ).scalar()

    if has_articles or has_children:
        category.is_active = False
        commit(db)
        logger.info(f"Deactivated category {category_id} instead of deleting it")
        return False

    db.delete(category)
    commit(db)
    logger.info(f"Deleted category {category_id}")
    return True
