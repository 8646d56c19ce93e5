import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import asc, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from newsdesk.core.errors import Conflict, PersistenceFailure
from newsdesk.crud.filters import AllOf, all_of

logger = logging.getLogger(__name__)


def commit(db: Session, conflict_message: Optional[str] = None) -> None:
    """
    Commit the session or roll it back.

    A unique constraint hit becomes a Conflict when the caller says what it
    conflicts on, anything else is reported as a PersistenceFailure.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if conflict_message:
            logger.warning(f"Integrity error on commit: {conflict_message}")
            raise Conflict(conflict_message)
        logger.error(f"Integrity error on commit: {e}")
        raise PersistenceFailure()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to commit changes: {e}")
        raise PersistenceFailure()


def _normalize_name(name: str) -> str:
    return name.replace("_", "").lower()


def resolve_sort_column(model, sort_by: Optional[str], aliases: Optional[Dict[str, Any]] = None):
    """
    Column of model named by sort_by, or None.

    Matching ignores case and underscores, so "createdDate", "created_date"
    and "CREATEDDATE" all name the same column.
    Columns listed in the model's unsortable_columns are never matched.
    """
    if not sort_by:
        return None
    wanted = _normalize_name(sort_by)
    for alias, column in (aliases or {}).items():
        if _normalize_name(alias) == wanted:
            return column
    hidden = getattr(model, "unsortable_columns", ())
    for column in model.__table__.columns:
        if column.key not in hidden and _normalize_name(column.key) == wanted:
            return getattr(model, column.key)
    return None


def get_paged(
    db: Session,
    model,
    criteria: Optional[AllOf] = None,
    sort_by: Optional[str] = None,
    descending: bool = False,
    page_number: int = 1,
    page_size: int = 10,
    default_order: Sequence[Any] = (),
    aliases: Optional[Dict[str, Any]] = None,
    options: Sequence[Any] = (),
) -> Tuple[List[Any], int]:
    """
    One page of model rows matching criteria, plus the total match count.

    default_order is used when sort_by does not name a column. The primary
    key is always appended so pages are stable.
    """
    criteria = criteria if criteria is not None else all_of()
    query = db.query(model).filter(criteria.clause())

    total = query.count()

    column = resolve_sort_column(model, sort_by, aliases)
    if column is not None:
        direction = desc if descending else asc
        order = [direction(column), direction(model.id)]
    else:
        order = list(default_order) + [model.id]

    if options:
        query = query.options(*options)

    items = (
        query.order_by(*order)
        .offset((page_number - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total
