"""
Composable query filters.

List endpoints accept many optional filters. Each one is built with the
helpers below, which return None when the request did not supply a usable
value, and the results are combined with all_of(). The combined filter is a
plain AND of its parts, so the order in which filters are added never
changes the rows that match.

    criteria = all_of(
        text_contains(NewsArticle.title, query.title),
        equals(NewsArticle.category_id, query.category_id),
        contains_all(NewsArticle.tags, Tag.id, query.tag_ids),
    )
    db.query(NewsArticle).filter(criteria.clause())
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from newsdesk.db.session import fold, fold_text


class Filter:
    def clause(self) -> ColumnElement:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class TextContains(Filter):
    """
    Case- and accent-insensitive substring match.

    A row matches when either the plain case-insensitive LIKE matches or the
    accent-folded column contains the accent-folded keyword.
    """
    column: Any
    keyword: str

    def clause(self) -> ColumnElement:
        return and_(
            self.column.isnot(None),
            or_(
                self.column.icontains(self.keyword, autoescape=True),
                fold(self.column).contains(fold_text(self.keyword), autoescape=True),
            ),
        )


@dataclass(frozen=True, eq=False)
class EqualsValue(Filter):
    column: Any
    value: Any

    def clause(self) -> ColumnElement:
        return self.column == self.value


@dataclass(frozen=True, eq=False)
class ValueIn(Filter):
    column: Any
    values: Tuple[Any, ...]

    def clause(self) -> ColumnElement:
        return self.column.in_(self.values)


@dataclass(frozen=True, eq=False)
class RangeFilter(Filter):
    """Inclusive on both ends; either end may be open"""
    column: Any
    lower: Optional[Any] = None
    upper: Optional[Any] = None

    def clause(self) -> ColumnElement:
        parts = []
        if self.lower is not None:
            parts.append(self.column >= self.lower)
        if self.upper is not None:
            parts.append(self.column <= self.upper)
        return and_(true(), *parts)


@dataclass(frozen=True, eq=False)
class SetContainsAll(Filter):
    """The related collection holds every listed id, not just one of them"""
    relationship: Any
    target_column: Any
    values: Tuple[Any, ...]

    def clause(self) -> ColumnElement:
        return and_(true(), *[self.relationship.any(self.target_column == v) for v in self.values])


@dataclass(frozen=True, eq=False)
class AllOf(Filter):
    filters: Tuple[Filter, ...] = field(default_factory=tuple)

    def clause(self) -> ColumnElement:
        return and_(true(), *[f.clause() for f in self.filters])

    def __and__(self, other: Optional[Filter]) -> "AllOf":
        return all_of(self, other)


def all_of(*filters: Optional[Filter]) -> AllOf:
    """AND together every filter that is not None; nested AllOf are flattened"""
    flat = []
    for f in filters:
        if f is None:
            continue
        if isinstance(f, AllOf):
            flat.extend(f.filters)
        else:
            flat.append(f)
    return AllOf(tuple(flat))


def text_contains(column, keyword: Optional[str]) -> Optional[TextContains]:
    if keyword is None or not keyword.strip():
        return None
    return TextContains(column, keyword.strip())


def equals(column, value: Any) -> Optional[EqualsValue]:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return EqualsValue(column, value)


def value_in(column, values: Optional[Iterable[Any]]) -> Optional[ValueIn]:
    """Membership in an explicit set; an empty set matches nothing"""
    if values is None:
        return None
    return ValueIn(column, tuple(values))


def between(column, lower: Optional[datetime] = None, upper: Optional[datetime] = None) -> Optional[RangeFilter]:
    if lower is None and upper is None:
        return None
    return RangeFilter(column, lower, upper)


def contains_all(relationship, target_column, values: Optional[Iterable[Any]]) -> Optional[SetContainsAll]:
    if not values:
        return None
    unique = tuple(dict.fromkeys(v for v in values if v is not None))
    if not unique:
        return None
    return SetContainsAll(relationship, target_column, unique)
