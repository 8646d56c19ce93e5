"""
Article statistics over a date range.

The aggregation works on plain objects already loaded from the database so
it can be tested without one: articles need created_date, status,
category_id, created_by_id and created_by (with a name); categories need id,
name, parent_id and is_active.
"""

import datetime
from collections import Counter, defaultdict
from typing import Iterable, List, Tuple

from newsdesk.core.errors import ValidationFailure
from newsdesk.models.news import NewsStatus
from newsdesk.schemas.statistics import DailyStatistic, StatisticBreakdown, StatisticsReport
from newsdesk.services.hierarchy import CategoryHierarchy

INACTIVE_SUFFIX = " (inactive)"


def report_window(start_date: datetime.date, end_date: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """Start of the first day and the last instant of the final day"""
    if isinstance(start_date, datetime.datetime):
        start_date = start_date.date()
    if isinstance(end_date, datetime.datetime):
        end_date = end_date.date()
    if end_date < start_date:
        raise ValidationFailure.for_field("end_date", "end_date must be greater than or equal to start_date")
    start = datetime.datetime.combine(start_date, datetime.time.min)
    end = datetime.datetime.combine(end_date, datetime.time.max)
    return start, end


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count * 100.0 / total, 2)


def _is_inactive(article) -> bool:
    return article.status == NewsStatus.INACTIVE


def build_report(
    articles: Iterable,
    categories: Iterable,
    start: datetime.datetime,
    end: datetime.datetime,
) -> StatisticsReport:
    articles = list(articles)
    categories = list(categories)
    hierarchy = CategoryHierarchy(categories)
    total = len(articles)

    # Daily breakdown, newest day first
    per_day = defaultdict(lambda: [0, 0])
    for article in articles:
        counts = per_day[article.created_date.date()]
        counts[1 if _is_inactive(article) else 0] += 1
    daily = [
        DailyStatistic(
            date=day,
            total_articles=active + inactive,
            active_articles=active,
            inactive_articles=inactive,
        )
        for day, (active, inactive) in per_day.items()
    ]
    daily.sort(key=lambda d: d.date, reverse=True)

    # Every category, including the ones without articles in range
    per_category = Counter(article.category_id for article in articles)
    category_rows = []
    for category in categories:
        count = per_category.get(category.id, 0)
        name = category.name
        if not hierarchy.is_effectively_active(category.id):
            name += INACTIVE_SUFFIX
        category_rows.append(StatisticBreakdown(
            item_id=category.id,
            item_name=name,
            total_articles=count,
            percentage=_percentage(count, total),
        ))
    category_rows.sort(key=lambda s: (-s.total_articles, s.item_name))

    # Only authors that wrote something in range
    per_author = Counter()
    author_names = {}
    for article in articles:
        per_author[article.created_by_id] += 1
        author = getattr(article, "created_by", None)
        author_names[article.created_by_id] = author.name if author is not None else ""
    author_rows: List[StatisticBreakdown] = [
        StatisticBreakdown(
            item_id=author_id,
            item_name=author_names[author_id],
            total_articles=count,
            percentage=_percentage(count, total),
        )
        for author_id, count in per_author.items()
    ]
    author_rows.sort(key=lambda s: (-s.total_articles, s.item_name))

    return StatisticsReport(
        start_date=start,
        end_date=end,
        total_articles_created=total,
        total_categories=len(categories),
        inactive_categories_count=len(hierarchy.inactive_ids()),
        inactive_articles_count=sum(1 for article in articles if _is_inactive(article)),
        daily_breakdown=daily,
        category_breakdown=category_rows,
        author_breakdown=author_rows,
    )
