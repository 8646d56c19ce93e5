from datetime import date, datetime
from typing import List
from pydantic import BaseModel


class DailyStatistic(BaseModel):
    date: date
    total_articles: int
    active_articles: int
    inactive_articles: int


class StatisticBreakdown(BaseModel):
    item_id: int
    item_name: str
    total_articles: int
    percentage: float


class StatisticsReport(BaseModel):
    start_date: datetime
    end_date: datetime
    total_articles_created: int
    total_categories: int
    inactive_categories_count: int
    inactive_articles_count: int
    daily_breakdown: List[DailyStatistic] = []
    category_breakdown: List[StatisticBreakdown] = []
    author_breakdown: List[StatisticBreakdown] = []
