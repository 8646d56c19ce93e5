from datetime import date, datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from newsdesk.api.deps import get_current_account, get_db, paging_params, require_admin, require_editor
from newsdesk.crud.news import (
    create_article, delete_article, get_article_detail, get_articles, get_my_articles,
    get_statistics_report, update_article
)
from newsdesk.models.account import SystemAccount
from newsdesk.schemas.common import ApiResponse, PagedResult, ok
from newsdesk.schemas.news import MyNewsQuery, NewsCreate, NewsDetail, NewsQuery, NewsSummary, NewsUpdate
from newsdesk.schemas.statistics import StatisticsReport

router = APIRouter()


def news_filter_params(
    title: Optional[str] = None,
    headline: Optional[str] = None,
    source: Optional[str] = None,
    category_id: Optional[int] = None,
    status: Optional[int] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    tag_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = Query(None),
    include_inactive_categories: bool = False,
) -> dict:
    return {
        "title": title,
        "headline": headline,
        "source": source,
        "category_id": category_id,
        "status": status,
        "created_from": created_from,
        "created_to": created_to,
        "tag_id": tag_id,
        "tag_ids": tag_ids,
        "include_inactive_categories": include_inactive_categories,
    }


def _summaries(articles, query, total) -> PagedResult[NewsSummary]:
    return PagedResult[NewsSummary].build([NewsSummary.from_article(a) for a in articles], query, total)


@router.get("", response_model=ApiResponse[PagedResult[NewsSummary]])
def read_news(
    db: Session = Depends(get_db),
    paging: dict = Depends(paging_params),
    filters: dict = Depends(news_filter_params),
    created_by: Optional[int] = None,
    updated_by: Optional[int] = None,
) -> Any:
    """
    Retrieve news articles. Open to anonymous readers.
    """
    query = NewsQuery(**paging, **filters, created_by=created_by, updated_by=updated_by)
    articles, total = get_articles(db, query)
    return ok(_summaries(articles, query, total), "News articles retrieved")


@router.get("/mine", response_model=ApiResponse[PagedResult[NewsSummary]])
def read_my_news(
    db: Session = Depends(get_db),
    paging: dict = Depends(paging_params),
    filters: dict = Depends(news_filter_params),
    current_account: SystemAccount = Depends(get_current_account),
) -> Any:
    """
    Retrieve news articles created by the caller.
    """
    query = MyNewsQuery(**paging, **filters)
    articles, total = get_my_articles(db, current_account.id, query)
    return ok(_summaries(articles, query, total), "News articles retrieved")


@router.get("/statistics", response_model=ApiResponse[StatisticsReport])
def read_statistics_report(
    db: Session = Depends(get_db),
    start_date: date = Query(..., description="First day of the report"),
    end_date: date = Query(..., description="Last day of the report, inclusive"),
    _: Any = Depends(require_admin),
) -> Any:
    """
    Article statistics per day, category and author.
    """
    report = get_statistics_report(db, start_date, end_date)
    return ok(report, "Report generated")


@router.post("", response_model=ApiResponse[NewsDetail], status_code=201)
def create_news(
    *,
    db: Session = Depends(get_db),
    news_in: NewsCreate,
    current_account: SystemAccount = Depends(require_editor),
) -> Any:
    """
    Create new news article.
    """
    article = create_article(db, news_in, current_account)
    return ok(NewsDetail.model_validate(article), "News article created", status_code=201)


@router.get("/{news_id}", response_model=ApiResponse[NewsDetail])
def read_news_detail(
    *,
    db: Session = Depends(get_db),
    news_id: int = Path(..., description="The ID of the news article to get"),
) -> Any:
    """
    Get news article by ID. Open to anonymous readers.
    """
    article = get_article_detail(db, news_id)
    return ok(NewsDetail.model_validate(article), "News article retrieved")


@router.put("/{news_id}", response_model=ApiResponse[NewsDetail])
def update_news(
    *,
    db: Session = Depends(get_db),
    news_id: int = Path(..., description="The ID of the news article to update"),
    news_in: NewsUpdate,
    current_account: SystemAccount = Depends(require_editor),
) -> Any:
    """
    Update a news article. Only its creator or an admin may do this.
    """
    article = update_article(db, news_id, news_in, current_account)
    return ok(NewsDetail.model_validate(article), "News article updated")


@router.delete("/{news_id}", response_model=ApiResponse[None])
def delete_news(
    *,
    db: Session = Depends(get_db),
    news_id: int = Path(..., description="The ID of the news article to delete"),
    current_account: SystemAccount = Depends(require_editor),
) -> Any:
    """
    Deactivate a news article. The article is kept with an inactive status.
    """
    delete_article(db, news_id, current_account)
    return ok(None, "News article deactivated")
