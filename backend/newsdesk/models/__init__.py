from newsdesk.models.account import SystemAccount, AccountRole
from newsdesk.models.news import NewsArticle, NewsStatus, news_tag
from newsdesk.models.category import Category
from newsdesk.models.tag import Tag

# Imported by init_db so every table is registered on Base.metadata
__all__ = [
    "SystemAccount", "AccountRole",
    "NewsArticle", "NewsStatus", "news_tag",
    "Category",
    "Tag",
]
