from newsdesk.schemas.common import PagingParams, PagedResult, ApiResponse
from newsdesk.schemas.account import (
    Account, AccountCreate, AccountUpdate, AccountQuery, AccountLookup, AccountLookupQuery,
    LoginRequest, ProfileUpdate
)
from newsdesk.schemas.category import (
    Category, CategoryCreate, CategoryUpdate, CategoryQuery, CategoryNode, DropdownQuery,
    ParentCategory
)
from newsdesk.schemas.tag import Tag, TagCreate, TagUpdate, TagQuery, TagOption
from newsdesk.schemas.news import (
    NewsCreate, NewsUpdate, NewsQuery, MyNewsQuery, NewsSummary, NewsDetail
)
from newsdesk.schemas.statistics import StatisticsReport, DailyStatistic, StatisticBreakdown
from newsdesk.schemas.token import Token, TokenPayload
