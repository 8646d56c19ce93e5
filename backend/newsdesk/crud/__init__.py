from newsdesk.crud.account import (
    get_account, get_account_or_404, get_account_by_email, authenticate,
    get_accounts, lookup_accounts, create_account, update_account, update_profile,
    delete_account, apply_account_patch
)
from newsdesk.crud.category import (
    get_category, get_category_or_404, get_categories, get_category_dropdown,
    create_category, update_category, delete_category, apply_category_patch
)
from newsdesk.crud.tag import (
    get_tag, get_tag_or_404, get_tags, get_tag_dropdown,
    create_tag, update_tag, delete_tag, apply_tag_patch
)
from newsdesk.crud.news import (
    get_article, get_article_or_404, get_article_detail, get_articles, get_my_articles,
    create_article, update_article, delete_article, apply_article_patch, sync_tags,
    get_statistics_report
)
