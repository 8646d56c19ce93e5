import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from newsdesk.core.errors import Conflict, NotFound, Unauthorized, ValidationFailure
from newsdesk.core.security import get_password_hash, verify_password
from newsdesk.crud.base import commit, get_paged
from newsdesk.crud.filters import all_of, equals, text_contains
from newsdesk.models.account import SystemAccount
from newsdesk.models.news import NewsArticle
from newsdesk.schemas.account import (
    AccountCreate, AccountLookupQuery, AccountQuery, AccountUpdate, ProfileUpdate
)

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "An account with the provided email already exists."


def get_account(db: Session, account_id: int) -> Optional[SystemAccount]:
    return db.query(SystemAccount).filter(SystemAccount.id == account_id).first()


def get_account_or_404(db: Session, account_id: int) -> SystemAccount:
    account = get_account(db, account_id)
    if not account:
        raise NotFound("Account not found")
    return account


def get_account_by_email(db: Session, email: str) -> Optional[SystemAccount]:
    return db.query(SystemAccount).filter(
        func.lower(SystemAccount.email) == email.strip().lower()
    ).first()


def email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(SystemAccount.id).filter(
        func.lower(SystemAccount.email) == email.strip().lower()
    )
    if exclude_id is not None:
        query = query.filter(SystemAccount.id != exclude_id)
    return db.query(query.exists()).scalar()


def authenticate(db: Session, email: str, password: str) -> SystemAccount:
    if not email or not email.strip() or not password:
        raise ValidationFailure("Invalid login request")
    account = get_account_by_email(db, email)
    if not account or not verify_password(password, account.hashed_password):
        logger.warning(f"Failed login attempt for {email}")
        raise Unauthorized("Invalid email or password")
    return account


def get_accounts(db: Session, query: AccountQuery) -> Tuple[List[SystemAccount], int]:
    criteria = all_of(
        text_contains(SystemAccount.name, query.name),
        text_contains(SystemAccount.email, query.email),
        equals(SystemAccount.role, None if query.role is None else int(query.role)),
    )
    return get_paged(
        db,
        SystemAccount,
        criteria,
        sort_by=query.sort_by,
        descending=query.descending,
        page_number=query.page_number,
        page_size=query.page_size,
    )


def lookup_accounts(db: Session, query: AccountLookupQuery) -> List[SystemAccount]:
    """Unpaged id/name/email list used by author pickers"""
    criteria = all_of(
        text_contains(SystemAccount.name, query.name),
        text_contains(SystemAccount.email, query.email),
        equals(SystemAccount.role, None if query.role is None else int(query.role)),
    )
    return (
        db.query(SystemAccount)
        .filter(criteria.clause())
        .order_by(SystemAccount.name, SystemAccount.id)
        .all()
    )


def create_account(db: Session, account_in: AccountCreate) -> SystemAccount:
    if email_taken(db, account_in.email):
        raise Conflict(EMAIL_TAKEN)

    db_account = SystemAccount(
        name=account_in.name,
        email=account_in.email,
        hashed_password=get_password_hash(account_in.password),
        role=int(account_in.role),
    )
    db.add(db_account)
    commit(db, conflict_message=EMAIL_TAKEN)
    db.refresh(db_account)
    logger.info(f"Created account {db_account.id} ({db_account.email})")
    return db_account


def apply_account_patch(account: SystemAccount, patch, hashed_password: Optional[str] = None) -> SystemAccount:
    """
    Copy the non-null fields of patch onto account.

    Works for AccountUpdate and ProfileUpdate; the latter has no role field.
    """
    if patch.name is not None and patch.name.strip():
        account.name = patch.name.strip()
    if patch.email is not None:
        account.email = patch.email
    role = getattr(patch, "role", None)
    if role is not None:
        account.role = int(role)
    if hashed_password:
        account.hashed_password = hashed_password
    return account


def _update(db: Session, account: SystemAccount, patch) -> SystemAccount:
    if patch.email is not None and email_taken(db, patch.email, exclude_id=account.id):
        raise Conflict("Another account with the provided email already exists.")

    hashed_password = get_password_hash(patch.password) if patch.password else None
    apply_account_patch(account, patch, hashed_password)
    commit(db, conflict_message=EMAIL_TAKEN)
    db.refresh(account)
    return account


def update_account(db: Session, account_id: int, account_in: AccountUpdate) -> SystemAccount:
    account = get_account_or_404(db, account_id)
    account = _update(db, account, account_in)
    logger.info(f"Updated account {account.id}")
    return account


def update_profile(db: Session, account: SystemAccount, profile_in: ProfileUpdate) -> SystemAccount:
    account = _update(db, account, profile_in)
    logger.info(f"Account {account.id} updated its profile")
    return account


def delete_account(db: Session, account_id: int) -> None:
    account = get_account_or_404(db, account_id)

    authored = db.query(NewsArticle.id).filter(NewsArticle.created_by_id == account_id)
    if db.query(authored.exists()).scalar():
        raise Conflict("Cannot delete account because it has created news articles.")

    # Keep the articles this account only edited
    db.query(NewsArticle).filter(NewsArticle.updated_by_id == account_id).update(
        {NewsArticle.updated_by_id: None}, synchronize_session=False
    )
    db.delete(account)
    commit(db)
    logger.info(f"Deleted account {account_id}")
