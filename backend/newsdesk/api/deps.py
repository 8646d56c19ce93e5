from typing import Callable, Generator, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from newsdesk.core.errors import Forbidden, Unauthorized
from newsdesk.core.security import decode_access_token
from newsdesk.crud.account import get_account
from newsdesk.db.session import SessionLocal
from newsdesk.models.account import AccountRole, SystemAccount

# auto_error is off so a missing token is reported through our own envelope
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/accounts/login", auto_error=False)


def get_db() -> Generator:
    """
    Database session for one request
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _account_from_token(db: Session, token: str) -> SystemAccount:
    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        account_id = int(subject)
    except (TypeError, ValueError):
        raise Unauthorized()
    account = get_account(db, account_id)
    if account is None:
        raise Unauthorized()
    return account


def get_current_account(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme),
) -> SystemAccount:
    """
    Account behind the bearer token
    """
    if not token:
        raise Unauthorized()
    return _account_from_token(db, token)


def get_optional_account(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[SystemAccount]:
    """
    Account behind the bearer token, or None for anonymous callers.

    A token that is present but invalid is still rejected.
    """
    if not token:
        return None
    return _account_from_token(db, token)


def require_roles(*roles: AccountRole) -> Callable[..., SystemAccount]:
    """Dependency that lets through only accounts holding one of roles"""
    allowed = {int(r) for r in roles}

    def checker(current_account: SystemAccount = Depends(get_current_account)) -> SystemAccount:
        if current_account.role not in allowed:
            raise Forbidden()
        return current_account

    return checker


require_admin = require_roles(AccountRole.ADMIN)
require_editor = require_roles(AccountRole.ADMIN, AccountRole.STAFF)


def paging_params(
    page_number: Optional[int] = None,
    page_size: Optional[int] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> dict:
    """Raw paging query parameters; PagingParams normalizes them"""
    return {
        "page_number": page_number,
        "page_size": page_size,
        "sort_by": sort_by,
        "sort_order": sort_order,
    }
