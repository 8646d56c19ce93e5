from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path

from sqlalchemy.orm import Session

from newsdesk.api.deps import get_current_account, get_db, paging_params, require_admin
from newsdesk.core.config import settings
from newsdesk.core.security import create_access_token
from newsdesk.crud.account import (
    authenticate, create_account, delete_account, get_account_or_404, get_accounts,
    lookup_accounts, update_account, update_profile
)
from newsdesk.models.account import AccountRole, SystemAccount
from newsdesk.schemas.account import (
    Account, AccountCreate, AccountLookup, AccountLookupQuery, AccountQuery, AccountUpdate,
    LoginRequest, ProfileUpdate
)
from newsdesk.schemas.common import ApiResponse, PagedResult, ok
from newsdesk.schemas.token import Token

router = APIRouter()


@router.post("/login", response_model=ApiResponse[Token])
def login(
    *,
    db: Session = Depends(get_db),
    login_in: LoginRequest,
) -> Any:
    """
    Exchange email and password for an access token.
    """
    account = authenticate(db, login_in.email, login_in.password)
    role = AccountRole(account.role).label
    token = Token(
        access_token=create_access_token(account.id, role, email=account.email),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        role=role,
    )
    return ok(token, "Login successful")


@router.get("/profile", response_model=ApiResponse[Account])
def read_profile(
    current_account: SystemAccount = Depends(get_current_account),
) -> Any:
    """
    Get the caller's own account.
    """
    return ok(Account.model_validate(current_account), "Profile retrieved")


@router.put("/profile", response_model=ApiResponse[Account])
def update_own_profile(
    *,
    db: Session = Depends(get_db),
    profile_in: ProfileUpdate,
    current_account: SystemAccount = Depends(get_current_account),
) -> Any:
    """
    Update the caller's name, email or password.
    """
    account = update_profile(db, current_account, profile_in)
    return ok(Account.model_validate(account), "Profile updated")


@router.get("/lookup", response_model=ApiResponse[List[AccountLookup]])
def read_account_lookup(
    db: Session = Depends(get_db),
    name: Optional[str] = None,
    email: Optional[str] = None,
    role: Optional[int] = None,
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Id, name and email of accounts, for author pickers.
    """
    accounts = lookup_accounts(db, AccountLookupQuery(name=name, email=email, role=role))
    return ok([AccountLookup.model_validate(a) for a in accounts], "Accounts retrieved")


@router.get("", response_model=ApiResponse[PagedResult[Account]])
def read_accounts(
    db: Session = Depends(get_db),
    paging: dict = Depends(paging_params),
    name: Optional[str] = None,
    email: Optional[str] = None,
    role: Optional[int] = None,
    _: Any = Depends(require_admin),
) -> Any:
    """
    Retrieve accounts.
    """
    query = AccountQuery(**paging, name=name, email=email, role=role)
    accounts, total = get_accounts(db, query)
    paged = PagedResult[Account].build([Account.model_validate(a) for a in accounts], query, total)
    return ok(paged, "Accounts retrieved")


@router.post("", response_model=ApiResponse[Account], status_code=201)
def create_new_account(
    *,
    db: Session = Depends(get_db),
    account_in: AccountCreate,
    _: Any = Depends(require_admin),
) -> Any:
    """
    Create new account.
    """
    account = create_account(db, account_in)
    return ok(Account.model_validate(account), "Account created", status_code=201)


@router.get("/{account_id}", response_model=ApiResponse[Account])
def read_account(
    *,
    db: Session = Depends(get_db),
    account_id: int = Path(..., description="The ID of the account to get"),
    _: Any = Depends(require_admin),
) -> Any:
    """
    Get account by ID.
    """
    account = get_account_or_404(db, account_id)
    return ok(Account.model_validate(account), "Account retrieved")


@router.put("/{account_id}", response_model=ApiResponse[Account])
def update_account_api(
    *,
    db: Session = Depends(get_db),
    account_id: int = Path(..., description="The ID of the account to update"),
    account_in: AccountUpdate,
    _: Any = Depends(require_admin),
) -> Any:
    """
    Update an account.
    """
    account = update_account(db, account_id, account_in)
    return ok(Account.model_validate(account), "Account updated")


@router.delete("/{account_id}", response_model=ApiResponse[None])
def delete_account_api(
    *,
    db: Session = Depends(get_db),
    account_id: int = Path(..., description="The ID of the account to delete"),
    _: Any = Depends(require_admin),
) -> Any:
    """
    Delete an account that has not authored any article.
    """
    delete_account(db, account_id)
    return ok(None, "Account deleted")
