from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from newsdesk.api.deps import get_current_account, get_db, paging_params, require_editor
from newsdesk.crud.category import (
    create_category, delete_category, get_categories, get_category_dropdown,
    get_category_or_404, update_category
)
from newsdesk.schemas.category import (
    Category, CategoryCreate, CategoryNode, CategoryQuery, CategoryUpdate, DropdownQuery
)
from newsdesk.schemas.common import ApiResponse, PagedResult, ok

router = APIRouter()


@router.get("", response_model=ApiResponse[PagedResult[Category]])
def read_categories(
    db: Session = Depends(get_db),
    paging: dict = Depends(paging_params),
    name: Optional[str] = None,
    parent_id: Optional[int] = None,
    is_active: Optional[bool] = None,
    effective_active: Optional[bool] = None,
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Retrieve categories.
    """
    query = CategoryQuery(
        **paging,
        name=name,
        parent_id=parent_id,
        is_active=is_active,
        effective_active=effective_active,
    )
    categories, total = get_categories(db, query)
    paged = PagedResult[Category].build([Category.model_validate(c) for c in categories], query, total)
    return ok(paged, "Categories retrieved")


@router.get("/dropdown", response_model=ApiResponse[List[CategoryNode]])
def read_category_dropdown(
    db: Session = Depends(get_db),
    include_inactive: bool = False,
    parent_only: bool = False,
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Retrieve category tree for dropdowns.
    """
    tree = get_category_dropdown(
        db, DropdownQuery(include_inactive=include_inactive, parent_only=parent_only)
    )
    return ok(tree, "Categories retrieved")


@router.post("", response_model=ApiResponse[Category], status_code=201)
def create_new_category(
    *,
    db: Session = Depends(get_db),
    category_in: CategoryCreate,
    _: Any = Depends(require_editor),
) -> Any:
    """
    Create new category.
    """
    category = create_category(db, category_in)
    return ok(Category.model_validate(category), "Category created", status_code=201)


@router.get("/{category_id}", response_model=ApiResponse[Category])
def read_category(
    *,
    db: Session = Depends(get_db),
    category_id: int = Path(..., description="The ID of the category to get"),
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Get category by ID.
    """
    category = get_category_or_404(db, category_id)
    return ok(Category.model_validate(category), "Category retrieved")


@router.put("/{category_id}", response_model=ApiResponse[Category])
def update_category_api(
    *,
    db: Session = Depends(get_db),
    category_id: int = Path(..., description="The ID of the category to update"),
    category_in: CategoryUpdate,
    _: Any = Depends(require_editor),
) -> Any:
    """
    Update a category.
    """
    category = update_category(db, category_id, category_in)
    return ok(Category.model_validate(category), "Category updated")


@router.delete("/{category_id}", response_model=ApiResponse[None])
def delete_category_api(
    *,
    db: Session = Depends(get_db),
    category_id: int = Path(..., description="The ID of the category to delete"),
    _: Any = Depends(require_editor),
) -> Any:
    """
    Delete a category, or deactivate it while articles or child categories still use it.
    """
    if delete_category(db, category_id):
        return ok(None, "Category deleted")
    return ok(None, "Category deactivated because it is still in use")
