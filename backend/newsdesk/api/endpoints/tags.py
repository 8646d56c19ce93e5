from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from newsdesk.api.deps import get_current_account, get_db, paging_params, require_editor
from newsdesk.crud.tag import (
    create_tag, delete_tag, get_tag_dropdown, get_tag_or_404, get_tags, update_tag
)
from newsdesk.schemas.common import ApiResponse, PagedResult, ok
from newsdesk.schemas.tag import Tag, TagCreate, TagOption, TagQuery, TagUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[PagedResult[Tag]])
def read_tags(
    db: Session = Depends(get_db),
    paging: dict = Depends(paging_params),
    name: Optional[str] = None,
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Retrieve tags.
    """
    query = TagQuery(**paging, name=name)
    tags, total = get_tags(db, query)
    paged = PagedResult[Tag].build([Tag.model_validate(t) for t in tags], query, total)
    return ok(paged, "Tags retrieved")


@router.get("/dropdown", response_model=ApiResponse[List[TagOption]])
def read_tag_dropdown(
    db: Session = Depends(get_db),
    name: Optional[str] = None,
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Suggest up to five tags matching name.
    """
    tags = get_tag_dropdown(db, name)
    return ok([TagOption.model_validate(t) for t in tags], "Tags retrieved")


@router.post("", response_model=ApiResponse[Tag], status_code=201)
def create_new_tag(
    *,
    db: Session = Depends(get_db),
    tag_in: TagCreate,
    _: Any = Depends(require_editor),
) -> Any:
    """
    Create new tag.
    """
    tag = create_tag(db, tag_in)
    return ok(Tag.model_validate(tag), "Tag created", status_code=201)


@router.get("/{tag_id}", response_model=ApiResponse[Tag])
def read_tag(
    *,
    db: Session = Depends(get_db),
    tag_id: int = Path(..., description="The ID of the tag to get"),
    _: Any = Depends(get_current_account),
) -> Any:
    """
    Get tag by ID.
    """
    tag = get_tag_or_404(db, tag_id)
    return ok(Tag.model_validate(tag), "Tag retrieved")


@router.put("/{tag_id}", response_model=ApiResponse[Tag])
def update_tag_api(
    *,
    db: Session = Depends(get_db),
    tag_id: int = Path(..., description="The ID of the tag to update"),
    tag_in: TagUpdate,
    _: Any = Depends(require_editor),
) -> Any:
    """
    Update a tag.
    """
    tag = update_tag(db, tag_id, tag_in)
    return ok(Tag.model_validate(tag), "Tag updated")


@router.delete("/{tag_id}", response_model=ApiResponse[None])
def delete_tag_api(
    *,
    db: Session = Depends(get_db),
    tag_id: int = Path(..., description="The ID of the tag to delete"),
    _: Any = Depends(require_editor),
) -> Any:
    """
    Delete a tag that no article uses.
    """
    delete_tag(db, tag_id)
    return ok(None, "Tag deleted")
