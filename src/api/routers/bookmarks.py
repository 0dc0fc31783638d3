"""Bookmark endpoints: create, list, delete."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_identity
from schemas.bookmark import BookmarkCreate, BookmarkResponse, DeleteBookmarkResponse
from schemas.identity import Identity
from services import bookmark_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


async def _parse_create_body(request: Request) -> BookmarkCreate:
    """
    Read and validate the create body.

    Runs inside the endpoint, after the identity dependency: an unauthenticated
    request gets 401 whatever its body.
    """
    try:
        return BookmarkCreate.model_validate_json(await request.body())
    except ValidationError as e:
        errors = [
            {**err, "loc": ("body", *err["loc"])}
            for err in e.errors(include_url=False)
        ]
        raise RequestValidationError(errors) from e


@router.post(
    "/add",
    response_model=BookmarkResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": BookmarkCreate.model_json_schema()}},
        },
    },
)
async def create_bookmark(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark, registering the caller as a local user if needed."""
    data = await _parse_create_body(request)
    try:
        await user_service.ensure_user(db, identity)
        bookmark = await bookmark_service.create_bookmark(db, identity.id, data)
    except SQLAlchemyError:
        logger.exception("Error creating bookmark")
        raise HTTPException(status_code=500, detail="Failed to create bookmark")
    return BookmarkResponse.model_validate(bookmark)


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List the caller's bookmarks, newest first."""
    try:
        bookmarks = await bookmark_service.list_bookmarks(db, identity.id)
    except SQLAlchemyError:
        logger.exception("Error fetching bookmarks")
        raise HTTPException(status_code=500, detail="Failed to fetch bookmarks")
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post("/{bookmark_id}/delete", response_model=DeleteBookmarkResponse)
async def delete_bookmark(
    bookmark_id: str,
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> DeleteBookmarkResponse:
    """
    Delete one of the caller's bookmarks.

    Returns 404 both when the bookmark doesn't exist and when it belongs to
    another user, so ids of other users' bookmarks can't be probed.
    """
    if not bookmark_id.strip():
        raise HTTPException(status_code=400, detail="Bookmark ID required")

    try:
        deleted = await bookmark_service.delete_bookmark(db, identity.id, bookmark_id)
    except SQLAlchemyError:
        logger.exception("Error deleting bookmark")
        raise HTTPException(status_code=500, detail="Failed to delete bookmark")
    if not deleted:
        raise HTTPException(status_code=404, detail="Not found")
    return DeleteBookmarkResponse()
