"""
CascadeBlog Backend - Wishlist Route Handlers
==============================================

POST /wishlist               toggle a (blogId, userEmail) pair (public)
GET  /wishlist/{userEmail}   wished blogs (require_wishlist_owner)

The listing checks ownership before touching the database: a principal
asking for another email gets 403 whatever the data holds.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.dependencies import require_wishlist_owner
from app.schemas.blog import ErrorResponse, WishlistToggleRequest, WishlistToggleResponse
from app.services.identity_service import Principal
from app.services.wishlist_service import wishlist_service

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


@router.post(
    "",
    response_model=WishlistToggleResponse,
    responses={
        400: {"description": "Malformed blog identifier", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Add or remove a blog from a wishlist",
    description="Adds the pair when absent (`wished: true`), removes it when present (`wished: false`).",
)
async def toggle_wishlist(
    payload: WishlistToggleRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> WishlistToggleResponse:
    return await wishlist_service.toggle(db=db, payload=payload)


@router.get(
    "/{userEmail}",
    response_model=List[Dict[str, Any]],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        403: {"description": "Wishlist belongs to another user", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the blogs in a user's wishlist",
)
async def list_wishlist(
    userEmail: str,
    principal: Principal = Depends(require_wishlist_owner),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await wishlist_service.list_for_user(db=db, user_email=principal.email)
