"""
CascadeBlog Backend - Comment Route Handlers
=============================================

POST /comments            add a comment (public)
GET  /comments/{blogId}   comments of one blog, newest first (public)
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.schemas.blog import CommentCreate, ErrorResponse, InsertReceipt
from app.services.comment_service import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"])

_ERRORS = {
    400: {"description": "Malformed blog identifier", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=InsertReceipt,
    responses=_ERRORS,
    summary="Comment on a blog",
)
async def add_comment(
    payload: CommentCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> InsertReceipt:
    return await comment_service.add_comment(db=db, payload=payload)


@router.get(
    "/{blogId}",
    response_model=List[Dict[str, Any]],
    responses=_ERRORS,
    summary="List comments of a blog",
)
async def list_comments(
    blogId: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await comment_service.list_comments(db=db, blog_id=blogId)
