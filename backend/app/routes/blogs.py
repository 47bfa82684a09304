"""
CascadeBlog Backend - Blog Route Handlers
==========================================

What:  HTTP surface for blog posts.
How:   Thin handlers: read path/query/body, call BlogService, return JSON.

Access policy (declared per route through Depends):
    GET  /blogs                  public
    GET  /latest-blogs           public
    GET  /single-blog/{blogId}   public
    GET  /featured-blogs         public
    POST /add-blog               require_principal
    PUT  /update-blog/{id}       require_principal
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.dependencies import require_principal
from app.schemas.blog import ErrorResponse, InsertReceipt, UpdateReceipt
from app.services.blog_service import blog_service
from app.services.identity_service import Principal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Blogs"])

_AUTH_ERRORS = {
    401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}
_BAD_ID = {400: {"description": "Malformed identifier", "model": ErrorResponse}}


@router.get(
    "/blogs",
    response_model=List[Dict[str, Any]],
    responses=_SERVER_ERROR,
    summary="List, search and filter blogs",
    description=(
        "With a non-empty `search`, runs a full-text search over title, body and tags "
        "and orders by relevance. Otherwise orders by newest first. `category` restricts "
        "results to one category unless it is `All`."
    ),
)
async def list_blogs(
    search: Optional[str] = Query(default=None, description="Free-text search terms"),
    category: Optional[str] = Query(default=None, description="Category name, or 'All'"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await blog_service.list_blogs(db=db, search=search, category=category)


@router.get(
    "/latest-blogs",
    response_model=List[Dict[str, Any]],
    responses=_SERVER_ERROR,
    summary="Six most recent blogs",
)
async def latest_blogs(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await blog_service.latest_blogs(db=db)


@router.get(
    "/single-blog/{blogId}",
    response_model=Optional[Dict[str, Any]],
    responses={**_BAD_ID, **_SERVER_ERROR},
    summary="Get one blog by id",
    description="Returns the blog, or `null` when no blog has this id.",
)
async def single_blog(
    blogId: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return await blog_service.get_blog(db=db, blog_id=blogId)


@router.post(
    "/add-blog",
    status_code=201,
    response_model=InsertReceipt,
    responses={**_AUTH_ERRORS, **_SERVER_ERROR},
    summary="Create a blog",
    description=(
        "Stores the JSON body as a new blog. `createdAt` is set by the server; "
        "any client value is ignored."
    ),
)
async def add_blog(
    body: Dict[str, Any] = Body(..., description="Blog fields (title, blogDetails, category, tags, ...)"),
    principal: Principal = Depends(require_principal),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> InsertReceipt:
    return await blog_service.add_blog(db=db, body=body, author_email=principal.email)


@router.put(
    "/update-blog/{id}",
    response_model=UpdateReceipt,
    responses={**_BAD_ID, **_AUTH_ERRORS, **_SERVER_ERROR},
    summary="Update or create a blog",
    description=(
        "Sets the supplied fields on the blog and leaves the others untouched. "
        "If no blog has this id, one is created with exactly these fields."
    ),
)
async def update_blog(
    id: str,
    body: Dict[str, Any] = Body(..., description="Fields to set"),
    principal: Principal = Depends(require_principal),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UpdateReceipt:
    return await blog_service.update_blog(db=db, blog_id=id, body=body, editor_email=principal.email)


@router.get(
    "/featured-blogs",
    response_model=List[Dict[str, Any]],
    responses=_SERVER_ERROR,
    summary="Ten longest blogs",
    description="Ranks every blog by the word count of its body and returns the top 10 with `wordCount`.",
)
async def featured_blogs(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[Dict[str, Any]]:
    return await blog_service.featured_blogs(db=db)
