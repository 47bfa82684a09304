"""
CascadeBlog Backend - Comment Service
======================================

What:  Adds comments to blog posts and lists them newest-first.
How:   The referenced blog id is validated and stored as an ObjectId; the
       blog's existence is not checked before insert.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.database import COMMENTS
from app.exceptions import DatabaseError
from app.schemas.blog import CommentCreate, InsertReceipt
from app.services import queries
from app.services.serializers import insert_receipt, serialize_documents

logger = logging.getLogger(__name__)


class CommentService:

    async def add_comment(self, db: AsyncIOMotorDatabase, payload: CommentCreate) -> InsertReceipt:
        blog_oid = queries.parse_object_id(payload.blog_id, field="blogId")
        document = queries.build_comment(
            blog_id=blog_oid,
            user_name=payload.user_name,
            user_photo=payload.user_photo,
            user_email=payload.user_email,
            comment=payload.comment,
        )
        try:
            result = await db[COMMENTS].insert_one(document)
        except PyMongoError as e:
            logger.error("Database error inserting comment on %s: %s", payload.blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your comment. Please try again.",
                context={"blog_id": payload.blog_id, "error_type": type(e).__name__},
            )
        return insert_receipt(result)

    async def list_comments(self, db: AsyncIOMotorDatabase, blog_id: str) -> List[Dict[str, Any]]:
        """All comments of one blog, newest first, unbounded."""
        blog_oid = queries.parse_object_id(blog_id, field="blogId")
        try:
            cursor = db[COMMENTS].find(queries.comments_by_blog_filter(blog_oid)).sort(
                queries.comments_sort()
            )
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing comments for %s: %s", blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve comments. Please try again.",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            )
        return serialize_documents(documents)


comment_service = CommentService()
