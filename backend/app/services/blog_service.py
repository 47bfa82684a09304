"""
CascadeBlog Backend - Blog Service
===================================

What:  Business logic for blog posts: list/search, latest, single lookup,
       create, update (upsert) and featured ranking.
Why:   Keeps query construction and error translation out of the routes.
How:   Builds documents with app.services.queries, runs them through motor,
       serializes results. Driver errors become DatabaseError (→ 500).
Who:   Called by the routes in app/routes/blogs.py.

Query plans:
    list (search)   find({$text, category?}, {score: textScore}).sort(score)
    list (browse)   find({category?}).sort(createdAt desc)
    latest          find({}).sort(createdAt desc).limit(6)
    single          find_one({_id})
    add             insert_one({...body, createdAt: now})
    update          update_one({_id}, {$set: body}, upsert=True)
    featured        find({}) then in-process word-count ranking (full scan)
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.database import BLOGS
from app.exceptions import DatabaseError
from app.schemas.blog import InsertReceipt, UpdateReceipt
from app.services import queries
from app.services.serializers import (
    insert_receipt,
    serialize_document,
    serialize_documents,
    update_receipt,
)

logger = logging.getLogger(__name__)


class BlogService:
    """
    Stateless service for the blogs collection.

    Every method receives the database handle per call, so tests can pass
    a mock database without patching module state.
    """

    async def list_blogs(
        self,
        db: AsyncIOMotorDatabase,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Search or browse blogs, optionally restricted to one category.

        Returns:
            All matching documents (no pagination). Search results carry
            their relevance `score`.
        """
        query = queries.build_blog_list_query(search=search, category=category)
        try:
            cursor = db[BLOGS].find(query.filter, query.projection).sort(query.sort)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve blogs. Please try again.",
                context={"search": search, "category": category, "error_type": type(e).__name__},
            )
        return serialize_documents(documents)

    async def latest_blogs(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        try:
            cursor = (
                db[BLOGS]
                .find({})
                .sort(queries.latest_blogs_sort())
                .limit(queries.LATEST_BLOGS_LIMIT)
            )
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error fetching latest blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the latest blogs. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(documents)

    async def get_blog(self, db: AsyncIOMotorDatabase, blog_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one blog by id.

        Returns:
            The document, or None when it does not exist (answered as null,
            not 404).

        Raises:
            ValidationError: malformed id (→ 400)
            DatabaseError: query failed (→ 500)
        """
        oid = queries.parse_object_id(blog_id, field="blogId")
        try:
            document = await db[BLOGS].find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error fetching blog %s: %s", blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the blog. Please try again.",
                context={"blog_id": blog_id},
            )
        return serialize_document(document)

    async def add_blog(
        self,
        db: AsyncIOMotorDatabase,
        body: Mapping[str, Any],
        author_email: Optional[str] = None,
    ) -> InsertReceipt:
        """Insert a new blog; createdAt is always the server's clock."""
        document = queries.build_new_blog(body)
        try:
            result = await db[BLOGS].insert_one(document)
        except PyMongoError as e:
            logger.error("Database error inserting blog: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the blog. Please try again.",
                context={"author": author_email, "error_type": type(e).__name__},
            )
        logger.info("Blog %s created by %s", result.inserted_id, author_email or "unknown")
        return insert_receipt(result)

    async def update_blog(
        self,
        db: AsyncIOMotorDatabase,
        blog_id: str,
        body: Mapping[str, Any],
        editor_email: Optional[str] = None,
    ) -> UpdateReceipt:
        """
        Set the supplied fields on a blog, creating it when absent (upsert).

        Fields missing from the body are left untouched. An upsert creates
        a document holding exactly the supplied fields plus the given _id.
        """
        oid = queries.parse_object_id(blog_id, field="id")
        update = queries.build_blog_update(body)
        try:
            result = await db[BLOGS].update_one({"_id": oid}, update, upsert=True)
        except PyMongoError as e:
            logger.error("Database error updating blog %s: %s", blog_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the blog. Please try again.",
                context={"blog_id": blog_id, "error_type": type(e).__name__},
            )

        if result.upserted_id is not None:
            logger.info("Blog %s upserted by %s", blog_id, editor_email or "unknown")
        else:
            logger.info(
                "Blog %s updated by %s (matched=%d, modified=%d)",
                blog_id,
                editor_email or "unknown",
                result.matched_count,
                result.modified_count,
            )
        return update_receipt(result)

    async def featured_blogs(self, db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
        """
        Top blogs by body word count.

        Scans the whole collection and ranks in-process; fine for a personal
        blog, not for large datasets.
        """
        try:
            documents = await db[BLOGS].find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error fetching featured blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve featured blogs. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(queries.rank_featured(documents))


blog_service = BlogService()
