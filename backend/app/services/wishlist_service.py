"""
CascadeBlog Backend - Wishlist Service
=======================================

What:  Toggles (blogId, userEmail) wishlist entries and resolves a user's
       wishlist into full blog documents.
Why:   The toggle is the one read-modify-write in the API.

Toggle algorithm:
    1. delete_many({blogId in [oid, str(oid)], userEmail})
       → deleted something: {wished: false}
         (legacy entries holding the id as a string are removed too)
    2. insert_one({blogId, userEmail})
       → {wished: true}
       → DuplicateKeyError: a concurrent toggle inserted the same pair first
         (unique index wishlists_blog_user); the pair is wished, report true

    Sequential calls alternate true/false and never leave duplicates.
"""

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.database import BLOGS, WISHLISTS
from app.exceptions import DatabaseError
from app.schemas.blog import WishlistToggleRequest, WishlistToggleResponse
from app.services import queries
from app.services.serializers import serialize_documents

logger = logging.getLogger(__name__)


class WishlistService:

    async def toggle(
        self,
        db: AsyncIOMotorDatabase,
        payload: WishlistToggleRequest,
    ) -> WishlistToggleResponse:
        blog_oid = queries.parse_object_id(payload.blog_id, field="blogId")
        entry = queries.wishlist_entry(blog_oid, payload.user_email)

        try:
            removed = await db[WISHLISTS].delete_many(
                queries.wishlist_match_filter(blog_oid, payload.user_email)
            )
            if removed.deleted_count > 0:
                logger.info("Wishlist: %s removed blog %s", payload.user_email, blog_oid)
                return WishlistToggleResponse(wished=False)

            try:
                # Copy: insert_one adds _id to the dict it is given
                await db[WISHLISTS].insert_one(dict(entry))
            except DuplicateKeyError:
                logger.info(
                    "Wishlist: concurrent toggle already added blog %s for %s",
                    blog_oid,
                    payload.user_email,
                )
            else:
                logger.info("Wishlist: %s added blog %s", payload.user_email, blog_oid)
            return WishlistToggleResponse(wished=True)

        except PyMongoError as e:
            logger.error("Database error toggling wishlist: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update your wishlist. Please try again.",
                context={"blog_id": payload.blog_id, "error_type": type(e).__name__},
            )

    async def list_for_user(self, db: AsyncIOMotorDatabase, user_email: str) -> List[Dict[str, Any]]:
        """
        Blogs wished by one user, fetched in a single $in query.

        Entries pointing at deleted blogs simply produce no document.
        """
        try:
            entries = await db[WISHLISTS].find({"userEmail": user_email}).to_list(length=None)
            blog_ids = queries.wishlist_blog_ids(entries)
            if not blog_ids:
                return []
            blogs = await db[BLOGS].find(queries.blogs_by_ids_filter(blog_ids)).to_list(length=None)
        except PyMongoError as e:
            logger.error("Database error listing wishlist for %s: %s", user_email, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve your wishlist. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return serialize_documents(blogs)


wishlist_service = WishlistService()
