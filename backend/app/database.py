"""
CascadeBlog Backend - Database Client Management
=================================================

What:  Shared motor client, database accessor for FastAPI, index bootstrap.
Why:   Centralizes all MongoDB connection logic in one place.
How:   One AsyncIOMotorClient per process, created lazily on first use and
       reused by every request; the driver pools connections internally.
Who:   Services receive the database through the `get_database` dependency.
When:  Client created on first request (or at startup for index bootstrap),
       closed in the application lifespan.

Collections:
    blogs      blog posts (text index over title, blogDetails, tags)
    comments   comments referencing blogs by ObjectId
    wishlists  (blogId, userEmail) pairs, unique per pair

No transactions, retries or custom timeouts are configured: driver defaults
apply to every operation.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.errors import PyMongoError

from app.config import settings

logger = logging.getLogger(__name__)

BLOGS = "blogs"
COMMENTS = "comments"
WISHLISTS = "wishlists"

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Returns the process-wide motor client, creating it on first call."""
    global _client
    if _client is None:
        # tz_aware: createdAt values come back as UTC-aware datetimes
        _client = AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)
        logger.info("MongoDB client created for database '%s'", settings.mongodb_database)
    return _client


def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency that provides the application database.

    Example usage in a route:
        @router.get("/blogs")
        async def list_blogs(db: AsyncIOMotorDatabase = Depends(get_database)):
            ...

    Tests replace it through `app.dependency_overrides[get_database]`.
    """
    return get_client()[settings.mongodb_database]


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """
    Create the indexes every query in the services relies on.

    What:  Idempotent index bootstrap (create_index is a no-op when present).
    When:  Application startup.
    Why the unique wishlist index: two concurrent toggles for the same pair
           cannot both insert; the loser sees DuplicateKeyError.
    """
    await db[BLOGS].create_index(
        [("title", TEXT), ("blogDetails", TEXT), ("tags", TEXT)],
        name="blogs_text",
    )
    await db[BLOGS].create_index([("createdAt", DESCENDING)], name="blogs_created_at")
    await db[BLOGS].create_index([("category", ASCENDING)], name="blogs_category")
    await db[COMMENTS].create_index(
        [("blogId", ASCENDING), ("createdAt", DESCENDING)],
        name="comments_blog_created_at",
    )
    await db[WISHLISTS].create_index(
        [("blogId", ASCENDING), ("userEmail", ASCENDING)],
        name="wishlists_blog_user",
        unique=True,
    )
    await db[WISHLISTS].create_index([("userEmail", ASCENDING)], name="wishlists_user")
    logger.info("MongoDB indexes ensured")


async def ping_database(db: AsyncIOMotorDatabase) -> bool:
    """Lightweight connectivity probe used by the health check."""
    try:
        await db.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("Database ping failed: %s", str(e))
        return False


def close_client() -> None:
    """
    What:  Closes the shared client and its connection pool.
    When:  Application shutdown (lifespan handler).
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")
