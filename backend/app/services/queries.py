"""
CascadeBlog Backend - Query Construction
=========================================

What:  Pure functions turning request input into MongoDB filter, projection,
       sort and update documents.
Why:   This mapping is the heart of the API. Keeping it free of I/O makes
       every branch (search vs. recency, category sentinel, id conversion,
       update stripping, featured ranking) testable without a database.
How:   Services call these builders, then hand the documents to motor.

Identifier policy:
    Every blog id entering the API is converted with `parse_object_id`.
    Malformed values raise ValidationError (400) before storage is touched.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING

from app.exceptions import ValidationError

# Category value the frontend sends for "no category filter"
ALL_CATEGORIES = "All"
LATEST_BLOGS_LIMIT = 6
FEATURED_BLOGS_LIMIT = 10

# Fields the server owns; never taken from a client body
SERVER_MANAGED_FIELDS = ("_id", "createdAt")

TEXT_SCORE = {"$meta": "textScore"}

SortSpec = List[Tuple[str, Any]]


def utcnow() -> datetime:
    """Server clock for createdAt stamps (UTC, timezone-aware)."""
    return datetime.now(timezone.utc)


def parse_object_id(value: Any, field: str = "id") -> ObjectId:
    """
    Convert a client-supplied identifier into a native ObjectId.

    Raises:
        ValidationError: value is not a 24-character hex string (or ObjectId)
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a fresh id, so only strings are converted
    if isinstance(value, str):
        try:
            return ObjectId(value)
        except InvalidId:
            pass
    raise ValidationError(
        message=f"'{value}' is not a valid identifier",
        field=field,
    )


@dataclass(frozen=True)
class BlogListQuery:
    """Everything `find()` needs for GET /blogs."""

    filter: Dict[str, Any]
    projection: Optional[Dict[str, Any]]
    sort: SortSpec


def build_blog_list_query(
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> BlogListQuery:
    """
    Build the GET /blogs query.

    Branches:
        search non-empty → $text filter, textScore projection, score sort
        otherwise        → no text filter, createdAt descending
        category set and not "All" → equality filter added in both branches
    """
    query_filter: Dict[str, Any] = {}
    projection: Optional[Dict[str, Any]] = None
    term = (search or "").strip()

    if term:
        query_filter["$text"] = {"$search": term}
        projection = {"score": TEXT_SCORE}
        sort: SortSpec = [("score", TEXT_SCORE)]
    else:
        sort = [("createdAt", DESCENDING)]

    if category and category != ALL_CATEGORIES:
        query_filter["category"] = category

    return BlogListQuery(filter=query_filter, projection=projection, sort=sort)


def latest_blogs_sort() -> SortSpec:
    return [("createdAt", DESCENDING)]


def _client_fields(body: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Client-supplied blog fields without the server-managed ones.

    Raises:
        ValidationError: a field name starts with "$" (reserved for operators)
    """
    operators = sorted(k for k in body if str(k).startswith("$"))
    if operators:
        raise ValidationError(
            message=f"Field names must not start with '$': {', '.join(operators)}",
            context={"fields": operators},
        )
    return {k: v for k, v in body.items() if k not in SERVER_MANAGED_FIELDS}


def build_new_blog(body: Mapping[str, Any]) -> Dict[str, Any]:
    """Client fields minus server-managed ones, stamped with createdAt."""
    document = _client_fields(body)
    document["createdAt"] = utcnow()
    return document


def build_blog_update(body: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the $set update for PUT /update-blog/{id}.

    Only the supplied fields are set; _id and createdAt are dropped.

    Raises:
        ValidationError: nothing left to set, or an operator-like field name
    """
    fields = _client_fields(body)
    if not fields:
        raise ValidationError(message="Update body must contain at least one field to set")
    return {"$set": fields}


def build_comment(
    blog_id: ObjectId,
    user_name: str,
    user_photo: Optional[str],
    user_email: str,
    comment: str,
) -> Dict[str, Any]:
    return {
        "blogId": blog_id,
        "userName": user_name,
        "userPhoto": user_photo,
        "userEmail": user_email,
        "comment": comment,
        "createdAt": utcnow(),
    }


def comments_by_blog_filter(blog_id: ObjectId) -> Dict[str, Any]:
    return {"blogId": blog_id}


def comments_sort() -> SortSpec:
    return [("createdAt", DESCENDING)]


def wishlist_entry(blog_id: ObjectId, user_email: str) -> Dict[str, Any]:
    return {"blogId": blog_id, "userEmail": user_email}


def wishlist_match_filter(blog_id: ObjectId, user_email: str) -> Dict[str, Any]:
    """Matches a pair whether its blogId was stored as ObjectId or legacy string."""
    return {"blogId": {"$in": [blog_id, str(blog_id)]}, "userEmail": user_email}


def wishlist_blog_ids(entries: Iterable[Mapping[str, Any]]) -> List[ObjectId]:
    """
    Collect the blog ids referenced by wishlist entries.

    Entries written before ids were canonical hold plain strings; those are
    converted, and any that cannot be converted are skipped. Order is kept
    and duplicates dropped.
    """
    ids: List[ObjectId] = []
    seen = set()
    for entry in entries:
        raw = entry.get("blogId")
        if isinstance(raw, ObjectId):
            oid = raw
        elif isinstance(raw, str) and ObjectId.is_valid(raw):
            oid = ObjectId(raw)
        else:
            continue
        if oid not in seen:
            seen.add(oid)
            ids.append(oid)
    return ids


def blogs_by_ids_filter(ids: List[ObjectId]) -> Dict[str, Any]:
    return {"_id": {"$in": ids}}


def word_count(document: Mapping[str, Any]) -> int:
    """Whitespace-separated tokens in blogDetails; 0 when absent or not text."""
    body = document.get("blogDetails")
    if not isinstance(body, str):
        return 0
    return len(body.split())


def rank_featured(
    documents: Iterable[Mapping[str, Any]],
    limit: int = FEATURED_BLOGS_LIMIT,
) -> List[Dict[str, Any]]:
    """
    Attach wordCount to every document and keep the `limit` longest.

    sorted() is stable, so equal counts keep their database order.
    """
    counted = [{**doc, "wordCount": word_count(doc)} for doc in documents]
    counted.sort(key=lambda doc: doc["wordCount"], reverse=True)
    return counted[:limit]
