"""
CascadeBlog Backend - Comment Service Unit Tests
=================================================
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import AutoReconnect

from app.exceptions import DatabaseError, ValidationError
from app.schemas.blog import CommentCreate
from app.services.comment_service import CommentService


def _payload(blog_id: str) -> CommentCreate:
    return CommentCreate(
        blogId=blog_id,
        userName="Ann",
        userPhoto="https://example.com/ann.png",
        userEmail="ann@example.com",
        comment="Great read",
    )


class TestAddComment:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_stores_native_blog_id_and_timestamp(self, mock_db):
        blog_id = ObjectId()

        receipt = await self.service.add_comment(mock_db, _payload(str(blog_id)))

        stored = mock_db["comments"].insert_one.await_args.args[0]
        assert stored["blogId"] == blog_id
        assert stored["userName"] == "Ann"
        assert stored["userEmail"] == "ann@example.com"
        assert stored["comment"] == "Great read"
        assert isinstance(stored["createdAt"], datetime)
        assert receipt.acknowledged is True

    @pytest.mark.asyncio
    async def test_malformed_blog_id_rejected(self, mock_db):
        with pytest.raises(ValidationError):
            await self.service.add_comment(mock_db, _payload("bad"))
        mock_db["comments"].insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_failure_wrapped(self, mock_db):
        mock_db["comments"].insert_one.side_effect = AutoReconnect("lost")
        with pytest.raises(DatabaseError):
            await self.service.add_comment(mock_db, _payload(str(ObjectId())))

    @pytest.mark.asyncio
    async def test_insert_failure_logged_with_traceback(self, mock_db, caplog):
        mock_db["comments"].insert_one.side_effect = AutoReconnect("lost")
        with caplog.at_level(logging.ERROR, logger="app.services.comment_service"):
            with pytest.raises(DatabaseError):
                await self.service.add_comment(mock_db, _payload(str(ObjectId())))

        [record] = [r for r in caplog.records if r.name == "app.services.comment_service"]
        assert record.exc_info is not None


class TestListComments:

    def setup_method(self):
        self.service = CommentService()

    @pytest.mark.asyncio
    async def test_filters_by_blog_newest_first(self, mock_db, make_cursor):
        blog_id = ObjectId()
        now = datetime.now(timezone.utc)
        cursor = make_cursor([
            {"_id": ObjectId(), "blogId": blog_id, "comment": "new", "createdAt": now},
            {"_id": ObjectId(), "blogId": blog_id, "comment": "old", "createdAt": now - timedelta(hours=1)},
        ])
        mock_db["comments"].find.return_value = cursor

        result = await self.service.list_comments(mock_db, str(blog_id))

        mock_db["comments"].find.assert_called_once_with({"blogId": blog_id})
        cursor.sort.assert_called_once_with([("createdAt", DESCENDING)])
        assert [c["comment"] for c in result] == ["new", "old"]
        assert result[0]["blogId"] == str(blog_id)

    @pytest.mark.asyncio
    async def test_malformed_blog_id_rejected(self, mock_db):
        with pytest.raises(ValidationError):
            await self.service.list_comments(mock_db, "xyz")
