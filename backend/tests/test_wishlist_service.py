"""
CascadeBlog Backend - Wishlist Service Unit Tests
==================================================

What:  Toggle semantics and listing resolution.
How:   The toggle runs against a tiny in-memory collection so sequential
       calls observe each other's writes; the rest uses the mock database.
"""

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, NetworkTimeout
from pymongo.results import DeleteResult

from app.exceptions import DatabaseError, ValidationError
from app.schemas.blog import WishlistToggleRequest
from app.services.wishlist_service import WishlistService


class InMemoryWishlists:
    """Just enough of a motor collection for the toggle."""

    def __init__(self):
        self.entries = []

    @staticmethod
    def _matches(entry, query):
        for key, expected in query.items():
            if isinstance(expected, dict) and "$in" in expected:
                if entry.get(key) not in expected["$in"]:
                    return False
            elif entry.get(key) != expected:
                return False
        return True

    async def delete_many(self, query):
        kept = [e for e in self.entries if not self._matches(e, query)]
        deleted = len(self.entries) - len(kept)
        self.entries = kept
        return DeleteResult({"n": deleted}, True)

    async def insert_one(self, document):
        for entry in self.entries:
            if entry["blogId"] == document["blogId"] and entry["userEmail"] == document["userEmail"]:
                raise DuplicateKeyError("E11000 duplicate key")
        self.entries.append({**document, "_id": ObjectId()})


class TestToggle:

    def setup_method(self):
        self.service = WishlistService()

    def _db(self, wishlists):
        return {"wishlists": wishlists}

    @pytest.mark.asyncio
    async def test_toggle_twice_adds_then_removes(self):
        wishlists = InMemoryWishlists()
        db = self._db(wishlists)
        payload = WishlistToggleRequest(blogId=str(ObjectId()), userEmail="alice@example.com")

        first = await self.service.toggle(db, payload)
        assert first.wished is True
        assert len(wishlists.entries) == 1

        second = await self.service.toggle(db, payload)
        assert second.wished is False
        assert wishlists.entries == []

    @pytest.mark.asyncio
    async def test_legacy_string_entry_is_removed_by_toggle(self):
        wishlists = InMemoryWishlists()
        blog_id = ObjectId()
        wishlists.entries.append({"_id": ObjectId(), "blogId": str(blog_id), "userEmail": "a@x.com"})
        db = self._db(wishlists)
        payload = WishlistToggleRequest(blogId=str(blog_id), userEmail="a@x.com")

        first = await self.service.toggle(db, payload)
        assert first.wished is False
        assert wishlists.entries == []

        second = await self.service.toggle(db, payload)
        assert second.wished is True
        assert [e["blogId"] for e in wishlists.entries] == [blog_id]

    @pytest.mark.asyncio
    async def test_blog_id_stored_as_object_id(self):
        wishlists = InMemoryWishlists()
        blog_id = ObjectId()

        await self.service.toggle(
            self._db(wishlists),
            WishlistToggleRequest(blogId=str(blog_id), userEmail="alice@example.com"),
        )

        assert wishlists.entries[0]["blogId"] == blog_id

    @pytest.mark.asyncio
    async def test_pairs_are_independent(self):
        wishlists = InMemoryWishlists()
        db = self._db(wishlists)
        blog_id = str(ObjectId())

        a = await self.service.toggle(db, WishlistToggleRequest(blogId=blog_id, userEmail="a@x.com"))
        b = await self.service.toggle(db, WishlistToggleRequest(blogId=blog_id, userEmail="b@x.com"))

        assert a.wished is True and b.wished is True
        assert len(wishlists.entries) == 2

    @pytest.mark.asyncio
    async def test_concurrent_insert_reported_as_wished(self, mock_db):
        mock_db["wishlists"].insert_one.side_effect = DuplicateKeyError("E11000")

        result = await self.service.toggle(
            mock_db,
            WishlistToggleRequest(blogId=str(ObjectId()), userEmail="alice@example.com"),
        )

        assert result.wished is True

    @pytest.mark.asyncio
    async def test_malformed_blog_id_rejected(self, mock_db):
        with pytest.raises(ValidationError):
            await self.service.toggle(
                mock_db, WishlistToggleRequest(blogId="nope", userEmail="alice@example.com")
            )
        mock_db["wishlists"].delete_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_failure_wrapped(self, mock_db):
        mock_db["wishlists"].delete_many.side_effect = NetworkTimeout("slow")
        with pytest.raises(DatabaseError):
            await self.service.toggle(
                mock_db,
                WishlistToggleRequest(blogId=str(ObjectId()), userEmail="alice@example.com"),
            )


class TestListForUser:

    def setup_method(self):
        self.service = WishlistService()

    @pytest.mark.asyncio
    async def test_resolves_entries_in_one_query(self, mock_db, make_cursor, sample_blogs):
        wished = sample_blogs[:2]
        mock_db["wishlists"].find.return_value = make_cursor([
            {"blogId": wished[0]["_id"], "userEmail": "alice@example.com"},
            {"blogId": str(wished[1]["_id"]), "userEmail": "alice@example.com"},
        ])
        mock_db["blogs"].find.return_value = make_cursor(wished)

        result = await self.service.list_for_user(mock_db, "alice@example.com")

        mock_db["wishlists"].find.assert_called_once_with({"userEmail": "alice@example.com"})
        mock_db["blogs"].find.assert_called_once_with(
            {"_id": {"$in": [wished[0]["_id"], wished[1]["_id"]]}}
        )
        assert [b["title"] for b in result] == [b["title"] for b in wished]

    @pytest.mark.asyncio
    async def test_deleted_blogs_silently_omitted(self, mock_db, make_cursor, sample_blogs):
        gone = ObjectId()
        mock_db["wishlists"].find.return_value = make_cursor([
            {"blogId": sample_blogs[0]["_id"]},
            {"blogId": gone},
        ])
        mock_db["blogs"].find.return_value = make_cursor(sample_blogs[:1])

        result = await self.service.list_for_user(mock_db, "alice@example.com")

        assert len(result) == 1

    @pytest.mark.asyncio
    async def test_empty_wishlist_skips_blog_query(self, mock_db):
        result = await self.service.list_for_user(mock_db, "nobody@example.com")

        assert result == []
        mock_db["blogs"].find.assert_not_called()
