"""
CascadeBlog Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   motor collections are replaced by MagicMock/AsyncMock objects and the
       identity provider by a token table, so no MongoDB or Google endpoint
       is needed.

Fixtures:
    mock_db          database mock; mock_db["blogs"] etc. are collection mocks
    make_cursor      builds a motor-like cursor returning given documents
    fake_verifier    IdentityVerifier accepting the tokens in TOKENS
    test_client      HTTPX AsyncClient wired to the app with both overridden
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time: configure the environment first
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "cascadeBlogTest"
os.environ["AUTH_AUDIENCE"] = "test-audience"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.results import DeleteResult, InsertOneResult

from app.exceptions import AuthenticationError
from app.services.identity_service import IdentityVerifier, Principal

ALICE = Principal(subject="uid-alice", email="alice@example.com")
BOB = Principal(subject="uid-bob", email="bob@example.com")

TOKENS = {
    "token-alice": ALICE,
    "token-bob": BOB,
}


class FakeIdentityVerifier(IdentityVerifier):
    """Accepts only the tokens listed in TOKENS."""

    async def verify(self, token: str) -> Principal:
        try:
            return TOKENS[token]
        except KeyError:
            raise AuthenticationError(message="Invalid or expired token")


def _make_cursor(documents=None):
    cursor = MagicMock(name="cursor")
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    return cursor


@pytest.fixture
def make_cursor():
    """
    Returns a factory for motor-like cursors.

    Usage:
        mock_db["blogs"].find.return_value = make_cursor([doc1, doc2])
    """
    return _make_cursor


@pytest.fixture
def mock_db():
    """
    Provides a mock AsyncIOMotorDatabase.

    Each collection supports find (cursor), find_one, insert_one,
    update_one and delete_many with harmless defaults.
    """
    collections = {}
    for name in ("blogs", "comments", "wishlists"):
        collection = MagicMock(name=name)
        collection.find = MagicMock(return_value=_make_cursor())
        collection.find_one = AsyncMock(return_value=None)
        collection.insert_one = AsyncMock(
            side_effect=lambda doc: InsertOneResult(ObjectId(), True)
        )
        collection.update_one = AsyncMock()
        collection.delete_many = AsyncMock(return_value=DeleteResult({"n": 0}, True))
        collections[name] = collection

    db = MagicMock(name="db")
    db.__getitem__.side_effect = collections.__getitem__
    db.command = AsyncMock(return_value={"ok": 1.0})
    return db


@pytest.fixture
def fake_verifier():
    return FakeIdentityVerifier()


@pytest.fixture
def sample_blogs():
    """Three blogs, newest first, with varying body lengths."""
    now = datetime.now(timezone.utc)
    return [
        {
            "_id": ObjectId(),
            "title": "Cascading styles",
            "blogDetails": "one two three",
            "category": "Web",
            "tags": ["css"],
            "createdAt": now,
        },
        {
            "_id": ObjectId(),
            "title": "Rivers",
            "blogDetails": "a b c d e f",
            "category": "Travel",
            "tags": ["nature"],
            "createdAt": now - timedelta(days=1),
        },
        {
            "_id": ObjectId(),
            "title": "Untitled draft",
            "category": "Web",
            "createdAt": now - timedelta(days=2),
        },
    ]


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-alice"}


@pytest_asyncio.fixture
async def test_client(mock_db, fake_verifier):
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    The database and the identity verifier are replaced through
    dependency_overrides; the lifespan (index bootstrap) does not run.
    """
    from app.database import get_database
    from app.main import app
    from app.services.identity_service import get_identity_verifier

    app.dependency_overrides[get_database] = lambda: mock_db
    app.dependency_overrides[get_identity_verifier] = lambda: fake_verifier
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
