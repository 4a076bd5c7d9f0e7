"""
Root conftest.py for portfolio-api tests.

Provides an in-memory stand-in for the Motor collection API that understands
the query shapes the resource stores emit (field equality and ``$or``), plus
app/client fixtures wired to it.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from portfolio_api.api.fastapi import create_app
from portfolio_api.app.settings import AppSettings
from portfolio_api.auth import Identity, IdentityError
from portfolio_api.db.nosql.mongo import MongoSettings


def pytest_configure(config):
    for name, desc in [
        ("store", "Resource store contract tests"),
        ("api", "HTTP route tests"),
    ]:
        config.addinivalue_line("markers", f"{name}: {desc}")


# =============================================================================
# IN-MEMORY COLLECTION
# =============================================================================


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(document, branch) for branch in expected):
                return False
            continue
        if key not in document:
            return False
        actual = document[key]
        # bool is an int subclass; Mongo keeps them apart
        if type(actual) is bool or type(expected) is bool:
            if type(actual) is not type(expected):
                return False
        if actual != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None):
        docs = [copy.deepcopy(d) for d in self._documents]
        return docs if length is None else docs[:length]


class FakeCollection:
    """Async collection backed by a list of dicts."""

    def __init__(self, name: str):
        self.name = name
        self.documents: list[Dict[str, Any]] = []

    def _first(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if _matches(doc, query):
                return doc
        return None

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        query = query or {}
        return FakeCursor([d for d in self.documents if _matches(d, query)])

    async def find_one(self, query: Dict[str, Any]):
        doc = self._first(query)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, document: Dict[str, Any]):
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"], acknowledged=True)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]):
        doc = self._first(query)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        changes = update.get("$set", {})
        if "_id" in changes and changes["_id"] != doc["_id"]:
            raise AssertionError("attempted to modify immutable _id")
        modified = any(doc.get(k, object()) != v for k, v in changes.items())
        doc.update(copy.deepcopy(changes))
        return SimpleNamespace(matched_count=1, modified_count=int(modified))

    async def delete_one(self, query: Dict[str, Any]):
        doc = self._first(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.documents.remove(doc)
        return SimpleNamespace(deleted_count=1)

    async def count_documents(self, query: Dict[str, Any]) -> int:
        return sum(1 for d in self.documents if _matches(d, query))


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class FakeConnection:
    """Duck-typed MongoConnection used by the app fixtures."""

    def __init__(self, db: Optional[FakeDatabase] = None):
        self.db = db or FakeDatabase()
        self.ping_error: Optional[Exception] = None
        self.closed = False

    async def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error

    def close(self) -> None:
        self.closed = True


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: Optional[datetime] = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.step = step
        self.calls: list[datetime] = []

    def __call__(self) -> datetime:
        current = self.now
        self.calls.append(current)
        self.now = current + self.step
        return current


class StaticVerifier:
    """Accepts exactly one token."""

    def __init__(self, token: str = "good-token", uid: str = "firebase-uid-1"):
        self.token = token
        self.uid = uid

    async def verify(self, token: str) -> Identity:
        if token != self.token:
            raise IdentityError("invalid token")
        return Identity(uid=self.uid, claims={"uid": self.uid, "email": "owner@example.com"})


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def fake_connection(fake_db) -> FakeConnection:
    return FakeConnection(fake_db)


@pytest.fixture
def verifier() -> StaticVerifier:
    return StaticVerifier()


@pytest.fixture
def auth_headers(verifier) -> Dict[str, str]:
    return {"Authorization": f"Bearer {verifier.token}"}


@pytest.fixture
def app(fake_connection, verifier):
    return create_app(
        app_settings=AppSettings(),
        mongo_settings=MongoSettings(),
        identity_verifier=verifier,
        connection=fake_connection,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
