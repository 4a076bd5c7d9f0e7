from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable, Iterable, Optional

from fastapi import FastAPI, Request

from portfolio_api.db.nosql import RESOURCE_KINDS, IdentifierPolicy, ResourceKind, ResourceStore
from portfolio_api.db.nosql.mongo import MongoConnection, MongoSettings, connect_mongo

logger = logging.getLogger(__name__)


def build_stores(
    conn: MongoConnection,
    kinds: Iterable[ResourceKind],
    *,
    policy: IdentifierPolicy,
) -> dict[str, ResourceStore]:
    return {kind.name: ResourceStore(kind, conn.db, policy=policy) for kind in kinds}


def attach_mongo(
    app: FastAPI,
    settings: MongoSettings,
    *,
    kinds: Iterable[ResourceKind] = RESOURCE_KINDS,
    connection: Optional[MongoConnection] = None,
) -> None:
    """Open one connection for the app's lifetime and build a store per kind."""
    kinds = tuple(kinds)
    policy = IdentifierPolicy(legacy_canonical_fallback=settings.legacy_canonical_fallback)
    existing = getattr(app.router, "lifespan_context", None)  # type: ignore[attr-defined]

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        conn = connection or await connect_mongo(settings)
        stores = build_stores(conn, kinds, policy=policy)
        _app.state.mongo = conn  # type: ignore[attr-defined]
        _app.state.stores = stores  # type: ignore[attr-defined]
        try:
            for store in stores.values():
                await store.initialize()
            logger.info(
                "Mongo attached: db=%s kinds=%s legacy_canonical_fallback=%s",
                settings.db,
                ",".join(stores),
                policy.legacy_canonical_fallback,
            )
            if existing:
                async with existing(_app):  # type: ignore[misc]
                    yield
            else:
                yield
        finally:
            if connection is None:
                conn.close()

    app.router.lifespan_context = composed_lifespan  # type: ignore[attr-defined]


def get_connection(request: Request) -> MongoConnection:
    return request.app.state.mongo  # type: ignore[attr-defined]


def store_dependency(kind: ResourceKind) -> Callable[[Request], ResourceStore]:
    def _get_store(request: Request) -> ResourceStore:
        return request.app.state.stores[kind.name]  # type: ignore[attr-defined]

    _get_store.__name__ = f"get_{kind.name}_store"
    return _get_store
