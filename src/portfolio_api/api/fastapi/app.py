from __future__ import annotations

from typing import Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.app.settings import AppSettings, get_app_settings
from portfolio_api.auth import FirebaseIdentityVerifier, IdentityVerifier, get_auth_settings
from portfolio_api.db.nosql import RESOURCE_KINDS, USERS, ResourceKind
from portfolio_api.db.nosql.mongo import MongoConnection, MongoSettings, get_mongo_settings

from .errors import register_error_handlers
from .middleware.errors.catchall import CatchAllExceptionMiddleware
from .mongo import attach_mongo
from .routers import health_router, me_router, resource_router


def _add_cors(app: FastAPI, settings: AppSettings) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "authtoken"],
    )


def create_app(
    *,
    app_settings: Optional[AppSettings] = None,
    mongo_settings: Optional[MongoSettings] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
    connection: Optional[MongoConnection] = None,
    kinds: Iterable[ResourceKind] = RESOURCE_KINDS,
) -> FastAPI:
    """Build the API.

    ``connection`` and ``identity_verifier`` default to a real Motor client and
    the Firebase verifier; tests pass their own.
    """
    settings = app_settings or get_app_settings()
    kinds = tuple(kinds)

    app = FastAPI(title=settings.name, version=settings.version)
    app.state.identity_verifier = identity_verifier or FirebaseIdentityVerifier(get_auth_settings())

    attach_mongo(app, mongo_settings or get_mongo_settings(), kinds=kinds, connection=connection)

    for kind in kinds:
        app.include_router(resource_router(kind), prefix=settings.api_prefix)
    if USERS in kinds:
        app.include_router(me_router, prefix=settings.api_prefix)
    app.include_router(health_router)

    register_error_handlers(app)
    app.add_middleware(CatchAllExceptionMiddleware)
    _add_cors(app, settings)
    return app
