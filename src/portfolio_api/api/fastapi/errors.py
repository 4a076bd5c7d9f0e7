from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from portfolio_api.auth import IdentityError
from portfolio_api.db.nosql import MalformedIdentifierError, ResourceStoreError

logger = logging.getLogger(__name__)


async def _store_error(request: Request, exc: ResourceStoreError) -> JSONResponse:
    # already logged with full context by the store
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def _malformed_identifier(request: Request, exc: MalformedIdentifierError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _identity_error(request: Request, exc: IdentityError) -> JSONResponse:
    logger.debug("Unauthorized %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=401, content={"error": "Unauthorized"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResourceStoreError, _store_error)  # type: ignore[arg-type]
    app.add_exception_handler(MalformedIdentifierError, _malformed_identifier)  # type: ignore[arg-type]
    app.add_exception_handler(IdentityError, _identity_error)  # type: ignore[arg-type]
