"""
Caller identity verification.

Tokens are verified by an external identity provider; the API only needs a
verified uid to decide whether a mutating call may proceed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials as firebase_credentials
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from .settings import AuthSettings

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    """The presented token is missing or was rejected."""


@dataclass(frozen=True)
class Identity:
    uid: str
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email")


class IdentityVerifier(Protocol):
    async def verify(self, token: str) -> Identity:
        ...


class FirebaseIdentityVerifier:
    """Verifies Firebase ID tokens with the Admin SDK."""

    def __init__(self, settings: AuthSettings, *, app_name: str = "portfolio-api"):
        try:
            self._app = firebase_admin.get_app(app_name)
        except ValueError:
            cred = firebase_credentials.Certificate(settings.load_credentials())
            self._app = firebase_admin.initialize_app(cred, name=app_name)

    async def verify(self, token: str) -> Identity:
        try:
            # verify_id_token may fetch signing keys over the network
            claims = await run_in_threadpool(firebase_auth.verify_id_token, token, self._app)
        except (ValueError, FirebaseError) as exc:
            logger.info("Rejected identity token: %s", exc)
            raise IdentityError(str(exc)) from exc
        return Identity(uid=claims["uid"], claims=dict(claims))
