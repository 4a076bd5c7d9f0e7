from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, Request

from .identity import Identity, IdentityError, IdentityVerifier

BEARER_PREFIX = "bearer "


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier  # type: ignore[attr-defined]


def _extract_token(authorization: Optional[str], authtoken: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX):].strip()
        if token:
            return token
    # header used by the admin panel and the Figma plugin
    if authtoken:
        return authtoken.strip() or None
    return None


async def require_identity(
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
    authorization: Annotated[Optional[str], Header()] = None,
    authtoken: Annotated[Optional[str], Header()] = None,
) -> Identity:
    token = _extract_token(authorization, authtoken)
    if token is None:
        raise IdentityError("Unauthorized")
    return await verifier.verify(token)


IdentityDep = Annotated[Identity, Depends(require_identity)]
