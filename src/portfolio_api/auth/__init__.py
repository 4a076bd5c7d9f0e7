from .deps import IdentityDep, require_identity
from .identity import FirebaseIdentityVerifier, Identity, IdentityError, IdentityVerifier
from .settings import AuthSettings, get_auth_settings

__all__ = [
    "IdentityDep",
    "require_identity",
    "FirebaseIdentityVerifier",
    "Identity",
    "IdentityError",
    "IdentityVerifier",
    "AuthSettings",
    "get_auth_settings",
]
