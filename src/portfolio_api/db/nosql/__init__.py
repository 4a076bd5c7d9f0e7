from .errors import MalformedIdentifierError, ResourceStoreError
from .identifiers import (
    CanonicalId,
    CustomId,
    Identifier,
    IdentifierPolicy,
    build_filter,
    classify_identifier,
)
from .resources import CARDS, CATEGORIES, PORTFOLIOS, RESOURCE_KINDS, USERS, ResourceKind
from .store import DeleteResult, ResourceStore, UpdateResult

__all__ = [
    "MalformedIdentifierError",
    "ResourceStoreError",
    "CanonicalId",
    "CustomId",
    "Identifier",
    "IdentifierPolicy",
    "build_filter",
    "classify_identifier",
    "ResourceKind",
    "RESOURCE_KINDS",
    "CARDS",
    "CATEGORIES",
    "USERS",
    "PORTFOLIOS",
    "ResourceStore",
    "UpdateResult",
    "DeleteResult",
]
