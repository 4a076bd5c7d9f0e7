"""
Identifier classification and lookup filters shared by every resource kind.

A resource can be addressed by its Mongo ``_id`` (24 hex characters) or by a
caller-supplied custom id. Custom ids have been written both as strings and as
numbers over time, so lookups tolerate either representation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Union

from bson import ObjectId
from bson.errors import InvalidId

from .errors import MalformedIdentifierError

CANONICAL_FIELD = "_id"

_CANONICAL_RE = re.compile(r"[0-9a-fA-F]{24}")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# BSON int64 bounds
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class CanonicalId:
    value: str


@dataclass(frozen=True)
class CustomId:
    value: str


Identifier = Union[CanonicalId, CustomId]


@dataclass(frozen=True)
class IdentifierPolicy:
    """Per-kind lookup options.

    legacy_canonical_fallback: when enabled, update and delete also match
    documents whose ``_id`` was stored as the literal identifier string.
    Reads never use it.
    """

    legacy_canonical_fallback: bool = False


def classify_identifier(raw: str) -> Identifier:
    if _CANONICAL_RE.fullmatch(raw):
        return CanonicalId(raw)
    return CustomId(raw)


def parse_integer(raw: str) -> int | None:
    """Strict decimal parse; ``None`` unless the value is a plain int64."""
    if not _INTEGER_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def build_filter(
    identifier: Identifier,
    *,
    custom_field: str = "id",
    legacy_canonical_fallback: bool = False,
) -> dict[str, Any]:
    if isinstance(identifier, CanonicalId):
        try:
            return {CANONICAL_FIELD: ObjectId(identifier.value)}
        except (InvalidId, TypeError) as exc:
            raise MalformedIdentifierError(identifier.value) from exc

    branches: list[dict[str, Any]] = [{custom_field: identifier.value}]
    numeric = parse_integer(identifier.value)
    if numeric is not None:
        branches.append({custom_field: numeric})
    if legacy_canonical_fallback:
        branches.append({CANONICAL_FIELD: identifier.value})
    return {"$or": branches}
