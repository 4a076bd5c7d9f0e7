from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from .errors import ResourceStoreError
from .identifiers import (
    CANONICAL_FIELD,
    IdentifierPolicy,
    build_filter,
    classify_identifier,
)
from .resources import ResourceKind

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"

# Never taken from a caller payload
STORE_OWNED_FIELDS = frozenset({CANONICAL_FIELD, CREATED_AT, UPDATED_AT})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UpdateResult:
    matched: int
    modified: int


@dataclass(frozen=True)
class DeleteResult:
    deleted: int


class ResourceStore:
    """Dual-identifier CRUD over one Mongo collection.

    - Identifiers are classified once per call: 24-hex strings hit ``_id``,
      anything else hits the kind's custom id field as string or integer.
    - ``_id`` and the timestamps are owned by the store; payload copies of
      them are dropped.
    - Absence is a normal result (``None`` or zero counts). Driver faults are
      logged and re-raised as ``ResourceStoreError``.
    """

    def __init__(
        self,
        kind: ResourceKind,
        database: Any,
        *,
        policy: Optional[IdentifierPolicy] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.kind = kind
        self.policy = policy or IdentifierPolicy()
        self.collection = database[kind.collection]
        self._clock = clock

    def _filter(self, raw_id: str, *, for_write: bool) -> dict[str, Any]:
        return build_filter(
            classify_identifier(raw_id),
            custom_field=self.kind.custom_id_field,
            legacy_canonical_fallback=for_write and self.policy.legacy_canonical_fallback,
        )

    def _fail(self, operation: str, message: str, exc: Exception, identifier: str | None = None):
        logger.error(
            "Error %s %s: %s",
            operation,
            self.kind.name if identifier is None else self.kind.singular,
            exc,
            exc_info=True,
            extra={"resource": self.kind.name, "operation": operation, "identifier": identifier},
        )
        return ResourceStoreError(self.kind.name, operation, f"{message}: {exc}")

    async def list(self) -> list[dict[str, Any]]:
        try:
            return await self.collection.find().to_list(length=None)
        except PyMongoError as exc:
            raise self._fail("fetching", f"Failed to fetch {self.kind.name}", exc) from exc

    async def get_by_identifier(self, raw_id: str) -> Optional[dict[str, Any]]:
        query = self._filter(raw_id, for_write=False)
        try:
            return await self.collection.find_one(query)
        except PyMongoError as exc:
            raise self._fail(
                "fetching", f"Failed to fetch {self.kind.singular}", exc, raw_id
            ) from exc

    async def create(self, payload: Mapping[str, Any]) -> ObjectId:
        now = self._clock()
        document = {k: v for k, v in payload.items() if k not in STORE_OWNED_FIELDS}
        document[CREATED_AT] = now
        document[UPDATED_AT] = now
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as exc:
            raise self._fail("creating", f"Failed to create {self.kind.singular}", exc) from exc
        logger.info("Created %s %s", self.kind.singular, result.inserted_id)
        return result.inserted_id

    async def update_by_identifier(self, raw_id: str, payload: Mapping[str, Any]) -> UpdateResult:
        query = self._filter(raw_id, for_write=True)
        changes = {k: v for k, v in payload.items() if k not in STORE_OWNED_FIELDS}
        changes[UPDATED_AT] = self._clock()
        logger.debug("Updating %s %s with filter %s", self.kind.singular, raw_id, query)
        try:
            existing = await self.collection.find_one(query)
            if existing is None:
                logger.info("No existing %s matches %r", self.kind.singular, raw_id)
            else:
                logger.debug("Existing %s: %s", self.kind.singular, existing)
            result = await self.collection.update_one(query, {"$set": changes})
        except PyMongoError as exc:
            raise self._fail(
                "updating", f"Failed to update {self.kind.singular}", exc, raw_id
            ) from exc
        logger.info(
            "Update %s %s: matched=%s modified=%s",
            self.kind.singular,
            raw_id,
            result.matched_count,
            result.modified_count,
        )
        return UpdateResult(matched=result.matched_count, modified=result.modified_count)

    async def delete_by_identifier(self, raw_id: str) -> DeleteResult:
        query = self._filter(raw_id, for_write=True)
        try:
            result = await self.collection.delete_one(query)
        except PyMongoError as exc:
            raise self._fail(
                "deleting", f"Failed to delete {self.kind.singular}", exc, raw_id
            ) from exc
        return DeleteResult(deleted=result.deleted_count)

    async def count(self) -> int:
        try:
            return await self.collection.count_documents({})
        except PyMongoError as exc:
            raise self._fail("counting", f"Failed to count {self.kind.name}", exc) from exc

    async def initialize(self) -> None:
        """Bootstrap check run once at startup; never seeds data."""
        try:
            count = await self.collection.count_documents({})
        except PyMongoError as exc:
            raise self._fail(
                "initializing", f"Failed to initialize {self.kind.name}", exc
            ) from exc
        if count == 0:
            logger.info("%s collection initialized (empty)", self.kind.name.capitalize())
        else:
            logger.info("%s collection ready (%d documents)", self.kind.name.capitalize(), count)
