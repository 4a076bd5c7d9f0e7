from __future__ import annotations

from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

_ENCODERS = {ObjectId: str}


def encode(value: Any) -> Any:
    """JSON-ready copy of a document (or list of documents)."""
    return jsonable_encoder(value, custom_encoder=_ENCODERS)
