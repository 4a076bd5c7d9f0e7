from __future__ import annotations

from pymongo.errors import PyMongoError

from .connection import MongoConnection


async def mongo_healthcheck(conn: MongoConnection) -> bool:
    try:
        await conn.ping()
        return True
    except PyMongoError:
        return False
