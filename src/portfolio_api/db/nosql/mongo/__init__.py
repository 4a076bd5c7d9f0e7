from .connection import MongoConnection, connect_mongo
from .health import mongo_healthcheck
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "MongoConnection",
    "connect_mongo",
    "mongo_healthcheck",
    "MongoSettings",
    "get_mongo_settings",
]
