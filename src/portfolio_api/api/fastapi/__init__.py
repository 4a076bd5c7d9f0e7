from .app import create_app
from .mongo import attach_mongo, get_connection, store_dependency

__all__ = ["create_app", "attach_mongo", "get_connection", "store_dependency"]
