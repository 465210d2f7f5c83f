"""
Adapters package - external system connections.
"""

from adapters.mongo_adapter import MongoStore, build_store

__all__ = ["MongoStore", "build_store"]
