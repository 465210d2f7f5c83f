"""MongoDB adapter: the store handle shared by every repository.

One ``MongoStore`` is opened at startup and passed to repositories, instead of
module-level client globals.
"""

from typing import Optional, Dict, Any
import logging

from pymongo import MongoClient, ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database

logger = logging.getLogger("unimeal.mongo")


class MongoStore:
    """Explicitly managed MongoDB client and database handle."""

    def __init__(
        self,
        uri: str,
        db_name: str,
        server_selection_timeout_ms: int = 5000,
        client: Optional[MongoClient] = None,
    ):
        self.uri = uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client: Optional[MongoClient] = client
        self._db: Optional[Database] = client[db_name] if client is not None else None

    # ------------------ Lifecycle ------------------
    def connect(self) -> "MongoStore":
        """Create the client (if needed) and verify the deployment answers."""
        if self._client is None:
            self._client = MongoClient(
                self.uri, serverSelectionTimeoutMS=self.server_selection_timeout_ms
            )
            self._db = self._client[self.db_name]
        self.ping()
        logger.info("Connected to MongoDB (database: %s)", self.db_name)
        return self

    def close(self) -> None:
        if self._client is None:
            return
        try:
            self._client.close()
            logger.info("MongoDB client closed")
        finally:
            self._client = None
            self._db = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def ping(self) -> Dict[str, Any]:
        return self.client.admin.command("ping")

    # ------------------ Handles ------------------
    @property
    def client(self) -> MongoClient:
        if self._client is None:
            raise RuntimeError("MongoStore is not connected")
        return self._client

    @property
    def db(self) -> Database:
        if self._db is None:
            raise RuntimeError("MongoStore is not connected")
        return self._db

    def collection(self, name: str) -> Collection:
        return self.db[name]

    # ------------------ Indexes ------------------
    def ensure_indexes(self, settings) -> None:
        """Create the indexes the engine relies on. Safe to call repeatedly."""
        self.collection(settings.meal_requests_collection).create_index(
            [("mealId", ASCENDING), ("userId", ASCENDING), ("email", ASCENDING)],
            unique=True,
            name="uniq_meal_requester",
        )
        self.collection(settings.meal_requests_collection).create_index(
            [("status", ASCENDING), ("requestedAt", ASCENDING)],
            name="status_requested_at",
        )
        self.collection(settings.users_collection).create_index(
            [("email", ASCENDING)], unique=True, name="uniq_email"
        )
        for name in (settings.meals_collection, settings.upcoming_meals_collection):
            self.collection(name).create_index([("category", ASCENDING)], name="category")
        self.collection(settings.meals_collection).create_index(
            [("reviews.email", ASCENDING)], name="review_author"
        )
        logger.info("MongoDB indexes ensured")


def build_store(settings) -> MongoStore:
    """Create an unconnected store from application settings."""
    return MongoStore(
        settings.mongo_uri,
        settings.mongo_db_name,
        server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
    )
