"""
Base repository for the document store.
Repositories own one collection each and map documents at the boundary:
the store's ``_id`` (ObjectId) is exposed to services as ``id`` (hex string).
"""

from typing import Optional, Dict, Any, List
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection


class MongoRepository:
    """
    Base repository providing id mapping and common reads.
    All repositories should inherit from this class.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    @staticmethod
    def to_object_id(entity_id: Any) -> Optional[ObjectId]:
        """Parse an id; malformed ids yield None (and therefore match nothing)."""
        if isinstance(entity_id, ObjectId):
            return entity_id
        try:
            return ObjectId(str(entity_id))
        except (InvalidId, TypeError):
            return None

    @staticmethod
    def from_document(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Convert a stored document into the shape services work with"""
        if doc is None:
            return None
        out = {k: v for k, v in doc.items() if k != "_id"}
        out["id"] = str(doc["_id"])
        return out

    def to_document(self, entity: Dict[str, Any]) -> Dict[str, Any]:
        """Convert a service-side dict into a storable document"""
        doc = {k: v for k, v in entity.items() if k != "id"}
        if entity.get("id") is not None:
            oid = self.to_object_id(entity["id"])
            if oid is None:
                raise ValueError(f"Invalid document id {entity['id']!r}")
            doc["_id"] = oid
        return doc

    def id_filter(self, entity_id: Any) -> Optional[Dict[str, Any]]:
        oid = self.to_object_id(entity_id)
        if oid is None:
            return None
        return {"_id": oid}

    def get_by_id(self, entity_id: Any) -> Optional[Dict[str, Any]]:
        """Get document by id, or None if absent or the id is malformed"""
        flt = self.id_filter(entity_id)
        if flt is None:
            return None
        return self.from_document(self.collection.find_one(flt))

    def list(
        self,
        query: Optional[Dict[str, Any]] = None,
        skip: int = 0,
        limit: int = 20,
        sort: Optional[List[tuple]] = None,
    ) -> List[Dict[str, Any]]:
        """Get documents matching a filter with pagination"""
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(max(skip, 0)).limit(max(limit, 1))
        return [self.from_document(doc) for doc in cursor]

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    def insert(self, entity: Dict[str, Any]) -> str:
        """Insert a new document, returning its id"""
        result = self.collection.insert_one(self.to_document(entity))
        return str(result.inserted_id)

    def delete(self, entity_id: Any) -> bool:
        """Delete document by id"""
        flt = self.id_filter(entity_id)
        if flt is None:
            return False
        return self.collection.delete_one(flt).deleted_count == 1
