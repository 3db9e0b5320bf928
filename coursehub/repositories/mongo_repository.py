from coursehub.config.database import get_mongo_db
from typing import Any, Dict, List, Optional, Tuple, Union
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime
from pymongo.database import Database


class MongoRepository:
    def __init__(self, collection_name: str, db: Optional[Database] = None):
        # 🔗 Shared connection from config/database.py unless one is injected
        db = db if db is not None else get_mongo_db()
        self.col = db[collection_name]

    @staticmethod
    def _stringify_id(doc: Dict[str, Any]) -> Dict[str, Any]:
        if not doc:
            return doc
        if "_id" in doc and isinstance(doc["_id"], ObjectId):
            doc["_id"] = str(doc["_id"])
        return doc

    @staticmethod
    def to_object_id(_id: Union[str, ObjectId]) -> Optional[ObjectId]:
        """ObjectId for a 24-char hex string, None for anything malformed."""
        if isinstance(_id, ObjectId):
            return _id
        try:
            return ObjectId(_id)
        except (InvalidId, TypeError):
            return None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.utcnow()
        data.setdefault("createdAt", now)
        data.setdefault("updatedAt", now)

        res = self.col.insert_one(data)
        created = self.col.find_one({"_id": res.inserted_id})
        return self._stringify_id(created)

    def find_one(self, _id: str) -> Optional[Dict[str, Any]]:
        oid = self.to_object_id(_id)
        if oid is None:
            return None
        doc = self.col.find_one({"_id": oid})
        return self._stringify_id(doc) if doc else None

    def find(
        self,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: int = 0,
        projection: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        cursor = self.col.find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return [self._stringify_id(d) for d in cursor]

    def find_many_by_ids(self, ids: List[str]) -> List[Dict[str, Any]]:
        oids = [oid for oid in (self.to_object_id(i) for i in ids) if oid is not None]
        if not oids:
            return []
        return self.find({"_id": {"$in": oids}})

    def update(self, _id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        oid = self.to_object_id(_id)
        if oid is None:
            return None
        updates["updatedAt"] = datetime.utcnow()
        self.col.update_one({"_id": oid}, {"$set": updates})
        doc = self.col.find_one({"_id": oid})
        return self._stringify_id(doc)

    def delete(self, _id: str) -> int:
        oid = self.to_object_id(_id)
        if oid is None:
            return 0
        return self.col.delete_one({"_id": oid}).deleted_count

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [self._stringify_id(d) for d in self.col.aggregate(pipeline)]
