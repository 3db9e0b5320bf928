from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo.database import Database

from coursehub.config.database import get_mongo_db

# Fields safe to attach to public projections (catalog, dashboards)
PUBLIC_FIELDS = {"_id": 1, "name": 1, "imageUrl": 1}


class UserRepository:
    """Users are keyed by the identity provider's opaque id, stored as a plain string _id."""

    def __init__(self, db: Optional[Database] = None):
        db = db if db is not None else get_mongo_db()
        self.collection = db["users"]

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": user_id})

    def find_public(self, user_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        docs = self.collection.find({"_id": {"$in": list(set(user_ids))}}, PUBLIC_FIELDS)
        return {d["_id"]: d for d in docs}

    def exists(self, user_id: str) -> bool:
        return self.collection.find_one({"_id": user_id}, {"_id": 1}) is not None

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.utcnow()
        doc = {
            "enrolledCourses": [],
            "role": "student",
            "createdAt": now,
            "updatedAt": now,
            **data,
        }
        self.collection.insert_one(doc)
        return doc

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> int:
        updates = dict(updates)
        updates["updatedAt"] = datetime.utcnow()
        return self.collection.update_one({"_id": user_id}, {"$set": updates}).matched_count

    def add_enrolled_course(self, user_id: str, course_id: str) -> int:
        res = self.collection.update_one(
            {"_id": user_id},
            {"$addToSet": {"enrolledCourses": course_id}, "$set": {"updatedAt": datetime.utcnow()}},
        )
        return res.modified_count

    def set_role(self, user_id: str, role: str) -> int:
        return self.update_profile(user_id, {"role": role})

    def delete(self, user_id: str) -> int:
        return self.collection.delete_one({"_id": user_id}).deleted_count
