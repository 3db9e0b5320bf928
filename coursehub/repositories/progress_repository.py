from datetime import datetime
from typing import Any, Dict, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from coursehub.config.database import get_mongo_db


class ProgressRepository:
    def __init__(self, db: Optional[Database] = None):
        db = db if db is not None else get_mongo_db()
        self.collection = db["courseprogresses"]
        try:
            # one record per (user, course); ignored if it already exists
            self.collection.create_index([("userId", 1), ("courseId", 1)], unique=True)
        except Exception:
            pass

    @staticmethod
    def _clean(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not doc:
            return None
        d = dict(doc)
        d["_id"] = str(d["_id"])
        return d

    def find(self, user_id: str, course_id: str) -> Optional[Dict[str, Any]]:
        return self._clean(self.collection.find_one({"userId": user_id, "courseId": course_id}))

    def find_or_create(self, user_id: str, course_id: str) -> Dict[str, Any]:
        found = self.find(user_id, course_id)
        if found:
            return found
        now = datetime.utcnow()
        try:
            self.collection.insert_one({
                "userId": user_id,
                "courseId": course_id,
                "lectureCompleted": [],
                "completed": False,
                "createdAt": now,
                "updatedAt": now,
            })
        except DuplicateKeyError:
            # a concurrent request created it first
            pass
        return self.find(user_id, course_id)

    def add_lecture(self, user_id: str, course_id: str, lecture_id: str) -> int:
        res = self.collection.update_one(
            {"userId": user_id, "courseId": course_id},
            {"$addToSet": {"lectureCompleted": lecture_id}, "$set": {"updatedAt": datetime.utcnow()}},
        )
        return res.modified_count

    def set_fields(self, user_id: str, course_id: str, updates: Dict[str, Any]) -> None:
        updates = dict(updates)
        updates["updatedAt"] = datetime.utcnow()
        self.collection.update_one({"userId": user_id, "courseId": course_id}, {"$set": updates})

    def delete_for_user(self, user_id: str) -> int:
        return self.collection.delete_many({"userId": user_id}).deleted_count
