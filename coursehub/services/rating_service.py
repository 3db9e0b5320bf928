from typing import Any, Dict, Optional
from datetime import datetime

from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.user_repository import UserRepository


class RatingService:
    def __init__(self, courses: Optional[MongoRepository] = None, users: Optional[UserRepository] = None):
        self.courses = courses or MongoRepository("courses")
        self.users = users or UserRepository()

    def add_rating(self, user_id: str, course_id: str, rating: Any) -> Dict[str, Any]:
        if not course_id or not user_id or isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValueError("Invalid details")

        course = self.courses.find_one(course_id)
        if not course:
            raise ValueError("Course not found")
        course_id = course["_id"]

        user = self.users.find_by_id(user_id)
        if not user or course_id not in (user.get("enrolledCourses") or []):
            raise ValueError("You are not enrolled in this course")

        oid = self.courses.to_object_id(course_id)
        now = datetime.utcnow()
        # overwrite in place when this user already rated the course
        res = self.courses.col.update_one(
            {"_id": oid, "courseRatings.userId": user_id},
            {"$set": {"courseRatings.$.rating": rating, "updatedAt": now}},
        )
        if res.matched_count == 0:
            # guarded push: a concurrent first rating cannot produce a duplicate
            self.courses.col.update_one(
                {"_id": oid, "courseRatings.userId": {"$ne": user_id}},
                {"$push": {"courseRatings": {"userId": user_id, "rating": rating}}, "$set": {"updatedAt": now}},
            )
        return {"success": True, "message": "Rating added successfully"}

    def remove_user_ratings(self, user_id: str) -> int:
        res = self.courses.col.update_many(
            {"courseRatings.userId": user_id},
            {"$pull": {"courseRatings": {"userId": user_id}}},
        )
        return res.modified_count
