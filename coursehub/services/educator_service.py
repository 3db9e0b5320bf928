# coursehub/services/educator_service.py
import json
import logging
from typing import Any, BinaryIO, Dict, List, Optional

from pydantic import ValidationError

from coursehub.models.course_model import CourseIn
from coursehub.models.purchase_model import PurchaseStatus
from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.user_repository import UserRepository
from coursehub.services.course_service import CourseService
from coursehub.utils import media

RECENT_ENROLLMENTS_LIMIT = 10


class EducatorService:
    def __init__(
        self,
        courses: Optional[CourseService] = None,
        purchases: Optional[MongoRepository] = None,
        users: Optional[UserRepository] = None,
    ):
        self.courses = courses or CourseService()
        self.purchases = purchases or MongoRepository("purchases")
        self.users = users or UserRepository()

    def _completed_query(self, course_ids: List[str]) -> Dict[str, Any]:
        return {"courseId": {"$in": course_ids}, "status": PurchaseStatus.COMPLETED.value}

    def _join_students(self, purchases: List[Dict[str, Any]], titles: Dict[str, str]) -> List[Dict[str, Any]]:
        students = self.users.find_public([p["userId"] for p in purchases])
        return [
            {
                "student": students.get(p["userId"]),
                "courseTitle": titles.get(p["courseId"]),
                "purchaseDate": p.get("createdAt"),
            }
            for p in purchases
        ]

    # -------------------- API --------------------

    def update_role_to_educator(self, user_id: str) -> Dict[str, Any]:
        if not self.users.set_role(user_id, "educator"):
            raise ValueError("User not found")
        return {"success": True, "message": "You can publish a course now"}

    def add_course(self, educator_id: str, course_data: Optional[str], thumbnail: Optional[BinaryIO], filename: Optional[str]) -> Dict[str, Any]:
        if thumbnail is None:
            raise ValueError("Thumbnail Not Attached")
        media.validate_image(filename)
        if not course_data:
            raise ValueError("Course data is required")

        try:
            course_in = CourseIn.model_validate(json.loads(course_data))
        except json.JSONDecodeError:
            raise ValueError("Course data is not valid JSON")
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(p) for p in first["loc"])
            raise ValueError(f"Invalid course data: {loc}: {first['msg']}")

        thumbnail_url = media.upload_thumbnail(thumbnail)
        created = self.courses.create(course_in.to_document(educator_id, thumbnail_url))
        logging.info(f"[educator] course {created['_id']} added by {educator_id}")
        return {"success": True, "message": "Course Added", "courseId": created["_id"]}

    def dashboard(self, educator_id: str) -> Dict[str, Any]:
        courses = self.courses.list_by_educator(educator_id)
        course_ids = [c["_id"] for c in courses]
        titles = {c["_id"]: c.get("courseTitle") for c in courses}

        totals = self.purchases.aggregate([
            {"$match": self._completed_query(course_ids)},
            {"$group": {"_id": None, "total": {"$sum": "$amount"}}},
        ])
        total_earnings = round(totals[0]["total"], 2) if totals else 0

        recent = self.purchases.find(
            self._completed_query(course_ids),
            sort=[("createdAt", -1)],
            limit=RECENT_ENROLLMENTS_LIMIT,
        )
        enrolled = [
            {"courseTitle": row["courseTitle"], "student": row["student"]}
            for row in self._join_students(recent, titles)
        ]

        return {
            "totalEarnings": total_earnings,
            "enrolledStudentsData": enrolled,
            "totalCourses": len(courses),
        }

    def courses_with_stats(self, educator_id: str) -> List[Dict[str, Any]]:
        courses = self.courses.list_by_educator(educator_id)
        stats = self.purchases.aggregate([
            {"$match": self._completed_query([c["_id"] for c in courses])},
            {"$group": {
                "_id": "$courseId",
                "totalEarnings": {"$sum": "$amount"},
                "enrollmentCount": {"$sum": 1},
            }},
        ])
        by_course = {s["_id"]: s for s in stats}

        for course in courses:
            s = by_course.get(course["_id"]) or {}
            course["purchaseStats"] = {
                "totalEarnings": round(s.get("totalEarnings", 0), 2),
                "enrollmentCount": s.get("enrollmentCount", 0),
            }
        return courses

    def enrolled_students(self, educator_id: str) -> List[Dict[str, Any]]:
        courses = self.courses.list_by_educator(educator_id)
        titles = {c["_id"]: c.get("courseTitle") for c in courses}
        purchases = self.purchases.find(self._completed_query(list(titles)), sort=[("createdAt", -1)])
        return self._join_students(purchases, titles)
