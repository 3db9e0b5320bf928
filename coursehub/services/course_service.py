# coursehub/services/course_service.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.user_repository import UserRepository
from coursehub.utils import course_stats


class CourseService:
    def __init__(self, repo: Optional[MongoRepository] = None, users: Optional[UserRepository] = None) -> None:
        self.repo = repo or MongoRepository("courses")
        self.users = users or UserRepository()
        try:
            self.repo.col.create_index("educator")
            self.repo.col.create_index("isPublished")
        except Exception:
            pass

    # -------------------- internal helpers --------------------
    def _attach_educators(self, courses: List[Dict[str, Any]]) -> None:
        educators = self.users.find_public([c.get("educator") for c in courses if c.get("educator")])
        for c in courses:
            c["educator"] = educators.get(c.get("educator"))

    @staticmethod
    def _derived(course: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "totalLectures": course_stats.total_lectures(course),
            "totalDuration": course_stats.course_duration(course),
            "averageRating": course_stats.average_rating(course),
            "effectivePrice": str(course_stats.effective_price(course.get("coursePrice"), course.get("discount"))),
        }

    # -------------------- API --------------------
    def list_published(self, q: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Public catalog. Each entry carries a lecture count instead of the
        chapter tree, and never the enrolled-student list.
        """
        query: Dict[str, Any] = {"isPublished": True}
        if q:
            query["courseTitle"] = {"$regex": re.escape(q), "$options": "i"}

        out: List[Dict[str, Any]] = []
        for course in self.repo.find(query, sort=[("createdAt", -1)]):
            course.update(self._derived(course))
            course.pop("courseContent", None)
            course.pop("enrolledStudents", None)
            out.append(course)

        self._attach_educators(out)
        return out

    def get_by_id(self, course_id: str) -> Dict[str, Any]:
        """
        Full course detail. Lecture URLs that are not free previews are blanked
        in the response only; the stored document is left untouched.
        """
        course = self.repo.find_one(course_id)
        if not course:
            raise ValueError("Course not found")

        course["courseContent"] = course_stats.sort_content(course.get("courseContent") or [])
        for chapter in course["courseContent"]:
            chapter["chapterDuration"] = course_stats.chapter_duration(chapter)
            for lecture in chapter["chapterContent"]:
                if not lecture.get("isPreviewFree"):
                    lecture["lectureUrl"] = ""

        course.update(self._derived(course))
        course.pop("enrolledStudents", None)
        self._attach_educators([course])
        return course

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return self.repo.create(document)

    def list_by_educator(self, educator_id: str) -> List[Dict[str, Any]]:
        return self.repo.find({"educator": educator_id}, sort=[("createdAt", -1)])
