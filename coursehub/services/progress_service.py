# coursehub/services/progress_service.py
from typing import Any, Dict, Optional
import logging

from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.progress_repository import ProgressRepository
from coursehub.utils import course_stats
from coursehub.utils.redis_stats import record_lecture_completion


class ProgressService:
    def __init__(self, repo: Optional[ProgressRepository] = None, courses: Optional[MongoRepository] = None):
        self.repo = repo or ProgressRepository()
        self.courses = courses or MongoRepository("courses")

    def mark_lecture_complete(self, user_id: str, course_id: str, lecture_id: str) -> Dict[str, Any]:
        course = self.courses.find_one(course_id)
        if not course:
            raise ValueError("Course not found")
        all_lectures = course_stats.lecture_ids(course)
        if lecture_id not in all_lectures:
            raise ValueError("Lecture not found in this course")

        record = self.repo.find_or_create(user_id, course_id)
        completed = record.get("lectureCompleted")
        if isinstance(completed, list) and lecture_id in completed:
            return {"success": True, "message": "Lecture already completed"}
        if not isinstance(completed, list):
            self.repo.set_fields(user_id, course_id, {"lectureCompleted": []})

        self.repo.add_lecture(user_id, course_id, lecture_id)

        record = self.repo.find(user_id, course_id) or {}
        done = set(record.get("lectureCompleted") or [])
        if not record.get("completed") and done.issuperset(all_lectures):
            self.repo.set_fields(user_id, course_id, {"completed": True})

        try:
            record_lecture_completion(course_id)
        except Exception as e:
            logging.warning(f"[progress] stats skipped: {e}")

        return {"success": True, "message": "Progress updated"}

    def get_progress(self, user_id: str, course_id: str) -> Dict[str, Any]:
        """Returns the progress record, creating an empty one on first access."""
        record = self.repo.find_or_create(user_id, course_id)
        if not isinstance(record.get("lectureCompleted"), list):
            logging.warning(f"[progress] malformed lectureCompleted for user={user_id} course={course_id}, reset")
            self.repo.set_fields(user_id, course_id, {"lectureCompleted": []})
            record["lectureCompleted"] = []
        return record
