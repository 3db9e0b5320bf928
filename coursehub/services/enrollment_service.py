# coursehub/services/enrollment_service.py
from typing import Any, Dict, List, Optional
import logging

from coursehub.models.progress_model import ProgressSummary
from coursehub.models.purchase_model import PurchaseStatus
from coursehub.repositories.mongo_repository import MongoRepository
from coursehub.repositories.progress_repository import ProgressRepository
from coursehub.repositories.user_repository import UserRepository
from coursehub.services.payment_service import SimulatedPaymentGateway
from coursehub.utils import course_stats
from coursehub.utils.redis_stats import record_purchase


class EnrollmentService:
    def __init__(
        self,
        purchases: Optional[MongoRepository] = None,
        courses: Optional[MongoRepository] = None,
        users: Optional[UserRepository] = None,
        progress: Optional[ProgressRepository] = None,
        gateway: Optional[SimulatedPaymentGateway] = None,
    ):
        self.purchases = purchases or MongoRepository("purchases")
        self.courses = courses or MongoRepository("courses")
        self.users = users or UserRepository()
        self.progress = progress or ProgressRepository()
        self.gateway = gateway or SimulatedPaymentGateway()
        try:
            self.purchases.col.create_index([("courseId", 1), ("status", 1)])
            self.purchases.col.create_index("userId")
        except Exception:
            pass

    # -------------------- API --------------------

    def purchase(self, user_id: str, course_id: str, origin: str = "") -> Dict[str, Any]:
        """
        created -> completed: the user is enrolled only after the charge succeeds.
        created -> (deleted): a failed charge leaves no purchase record behind.
        """
        user = self.users.find_by_id(user_id)
        course = self.courses.find_one(course_id)
        if not user or not course:
            raise ValueError("Data not found")
        course_id = course["_id"]

        if course_id in (user.get("enrolledCourses") or []):
            raise ValueError("Already enrolled in this course")

        amount = course_stats.effective_price(course.get("coursePrice"), course.get("discount"))
        purchase = self.purchases.create({
            "courseId": course_id,
            "userId": user_id,
            "amount": float(amount),
            "status": PurchaseStatus.PENDING.value,
        })
        logging.info(f"[purchase] {purchase['_id']} created for user={user_id} course={course_id} amount={amount}")

        receipt = self.gateway.charge(purchase)

        if not receipt.success:
            self.purchases.delete(purchase["_id"])
            logging.info(f"[purchase] {purchase['_id']} payment failed, record removed")
            return {
                "success": False,
                "message": "Payment failed",
                "paymentDetails": receipt.model_dump(),
                "redirectUrl": f"{origin}/",
            }

        self.purchases.update(purchase["_id"], {"status": PurchaseStatus.COMPLETED.value})

        # No compensation if this write fails: the purchase stays completed.
        try:
            self.users.add_enrolled_course(user_id, course_id)
        except Exception as e:
            logging.error(f"[purchase] {purchase['_id']} completed but enrollment write failed: {e}")
            raise

        try:
            record_purchase(course_id, float(amount))
        except Exception as e:
            logging.warning(f"[purchase] stats skipped: {e}")

        return {
            "success": True,
            "message": "Course purchased successfully",
            "paymentDetails": receipt.model_dump(),
            "redirectUrl": f"{origin}/loading/my-enrollments",
        }

    def get_user_data(self, user_id: str) -> Dict[str, Any]:
        user = self.users.find_by_id(user_id)
        if not user:
            raise ValueError("User not found")
        return user

    def enrolled_courses(self, user_id: str) -> List[Dict[str, Any]]:
        """Enrolled courses, most recent first, each with the caller's progress summary."""
        user = self.get_user_data(user_id)
        course_ids = list(reversed(user.get("enrolledCourses") or []))
        by_id = {c["_id"]: c for c in self.courses.find_many_by_ids(course_ids)}

        out: List[Dict[str, Any]] = []
        for cid in course_ids:
            course = by_id.get(cid)
            if not course:
                continue
            total = course_stats.total_lectures(course)
            record = self.progress.find(user_id, cid)
            done = len(record.get("lectureCompleted") or []) if record else 0
            summary = ProgressSummary(
                lectureCompleted=done,
                totalLectures=total,
                percent=course_stats.progress_percent(done, total),
                completed=total > 0 and done >= total,
            )
            out.append({
                "_id": cid,
                "courseTitle": course.get("courseTitle"),
                "courseThumbnail": course.get("courseThumbnail"),
                "courseContent": course_stats.sort_content(course.get("courseContent") or []),
                "totalLectures": total,
                "totalDuration": course_stats.course_duration(course),
                "progress": summary.model_dump(),
            })
        return out
