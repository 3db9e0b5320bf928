# user_routes.py
import logging

from fastapi import APIRouter, Depends, Request

from coursehub.api.dependencies import require_user
from coursehub.models.course_model import RatingIn
from coursehub.models.progress_model import ProgressIn
from coursehub.models.purchase_model import PurchaseIn
from coursehub.services.enrollment_service import EnrollmentService
from coursehub.services.progress_service import ProgressService
from coursehub.services.rating_service import RatingService

router = APIRouter(prefix="/user", tags=["users"])
enrollment_svc = EnrollmentService()
progress_svc = ProgressService()
rating_svc = RatingService()


def _fail(e: Exception, context: str):
    if not isinstance(e, ValueError):
        logging.error(f"[{context}] {e}")
    return {"success": False, "message": str(e)}


@router.get("/data")
def get_user_data(user_id: str = Depends(require_user)):
    try:
        return {"success": True, "user": enrollment_svc.get_user_data(user_id)}
    except Exception as e:
        return _fail(e, "user.data")


@router.get("/enrolled-courses")
def enrolled_courses(user_id: str = Depends(require_user)):
    try:
        return {"success": True, "enrolledCourses": enrollment_svc.enrolled_courses(user_id)}
    except Exception as e:
        return _fail(e, "user.enrolled-courses")


@router.post("/purchase")
def purchase_course(body: PurchaseIn, request: Request, user_id: str = Depends(require_user)):
    origin = request.headers.get("origin", "")
    logging.info(f"Purchase request received: user={user_id} course={body.courseId}")
    try:
        return enrollment_svc.purchase(user_id, body.courseId, origin)
    except Exception as e:
        return _fail(e, "user.purchase")


@router.post("/update-course-progress")
def update_course_progress(body: ProgressIn, user_id: str = Depends(require_user)):
    try:
        return progress_svc.mark_lecture_complete(user_id, body.courseId, body.lectureId)
    except Exception as e:
        return _fail(e, "user.update-course-progress")


@router.get("/get-course-progress/{course_id}")
def get_course_progress(course_id: str, user_id: str = Depends(require_user)):
    try:
        return {"success": True, "progressData": progress_svc.get_progress(user_id, course_id)}
    except Exception as e:
        return _fail(e, "user.get-course-progress")


@router.post("/add-rating")
def add_rating(body: RatingIn, user_id: str = Depends(require_user)):
    try:
        return rating_svc.add_rating(user_id, body.courseId, body.rating)
    except Exception as e:
        return _fail(e, "user.add-rating")
