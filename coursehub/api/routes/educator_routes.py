# educator_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from coursehub.api.dependencies import require_educator, require_user
from coursehub.services.educator_service import EducatorService

router = APIRouter(prefix="/educator", tags=["educators"])
svc = EducatorService()


def _fail(e: Exception, context: str):
    if not isinstance(e, ValueError):
        logging.error(f"[{context}] {e}")
    return {"success": False, "message": str(e)}


@router.get("/update-role")
def update_role_to_educator(user_id: str = Depends(require_user)):
    try:
        return svc.update_role_to_educator(user_id)
    except Exception as e:
        return _fail(e, "educator.update-role")


@router.post("/add-course")
def add_course(
    courseData: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    educator_id: str = Depends(require_educator),
):
    try:
        thumbnail = image.file if image is not None else None
        filename = image.filename if image is not None else None
        return svc.add_course(educator_id, courseData, thumbnail, filename)
    except Exception as e:
        return _fail(e, "educator.add-course")


@router.get("/courses")
def educator_courses(educator_id: str = Depends(require_educator)):
    try:
        return {"success": True, "courses": svc.courses_with_stats(educator_id)}
    except Exception as e:
        return _fail(e, "educator.courses")


@router.get("/dashboard")
def dashboard(educator_id: str = Depends(require_educator)):
    try:
        return {"success": True, "dashboardData": svc.dashboard(educator_id)}
    except Exception as e:
        return _fail(e, "educator.dashboard")


@router.get("/enrolled-students")
def enrolled_students(educator_id: str = Depends(require_educator)):
    try:
        return {"success": True, "enrolledStudents": svc.enrolled_students(educator_id)}
    except Exception as e:
        return _fail(e, "educator.enrolled-students")
