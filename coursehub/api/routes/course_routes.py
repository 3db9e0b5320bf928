# course_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Query
from coursehub.services.course_service import CourseService

router = APIRouter(prefix="/course", tags=["courses"])
svc = CourseService()


@router.get("/all")
def list_courses(q: Optional[str] = Query(None, max_length=100)):
    try:
        return {"success": True, "courses": svc.list_published(q)}
    except Exception as e:
        logging.error(f"Error fetching courses: {e}")
        return {"success": False, "message": str(e)}


@router.get("/{course_id}")
def get_course(course_id: str):
    try:
        return {"success": True, "courseData": svc.get_by_id(course_id)}
    except ValueError as ve:
        return {"success": False, "message": str(ve)}
    except Exception as e:
        logging.error(f"Error fetching course {course_id}: {e}")
        return {"success": False, "message": str(e)}
