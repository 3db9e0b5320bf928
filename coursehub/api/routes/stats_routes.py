from fastapi import APIRouter, HTTPException, Query
from coursehub.utils.redis_stats import (
    top_courses_by_enrollments,
    top_courses_by_earnings,
    course_stats,
)

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/top/courses")
def get_top_courses(top: int = Query(10, ge=1, le=100)):
    try:
        items = top_courses_by_enrollments(top)
        return {"top": top, "courses": [{"course_id": k, "enrollments": int(v)} for k, v in items]}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/top/earnings")
def get_top_earnings(top: int = Query(10, ge=1, le=100)):
    try:
        items = top_courses_by_earnings(top)
        return {"top": top, "courses": [{"course_id": k, "earnings": round(v, 2)} for k, v in items]}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/course/{course_id}")
def get_course_stats(course_id: str):
    """
    Counters for one course:
    - completed enrollments
    - earnings
    - lecture completions
    """
    try:
        return course_stats(course_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
