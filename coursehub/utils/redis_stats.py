from typing import List, Tuple
from coursehub.config.database import get_redis_client


def record_purchase(course_id: str, amount: float):
    r = get_redis_client()
    # enrollment count and revenue per course
    r.zincrby("enrollments_by_course", 1, course_id)
    r.zincrby("earnings_by_course", float(amount), course_id)


def record_lecture_completion(course_id: str):
    r = get_redis_client()
    r.zincrby("lectures_completed_by_course", 1, course_id)


def _top(key: str, top: int) -> List[Tuple[str, float]]:
    r = get_redis_client()
    items = r.zrevrange(key, 0, top - 1, withscores=True)
    return [(k.decode("utf-8") if isinstance(k, bytes) else k, v) for k, v in items]


def top_courses_by_enrollments(top: int = 10) -> List[Tuple[str, float]]:
    return _top("enrollments_by_course", top)


def top_courses_by_earnings(top: int = 10) -> List[Tuple[str, float]]:
    return _top("earnings_by_course", top)


def course_stats(course_id: str) -> dict:
    r = get_redis_client()
    enrollments = r.zscore("enrollments_by_course", course_id) or 0
    earnings = r.zscore("earnings_by_course", course_id) or 0
    completions = r.zscore("lectures_completed_by_course", course_id) or 0
    return {
        "course_id": course_id,
        "enrollments": int(float(enrollments)),
        "earnings": round(float(earnings), 2),
        "lectures_completed": int(float(completions)),
    }
