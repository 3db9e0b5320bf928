# coursehub/utils/course_stats.py
"""
Figures derived from a course document, shared by every projection so the
catalog, the detail page and the enrollment list agree on them.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List

CENT = Decimal("0.01")


def effective_price(price: Any, discount: Any) -> Decimal:
    """price - discount% of price, rounded half-up to 2 decimals."""
    p = Decimal(str(price or 0))
    d = Decimal(str(discount or 0))
    return (p - (d * p) / Decimal(100)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Any) -> str:
    return str(Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP))


def _lectures(chapter: Dict[str, Any]) -> List[Dict[str, Any]]:
    content = chapter.get("chapterContent")
    return content if isinstance(content, list) else []


def iter_lectures(course: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
    for chapter in course.get("courseContent") or []:
        yield from _lectures(chapter)


def lecture_ids(course: Dict[str, Any]) -> List[str]:
    return [lec.get("lectureId") for lec in iter_lectures(course) if lec.get("lectureId")]


def total_lectures(course: Dict[str, Any]) -> int:
    return sum(len(_lectures(ch)) for ch in course.get("courseContent") or [])


def chapter_duration(chapter: Dict[str, Any]) -> float:
    return sum(lec.get("lectureDuration") or 0 for lec in _lectures(chapter))


def course_duration(course: Dict[str, Any]) -> float:
    return sum(chapter_duration(ch) for ch in course.get("courseContent") or [])


def average_rating(course: Dict[str, Any]) -> int:
    ratings = course.get("courseRatings") or []
    if not ratings:
        return 0
    return math.floor(sum(r.get("rating", 0) for r in ratings) / len(ratings))


def progress_percent(completed: int, total: int) -> int:
    if total == 0:
        return 0
    # half-up, matching what the student dashboard displays
    return int(Decimal(completed * 100) / Decimal(total) + Decimal("0.5"))


def sort_content(chapters: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Orders chapters and lectures by their stored order value (gaps allowed)."""
    ordered = sorted(chapters, key=lambda c: c.get("chapterOrder") or 0)
    for chapter in ordered:
        chapter["chapterContent"] = sorted(_lectures(chapter), key=lambda l: l.get("lectureOrder") or 0)
    return ordered
