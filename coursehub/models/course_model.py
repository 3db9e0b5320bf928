# coursehub/models/course_model.py
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LectureIn(BaseModel):
    lectureId: Optional[str] = None
    lectureTitle: str = Field(..., min_length=1)
    lectureDuration: float = Field(..., gt=0, description="Minutes")
    lectureUrl: str = ""
    isPreviewFree: bool = False
    lectureOrder: Optional[int] = None


class ChapterIn(BaseModel):
    chapterId: Optional[str] = None
    chapterTitle: str = Field(..., min_length=1)
    chapterOrder: Optional[int] = None
    chapterContent: List[LectureIn] = Field(default_factory=list)


class CourseIn(BaseModel):
    """Payload sent by an educator as the `courseData` form field."""

    model_config = ConfigDict(extra="ignore")

    courseTitle: str = Field(..., min_length=1)
    courseDescription: str = ""
    coursePrice: float = Field(..., ge=0)
    discount: float = Field(0, ge=0, le=100)
    isPublished: bool = True
    courseContent: List[ChapterIn] = Field(default_factory=list)

    def to_document(self, educator_id: str, thumbnail_url: str) -> Dict[str, Any]:
        """
        Builds the stored course document.
        Chapters and lectures without an explicit order get previous order + 1
        (1 when first); missing ids are generated.
        """
        chapters: List[Dict[str, Any]] = []
        prev_chapter_order = 0
        for ch in self.courseContent:
            chapter_order = ch.chapterOrder if ch.chapterOrder is not None else prev_chapter_order + 1
            prev_chapter_order = chapter_order

            lectures: List[Dict[str, Any]] = []
            prev_lecture_order = 0
            for lec in ch.chapterContent:
                lecture_order = lec.lectureOrder if lec.lectureOrder is not None else prev_lecture_order + 1
                prev_lecture_order = lecture_order
                lectures.append({
                    "lectureId": lec.lectureId or uuid.uuid4().hex,
                    "lectureTitle": lec.lectureTitle,
                    "lectureDuration": lec.lectureDuration,
                    "lectureUrl": lec.lectureUrl,
                    "isPreviewFree": lec.isPreviewFree,
                    "lectureOrder": lecture_order,
                })

            chapters.append({
                "chapterId": ch.chapterId or uuid.uuid4().hex,
                "chapterOrder": chapter_order,
                "chapterTitle": ch.chapterTitle,
                "chapterContent": lectures,
            })

        return {
            "courseTitle": self.courseTitle,
            "courseDescription": self.courseDescription,
            "coursePrice": self.coursePrice,
            "discount": self.discount,
            "isPublished": self.isPublished,
            "courseThumbnail": thumbnail_url,
            "educator": educator_id,
            "courseContent": chapters,
            "courseRatings": [],
            "enrolledStudents": [],
        }


class RatingIn(BaseModel):
    courseId: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
