from pydantic import BaseModel, Field


class ProgressIn(BaseModel):
    courseId: str = Field(..., min_length=1)
    lectureId: str = Field(..., min_length=1)


class ProgressSummary(BaseModel):
    lectureCompleted: int = 0
    totalLectures: int = 0
    percent: int = 0
    completed: bool = False

