from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from portal.models.constants import EXAM_TYPES


# members: internal_1, internal_2, internal_3, assignment, quiz, project
ExamType = Enum(
    "ExamType",
    {exam_type.lower().replace(" ", "_"): exam_type for exam_type in EXAM_TYPES},
    type=str,
)


class MarksSubmission(BaseModel):
    # Loose on purpose: validate_marks_data reports every problem at once
    model_config = ConfigDict(extra="allow")

    division: Optional[str] = None
    examType: Optional[str] = None
    maxMarks: Optional[float] = None
    examDate: Optional[str] = None
    remarks: Optional[str] = Field(default=None, max_length=500)
    marksData: Optional[List[Dict[str, Any]]] = None


class MarkUpdate(BaseModel):
    obtainedMarks: Optional[float] = Field(default=None, ge=0)
    maxMarks: Optional[float] = Field(default=None, gt=0)
    examType: Optional[ExamType] = None
    examDate: Optional[date] = None
    remarks: Optional[str] = Field(default=None, max_length=500)


class GradeRequest(BaseModel):
    obtainedMarks: float
    maxMarks: float


class GradeResponse(BaseModel):
    percentage: str
    grade: str


class MarksListRequest(BaseModel):
    marks: List[Dict[str, Any]]


class ClassStatistics(BaseModel):
    totalStudents: int
    averageMarks: str
    averagePercentage: str


class PerformanceTrend(BaseModel):
    trend: str
    difference: str | int


class DuplicateCheckResponse(BaseModel):
    duplicate: bool
    division: str
    examType: str
