# portal/models/__init__.py

from .marks_schemas import ExamType, MarksSubmission, MarkUpdate
from .attendance_schemas import AttendanceSubmission

__all__ = [
    "ExamType",
    "MarksSubmission",
    "MarkUpdate",
    "AttendanceSubmission",
]
