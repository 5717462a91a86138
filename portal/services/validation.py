# portal/services/validation.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from portal.models.constants import ATTENDANCE_STATUSES, EXAM_TYPES, MIN_PASSWORD_LENGTH

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}


def _payload(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if hasattr(data, "model_dump"):
        return data.model_dump()
    return data


def _number(value: Any) -> Optional[float]:
    """Numeric value of a form field, or None when it is not a number."""
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_marks_data(marks_data: Any) -> ValidationResult:
    """
    Check a marks submission before it is sent.

    Expected shape:
        {division, examType, maxMarks, examDate, remarks?,
         marksData: [{studentId, obtainedMarks}, ...]}

    Every problem is reported; record numbers in messages start at 1.
    """
    payload = _payload(marks_data)
    result = ValidationResult()
    errors = result.errors

    if _blank(payload.get("division")):
        errors.append("Division is required")

    exam_type = payload.get("examType")
    if _blank(exam_type):
        errors.append("Exam type is required")
    elif exam_type not in EXAM_TYPES:
        errors.append(f"Invalid exam type '{exam_type}'. Must be one of: {', '.join(EXAM_TYPES)}")

    max_marks = _number(payload.get("maxMarks"))
    if max_marks is None or max_marks <= 0:
        errors.append("Valid maximum marks are required")
        max_marks = None

    if _blank(payload.get("examDate")):
        errors.append("Exam date is required")

    entries = payload.get("marksData")
    if not isinstance(entries, list):
        errors.append("Marks data must be an array")
    elif not entries:
        errors.append("At least one student mark is required")
    else:
        for index, mark in enumerate(entries, start=1):
            if not isinstance(mark, Mapping):
                errors.append(f"Invalid mark entry for record {index}")
                continue
            if _blank(mark.get("studentId")):
                errors.append(f"Student ID is required for record {index}")

            raw = mark.get("obtainedMarks")
            if raw is None or raw == "":
                errors.append(f"Obtained marks are required for record {index}")
                continue
            obtained = _number(raw)
            if obtained is None:
                errors.append(f"Obtained marks must be a number for record {index}")
                continue
            if obtained < 0:
                errors.append(f"Obtained marks cannot be negative for record {index}")
            if max_marks is not None and obtained > max_marks:
                errors.append(f"Obtained marks cannot exceed maximum marks for record {index}")

    return result


def validate_attendance_data(attendance_data: Any) -> ValidationResult:
    payload = _payload(attendance_data)
    result = ValidationResult()
    errors = result.errors

    if _blank(payload.get("division")):
        errors.append("Division is required")

    entries = payload.get("attendanceData")
    if not isinstance(entries, list):
        errors.append("Attendance data must be an array")
    elif not entries:
        errors.append("At least one student attendance record is required")
    else:
        for index, record in enumerate(entries, start=1):
            if not isinstance(record, Mapping):
                errors.append(f"Invalid attendance entry for record {index}")
                continue
            if _blank(record.get("studentId")):
                errors.append(f"Student ID is required for record {index}")
            status = record.get("status")
            if hasattr(status, "value"):
                status = status.value
            if status not in ATTENDANCE_STATUSES:
                errors.append(f"Invalid status for record {index}. Must be 'present' or 'absent'")

    return result


def validate_profile_data(profile_data: Any) -> ValidationResult:
    payload = _payload(profile_data)
    result = ValidationResult()

    if _blank(payload.get("name")):
        result.errors.append("Name is required")

    email = payload.get("email")
    if _blank(email):
        result.errors.append("Email is required")
    elif not EMAIL_PATTERN.search(email):
        result.errors.append("Invalid email format")

    return result


def validate_password_data(password_data: Any) -> ValidationResult:
    payload = _payload(password_data)
    result = ValidationResult()

    if not payload.get("currentPassword"):
        result.errors.append("Current password is required")

    new_password = payload.get("newPassword")
    if not new_password:
        result.errors.append("New password is required")
    elif len(new_password) < MIN_PASSWORD_LENGTH:
        result.errors.append(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if new_password != payload.get("confirmPassword"):
        result.errors.append("New password and confirm password do not match")

    return result
