# portal/services/grading.py
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from portal.core.errors import InvalidInput
from portal.models.constants import FAIL_GRADE, GRADE_BANDS


def _to_number(value: Any, label: str) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{label} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{label} must be a number, got {value!r}")
    if math.isnan(number) or math.isinf(number):
        raise InvalidInput(f"{label} must be a finite number")
    return number


def _raw_percentage(obtained_marks: Any, max_marks: Any) -> float:
    maximum = _to_number(max_marks, "Maximum marks")
    if maximum <= 0:
        raise InvalidInput("Maximum marks must be greater than zero")
    obtained = _to_number(obtained_marks, "Obtained marks")
    return (obtained / maximum) * 100


def round_half_up(value: float, places: int = 2) -> Decimal:
    # ties go away from zero: 0.625 -> 0.63, where round() would give 0.62
    return Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def calculate_percentage(obtained_marks: Any, max_marks: Any) -> str:
    """Percentage of `max_marks` scored, as a 2-decimal string ("85.00")."""
    return str(round_half_up(_raw_percentage(obtained_marks, max_marks)))


def grade_for_percentage(percentage: float) -> str:
    for minimum, grade in GRADE_BANDS:
        if percentage >= minimum:
            return grade
    return FAIL_GRADE


def calculate_grade(obtained_marks: Any, max_marks: Any) -> str:
    return grade_for_percentage(_raw_percentage(obtained_marks, max_marks))


def parse_date(value: Any) -> Optional[date]:
    """Accepts a date, a datetime or an ISO string such as the backend's '2024-03-15T00:00:00.000Z'."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_display_date(value: Any) -> Optional[str]:
    # Indian short date: day/month/year without zero padding
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.day}/{parsed.month}/{parsed.year}"


def _as_dict(record: Any) -> Dict[str, Any]:
    if hasattr(record, "model_dump"):
        return record.model_dump()
    return dict(record)


def format_marks_for_display(marks: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Copy each mark with its derived `percentage`, `grade` and `formattedDate`.
    The derived fields only depend on obtainedMarks, maxMarks and examDate,
    so formatting an already formatted list gives the same values again.
    One row without usable maxMarks rejects the whole list with InvalidInput.
    """
    formatted = []
    for mark in marks:
        row = _as_dict(mark)
        row["percentage"] = calculate_percentage(row.get("obtainedMarks"), row.get("maxMarks"))
        row["grade"] = calculate_grade(row.get("obtainedMarks"), row.get("maxMarks"))
        row["formattedDate"] = format_display_date(row.get("examDate"))
        formatted.append(row)
    return formatted


def class_statistics(marks: List[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Class averages over a list of marks.

    averagePercentage is the mean of each mark's own percentage, so marks from
    exams with different maxMarks still give a value between 0 and 100.
    """
    if not marks:
        return None

    obtained = [_to_number(m.get("obtainedMarks"), "Obtained marks") for m in marks]
    percentages = [_raw_percentage(m.get("obtainedMarks"), m.get("maxMarks")) for m in marks]

    return {
        "totalStudents": len(marks),
        "averageMarks": str(round_half_up(sum(obtained) / len(obtained))),
        "averagePercentage": str(round_half_up(sum(percentages) / len(percentages))),
    }


def performance_trend(marks: List[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Compare the two most recent exams of a student.
    A change under one percentage point counts as stable.
    """
    if len(marks) < 2:
        return None

    ordered = sorted(marks, key=lambda m: parse_date(m.get("examDate")) or date.min)
    previous, latest = ordered[-2], ordered[-1]

    difference = _raw_percentage(latest.get("obtainedMarks"), latest.get("maxMarks")) - _raw_percentage(
        previous.get("obtainedMarks"), previous.get("maxMarks")
    )

    if abs(difference) < 1:
        return {"trend": "stable", "difference": 0}
    if difference > 0:
        return {"trend": "improving", "difference": str(round_half_up(difference))}
    return {"trend": "declining", "difference": str(round_half_up(abs(difference)))}
