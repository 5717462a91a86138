# portal/services/internal_marks_service.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from portal.core.errors import ValidationFailed
from portal.core.http_client import ApiClient
from portal.core.logger import get_logger
from portal.core.session import RequestTracker
from portal.services.grading import class_statistics, format_marks_for_display
from portal.services.validation import validate_marks_data

logger = get_logger("internal_marks")


def add_internal_marks(client: ApiClient, subject_id: str, marks_data: Dict[str, Any]) -> Any:
    return client.post(f"/teacher/subjects/{subject_id}/internal-marks", json=marks_data)


def get_internal_marks(client: ApiClient, subject_id: str, params: Optional[Dict[str, Any]] = None) -> Any:
    return client.get(f"/teacher/subjects/{subject_id}/internal-marks", params=params or {})


def update_internal_marks(client: ApiClient, mark_id: str, marks_data: Dict[str, Any]) -> Any:
    return client.put(f"/teacher/internal-marks/{mark_id}", json=marks_data)


def delete_internal_marks(client: ApiClient, mark_id: str) -> Any:
    return client.delete(f"/teacher/internal-marks/{mark_id}")


def get_student_performance_summary(client: ApiClient, subject_id: str, params: Optional[Dict[str, Any]] = None) -> Any:
    return client.get(f"/teacher/subjects/{subject_id}/student-performance", params=params or {})


def submit_internal_marks(client: ApiClient, subject_id: str, marks_data: Dict[str, Any]) -> Any:
    """
    Validate a marks submission locally and post it.
    Raises ValidationFailed with every problem found; nothing is sent in that case.
    """
    result = validate_marks_data(marks_data)
    if not result.is_valid:
        raise ValidationFailed(result.errors)
    return add_internal_marks(client, subject_id, marks_data)


def _marks_from(response: Any) -> List[Mapping[str, Any]]:
    marks = response.get("marks") if isinstance(response, Mapping) else None
    if not isinstance(marks, list):
        return []
    return [mark for mark in marks if isinstance(mark, Mapping)]


def check_duplicate_exam_type(
    client: ApiClient,
    subject_id: str,
    division: str,
    exam_type: str,
    exclude_mark_id: Optional[str] = None,
) -> bool:
    """
    True when marks for this division and exam type already exist for the subject.

    `exclude_mark_id` is the mark being edited, which never counts as its own
    duplicate. The answer only drives a warning banner, so any failure is
    logged and reported as "no duplicate".
    """
    try:
        response = get_internal_marks(client, subject_id, {"division": division, "examType": exam_type})
    except Exception as e:
        logger.error("Error checking duplicate exam type for subject %s: %s", subject_id, e)
        return False

    existing = _marks_from(response)
    if exclude_mark_id:
        return any(mark.get("_id") != exclude_mark_id for mark in existing)
    return len(existing) > 0


def load_subject_marks(
    client: ApiClient,
    tracker: RequestTracker,
    subject_id: str,
    params: Optional[Dict[str, Any]] = None,
    key: str = "marks",
) -> Optional[Dict[str, Any]]:
    """
    Fetch and format the marks of the currently selected subject.

    Returns None when another selection started after this one, so an older
    response never replaces a newer one.
    """
    token = tracker.begin(key)
    response = get_internal_marks(client, subject_id, params)

    marks = format_marks_for_display(_marks_from(response))
    statistics = response.get("statistics") if isinstance(response, dict) else None
    result = {
        "subjectId": subject_id,
        "marks": marks,
        "statistics": statistics or class_statistics(marks),
    }
    return tracker.apply_if_current(key, token, result)
