# portal/services/teacher_service.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from portal.core.errors import ValidationFailed, handle_api_error
from portal.core.http_client import ApiClient
from portal.core.logger import get_logger
from portal.services.validation import (
    validate_attendance_data,
    validate_password_data,
    validate_profile_data,
)

logger = get_logger("teacher")


# ---- Authentication ----

def login_teacher(client: ApiClient, credentials: Dict[str, Any]) -> Any:
    data = client.post("/teacher/login", json=credentials)
    client.session.store_tokens(data)
    client.session.role = "teacher"
    return data


def logout_teacher(client: ApiClient) -> Any:
    try:
        return client.post("/teacher/logout")
    finally:
        client.session.clear()


# ---- Profile ----

def get_teacher_profile(client: ApiClient) -> Any:
    return client.get("/teacher/profile")


def update_teacher_profile(client: ApiClient, profile_data: Dict[str, Any]) -> Any:
    result = validate_profile_data(profile_data)
    if not result.is_valid:
        raise ValidationFailed(result.errors)
    return client.put("/teacher/profile", json=profile_data)


def change_teacher_password(client: ApiClient, password_data: Dict[str, Any]) -> Any:
    result = validate_password_data(password_data)
    if not result.is_valid:
        raise ValidationFailed(result.errors)
    # confirmation only matters locally
    body = {
        "currentPassword": password_data.get("currentPassword"),
        "newPassword": password_data.get("newPassword"),
    }
    return client.post("/teacher/change-password", json=body)


# ---- Subjects & students ----

def get_assigned_subjects(client: ApiClient) -> Any:
    return client.get("/teacher/assigned-subjects")


def get_students_for_attendance(client: ApiClient, subject_id: str, division: str) -> Any:
    return client.get(f"/teacher/subjects/{subject_id}/students", params={"division": division})


def get_students_for_marks(client: ApiClient, subject_id: str, division: str) -> Any:
    return client.get(f"/teacher/subjects/{subject_id}/students", params={"division": division})


# ---- Attendance ----

def mark_attendance(client: ApiClient, subject_id: str, attendance_data: Dict[str, Any]) -> Any:
    result = validate_attendance_data(attendance_data)
    if not result.is_valid:
        raise ValidationFailed(result.errors)
    return client.post(f"/teacher/subjects/{subject_id}/attendance", json=attendance_data)


def get_attendance(client: ApiClient, subject_id: str, params: Optional[Dict[str, Any]] = None) -> Any:
    return client.get(f"/teacher/subjects/{subject_id}/attendance", params=params or {})


def get_attendance_by_date(client: ApiClient, subject_id: str, date: str, division: Optional[str] = None) -> Any:
    return get_attendance(client, subject_id, {"date": date, "division": division})


def get_attendance_by_date_range(
    client: ApiClient,
    subject_id: str,
    start_date: str,
    end_date: str,
    division: Optional[str] = None,
) -> Any:
    return get_attendance(client, subject_id, {"startDate": start_date, "endDate": end_date, "division": division})


def get_attendance_by_division(client: ApiClient, subject_id: str, division: str) -> Any:
    return get_attendance(client, subject_id, {"division": division})


def mark_multiple_attendance(client: ApiClient, attendance_batch: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Submit attendance for several subjects at once.

    Each item is {"subjectId": ..., "attendanceData": {...}}. The calls run
    concurrently; the first failure is raised as an ApiError and the batch
    is reported as failed.
    """
    if not attendance_batch:
        return {"success": True, "results": [], "message": "No attendance records to mark"}

    workers = max(1, min(client.settings.BATCH_WORKERS, len(attendance_batch)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(mark_attendance, client, item["subjectId"], item["attendanceData"])
            for item in attendance_batch
        ]
        try:
            results = [f.result() for f in futures]
        except ValidationFailed:
            raise
        except Exception as e:
            logger.warning("Batch attendance failed: %s", e)
            raise handle_api_error(e) from e

    return {
        "success": True,
        "results": results,
        "message": "All attendance records marked successfully",
    }
