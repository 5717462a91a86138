# portal/services/student_service.py
from __future__ import annotations

from typing import Any, Dict, Optional

from portal.core.http_client import ApiClient


def login_student(client: ApiClient, credentials: Dict[str, Any]) -> Any:
    data = client.post("/student/login", json=credentials)
    client.session.store_tokens(data)
    client.session.role = "student"
    return data


def logout_student(client: ApiClient) -> Any:
    try:
        return client.post("/student/logout")
    finally:
        client.session.clear()


def get_dashboard(client: ApiClient) -> Any:
    return client.get("/student/dashboard")


def get_profile(client: ApiClient) -> Any:
    return client.get("/student/profile")


def update_profile(client: ApiClient, profile_data: Dict[str, Any]) -> Any:
    return client.put("/student/profile", json=profile_data)


def get_subjects(client: ApiClient) -> Any:
    return client.get("/student/subjects")


def get_attendance(client: ApiClient, filters: Optional[Dict[str, Any]] = None) -> Any:
    """Own attendance, optionally narrowed by subjectId, startDate and endDate."""
    filters = filters or {}
    params = {key: filters.get(key) for key in ("subjectId", "startDate", "endDate")}
    return client.get("/student/attendance", params=params)


def get_internal_marks(client: ApiClient, filters: Optional[Dict[str, Any]] = None) -> Any:
    filters = filters or {}
    params = {key: filters.get(key) for key in ("subjectId", "examType")}
    return client.get("/student/internal-marks", params=params)
