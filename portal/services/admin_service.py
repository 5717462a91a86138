# portal/services/admin_service.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from portal.core.http_client import ApiClient


def login_admin(client: ApiClient, email: str, password: str) -> Any:
    data = client.post("/admin/login", json={"email": email, "password": password})
    client.session.store_tokens(data)
    client.session.role = "admin"
    return data


# ---- Semesters ----

def get_semesters(client: ApiClient) -> Any:
    return client.get("/admin/semesters")


def add_semester(client: ApiClient, semester_number: int, divisions: Optional[List[str]] = None) -> Any:
    return client.post("/admin/semesters", json={"semesterNumber": semester_number, "divisions": divisions or []})


def update_semester(client: ApiClient, semester_id: str, updates: Dict[str, Any]) -> Any:
    return client.put(f"/admin/semesters/{semester_id}", json=updates)


def delete_semester(client: ApiClient, semester_id: str) -> Any:
    return client.delete(f"/admin/semesters/{semester_id}")


def add_division(client: ApiClient, semester_number: int, division: str) -> Any:
    return client.patch(f"/admin/semesters/{semester_number}/addDivision", json={"division": division})


def remove_division(client: ApiClient, semester_number: int, division: str) -> Any:
    # backend route name is misspelled
    return client.patch(f"/admin/semesters/{semester_number}/deleteDivison", json={"division": division})


# ---- Subjects ----

def get_subjects_by_semester(client: ApiClient, semester_number: int) -> Any:
    return client.get(f"/admin/semesters/{semester_number}/subjects")


def add_subject(client: ApiClient, semester_number: int, subject_data: Dict[str, Any]) -> Any:
    return client.post(f"/admin/semesters/{semester_number}/subjects", json=subject_data)


def update_subject(client: ApiClient, subject_id: str, updates: Dict[str, Any]) -> Any:
    return client.put(f"/admin/subjects/{subject_id}", json=updates)


def delete_subject(client: ApiClient, subject_id: str) -> Any:
    return client.delete(f"/admin/subjects/{subject_id}")


def assign_subject_to_teacher(client: ApiClient, subject_id: str, teacher_id: str, division: str) -> Any:
    return client.post(
        f"/admin/subjects/{subject_id}/assign-teacher",
        json={"teacherId": teacher_id, "division": division},
    )


# ---- Teachers ----

def get_teachers(client: ApiClient) -> Any:
    return client.get("/admin/teachers")


def get_teacher(client: ApiClient, teacher_id: str) -> Any:
    return client.get(f"/admin/teacher/{teacher_id}")


def add_teacher(client: ApiClient, teacher_data: Dict[str, Any]) -> Any:
    return client.post("/admin/teacher", json=teacher_data)


def update_teacher(client: ApiClient, teacher_id: str, updates: Dict[str, Any]) -> Any:
    return client.put(f"/admin/teacher/{teacher_id}", json=updates)


def delete_teacher(client: ApiClient, teacher_id: str) -> Any:
    return client.delete(f"/admin/teacher/{teacher_id}")


# ---- Students ----

def get_students(client: ApiClient, params: Optional[Dict[str, Any]] = None) -> Any:
    return client.get("/admin/students", params=params)


def get_student(client: ApiClient, student_id: str) -> Any:
    return client.get(f"/admin/students/{student_id}")


def add_student(client: ApiClient, student_data: Dict[str, Any]) -> Any:
    return client.post("/admin/students", json=student_data)


def update_student(client: ApiClient, student_id: str, updates: Dict[str, Any]) -> Any:
    return client.put(f"/admin/students/{student_id}", json=updates)


def delete_student(client: ApiClient, student_id: str) -> Any:
    return client.delete(f"/admin/students/{student_id}")
