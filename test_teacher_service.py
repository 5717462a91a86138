import pytest

from portal.core.errors import ApiError, ValidationFailed
from portal.services import admin_service, student_service, teacher_service


def _attendance(division="A"):
    return {"division": division, "attendanceData": [{"studentId": "s1", "status": "present"}]}


def test_login_stores_tokens(client, fake_http):
    client.session.clear()
    fake_http.add(
        "POST",
        "/teacher/login",
        {"message": "Login successful", "data": {"accessToken": "acc", "refreshToken": "ref"}},
    )

    teacher_service.login_teacher(client, {"email": "t@college.edu", "password": "pw"})
    assert client.session.access_token == "acc"
    assert client.session.refresh_token == "ref"
    assert client.session.role == "teacher"


def test_logout_clears_session_even_on_failure(client, fake_http):
    fake_http.add("POST", "/teacher/logout", {"message": "nope"}, status=500)

    with pytest.raises(ApiError):
        teacher_service.logout_teacher(client)
    assert client.session.access_token is None


def test_attendance_filters(client, fake_http):
    path = "/teacher/subjects/sub1/attendance"
    fake_http.add("GET", path, {"attendance": []})

    teacher_service.get_attendance_by_date(client, "sub1", "2024-03-01")
    teacher_service.get_attendance_by_date_range(client, "sub1", "2024-03-01", "2024-03-31", division="B")
    teacher_service.get_attendance_by_division(client, "sub1", "C")

    assert [c["params"] for c in fake_http.calls] == [
        {"date": "2024-03-01"},
        {"startDate": "2024-03-01", "endDate": "2024-03-31", "division": "B"},
        {"division": "C"},
    ]


def test_students_for_division(client, fake_http):
    fake_http.add("GET", "/teacher/subjects/sub1/students", {"students": [{"_id": "s1"}]})

    assert teacher_service.get_students_for_marks(client, "sub1", "A") == {"students": [{"_id": "s1"}]}
    assert fake_http.calls[0]["params"] == {"division": "A"}


def test_mark_attendance_validates_first(client, fake_http):
    with pytest.raises(ValidationFailed) as exc:
        teacher_service.mark_attendance(client, "sub1", {"division": "A", "attendanceData": []})
    assert exc.value.errors == ["At least one student attendance record is required"]
    assert fake_http.calls == []


def test_mark_multiple_attendance(client, fake_http):
    for subject in ("sub1", "sub2", "sub3"):
        fake_http.add("POST", f"/teacher/subjects/{subject}/attendance", {"subject": subject})

    batch = [{"subjectId": s, "attendanceData": _attendance()} for s in ("sub1", "sub2", "sub3")]
    outcome = teacher_service.mark_multiple_attendance(client, batch)

    assert outcome["success"] is True
    assert outcome["message"] == "All attendance records marked successfully"
    # results keep the order of the batch
    assert [r["subject"] for r in outcome["results"]] == ["sub1", "sub2", "sub3"]


def test_mark_multiple_attendance_failure_is_normalized(client, fake_http):
    fake_http.add("POST", "/teacher/subjects/sub1/attendance", {"subject": "sub1"})
    fake_http.add("POST", "/teacher/subjects/sub2/attendance", {"message": "Attendance already marked"}, status=409)

    batch = [{"subjectId": s, "attendanceData": _attendance()} for s in ("sub1", "sub2")]
    with pytest.raises(ApiError) as exc:
        teacher_service.mark_multiple_attendance(client, batch)
    assert exc.value.status == 409
    assert exc.value.message == "Attendance already marked"


def test_mark_multiple_attendance_empty_batch(client):
    assert teacher_service.mark_multiple_attendance(client, [])["results"] == []


def test_password_change_drops_confirmation(client, fake_http):
    fake_http.add("POST", "/teacher/change-password", {"message": "Password changed successfully"})

    teacher_service.change_teacher_password(
        client, {"currentPassword": "old-pass", "newPassword": "new-pass", "confirmPassword": "new-pass"}
    )
    assert fake_http.calls[0]["json"] == {"currentPassword": "old-pass", "newPassword": "new-pass"}

    with pytest.raises(ValidationFailed):
        teacher_service.change_teacher_password(client, {"currentPassword": "x", "newPassword": "short"})


def test_profile_update_validates_email(client, fake_http):
    with pytest.raises(ValidationFailed) as exc:
        teacher_service.update_teacher_profile(client, {"name": "Asha", "email": "not-an-email"})
    assert exc.value.errors == ["Invalid email format"]


def test_admin_paths(client, fake_http):
    fake_http.add("POST", "/admin/semesters", {"semester": {"semesterNumber": 3}}, status=201)
    fake_http.add("PATCH", "/admin/semesters/3/addDivision", {"message": "ok"})
    fake_http.add("POST", "/admin/subjects/sub9/assign-teacher", {"message": "assigned"})
    fake_http.add("GET", "/admin/students", {"students": []})

    admin_service.add_semester(client, 3, ["A", "B"])
    admin_service.add_division(client, 3, "C")
    admin_service.assign_subject_to_teacher(client, "sub9", "t1", "A")
    admin_service.get_students(client, {"semester": 3, "division": None})

    assert fake_http.calls[0]["json"] == {"semesterNumber": 3, "divisions": ["A", "B"]}
    assert fake_http.calls[1]["json"] == {"division": "C"}
    assert fake_http.calls[2]["json"] == {"teacherId": "t1", "division": "A"}
    assert fake_http.calls[3]["params"] == {"semester": 3}


def test_student_filters(client, fake_http):
    fake_http.add("GET", "/student/internal-marks", {"marks": []})

    student_service.get_internal_marks(client, {"subjectId": "sub1", "examType": "", "ignored": "x"})
    assert fake_http.calls[0]["params"] == {"subjectId": "sub1"}
