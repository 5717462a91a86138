# portal/services/attendance_stats.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from portal.services.grading import format_display_date, parse_date, round_half_up

PRESENT = "present"
ABSENT = "absent"


def _round_whole(value: float) -> int:
    return int(round_half_up(value, places=0))


def _entries(record: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    return record.get("attendanceRecords") or []


def _status(entry: Mapping[str, Any]) -> Optional[str]:
    status = entry.get("status")
    return getattr(status, "value", status)


def _student_id(entry: Mapping[str, Any]) -> Optional[str]:
    # backend sends either the bare id or the populated student document
    student = entry.get("student", entry.get("studentId"))
    if isinstance(student, Mapping):
        return student.get("_id")
    return student


def calculate_attendance_stats(attendance_records: Optional[List[Mapping[str, Any]]]) -> Dict[str, Any]:
    """
    Summary over a list of class attendance records.

    overallAttendanceRate is present slots / all student slots, in percent
    with 2 decimals; totalStudents is the average class size.
    """
    if not attendance_records:
        return {
            "totalClasses": 0,
            "totalStudents": 0,
            "overallAttendanceRate": 0,
            "averageAttendance": 0,
        }

    total_classes = len(attendance_records)
    total_student_records = 0
    total_present_records = 0

    for record in attendance_records:
        entries = _entries(record)
        total_student_records += len(entries)
        total_present_records += sum(1 for e in entries if _status(e) == PRESENT)

    overall_rate = (total_present_records / total_student_records) * 100 if total_student_records > 0 else 0
    average_students_per_class = total_student_records / total_classes

    return {
        "totalClasses": total_classes,
        "totalStudents": _round_whole(average_students_per_class),
        "overallAttendanceRate": float(round_half_up(overall_rate)),
        "averageAttendance": float(round_half_up(overall_rate)),
        "totalPresentRecords": total_present_records,
        "totalStudentRecords": total_student_records,
    }


def get_student_attendance_stats(attendance_records: Optional[List[Mapping[str, Any]]], student_id: str) -> Dict[str, Any]:
    """Attendance of one student; classes the student was not listed in are ignored."""
    total_classes = 0
    classes_attended = 0

    for record in attendance_records or []:
        entry = next((e for e in _entries(record) if _student_id(e) == student_id), None)
        if entry is None:
            continue
        total_classes += 1
        if _status(entry) == PRESENT:
            classes_attended += 1

    percentage = (classes_attended / total_classes) * 100 if total_classes > 0 else 0

    return {
        "totalClasses": total_classes,
        "classesAttended": classes_attended,
        "attendancePercentage": float(round_half_up(percentage)),
    }


def format_attendance_for_display(attendance_records: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    formatted = []
    for record in attendance_records:
        entries = _entries(record)
        present = sum(1 for e in entries if _status(e) == PRESENT)
        absent = sum(1 for e in entries if _status(e) == ABSENT)
        total = len(entries)

        row = dict(record)
        row.update(
            formattedDate=format_display_date(record.get("date")),
            presentCount=present,
            absentCount=absent,
            totalStudents=total,
            attendancePercentage=_round_whole(present / total * 100) if total > 0 else 0,
        )
        formatted.append(row)
    return formatted


def session_summary(entries: List[Mapping[str, Any]]) -> Dict[str, int]:
    """Counts for an attendance sheet that is still being filled in."""
    present = sum(1 for e in entries if _status(e) == PRESENT)
    absent = sum(1 for e in entries if _status(e) == ABSENT)
    total = len(entries)
    return {
        "present": present,
        "absent": absent,
        "total": total,
        "percentage": _round_whole(present / total * 100) if total > 0 else 0,
    }


def _subject_info(subject: Mapping[str, Any]) -> Mapping[str, Any]:
    # assigned subjects nest the subject document under "subjectId"
    nested = subject.get("subjectId")
    return nested if isinstance(nested, Mapping) else subject


def recent_activity(
    records_by_subject: Mapping[str, List[Mapping[str, Any]]],
    subjects: List[Mapping[str, Any]],
    limit: int = 5,
) -> List[Dict[str, Any]]:
    """Newest attendance records across all subjects, tagged with subject name and code."""
    lookup = {_subject_info(s).get("_id"): _subject_info(s) for s in subjects}

    rows = []
    for subject_id, records in records_by_subject.items():
        info = lookup.get(subject_id, {})
        for record in records:
            row = dict(record)
            row["subjectName"] = info.get("subjectName") or "Unknown Subject"
            row["subjectCode"] = info.get("subjectCode") or "N/A"
            rows.append(row)

    rows.sort(key=lambda r: parse_date(r.get("date")) or date.min, reverse=True)
    return rows[:limit]
