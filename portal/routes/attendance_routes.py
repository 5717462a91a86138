from fastapi import APIRouter, Depends, Query

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import require_api_client, to_http_exception
from portal.models.attendance_schemas import (
    AttendanceRecordsRequest,
    AttendanceStats,
    AttendanceSubmission,
    StudentAttendanceStats,
)
from portal.services import teacher_service
from portal.services.attendance_stats import (
    calculate_attendance_stats,
    format_attendance_for_display,
    get_student_attendance_stats,
)
from portal.services.validation import validate_attendance_data

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/stats", response_model=AttendanceStats)
def attendance_stats(req: AttendanceRecordsRequest):
    return calculate_attendance_stats(req.records)


@router.post("/stats/student/{student_id}", response_model=StudentAttendanceStats)
def student_attendance_stats(student_id: str, req: AttendanceRecordsRequest):
    return get_student_attendance_stats(req.records, student_id)


@router.post("/format")
def format_attendance(req: AttendanceRecordsRequest):
    return {"records": format_attendance_for_display(req.records)}


@router.post("/validate")
def validate_attendance(req: AttendanceSubmission):
    return validate_attendance_data(req.model_dump(exclude_none=True)).to_dict()


@router.get("/subjects/{subject_id}")
def subject_attendance(
    subject_id: str,
    division: str | None = Query(None),
    date: str | None = Query(None),
    startDate: str | None = Query(None),
    endDate: str | None = Query(None),
    client: ApiClient = Depends(require_api_client),
):
    """
    Attendance history of a subject, formatted for display, with the summary
    statistics for the returned records.
    """
    params = {"division": division, "date": date, "startDate": startDate, "endDate": endDate}
    try:
        response = teacher_service.get_attendance(client, subject_id, params)
    except PortalError as e:
        raise to_http_exception(e)

    records = (response.get("attendance") or []) if isinstance(response, dict) else []
    return {
        "subjectId": subject_id,
        "records": format_attendance_for_display(records),
        "statistics": calculate_attendance_stats(records),
    }


@router.post("/subjects/{subject_id}")
def submit_attendance(
    subject_id: str,
    req: AttendanceSubmission,
    client: ApiClient = Depends(require_api_client),
):
    try:
        return teacher_service.mark_attendance(client, subject_id, req.model_dump(exclude_none=True))
    except PortalError as e:
        raise to_http_exception(e)
