from fastapi import APIRouter, Depends, Query

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import require_api_client, to_http_exception
from portal.models.user_schemas import PasswordChange, ProfileUpdate
from portal.services import teacher_service
from portal.services.attendance_stats import recent_activity

router = APIRouter(prefix="/teacher", tags=["Teacher"])


@router.get("/profile")
def get_profile(client: ApiClient = Depends(require_api_client)):
    try:
        return teacher_service.get_teacher_profile(client)
    except PortalError as e:
        raise to_http_exception(e)


@router.put("/profile")
def update_profile(req: ProfileUpdate, client: ApiClient = Depends(require_api_client)):
    try:
        return teacher_service.update_teacher_profile(client, req.model_dump())
    except PortalError as e:
        raise to_http_exception(e)


@router.post("/change-password")
def change_password(req: PasswordChange, client: ApiClient = Depends(require_api_client)):
    try:
        return teacher_service.change_teacher_password(client, req.model_dump())
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/subjects")
def assigned_subjects(client: ApiClient = Depends(require_api_client)):
    try:
        return teacher_service.get_assigned_subjects(client)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/subjects/{subject_id}/students")
def subject_students(
    subject_id: str,
    division: str = Query(...),
    client: ApiClient = Depends(require_api_client),
):
    try:
        return teacher_service.get_students_for_attendance(client, subject_id, division)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/recent-attendance")
def recent_attendance(
    limit: int = Query(5, ge=1, le=50),
    client: ApiClient = Depends(require_api_client),
):
    """
    Latest attendance sessions across every subject assigned to the teacher.
    """
    try:
        subjects = teacher_service.get_assigned_subjects(client).get("assignedSubjects") or []
        by_subject = {}
        for subject in subjects:
            info = subject.get("subjectId")
            subject_id = info.get("_id") if isinstance(info, dict) else subject.get("_id")
            if not subject_id:
                continue
            response = teacher_service.get_attendance(client, subject_id)
            by_subject[subject_id] = response.get("attendance") or []
    except PortalError as e:
        raise to_http_exception(e)

    return {"records": recent_activity(by_subject, subjects, limit=limit)}
