from fastapi import APIRouter, Depends, Query

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import require_api_client, to_http_exception
from portal.models.user_schemas import ProfileUpdate
from portal.services import student_service

router = APIRouter(prefix="/student", tags=["Student"])


@router.get("/dashboard")
def dashboard(client: ApiClient = Depends(require_api_client)):
    try:
        return student_service.get_dashboard(client)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/profile")
def get_profile(client: ApiClient = Depends(require_api_client)):
    try:
        return student_service.get_profile(client)
    except PortalError as e:
        raise to_http_exception(e)


@router.put("/profile")
def update_profile(req: ProfileUpdate, client: ApiClient = Depends(require_api_client)):
    try:
        return student_service.update_profile(client, req.model_dump(exclude_none=True))
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/subjects")
def subjects(client: ApiClient = Depends(require_api_client)):
    try:
        return student_service.get_subjects(client)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/attendance")
def attendance(
    subjectId: str | None = Query(None),
    startDate: str | None = Query(None),
    endDate: str | None = Query(None),
    client: ApiClient = Depends(require_api_client),
):
    """The signed-in student's own attendance; empty filters are not sent."""
    filters = {"subjectId": subjectId, "startDate": startDate, "endDate": endDate}
    try:
        return student_service.get_attendance(client, filters)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/internal-marks")
def internal_marks(
    subjectId: str | None = Query(None),
    examType: str | None = Query(None),
    client: ApiClient = Depends(require_api_client),
):
    try:
        return student_service.get_internal_marks(client, {"subjectId": subjectId, "examType": examType})
    except PortalError as e:
        raise to_http_exception(e)
