from fastapi import APIRouter, Depends, HTTPException, Query

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import get_tracker, require_api_client, to_http_exception
from portal.core.session import RequestTracker
from portal.models.marks_schemas import (
    ClassStatistics,
    DuplicateCheckResponse,
    GradeRequest,
    GradeResponse,
    MarksListRequest,
    MarksSubmission,
    MarkUpdate,
    PerformanceTrend,
)
from portal.services import internal_marks_service
from portal.services.grading import (
    calculate_grade,
    calculate_percentage,
    class_statistics,
    format_marks_for_display,
    performance_trend,
)
from portal.services.validation import validate_marks_data

router = APIRouter(prefix="/marks", tags=["Internal Marks"])


@router.post("/validate")
def validate_marks(req: MarksSubmission):
    """Run every local check on a marks submission without sending it."""
    return validate_marks_data(req.model_dump(exclude_none=True)).to_dict()


@router.post("/grade", response_model=GradeResponse)
def grade(req: GradeRequest):
    try:
        return GradeResponse(
            percentage=calculate_percentage(req.obtainedMarks, req.maxMarks),
            grade=calculate_grade(req.obtainedMarks, req.maxMarks),
        )
    except PortalError as e:
        raise to_http_exception(e)


@router.post("/format")
def format_marks(req: MarksListRequest):
    try:
        return {"marks": format_marks_for_display(req.marks)}
    except PortalError as e:
        raise to_http_exception(e)


@router.post("/statistics", response_model=ClassStatistics | None)
def statistics(req: MarksListRequest):
    try:
        return class_statistics(req.marks)
    except PortalError as e:
        raise to_http_exception(e)


@router.post("/trend", response_model=PerformanceTrend | None)
def trend(req: MarksListRequest):
    try:
        return performance_trend(req.marks)
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/subjects/{subject_id}")
def list_subject_marks(
    subject_id: str,
    division: str | None = Query(None),
    examType: str | None = Query(None),
    client: ApiClient = Depends(require_api_client),
    tracker: RequestTracker = Depends(get_tracker),
):
    """
    Marks of one subject with percentage, grade and display date filled in.
    A response overtaken by a newer request from the same caller is dropped (409).
    """
    try:
        result = internal_marks_service.load_subject_marks(
            client,
            tracker,
            subject_id,
            {"division": division, "examType": examType},
            key=f"marks:{client.session.access_token}",
        )
    except PortalError as e:
        raise to_http_exception(e)

    if result is None:
        raise HTTPException(status_code=409, detail="A newer request replaced this one.")
    return result


@router.post("/subjects/{subject_id}")
def submit_subject_marks(
    subject_id: str,
    req: MarksSubmission,
    client: ApiClient = Depends(require_api_client),
):
    """Validate locally, then forward the submission to the backend."""
    try:
        return internal_marks_service.submit_internal_marks(
            client, subject_id, req.model_dump(exclude_none=True)
        )
    except PortalError as e:
        raise to_http_exception(e)


@router.get("/subjects/{subject_id}/duplicate", response_model=DuplicateCheckResponse)
def duplicate_check(
    subject_id: str,
    division: str = Query(...),
    examType: str = Query(...),
    excludeMarkId: str | None = Query(None),
    client: ApiClient = Depends(require_api_client),
):
    duplicate = internal_marks_service.check_duplicate_exam_type(
        client, subject_id, division, examType, excludeMarkId
    )
    return DuplicateCheckResponse(duplicate=duplicate, division=division, examType=examType)


@router.put("/{mark_id}")
def update_mark(mark_id: str, req: MarkUpdate, client: ApiClient = Depends(require_api_client)):
    """
    Partial update of one mark. obtainedMarks > maxMarks is only caught here
    when both arrive in the same request. A one-sided change is left to the
    backend, whose mark model enforces obtainedMarks <= maxMarks.
    """
    updates = req.model_dump(mode="json", exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No changes supplied.")
    if "obtainedMarks" in updates and "maxMarks" in updates and updates["obtainedMarks"] > updates["maxMarks"]:
        raise HTTPException(status_code=400, detail="Obtained marks cannot exceed maximum marks")
    try:
        return internal_marks_service.update_internal_marks(client, mark_id, updates)
    except PortalError as e:
        raise to_http_exception(e)


@router.delete("/{mark_id}")
def delete_mark(mark_id: str, client: ApiClient = Depends(require_api_client)):
    try:
        return internal_marks_service.delete_internal_marks(client, mark_id)
    except PortalError as e:
        raise to_http_exception(e)
