from fastapi import APIRouter, Depends, Query

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import get_api_client, require_api_client, to_http_exception
from portal.models.academic_schemas import (
    AssignTeacherRequest,
    SemesterCreate,
    SemesterUpdate,
    StudentCreate,
    StudentUpdate,
    SubjectCreate,
    SubjectUpdate,
    TeacherCreate,
    TeacherUpdate,
)
from portal.services import admin_service

router = APIRouter(prefix="/admin", tags=["Admin"])


def _call(fn, *args):
    try:
        return fn(*args)
    except PortalError as e:
        raise to_http_exception(e)


# ---- Semesters ----

@router.get("/semesters")
def list_semesters(client: ApiClient = Depends(get_api_client)):
    return _call(admin_service.get_semesters, client)


@router.post("/semesters")
def create_semester(req: SemesterCreate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.add_semester, client, req.semesterNumber, req.divisions)


@router.put("/semesters/{semester_id}")
def edit_semester(semester_id: str, req: SemesterUpdate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.update_semester, client, semester_id, req.model_dump(exclude_none=True))


@router.delete("/semesters/{semester_id}")
def remove_semester(semester_id: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.delete_semester, client, semester_id)


@router.patch("/semesters/{semester_number}/divisions")
def add_division(
    semester_number: int,
    division: str = Query(...),
    client: ApiClient = Depends(require_api_client),
):
    return _call(admin_service.add_division, client, semester_number, division)


@router.delete("/semesters/{semester_number}/divisions/{division}")
def remove_division(semester_number: int, division: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.remove_division, client, semester_number, division)


# ---- Subjects ----

@router.get("/semesters/{semester_number}/subjects")
def list_subjects(semester_number: int, client: ApiClient = Depends(get_api_client)):
    return _call(admin_service.get_subjects_by_semester, client, semester_number)


@router.post("/semesters/{semester_number}/subjects")
def create_subject(semester_number: int, req: SubjectCreate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.add_subject, client, semester_number, req.model_dump(exclude_none=True))


@router.put("/subjects/{subject_id}")
def edit_subject(subject_id: str, req: SubjectUpdate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.update_subject, client, subject_id, req.model_dump(exclude_none=True))


@router.delete("/subjects/{subject_id}")
def remove_subject(subject_id: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.delete_subject, client, subject_id)


@router.post("/subjects/{subject_id}/assign-teacher")
def assign_teacher(subject_id: str, req: AssignTeacherRequest, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.assign_subject_to_teacher, client, subject_id, req.teacherId, req.division)


# ---- Teachers ----

@router.get("/teachers")
def list_teachers(client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.get_teachers, client)


@router.get("/teachers/{teacher_id}")
def read_teacher(teacher_id: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.get_teacher, client, teacher_id)


@router.post("/teachers")
def create_teacher(req: TeacherCreate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.add_teacher, client, req.model_dump(exclude_none=True))


@router.put("/teachers/{teacher_id}")
def edit_teacher(teacher_id: str, req: TeacherUpdate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.update_teacher, client, teacher_id, req.model_dump(exclude_none=True))


@router.delete("/teachers/{teacher_id}")
def remove_teacher(teacher_id: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.delete_teacher, client, teacher_id)


# ---- Students ----

@router.get("/students")
def list_students(
    semester: int | None = Query(None),
    division: str | None = Query(None),
    search: str | None = Query(None),
    client: ApiClient = Depends(get_api_client),
):
    params = {"semester": semester, "division": division, "search": search}
    return _call(admin_service.get_students, client, params)


@router.get("/students/{student_id}")
def read_student(student_id: str, client: ApiClient = Depends(get_api_client)):
    return _call(admin_service.get_student, client, student_id)


@router.post("/students")
def create_student(req: StudentCreate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.add_student, client, req.model_dump(exclude_none=True))


@router.put("/students/{student_id}")
def edit_student(student_id: str, req: StudentUpdate, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.update_student, client, student_id, req.model_dump(exclude_none=True))


@router.delete("/students/{student_id}")
def remove_student(student_id: str, client: ApiClient = Depends(require_api_client)):
    return _call(admin_service.delete_student, client, student_id)
