from fastapi import APIRouter, Depends, HTTPException, Query, status

from portal.core.errors import PortalError
from portal.core.http_client import ApiClient
from portal.core.security import get_api_client, require_api_client, to_http_exception
from portal.models.user_schemas import LoginRequest, MessageResponse, RoleEnum, Token
from portal.services import admin_service, student_service, teacher_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
def login(req: LoginRequest, client: ApiClient = Depends(get_api_client)):
    """
    Sign in against the backend for the given role and hand the tokens back
    to the caller, who sends the access token as a Bearer header afterwards.
    """
    credentials = {"email": req.email, "password": req.password}
    try:
        if req.role == RoleEnum.admin:
            admin_service.login_admin(client, req.email, req.password)
        elif req.role == RoleEnum.student:
            student_service.login_student(client, credentials)
        else:
            teacher_service.login_teacher(client, credentials)
    except PortalError as e:
        raise to_http_exception(e)

    if not client.session.access_token:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Login succeeded but the server returned no access token",
        )

    return Token(
        access_token=client.session.access_token,
        refresh_token=client.session.refresh_token,
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    role: RoleEnum = Query(RoleEnum.teacher),
    client: ApiClient = Depends(require_api_client),
):
    try:
        if role == RoleEnum.student:
            student_service.logout_student(client)
        elif role == RoleEnum.teacher:
            teacher_service.logout_teacher(client)
        # admin tokens are simply dropped by the caller
    except PortalError as e:
        raise to_http_exception(e)
    return MessageResponse(status="success", detail="Logged out")
