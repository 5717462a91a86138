# portal/core/security.py
from __future__ import annotations

from fastapi import Header, HTTPException, Request, status

from portal.core.errors import ApiError, InvalidInput, PortalError, ValidationFailed
from portal.core.http_client import ApiClient
from portal.core.session import PortalSession, RequestTracker


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_api_client(authorization: str | None = Header(default=None)) -> ApiClient:
    """Backend client carrying the caller's own bearer token, if any."""
    return ApiClient(session=PortalSession(access_token=_bearer_token(authorization)))


def require_api_client(authorization: str | None = Header(default=None)) -> ApiClient:
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ApiClient(session=PortalSession(access_token=token))


def get_tracker(request: Request) -> RequestTracker:
    return request.app.state.tracker


def to_http_exception(error: PortalError) -> HTTPException:
    if isinstance(error, ValidationFailed):
        return HTTPException(
            status_code=422,
            detail={"isValid": False, "errors": error.errors},
        )
    if isinstance(error, InvalidInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, ApiError):
        # status 0 means the backend never answered
        return HTTPException(status_code=error.status or status.HTTP_502_BAD_GATEWAY, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
