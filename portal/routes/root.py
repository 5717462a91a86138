from __future__ import annotations

from fastapi import APIRouter

from portal.core.config import CONFIG

router = APIRouter()


@router.get("/")
def index() -> dict:
    return {
        "message": "College Portal API is running",
        "backend": CONFIG.API_URL,
        "docs": "/docs",
    }
