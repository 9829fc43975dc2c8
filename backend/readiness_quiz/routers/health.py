from fastapi import APIRouter

from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    return {
        "status": "running",
        "message": "Milestone 0 Assessment Backend",
        "version": "1.0",
        "api_key_configured": bool(settings.anthropic_api_key),
    }
