from fastapi import APIRouter

from ..config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "environment": get_settings().ENVIRONMENT}
