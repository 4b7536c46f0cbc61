from fastapi import APIRouter

from tweeteroo.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    return {"ok": True, "service": settings.APP_NAME}
