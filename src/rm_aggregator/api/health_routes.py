from fastapi import APIRouter

from .models import HealthResponse
from ..config import settings

router = APIRouter(tags=["health"])

@router.get("/health", response_model=HealthResponse)
def health():
    return {"status": "ok", "upstream": str(settings.upstream_base_url)}
