from typing import List
from fastapi import APIRouter

from microdiary.api_service import schemas
from microdiary.api_service.core.settings import settings

router = APIRouter()

@router.get("/categories", response_model=List[schemas.Category])
async def list_categories():
    """Activity categories offered by the entry form."""
    return [schemas.Category(value=value, label=label) for value, label in settings.CATEGORIES.items()]

@router.get("/info")
async def system_info():
    return {
        "name": settings.PROJECT_NAME,
        "app_version": settings.APP_VERSION,
        "schema_version": settings.SCHEMA_VERSION,
        "client_id": settings.CLIENT_ID,
        "day_window": {"start": settings.DAY_START, "end": settings.DAY_END},
        "min_gap_minutes": settings.MIN_GAP_MINUTES,
    }
