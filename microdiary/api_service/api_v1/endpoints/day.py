from typing import Dict, List
from collections import Counter
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status, Path as FastAPIPath
from sqlalchemy.ext.asyncio import AsyncSession

from microdiary.api_service import schemas
from microdiary.api_service.core.database import get_db
from microdiary.api_service.core.settings import settings
from microdiary.api_service.api_v1.endpoints.entries import get_entries_for_date
from microdiary.logic.clock import parse_time
from microdiary.logic.intervals import find_gaps

router = APIRouter()

def parse_date_string(date_string: str) -> date:
    try:
        return date.fromisoformat(date_string)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Please use YYYY-MM-DD."
        )

def calculate_day_stats(entries: List[schemas.Entry]) -> schemas.DayStats:
    logged_minutes = 0
    category_minutes: Dict[str, int] = Counter()
    for entry in entries:
        minutes = max(0, parse_time(entry.end_time) - parse_time(entry.start_time))
        logged_minutes += minutes
        category_minutes[entry.category] += minutes
    top_category = max(category_minutes, key=lambda k: category_minutes[k]) if category_minutes else None
    return schemas.DayStats(
        total_entries=len(entries),
        logged_minutes=logged_minutes,
        top_category=top_category,
    )

@router.get("/{date_string}", response_model=schemas.DayDataResponse)
async def read_day_data(
    date_string: str = FastAPIPath(
        ...,
        description="Date in YYYY-MM-DD format.",
        pattern=r"^\d{4}-\d{2}-\d{2}$"
    ),
    db: AsyncSession = Depends(get_db),
):
    """Entries for one day, the uncovered gaps between them, and summary stats."""
    target_date = parse_date_string(date_string)
    entries = [schemas.Entry.model_validate(e) for e in await get_entries_for_date(db, target_date)]
    gaps = find_gaps(
        entries,
        day_start=settings.DAY_START,
        day_end=settings.DAY_END,
        min_gap_minutes=settings.MIN_GAP_MINUTES,
    )
    return schemas.DayDataResponse(
        date=target_date,
        entries=entries,
        gaps=gaps,
        stats=calculate_day_stats(entries),
    )
