from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import uuid

from microdiary.api_service import schemas
from microdiary.api_service.core.database import get_db
from microdiary.api_service.core.models import ENTRY_SOURCE, DiaryEntry as DiaryEntryModel
from microdiary.api_service.core.settings import settings
from microdiary.logic.validation import validate_form_fields

router = APIRouter()
logger = logging.getLogger(__name__)

FORM_FIELDS = ("activity", "category", "start_time", "end_time", "notes")

# --- Async CRUD operations for diary entries ---
async def get_entries_for_date(db: AsyncSession, target_date: date) -> List[DiaryEntryModel]:
    result = await db.execute(
        select(DiaryEntryModel)
        .where(DiaryEntryModel.date == target_date)
        .order_by(DiaryEntryModel.start_time)
    )
    return list(result.scalars().all())

async def get_all_entries(db: AsyncSession) -> List[DiaryEntryModel]:
    result = await db.execute(
        select(DiaryEntryModel).order_by(DiaryEntryModel.date, DiaryEntryModel.start_time)
    )
    return list(result.scalars().all())

async def get_entry_by_id(db: AsyncSession, entry_id: uuid.UUID) -> DiaryEntryModel:
    entry = await db.get(DiaryEntryModel, entry_id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Diary entry not found"
        )
    return entry

def raise_if_invalid(result: schemas.ValidationResult) -> None:
    if not result.valid:
        logger.info(f"Rejected entry: {[e.field_id for e in result.errors]}")
        raise HTTPException(
            status_code=422,
            detail=result.model_dump()
        )

def stored_form_values(entry: DiaryEntryModel) -> Dict[str, Any]:
    return {name: getattr(entry, name) for name in FORM_FIELDS if getattr(entry, name) is not None}

@router.post("/validate", response_model=schemas.ValidationResult)
async def validate_entry(
    fields: schemas.EntryFields,
    entry_date: date = Query(..., description="Diary date the entry belongs to (YYYY-MM-DD)"),
    editing_id: Optional[uuid.UUID] = Query(None, description="Id of the entry being edited, if any"),
    db: AsyncSession = Depends(get_db),
):
    """Dry-run validation so the form can show every problem before saving."""
    date_entries = await get_entries_for_date(db, entry_date)
    return validate_form_fields(fields.form_values(), date_entries, editing_id)

@router.post("", response_model=schemas.Entry, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_in: schemas.EntryCreate,
    db: AsyncSession = Depends(get_db),
):
    date_entries = await get_entries_for_date(db, entry_in.date)
    values = entry_in.form_values()
    raise_if_invalid(validate_form_fields(values, date_entries))

    now = datetime.now(timezone.utc)
    db_entry = DiaryEntryModel(
        id=uuid.uuid4(),
        date=entry_in.date,
        activity=values["activity"],
        category=values["category"],
        start_time=values["start_time"],
        end_time=values["end_time"],
        notes=values.get("notes"),
        created_at=now,
        updated_at=now,
        source=ENTRY_SOURCE,
        client_id=settings.CLIENT_ID,
        time_zone=settings.LOCAL_TZ,
        schema_version=settings.SCHEMA_VERSION,
        app_version=settings.APP_VERSION,
    )
    db.add(db_entry)
    await db.commit()
    await db.refresh(db_entry)
    logger.info(f"Saved entry {db_entry.id} on {db_entry.date} ({db_entry.start_time}-{db_entry.end_time})")
    return schemas.Entry.model_validate(db_entry)

@router.get("", response_model=List[schemas.Entry])
async def list_entries(
    entry_date: Optional[date] = Query(None, description="Only entries on this date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
):
    if entry_date:
        entries = await get_entries_for_date(db, entry_date)
    else:
        entries = await get_all_entries(db)
    return [schemas.Entry.model_validate(entry) for entry in entries]

@router.get("/{entry_id}", response_model=schemas.Entry)
async def read_entry(
    entry_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    entry = await get_entry_by_id(db, entry_id)
    return schemas.Entry.model_validate(entry)

@router.put("/{entry_id}", response_model=schemas.Entry)
async def update_entry(
    entry_id: uuid.UUID,
    entry_update: schemas.EntryUpdate,
    db: AsyncSession = Depends(get_db),
):
    entry = await get_entry_by_id(db, entry_id)
    target_date = entry_update.date or entry.date

    values = stored_form_values(entry)
    values.update(entry_update.form_values())
    values.pop("date", None)

    date_entries = await get_entries_for_date(db, target_date)
    raise_if_invalid(validate_form_fields(values, date_entries, editing_id=entry.id))

    entry.date = target_date
    for name in FORM_FIELDS:
        setattr(entry, name, values.get(name))
    entry.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(entry)
    logger.info(f"Updated entry {entry.id}")
    return schemas.Entry.model_validate(entry)

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    entry = await get_entry_by_id(db, entry_id)
    await db.delete(entry)
    await db.commit()
    logger.info(f"Deleted entry {entry_id}")
