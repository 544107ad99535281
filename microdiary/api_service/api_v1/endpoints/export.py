from datetime import date
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from microdiary.api_service import schemas
from microdiary.api_service.core.database import get_db
from microdiary.api_service.api_v1.endpoints.entries import get_all_entries
from microdiary.export.csv_export import build_csv_export, export_filename
from microdiary.export.json_export import build_json_export

router = APIRouter()

async def load_export_entries(db: AsyncSession) -> list[schemas.Entry]:
    return [schemas.Entry.model_validate(e) for e in await get_all_entries(db)]

@router.get("/json", response_model=schemas.ExportEnvelope)
async def export_json(
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Every entry, wrapped in an envelope with client and version metadata."""
    envelope = build_json_export(await load_export_entries(db))
    response.headers["Content-Disposition"] = f'attachment; filename="{export_filename("json", date.today())}"'
    return envelope

@router.get("/csv")
async def export_csv(db: AsyncSession = Depends(get_db)):
    """Every entry as a CSV attachment."""
    csv_text = build_csv_export(await load_export_entries(db))
    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename("csv", date.today())}"'},
    )
