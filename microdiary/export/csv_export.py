# microdiary/export/csv_export.py

import io
import logging
from datetime import date
from typing import Iterable, List

import polars as pl

from microdiary.api_service import schemas

log = logging.getLogger(__name__)

CSV_COLUMNS: List[str] = [
    "id",
    "date",
    "activity",
    "category",
    "start_time",
    "end_time",
    "notes",
    "created_at",
    "updated_at",
    "provenance.source",
    "provenance.client_id",
    "provenance.time_zone",
    "schema_version",
    "app_version",
]

def _entry_row(entry: schemas.Entry) -> List[str]:
    return [
        str(entry.id),
        entry.date.isoformat(),
        entry.activity,
        entry.category,
        entry.start_time,
        entry.end_time,
        entry.notes or "",
        entry.created_at.isoformat(),
        entry.updated_at.isoformat(),
        entry.provenance.source,
        entry.provenance.client_id,
        entry.provenance.time_zone,
        entry.schema_version,
        entry.app_version,
    ]

def build_csv_export(entries: Iterable[schemas.Entry], include_bom: bool = True) -> str:
    """
    Build an RFC 4180 CSV document (CRLF line endings) from diary entries.

    A UTF-8 BOM is prepended by default so spreadsheet tools detect the encoding.
    """
    rows = [_entry_row(e) for e in entries]
    df = pl.DataFrame(rows, schema={col: pl.Utf8 for col in CSV_COLUMNS}, orient="row")
    buffer = io.BytesIO()
    df.write_csv(buffer, include_bom=include_bom, line_terminator="\r\n", quote_style="necessary")
    log.info(f"Built CSV export with {df.height} entries")
    return buffer.getvalue().decode("utf-8")

def export_filename(extension: str, on: date) -> str:
    return f"microdiary-{on.isoformat()}.{extension}"
