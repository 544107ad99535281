# microdiary/export/json_export.py

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from microdiary.api_service import schemas
from microdiary.api_service.core.settings import settings

log = logging.getLogger(__name__)

def build_json_export(
    entries: Iterable[schemas.Entry],
    exported_at: Optional[datetime] = None,
) -> schemas.ExportEnvelope:
    """Wrap entries in a validated export envelope."""
    envelope = schemas.ExportEnvelope.model_validate({
        "exported_at": exported_at or datetime.now(timezone.utc),
        "client_id": settings.CLIENT_ID,
        "schema_version": settings.SCHEMA_VERSION,
        "app_version": settings.APP_VERSION,
        "entries": list(entries),
    })
    log.info(f"Built JSON export with {len(envelope.entries)} entries")
    return envelope
