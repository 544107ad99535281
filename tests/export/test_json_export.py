from datetime import datetime, timezone

from microdiary.api_service import schemas
from microdiary.api_service.core.settings import settings
from microdiary.export.json_export import build_json_export


def test_envelope_carries_metadata(make_db_entry):
    exported_at = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)
    entry = schemas.Entry.model_validate(make_db_entry())
    envelope = build_json_export([entry], exported_at=exported_at)
    assert envelope.exported_at == exported_at
    assert envelope.client_id == settings.CLIENT_ID
    assert envelope.schema_version == settings.SCHEMA_VERSION
    assert envelope.app_version == settings.APP_VERSION
    assert envelope.entries == [entry]

def test_envelope_serializes_nested_provenance(make_db_entry):
    envelope = build_json_export([schemas.Entry.model_validate(make_db_entry())])
    dumped = envelope.model_dump(mode="json")
    assert dumped["entries"][0]["provenance"] == {
        "source": "manual-entry",
        "client_id": "test-client",
        "time_zone": "Europe/London",
    }
