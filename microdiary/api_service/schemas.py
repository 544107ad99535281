from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Any
import datetime as dt
import uuid

# Core value types are served as-is
from microdiary.logic.intervals import Gap
from microdiary.logic.validation import FieldError, ValidationResult


# Base schemas
class BaseSchema(BaseModel):
    """Base schema for all Pydantic models to inherit from."""
    model_config = ConfigDict(from_attributes=True)

# Entry schemas
class EntryFields(BaseSchema):
    """
    Raw form values as submitted. Everything is optional here so that the
    diary validator can report all problems at once instead of FastAPI
    rejecting the request on the first missing field.
    """
    activity: Optional[str] = Field(None, json_schema_extra={'example': "Morning run"})
    category: Optional[str] = Field(None, json_schema_extra={'example': "leisure"})
    start_time: Optional[str] = Field(None, json_schema_extra={'example': "07:00"})
    end_time: Optional[str] = Field(None, json_schema_extra={'example': "08:00"})
    notes: Optional[str] = None

    def form_values(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)

class EntryCreate(EntryFields):
    """Schema for logging a new activity."""
    date: dt.date

class EntryUpdate(EntryFields):
    """Schema for editing an entry. Omitted fields keep their stored value."""
    date: Optional[dt.date] = None

class Provenance(BaseSchema):
    """How and where the entry was created."""
    source: str = "manual-entry"
    client_id: str
    time_zone: str

class Entry(BaseSchema):
    """Schema for a diary entry as returned by the API."""
    id: uuid.UUID
    date: dt.date
    activity: str
    category: str
    start_time: str
    end_time: str
    notes: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    provenance: Provenance
    schema_version: str
    app_version: str

# Day schemas
class DayStats(BaseSchema):
    """Aggregate statistics for one day."""
    total_entries: int
    logged_minutes: int
    top_category: Optional[str] = None

class DayDataResponse(BaseSchema):
    """Entries of a day with the uncovered gaps between them."""
    date: dt.date
    entries: List[Entry]
    gaps: List[Gap]
    stats: DayStats

# Export schemas
class ExportEnvelope(BaseSchema):
    """Wraps all entries with metadata for research use."""
    exported_at: dt.datetime
    client_id: str
    schema_version: str
    app_version: str
    entries: List[Entry]

class Category(BaseSchema):
    value: str
    label: str
