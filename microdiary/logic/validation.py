# microdiary/logic/validation.py

from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field

from microdiary.logic.clock import is_before
from microdiary.logic.intervals import Interval, overlaps

TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"

# Schema keys to the ids of the form inputs they are rendered in.
FIELD_ID_MAP: Dict[str, str] = {
    "activity": "activity",
    "category": "category",
    "start_time": "start-time",
    "end_time": "end-time",
    "notes": "notes",
}

FIELD_LABELS: Dict[str, str] = {
    "activity": "Activity",
    "category": "Category",
    "start_time": "Start time",
    "end_time": "End time",
    "notes": "Notes",
}


class FormFields(BaseModel):
    """Structural rules for the fields of a diary entry form."""
    model_config = ConfigDict(extra="ignore")

    activity: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1)
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    notes: Optional[str] = Field(None, max_length=2000)


class ExistingEntry(Protocol):
    id: Hashable
    activity: str
    start_time: str
    end_time: str


class FieldError(BaseModel):
    field_id: str
    message: str


class ValidationResult(BaseModel):
    errors: List[FieldError] = Field(default_factory=list)

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.errors


def _structural_message(key: str, error_type: str, ctx: Mapping[str, Any]) -> str:
    label = FIELD_LABELS.get(key, key)
    if error_type in ("missing", "string_too_short"):
        return f"{label} is required"
    if error_type == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} characters"
    if error_type == "string_pattern_mismatch":
        return f"{label} must be in HH:MM format"
    return f"{label} is invalid"


def _structural_errors(fields: Mapping[str, Any]) -> List[FieldError]:
    try:
        # An explicit None counts as a missing value
        FormFields.model_validate({k: v for k, v in fields.items() if v is not None})
    except ValidationError as exc:
        first_issue: Dict[str, Dict[str, Any]] = {}
        for issue in exc.errors():
            key = str(issue["loc"][0]) if issue["loc"] else ""
            first_issue.setdefault(key, issue)
        # One error per field, in schema field order
        order = list(FormFields.model_fields)
        keys = sorted(first_issue, key=lambda k: order.index(k) if k in order else len(order))
        return [
            FieldError(
                field_id=FIELD_ID_MAP.get(key, key),
                message=_structural_message(key, first_issue[key]["type"], first_issue[key].get("ctx") or {}),
            )
            for key in keys
        ]
    return []


def find_conflict(
    candidate: Interval,
    entries: Iterable[ExistingEntry],
    editing_id: Optional[Hashable] = None,
) -> Optional[ExistingEntry]:
    """Return the first entry overlapping `candidate`, skipping the one being edited."""
    for entry in entries:
        if editing_id is not None and entry.id == editing_id:
            continue
        if overlaps(candidate, entry):
            return entry
    return None


def validate_form_fields(
    fields: Mapping[str, Any],
    date_entries: Iterable[ExistingEntry],
    editing_id: Optional[Hashable] = None,
) -> ValidationResult:
    """
    Validate form fields against the structural schema and the business rules.

    Args:
        fields: Raw, possibly partial values from the form.
        date_entries: Existing entries on the same diary date, used for the
            overlap check.
        editing_id: Id of the entry being edited, excluded from the overlap
            check. None compares against every entry.

    Returns:
        A ValidationResult; problems are reported as FieldErrors, never raised.
    """
    errors = _structural_errors(fields)
    failed = {e.field_id for e in errors}

    start_time = fields.get("start_time")
    end_time = fields.get("end_time")
    times_ok = FIELD_ID_MAP["start_time"] not in failed and FIELD_ID_MAP["end_time"] not in failed

    # End time must be strictly after start time
    if times_ok and not is_before(start_time, end_time):
        errors.append(FieldError(
            field_id=FIELD_ID_MAP["end_time"],
            message="End time must be after start time.",
        ))
        times_ok = False

    # No overlapping entries on this date
    if times_ok:
        candidate = Interval(start_time=start_time, end_time=end_time)
        conflict = find_conflict(candidate, date_entries, editing_id)
        if conflict is not None:
            errors.append(FieldError(
                field_id=FIELD_ID_MAP["start_time"],
                message=(
                    f'Time slot overlaps with "{conflict.activity}" '
                    f"({conflict.start_time}–{conflict.end_time}). Please adjust the times."
                ),
            ))

    return ValidationResult(errors=errors)
