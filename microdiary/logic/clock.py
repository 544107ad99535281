# microdiary/logic/clock.py

from datetime import date, datetime


def parse_time(text: str) -> int:
    """
    Convert an HH:MM string to total minutes since midnight.

    The caller must have checked the shape already; malformed text raises
    whatever ``int()`` or the unpacking raises.
    """
    hours, minutes = text.split(":")
    return int(hours) * 60 + int(minutes)


def format_minutes(minutes: int) -> str:
    """Convert minutes since midnight (0..1439) back to an HH:MM string."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def is_before(a: str, b: str) -> bool:
    """Return True if time `a` is strictly before time `b` (both HH:MM)."""
    return parse_time(a) < parse_time(b)


def format_datetime(iso_string: str) -> str:
    """Format an ISO instant as a locale short date and time in local time."""
    dt = datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    return dt.astimezone().strftime("%x %H:%M")


def today() -> str:
    """Return today's local date as YYYY-MM-DD."""
    return date.today().isoformat()
