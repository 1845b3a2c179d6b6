"""
Validation gate for log entries.

An entry is either fully valid or never transmitted. Checks run in a fixed
order and stop at the first violation so error messages are deterministic.
"""

from collections.abc import Mapping
from datetime import datetime

from .errors import ValidationError
from .models import LogEntry

# Checked in this order; the first missing field is the one reported
REQUIRED_FIELDS = ("timestamp", "level", "message", "app_name", "app_uuid")


def _field_value(entry: LogEntry | Mapping, name: str):
    if isinstance(entry, LogEntry):
        return getattr(entry, name)
    if name == "level" and "level" not in entry:
        return entry.get("log_level")
    return entry.get(name)


def validate_entry(entry: LogEntry | Mapping) -> None:
    """
    Check an entry against the required-field and timestamp rules.

    Args:
        entry: A LogEntry or a mapping with the same keys. Mappings may
            use the wire name ``log_level`` instead of ``level``.

    Raises:
        ValidationError: On the first violation found.
    """
    if not isinstance(entry, LogEntry | Mapping):
        raise ValidationError("Log entry must be an object")

    for name in REQUIRED_FIELDS:
        value = _field_value(entry, name)
        if not value or not isinstance(value, str):
            raise ValidationError(f"{name} is required and must be a non-empty string", field=name)

    timestamp = _field_value(entry, "timestamp")
    try:
        datetime.fromisoformat(timestamp)
    except ValueError:
        raise ValidationError(f"Invalid timestamp format: {timestamp}", field="timestamp") from None


def coerce_entry(entry: LogEntry | Mapping) -> LogEntry:
    """Validate an entry and return it as a LogEntry."""
    validate_entry(entry)
    if isinstance(entry, LogEntry):
        return entry
    return LogEntry(**{name: _field_value(entry, name) for name in REQUIRED_FIELDS})
