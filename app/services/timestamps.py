"""Creation-timestamp normalization.

Documents reach the catalog with ``created_at`` in whatever shape the writer
used: missing, an ISO string, a native timestamp object, or a raw epoch
number. Every merge and sort path goes through ``normalize_timestamp`` so the
ordering is the same in every listing.
"""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from app.core.logging_config import get_logger

logger = get_logger("timestamps")

_datetime_adapter = TypeAdapter(datetime)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# epoch values at or above this are taken as milliseconds (year 5138 in seconds)
EPOCH_MILLIS_THRESHOLD = 1e11

# "Mon Jan 01 2024 00:00:00 GMT+0000 (Coordinated Universal Time)", zone name dropped
JS_DATE_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"


class TimestampKind(str, Enum):
    missing = "missing"
    iso_string = "iso_string"
    native = "native"
    raw_epoch = "raw_epoch"
    other = "other"


def classify_timestamp(value: Any) -> TimestampKind:
    if value is None:
        return TimestampKind.missing
    if isinstance(value, str):
        return TimestampKind.iso_string
    if isinstance(value, bool):
        return TimestampKind.other
    if isinstance(value, (int, float)):
        return TimestampKind.raw_epoch
    if isinstance(value, datetime) or _native_converter(value) is not None:
        return TimestampKind.native
    return TimestampKind.other


def _native_converter(value: Any):
    # google-cloud / protobuf timestamps expose one of these
    for name in ("to_datetime", "ToDatetime"):
        method = getattr(value, name, None)
        if callable(method):
            return method
    return None


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_timestamp(value: Any) -> str:
    """Return ``value`` as an ISO-8601 string.

    missing -> now; string -> unchanged; native timestamp -> converted;
    epoch number -> seconds, or milliseconds when >= 1e11; anything else is
    parsed generically and falls back to the Unix epoch when that fails.
    """
    kind = classify_timestamp(value)

    if kind is TimestampKind.missing:
        return utcnow_iso()
    if kind is TimestampKind.iso_string:
        return value
    if kind is TimestampKind.native:
        if isinstance(value, datetime):
            return value.isoformat()
        return _native_converter(value)().isoformat()
    if kind is TimestampKind.raw_epoch:
        seconds = value / 1000 if abs(value) >= EPOCH_MILLIS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            logger.warning("Epoch value %r out of range, sorting it as the epoch", value)
            return EPOCH.isoformat()

    try:
        return _datetime_adapter.validate_python(value).isoformat()
    except ValidationError:
        logger.warning("Unparseable timestamp %r, sorting it as the epoch", value)
        return EPOCH.isoformat()


def _parse_date_string(text: str) -> Optional[datetime]:
    """``Date.toString()`` and RFC 2822 forms, which ISO parsing rejects."""
    head = text.split(" (", 1)[0].strip()
    try:
        return datetime.strptime(head, JS_DATE_FORMAT)
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(head)
    except (TypeError, ValueError):
        return None


def timestamp_sort_key(value: Any) -> datetime:
    """Aware UTC datetime used to order records; unparseable values sort as the epoch."""
    normalized = normalize_timestamp(value)
    try:
        return _as_utc(_datetime_adapter.validate_python(normalized))
    except ValidationError:
        parsed = _parse_date_string(normalized)
        if parsed is not None:
            return _as_utc(parsed)
        logger.debug("Timestamp string %r does not parse, sorting it as the epoch", normalized)
        return EPOCH
