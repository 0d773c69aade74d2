from datetime import datetime, timedelta, timezone

import pytest
from app.services.timestamps import (
    EPOCH,
    TimestampKind,
    classify_timestamp,
    normalize_timestamp,
    timestamp_sort_key,
)


class FirestoreLikeTimestamp:
    def __init__(self, dt):
        self._dt = dt

    def ToDatetime(self):
        return self._dt


@pytest.mark.parametrize(
    "value, kind",
    [
        (None, TimestampKind.missing),
        ("2026-01-01T00:00:00Z", TimestampKind.iso_string),
        (datetime(2026, 1, 1), TimestampKind.native),
        (FirestoreLikeTimestamp(datetime(2026, 1, 1)), TimestampKind.native),
        (1767225600, TimestampKind.raw_epoch),
        (1767225600000.0, TimestampKind.raw_epoch),
        (True, TimestampKind.other),
        ({"seconds": 1}, TimestampKind.other),
    ],
)
def test_classify(value, kind):
    assert classify_timestamp(value) is kind


def test_missing_is_now():
    before = datetime.now(timezone.utc)
    normalized = normalize_timestamp(None)
    assert timestamp_sort_key(normalized) >= before - timedelta(seconds=1)


def test_string_is_used_as_is():
    assert normalize_timestamp("2026-02-03T04:05:06Z") == "2026-02-03T04:05:06Z"


def test_native_objects_are_converted():
    dt = datetime(2026, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
    assert normalize_timestamp(dt) == dt.isoformat()
    assert normalize_timestamp(FirestoreLikeTimestamp(dt)) == dt.isoformat()


def test_epoch_seconds_and_milliseconds_agree():
    assert normalize_timestamp(1767225600) == "2026-01-01T00:00:00+00:00"
    assert normalize_timestamp(1767225600000) == "2026-01-01T00:00:00+00:00"


def test_unparseable_value_sorts_as_epoch():
    assert timestamp_sort_key({"seconds": "soon"}) == EPOCH
    assert timestamp_sort_key("not a date") == EPOCH


def test_naive_and_aware_values_compare():
    naive = timestamp_sort_key("2026-01-01T10:00:00")
    aware = timestamp_sort_key("2026-01-01T09:00:00+00:00")
    assert naive > aware


@pytest.mark.parametrize(
    "value",
    [
        "Mon Jan 01 2024 00:00:00 GMT+0000",
        "Mon Jan 01 2024 01:00:00 GMT+0100 (Central European Standard Time)",
        "Mon, 01 Jan 2024 00:00:00 +0000",
    ],
)
def test_browser_and_rfc2822_date_strings_sort_by_their_instant(value):
    assert timestamp_sort_key(value) == datetime(2024, 1, 1, tzinfo=timezone.utc)
