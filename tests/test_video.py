from datetime import datetime, timedelta, timezone

import pytest

from ytviewer.core.youtube.video import parse_published_at, pick_thumbnail

NOON = datetime(2024, 5, 4, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [
    "2024-05-04T12:00:00Z",
    "2024-05-04t12:00:00z",
    "2024-05-04T12:00:00+00:00",
    "2024-05-04T14:00:00+02:00",
    "2024-05-04T12:00:00",
])
def test_parses_rfc3339_variants(value):
    assert parse_published_at(value) == NOON


@pytest.mark.parametrize("value, micros", [
    ("2024-05-04T12:00:00.5Z", 500000),
    ("2024-05-04T12:00:00.123Z", 123000),
    ("2024-05-04T12:00:00.1234567Z", 123456),
    ("2024-05-04T12:00:00.123456789z", 123456),
])
def test_fractional_seconds_of_any_length(value, micros):
    assert parse_published_at(value) == NOON.replace(microsecond=micros)


@pytest.mark.parametrize("value", [None, "", "yesterday", "2024-13-40T99:00:00Z"])
def test_unparseable_falls_back_to_now(value):
    before = datetime.now(timezone.utc)

    parsed = parse_published_at(value)

    assert before <= parsed <= datetime.now(timezone.utc) + timedelta(seconds=1)


def test_thumbnail_prefers_medium():
    thumbs = {"default": {"url": "d.jpg"}, "medium": {"url": "m.jpg"}}

    assert pick_thumbnail(thumbs) == "m.jpg"
    assert pick_thumbnail({"default": {"url": "d.jpg"}}) == "d.jpg"
    assert pick_thumbnail(None) == ""
