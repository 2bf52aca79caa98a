"""Task field validation."""

from datetime import date, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.taskboard.core.results import ErrorKind, Failure
from src.taskboard.models import MediaType, TaskStatus
from src.taskboard.services.task_service import TaskFields, normalize_fields, parse_status

pytestmark = pytest.mark.unit


def _fields(**overrides) -> TaskFields:
    values = {
        "title": "Write release notes",
        "description": "Summarize the changes",
        "start_date": date(2025, 1, 10),
        "end_date": date(2025, 1, 12),
    }
    values.update(overrides)
    return TaskFields(**values)


def _code(result) -> str:
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.VALIDATION_FAILED
    return result.code


def test_valid_fields_are_normalized():
    result = normalize_fields(_fields(title="  Padded  ", media_content="  body "))

    assert not isinstance(result, Failure)
    assert result["title"] == "Padded"
    assert result["status"] == TaskStatus.NOT_STARTED.value
    assert result["media_type"] == MediaType.TEXT.value
    assert result["media_content"] == "body"


def test_same_day_times_are_rejected():
    """Only the calendar date counts: 09:00 to 17:00 on one day is not a valid range."""
    result = normalize_fields(
        _fields(
            start_date=datetime(2025, 1, 10, 9, 0),
            end_date=datetime(2025, 1, 10, 17, 0),
            media_content="text",
        )
    )
    assert _code(result) == "invalid_dates"


def test_end_before_start_is_rejected():
    result = normalize_fields(
        _fields(start_date=date(2025, 1, 12), end_date=date(2025, 1, 10), media_content="x")
    )
    assert _code(result) == "invalid_dates"


@given(start=st.dates(), gap=st.integers(min_value=-30, max_value=30))
def test_end_must_be_strictly_after_start(start: date, gap: int):
    try:
        end = start + timedelta(days=gap)
    except OverflowError:
        return
    result = normalize_fields(_fields(start_date=start, end_date=end, media_content="x"))
    if gap > 0:
        assert not isinstance(result, Failure)
        assert result["end_date"] == end
    else:
        assert _code(result) == "invalid_dates"


@pytest.mark.parametrize(
    ("overrides", "code"),
    [
        ({"title": "   "}, "invalid_title"),
        ({"description": ""}, "invalid_description"),
        ({"status": "blocked"}, "invalid_status"),
        ({"media_type": "audio"}, "invalid_media"),
        ({"media_type": MediaType.TEXT, "media_content": ""}, "invalid_media"),
        ({"media_type": MediaType.VIDEO, "media_content": "not a url"}, "invalid_media"),
        ({"media_type": MediaType.VIDEO, "media_content": "ftp://videos/1"}, "invalid_media"),
        ({"media_type": MediaType.IMAGE, "media_content": ""}, "invalid_media"),
    ],
)
def test_invalid_fields(overrides: dict, code: str):
    overrides.setdefault("media_content", "body")
    assert _code(normalize_fields(_fields(**overrides))) == code


def test_video_with_https_url_is_accepted():
    result = normalize_fields(
        _fields(media_type=MediaType.VIDEO, media_content="https://videos.example.com/v/1")
    )
    assert not isinstance(result, Failure)
    assert result["media_type"] == "video"


@pytest.mark.parametrize("status", list(TaskStatus))
def test_parse_status_accepts_every_status(status: TaskStatus):
    assert parse_status(status.value) is status


def test_parse_status_rejects_unknown():
    assert parse_status("done") is None


def test_status_labels():
    assert TaskStatus.IN_PROGRESS.label == "In Progress"
