import io

import pytest

from acse.errors import (
    NULL_LOCATION,
    ErrorLog,
    FatalError,
    FileLocation,
    fatal_error,
    format_message,
)


def test_format_message_with_location_uses_one_based_row():
    loc = FileLocation("main.src", 2)
    assert format_message(loc, "error", "boom") == "main.src:3: error: boom"


def test_format_message_without_location():
    assert format_message(NULL_LOCATION, "error", "boom") == "error: boom"


def test_format_message_none_location_equals_null_location():
    assert format_message(None, "fatal error", "x") == format_message(
        NULL_LOCATION, "fatal error", "x"
    )


def test_is_known():
    assert FileLocation("a", 0).is_known() is True
    assert FileLocation("a", -1).is_known() is False
    assert FileLocation(None, 3).is_known() is False
    assert NULL_LOCATION.is_known() is False


def test_fatal_error_raises():
    with pytest.raises(FatalError, match="out of memory"):
        fatal_error("out of memory")


def test_error_log_counts_and_writes():
    stream = io.StringIO()
    log = ErrorLog(stream)
    assert log.count() == 0
    log.emit(FileLocation("f.src", 0), "first")
    log.emit(NULL_LOCATION, "second")
    assert log.count() == 2
    lines = stream.getvalue().splitlines()
    assert lines == [
        format_message(FileLocation("f.src", 0), "error", "first"),
        format_message(NULL_LOCATION, "error", "second"),
    ]