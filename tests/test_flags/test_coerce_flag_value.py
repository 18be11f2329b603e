from datetime import datetime

import pytest

from arbor.flags import FlagType
from arbor.flags.utils import coerce_bool, coerce_value, format_default


# --- Tests ---
@pytest.mark.parametrize(
    "value, flag_type, expected",
    [
        ("42", FlagType.INT, 42),
        ("-7", FlagType.INT, -7),
        ("0x10", FlagType.INT, 16),
        ("3.5", FlagType.FLOAT, 3.5),
        ("yes", FlagType.BOOL, True),
        ("off", FlagType.BOOL, False),
        ("hello", FlagType.STRING, "hello"),
        ("", FlagType.STRING, ""),
        ("a, b,c", FlagType.STRING_LIST, ["a", "b", "c"]),
        ("", FlagType.STRING_LIST, []),
        ("4", FlagType.COUNT, 4),
    ],
)
def test_coerce_value_basic(value, flag_type, expected):
    assert coerce_value(value, flag_type) == expected


def test_coerce_value_datetime():
    assert coerce_value("2025-01-02", FlagType.DATETIME) == datetime(2025, 1, 2)


@pytest.mark.parametrize(
    "value, flag_type",
    [
        ("abc", FlagType.INT),
        ("1.2.3", FlagType.FLOAT),
        ("maybe", FlagType.BOOL),
        ("not a date", FlagType.DATETIME),
    ],
)
def test_coerce_value_invalid(value, flag_type):
    with pytest.raises(ValueError):
        coerce_value(value, flag_type)


def test_coerce_bool_passthrough():
    assert coerce_bool(True) is True
    assert coerce_bool(" TRUE ") is True


@pytest.mark.parametrize(
    "default, flag_type, expected",
    [
        ("YOUR NAME", FlagType.STRING, ' (default "YOUR NAME")'),
        ("", FlagType.STRING, ""),
        (False, FlagType.BOOL, ""),
        (True, FlagType.BOOL, " (default true)"),
        (5, FlagType.INT, " (default 5)"),
        (0, FlagType.INT, ""),
        (["a", "b"], FlagType.STRING_LIST, " (default [a,b])"),
        ([], FlagType.STRING_LIST, ""),
        (None, FlagType.DATETIME, ""),
    ],
)
def test_format_default(default, flag_type, expected):
    assert format_default(default, flag_type) == expected
