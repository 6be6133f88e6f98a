from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

import pytest

from conframe.coercion import (
    coerce_bool,
    coerce_enum,
    coerce_value,
    describe_type,
    unwrap_optional,
    zero_default,
)


class Status(Enum):
    Running = 1
    Stopped = 2


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


# --- Tests ---
@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("7", int, 7),
        ("-3", int, -3),
        ("3.14", float, 3.14),
        ("True", bool, True),
        ("hello", str, "hello"),
        ("", str, ""),
        ("False", bool, False),
        ("1.50", Decimal, Decimal("1.50")),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


@pytest.mark.parametrize(
    "value, target_type",
    [
        ("orange", int),
        ("3.5", int),
        ("abc", float),
        ("maybe", bool),
        ("one", Decimal),
    ],
)
def test_coerce_value_invalid(value, target_type):
    with pytest.raises(ValueError):
        coerce_value(value, target_type)


def test_enum_coercion_is_case_insensitive():
    assert coerce_value("RUNNING", Status) is Status.Running
    assert coerce_value("running", Status) is Status.Running
    assert coerce_value("Stopped", Status) is Status.Stopped


def test_enum_coercion_matches_names_not_values():
    assert coerce_value("dev", Mode) is Mode.DEV
    with pytest.raises(ValueError):
        coerce_value("1", Status)


def test_enum_coercion_failure_lists_members():
    with pytest.raises(ValueError) as excinfo:
        coerce_enum("paused", Status)
    assert "Running, Stopped" in str(excinfo.value)


def test_optional_coercion_wraps_underlying_type():
    assert coerce_value("5", Optional[int]) == 5
    assert coerce_value("5", int | None) == 5
    assert coerce_value("running", Status | None) is Status.Running
    assert coerce_value(None, int | None) is None

    with pytest.raises(ValueError):
        coerce_value("five", int | None)


def test_absent_value_uses_zero_default():
    assert coerce_value(None, int) == 0
    assert coerce_value(None, float) == 0.0
    assert coerce_value(None, bool) is False
    assert coerce_value(None, str) == ""
    assert coerce_value(None, Status) is None


def test_zero_default():
    assert zero_default(Decimal) == Decimal(0)
    assert zero_default(Optional[bool]) is None
    assert zero_default(Path) is None


def test_unwrap_optional():
    assert unwrap_optional(int) == (int, False)
    assert unwrap_optional(Optional[str]) == (str, True)
    assert unwrap_optional(int | str) == (int | str, False)
    underlying, nullable = unwrap_optional(int | str | None)
    assert nullable is True
    assert coerce_value("abc", underlying) == "abc"


def test_union_coercion():
    assert coerce_value("123", int | str) == 123
    assert coerce_value("abc", int | str) == "abc"
    assert coerce_value("False", bool | str) is False


def test_literal_coercion():
    assert coerce_value("dev", Literal["dev", "prod"]) == "dev"
    assert coerce_value("2", Literal[1, 2, 3]) == 2
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_path_coercion():
    result = coerce_value("/tmp/test.txt", Path)
    assert isinstance(result, Path)
    assert str(result) == "/tmp/test.txt"


def test_datetime_coercion():
    result = coerce_value("2023-10-01T13:00:00", datetime)
    assert isinstance(result, datetime)
    assert result.year == 2023 and result.month == 10

    with pytest.raises(ValueError):
        coerce_value("not-a-date", datetime)


def test_bool_coercion():
    assert coerce_bool("true") is True
    assert coerce_bool("False") is False
    assert coerce_bool("0") is False
    assert coerce_bool("1") is True
    assert coerce_bool("yes") is True
    assert coerce_bool("no") is False
    assert coerce_bool("on") is True
    assert coerce_bool("off") is False
    assert coerce_bool(True) is True
    with pytest.raises(ValueError):
        coerce_bool("")


@pytest.mark.parametrize(
    "target_type, expected",
    [
        (int, "int"),
        (Optional[float], "float?"),
        (Status, "Status"),
        (Literal["a", "b"], "{a,b}"),
    ],
)
def test_describe_type(target_type, expected):
    assert describe_type(target_type) == expected
