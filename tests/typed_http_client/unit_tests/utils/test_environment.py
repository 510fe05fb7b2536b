import pytest

from typed_http_client.utils.environment import (
    safe_float,
    safe_positive_int,
    str2bool,
)


@pytest.mark.parametrize(
    "value, expected_result",
    [("true", True), ("TRUE", True), ("False", False), (True, True), (False, False)],
)
def test_str2bool_when_valid_value_given(value, expected_result: bool) -> None:
    # when
    result = str2bool(value)

    # then
    assert result is expected_result


def test_str2bool_when_invalid_value_given() -> None:
    # when
    with pytest.raises(ValueError):
        _ = str2bool("yes")


def test_safe_float_when_value_not_set() -> None:
    # when
    result = safe_float("", default=30.0)

    # then
    assert result == 30.0


def test_safe_float_when_value_set() -> None:
    # when
    result = safe_float("2.5", default=30.0)

    # then
    assert result == 2.5


def test_safe_positive_int_when_value_set() -> None:
    # when
    result = safe_positive_int("4", default=8)

    # then
    assert result == 4


@pytest.mark.parametrize("value", ["0", "-3", "abc"])
def test_safe_positive_int_when_invalid_value_given(value: str) -> None:
    # when
    with pytest.raises(ValueError):
        _ = safe_positive_int(value, default=8)
