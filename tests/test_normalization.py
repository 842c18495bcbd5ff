from __future__ import annotations

import pytest

from pyclimstat.normalize import (
    CoercionPolicy,
    kelvin_to_fahrenheit,
    leading_float,
    leading_int,
    ms_to_seconds,
    safe_float,
    safe_int,
)


def test_safe_float_parses_numbers_and_whitespace() -> None:
    assert safe_float("93.0") == 93.0
    assert safe_float(" 0.5 ") == 0.5
    assert safe_float("1e3") == 1000.0


@pytest.mark.parametrize("value", [None, "", "abc", "--", "nan", "NaN"])
def test_safe_float_unparseable_is_none(value: object) -> None:
    assert safe_float(value) is None


def test_safe_int_keeps_full_millisecond_precision() -> None:
    assert safe_int("1428300000000") == 1_428_300_000_000
    assert safe_int("9007199254740993") == 9_007_199_254_740_993


def test_safe_int_truncates_decimal_representation() -> None:
    assert safe_int("1428300000999.9") == 1_428_300_000_999
    assert safe_int("-12.7") == -12


@pytest.mark.parametrize("value", ["", "x", "inf", None])
def test_safe_int_unparseable_is_none(value: object) -> None:
    assert safe_int(value) is None


def test_boiling_point_of_water() -> None:
    # 373.15 and 1.8 have no exact binary form, so the double result can be
    # a few ulps away from 212; it is exact once rounded for display.
    fahrenheit = kelvin_to_fahrenheit(373.15)
    assert fahrenheit == pytest.approx(212.0, rel=0, abs=1e-12)
    assert f"{fahrenheit:.1f}" == "212.0"


def test_absolute_zero() -> None:
    assert kelvin_to_fahrenheit(0.0) == -459.67


def test_ms_to_seconds_truncates_toward_zero() -> None:
    assert ms_to_seconds(1_428_300_000_999) == 1_428_300_000
    assert ms_to_seconds(999) == 0
    assert ms_to_seconds(-1) == 0
    assert ms_to_seconds(-1999) == -1


def test_coercion_policy_values() -> None:
    assert CoercionPolicy("coerce-to-zero") is CoercionPolicy.COERCE_TO_ZERO
    assert CoercionPolicy("reject") is CoercionPolicy.REJECT


def test_leading_float_reads_longest_numeric_prefix() -> None:
    assert leading_float("12abc") == 12.0
    assert leading_float("  -3.25e1xyz") == -32.5
    assert leading_float("infrared") == float("inf")
    assert leading_float("abc") is None
    assert leading_float(".") is None
    assert leading_float("nanometer") is None


def test_leading_int_reads_longest_integer_prefix() -> None:
    assert leading_int("1428300000000x") == 1_428_300_000_000
    assert leading_int("+42.9") == 42
    assert leading_int("x1") is None
