from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyclimstat.models.accumulator import Accumulator
from pyclimstat.state.table import AccumulatorTable


def test_get_or_create_returns_same_accumulator() -> None:
    table = AccumulatorTable()

    first = table.get_or_create("TN")
    second = table.get_or_create("TN")

    assert first is second
    assert len(table) == 1


def test_new_accumulator_is_zero_initialized() -> None:
    accumulator = AccumulatorTable().get_or_create("WA")

    assert accumulator.code == "WA"
    assert accumulator.record_count == 0
    assert accumulator.is_empty
    assert accumulator.temperature_sum.value == 0.0
    assert accumulator.max_temperature_f < -459.67
    assert accumulator.min_temperature_f > 1000.0
    assert accumulator.max_temperature_at is None
    assert accumulator.min_temperature_at is None


def test_iteration_follows_first_seen_order() -> None:
    table = AccumulatorTable()
    for code in ["WA", "TN", "WA", "CA", "TN"]:
        table.get_or_create(code)

    assert table.codes() == ["WA", "TN", "CA"]
    assert [code for code, _ in table.iterate()] == ["WA", "TN", "CA"]
    assert list(table) == ["WA", "TN", "CA"]


def test_iterate_is_restartable() -> None:
    table = AccumulatorTable()
    table.get_or_create("TN")
    table.get_or_create("WA")

    first = list(table.iterate())
    second = list(table.iterate())

    assert first == second
    assert len(first) == 2


def test_keys_match_exactly() -> None:
    table = AccumulatorTable()
    table.get_or_create("CA")
    table.get_or_create("ca")
    table.get_or_create("CA ")

    assert len(table) == 3
    assert "CA" in table
    assert "Ca" not in table
    assert table.get("Ca") is None


def test_no_capacity_ceiling() -> None:
    table = AccumulatorTable()
    codes = [f"K{i:04d}" for i in range(500)]
    for code in codes:
        table.get_or_create(code)

    assert len(table) == 500
    assert table.codes() == codes


def test_code_is_immutable() -> None:
    accumulator = AccumulatorTable().get_or_create("TN")
    with pytest.raises(ValidationError):
        accumulator.code = "WA"  # type: ignore[misc]


def _partial(code: str, *, count: int, high: float, high_at: int, low: float, low_at: int) -> Accumulator:
    accumulator = Accumulator(code=code)
    accumulator.record_count = count
    accumulator.temperature_sum.add(high + low)
    accumulator.humidity_sum.add(10.0 * count)
    accumulator.lightning_count = 1.0
    accumulator.max_temperature_f = high
    accumulator.max_temperature_at = high_at
    accumulator.min_temperature_f = low
    accumulator.min_temperature_at = low_at
    return accumulator


def test_merge_keeps_earlier_extrema_on_ties() -> None:
    earlier = _partial("TN", count=2, high=90.0, high_at=100, low=10.0, low_at=200)
    later = _partial("TN", count=2, high=90.0, high_at=300, low=10.0, low_at=400)

    earlier.merge(later)

    assert earlier.record_count == 4
    assert earlier.max_temperature_at == 100
    assert earlier.min_temperature_at == 200
    assert earlier.humidity_sum.value == 40.0
    assert earlier.lightning_count == 2.0


def test_merge_takes_strictly_better_extrema() -> None:
    earlier = _partial("TN", count=1, high=90.0, high_at=100, low=10.0, low_at=200)
    later = _partial("TN", count=1, high=95.0, high_at=300, low=5.0, low_at=400)

    earlier.merge(later)

    assert (earlier.max_temperature_f, earlier.max_temperature_at) == (95.0, 300)
    assert (earlier.min_temperature_f, earlier.min_temperature_at) == (5.0, 400)


def test_merge_rejects_different_code() -> None:
    with pytest.raises(ValueError):
        Accumulator(code="TN").merge(Accumulator(code="WA"))


def test_table_merge_appends_new_codes_in_order() -> None:
    table = AccumulatorTable()
    table.get_or_create("TN").record_count = 1
    other = AccumulatorTable()
    other.get_or_create("WA").record_count = 2
    other.get_or_create("TN").record_count = 3

    table.merge(other)

    assert table.codes() == ["TN", "WA"]
    assert table.get_or_create("TN").record_count == 4
    assert table.get_or_create("WA").record_count == 2
