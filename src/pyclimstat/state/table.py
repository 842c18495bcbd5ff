"""In-memory accumulator table.

This is the only component that owns accumulators. Entries are kept in the
order their code was first seen, which is the order reports list states in.
"""

from __future__ import annotations

from collections.abc import Iterator

from pyclimstat.models.accumulator import Accumulator


class AccumulatorTable:
    """Mapping from state code to its :class:`Accumulator`.

    Keys are matched exactly (no case folding). The table only grows and has
    no capacity bound.
    """

    def __init__(self) -> None:
        self._accumulators: dict[str, Accumulator] = {}

    def get_or_create(self, code: str) -> Accumulator:
        accumulator = self._accumulators.get(code)
        if accumulator is None:
            accumulator = Accumulator(code=code)
            self._accumulators[code] = accumulator
        return accumulator

    def get(self, code: str) -> Accumulator | None:
        return self._accumulators.get(code)

    def iterate(self) -> Iterator[tuple[str, Accumulator]]:
        """Yield ``(code, accumulator)`` pairs in first-seen order.

        Every call returns a fresh iterator, so a finalized table can be read
        any number of times.
        """
        return iter(list(self._accumulators.items()))

    def codes(self) -> list[str]:
        return list(self._accumulators)

    def merge(self, other: AccumulatorTable) -> None:
        """Merge a partial table that was built from later input.

        Codes new to this table are appended in *other*'s order; extremum
        ties keep the values already held here.
        """
        for code, accumulator in other.iterate():
            self.get_or_create(code).merge(accumulator)

    def __len__(self) -> int:
        return len(self._accumulators)

    def __contains__(self, code: object) -> bool:
        return code in self._accumulators

    def __iter__(self) -> Iterator[str]:
        return iter(self.codes())

    def __repr__(self) -> str:
        return f"AccumulatorTable(codes={self.codes()!r})"
