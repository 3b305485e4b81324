"""Date-range selection helpers and the two-click range selector."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from villa_booking.pricing.types import CalendarSnapshot

UNAVAILABLE_NOTICE = "unavailable"


def parse_date_key(value: str | date | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` key; ``None`` when it is not a valid date."""
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def format_date_key(day: date) -> str:
    return day.isoformat()


def select_range(start: str | date | None, end: str | date | None) -> list[date]:
    """Every date from ``start`` to ``end`` inclusive, in ascending order.

    The bounds may be given in either order. Unparsable bounds give ``[]``.
    """
    first = parse_date_key(start)
    last = parse_date_key(end)
    if first is None or last is None:
        return []
    if last < first:
        first, last = last, first
    return [first + timedelta(days=offset) for offset in range((last - first).days + 1)]


def find_unavailable(
    days: Iterable[date],
    availability: CalendarSnapshot | Mapping[date, bool],
) -> list[date]:
    """Dates explicitly marked unavailable. Unknown dates count as available."""
    if isinstance(availability, CalendarSnapshot):
        return sorted(day for day in set(days) if not availability.is_available(day))
    return sorted(day for day in set(days) if availability.get(day) is False)


class SelectionState(enum.Enum):
    EMPTY = "empty"
    ANCHOR_SET = "anchor_set"
    RANGE_COMMITTED = "range_committed"


@dataclass(frozen=True)
class ClickOutcome:
    accepted: bool
    state: SelectionState
    selected: tuple[date, ...]
    notice: str | None = None


class RangeSelector:
    """Two-click range selection: anchor first, then close the range.

    States go ``EMPTY -> ANCHOR_SET -> RANGE_COMMITTED`` and back to ``EMPTY``
    on :meth:`clear`, on a year switch, or when the only selected date is
    clicked again. When an availability map is supplied, a click that would
    put an unavailable date into the selection is rejected and the previous
    selection is kept.
    """

    def __init__(
        self,
        availability: CalendarSnapshot | Mapping[date, bool] | None = None,
        year: int | None = None,
    ) -> None:
        self.availability = availability
        self.year = year
        self.state = SelectionState.EMPTY
        self.anchor: date | None = None
        self.selected: tuple[date, ...] = ()

    def _outcome(self, accepted: bool, notice: str | None = None) -> ClickOutcome:
        return ClickOutcome(accepted=accepted, state=self.state, selected=self.selected, notice=notice)

    def _blocked(self, days: Iterable[date]) -> bool:
        if self.availability is None:
            return False
        return bool(find_unavailable(days, self.availability))

    def click(self, day: date) -> ClickOutcome:
        if self.selected == (day,):
            self.clear()
            return self._outcome(True)

        if self._blocked([day]):
            return self._outcome(False, UNAVAILABLE_NOTICE)

        if self.anchor is None:
            self.anchor = day
            self.selected = (day,)
            self.state = SelectionState.ANCHOR_SET
            return self._outcome(True)

        candidate = select_range(self.anchor, day)
        if self._blocked(candidate):
            return self._outcome(False, UNAVAILABLE_NOTICE)

        self.selected = tuple(candidate)
        self.anchor = None
        self.state = SelectionState.RANGE_COMMITTED
        return self._outcome(True)

    def hover(self, day: date) -> tuple[date, ...]:
        """Preview of the range the next click would commit."""
        if self.state is not SelectionState.ANCHOR_SET or self.anchor is None:
            return ()
        return tuple(select_range(self.anchor, day))

    def clear(self) -> None:
        self.state = SelectionState.EMPTY
        self.anchor = None
        self.selected = ()

    def switch_year(self, year: int) -> None:
        if year != self.year:
            self.clear()
        self.year = year
