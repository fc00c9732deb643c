"""Calendar helpers for accounting periods."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from itertools import groupby
from typing import Iterable, Sequence

from capital_path.simulator.models import TradeLogRow


PeriodKey = tuple[int, int]


@dataclass(frozen=True)
class TradingDay:
    day: date
    rows: tuple[TradeLogRow, ...]


@dataclass(frozen=True)
class PeriodBucket:
    key: PeriodKey
    days: tuple[TradingDay, ...]

    @property
    def rows(self) -> tuple[TradeLogRow, ...]:
        return tuple(row for day in self.days for row in day.rows)


def period_key_for(day: date) -> PeriodKey:
    return day.year, day.month


def sort_by_close(rows: Iterable[TradeLogRow]) -> list[TradeLogRow]:
    # sorted() is stable, so same-day rows keep their input order.
    return sorted(rows, key=lambda row: row.closed_on)


def group_trading_days(ordered: Sequence[TradeLogRow]) -> list[TradingDay]:
    return [
        TradingDay(day=day, rows=tuple(rows))
        for day, rows in groupby(ordered, key=lambda row: row.closed_on)
    ]


def group_periods(days: Sequence[TradingDay]) -> list[PeriodBucket]:
    """Bucket trading days into calendar months.

    Only months with at least one closed trade appear; a month with no
    activity is never closed out and never triggers a withdrawal.
    """
    return [
        PeriodBucket(key=key, days=tuple(members))
        for key, members in groupby(days, key=lambda trading_day: period_key_for(trading_day.day))
    ]


def bucket_rows(rows: Iterable[TradeLogRow]) -> list[PeriodBucket]:
    return group_periods(group_trading_days(sort_by_close(rows)))
