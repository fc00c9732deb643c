"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TradeLogRow:
    opened_on: date
    closed_on: date
    pl: float
    id: Optional[str] = None


@dataclass(frozen=True)
class DailyEquityPoint:
    date: date
    equity: float
    withdrawals: float = 0.0


@dataclass(frozen=True)
class AccountingPeriod:
    year: int
    month: int
    rows: tuple[TradeLogRow, ...]
    profit: float
    equity_before_withdrawal: float
    withdrawal: float
    closing_equity: float

    @property
    def key(self) -> tuple[int, int]:
        return self.year, self.month

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class SimulationResult:
    final_equity: float
    total_pl: float
    total_withdrawn: float
    gross_pl: float = 0.0
    max_drawdown_pct: float = 0.0
    daily: list[DailyEquityPoint] = field(default_factory=list)
    periods: list[AccountingPeriod] = field(default_factory=list)
