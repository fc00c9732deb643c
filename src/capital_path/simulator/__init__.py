"""Simulation helpers."""

from capital_path.simulator.models import (
    AccountingPeriod,
    DailyEquityPoint,
    SimulationResult,
    TradeLogRow,
)
from capital_path.simulator.evaluator import CapitalPathSimulator, simulate_capital_path
from capital_path.simulator.periods import PeriodBucket, TradingDay, bucket_rows, period_key_for

__all__ = [
    "AccountingPeriod",
    "CapitalPathSimulator",
    "DailyEquityPoint",
    "PeriodBucket",
    "SimulationResult",
    "TradeLogRow",
    "TradingDay",
    "bucket_rows",
    "period_key_for",
    "simulate_capital_path",
]
