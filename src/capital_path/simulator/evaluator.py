"""Capital path simulator."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from decimal import Decimal, localcontext
from typing import Iterable

from capital_path.policy.engine import EXACT_PRECISION, ZERO, WithdrawalEngine, to_decimal
from capital_path.policy.models import CapitalPathConfig
from capital_path.simulator.models import AccountingPeriod, DailyEquityPoint, SimulationResult
from capital_path.simulator.periods import bucket_rows
from capital_path.trade_log import RawRow, normalize_rows


log = logging.getLogger(__name__)


def _exact_sum(values: Iterable[float]) -> Decimal:
    return sum((to_decimal(value) for value in values), ZERO)


def net_change(final_equity: float, starting_capital: float) -> float:
    """Return the float that, added to starting capital, reproduces final equity.

    Plain subtraction is exact whenever the two are within a factor of two of
    each other; outside that range the result is nudged by a few ulps.
    """
    delta = final_equity - starting_capital
    candidate = delta
    for _ in range(4):
        total = starting_capital + candidate
        if total == final_equity:
            return candidate
        candidate = math.nextafter(candidate, math.inf if total < final_equity else -math.inf)
    return delta


class CapitalPathSimulator:
    def __init__(self, config: CapitalPathConfig) -> None:
        self.config = config
        self.engine = WithdrawalEngine(config)

    def simulate(self, rows: Iterable[RawRow]) -> SimulationResult:
        """Replay closed trades in close-date order and apply month-end withdrawals.

        The configuration is checked before any row is read, and every row is
        validated before the replay starts, so a failure never leaves a
        partial result behind. Amounts are carried as exact decimals and
        converted to floats only on the way out.
        """
        self.config.validate()
        trades = normalize_rows(rows)

        starting_capital = float(self.config.starting_capital)
        if not trades:
            return SimulationResult(
                final_equity=starting_capital,
                total_pl=0.0,
                total_withdrawn=0.0,
            )

        with localcontext() as ctx:
            ctx.prec = EXACT_PRECISION
            return self._replay(trades, starting_capital)

    def _replay(self, trades, starting_capital: float) -> SimulationResult:
        start = to_decimal(starting_capital)
        equity = start
        peak_equity = start
        max_drawdown = ZERO
        total_withdrawn = ZERO
        daily: list[DailyEquityPoint] = []
        periods: list[AccountingPeriod] = []

        for bucket in bucket_rows(trades):
            last_index = len(bucket.days) - 1
            for index, trading_day in enumerate(bucket.days):
                equity += _exact_sum(row.pl for row in trading_day.rows)

                peak_equity = max(peak_equity, equity)
                if peak_equity > 0:
                    max_drawdown = min(max_drawdown, (equity - peak_equity) / peak_equity)

                if index < last_index:
                    daily.append(DailyEquityPoint(date=trading_day.day, equity=float(equity)))

            period_rows = bucket.rows
            period_profit = _exact_sum(row.pl for row in period_rows)
            equity_before = equity
            decision = self.engine.close_period(period_profit, equity)
            equity = decision.equity_after
            total_withdrawn += decision.amount

            daily.append(
                DailyEquityPoint(
                    date=bucket.days[-1].day,
                    equity=float(equity),
                    withdrawals=float(decision.amount),
                )
            )
            period = AccountingPeriod(
                year=bucket.key[0],
                month=bucket.key[1],
                rows=period_rows,
                profit=float(period_profit),
                equity_before_withdrawal=float(equity_before),
                withdrawal=float(decision.amount),
                closing_equity=float(equity),
            )
            periods.append(period)
            log.debug(
                "Closed period %s: profit=%.2f equity=%.2f withdrawal=%.2f",
                period.label,
                period_profit,
                equity_before,
                decision.amount,
            )

        gross_pl = float(_exact_sum(row.pl for row in trades))
        withdrawn = float(total_withdrawn)
        # Reported final equity is built from the reported totals so the
        # accounting identity holds bit for bit on the floats callers see.
        final_equity = starting_capital + gross_pl - withdrawn
        periods[-1] = replace(periods[-1], closing_equity=final_equity)
        daily[-1] = replace(daily[-1], equity=final_equity)

        return SimulationResult(
            final_equity=final_equity,
            total_pl=net_change(final_equity, starting_capital),
            total_withdrawn=withdrawn,
            gross_pl=gross_pl,
            max_drawdown_pct=float(max_drawdown),
            daily=daily,
            periods=periods,
        )


def simulate_capital_path(rows: Iterable[RawRow], config: CapitalPathConfig) -> SimulationResult:
    return CapitalPathSimulator(config).simulate(rows)
