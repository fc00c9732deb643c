"""Period-close withdrawal decisions."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Union

from capital_path.policy.models import (
    CapitalPathConfig,
    FixedAmount,
    NoWithdrawal,
    PercentOfMonthlyProfit,
    ResetToStartingFunds,
)


Amount = Union[Decimal, float, int]

ZERO = Decimal(0)

# Wide enough that sums and products of float-derived decimals never round.
EXACT_PRECISION = 400


def to_decimal(value: Amount) -> Decimal:
    # Decimal(float) is exact: it carries every binary digit of the float.
    return value if isinstance(value, Decimal) else Decimal(value)


@dataclass(frozen=True)
class WithdrawalDecision:
    amount: Decimal
    equity_after: Decimal


class WithdrawalEngine:
    """Decides withdrawals in exact decimal arithmetic."""

    def __init__(self, config: CapitalPathConfig) -> None:
        self.config = config
        self.starting_capital = to_decimal(config.starting_capital)

    @staticmethod
    def clamp(desired: Amount, equity: Amount) -> Amount:
        # Never withdraw more than the account holds, never deposit.
        return max(0, min(desired, equity))

    def desired_withdrawal(self, period_profit: Decimal, equity: Decimal) -> Decimal:
        policy = self.config.withdrawal
        if isinstance(policy, NoWithdrawal):
            return ZERO
        if isinstance(policy, PercentOfMonthlyProfit):
            if period_profit > 0 and policy.percent > 0:
                return period_profit * to_decimal(policy.percent)
            return ZERO
        if isinstance(policy, ResetToStartingFunds):
            if equity > self.starting_capital:
                return equity - self.starting_capital
            return ZERO
        if isinstance(policy, FixedAmount):
            if period_profit > 0:
                return to_decimal(policy.amount)
            return ZERO
        raise TypeError(f"Unhandled withdrawal policy: {policy!r}")

    def close_period(self, period_profit: Amount, equity: Amount) -> WithdrawalDecision:
        with localcontext() as ctx:
            ctx.prec = EXACT_PRECISION
            period_profit = to_decimal(period_profit)
            equity = to_decimal(equity)
            amount = to_decimal(self.clamp(self.desired_withdrawal(period_profit, equity), equity))
            if amount <= 0:
                return WithdrawalDecision(amount=ZERO, equity_after=equity)
            return WithdrawalDecision(amount=amount, equity_after=equity - amount)
