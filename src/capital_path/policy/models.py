"""Data models for capital-management policies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from capital_path.errors import ConfigurationError


class LogType(str, Enum):
    # Rows already carry fully sized dollar P/L.
    SIZED = "sized"


class WithdrawalMode(str, Enum):
    NONE = "none"
    PERCENT_OF_MONTHLY_PROFIT = "percentOfMonthlyProfit"
    RESET_TO_STARTING_FUNDS = "resetToStartingFunds"
    FIXED_AMOUNT = "fixedAmount"


def _finite(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class NoWithdrawal:
    mode = WithdrawalMode.NONE

    def validate(self) -> None:
        return None


@dataclass(frozen=True)
class PercentOfMonthlyProfit:
    """Withdraw a fraction of each profitable month's net P/L."""

    percent: float
    mode = WithdrawalMode.PERCENT_OF_MONTHLY_PROFIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "percent", _finite(self.percent, "withdrawal_profit_percent"))
        self.validate()

    def validate(self) -> None:
        percent = _finite(self.percent, "withdrawal_profit_percent")
        if not 0.0 <= percent <= 1.0:
            raise ConfigurationError(
                f"withdrawal_profit_percent must be within [0, 1], got {self.percent!r}"
            )


@dataclass(frozen=True)
class ResetToStartingFunds:
    """Sweep everything above starting capital at each month close."""

    mode = WithdrawalMode.RESET_TO_STARTING_FUNDS

    def validate(self) -> None:
        return None


@dataclass(frozen=True)
class FixedAmount:
    """Withdraw a flat amount after each profitable month."""

    amount: float
    mode = WithdrawalMode.FIXED_AMOUNT

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _finite(self.amount, "fixed_withdrawal_amount"))
        self.validate()

    def validate(self) -> None:
        amount = _finite(self.amount, "fixed_withdrawal_amount")
        if amount < 0:
            raise ConfigurationError(f"fixed_withdrawal_amount must be >= 0, got {self.amount!r}")


WithdrawalPolicy = Union[NoWithdrawal, PercentOfMonthlyProfit, ResetToStartingFunds, FixedAmount]

_POLICY_TYPES = (NoWithdrawal, PercentOfMonthlyProfit, ResetToStartingFunds, FixedAmount)


@dataclass(frozen=True)
class CapitalPathConfig:
    starting_capital: float
    withdrawal: WithdrawalPolicy = field(default_factory=NoWithdrawal)
    log_type: LogType = LogType.SIZED

    def __post_init__(self) -> None:
        object.__setattr__(self, "starting_capital", _finite(self.starting_capital, "starting_capital"))
        if isinstance(self.log_type, str) and not isinstance(self.log_type, LogType):
            try:
                object.__setattr__(self, "log_type", LogType(self.log_type))
            except ValueError as exc:
                raise ConfigurationError(f"Unsupported log_type: {self.log_type!r}") from exc
        self.validate()

    def validate(self) -> None:
        capital = _finite(self.starting_capital, "starting_capital")
        if capital <= 0:
            raise ConfigurationError(f"starting_capital must be positive, got {self.starting_capital!r}")
        if not isinstance(self.log_type, LogType):
            raise ConfigurationError(f"Unsupported log_type: {self.log_type!r}")
        if not isinstance(self.withdrawal, _POLICY_TYPES):
            raise ConfigurationError(f"Unsupported withdrawal policy: {self.withdrawal!r}")
        self.withdrawal.validate()

    @property
    def withdrawal_mode(self) -> WithdrawalMode:
        return self.withdrawal.mode

    @property
    def withdrawal_profit_percent(self) -> Optional[float]:
        if isinstance(self.withdrawal, PercentOfMonthlyProfit):
            return float(self.withdrawal.percent)
        return None
