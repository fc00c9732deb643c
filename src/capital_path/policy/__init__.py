"""Capital-management policies and withdrawal decisions."""

from capital_path.policy.engine import WithdrawalDecision, WithdrawalEngine
from capital_path.policy.models import (
    CapitalPathConfig,
    FixedAmount,
    LogType,
    NoWithdrawal,
    PercentOfMonthlyProfit,
    ResetToStartingFunds,
    WithdrawalMode,
    WithdrawalPolicy,
)

__all__ = [
    "CapitalPathConfig",
    "FixedAmount",
    "LogType",
    "NoWithdrawal",
    "PercentOfMonthlyProfit",
    "ResetToStartingFunds",
    "WithdrawalDecision",
    "WithdrawalEngine",
    "WithdrawalMode",
    "WithdrawalPolicy",
]
