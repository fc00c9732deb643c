"""Capital path simulation for closed-trade logs."""

from capital_path.errors import CapitalPathError, ConfigurationError, DataError
from capital_path.policy import (
    CapitalPathConfig,
    FixedAmount,
    LogType,
    NoWithdrawal,
    PercentOfMonthlyProfit,
    ResetToStartingFunds,
    WithdrawalMode,
)
from capital_path.simulator import (
    AccountingPeriod,
    CapitalPathSimulator,
    DailyEquityPoint,
    SimulationResult,
    TradeLogRow,
    simulate_capital_path,
)

__version__ = "0.1.0"

__all__ = [
    "AccountingPeriod",
    "CapitalPathConfig",
    "CapitalPathError",
    "CapitalPathSimulator",
    "ConfigurationError",
    "DailyEquityPoint",
    "DataError",
    "FixedAmount",
    "LogType",
    "NoWithdrawal",
    "PercentOfMonthlyProfit",
    "ResetToStartingFunds",
    "SimulationResult",
    "TradeLogRow",
    "WithdrawalMode",
    "simulate_capital_path",
]
