"""JSON-ready reports for simulation results."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from capital_path.config.loader import serialize_config
from capital_path.policy.models import CapitalPathConfig
from capital_path.simulator.models import SimulationResult


def serialize_daily(result: SimulationResult) -> list[dict[str, Any]]:
    return [
        {"date": point.date.isoformat(), "equity": point.equity, "withdrawals": point.withdrawals}
        for point in result.daily
    ]


def serialize_periods(result: SimulationResult) -> list[dict[str, Any]]:
    return [
        {
            "period": period.label,
            "trades": len(period.rows),
            "profit": period.profit,
            "equity_before_withdrawal": period.equity_before_withdrawal,
            "withdrawal": period.withdrawal,
            "closing_equity": period.closing_equity,
        }
        for period in result.periods
    ]


def build_report(
    result: SimulationResult,
    config: CapitalPathConfig,
    config_hash: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        "generated_at_utc": generated_at.isoformat(),
        "config_hash": config_hash,
        "config": serialize_config(config),
        "summary": {
            "final_equity": result.final_equity,
            "total_pl": result.total_pl,
            "gross_pl": result.gross_pl,
            "total_withdrawn": result.total_withdrawn,
            "max_drawdown_pct": result.max_drawdown_pct,
            "periods": len(result.periods),
            "trading_days": len(result.daily),
        },
        "periods": serialize_periods(result),
        "daily": serialize_daily(result),
    }
