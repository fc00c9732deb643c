"""Load capital path configuration files."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from capital_path.errors import ConfigurationError
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


def load_config(path: str | Path) -> CapitalPathConfig:
    path = Path(path)
    data = _load_yaml(path)
    section = data.get("capital_path", data)
    if not isinstance(section, dict):
        raise ConfigurationError("capital_path section must be a mapping")
    return parse_config(section)


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def parse_config(data: Mapping[str, Any]) -> CapitalPathConfig:
    """Build a config from the flat, string-tagged form.

    Keys may be camelCase (``startingCapital``) or snake_case
    (``starting_capital``).
    """
    starting_capital = _require(data, "starting_capital", "startingCapital")
    log_type = _parse_enum(LogType, _get(data, "log_type", "logType", default="sized"), "log_type")
    mode = _parse_enum(
        WithdrawalMode, _get(data, "withdrawal_mode", "withdrawalMode", default="none"), "withdrawal_mode"
    )
    return CapitalPathConfig(
        starting_capital=starting_capital,
        withdrawal=_parse_withdrawal(mode, data),
        log_type=log_type,
    )


def serialize_config(config: CapitalPathConfig) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "starting_capital": float(config.starting_capital),
        "log_type": config.log_type.value,
        "withdrawal_mode": config.withdrawal_mode.value,
    }
    if isinstance(config.withdrawal, PercentOfMonthlyProfit):
        payload["withdrawal_profit_percent"] = float(config.withdrawal.percent)
    if isinstance(config.withdrawal, FixedAmount):
        payload["fixed_withdrawal_amount"] = float(config.withdrawal.amount)
    return payload


def _parse_withdrawal(mode: WithdrawalMode, data: Mapping[str, Any]) -> WithdrawalPolicy:
    if mode == WithdrawalMode.PERCENT_OF_MONTHLY_PROFIT:
        percent = _get(data, "withdrawal_profit_percent", "withdrawalProfitPercent")
        if percent is None:
            raise ConfigurationError("withdrawal_profit_percent is required for percentOfMonthlyProfit")
        return PercentOfMonthlyProfit(percent=percent)
    if mode == WithdrawalMode.FIXED_AMOUNT:
        amount = _get(data, "fixed_withdrawal_amount", "fixedWithdrawalAmount")
        if amount is None:
            raise ConfigurationError("fixed_withdrawal_amount is required for fixedAmount")
        return FixedAmount(amount=amount)
    if mode == WithdrawalMode.RESET_TO_STARTING_FUNDS:
        return ResetToStartingFunds()
    return NoWithdrawal()


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config is not valid YAML: {path}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError("Config must be a mapping")
    return data


def _get(data: Mapping[str, Any], *keys: str, default: Optional[Any] = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require(data: Mapping[str, Any], *keys: str) -> Any:
    value = _get(data, *keys)
    if value is None:
        raise ConfigurationError(f"Missing required config key: {keys[0]}")
    return value


def _parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid {key}: {value}") from exc
