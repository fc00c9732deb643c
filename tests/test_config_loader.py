from pathlib import Path

import pytest

yaml = pytest.importorskip("yaml")

from capital_path import ConfigurationError, FixedAmount, PercentOfMonthlyProfit, ResetToStartingFunds
from capital_path.config import compute_config_hash, load_config, parse_config, serialize_config
from capital_path.policy import WithdrawalMode


def test_load_config_sample():
    config = load_config(Path(__file__).resolve().parents[1] / "configs" / "capital_path_v1.yaml")
    assert config.starting_capital == 100000
    assert config.withdrawal == PercentOfMonthlyProfit(0.3)


def test_load_config_accepts_bare_mapping(tmp_path):
    path = tmp_path / "bare.yaml"
    path.write_text("startingCapital: 50000\nwithdrawalMode: resetToStartingFunds\n", encoding="utf-8")

    config = load_config(path)

    assert config.starting_capital == 50000
    assert config.withdrawal == ResetToStartingFunds()


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_parse_config_defaults_to_no_withdrawal():
    config = parse_config({"starting_capital": 1000})
    assert config.withdrawal_mode == WithdrawalMode.NONE


def test_parse_config_requires_percent_in_percent_mode():
    with pytest.raises(ConfigurationError, match="withdrawal_profit_percent"):
        parse_config({"startingCapital": 1000, "withdrawalMode": "percentOfMonthlyProfit"})


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"startingCapital": -5},
        {"startingCapital": 1000, "logType": "oneLot"},
        {"startingCapital": 1000, "withdrawalMode": "monthly"},
        {"startingCapital": 1000, "withdrawalMode": "percentOfMonthlyProfit", "withdrawalProfitPercent": 2},
        {"startingCapital": 1000, "withdrawalMode": "fixedAmount"},
    ],
)
def test_parse_config_rejects_invalid(data):
    with pytest.raises(ConfigurationError):
        parse_config(data)


def test_serialize_config_round_trips_through_parse():
    config = parse_config(
        {"startingCapital": 25000, "withdrawalMode": "fixedAmount", "fixedWithdrawalAmount": 500}
    )

    payload = serialize_config(config)

    assert payload == {
        "starting_capital": 25000.0,
        "log_type": "sized",
        "withdrawal_mode": "fixedAmount",
        "fixed_withdrawal_amount": 500.0,
    }
    assert parse_config(payload).withdrawal == FixedAmount(500)


def test_config_hash_changes_with_content(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("starting_capital: 1000\n", encoding="utf-8")
    first = compute_config_hash(path)
    path.write_text("starting_capital: 2000\n", encoding="utf-8")

    assert compute_config_hash(path) != first
