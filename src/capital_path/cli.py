"""Command-line entry point: trade log + config -> JSON report."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from capital_path.config import compute_config_hash, load_config
from capital_path.errors import CapitalPathError
from capital_path.monitoring import AuditLog
from capital_path.report import build_report
from capital_path.simulator import simulate_capital_path
from capital_path.trade_log import load_trade_log


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="capital-path", description=__doc__)
    parser.add_argument("--trades", required=True, help="CSV trade log")
    parser.add_argument("--config", required=True, help="YAML capital path config")
    parser.add_argument("--output", required=True, help="Where to write the JSON report")
    parser.add_argument("--audit-log", default=None, help="Append run events to this JSON-lines file")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config_path = Path(args.config)
    trades_path = Path(args.trades)
    output_path = Path(args.output)

    audit_log = AuditLog(args.audit_log, run_id=args.run_id) if args.audit_log else None

    try:
        config_hash = compute_config_hash(config_path)
        if audit_log is not None:
            audit_log.config_hash = config_hash
        config = load_config(config_path)
        trades = load_trade_log(trades_path)
        result = simulate_capital_path(trades, config)
    except (CapitalPathError, OSError) as exc:
        if audit_log is not None:
            audit_log.log(
                "simulation_failed",
                {"error": type(exc).__name__, "message": str(exc), "trades_path": str(trades_path)},
            )
        raise SystemExit(f"{type(exc).__name__}: {exc}") from exc

    report = build_report(result, config, config_hash=config_hash)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")

    if audit_log is not None:
        audit_log.log(
            "simulation_completed",
            {"trades_path": str(trades_path), "output_path": str(output_path), **report["summary"]},
        )
    log.info(
        "Simulated %d trades: final_equity=%.2f total_withdrawn=%.2f",
        len(trades),
        result.final_equity,
        result.total_withdrawn,
    )
    print(f"Wrote {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
