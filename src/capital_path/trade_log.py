"""Trade log normalisation and CSV loading."""

from __future__ import annotations

import csv
import math
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from capital_path.errors import DataError
from capital_path.simulator.models import TradeLogRow


OPENED_KEYS = ("openedOn", "opened_on", "Date Opened")
CLOSED_KEYS = ("closedOn", "closed_on", "Date Closed")
PL_KEYS = ("pl", "P/L")
ID_KEYS = ("id", "ID")

RawRow = Union[TradeLogRow, Mapping[str, Any]]


def parse_date(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise DataError(f"{field_name} is missing or not a date: {value!r}")

    s = value.strip()
    # Normalise YYYY/MM/DD -> YYYY-MM-DD
    if len(s) >= 10 and s[4] == "/" and s[7] == "/":
        s = f"{s[:4]}-{s[5:7]}-{s[8:]}"
    s = s.replace("Z", "+00:00")
    s = s.replace(" ", "T", 1)
    try:
        parsed = datetime.fromisoformat(s)
    except ValueError as exc:
        raise DataError(f"{field_name} is not a valid date: {value!r}") from exc
    return parse_date(parsed, field_name)


def parse_pl(value: Any) -> float:
    if isinstance(value, bool):
        raise DataError(f"pl must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "")
    try:
        pl = float(value)
    except (TypeError, ValueError) as exc:
        raise DataError(f"pl must be a number, got {value!r}") from exc
    if not math.isfinite(pl):
        raise DataError(f"pl must be finite, got {value!r}")
    return pl


def _first(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in raw and raw[key] not in (None, ""):
            return raw[key]
    return None


def validate_row(row: TradeLogRow) -> TradeLogRow:
    if not isinstance(row.pl, (int, float)) or isinstance(row.pl, bool) or not math.isfinite(row.pl):
        raise DataError(f"pl must be a finite number, got {row.pl!r}")
    if not isinstance(row.opened_on, date) or not isinstance(row.closed_on, date):
        raise DataError(f"opened_on/closed_on must be dates: {row!r}")
    opened = row.opened_on.date() if isinstance(row.opened_on, datetime) else row.opened_on
    closed = row.closed_on.date() if isinstance(row.closed_on, datetime) else row.closed_on
    if closed < opened:
        raise DataError(f"closed_on {closed.isoformat()} is before opened_on {opened.isoformat()}")
    if opened is not row.opened_on or closed is not row.closed_on:
        return TradeLogRow(opened_on=opened, closed_on=closed, pl=float(row.pl), id=row.id)
    return row


def parse_trade_row(raw: RawRow) -> TradeLogRow:
    """Build a validated row from a ``TradeLogRow`` or a mapping.

    Logs are sized: ``pl`` is already the dollar result of the position.
    Sizing columns such as contracts, premium or margin requirement are
    ignored and never rescale ``pl``.
    """
    if isinstance(raw, TradeLogRow):
        return validate_row(raw)
    if not isinstance(raw, Mapping):
        raise DataError(f"Unsupported trade row: {raw!r}")

    closed_raw = _first(raw, CLOSED_KEYS)
    if closed_raw is None:
        raise DataError(f"Trade row has no close date: {dict(raw)!r}")
    opened_raw = _first(raw, OPENED_KEYS)
    if opened_raw is None:
        raise DataError(f"Trade row has no open date: {dict(raw)!r}")
    pl_raw = _first(raw, PL_KEYS)
    if pl_raw is None:
        raise DataError(f"Trade row has no pl: {dict(raw)!r}")

    row_id: Optional[Any] = _first(raw, ID_KEYS)
    return validate_row(
        TradeLogRow(
            opened_on=parse_date(opened_raw, "opened_on"),
            closed_on=parse_date(closed_raw, "closed_on"),
            pl=parse_pl(pl_raw),
            id=None if row_id is None else str(row_id),
        )
    )


def normalize_rows(rows: Iterable[RawRow]) -> list[TradeLogRow]:
    return [parse_trade_row(row) for row in rows]


def load_trade_log(path: str | Path) -> list[TradeLogRow]:
    """Read closed trades from a CSV export.

    Rows without a close date are still-open positions and are skipped.
    Any other malformed row fails the whole load.
    """
    path = Path(path)
    rows: list[TradeLogRow] = []
    with path.open(newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        # Header is line 1.
        for line_no, raw in enumerate(reader, start=2):
            if _first(raw, CLOSED_KEYS) is None:
                continue
            try:
                rows.append(parse_trade_row(raw))
            except DataError as exc:
                raise DataError(f"{path}:{line_no}: {exc}") from exc
    return rows
