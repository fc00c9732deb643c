from datetime import date, datetime, timedelta, timezone

import pytest

from capital_path import DataError, TradeLogRow
from capital_path.trade_log import load_trade_log, parse_date, parse_trade_row


def test_parse_trade_row_accepts_camel_and_snake_keys():
    camel = parse_trade_row({"openedOn": "2025-01-01", "closedOn": "2025-01-03", "pl": 12.5, "id": 7})
    snake = parse_trade_row({"opened_on": "2025-01-01", "closed_on": "2025-01-03", "pl": "12.5"})

    assert camel == TradeLogRow(date(2025, 1, 1), date(2025, 1, 3), 12.5, id="7")
    assert snake.closed_on == camel.closed_on
    assert snake.pl == 12.5


def test_parse_trade_row_accepts_export_headers():
    row = parse_trade_row({"Date Opened": "2025/02/01", "Date Closed": "2025/02/04", "P/L": "$1,250.50"})

    assert row.opened_on == date(2025, 2, 1)
    assert row.closed_on == date(2025, 2, 4)
    assert row.pl == 1250.5


def test_sizing_columns_do_not_rescale_pl():
    row = parse_trade_row(
        {
            "Date Opened": "2025-01-02",
            "Date Closed": "2025-01-03",
            "P/L": "1,250.50",
            "No. of Contracts": "4",
            "contracts": 4,
            "marginReq": 9_000,
            "Premium": "3.10",
        }
    )

    assert row.pl == 1_250.5


def test_parse_date_converts_aware_datetimes_to_utc():
    late_evening = datetime(2025, 1, 31, 22, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert parse_date(late_evening, "closed_on") == date(2025, 2, 1)
    assert parse_date("2025-01-31T22:00:00Z", "closed_on") == date(2025, 1, 31)
    assert parse_date("2025-01-31 09:30:00", "closed_on") == date(2025, 1, 31)


def test_datetime_rows_are_normalised_to_dates():
    row = parse_trade_row(TradeLogRow(datetime(2025, 1, 1, 9), datetime(2025, 1, 2, 16), 10.0))

    assert row.opened_on == date(2025, 1, 1)
    assert row.closed_on == date(2025, 1, 2)
    assert not isinstance(row.closed_on, datetime)


@pytest.mark.parametrize(
    "raw",
    [
        {"openedOn": "2025-01-01", "pl": 1},
        {"closedOn": "2025-01-01", "pl": 1},
        {"openedOn": "2025-01-01", "closedOn": "2025-01-02"},
        {"openedOn": "yesterday", "closedOn": "2025-01-02", "pl": 1},
        {"openedOn": "2025-01-01", "closedOn": "2025-01-02", "pl": "lots"},
        {"openedOn": "2025-01-01", "closedOn": "2025-01-02", "pl": "nan"},
        {"openedOn": "2025-01-03", "closedOn": "2025-01-02", "pl": 1},
    ],
)
def test_malformed_rows_raise_data_error(raw):
    with pytest.raises(DataError):
        parse_trade_row(raw)


def test_load_trade_log_skips_open_positions(tmp_path):
    path = tmp_path / "trades.csv"
    path.write_text(
        "Date Opened,Date Closed,P/L\n"
        "2025-01-01,2025-01-02,100\n"
        "2025-01-05,,50\n"
        "2025-01-03,2025-01-04,-25.5\n",
        encoding="utf-8",
    )

    rows = load_trade_log(path)

    assert [row.pl for row in rows] == [100.0, -25.5]


def test_load_trade_log_reports_line_number(tmp_path):
    path = tmp_path / "trades.csv"
    path.write_text(
        "openedOn,closedOn,pl\n"
        "2025-01-01,2025-01-02,100\n"
        "2025-01-09,2025-01-04,10\n",
        encoding="utf-8",
    )

    with pytest.raises(DataError, match=":3:"):
        load_trade_log(path)
