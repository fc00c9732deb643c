from datetime import date

from capital_path import (
    CapitalPathConfig,
    PercentOfMonthlyProfit,
    ResetToStartingFunds,
    TradeLogRow,
    simulate_capital_path,
)


trades = [
    TradeLogRow(opened_on=date(2025, 1, 2), closed_on=date(2025, 1, 3), pl=10_000),
    TradeLogRow(opened_on=date(2025, 1, 6), closed_on=date(2025, 1, 10), pl=-5_000),
    TradeLogRow(opened_on=date(2025, 1, 13), closed_on=date(2025, 1, 17), pl=5_000),
    TradeLogRow(opened_on=date(2025, 2, 3), closed_on=date(2025, 2, 4), pl=-5_000),
    TradeLogRow(opened_on=date(2025, 2, 10), closed_on=date(2025, 2, 11), pl=-5_000),
]

for policy in (PercentOfMonthlyProfit(0.5), ResetToStartingFunds()):
    config = CapitalPathConfig(starting_capital=100_000, withdrawal=policy)
    result = simulate_capital_path(trades, config)
    print(f"Policy: {config.withdrawal_mode.value}")
    for period in result.periods:
        print(
            f"  {period.label}: profit={period.profit:,.2f} "
            f"withdrawal={period.withdrawal:,.2f} closing={period.closing_equity:,.2f}"
        )
    print("  Final equity:", result.final_equity)
    print("  Total P/L:", result.total_pl)
    print("  Total withdrawn:", result.total_withdrawn)
