from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.logger import logger
from dispatch_analytics.models.report_models import (
    BenchmarkSummary,
    MonthlyBenchmark,
    SeasonalPerformanceBenchmarkReport,
)
from dispatch_analytics.operations.date_operations import MONTH_NAMES
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.reports.completed_claims_by_month import fetch_completed_claims_frame
from dispatch_analytics.reports.seasonality_profile import MONTHS, filter_firm, year_month_grid
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    round_half_up,
    run_report,
)


def _summary(data: list[MonthlyBenchmark]) -> BenchmarkSummary:
    indexed = [row for row in data if row.index > 0]
    if not indexed:
        return BenchmarkSummary()
    best = max(indexed, key=lambda row: row.index)
    worst = min(indexed, key=lambda row: row.index)
    return BenchmarkSummary(
        avg_index=round_half_up(sum(row.index for row in indexed) / len(indexed)),
        best_month=best.month,
        worst_month=worst.month,
        months_above_expected=sum(1 for row in indexed if row.index > 1.0),
        months_below_expected=sum(1 for row in indexed if row.index < 1.0),
    )


def generate_seasonal_performance_benchmark_report(
    repository: BaseClaimsRepository,
    firm: str | None = None,
    as_of: date | None = None,
) -> SeasonalPerformanceBenchmarkReport:
    """
    Compare this year's completed claims per month with prior years.

    The index is current / historical average, where the average only counts
    prior years that have claims in that month. Months without history get an
    index of 0.
    """
    current_year = (as_of or date.today()).year
    grid = year_month_grid(filter_firm(fetch_completed_claims_frame(repository, as_of), firm))
    years = [int(year) for year in grid.index]
    historical = grid[grid.index < current_year]

    data: list[MonthlyBenchmark] = []
    for month in MONTHS:
        prior = [int(value) for value in historical[month] if value > 0] if not historical.empty else []
        historical_avg = sum(prior) / len(prior) if prior else 0.0
        current = int(grid.at[current_year, month]) if current_year in grid.index else 0
        data.append(
            MonthlyBenchmark(
                month=MONTH_NAMES[month - 1],
                historical_avg=round_half_up(historical_avg, 1),
                current_year=current,
                index=round_half_up(current / historical_avg) if historical_avg > 0 else 0.0,
            )
        )

    if historical.empty:
        logger.warning(f"No completed claims before {current_year}; benchmark indexes are 0")

    return SeasonalPerformanceBenchmarkReport(
        generated_at=datetime.now(),
        firm=normalize_firm_name(firm) if firm else None,
        data=data,
        current_year=current_year,
        years_included=years,
        summary=_summary(data),
    )


if __name__ == "__main__":
    parser = create_report_parser("seasonal_performance_benchmark")
    parser.add_argument("--firm", type=str, default=None, help="Limit to one firm (optional)")
    args = parser.parse_args()
    print(
        run_report(
            "seasonal_performance_benchmark",
            generate_seasonal_performance_benchmark_report,
            pretty=args.pretty,
            firm=args.firm,
            as_of=args.as_of,
        )
    )
