import math
from datetime import date, datetime

import pandas as pd

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.logger import logger
from dispatch_analytics.models.report_models import (
    MonthAverage,
    MonthlyClaimCount,
    SeasonalityProfileReport,
    SeasonalitySummary,
)
from dispatch_analytics.operations.date_operations import MONTH_NAMES
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.reports.completed_claims_by_month import fetch_completed_claims_frame
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    round_half_up,
    run_report,
)

MONTHS = range(1, 13)


def year_month_grid(frame: pd.DataFrame) -> pd.DataFrame:
    """Completed-claim counts with one row per year and all 12 month columns."""
    if frame.empty:
        return pd.DataFrame(columns=list(MONTHS), dtype="int64")
    return (
        frame.groupby(["year", "month"])
        .size()
        .unstack(fill_value=0)
        .reindex(columns=list(MONTHS), fill_value=0)
        .sort_index()
    )


def filter_firm(frame: pd.DataFrame, firm: str | None) -> pd.DataFrame:
    if not firm:
        return frame
    return frame[frame["firm_name"] == normalize_firm_name(firm)]


def _month_averages(grid: pd.DataFrame) -> list[MonthAverage]:
    averages = []
    for month in MONTHS:
        values = [int(value) for value in grid[month] if value > 0] if not grid.empty else []
        averages.append(
            MonthAverage(
                month=month,
                month_name=MONTH_NAMES[month - 1],
                avg_claims=sum(values) / len(values) if values else 0.0,
            )
        )
    return averages


def _summary(grid: pd.DataFrame, month_averages: list[MonthAverage]) -> SeasonalitySummary:
    nonzero = [int(value) for value in grid.to_numpy().ravel() if value > 0] if not grid.empty else []
    overall_avg = sum(nonzero) / len(nonzero) if nonzero else 0.0

    with_data = [average for average in month_averages if average.avg_claims > 0]
    peak = max(with_data, key=lambda average: average.avg_claims, default=None)
    low = min(with_data, key=lambda average: average.avg_claims, default=None)

    spread = 0.0
    if len(with_data) > 1:
        spread = math.sqrt(
            sum((average.avg_claims - overall_avg) ** 2 for average in with_data) / len(with_data)
        )

    return SeasonalitySummary(
        overall_avg=round_half_up(overall_avg, 1),
        peak_month=peak,
        low_month=low,
        seasonal_variance=round_half_up(spread / overall_avg * 100, 1) if overall_avg > 0 else 0.0,
    )


def generate_seasonality_profile_report(
    repository: BaseClaimsRepository,
    firm: str | None = None,
    as_of: date | None = None,
) -> SeasonalityProfileReport:
    """
    Completed claims per year and month, with per-month averages across years.

    Every year that has data carries all 12 months, zero-filled. Month
    averages only count years where that month has claims.
    """
    frame = filter_firm(fetch_completed_claims_frame(repository, as_of), firm)
    grid = year_month_grid(frame)

    years = {
        str(year): [
            MonthlyClaimCount(month=month, month_name=MONTH_NAMES[month - 1], completed_claims=int(row[month]))
            for month in MONTHS
        ]
        for year, row in grid.iterrows()
    }
    month_averages = _month_averages(grid)

    logger.info(
        f"Seasonality profile{' for ' + firm if firm else ''}: {len(frame)} claim(s) across {len(years)} year(s)"
    )

    return SeasonalityProfileReport(
        generated_at=datetime.now(),
        firm=normalize_firm_name(firm) if firm else None,
        years=years,
        month_averages=[
            average.model_copy(update={"avg_claims": round_half_up(average.avg_claims, 1)})
            for average in month_averages
        ],
        summary=_summary(grid, month_averages),
    )


if __name__ == "__main__":
    parser = create_report_parser("seasonality_profile")
    parser.add_argument("--firm", type=str, default=None, help="Limit to one firm (optional)")
    args = parser.parse_args()
    print(
        run_report(
            "seasonality_profile",
            generate_seasonality_profile_report,
            pretty=args.pretty,
            firm=args.firm,
            as_of=args.as_of,
        )
    )
