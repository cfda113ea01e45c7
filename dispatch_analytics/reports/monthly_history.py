"""
Monthly performance history.

Once per month the previous month's aggregate is written to the performance
log together with per-firm activity rows. The history view reads the log back
and recomputes firm activity from live completed claims.
"""

from datetime import date

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.logging_models import (
    MonthlyFirmActivity,
    MonthlyPerformanceLogEntry,
)
from dispatch_analytics.models.report_models import FirmMonthData, MonthlyHistoryReport
from dispatch_analytics.operations.date_operations import (
    MONTH_NAMES,
    business_days_in_month,
    month_key,
    parse_month_key,
    previous_month,
)
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.reports.monthly_performance import (
    count_backlog_in_month,
    count_completed_in_month,
)
from dispatch_analytics.tools.firm_configuration import get_firm_registry
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    round_half_up,
    run_report,
)


def firm_activity_by_month(claims: list[Claim], month: str | None = None) -> list[MonthlyFirmActivity]:
    """
    Completed claims and revenue per (month, normalized firm).

    :param month: Only include this YYYY-MM month.
    """
    registry = get_firm_registry()
    activity: dict[tuple[str, str], MonthlyFirmActivity] = {}
    for claim in claims:
        if not claim.is_completed:
            continue
        key = claim.completion_month
        if month is not None and key != month:
            continue
        firm = normalize_firm_name(claim.firm_name, registry)
        row = activity.get((key, firm))
        if row is None:
            row = MonthlyFirmActivity(month=key, firm_name=firm)
            activity[(key, firm)] = row
        row.claims_completed += 1
        row.revenue_generated += claim.recorded_amount

    rows = sorted(activity.values(), key=lambda row: (row.month, row.firm_name))
    for row in rows:
        row.revenue_generated = round_half_up(row.revenue_generated)
    return rows


def build_monthly_log_entry(
    claims: list[Claim],
    month: str,
    max_safe_capacity: int,
) -> MonthlyPerformanceLogEntry:
    completed = count_completed_in_month(claims, month)
    business_days = business_days_in_month(month)
    firms_active = len({row.firm_name for row in firm_activity_by_month(claims, month)})
    return MonthlyPerformanceLogEntry(
        month=month,
        completed_claims=completed,
        backlog=count_backlog_in_month(claims, month),
        avg_velocity=round_half_up(completed / business_days) if business_days else 0.0,
        burnout_ratio=round_half_up(completed / max_safe_capacity, 3),
        firms_active=firms_active,
    )


def check_and_log_previous_month(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
    max_safe_capacity: int | None = None,
) -> str | None:
    """
    Log the previous calendar month if it has not been logged yet.

    Safe to call repeatedly: the log insert only writes when the month is
    absent, and firm rows are only written by the call that inserted it.

    :return: The logged month (YYYY-MM), or None if it was already logged.
    """
    month = month_key(previous_month(as_of or date.today()))
    if repository.month_logged(month):
        logger.info(f"Month {month} already logged")
        return None

    claims = repository.fetch_claims()
    capacity = max_safe_capacity or environment_configuration.max_safe_capacity
    entry = build_monthly_log_entry(claims, month, capacity)

    if not repository.insert_monthly_log(entry):
        logger.info(f"Month {month} was logged concurrently, skipping firm activity")
        return None

    firm_rows = firm_activity_by_month(claims, month)
    repository.insert_firm_activity(firm_rows)
    logger.info(
        f"Logged {month}: {entry.completed_claims} completed, {entry.backlog} backlog, "
        f"{len(firm_rows)} firm row(s)"
    )
    return month


def build_firm_monthly_grid(activity: list[MonthlyFirmActivity]) -> dict[str, dict[str, list[FirmMonthData]]]:
    """Firm -> year -> 12 months, zero-filled where the firm had no activity."""
    grid: dict[str, dict[str, list[FirmMonthData]]] = {}
    for row in activity:
        year, month = parse_month_key(row.month)
        months = grid.setdefault(row.firm_name, {}).setdefault(
            str(year),
            [FirmMonthData(month=number, month_name=MONTH_NAMES[number - 1]) for number in range(1, 13)],
        )
        business_days = business_days_in_month(row.month)
        months[month - 1] = FirmMonthData(
            month=month,
            month_name=MONTH_NAMES[month - 1],
            claims_completed=row.claims_completed,
            revenue_generated=row.revenue_generated,
            avg_velocity=round_half_up(row.claims_completed / business_days) if business_days else 0.0,
        )
    return grid


def fetch_monthly_history(repository: BaseClaimsRepository) -> MonthlyHistoryReport:
    historical = repository.fetch_monthly_logs()
    claims = repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_completion_date=True)
    activity = firm_activity_by_month(claims)
    return MonthlyHistoryReport(
        historical_performance=historical,
        firm_activity=activity,
        firm_monthly_data=build_firm_monthly_grid(activity),
        months_tracked=len(historical),
        earliest_month=historical[0].month if historical else None,
        latest_month=historical[-1].month if historical else None,
    )


def generate_monthly_history_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> MonthlyHistoryReport:
    check_and_log_previous_month(repository, as_of=as_of)
    return fetch_monthly_history(repository)


if __name__ == "__main__":
    parser = create_report_parser("monthly_history")
    args = parser.parse_args()
    print(run_report("monthly_history", generate_monthly_history_report, pretty=args.pretty, as_of=args.as_of))
