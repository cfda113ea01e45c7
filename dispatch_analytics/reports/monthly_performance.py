from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    CAPACITY_OPTIMAL,
    CAPACITY_STRETCH,
    CAPACITY_UNDER_UTILIZED,
    CapacityStatus,
    ClaimStatus,
)
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.report_models import MonthlyPerformanceReport
from dispatch_analytics.operations.date_operations import (
    MONTH_NAMES,
    business_days_between,
    days_between,
    last_day_of_month,
    month_key,
)
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    round_half_up,
    run_report,
)


def classify_capacity(capacity_percentage: float) -> CapacityStatus:
    if capacity_percentage < CAPACITY_UNDER_UTILIZED:
        return CapacityStatus.UNDER_UTILIZED
    if capacity_percentage < CAPACITY_OPTIMAL:
        return CapacityStatus.OPTIMAL
    if capacity_percentage <= CAPACITY_STRETCH:
        return CapacityStatus.STRETCH
    return CapacityStatus.BURNOUT


def count_completed_in_month(claims: list[Claim], key: str) -> int:
    return sum(1 for claim in claims if claim.is_completed and claim.completion_month == key)


def count_backlog_in_month(claims: list[Claim], key: str) -> int:
    """Open claims (neither completed nor canceled) with an appointment in the month."""
    return sum(
        1
        for claim in claims
        if claim.appointment_start is not None
        and claim.status not in (ClaimStatus.COMPLETED, ClaimStatus.CANCELED)
        and month_key(claim.appointment_start.date()) == key
    )


def generate_monthly_performance_report(
    repository: BaseClaimsRepository,
    max_safe_capacity: int | None = None,
    as_of: date | None = None,
) -> MonthlyPerformanceReport:
    """
    Month-to-date throughput against the safe monthly capacity.

    Velocity is completed claims per elapsed business day (today included).
    The projection extends that velocity over the remaining business days.
    """
    today = as_of or date.today()
    capacity = max_safe_capacity or environment_configuration.max_safe_capacity
    claims = repository.fetch_claims()
    if not claims:
        raise NoDataException("No claims found for monthly performance")

    key = month_key(today)
    completed = count_completed_in_month(claims, key)
    backlog = count_backlog_in_month(claims, key)

    month_end = last_day_of_month(today.year, today.month)
    elapsed = business_days_between(today.replace(day=1), today)
    total = business_days_between(today.replace(day=1), month_end)
    remaining = total - elapsed

    velocity = completed / elapsed if elapsed > 0 else 0.0
    burnout_ratio = completed / capacity
    capacity_percentage = burnout_ratio * 100

    logger.info(f"Monthly performance {key}: {completed} completed, {backlog} in backlog")

    return MonthlyPerformanceReport(
        generated_at=datetime.now(),
        current_month=key,
        current_year=today.year,
        current_month_name=MONTH_NAMES[today.month - 1],
        monthly_completed_claims=completed,
        monthly_backlog=backlog,
        business_days_elapsed=elapsed,
        total_business_days_in_month=total,
        monthly_velocity=round_half_up(velocity),
        max_safe_capacity=capacity,
        monthly_burnout_ratio=round_half_up(burnout_ratio, 3),
        capacity_status=classify_capacity(capacity_percentage),
        capacity_percentage=round_half_up(capacity_percentage, 1),
        projected_end_of_month=int(round_half_up(completed + velocity * remaining, 0)),
        days_remaining=max(0, days_between(today, month_end)),
        recommended_daily_rate=round_half_up((capacity - completed) / remaining, 1) if remaining > 0 else 0.0,
    )


def get_monthly_completed_count(repository: BaseClaimsRepository, key: str) -> int:
    """Completed claims for a YYYY-MM month."""
    claims = repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_completion_date=True)
    return count_completed_in_month(claims, key)


if __name__ == "__main__":
    parser = create_report_parser("monthly_performance")
    parser.add_argument("--max_safe_capacity", type=int, default=None, help="Claims per month (optional)")
    args = parser.parse_args()
    print(
        run_report(
            "monthly_performance",
            generate_monthly_performance_report,
            pretty=args.pretty,
            max_safe_capacity=args.max_safe_capacity,
            as_of=args.as_of,
        )
    )
