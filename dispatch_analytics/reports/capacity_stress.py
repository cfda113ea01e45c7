from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    BACKLOG_HEALTHY,
    BACKLOG_WARNING,
    BOOKING_LOW_DAYS,
    BOOKING_MEDIUM_DAYS,
    TREND_DELTA,
    BacklogStatus,
    BookingPressure,
    ClaimStatus,
    ThroughputTrend,
)
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.report_models import (
    CapacityIndicators,
    CapacityStressReport,
    CapacitySummary,
    WeeklyThroughput,
)
from dispatch_analytics.operations.date_operations import (
    add_days,
    days_between,
    format_week_label,
    week_end,
    week_start,
)
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    non_negative_int,
    percentage,
    require_minimum,
    round_half_up,
    run_report,
)

OPEN_STATUSES = (ClaimStatus.SCHEDULED, ClaimStatus.IN_PROGRESS)
TREND_WINDOW_WEEKS = 3

TREND_DESCRIPTIONS = {
    ThroughputTrend.IMPROVING: "Backlog decreasing - good throughput",
    ThroughputTrend.DECLINING: "Backlog increasing - throughput under pressure",
    ThroughputTrend.STABLE: "Backlog stable - balanced throughput",
}


def _in_week(value: datetime | None, start: date, end: date) -> bool:
    return value is not None and start <= value.date() <= end


def days_booked_ahead(claims: list[Claim], reference: date) -> int:
    """Days from ``reference`` to the furthest open appointment known on that day."""
    furthest: date | None = None
    for claim in claims:
        if claim.status not in OPEN_STATUSES or claim.appointment_start is None:
            continue
        if claim.created_at is not None and claim.created_at.date() > reference:
            continue
        appointment = claim.appointment_start.date()
        if furthest is None or appointment > furthest:
            furthest = appointment
    if furthest is None:
        return 0
    return max(0, days_between(reference, furthest))


def _week_throughput(claims: list[Claim], start: date, today: date) -> WeeklyThroughput:
    end = week_end(start)
    assigned = sum(1 for claim in claims if claim.assigned_to and _in_week(claim.created_at, start, end))
    completed = sum(
        1
        for claim in claims
        if claim.status == ClaimStatus.COMPLETED and _in_week(claim.completion_date, start, end)
    )
    return WeeklyThroughput(
        week_start=start,
        week_end=end,
        week_label=format_week_label(start),
        claims_assigned=assigned,
        claims_completed=completed,
        backlog_growth=assigned - completed,
        days_booked_ahead=days_booked_ahead(claims, min(end, today)),
        utilization_rate=round_half_up(percentage(completed, assigned), 1),
        is_current_week=start <= today <= end,
    )


def classify_trend(weekly_data: list[WeeklyThroughput]) -> ThroughputTrend:
    """
    Compare average backlog growth of the last three weeks with the three before.

    Falling backlog growth is an improvement.
    """
    if len(weekly_data) < TREND_WINDOW_WEEKS * 2:
        return ThroughputTrend.STABLE
    recent = weekly_data[-TREND_WINDOW_WEEKS:]
    previous = weekly_data[-TREND_WINDOW_WEEKS * 2 : -TREND_WINDOW_WEEKS]
    recent_avg = sum(week.backlog_growth for week in recent) / TREND_WINDOW_WEEKS
    previous_avg = sum(week.backlog_growth for week in previous) / TREND_WINDOW_WEEKS
    difference = previous_avg - recent_avg
    if difference > TREND_DELTA:
        return ThroughputTrend.IMPROVING
    if difference < -TREND_DELTA:
        return ThroughputTrend.DECLINING
    return ThroughputTrend.STABLE


def classify_backlog(avg_backlog_growth: float) -> BacklogStatus:
    if avg_backlog_growth <= BACKLOG_HEALTHY:
        return BacklogStatus.HEALTHY
    if avg_backlog_growth <= BACKLOG_WARNING:
        return BacklogStatus.WARNING
    return BacklogStatus.CRITICAL


def classify_booking_pressure(booked_days: int) -> BookingPressure:
    if booked_days <= BOOKING_LOW_DAYS:
        return BookingPressure.LOW
    if booked_days <= BOOKING_MEDIUM_DAYS:
        return BookingPressure.MEDIUM
    return BookingPressure.HIGH


def _fetch_capacity_claims(repository: BaseClaimsRepository) -> list[Claim]:
    claims = repository.fetch_claims()
    if not claims:
        raise NoDataException("No claims found for capacity analysis")
    return claims


def generate_capacity_stress_report(
    repository: BaseClaimsRepository,
    historical_weeks: int = 12,
    as_of: date | None = None,
) -> CapacityStressReport:
    """
    Weekly assigned vs completed counts up to and including the current week.
    """
    require_minimum("historical_weeks", historical_weeks, 0)
    today = as_of or date.today()
    claims = _fetch_capacity_claims(repository)
    current_week_start = week_start(today)

    weekly_data = [
        _week_throughput(claims, add_days(current_week_start, offset * 7), today)
        for offset in range(-historical_weeks, 1)
    ]

    week_count = len(weekly_data)
    total_assigned = sum(week.claims_assigned for week in weekly_data)
    total_completed = sum(week.claims_completed for week in weekly_data)
    total_backlog_growth = total_assigned - total_completed
    avg_backlog_growth = total_backlog_growth / week_count
    trend = classify_trend(weekly_data)
    current_booked = days_booked_ahead(claims, today)

    logger.info(
        f"Capacity stress: {total_assigned} assigned, {total_completed} completed over {week_count} week(s)"
    )

    return CapacityStressReport(
        generated_at=datetime.now(),
        period_start=weekly_data[0].week_start,
        period_end=weekly_data[-1].week_end,
        total_weeks=week_count,
        current_days_booked_ahead=current_booked,
        weekly_data=weekly_data,
        summary=CapacitySummary(
            total_assigned=total_assigned,
            total_completed=total_completed,
            total_backlog_growth=total_backlog_growth,
            avg_weekly_assigned=round_half_up(total_assigned / week_count, 1),
            avg_weekly_completed=round_half_up(total_completed / week_count, 1),
            avg_backlog_growth=round_half_up(avg_backlog_growth, 1),
            completion_rate=round_half_up(percentage(total_completed, total_assigned), 1),
            trend=trend,
        ),
        capacity_indicators=CapacityIndicators(
            backlog_status=classify_backlog(avg_backlog_growth),
            booking_pressure=classify_booking_pressure(current_booked),
            throughput_trend=TREND_DESCRIPTIONS[trend],
        ),
    )


def get_week_throughput(
    repository: BaseClaimsRepository,
    week_start_date: date,
    as_of: date | None = None,
) -> WeeklyThroughput:
    today = as_of or date.today()
    claims = _fetch_capacity_claims(repository)
    return _week_throughput(claims, week_start(week_start_date), today)


if __name__ == "__main__":
    parser = create_report_parser("capacity_stress")
    parser.add_argument("--historical_weeks", type=non_negative_int, default=12, help="Weeks of history")
    args = parser.parse_args()
    print(
        run_report(
            "capacity_stress",
            generate_capacity_stress_report,
            pretty=args.pretty,
            historical_weeks=args.historical_weeks,
            as_of=args.as_of,
        )
    )
