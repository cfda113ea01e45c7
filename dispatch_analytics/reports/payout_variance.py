from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.payout_models import PayoutForecast
from dispatch_analytics.models.report_models import (
    PayoutVarianceReport,
    RollingAverage,
    VarianceSummary,
    WeeklyVariance,
)
from dispatch_analytics.operations.date_operations import (
    add_days,
    format_week_label,
    week_end,
    week_start,
)
from dispatch_analytics.payouts.forecasting import forecast_payouts
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    non_negative_int,
    percentage,
    require_minimum,
    round_half_up,
    run_report,
)

ROLLING_AVERAGE_WEEKS = 4


def _fetch_payout_claims(repository: BaseClaimsRepository) -> list[Claim]:
    claims = repository.fetch_claims(require_firm_name=True)
    if not claims:
        raise NoDataException("No claims with a firm found for payout variance analysis")
    return claims


def _weekly_expected(payouts: list[PayoutForecast], start: date, end: date) -> tuple[float, int]:
    amount = 0.0
    count = 0
    for payout in payouts:
        if start <= payout.payout_date <= end:
            amount += payout.total_expected
            count += payout.claim_count
    return amount, count


def _weekly_actual(claims: list[Claim], start: date, end: date) -> tuple[float, int]:
    amount = 0.0
    count = 0
    for claim in claims:
        if claim.actual_payout_date is not None and start <= claim.actual_payout_date <= end:
            amount += claim.recorded_amount
            count += 1
    return amount, count


def _variance_percentage(expected: float, actual: float) -> float:
    if expected <= 0:
        return 0.0
    return actual / expected * 100 - 100


def _rolling_average(weeks: list[WeeklyVariance], period: int = ROLLING_AVERAGE_WEEKS) -> tuple[float, float, float]:
    historical = [week for week in weeks if not week.is_projection][-period:]
    if not historical:
        return 0.0, 0.0, 0.0
    count = len(historical)
    return (
        sum(week.expected_payout for week in historical) / count,
        sum(week.actual_paid for week in historical) / count,
        sum(week.variance for week in historical) / count,
    )


def _week_variance(
    claims: list[Claim],
    payouts: list[PayoutForecast],
    start: date,
    today: date,
) -> WeeklyVariance:
    end = week_end(start)
    expected, expected_count = _weekly_expected(payouts, start, end)
    actual, actual_count = _weekly_actual(claims, start, end)
    return WeeklyVariance(
        week_start=start,
        week_end=end,
        week_label=format_week_label(start),
        expected_payout=round_half_up(expected),
        actual_paid=round_half_up(actual),
        variance=round_half_up(expected - actual),
        variance_percentage=round_half_up(_variance_percentage(expected, actual), 1),
        is_projection=start > today,
        claim_count_expected=expected_count,
        claim_count_actual=actual_count,
    )


def generate_payout_variance_report(
    repository: BaseClaimsRepository,
    historical_weeks: int = 12,
    projection_weeks: int = 4,
    as_of: date | None = None,
) -> PayoutVarianceReport:
    """
    Compare forecast payouts with payments actually received, week by week.

    Weeks that have started use the forecast for expected and
    ``actual_payout_date`` for actual. Future weeks are projected from the
    rolling average of the last four historical weeks.
    """
    require_minimum("historical_weeks", historical_weeks, 0)
    require_minimum("projection_weeks", projection_weeks, 0)
    today = as_of or date.today()
    claims = _fetch_payout_claims(repository)
    payouts = forecast_payouts(claims)

    current_week_start = week_start(today)
    weekly_data: list[WeeklyVariance] = []

    for offset in range(-historical_weeks, projection_weeks):
        start = add_days(current_week_start, offset * 7)
        if start <= today:
            weekly_data.append(_week_variance(claims, payouts, start, today))
            continue

        avg_expected, avg_actual, _ = _rolling_average(weekly_data)
        weekly_data.append(
            WeeklyVariance(
                week_start=start,
                week_end=week_end(start),
                week_label=format_week_label(start),
                expected_payout=round_half_up(avg_expected),
                actual_paid=round_half_up(avg_actual),
                variance=round_half_up(avg_expected - avg_actual),
                variance_percentage=round_half_up(_variance_percentage(avg_expected, avg_actual), 1),
                is_projection=True,
            )
        )

    historical = [week for week in weekly_data if not week.is_projection]
    total_expected = sum(week.expected_payout for week in historical)
    total_actual = sum(week.actual_paid for week in historical)
    total_variance = total_expected - total_actual
    weeks_counted = len(historical) or 1
    rolling_expected, rolling_actual, rolling_variance = _rolling_average(weekly_data)

    logger.info(
        f"Payout variance: {len(historical)} historical week(s), {len(payouts)} forecast payout(s)"
    )

    return PayoutVarianceReport(
        generated_at=datetime.now(),
        period_start=add_days(current_week_start, -7 * historical_weeks),
        period_end=add_days(current_week_start, 7 * projection_weeks),
        total_weeks=len(weekly_data),
        historical_weeks=len(historical),
        projection_weeks=projection_weeks,
        weekly_data=weekly_data,
        summary=VarianceSummary(
            total_expected=round_half_up(total_expected),
            total_actual=round_half_up(total_actual),
            total_variance=round_half_up(total_variance),
            avg_weekly_expected=round_half_up(total_expected / weeks_counted),
            avg_weekly_actual=round_half_up(total_actual / weeks_counted),
            avg_weekly_variance=round_half_up(total_variance / weeks_counted),
            accuracy_percentage=round_half_up(percentage(total_actual, total_expected), 1),
        ),
        rolling_average=RollingAverage(
            period=ROLLING_AVERAGE_WEEKS,
            avg_expected=round_half_up(rolling_expected),
            avg_actual=round_half_up(rolling_actual),
            avg_variance=round_half_up(rolling_variance),
        ),
    )


def get_week_variance(
    repository: BaseClaimsRepository,
    week_start_date: date,
    as_of: date | None = None,
) -> WeeklyVariance:
    """Expected against actual for a single week, without projection."""
    today = as_of or date.today()
    claims = _fetch_payout_claims(repository)
    return _week_variance(claims, forecast_payouts(claims), week_start(week_start_date), today)


if __name__ == "__main__":
    parser = create_report_parser("payout_variance")
    parser.add_argument("--historical_weeks", type=non_negative_int, default=12, help="Weeks of history")
    parser.add_argument("--projection_weeks", type=non_negative_int, default=4, help="Weeks to project")
    args = parser.parse_args()
    print(
        run_report(
            "payout_variance",
            generate_payout_variance_report,
            pretty=args.pretty,
            historical_weeks=args.historical_weeks,
            projection_weeks=args.projection_weeks,
            as_of=args.as_of,
        )
    )
