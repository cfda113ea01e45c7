from collections.abc import Iterable
from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    RUNWAY_HIGH_IMPACT,
    RUNWAY_LOW_IMPACT,
    RUNWAY_MODERATE_IMPACT,
    ImpactLevel,
)
from dispatch_analytics.logger import logger
from dispatch_analytics.models.payout_models import PayoutForecast
from dispatch_analytics.models.report_models import (
    DailyForecast,
    RunwayRiskAssessment,
    RunwaySummary,
    SurvivalRunwayReport,
)
from dispatch_analytics.operations.date_operations import (
    add_days,
    days_between,
    format_day_label,
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

LOW_CASH_THRESHOLD = 10000.0
LONG_GAP_DAYS = 20


def build_daily_forecast(
    payouts: Iterable[PayoutForecast],
    start: date,
    days: int,
    delay_days: int,
) -> list[DailyForecast]:
    """
    One row per day of the window, with the on-time and the delayed scenario.

    In the delayed scenario a payout due on day ``d`` arrives on ``d + delay_days``
    and is dropped when that falls outside the window.
    """
    by_date: dict[date, list[PayoutForecast]] = {}
    for payout in payouts:
        by_date.setdefault(payout.payout_date, []).append(payout)

    rows: list[DailyForecast] = []
    cumulative_expected = 0.0
    cumulative_delayed = 0.0

    for offset in range(days):
        current = add_days(start, offset)
        due_today = by_date.get(current, [])
        arriving_late = by_date.get(add_days(current, -delay_days), []) if offset >= delay_days else []

        expected = sum(payout.total_expected for payout in due_today)
        delayed = sum(payout.total_expected for payout in arriving_late)
        cumulative_expected += expected
        cumulative_delayed += delayed

        rows.append(
            DailyForecast(
                forecast_date=current,
                date_label=format_day_label(current),
                expected_amount=round_half_up(expected),
                delayed_amount=round_half_up(delayed),
                cumulative_expected=round_half_up(cumulative_expected),
                cumulative_delayed=round_half_up(cumulative_delayed),
                payout_count=len(due_today),
                firms_paying=sorted({payout.firm for payout in due_today}),
            )
        )
    return rows


def classify_impact(impact_percentage: float) -> ImpactLevel:
    if impact_percentage < RUNWAY_LOW_IMPACT:
        return ImpactLevel.LOW
    if impact_percentage < RUNWAY_MODERATE_IMPACT:
        return ImpactLevel.MODERATE
    if impact_percentage < RUNWAY_HIGH_IMPACT:
        return ImpactLevel.HIGH
    return ImpactLevel.CRITICAL


def _cash_flow_health(expected_cash: float, impact_level: ImpactLevel) -> str:
    if expected_cash <= 0:
        return "No expected payments - critical cash flow gap"
    return {
        ImpactLevel.CRITICAL: "Extremely vulnerable to payment delays",
        ImpactLevel.HIGH: "Highly sensitive to payment timing",
        ImpactLevel.MODERATE: "Moderately sensitive to delays",
        ImpactLevel.LOW: "Stable and predictable cash flow",
    }[impact_level]


def _recommendations(
    impact_level: ImpactLevel,
    expected_cash: float,
    days_without_payouts: int,
    delay_days: int,
    forecast_days: int,
) -> list[str]:
    recommendations: list[str] = []

    if expected_cash <= 0:
        recommendations.append(
            f"No payouts expected in the next {forecast_days} days - review scheduled work and outstanding invoices"
        )
        return recommendations

    if impact_level == ImpactLevel.CRITICAL:
        recommendations.append(
            f"A {delay_days}-day payment delay would remove most of your expected cash - build a cash reserve"
        )
        recommendations.append("Follow up with firms before their payout dates to confirm payment")
    elif impact_level == ImpactLevel.HIGH:
        recommendations.append(
            f"A {delay_days}-day payment delay would significantly reduce cash on hand - keep a buffer for fixed costs"
        )
    elif impact_level == ImpactLevel.MODERATE:
        recommendations.append("Monitor payout dates closely and track late payments by firm")
    else:
        recommendations.append(f"Cash flow over the next {forecast_days} days is resilient to short delays")

    if expected_cash < LOW_CASH_THRESHOLD:
        recommendations.append("Expected cash is low for this window - consider taking on additional claims")
    if days_without_payouts > LONG_GAP_DAYS:
        recommendations.append(
            f"{days_without_payouts} days in the window have no payouts - spread work across firms with different pay cycles"
        )
    return recommendations


def _runway_report(
    payouts: list[PayoutForecast],
    start: date,
    forecast_days: int,
    delay_days: int,
) -> SurvivalRunwayReport:
    require_minimum("forecast_days", forecast_days, 1)
    require_minimum("delay_days", delay_days, 0)
    end = add_days(start, forecast_days - 1)
    in_window = [payout for payout in payouts if start <= payout.payout_date <= end]
    daily_forecast = build_daily_forecast(in_window, start, forecast_days, delay_days)

    expected_cash = sum(payout.total_expected for payout in in_window)
    delayed_cash = sum(row.delayed_amount for row in daily_forecast)
    impact = expected_cash - delayed_cash
    impact_percentage = percentage(impact, expected_cash)
    impact_level = classify_impact(impact_percentage) if expected_cash > 0 else ImpactLevel.CRITICAL

    days_with_payouts = sum(1 for row in daily_forecast if row.expected_amount > 0)
    days_without_payouts = forecast_days - days_with_payouts
    largest = max(daily_forecast, key=lambda row: row.expected_amount, default=None)
    has_largest = largest is not None and largest.expected_amount > 0

    return SurvivalRunwayReport(
        generated_at=datetime.now(),
        forecast_start=start,
        forecast_end=end,
        forecast_days=forecast_days,
        delay_days=delay_days,
        expected_cash=round_half_up(expected_cash),
        delayed_scenario_cash=round_half_up(delayed_cash),
        delayed_payment_impact=round_half_up(impact),
        impact_percentage=round_half_up(impact_percentage, 1),
        daily_forecast=daily_forecast,
        summary=RunwaySummary(
            total_payouts_expected=len(in_window),
            avg_daily_expected=round_half_up(expected_cash / forecast_days) if forecast_days else 0.0,
            avg_daily_delayed=round_half_up(delayed_cash / forecast_days) if forecast_days else 0.0,
            largest_single_day=largest.expected_amount if has_largest else 0.0,
            largest_single_day_date=largest.forecast_date.isoformat() if has_largest else "",
            days_with_payouts=days_with_payouts,
            days_without_payouts=days_without_payouts,
        ),
        risk_assessment=RunwayRiskAssessment(
            impact_level=impact_level,
            cash_flow_health=_cash_flow_health(expected_cash, impact_level),
            recommendations=_recommendations(
                impact_level, expected_cash, days_without_payouts, delay_days, forecast_days
            ),
        ),
    )


def _fetch_forecast(repository: BaseClaimsRepository) -> list[PayoutForecast]:
    claims = repository.fetch_claims(require_firm_name=True)
    if not claims:
        raise NoDataException("No claims with a firm found for runway forecasting")
    return forecast_payouts(claims)


def generate_survival_runway_report(
    repository: BaseClaimsRepository,
    forecast_days: int = 30,
    delay_days: int = 7,
    as_of: date | None = None,
) -> SurvivalRunwayReport:
    """
    Forecast cash over the next ``forecast_days`` days and the effect of every
    firm paying ``delay_days`` late.
    """
    today = as_of or date.today()
    payouts = _fetch_forecast(repository)
    report = _runway_report(payouts, today, forecast_days, delay_days)
    logger.info(
        f"Survival runway: expected {report.expected_cash:.2f}, delayed {report.delayed_scenario_cash:.2f} "
        f"({report.risk_assessment.impact_level.value} impact)"
    )
    return report


def get_forecast_range(
    repository: BaseClaimsRepository,
    start: date,
    end: date,
    delay_days: int = 7,
) -> SurvivalRunwayReport:
    """Runway report for an explicit date range, inclusive."""
    payouts = _fetch_forecast(repository)
    return _runway_report(payouts, start, days_between(start, end) + 1, delay_days)


if __name__ == "__main__":
    parser = create_report_parser("survival_runway")
    parser.add_argument("--forecast_days", type=non_negative_int, default=30, help="Days to forecast")
    parser.add_argument("--delay_days", type=non_negative_int, default=7, help="Days of payment delay to simulate")
    args = parser.parse_args()
    print(
        run_report(
            "survival_runway",
            generate_survival_runway_report,
            pretty=args.pretty,
            forecast_days=args.forecast_days,
            delay_days=args.delay_days,
            as_of=args.as_of,
        )
    )
