"""
Payout forecasting and the payout dashboard views.

Forecasts group claims by the firm's pay period and place the money on the
inferred payout date. Every view below filters on that payout date only,
never on the date the work was done.
"""

from collections.abc import Iterable
from datetime import date

from dispatch_analytics.custom_exceptions.payout_exceptions import PayoutException
from dispatch_analytics.logger import d_logger, logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.payout_models import (
    MonthlyPayoutTotal,
    PayoutForecast,
    PayoutSummary,
    WeeklyPayoutTotal,
)
from dispatch_analytics.operations.date_operations import (
    MONTH_NAMES,
    add_days,
    last_day_of_month,
    week_end,
    week_start,
)
from dispatch_analytics.payouts.normalization import (
    calculate_expected_payout,
    is_recurring_firm,
    normalize_firm_name,
)
from dispatch_analytics.payouts.pay_periods import get_pay_period
from dispatch_analytics.tools.firm_configuration import FirmRegistry, get_firm_registry


def _forecast_amount(claim: Claim, registry: FirmRegistry) -> tuple[date | None, float]:
    """Work date and amount for one claim."""
    if claim.is_completed:
        return claim.completion_date.date(), claim.recorded_amount
    if claim.appointment_start is not None:
        return (
            claim.appointment_start.date(),
            calculate_expected_payout(claim.firm_name, claim.pay_amount, registry),
        )
    return None, 0.0


def forecast_payouts(
    claims: Iterable[Claim],
    registry: FirmRegistry | None = None,
) -> list[PayoutForecast]:
    """
    Group claims into expected payments per firm and payout date.

    Completed claims count at their recorded amount on their completion date.
    Scheduled claims count at their agreed pay, or the firm's base fee, on
    their appointment date. Non-recurring and unknown firms are skipped.

    Returns:
        list[PayoutForecast]: Sorted by payout date, then firm.
    """
    registry = registry or get_firm_registry()
    buckets: dict[tuple[str, date], PayoutForecast] = {}
    skipped = 0

    for claim in claims:
        if not is_recurring_firm(claim.firm_name, registry):
            continue

        work_date, amount = _forecast_amount(claim, registry)
        if work_date is None or amount <= 0:
            continue

        firm = normalize_firm_name(claim.firm_name, registry)
        try:
            period = get_pay_period(firm, work_date, registry)
        except PayoutException as e:
            logger.warning(f"Could not process claim {claim.id} for firm {firm}: {e.message}")
            skipped += 1
            continue

        if not period.period_start <= work_date <= period.period_end:
            d_logger.debug(
                f"Claim {claim.id} work date {work_date} outside period "
                f"{period.period_start}..{period.period_end}"
            )
            continue

        key = (firm, period.payout_date)
        payout = buckets.get(key)
        if payout is None:
            payout = PayoutForecast(
                firm=firm,
                payout_date=period.payout_date,
                period_start=period.period_start,
                period_end=period.period_end,
            )
            buckets[key] = payout

        payout.total_expected += amount
        payout.claim_ids.append(claim.id)
        payout.claim_count += 1

    if skipped:
        logger.warning(f"Skipped {skipped} claim(s) with unknown pay cycles")

    return sorted(buckets.values(), key=lambda p: (p.payout_date, p.firm))


def get_weekly_view(payouts: Iterable[PayoutForecast]) -> list[WeeklyPayoutTotal]:
    """Group payouts into Monday-Sunday weeks."""
    weeks: dict[date, WeeklyPayoutTotal] = {}
    for payout in payouts:
        start = week_start(payout.payout_date)
        week = weeks.get(start)
        if week is None:
            week = WeeklyPayoutTotal(week_start=start, week_end=week_end(start))
            weeks[start] = week
        week.total_amount += payout.total_expected
        week.payouts.append(payout)
    return [weeks[start] for start in sorted(weeks)]


def get_monthly_view(payouts: Iterable[PayoutForecast]) -> list[MonthlyPayoutTotal]:
    """Group payouts into calendar months with a per-firm breakdown."""
    months: dict[tuple[int, int], MonthlyPayoutTotal] = {}
    for payout in payouts:
        key = (payout.payout_date.year, payout.payout_date.month)
        month_total = months.get(key)
        if month_total is None:
            month_total = MonthlyPayoutTotal(
                year=key[0],
                month=key[1],
                month_name=MONTH_NAMES[key[1] - 1][:3],
            )
            months[key] = month_total
        month_total.total_amount += payout.total_expected
        month_total.by_firm[payout.firm] = month_total.by_firm.get(payout.firm, 0.0) + payout.total_expected
    return [months[key] for key in sorted(months)]


def is_payout_in_range(payout: PayoutForecast, start: date, end: date) -> bool:
    """Inclusive on both ends."""
    return start <= payout.payout_date <= end


def get_payouts_in_range(payouts: Iterable[PayoutForecast], start: date, end: date) -> list[PayoutForecast]:
    return [payout for payout in payouts if is_payout_in_range(payout, start, end)]


def get_upcoming_payouts(
    payouts: Iterable[PayoutForecast],
    days: int = 30,
    as_of: date | None = None,
) -> list[PayoutForecast]:
    today = as_of or date.today()
    return get_payouts_in_range(payouts, today, add_days(today, days))


def get_payouts_for_month(payouts: Iterable[PayoutForecast], year: int, month: int) -> list[PayoutForecast]:
    return get_payouts_in_range(payouts, date(year, month, 1), last_day_of_month(year, month))


def get_payouts_for_week(payouts: Iterable[PayoutForecast], week_start_date: date) -> list[PayoutForecast]:
    start = week_start(week_start_date)
    return get_payouts_in_range(payouts, start, week_end(start))


def get_this_week_payouts(payouts: Iterable[PayoutForecast], as_of: date | None = None) -> list[PayoutForecast]:
    return get_payouts_for_week(payouts, as_of or date.today())


def get_next_week_payouts(payouts: Iterable[PayoutForecast], as_of: date | None = None) -> list[PayoutForecast]:
    return get_payouts_for_week(payouts, add_days(week_start(as_of or date.today()), 7))


def get_this_month_payouts(payouts: Iterable[PayoutForecast], as_of: date | None = None) -> list[PayoutForecast]:
    today = as_of or date.today()
    return get_payouts_for_month(payouts, today.year, today.month)


def calculate_total_payout(payouts: Iterable[PayoutForecast]) -> float:
    return sum(payout.total_expected for payout in payouts)


def get_payout_summary(payouts: Iterable[PayoutForecast]) -> PayoutSummary:
    payouts = list(payouts)
    return PayoutSummary(
        total_amount=calculate_total_payout(payouts),
        payout_count=len(payouts),
        claim_count=sum(payout.claim_count for payout in payouts),
    )
