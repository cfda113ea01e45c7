"""
Pay-period inference.

Each pay-cycle type has one function that turns a work date into the period
containing it and the date that period is paid. Firms only choose a cycle and
its parameters in configuration.
"""

from collections.abc import Callable
from datetime import date, timedelta

from dispatch_analytics.custom_exceptions.payout_exceptions import (
    PayCycleConfigurationException,
    UnknownFirmException,
)
from dispatch_analytics.definitions.custom_definitions import PayCycleType
from dispatch_analytics.models.custom_models import FirmConfiguration
from dispatch_analytics.models.payout_models import PayoutPeriod
from dispatch_analytics.operations.date_operations import (
    adjust_for_weekend,
    last_day_of_month,
    next_month,
    next_weekday_after,
)
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.tools.firm_configuration import FirmRegistry, get_firm_registry

PeriodStrategy = Callable[[date, FirmConfiguration], PayoutPeriod]


def _period_ending_at(payout_date: date, length_days: int, firm: FirmConfiguration) -> PayoutPeriod:
    period_end = payout_date if firm.period_ends_on_payout_day else payout_date - timedelta(days=1)
    return PayoutPeriod(
        period_start=period_end - timedelta(days=length_days - 1),
        period_end=period_end,
        payout_date=payout_date,
    )


def _require_weekday(firm: FirmConfiguration) -> int:
    if firm.payout_weekday is None:
        raise PayCycleConfigurationException(f"Firm '{firm.name}' has no payout weekday configured")
    return int(firm.payout_weekday)


def weekly_period(work_date: date, firm: FirmConfiguration) -> PayoutPeriod:
    """
    Paid on the first configured weekday after the work date.

    When the period includes the payout day, work done on a payout day goes
    into that day's payment.
    """
    weekday = _require_weekday(firm)
    anchor = work_date - timedelta(days=1) if firm.period_ends_on_payout_day else work_date
    payout_date = next_weekday_after(anchor, weekday)
    return _period_ending_at(payout_date, 7, firm)


def biweekly_period(work_date: date, firm: FirmConfiguration) -> PayoutPeriod:
    """
    Paid every other configured weekday, in phase with the reference pay date.
    """
    weekday = _require_weekday(firm)
    if firm.reference_pay_date is None:
        raise PayCycleConfigurationException(f"Firm '{firm.name}' has no reference pay date configured")

    anchor = work_date - timedelta(days=1) if firm.period_ends_on_payout_day else work_date
    payout_date = next_weekday_after(anchor, weekday)
    weeks_from_reference = (payout_date - firm.reference_pay_date).days // 7
    if weeks_from_reference % 2 != 0:
        payout_date += timedelta(days=7)
    return _period_ending_at(payout_date, 14, firm)


def semimonthly_period(work_date: date, firm: FirmConfiguration) -> PayoutPeriod:
    """Days 1-15 paid on the 15th, the rest of the month paid on its last day."""
    if work_date.day <= 15:
        period_start = work_date.replace(day=1)
        period_end = work_date.replace(day=15)
    else:
        period_start = work_date.replace(day=16)
        period_end = last_day_of_month(work_date.year, work_date.month)
    return PayoutPeriod(
        period_start=period_start,
        period_end=period_end,
        payout_date=adjust_for_weekend(period_end),
    )


def monthly_previous_month_period(work_date: date, firm: FirmConfiguration) -> PayoutPeriod:
    """A month's work is paid on the 15th of the following month."""
    period_start = work_date.replace(day=1)
    return PayoutPeriod(
        period_start=period_start,
        period_end=last_day_of_month(work_date.year, work_date.month),
        payout_date=adjust_for_weekend(next_month(period_start).replace(day=15)),
    )


def monthly_same_month_period(work_date: date, firm: FirmConfiguration) -> PayoutPeriod:
    """A month's work is paid on its last day."""
    period_end = last_day_of_month(work_date.year, work_date.month)
    return PayoutPeriod(
        period_start=work_date.replace(day=1),
        period_end=period_end,
        payout_date=adjust_for_weekend(period_end),
    )


PAY_PERIOD_STRATEGIES: dict[PayCycleType, PeriodStrategy] = {
    PayCycleType.WEEKLY: weekly_period,
    PayCycleType.BIWEEKLY: biweekly_period,
    PayCycleType.SEMIMONTHLY: semimonthly_period,
    PayCycleType.MONTHLY_PREVIOUS_MONTH: monthly_previous_month_period,
    PayCycleType.MONTHLY_SAME_MONTH: monthly_same_month_period,
}


def get_pay_period(
    firm_name: str,
    work_date: date,
    registry: FirmRegistry | None = None,
) -> PayoutPeriod:
    """
    Infer the pay period containing ``work_date`` and its payout date.

    Raises:
        UnknownFirmException: If the firm has no pay-cycle configuration.
    """
    registry = registry or get_firm_registry()
    canonical_name = normalize_firm_name(firm_name, registry)
    firm = registry.get_firm(canonical_name)
    if firm is None:
        raise UnknownFirmException(f"Unknown firm: {firm_name}", firm_name=firm_name)
    return PAY_PERIOD_STRATEGIES[firm.pay_cycle](work_date, firm)
