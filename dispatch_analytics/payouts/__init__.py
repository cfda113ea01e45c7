"""
Payouts Module
==============

This module turns claims into expected payments: it normalizes firm names,
infers each firm's pay period for a work date, and groups claims into
payout forecasts and dashboard views.

Functions:
    Normalization:
        - normalize_firm_name: Canonical firm name for a raw spelling
        - is_recurring_firm / get_firm_configuration / calculate_expected_payout

    Pay Periods:
        - get_pay_period: Pay period and payout date for a work date
        - PAY_PERIOD_STRATEGIES: One period function per pay-cycle type

    Forecasting:
        - forecast_payouts: Expected payments per firm and payout date
        - get_weekly_view / get_monthly_view: Dashboard groupings
        - get_upcoming_payouts, get_payouts_for_month, get_payouts_for_week,
          get_this_week_payouts, get_next_week_payouts, get_this_month_payouts
        - calculate_total_payout / get_payout_summary
"""

from dispatch_analytics.payouts.forecasting import (
    calculate_total_payout,
    forecast_payouts,
    get_monthly_view,
    get_next_week_payouts,
    get_payout_summary,
    get_payouts_for_month,
    get_payouts_for_week,
    get_payouts_in_range,
    get_this_month_payouts,
    get_this_week_payouts,
    get_upcoming_payouts,
    get_weekly_view,
    is_payout_in_range,
)
from dispatch_analytics.payouts.normalization import (
    UNKNOWN_FIRM,
    calculate_expected_payout,
    get_firm_configuration,
    is_recurring_firm,
    normalize_firm_name,
)
from dispatch_analytics.payouts.pay_periods import (
    PAY_PERIOD_STRATEGIES,
    get_pay_period,
)

__all__ = [
    "UNKNOWN_FIRM",
    "normalize_firm_name",
    "is_recurring_firm",
    "get_firm_configuration",
    "calculate_expected_payout",
    "PAY_PERIOD_STRATEGIES",
    "get_pay_period",
    "forecast_payouts",
    "get_weekly_view",
    "get_monthly_view",
    "is_payout_in_range",
    "get_payouts_in_range",
    "get_upcoming_payouts",
    "get_payouts_for_month",
    "get_payouts_for_week",
    "get_this_week_payouts",
    "get_next_week_payouts",
    "get_this_month_payouts",
    "calculate_total_payout",
    "get_payout_summary",
]
