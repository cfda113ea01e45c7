"""
Reports Module
==============

This module holds one generator per business report. Every generator takes a
claims repository plus plain parameters and returns a pydantic report model.
Each module can also be run on its own and prints the JSON envelope.

Functions:
    Payouts and Cash:
        - generate_payout_variance_report: Expected vs actual payouts per week
        - generate_survival_runway_report: Cash runway and payment-delay impact
        - generate_firm_reliability_report: How late each firm pays

    Workload:
        - generate_capacity_stress_report: Weekly assigned vs completed claims
        - generate_monthly_performance_report: Month-to-date velocity and capacity
        - generate_monthly_history_report: Logged monthly history and firm grid

    Dependency and Value:
        - generate_revenue_risk_report: Revenue concentration across firms
        - generate_volume_dependency_risk_report: Volume concentration across firms
        - generate_value_efficiency_report: Revenue per claim by firm

    Seasonality:
        - generate_seasonality_profile_report: Completed claims per year and month
        - generate_seasonal_performance_benchmark_report: Current year vs history
        - generate_completed_claims_by_month_report: Firm-month completion counts

    Registry:
        - REPORTS: Report name to generator
        - get_report_generator: Look up a generator by name
"""

from dispatch_analytics.reports.capacity_stress import generate_capacity_stress_report
from dispatch_analytics.reports.completed_claims_by_month import (
    generate_completed_claims_by_month_report,
)
from dispatch_analytics.reports.firm_reliability import generate_firm_reliability_report
from dispatch_analytics.reports.monthly_history import (
    check_and_log_previous_month,
    fetch_monthly_history,
    generate_monthly_history_report,
)
from dispatch_analytics.reports.monthly_performance import generate_monthly_performance_report
from dispatch_analytics.reports.payout_variance import generate_payout_variance_report
from dispatch_analytics.reports.registry import REPORTS, get_report_generator
from dispatch_analytics.reports.revenue_risk import generate_revenue_risk_report
from dispatch_analytics.reports.seasonal_performance_benchmark import (
    generate_seasonal_performance_benchmark_report,
)
from dispatch_analytics.reports.seasonality_profile import generate_seasonality_profile_report
from dispatch_analytics.reports.survival_runway import generate_survival_runway_report
from dispatch_analytics.reports.value_efficiency import generate_value_efficiency_report
from dispatch_analytics.reports.volume_dependency_risk import (
    generate_volume_dependency_risk_report,
)

__all__ = [
    "generate_payout_variance_report",
    "generate_survival_runway_report",
    "generate_firm_reliability_report",
    "generate_capacity_stress_report",
    "generate_monthly_performance_report",
    "generate_monthly_history_report",
    "check_and_log_previous_month",
    "fetch_monthly_history",
    "generate_revenue_risk_report",
    "generate_volume_dependency_risk_report",
    "generate_value_efficiency_report",
    "generate_seasonality_profile_report",
    "generate_seasonal_performance_benchmark_report",
    "generate_completed_claims_by_month_report",
    "REPORTS",
    "get_report_generator",
]
