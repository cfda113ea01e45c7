from collections.abc import Callable

from pydantic import BaseModel

from dispatch_analytics.custom_exceptions.report_exceptions import ReportNotFoundException
from dispatch_analytics.reports.capacity_stress import generate_capacity_stress_report
from dispatch_analytics.reports.completed_claims_by_month import (
    generate_completed_claims_by_month_report,
)
from dispatch_analytics.reports.firm_reliability import generate_firm_reliability_report
from dispatch_analytics.reports.monthly_history import generate_monthly_history_report
from dispatch_analytics.reports.monthly_performance import generate_monthly_performance_report
from dispatch_analytics.reports.payout_variance import generate_payout_variance_report
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

ReportGenerator = Callable[..., BaseModel]

REPORTS: dict[str, ReportGenerator] = {
    "payout_variance": generate_payout_variance_report,
    "survival_runway": generate_survival_runway_report,
    "capacity_stress": generate_capacity_stress_report,
    "revenue_risk": generate_revenue_risk_report,
    "volume_dependency_risk": generate_volume_dependency_risk_report,
    "value_efficiency": generate_value_efficiency_report,
    "seasonality_profile": generate_seasonality_profile_report,
    "seasonal_performance_benchmark": generate_seasonal_performance_benchmark_report,
    "completed_claims_by_month": generate_completed_claims_by_month_report,
    "monthly_performance": generate_monthly_performance_report,
    "firm_reliability": generate_firm_reliability_report,
    "monthly_history": generate_monthly_history_report,
}


def get_report_generator(report_name: str) -> ReportGenerator:
    try:
        return REPORTS[report_name]
    except KeyError:
        raise ReportNotFoundException(
            f"Unknown report '{report_name}'. Available reports: {', '.join(sorted(REPORTS))}"
        )
