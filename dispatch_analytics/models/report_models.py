from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from dispatch_analytics.definitions.custom_definitions import (
    BacklogStatus,
    BookingPressure,
    CapacityStatus,
    ConcentrationLevel,
    ImpactLevel,
    ThroughputTrend,
)
from dispatch_analytics.models.logging_models import (
    MonthlyFirmActivity,
    MonthlyPerformanceLogEntry,
)


class ReportResponse(BaseModel):
    """
    JSON envelope returned by every report entry point.
    """

    status: Literal["success", "error"] = Field(..., description="Outcome of the report run")
    data: dict[str, Any] | None = Field(default=None, description="Serialized report on success")
    message: str | None = Field(default=None, description="Error message on failure")


# Payout variance


class WeeklyVariance(BaseModel):
    week_start: date
    week_end: date
    week_label: str
    expected_payout: float = 0.0
    actual_paid: float = 0.0
    variance: float = Field(default=0.0, description="Expected minus actual")
    variance_percentage: float = Field(default=0.0, description="Actual over expected, minus 100")
    is_projection: bool = False
    claim_count_expected: int = 0
    claim_count_actual: int = 0


class VarianceSummary(BaseModel):
    total_expected: float = 0.0
    total_actual: float = 0.0
    total_variance: float = 0.0
    avg_weekly_expected: float = 0.0
    avg_weekly_actual: float = 0.0
    avg_weekly_variance: float = 0.0
    accuracy_percentage: float = 0.0


class RollingAverage(BaseModel):
    period: int = 4
    avg_expected: float = 0.0
    avg_actual: float = 0.0
    avg_variance: float = 0.0


class PayoutVarianceReport(BaseModel):
    """
    Expected versus actual payouts, week by week, with rolling-average projections.
    """

    generated_at: datetime
    period_start: date
    period_end: date
    total_weeks: int
    historical_weeks: int
    projection_weeks: int
    weekly_data: list[WeeklyVariance]
    summary: VarianceSummary
    rolling_average: RollingAverage


# Survival runway


class DailyForecast(BaseModel):
    forecast_date: date
    date_label: str
    expected_amount: float = 0.0
    delayed_amount: float = 0.0
    cumulative_expected: float = 0.0
    cumulative_delayed: float = 0.0
    payout_count: int = 0
    firms_paying: list[str] = Field(default_factory=list)


class RunwaySummary(BaseModel):
    total_payouts_expected: int = 0
    avg_daily_expected: float = 0.0
    avg_daily_delayed: float = 0.0
    largest_single_day: float = 0.0
    largest_single_day_date: str = ""
    days_with_payouts: int = 0
    days_without_payouts: int = 0


class RunwayRiskAssessment(BaseModel):
    impact_level: ImpactLevel
    cash_flow_health: str
    recommendations: list[str] = Field(default_factory=list)


class SurvivalRunwayReport(BaseModel):
    """
    Day-by-day expected cash and the same cash under a uniform payment delay.
    """

    generated_at: datetime
    forecast_start: date
    forecast_end: date
    forecast_days: int
    delay_days: int
    expected_cash: float = Field(default=0.0, description="Cash expected inside the window")
    delayed_scenario_cash: float = Field(default=0.0, description="Cash arriving inside the window after the delay")
    delayed_payment_impact: float = 0.0
    impact_percentage: float = 0.0
    daily_forecast: list[DailyForecast]
    summary: RunwaySummary
    risk_assessment: RunwayRiskAssessment


# Capacity stress


class WeeklyThroughput(BaseModel):
    week_start: date
    week_end: date
    week_label: str
    claims_assigned: int = 0
    claims_completed: int = 0
    backlog_growth: int = 0
    days_booked_ahead: int = 0
    utilization_rate: float = 0.0
    is_current_week: bool = False


class CapacitySummary(BaseModel):
    total_assigned: int = 0
    total_completed: int = 0
    total_backlog_growth: int = 0
    avg_weekly_assigned: float = 0.0
    avg_weekly_completed: float = 0.0
    avg_backlog_growth: float = 0.0
    completion_rate: float = 0.0
    trend: ThroughputTrend = ThroughputTrend.STABLE


class CapacityIndicators(BaseModel):
    backlog_status: BacklogStatus
    booking_pressure: BookingPressure
    throughput_trend: str


class CapacityStressReport(BaseModel):
    """
    Weekly intake against completions, with booking pressure.
    """

    generated_at: datetime
    period_start: date
    period_end: date
    total_weeks: int
    current_days_booked_ahead: int
    weekly_data: list[WeeklyThroughput]
    summary: CapacitySummary
    capacity_indicators: CapacityIndicators


# Revenue and volume dependency


class ConcentrationMetrics(BaseModel):
    top_1_percentage: float = 0.0
    top_3_percentage: float = 0.0
    top_5_percentage: float = 0.0
    herfindahl_index: int = 0


class FirmRevenue(BaseModel):
    firm_name: str
    normalized_name: str
    total_revenue: float = 0.0
    claim_count: int = 0
    revenue_share_percentage: float = 0.0
    avg_revenue_per_claim: float = 0.0


class RevenueRiskAssessment(BaseModel):
    concentration_level: ConcentrationLevel
    diversification_status: str
    recommendations: list[str] = Field(default_factory=list)


class RevenueRiskReport(BaseModel):
    """
    How much of completed revenue depends on a few firms.
    """

    generated_at: datetime
    total_revenue: float
    total_claims: int
    unique_firms: int
    firm_revenues: list[FirmRevenue]
    top_3_firms: list[FirmRevenue]
    top_3_firm_dependency_ratio: float
    revenue_concentration: ConcentrationMetrics
    risk_assessment: RevenueRiskAssessment


class FirmVolume(BaseModel):
    firm_name: str
    normalized_name: str
    claim_count: int = 0
    volume_share_percentage: float = 0.0


class VolumeRiskAssessment(BaseModel):
    concentration_level: ConcentrationLevel
    operational_status: str
    recommendations: list[str] = Field(default_factory=list)


class VolumeDependencyRiskReport(BaseModel):
    """
    How much of completed claim volume depends on a few firms.
    """

    generated_at: datetime
    total_claims: int
    unique_firms: int
    firm_volumes: list[FirmVolume]
    top_3_firms: list[FirmVolume]
    top_3_firm_dependency_ratio: float
    volume_concentration: ConcentrationMetrics
    risk_assessment: VolumeRiskAssessment


# Value efficiency


class FirmValueEfficiency(BaseModel):
    firm_name: str
    normalized_name: str
    total_revenue: float = 0.0
    claim_count: int = 0
    revenue_per_claim: float = 0.0
    efficiency_rank: int = 0


class EfficiencyMetrics(BaseModel):
    highest_revenue_per_claim: float = 0.0
    lowest_revenue_per_claim: float = 0.0
    median_revenue_per_claim: float = 0.0
    efficiency_variance: float = Field(
        default=0.0, description="Coefficient of variation of revenue per claim, in percent"
    )


class PerformanceTiers(BaseModel):
    premium: list[FirmValueEfficiency] = Field(default_factory=list)
    standard: list[FirmValueEfficiency] = Field(default_factory=list)
    budget: list[FirmValueEfficiency] = Field(default_factory=list)


class ValueEfficiencyReport(BaseModel):
    """
    Revenue per completed claim, by firm.
    """

    generated_at: datetime
    total_revenue: float
    total_claims: int
    overall_revenue_per_claim: float
    unique_firms: int
    firm_efficiencies: list[FirmValueEfficiency]
    top_performers: list[FirmValueEfficiency]
    efficiency_metrics: EfficiencyMetrics
    performance_tiers: PerformanceTiers


# Seasonality


class MonthlyClaimCount(BaseModel):
    month: int = Field(..., description="Month number, 1-12")
    month_name: str
    completed_claims: int = 0


class MonthAverage(BaseModel):
    month: int
    month_name: str
    avg_claims: float = 0.0


class SeasonalitySummary(BaseModel):
    overall_avg: float = 0.0
    peak_month: MonthAverage | None = None
    low_month: MonthAverage | None = None
    seasonal_variance: float = Field(default=0.0, description="Spread of month averages, in percent")


class SeasonalityProfileReport(BaseModel):
    """
    Completed claims per calendar month, one zero-filled row of twelve per year.
    """

    generated_at: datetime
    firm: str | None = None
    years: dict[str, list[MonthlyClaimCount]]
    month_averages: list[MonthAverage]
    summary: SeasonalitySummary


class MonthlyBenchmark(BaseModel):
    month: str
    historical_avg: float = 0.0
    current_year: int = 0
    index: float = 0.0


class BenchmarkSummary(BaseModel):
    avg_index: float = 0.0
    best_month: str = ""
    worst_month: str = ""
    months_above_expected: int = 0
    months_below_expected: int = 0


class SeasonalPerformanceBenchmarkReport(BaseModel):
    """
    This year's monthly output against the average of prior years.
    """

    generated_at: datetime
    firm: str | None = None
    data: list[MonthlyBenchmark]
    current_year: int
    years_included: list[int]
    summary: BenchmarkSummary


class FirmMonthlyCompletion(BaseModel):
    firm_name: str
    year: int
    month: int
    completed_claims: int = 0


class CompletedClaimsByMonthReport(BaseModel):
    """
    Completed claims per firm and calendar month, straight from live claims.
    """

    generated_at: datetime
    total_completed: int
    rows: list[FirmMonthlyCompletion]


# Monthly performance and history


class MonthlyPerformanceReport(BaseModel):
    """
    Month-to-date throughput against the safe monthly capacity.
    """

    generated_at: datetime
    current_month: str
    current_year: int
    current_month_name: str
    monthly_completed_claims: int
    monthly_backlog: int
    business_days_elapsed: int
    total_business_days_in_month: int
    monthly_velocity: float
    max_safe_capacity: int
    monthly_burnout_ratio: float
    capacity_status: CapacityStatus
    capacity_percentage: float
    projected_end_of_month: int
    days_remaining: int
    recommended_daily_rate: float


class FirmMonthData(BaseModel):
    month: int
    month_name: str
    claims_completed: int = 0
    revenue_generated: float = 0.0
    avg_velocity: float = 0.0


class MonthlyHistoryReport(BaseModel):
    """
    Logged monthly performance plus firm activity computed from live claims.
    """

    historical_performance: list[MonthlyPerformanceLogEntry]
    firm_activity: list[MonthlyFirmActivity]
    firm_monthly_data: dict[str, dict[str, list[FirmMonthData]]]
    months_tracked: int
    earliest_month: str | None = None
    latest_month: str | None = None


# Firm reliability


class AgingBucketTotal(BaseModel):
    count: int = 0
    amount: float = 0.0


class FirmReliabilityMetrics(BaseModel):
    firm_name: str
    total_paid_claims: int = 0
    total_unpaid_claims: int = 0
    avg_days_late: float = 0.0
    on_time_percentage: float = 0.0
    total_outstanding_balance: float = 0.0
    outstanding_aging: dict[str, AgingBucketTotal]
    median_days_late: int = 0
    worst_delay_days: int = 0
    best_turnaround_days: int = 0


class ReliabilitySummary(BaseModel):
    total_claims_tracked: int = 0
    total_paid_claims: int = 0
    total_unpaid_claims: int = 0
    total_outstanding_balance: float = 0.0
    overall_avg_days_late: float = 0.0
    overall_on_time_percentage: float = 0.0


class FirmReliabilityReport(BaseModel):
    """
    How late each firm pays against its expected payout dates.
    """

    generated_at: datetime
    total_firms: int
    metrics_by_firm: list[FirmReliabilityMetrics]
    overall_summary: ReliabilitySummary
