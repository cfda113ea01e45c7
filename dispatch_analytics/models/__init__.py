"""
Models Module
=============

This module provides Pydantic models for claims data, firm configuration,
payout forecasts, report payloads and monthly log rows.

Models:
    - SnowflakeCredentials: Configuration for Snowflake connection credentials
    - Claim: A row of the claims table
    - FirmConfiguration / NormalizationRule: Firm pay-cycle and alias configuration
    - PayoutPeriod / PayoutForecast: Inferred pay periods and expected payments
    - WeeklyPayoutTotal / MonthlyPayoutTotal / PayoutSummary: Payout dashboard views
    - MonthlyPerformanceLogEntry / MonthlyFirmActivity: Monthly log rows
    - ReportResponse: JSON envelope for report output
    - One model per report, see report_models
"""

from dispatch_analytics.models.custom_models import (
    Claim,
    FirmConfiguration,
    NormalizationRule,
    SnowflakeCredentials,
)
from dispatch_analytics.models.logging_models import (
    MonthlyFirmActivity,
    MonthlyPerformanceLogEntry,
)
from dispatch_analytics.models.payout_models import (
    MonthlyPayoutTotal,
    PayoutForecast,
    PayoutPeriod,
    PayoutSummary,
    WeeklyPayoutTotal,
)
from dispatch_analytics.models.report_models import (
    CapacityStressReport,
    CompletedClaimsByMonthReport,
    DailyForecast,
    FirmReliabilityMetrics,
    FirmReliabilityReport,
    FirmRevenue,
    MonthlyHistoryReport,
    MonthlyPerformanceReport,
    PayoutVarianceReport,
    ReportResponse,
    RevenueRiskReport,
    SeasonalityProfileReport,
    SeasonalPerformanceBenchmarkReport,
    SurvivalRunwayReport,
    ValueEfficiencyReport,
    VolumeDependencyRiskReport,
    WeeklyThroughput,
    WeeklyVariance,
)

__all__ = [
    "SnowflakeCredentials",
    "Claim",
    "FirmConfiguration",
    "NormalizationRule",
    "PayoutPeriod",
    "PayoutForecast",
    "WeeklyPayoutTotal",
    "MonthlyPayoutTotal",
    "PayoutSummary",
    "MonthlyPerformanceLogEntry",
    "MonthlyFirmActivity",
    "ReportResponse",
    "PayoutVarianceReport",
    "WeeklyVariance",
    "SurvivalRunwayReport",
    "DailyForecast",
    "CapacityStressReport",
    "WeeklyThroughput",
    "RevenueRiskReport",
    "FirmRevenue",
    "VolumeDependencyRiskReport",
    "ValueEfficiencyReport",
    "SeasonalityProfileReport",
    "SeasonalPerformanceBenchmarkReport",
    "CompletedClaimsByMonthReport",
    "MonthlyPerformanceReport",
    "MonthlyHistoryReport",
    "FirmReliabilityReport",
    "FirmReliabilityMetrics",
]
