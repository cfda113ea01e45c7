"""
Definitions Module
==================

This module provides Enum definitions for standardizing constant values used
throughout the dispatch analytics reports.

Enums:
    - ApplicationEnvironment: Environment types (DEV, TEST, PROD)
    - DispatchAnalyticsTable: Source and log table names
    - SnowflakeAuthenticatorType: Authentication methods for Snowflake
    - ClaimStatus / PayoutStatus: Claim lifecycle and payout states
    - PayCycleType / Weekday: Firm pay-cycle rules
    - ImpactLevel, ConcentrationLevel, BacklogStatus, BookingPressure,
      ThroughputTrend, CapacityStatus, PerformanceTier, AgingBucket: Report classifications

Threshold constants used by the reports live in custom_definitions.
"""

from dispatch_analytics.definitions.custom_definitions import (
    AgingBucket,
    ApplicationEnvironment,
    BacklogStatus,
    BookingPressure,
    CapacityStatus,
    ClaimStatus,
    ConcentrationLevel,
    DispatchAnalyticsTable,
    ImpactLevel,
    PayCycleType,
    PayoutStatus,
    PerformanceTier,
    SnowflakeAuthenticatorType,
    ThroughputTrend,
    Weekday,
)

__all__ = [
    "ApplicationEnvironment",
    "DispatchAnalyticsTable",
    "SnowflakeAuthenticatorType",
    "ClaimStatus",
    "PayoutStatus",
    "PayCycleType",
    "Weekday",
    "ImpactLevel",
    "ConcentrationLevel",
    "BacklogStatus",
    "BookingPressure",
    "ThroughputTrend",
    "CapacityStatus",
    "PerformanceTier",
    "AgingBucket",
]
