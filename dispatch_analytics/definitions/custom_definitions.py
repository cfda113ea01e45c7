from enum import Enum


class ApplicationEnvironment(Enum):
    """Enum for application environment."""

    DEV = "DEV"
    TEST = "TEST"
    PROD = "PROD"

    def __str__(self) -> str:
        return self.value


class DispatchAnalyticsTable(Enum):
    """Enum for tables read and written by the analytics reports."""

    CLAIMS = "CLAIMS"
    MONTHLY_PERFORMANCE_LOG = "MONTHLY_PERFORMANCE_LOG"
    MONTHLY_FIRM_ACTIVITY = "MONTHLY_FIRM_ACTIVITY"

    def __str__(self) -> str:
        return self.value


class SnowflakeAuthenticatorType(str, Enum):
    """Enum for Snowflake authenticator type."""

    EXTERNALBROWSER = "EXTERNALBROWSER"
    SNOWFLAKE_JWT = "SNOWFLAKE_JWT"


class ClaimStatus(str, Enum):
    """Enum for the lifecycle status of a claim."""

    UNASSIGNED = "UNASSIGNED"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"

    def __str__(self) -> str:
        return self.value


class PayoutStatus(str, Enum):
    """Enum for the payout status of a claim."""

    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"
    NOT_APPLICABLE = "not_applicable"

    def __str__(self) -> str:
        return self.value


class PayCycleType(str, Enum):
    """Enum for firm pay cycles."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY_PREVIOUS_MONTH = "monthly_previous_month"
    MONTHLY_SAME_MONTH = "monthly_same_month"

    def __str__(self) -> str:
        return self.value


class Weekday(int, Enum):
    """Enum for weekdays, numbered as in ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class ImpactLevel(str, Enum):
    """Enum for the severity of a delayed-payment scenario."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ConcentrationLevel(str, Enum):
    """Enum for client concentration risk bands."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class BacklogStatus(str, Enum):
    """Enum for backlog health."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class BookingPressure(str, Enum):
    """Enum for how far ahead the schedule is booked."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ThroughputTrend(str, Enum):
    """Enum for the direction of backlog growth."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class CapacityStatus(str, Enum):
    """Enum for monthly capacity utilisation."""

    UNDER_UTILIZED = "under-utilized"
    OPTIMAL = "optimal"
    STRETCH = "stretch"
    BURNOUT = "burnout"


class PerformanceTier(str, Enum):
    """Enum for revenue-per-claim tiers."""

    PREMIUM = "premium"
    STANDARD = "standard"
    BUDGET = "budget"


class AgingBucket(str, Enum):
    """Enum for outstanding balance aging buckets."""

    DAYS_0_7 = "0-7"
    DAYS_8_14 = "8-14"
    DAYS_15_30 = "15-30"
    DAYS_30_PLUS = "30plus"


# Classification thresholds
RUNWAY_LOW_IMPACT = 10.0
RUNWAY_MODERATE_IMPACT = 25.0
RUNWAY_HIGH_IMPACT = 50.0
REVENUE_TOP3_MODERATE = 40.0
REVENUE_TOP3_HIGH = 60.0
REVENUE_TOP3_CRITICAL = 80.0
REVENUE_SINGLE_FIRM_WARNING = 40.0
VOLUME_TOP3_MODERATE = 50.0
VOLUME_TOP3_HIGH = 70.0
VOLUME_TOP3_CRITICAL = 85.0
VOLUME_HHI_CONCENTRATED = 2500.0
VOLUME_MIN_ACTIVE_FIRMS = 5.0
BACKLOG_HEALTHY = 2.0
BACKLOG_WARNING = 5.0
BOOKING_LOW_DAYS = 7.0
BOOKING_MEDIUM_DAYS = 14.0
TREND_DELTA = 1.0
PREMIUM_TIER_RATIO = 1.25
BUDGET_TIER_RATIO = 0.75
CAPACITY_UNDER_UTILIZED = 60.0
CAPACITY_OPTIMAL = 85.0
CAPACITY_STRETCH = 105.0
