from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MonthlyPerformanceLogEntry(BaseModel):
    """
    Model for one row of the monthly performance log.
    """

    month: str = Field(..., title="Month", description="Logged month as YYYY-MM")
    completed_claims: int = Field(default=0, title="Completed Claims", description="Claims completed in the month")
    backlog: int = Field(
        default=0, title="Backlog", description="Open claims with an appointment in the month"
    )
    avg_velocity: float = Field(
        default=0.0, title="Average Velocity", description="Completed claims per business day"
    )
    burnout_ratio: float = Field(
        default=0.0, title="Burnout Ratio", description="Completed claims over max safe capacity"
    )
    firms_active: int = Field(default=0, title="Firms Active", description="Distinct firms with completed work")
    logged_at: datetime | None = Field(default=None, title="Logged At", description="When the row was written")


class MonthlyFirmActivity(BaseModel):
    """
    Model for per-firm activity in a logged month.
    """

    month: str = Field(..., title="Month", description="Month as YYYY-MM")
    firm_name: str = Field(..., title="Firm Name", description="Canonical firm name")
    claims_completed: int = Field(default=0, title="Claims Completed", description="Claims completed")
    revenue_generated: float = Field(default=0.0, title="Revenue Generated", description="Recorded revenue")
