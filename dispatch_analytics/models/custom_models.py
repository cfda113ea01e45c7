from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dispatch_analytics.definitions.custom_definitions import (
    ClaimStatus,
    PayCycleType,
    PayoutStatus,
    SnowflakeAuthenticatorType,
    Weekday,
)


class SnowflakeCredentials(BaseModel):
    """
    Model for Snowflake connection credentials.
    """

    account: str | None = Field(default=None, description="Snowflake account identifier")
    user: str | None = Field(default=None, description="Snowflake user name")
    password: str | None = Field(default=None, description="Snowflake password")
    role: str | None = Field(default=None, description="Snowflake role")
    warehouse: str | None = Field(default=None, description="Snowflake warehouse")
    database: str | None = Field(default=None, description="Database holding the claims tables")
    table_schema: str | None = Field(default=None, description="Schema holding the claims tables")
    authenticator: SnowflakeAuthenticatorType | None = Field(
        default=None, description="External authenticator, externalbrowser or snowflake_jwt"
    )
    private_key_file: str | None = Field(
        default=None, description="Path to the private key file for key pair authentication"
    )
    private_key_password: str | None = Field(default=None, description="Password for the private key")


class Claim(BaseModel):
    """
    A claim row as stored in the claims table.

    Column names are kept exactly as the store names them. Archived claims are
    still returned, archival only hides them from the dispatch board.
    """

    id: str = Field(..., description="Claim identifier")
    firm_name: str | None = Field(default=None, description="Free-text name of the paying firm")
    status: ClaimStatus = Field(default=ClaimStatus.UNASSIGNED, description="Lifecycle status")
    appointment_start: datetime | None = Field(default=None, description="Scheduled inspection start")
    appointment_end: datetime | None = Field(default=None, description="Scheduled inspection end")
    completion_date: datetime | None = Field(default=None, description="When the inspection was completed")
    completed_month: str | None = Field(default=None, description="Completion month as YYYY-MM")
    created_at: datetime | None = Field(default=None, description="When the claim was created")
    assigned_to: str | None = Field(default=None, description="Assigned appraiser")
    file_total: float | None = Field(default=None, description="Invoiced total for the file")
    pay_amount: float | None = Field(default=None, description="Agreed pay for the inspection")
    mileage: float | None = Field(default=None, description="Billable mileage")
    expected_payout_date: date | None = Field(default=None, description="When payment is expected")
    actual_payout_date: date | None = Field(default=None, description="When payment arrived")
    payout_status: PayoutStatus | None = Field(default=None, description="Payment status")
    archived_at: datetime | None = Field(default=None, description="Soft-delete timestamp")

    @field_validator("id", mode="before")
    def coerce_id(cls, value: object) -> str:
        """Numeric ids from older imports are stored as NUMBER."""
        return str(value)

    @field_validator(
        "appointment_start", "appointment_end", "completion_date", "created_at", "archived_at", mode="before"
    )
    def promote_date(cls, value: object) -> object:
        """DATE columns come back as date, promote them to midnight."""
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, datetime.min.time())
        return value

    @property
    def is_completed(self) -> bool:
        return self.status == ClaimStatus.COMPLETED and self.completion_date is not None

    @property
    def work_date(self) -> date | None:
        """Date the work was done, or is scheduled to be done."""
        if self.is_completed:
            return self.completion_date.date()
        if self.appointment_start is not None:
            return self.appointment_start.date()
        return None

    @property
    def completion_month(self) -> str | None:
        """YYYY-MM month the completion is booked to, preferring the stored month."""
        if self.completed_month:
            return self.completed_month
        if self.completion_date is None:
            return None
        return f"{self.completion_date.year}-{self.completion_date.month:02d}"

    @property
    def recorded_amount(self) -> float:
        """Invoiced total, falling back to the agreed pay."""
        if self.file_total is not None and self.file_total > 0:
            return self.file_total
        if self.pay_amount is not None and self.pay_amount > 0:
            return self.pay_amount
        return 0.0


class FirmConfiguration(BaseModel):
    """
    Pay-cycle configuration for a single firm.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Canonical firm name")
    pay_cycle: PayCycleType = Field(..., description="Pay-cycle rule used to infer payout dates")
    payout_weekday: Weekday | None = Field(
        default=None, description="Weekday of payment for weekly and biweekly cycles"
    )
    reference_pay_date: date | None = Field(
        default=None, description="A known payout date anchoring the biweekly phase"
    )
    period_ends_on_payout_day: bool = Field(
        default=False, description="Whether the pay period includes the payout day itself"
    )
    base_fee: float = Field(default=0.0, description="Fee used when a claim has no agreed pay")
    is_recurring: bool = Field(default=True, description="Whether the firm is included in payout forecasts")
    notes: str | None = Field(default=None, description="Free-form notes")


class NormalizationRule(BaseModel):
    """
    Maps raw firm-name spellings onto a canonical firm name.
    """

    model_config = ConfigDict(frozen=True)

    canonical_name: str = Field(..., description="Canonical firm name")
    equals: tuple[str, ...] = Field(default=(), description="Exact uppercase spellings")
    contains: tuple[str, ...] = Field(default=(), description="Uppercase substrings")

    def matches(self, upper_name: str) -> bool:
        if upper_name in self.equals:
            return True
        return any(pattern in upper_name for pattern in self.contains)
