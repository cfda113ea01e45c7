from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class PayoutPeriod(BaseModel):
    """
    Work period and the date it is paid.
    """

    period_start: date = Field(..., description="First work day covered")
    period_end: date = Field(..., description="Last work day covered")
    payout_date: date = Field(..., description="Date payment is expected")


class PayoutForecast(BaseModel):
    """
    Expected payment from one firm on one payout date.
    """

    firm: str = Field(..., description="Canonical firm name")
    payout_date: date = Field(..., description="Date payment is expected")
    period_start: date = Field(..., description="First work day covered")
    period_end: date = Field(..., description="Last work day covered")
    total_expected: float = Field(default=0.0, description="Expected amount")
    claim_ids: list[str] = Field(default_factory=list, description="Claims included in the payment")
    claim_count: int = Field(default=0, description="Number of claims included")


class WeeklyPayoutTotal(BaseModel):
    week_start: date = Field(..., description="Monday of the week")
    week_end: date = Field(..., description="Sunday of the week")
    total_amount: float = Field(default=0.0, description="Expected amount for the week")
    payouts: list[PayoutForecast] = Field(default_factory=list)


class MonthlyPayoutTotal(BaseModel):
    year: int
    month: int = Field(..., description="Month number, 1-12")
    month_name: str
    total_amount: float = Field(default=0.0, description="Expected amount for the month")
    by_firm: dict[str, float] = Field(default_factory=dict, description="Expected amount per firm")


class PayoutSummary(BaseModel):
    total_amount: float = 0.0
    payout_count: int = 0
    claim_count: int = 0
