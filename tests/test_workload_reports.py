import json
from datetime import date, datetime, timedelta

import pytest
from conftest import InMemoryClaimsRepository, completed_claim, make_claim

from dispatch_analytics.custom_exceptions.report_exceptions import (
    InvalidReportParameterException,
    NoDataException,
)
from dispatch_analytics.definitions.custom_definitions import (
    BacklogStatus,
    BookingPressure,
    CapacityStatus,
    ClaimStatus,
    ThroughputTrend,
)
from dispatch_analytics.models.report_models import WeeklyThroughput
from dispatch_analytics.reports.capacity_stress import (
    classify_trend,
    generate_capacity_stress_report,
    get_week_throughput,
)
from dispatch_analytics.reports.monthly_history import (
    check_and_log_previous_month,
    generate_monthly_history_report,
)
from dispatch_analytics.reports.monthly_performance import (
    classify_capacity,
    generate_monthly_performance_report,
    get_monthly_completed_count,
)
from dispatch_analytics.tools.report_utils import run_report

# Capacity stress


def _capacity_repository():
    return InMemoryClaimsRepository(
        [
            make_claim(
                firm_name="Sedgwick",
                status=ClaimStatus.COMPLETED,
                created_at=datetime(2025, 1, 7, 10),
                assigned_to="appraiser",
                completion_date=datetime(2025, 1, 9, 15),
            ),
            make_claim(
                firm_name="Doan",
                status=ClaimStatus.SCHEDULED,
                created_at=datetime(2025, 1, 14, 9),
                assigned_to="appraiser",
                appointment_start=datetime(2025, 1, 25, 8),
            ),
        ]
    )


def test_capacity_stress_weeks():
    report = generate_capacity_stress_report(_capacity_repository(), historical_weeks=1, as_of=date(2025, 1, 15))

    assert report.total_weeks == 2
    assert report.period_start == date(2025, 1, 6)
    assert report.period_end == date(2025, 1, 19)

    first, current = report.weekly_data
    assert (first.claims_assigned, first.claims_completed, first.backlog_growth) == (1, 1, 0)
    assert first.days_booked_ahead == 0
    assert first.utilization_rate == 100.0
    assert not first.is_current_week
    assert (current.claims_assigned, current.claims_completed, current.backlog_growth) == (1, 0, 1)
    assert current.days_booked_ahead == 10
    assert current.is_current_week


def test_capacity_stress_summary_and_indicators():
    report = generate_capacity_stress_report(_capacity_repository(), historical_weeks=1, as_of=date(2025, 1, 15))

    assert report.current_days_booked_ahead == 10
    assert report.summary.total_backlog_growth == 1
    assert report.summary.avg_backlog_growth == 0.5
    assert report.summary.completion_rate == 50.0
    assert report.summary.trend == ThroughputTrend.STABLE
    assert report.capacity_indicators.backlog_status == BacklogStatus.HEALTHY
    assert report.capacity_indicators.booking_pressure == BookingPressure.MEDIUM
    assert report.capacity_indicators.throughput_trend == "Backlog stable - balanced throughput"


def test_week_throughput_for_any_day_in_week():
    week = get_week_throughput(_capacity_repository(), date(2025, 1, 9), as_of=date(2025, 1, 15))
    assert week.week_start == date(2025, 1, 6)
    assert week.claims_completed == 1


def _weeks(growth: list[int]) -> list[WeeklyThroughput]:
    start = date(2025, 1, 6)
    return [
        WeeklyThroughput(
            week_start=start + timedelta(weeks=index),
            week_end=start + timedelta(weeks=index, days=6),
            week_label="",
            backlog_growth=value,
        )
        for index, value in enumerate(growth)
    ]


@pytest.mark.parametrize(
    "growth, trend",
    [
        ([4, 4, 4, 1, 1, 1], ThroughputTrend.IMPROVING),
        ([1, 1, 1, 4, 4, 4], ThroughputTrend.DECLINING),
        ([2, 2, 2, 3, 3, 3], ThroughputTrend.STABLE),
        ([9, 0, 0], ThroughputTrend.STABLE),
    ],
)
def test_throughput_trend(growth, trend):
    assert classify_trend(_weeks(growth)) == trend


def test_capacity_stress_current_week_only():
    report = generate_capacity_stress_report(_capacity_repository(), historical_weeks=0, as_of=date(2025, 1, 15))
    assert report.total_weeks == 1
    assert report.period_start == date(2025, 1, 13)
    assert report.summary.avg_weekly_assigned == 1.0


def test_capacity_stress_rejects_negative_history():
    with pytest.raises(InvalidReportParameterException) as excinfo:
        generate_capacity_stress_report(_capacity_repository(), historical_weeks=-1, as_of=date(2025, 1, 15))
    assert excinfo.value.message == "historical_weeks must be at least 0, got -1"

    envelope = json.loads(
        run_report(
            "capacity_stress",
            generate_capacity_stress_report,
            repository=_capacity_repository(),
            historical_weeks=-1,
        )
    )
    assert envelope == {"status": "error", "message": "historical_weeks must be at least 0, got -1"}


def test_capacity_stress_without_claims_raises():
    with pytest.raises(NoDataException):
        generate_capacity_stress_report(InMemoryClaimsRepository())


# Monthly performance


def _january_repository():
    claims = [completed_claim("Sedgwick", date(2025, 1, 2 + index % 10), 100.0) for index in range(22)]
    claims.append(completed_claim("Sedgwick", date(2024, 12, 31), 100.0))
    claims.append(make_claim(firm_name="Doan", status=ClaimStatus.SCHEDULED, appointment_start=datetime(2025, 1, 20, 9)))
    claims.append(make_claim(firm_name="Doan", status=ClaimStatus.CANCELED, appointment_start=datetime(2025, 1, 21, 9)))
    return InMemoryClaimsRepository(claims)


def test_monthly_performance():
    report = generate_monthly_performance_report(
        _january_repository(), max_safe_capacity=100, as_of=date(2025, 1, 15)
    )

    assert report.current_month == "2025-01"
    assert report.current_month_name == "January"
    assert report.monthly_completed_claims == 22
    assert report.monthly_backlog == 1
    assert report.business_days_elapsed == 11
    assert report.total_business_days_in_month == 23
    assert report.monthly_velocity == 2.0
    assert report.monthly_burnout_ratio == 0.22
    assert report.capacity_percentage == 22.0
    assert report.capacity_status == CapacityStatus.UNDER_UTILIZED
    assert report.projected_end_of_month == 46
    assert report.recommended_daily_rate == 6.5
    assert report.days_remaining == 16


def test_monthly_completed_count():
    assert get_monthly_completed_count(_january_repository(), "2025-01") == 22
    assert get_monthly_completed_count(_january_repository(), "2024-12") == 1


@pytest.mark.parametrize(
    "capacity, status",
    [
        (59.9, CapacityStatus.UNDER_UTILIZED),
        (60, CapacityStatus.OPTIMAL),
        (85, CapacityStatus.STRETCH),
        (105, CapacityStatus.STRETCH),
        (105.1, CapacityStatus.BURNOUT),
    ],
)
def test_capacity_status_bands(capacity, status):
    assert classify_capacity(capacity) == status


# Monthly history


def _history_claims():
    return [
        completed_claim("Sedgwick", date(2025, 1, 8), 250.0),
        completed_claim("SEDGWK", date(2025, 1, 22), 250.0),
        completed_claim("Doan", date(2025, 1, 30), 180.0),
        make_claim(firm_name="Doan", status=ClaimStatus.SCHEDULED, appointment_start=datetime(2025, 1, 20, 9)),
        make_claim(firm_name="Doan", status=ClaimStatus.CANCELED, appointment_start=datetime(2025, 1, 21, 9)),
    ]


def test_previous_month_is_logged_once():
    repository = InMemoryClaimsRepository(_history_claims())

    assert check_and_log_previous_month(repository, as_of=date(2025, 2, 10), max_safe_capacity=100) == "2025-01"
    assert check_and_log_previous_month(repository, as_of=date(2025, 2, 10), max_safe_capacity=100) is None

    entry = repository.logs["2025-01"]
    assert entry.completed_claims == 3
    assert entry.backlog == 1
    assert entry.avg_velocity == 0.13
    assert entry.burnout_ratio == 0.03
    assert entry.firms_active == 2
    assert entry.logged_at is not None
    assert sorted(repository.firm_activity) == [("2025-01", "Doan"), ("2025-01", "Sedgwick")]
    assert repository.firm_activity[("2025-01", "Sedgwick")].revenue_generated == 500.0


def test_monthly_log_uses_the_stored_completion_month():
    late_night = completed_claim("Doan", datetime(2025, 2, 1, 0, 30), 180.0, completed_month="2025-01")
    repository = InMemoryClaimsRepository(_history_claims() + [late_night])

    assert check_and_log_previous_month(repository, as_of=date(2025, 2, 10), max_safe_capacity=100) == "2025-01"
    assert repository.logs["2025-01"].completed_claims == 4
    assert repository.firm_activity[("2025-01", "Doan")].claims_completed == 2
    assert get_monthly_completed_count(repository, "2025-02") == 0


class RacingRepository(InMemoryClaimsRepository):
    """Another process logs the month between the check and the insert."""

    def month_logged(self, month: str) -> bool:
        return False

    def insert_monthly_log(self, entry) -> bool:
        return False


def test_concurrent_logger_writes_no_firm_rows():
    repository = RacingRepository(_history_claims())
    assert check_and_log_previous_month(repository, as_of=date(2025, 2, 10), max_safe_capacity=100) is None
    assert repository.firm_activity == {}


def test_monthly_history_report():
    repository = InMemoryClaimsRepository(_history_claims())
    report = generate_monthly_history_report(repository, as_of=date(2025, 2, 10))

    assert report.months_tracked == 1
    assert report.earliest_month == report.latest_month == "2025-01"
    assert [row.firm_name for row in report.firm_activity] == ["Doan", "Sedgwick"]

    sedgwick_2025 = report.firm_monthly_data["Sedgwick"]["2025"]
    assert len(sedgwick_2025) == 12
    assert sedgwick_2025[0].claims_completed == 2
    assert sedgwick_2025[0].revenue_generated == 500.0
    assert sedgwick_2025[0].avg_velocity == 0.09
    assert sedgwick_2025[1].claims_completed == 0


def test_monthly_history_without_data_is_empty():
    report = generate_monthly_history_report(InMemoryClaimsRepository(), as_of=date(2025, 2, 10))
    assert report.months_tracked == 1
    assert report.historical_performance[0].completed_claims == 0
    assert report.firm_activity == []
    assert report.firm_monthly_data == {}
