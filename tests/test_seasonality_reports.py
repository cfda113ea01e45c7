from datetime import date

import pytest
from conftest import InMemoryClaimsRepository, completed_claim, make_claim

from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.reports.completed_claims_by_month import (
    generate_completed_claims_by_month_report,
)
from dispatch_analytics.reports.seasonal_performance_benchmark import (
    generate_seasonal_performance_benchmark_report,
)
from dispatch_analytics.reports.seasonality_profile import generate_seasonality_profile_report


def _history_repository():
    claims = []
    for firm, completed_on, count in [
        ("Sedgwick", date(2023, 3, 10), 2),
        ("Doan", date(2023, 7, 3), 1),
        ("SEDGWK", date(2024, 3, 5), 3),
        ("Doan", date(2024, 3, 28), 1),
        ("Sedgwick", date(2025, 3, 14), 3),
    ]:
        claims.extend(completed_claim(firm, completed_on, 200.0) for _ in range(count))
    claims.append(make_claim(firm_name="Doan", status=ClaimStatus.SCHEDULED))
    claims.append(make_claim(firm_name="Doan", status=ClaimStatus.COMPLETED))
    return InMemoryClaimsRepository(claims)


def test_seasonality_profile_fills_every_month():
    report = generate_seasonality_profile_report(_history_repository())

    assert sorted(report.years) == ["2023", "2024", "2025"]
    for months in report.years.values():
        assert [m.month for m in months] == list(range(1, 13))
    assert report.years["2024"][2].completed_claims == 4
    assert report.years["2024"][2].month_name == "March"
    assert report.years["2024"][6].completed_claims == 0


def test_seasonality_summary():
    report = generate_seasonality_profile_report(_history_repository())

    averages = {a.month: a.avg_claims for a in report.month_averages}
    assert averages[3] == 3.0
    assert averages[7] == 1.0
    assert averages[1] == 0.0
    assert report.summary.overall_avg == 2.5
    assert report.summary.peak_month.month_name == "March"
    assert report.summary.low_month.month_name == "July"
    assert report.summary.seasonal_variance == 44.7


def test_seasonality_totals_match_completed_claims_by_month():
    repository = _history_repository()
    profile = generate_seasonality_profile_report(repository)
    direct = generate_completed_claims_by_month_report(repository)

    profile_total = sum(m.completed_claims for months in profile.years.values() for m in months)
    assert profile_total == direct.total_completed == sum(row.completed_claims for row in direct.rows) == 10


def test_seasonality_for_one_firm():
    report = generate_seasonality_profile_report(_history_repository(), firm="sedgwk")
    assert report.firm == "Sedgwick"
    assert sorted(report.years) == ["2023", "2024", "2025"]
    assert [report.years[year][2].completed_claims for year in ("2023", "2024", "2025")] == [2, 3, 3]
    assert report.summary.low_month.month_name == "March"


def test_seasonality_for_firm_without_claims_is_empty():
    report = generate_seasonality_profile_report(_history_repository(), firm="Frontline")
    assert report.years == {}
    assert report.summary.peak_month is None
    assert report.summary.overall_avg == 0.0


def test_completed_claims_by_month_rows_are_sorted():
    rows = generate_completed_claims_by_month_report(_history_repository()).rows
    assert [(r.year, r.month, r.firm_name, r.completed_claims) for r in rows] == [
        (2023, 3, "Sedgwick", 2),
        (2023, 7, "Doan", 1),
        (2024, 3, "Doan", 1),
        (2024, 3, "Sedgwick", 3),
        (2025, 3, "Sedgwick", 3),
    ]


def test_benchmark_against_prior_years():
    report = generate_seasonal_performance_benchmark_report(_history_repository(), as_of=date(2025, 6, 1))

    assert report.current_year == 2025
    assert report.years_included == [2023, 2024, 2025]
    march = report.data[2]
    assert (march.month, march.historical_avg, march.current_year, march.index) == ("March", 3.0, 3, 1.0)
    july = report.data[6]
    assert (july.historical_avg, july.current_year, july.index) == (1.0, 0, 0.0)
    assert report.summary.avg_index == 1.0
    assert report.summary.best_month == "March"
    assert report.summary.worst_month == "March"
    assert report.summary.months_above_expected == 0
    assert report.summary.months_below_expected == 0


def test_benchmark_without_history_has_zero_indexes():
    repository = InMemoryClaimsRepository([completed_claim("Doan", date(2025, 2, 3), 100.0)])
    report = generate_seasonal_performance_benchmark_report(repository, as_of=date(2025, 6, 1))
    assert report.data[1].current_year == 1
    assert all(row.index == 0.0 for row in report.data)
    assert report.summary.best_month == ""


def test_seasonality_without_completed_claims_raises():
    with pytest.raises(NoDataException):
        generate_seasonality_profile_report(InMemoryClaimsRepository())


def test_per_firm_profiles_add_up_to_the_whole():
    repository = _history_repository()

    def total(report):
        return sum(m.completed_claims for months in report.years.values() for m in months)

    per_firm = sum(total(generate_seasonality_profile_report(repository, firm=firm)) for firm in ("Sedgwick", "Doan"))
    assert per_firm == total(generate_seasonality_profile_report(repository)) == 10


def test_firm_counts_for_one_month_add_up_across_three_firms():
    repository = _history_repository()
    repository.claims.extend(completed_claim("HEA", date(2024, 3, 12), 150.0) for _ in range(2))

    march_2024 = [
        row.completed_claims
        for row in generate_completed_claims_by_month_report(repository).rows
        if (row.year, row.month) == (2024, 3)
    ]
    per_firm = {
        firm: generate_seasonality_profile_report(repository, firm=firm).years["2024"][2].completed_claims
        for firm in ("Sedgwick", "Doan", "HEA")
    }

    assert per_firm == {"Sedgwick": 3, "Doan": 1, "HEA": 2}
    assert sum(per_firm.values()) == sum(march_2024) == 6


def test_monthly_counts_stop_at_as_of():
    repository = _history_repository()

    report = generate_completed_claims_by_month_report(repository, as_of=date(2024, 12, 31))
    assert report.total_completed == 7
    assert max(row.year for row in report.rows) == 2024

    profile = generate_seasonality_profile_report(repository, as_of=date(2024, 12, 31))
    assert sorted(profile.years) == ["2023", "2024"]


def test_stored_completion_month_wins_over_the_timestamp():
    repository = InMemoryClaimsRepository(
        [completed_claim("Doan", date(2025, 4, 1), 100.0, completed_month="2025-03")]
    )
    (row,) = generate_completed_claims_by_month_report(repository, as_of=date(2025, 6, 1)).rows
    assert (row.year, row.month) == (2025, 3)
