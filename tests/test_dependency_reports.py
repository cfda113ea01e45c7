from datetime import date

import pytest
from conftest import InMemoryClaimsRepository, completed_claim, make_claim

from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    ClaimStatus,
    ConcentrationLevel,
    PerformanceTier,
)
from dispatch_analytics.reports.concentration import concentration_metrics, herfindahl_index
from dispatch_analytics.reports.revenue_risk import (
    classify_revenue_concentration,
    generate_revenue_risk_report,
    get_firm_revenue,
)
from dispatch_analytics.reports.value_efficiency import (
    classify_tier,
    generate_value_efficiency_report,
)
from dispatch_analytics.reports.volume_dependency_risk import (
    assess_volume_risk,
    generate_volume_dependency_risk_report,
)

COMPLETED_ON = date(2025, 1, 10)


def _revenue_repository():
    return InMemoryClaimsRepository(
        [
            completed_claim("Sedgwick", COMPLETED_ON, 500.0),
            completed_claim("SL Appraisal", COMPLETED_ON, 300.0),
            completed_claim("HEA", COMPLETED_ON, None, pay_amount=200.0),
            completed_claim("HEA", COMPLETED_ON, 0.0),
            make_claim(firm_name="ACD", status=ClaimStatus.SCHEDULED, file_total=900.0),
        ]
    )


def test_revenue_risk_concentration():
    report = generate_revenue_risk_report(_revenue_repository())

    assert report.total_revenue == 1000.0
    assert report.total_claims == 3
    assert report.unique_firms == 3
    assert [f.normalized_name for f in report.firm_revenues] == ["Sedgwick", "Doan", "HEA"]
    assert [f.revenue_share_percentage for f in report.firm_revenues] == [50.0, 30.0, 20.0]
    assert report.top_3_firm_dependency_ratio == 100.0
    assert report.revenue_concentration.top_1_percentage == 50.0
    assert report.revenue_concentration.herfindahl_index == 3800
    assert report.risk_assessment.concentration_level == ConcentrationLevel.CRITICAL
    assert report.risk_assessment.diversification_status == "Critically concentrated - extreme dependency risk"
    assert "Single firm dependency: Sedgwick accounts for 50.0% of revenue" in report.risk_assessment.recommendations


def test_revenue_shares_sum_to_100():
    report = generate_revenue_risk_report(_revenue_repository())
    assert sum(f.revenue_share_percentage for f in report.firm_revenues) == pytest.approx(100.0, abs=0.05)


def test_get_firm_revenue():
    firm = get_firm_revenue(_revenue_repository(), "doan")
    assert firm.total_revenue == 300.0
    assert firm.claim_count == 1
    assert get_firm_revenue(_revenue_repository(), "Frontline") is None


def test_revenue_risk_without_completed_claims_raises():
    repository = InMemoryClaimsRepository([make_claim(firm_name="ACD", status=ClaimStatus.SCHEDULED)])
    with pytest.raises(NoDataException):
        generate_revenue_risk_report(repository)


@pytest.mark.parametrize(
    "file_total, pay_amount, expected",
    [(-50.0, 200.0, 200.0), (0.0, 150.0, 150.0), (None, 150.0, 150.0), (320.0, 150.0, 320.0), (-50.0, -10.0, 0.0), (None, 0.0, 0.0)],
)
def test_recorded_amount_falls_back_to_positive_pay(file_total, pay_amount, expected):
    claim = completed_claim("Doan", COMPLETED_ON, file_total, pay_amount=pay_amount)
    assert claim.recorded_amount == expected


def test_negative_file_total_counts_at_agreed_pay():
    repository = InMemoryClaimsRepository(
        [
            completed_claim("Sedgwick", COMPLETED_ON, 800.0),
            completed_claim("Doan", COMPLETED_ON, -50.0, pay_amount=200.0),
        ]
    )
    report = generate_revenue_risk_report(repository)
    assert report.total_revenue == 1000.0
    assert [f.total_revenue for f in report.firm_revenues] == [800.0, 200.0]


def test_revenue_and_efficiency_ignore_claims_completed_after_as_of():
    repository = InMemoryClaimsRepository(
        [
            completed_claim("Sedgwick", COMPLETED_ON, 500.0),
            completed_claim("Doan", COMPLETED_ON, 500.0),
            completed_claim("Doan", date(2025, 2, 3), 900.0),
        ]
    )
    as_of = date(2025, 1, 31)

    revenue = generate_revenue_risk_report(repository, as_of=as_of)
    assert revenue.total_revenue == 1000.0
    assert revenue.total_claims == 2
    assert get_firm_revenue(repository, "Doan", as_of=as_of).total_revenue == 500.0

    efficiency = generate_value_efficiency_report(repository, as_of=as_of)
    assert efficiency.total_revenue == 1000.0
    assert efficiency.overall_revenue_per_claim == 500.0

    volume = generate_volume_dependency_risk_report(repository, as_of=as_of)
    assert volume.total_claims == 2

    assert generate_revenue_risk_report(repository, as_of=date(2025, 2, 3)).total_revenue == 1900.0


def test_reports_before_first_completion_have_no_data():
    repository = InMemoryClaimsRepository([completed_claim("Doan", COMPLETED_ON, 500.0)])
    with pytest.raises(NoDataException):
        generate_revenue_risk_report(repository, as_of=date(2025, 1, 9))
    with pytest.raises(NoDataException):
        generate_value_efficiency_report(repository, as_of=date(2025, 1, 9))


@pytest.mark.parametrize(
    "top_3, level",
    [(39.9, ConcentrationLevel.LOW), (40, ConcentrationLevel.MODERATE), (60, ConcentrationLevel.HIGH), (80, ConcentrationLevel.CRITICAL)],
)
def test_revenue_concentration_bands(top_3, level):
    assert classify_revenue_concentration(top_3) == level


def test_concentration_metrics_for_even_split():
    metrics = concentration_metrics([10.0] * 10)
    assert metrics.top_1_percentage == 10.0
    assert metrics.top_3_percentage == 30.0
    assert metrics.top_5_percentage == 50.0
    assert metrics.herfindahl_index == 1000
    assert herfindahl_index([100.0]) == 10000


def test_herfindahl_index_rounds_halves_up():
    # squared shares sum to exactly 5000.5
    assert herfindahl_index([50.5, 49.5]) == 5001
    assert herfindahl_index([12.5, 87.5]) == 7813


def _volume_repository():
    claims = []
    for firm, count in [("Sedgwick", 5), ("SEDGWK", 0), ("Doan", 3), ("HEA", 2)]:
        claims.extend(completed_claim(firm, COMPLETED_ON) for _ in range(count))
    claims.insert(0, completed_claim("sedgwick inc. sedgwk", COMPLETED_ON))
    return InMemoryClaimsRepository(claims)


def test_volume_dependency_risk():
    report = generate_volume_dependency_risk_report(_volume_repository())

    assert report.total_claims == 11
    assert [f.normalized_name for f in report.firm_volumes] == ["Sedgwick", "Doan", "HEA"]
    sedgwick = report.firm_volumes[0]
    assert sedgwick.claim_count == 6
    assert sedgwick.firm_name == "sedgwick inc. sedgwk"
    assert sedgwick.volume_share_percentage == 54.5
    assert report.top_3_firm_dependency_ratio == 100.0
    assert report.risk_assessment.concentration_level == ConcentrationLevel.CRITICAL
    assert "HHI indicates high volume concentration" in report.risk_assessment.recommendations
    assert "Increase total number of active firm partnerships" in report.risk_assessment.recommendations


@pytest.mark.parametrize(
    "top_3, level",
    [(49.9, ConcentrationLevel.LOW), (50, ConcentrationLevel.MODERATE), (70, ConcentrationLevel.HIGH), (85, ConcentrationLevel.CRITICAL)],
)
def test_volume_concentration_bands(top_3, level):
    assessment = assess_volume_risk(top_3, hhi=1000, firm_count=10)
    assert assessment.concentration_level == level
    assert "HHI indicates high volume concentration" not in assessment.recommendations


def test_value_efficiency_ranks_and_tiers():
    repository = InMemoryClaimsRepository(
        [
            completed_claim("Sedgwick", COMPLETED_ON, 250.0),
            completed_claim("Sedgwick", COMPLETED_ON, 350.0),
            completed_claim("Doan", COMPLETED_ON, 200.0),
            completed_claim("HEA", COMPLETED_ON, 100.0),
            completed_claim("HEA", COMPLETED_ON, 100.0),
        ]
    )
    report = generate_value_efficiency_report(repository)

    assert report.overall_revenue_per_claim == 200.0
    assert [(f.normalized_name, f.efficiency_rank) for f in report.firm_efficiencies] == [
        ("Sedgwick", 1),
        ("Doan", 2),
        ("HEA", 3),
    ]
    assert report.firm_efficiencies[0].revenue_per_claim == 300.0
    assert report.efficiency_metrics.highest_revenue_per_claim == 300.0
    assert report.efficiency_metrics.lowest_revenue_per_claim == 100.0
    assert report.efficiency_metrics.median_revenue_per_claim == 200.0
    assert report.efficiency_metrics.efficiency_variance == 40.8
    assert [f.normalized_name for f in report.performance_tiers.premium] == ["Sedgwick"]
    assert [f.normalized_name for f in report.performance_tiers.standard] == ["Doan"]
    assert [f.normalized_name for f in report.performance_tiers.budget] == ["HEA"]
    assert len(report.top_performers) == 3


@pytest.mark.parametrize(
    "per_claim, tier",
    [(250, PerformanceTier.PREMIUM), (249.99, PerformanceTier.STANDARD), (150.01, PerformanceTier.STANDARD), (150, PerformanceTier.BUDGET)],
)
def test_tier_boundaries(per_claim, tier):
    assert classify_tier(per_claim, 200.0) == tier
