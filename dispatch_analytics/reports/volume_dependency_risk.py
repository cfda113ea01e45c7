from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    VOLUME_HHI_CONCENTRATED,
    VOLUME_MIN_ACTIVE_FIRMS,
    VOLUME_TOP3_CRITICAL,
    VOLUME_TOP3_HIGH,
    VOLUME_TOP3_MODERATE,
    ClaimStatus,
    ConcentrationLevel,
)
from dispatch_analytics.logger import logger
from dispatch_analytics.models.report_models import (
    FirmVolume,
    VolumeDependencyRiskReport,
    VolumeRiskAssessment,
)
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.reports.concentration import concentration_metrics
from dispatch_analytics.tools.firm_configuration import get_firm_registry
from dispatch_analytics.tools.report_utils import (
    completed_as_of,
    create_report_parser,
    percentage,
    round_half_up,
    run_report,
)


def assess_volume_risk(top_3_percentage: float, hhi: int, firm_count: int) -> VolumeRiskAssessment:
    if top_3_percentage >= VOLUME_TOP3_CRITICAL:
        level = ConcentrationLevel.CRITICAL
        status = "Severe operational dependency detected"
        recommendations = [
            "URGENT: Diversify client base immediately",
            "Implement contingency plans for top clients",
            "Consider operational risk insurance",
        ]
    elif top_3_percentage >= VOLUME_TOP3_HIGH:
        level = ConcentrationLevel.HIGH
        status = "High operational dependency risk"
        recommendations = [
            "Actively pursue new firm partnerships",
            "Reduce reliance on top 3 firms",
            "Develop backup capacity for key accounts",
        ]
    elif top_3_percentage >= VOLUME_TOP3_MODERATE:
        level = ConcentrationLevel.MODERATE
        status = "Moderate operational concentration"
        recommendations = [
            "Monitor volume distribution trends",
            "Continue diversification efforts",
            "Build relationships with mid-tier firms",
        ]
    else:
        level = ConcentrationLevel.LOW
        status = "Well-diversified volume base"
        recommendations = [
            "Maintain current diversification",
            "Continue monitoring for concentration drift",
        ]

    if hhi > VOLUME_HHI_CONCENTRATED:
        recommendations.append("HHI indicates high volume concentration")
    if firm_count < VOLUME_MIN_ACTIVE_FIRMS:
        recommendations.append("Increase total number of active firm partnerships")

    return VolumeRiskAssessment(
        concentration_level=level,
        operational_status=status,
        recommendations=recommendations,
    )


def generate_volume_dependency_risk_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> VolumeDependencyRiskReport:
    """
    Measure how much of the completed workload comes from a few firms.

    Each firm keeps the first raw spelling seen as its display name.
    """
    claims = completed_as_of(
        repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_firm_name=True), as_of
    )
    if not claims:
        raise NoDataException("No completed claims found for volume dependency analysis")

    registry = get_firm_registry()
    counts: dict[str, int] = {}
    display_names: dict[str, str] = {}
    for claim in claims:
        firm = normalize_firm_name(claim.firm_name, registry)
        counts[firm] = counts.get(firm, 0) + 1
        display_names.setdefault(firm, claim.firm_name or firm)

    total_claims = sum(counts.values())
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    firm_volumes = [
        FirmVolume(
            firm_name=display_names[firm],
            normalized_name=firm,
            claim_count=count,
            volume_share_percentage=round_half_up(percentage(count, total_claims), 1),
        )
        for firm, count in ordered
    ]

    metrics = concentration_metrics([float(count) for _, count in ordered], digits=1)
    assessment = assess_volume_risk(metrics.top_3_percentage, metrics.herfindahl_index, len(firm_volumes))

    logger.info(
        f"Volume dependency: {total_claims} claim(s) across {len(firm_volumes)} firm(s), "
        f"HHI {metrics.herfindahl_index} ({assessment.concentration_level.value})"
    )

    return VolumeDependencyRiskReport(
        generated_at=datetime.now(),
        total_claims=total_claims,
        unique_firms=len(firm_volumes),
        firm_volumes=firm_volumes,
        top_3_firms=firm_volumes[:3],
        top_3_firm_dependency_ratio=metrics.top_3_percentage,
        volume_concentration=metrics,
        risk_assessment=assessment,
    )


if __name__ == "__main__":
    parser = create_report_parser("volume_dependency_risk")
    args = parser.parse_args()
    print(
        run_report(
            "volume_dependency_risk",
            generate_volume_dependency_risk_report,
            pretty=args.pretty,
            as_of=args.as_of,
        )
    )
