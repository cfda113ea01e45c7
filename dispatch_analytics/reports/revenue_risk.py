from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    REVENUE_SINGLE_FIRM_WARNING,
    REVENUE_TOP3_CRITICAL,
    REVENUE_TOP3_HIGH,
    REVENUE_TOP3_MODERATE,
    ClaimStatus,
    ConcentrationLevel,
)
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.report_models import (
    FirmRevenue,
    RevenueRiskAssessment,
    RevenueRiskReport,
)
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.reports.concentration import concentration_metrics
from dispatch_analytics.tools.firm_configuration import FirmRegistry, get_firm_registry
from dispatch_analytics.tools.report_utils import (
    completed_as_of,
    create_report_parser,
    percentage,
    round_half_up,
    run_report,
)

DIVERSIFICATION_STATUS = {
    ConcentrationLevel.LOW: "Well diversified - healthy revenue distribution",
    ConcentrationLevel.MODERATE: "Moderately concentrated - acceptable but monitor",
    ConcentrationLevel.HIGH: "Highly concentrated - significant dependency risk",
    ConcentrationLevel.CRITICAL: "Critically concentrated - extreme dependency risk",
}

RECOMMENDATIONS = {
    ConcentrationLevel.CRITICAL: [
        "CRITICAL: Over 80% revenue from top 3 firms - extremely high risk",
        "Immediately diversify client base to reduce dependency",
        "Losing any top firm would severely impact business",
    ],
    ConcentrationLevel.HIGH: [
        "HIGH RISK: Over 60% revenue concentrated in top 3 firms",
        "Actively pursue new firms to reduce concentration",
        "Consider this a priority for business stability",
    ],
    ConcentrationLevel.MODERATE: [
        "Moderate concentration - manageable but monitor closely",
        "Continue efforts to diversify revenue sources",
    ],
    ConcentrationLevel.LOW: [
        "Good diversification - revenue well distributed",
        "Maintain balance across multiple firms",
    ],
}


def classify_revenue_concentration(top_3_percentage: float) -> ConcentrationLevel:
    if top_3_percentage < REVENUE_TOP3_MODERATE:
        return ConcentrationLevel.LOW
    if top_3_percentage < REVENUE_TOP3_HIGH:
        return ConcentrationLevel.MODERATE
    if top_3_percentage < REVENUE_TOP3_CRITICAL:
        return ConcentrationLevel.HIGH
    return ConcentrationLevel.CRITICAL


def aggregate_revenue_by_firm(
    claims: list[Claim],
    registry: FirmRegistry | None = None,
) -> dict[str, tuple[float, int]]:
    """Revenue and claim count per normalized firm, skipping claims without revenue."""
    registry = registry or get_firm_registry()
    totals: dict[str, tuple[float, int]] = {}
    for claim in claims:
        if not claim.firm_name or claim.recorded_amount <= 0:
            continue
        firm = normalize_firm_name(claim.firm_name, registry)
        revenue, count = totals.get(firm, (0.0, 0))
        totals[firm] = (revenue + claim.recorded_amount, count + 1)
    return totals


def _firm_revenues(claims: list[Claim]) -> tuple[list[FirmRevenue], float]:
    totals = aggregate_revenue_by_firm(claims)
    total_revenue = sum(revenue for revenue, _ in totals.values())
    firm_revenues = [
        FirmRevenue(
            firm_name=firm,
            normalized_name=firm,
            total_revenue=round_half_up(revenue),
            claim_count=count,
            revenue_share_percentage=round_half_up(percentage(revenue, total_revenue)),
            avg_revenue_per_claim=round_half_up(revenue / count),
        )
        for firm, (revenue, count) in totals.items()
    ]
    firm_revenues.sort(key=lambda firm: firm.total_revenue, reverse=True)
    return firm_revenues, total_revenue


def _fetch_completed_claims(repository: BaseClaimsRepository, as_of: date | None = None) -> list[Claim]:
    claims = completed_as_of(
        repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_firm_name=True), as_of
    )
    if not claims:
        raise NoDataException("No completed claims found for revenue risk analysis")
    return claims


def generate_revenue_risk_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> RevenueRiskReport:
    """
    Measure how dependent completed-claim revenue is on a few firms.
    """
    claims = _fetch_completed_claims(repository, as_of)
    firm_revenues, total_revenue = _firm_revenues(claims)
    if not firm_revenues:
        raise NoDataException("No completed claims with revenue found for revenue risk analysis")

    metrics = concentration_metrics([firm.total_revenue for firm in firm_revenues])
    top_3_ratio = metrics.top_3_percentage
    level = classify_revenue_concentration(top_3_ratio)

    recommendations = list(RECOMMENDATIONS[level])
    top_firm = firm_revenues[0]
    if top_firm.revenue_share_percentage > REVENUE_SINGLE_FIRM_WARNING:
        recommendations.append(
            f"Single firm dependency: {top_firm.normalized_name} accounts for "
            f"{top_firm.revenue_share_percentage:.1f}% of revenue"
        )

    logger.info(f"Revenue risk: {len(firm_revenues)} firm(s), top 3 hold {top_3_ratio}% ({level.value})")

    return RevenueRiskReport(
        generated_at=datetime.now(),
        total_revenue=round_half_up(total_revenue),
        total_claims=sum(firm.claim_count for firm in firm_revenues),
        unique_firms=len(firm_revenues),
        firm_revenues=firm_revenues,
        top_3_firms=firm_revenues[:3],
        top_3_firm_dependency_ratio=top_3_ratio,
        revenue_concentration=metrics,
        risk_assessment=RevenueRiskAssessment(
            concentration_level=level,
            diversification_status=DIVERSIFICATION_STATUS[level],
            recommendations=recommendations,
        ),
    )


def get_firm_revenue(
    repository: BaseClaimsRepository,
    firm_name: str,
    as_of: date | None = None,
) -> FirmRevenue | None:
    """Revenue line for one firm, matched after normalization."""
    firm_revenues, _ = _firm_revenues(_fetch_completed_claims(repository, as_of))
    target = normalize_firm_name(firm_name)
    return next((firm for firm in firm_revenues if firm.normalized_name == target), None)


if __name__ == "__main__":
    parser = create_report_parser("revenue_risk")
    args = parser.parse_args()
    print(run_report("revenue_risk", generate_revenue_risk_report, pretty=args.pretty, as_of=args.as_of))
