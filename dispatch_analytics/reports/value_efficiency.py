import statistics
from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import (
    BUDGET_TIER_RATIO,
    PREMIUM_TIER_RATIO,
    ClaimStatus,
    PerformanceTier,
)
from dispatch_analytics.logger import logger
from dispatch_analytics.models.report_models import (
    EfficiencyMetrics,
    FirmValueEfficiency,
    PerformanceTiers,
    ValueEfficiencyReport,
)
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.tools.firm_configuration import get_firm_registry
from dispatch_analytics.tools.report_utils import (
    completed_as_of,
    create_report_parser,
    round_half_up,
    run_report,
)

TOP_PERFORMER_COUNT = 5


def classify_tier(revenue_per_claim: float, overall_average: float) -> PerformanceTier:
    if revenue_per_claim >= overall_average * PREMIUM_TIER_RATIO:
        return PerformanceTier.PREMIUM
    if revenue_per_claim <= overall_average * BUDGET_TIER_RATIO:
        return PerformanceTier.BUDGET
    return PerformanceTier.STANDARD


def coefficient_of_variation(values: list[float]) -> float:
    """Population standard deviation over the mean, in percent."""
    if len(values) <= 1:
        return 0.0
    mean = statistics.fmean(values)
    if mean <= 0:
        return 0.0
    return statistics.pstdev(values) / mean * 100


def generate_value_efficiency_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> ValueEfficiencyReport:
    """
    Rank firms by revenue per completed claim and split them into tiers
    around the overall average.
    """
    claims = completed_as_of(
        repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_firm_name=True), as_of
    )
    if not claims:
        raise NoDataException("No completed claims found for value efficiency analysis")

    registry = get_firm_registry()
    totals: dict[str, list] = {}
    for claim in claims:
        revenue = claim.recorded_amount
        if not claim.firm_name or revenue <= 0:
            continue
        firm = normalize_firm_name(claim.firm_name, registry)
        entry = totals.setdefault(firm, [claim.firm_name, 0.0, 0])
        entry[1] += revenue
        entry[2] += 1

    if not totals:
        raise NoDataException("No completed claims with revenue found for value efficiency analysis")

    total_revenue = sum(entry[1] for entry in totals.values())
    total_claims = sum(entry[2] for entry in totals.values())
    overall_average = total_revenue / total_claims

    ranked = sorted(
        ((firm, name, revenue, count, revenue / count) for firm, (name, revenue, count) in totals.items()),
        key=lambda item: item[4],
        reverse=True,
    )

    tiers = PerformanceTiers()
    firm_efficiencies: list[FirmValueEfficiency] = []
    for rank, (firm, name, revenue, count, per_claim) in enumerate(ranked, start=1):
        efficiency = FirmValueEfficiency(
            firm_name=name,
            normalized_name=firm,
            total_revenue=round_half_up(revenue),
            claim_count=count,
            revenue_per_claim=round_half_up(per_claim),
            efficiency_rank=rank,
        )
        firm_efficiencies.append(efficiency)
        getattr(tiers, classify_tier(per_claim, overall_average).value).append(efficiency)

    per_claim_values = [item[4] for item in ranked]
    logger.info(f"Value efficiency: {len(ranked)} firm(s), overall {overall_average:.2f} per claim")

    return ValueEfficiencyReport(
        generated_at=datetime.now(),
        total_revenue=round_half_up(total_revenue),
        total_claims=total_claims,
        overall_revenue_per_claim=round_half_up(overall_average),
        unique_firms=len(firm_efficiencies),
        firm_efficiencies=firm_efficiencies,
        top_performers=firm_efficiencies[:TOP_PERFORMER_COUNT],
        efficiency_metrics=EfficiencyMetrics(
            highest_revenue_per_claim=round_half_up(max(per_claim_values)),
            lowest_revenue_per_claim=round_half_up(min(per_claim_values)),
            median_revenue_per_claim=round_half_up(statistics.median(per_claim_values)),
            efficiency_variance=round_half_up(coefficient_of_variation(per_claim_values), 1),
        ),
        performance_tiers=tiers,
    )


if __name__ == "__main__":
    parser = create_report_parser("value_efficiency")
    args = parser.parse_args()
    print(run_report("value_efficiency", generate_value_efficiency_report, pretty=args.pretty, as_of=args.as_of))
