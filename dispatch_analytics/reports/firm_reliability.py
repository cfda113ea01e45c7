from datetime import date, datetime

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import AgingBucket, PayoutStatus
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.report_models import (
    AgingBucketTotal,
    FirmReliabilityMetrics,
    FirmReliabilityReport,
    ReliabilitySummary,
)
from dispatch_analytics.operations.date_operations import days_between
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.tools.firm_configuration import get_firm_registry
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    percentage,
    round_half_up,
    run_report,
)

UNPAID_STATUSES = (PayoutStatus.UNPAID, PayoutStatus.OVERDUE)


def aging_bucket(days_overdue: int) -> AgingBucket:
    """Claims not yet due count as current."""
    if days_overdue <= 7:
        return AgingBucket.DAYS_0_7
    if days_overdue <= 14:
        return AgingBucket.DAYS_8_14
    if days_overdue <= 30:
        return AgingBucket.DAYS_15_30
    return AgingBucket.DAYS_30_PLUS


def _is_paid(claim: Claim) -> bool:
    return (
        claim.payout_status == PayoutStatus.PAID
        and claim.expected_payout_date is not None
        and claim.actual_payout_date is not None
    )


def _is_unpaid(claim: Claim) -> bool:
    return claim.payout_status in UNPAID_STATUSES and claim.expected_payout_date is not None


def days_late(claim: Claim) -> int:
    return days_between(claim.expected_payout_date, claim.actual_payout_date)


def calculate_firm_metrics(firm_name: str, claims: list[Claim], today: date) -> FirmReliabilityMetrics:
    """
    Payment timeliness and outstanding balance for one firm's claims.

    Days late is actual minus expected payout date, so early payments are
    negative and count as on time.
    """
    delays = sorted(days_late(claim) for claim in claims if _is_paid(claim))
    unpaid = [claim for claim in claims if _is_unpaid(claim)]

    aging = {bucket.value: AgingBucketTotal() for bucket in AgingBucket}
    outstanding = 0.0
    for claim in unpaid:
        amount = claim.recorded_amount
        outstanding += amount
        bucket = aging[aging_bucket(days_between(claim.expected_payout_date, today)).value]
        bucket.count += 1
        bucket.amount += amount

    for bucket in aging.values():
        bucket.amount = round_half_up(bucket.amount)

    on_time = sum(1 for delay in delays if delay <= 0)
    return FirmReliabilityMetrics(
        firm_name=firm_name,
        total_paid_claims=len(delays),
        total_unpaid_claims=len(unpaid),
        avg_days_late=round_half_up(sum(delays) / len(delays), 1) if delays else 0.0,
        on_time_percentage=round_half_up(percentage(on_time, len(delays)), 1),
        total_outstanding_balance=round_half_up(outstanding),
        outstanding_aging=aging,
        median_days_late=delays[len(delays) // 2] if delays else 0,
        worst_delay_days=delays[-1] if delays else 0,
        best_turnaround_days=delays[0] if delays else 0,
    )


def group_claims_by_firm(claims: list[Claim]) -> dict[str, list[Claim]]:
    registry = get_firm_registry()
    grouped: dict[str, list[Claim]] = {}
    for claim in claims:
        grouped.setdefault(normalize_firm_name(claim.firm_name, registry), []).append(claim)
    return grouped


def _overall_summary(claims: list[Claim]) -> ReliabilitySummary:
    delays = [days_late(claim) for claim in claims if _is_paid(claim)]
    unpaid = [claim for claim in claims if _is_unpaid(claim)]
    on_time = sum(1 for delay in delays if delay <= 0)
    return ReliabilitySummary(
        total_claims_tracked=sum(1 for claim in claims if claim.expected_payout_date is not None),
        total_paid_claims=len(delays),
        total_unpaid_claims=len(unpaid),
        total_outstanding_balance=round_half_up(sum(claim.recorded_amount for claim in unpaid)),
        overall_avg_days_late=round_half_up(sum(delays) / len(delays), 1) if delays else 0.0,
        overall_on_time_percentage=round_half_up(percentage(on_time, len(delays)), 1),
    )


def _fetch_payment_claims(repository: BaseClaimsRepository) -> list[Claim]:
    claims = repository.fetch_claims(require_firm_name=True)
    if not claims:
        raise NoDataException("No claims with a firm found for reliability analysis")
    return claims


def generate_firm_reliability_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> FirmReliabilityReport:
    today = as_of or date.today()
    claims = _fetch_payment_claims(repository)

    metrics_by_firm = [
        calculate_firm_metrics(firm, firm_claims, today)
        for firm, firm_claims in sorted(group_claims_by_firm(claims).items())
    ]
    summary = _overall_summary(claims)
    logger.info(
        f"Firm reliability: {len(metrics_by_firm)} firm(s), {summary.total_unpaid_claims} unpaid claim(s)"
    )

    return FirmReliabilityReport(
        generated_at=datetime.now(),
        total_firms=len(metrics_by_firm),
        metrics_by_firm=metrics_by_firm,
        overall_summary=summary,
    )


def get_firm_metrics(
    repository: BaseClaimsRepository,
    firm_name: str,
    as_of: date | None = None,
) -> FirmReliabilityMetrics | None:
    """Reliability metrics for one firm, or None if it has no claims."""
    target = normalize_firm_name(firm_name)
    firm_claims = group_claims_by_firm(_fetch_payment_claims(repository)).get(target)
    if not firm_claims:
        return None
    return calculate_firm_metrics(target, firm_claims, as_of or date.today())


if __name__ == "__main__":
    parser = create_report_parser("firm_reliability")
    args = parser.parse_args()
    print(run_report("firm_reliability", generate_firm_reliability_report, pretty=args.pretty, as_of=args.as_of))
