"""
Completed claims per firm and calendar month, computed from live claims.

The frame built here is also the input of the seasonality and benchmark
reports, so their totals always reconcile with this report.
"""

from datetime import date, datetime

import pandas as pd

from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import NoDataException
from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.report_models import (
    CompletedClaimsByMonthReport,
    FirmMonthlyCompletion,
)
from dispatch_analytics.operations.date_operations import parse_month_key
from dispatch_analytics.payouts.normalization import normalize_firm_name
from dispatch_analytics.tools.firm_configuration import get_firm_registry
from dispatch_analytics.tools.report_utils import (
    completed_as_of,
    create_report_parser,
    run_report,
)

COMPLETION_COLUMNS = ["claim_id", "firm_name", "year", "month", "revenue"]


def completed_claims_frame(claims: list[Claim]) -> pd.DataFrame:
    """
    One row per completed claim with its normalized firm and completion month.
    """
    registry = get_firm_registry()
    rows = [
        (
            claim.id,
            normalize_firm_name(claim.firm_name, registry),
            *parse_month_key(claim.completion_month),
            claim.recorded_amount,
        )
        for claim in claims
        if claim.is_completed
    ]
    return pd.DataFrame(rows, columns=COMPLETION_COLUMNS)


def fetch_completed_claims_frame(repository: BaseClaimsRepository, as_of: date | None = None) -> pd.DataFrame:
    claims = repository.fetch_claims(statuses=[ClaimStatus.COMPLETED], require_completion_date=True)
    frame = completed_claims_frame(completed_as_of(claims, as_of))
    if frame.empty:
        raise NoDataException("No completed claims with a completion date found")
    return frame


def count_by_firm_and_month(frame: pd.DataFrame) -> pd.DataFrame:
    return (
        frame.groupby(["firm_name", "year", "month"])
        .size()
        .reset_index(name="completed_claims")
        .sort_values(["year", "month", "firm_name"])
    )


def generate_completed_claims_by_month_report(
    repository: BaseClaimsRepository,
    as_of: date | None = None,
) -> CompletedClaimsByMonthReport:
    frame = fetch_completed_claims_frame(repository, as_of)
    counts = count_by_firm_and_month(frame)
    rows = [
        FirmMonthlyCompletion(
            firm_name=record.firm_name,
            year=int(record.year),
            month=int(record.month),
            completed_claims=int(record.completed_claims),
        )
        for record in counts.itertuples(index=False)
    ]
    logger.info(f"Completed claims by month: {len(frame)} claim(s) in {len(rows)} firm-month row(s)")
    return CompletedClaimsByMonthReport(
        generated_at=datetime.now(),
        total_completed=len(frame),
        rows=rows,
    )


if __name__ == "__main__":
    parser = create_report_parser("completed_claims_by_month")
    args = parser.parse_args()
    print(
        run_report(
            "completed_claims_by_month",
            generate_completed_claims_by_month_report,
            pretty=args.pretty,
            as_of=args.as_of,
        )
    )
