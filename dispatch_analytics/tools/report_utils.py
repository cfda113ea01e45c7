import argparse
import json
from collections.abc import Callable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from pydantic import BaseModel
from dispatch_analytics.connector.claims_repository import (
    BaseClaimsRepository,
    SnowparkClaimsRepository,
)
from dispatch_analytics.connector.snowpark_connector import SnowparkConnector
from dispatch_analytics.custom_exceptions.configuration_exceptions import (
    ConfigurationException,
)
from dispatch_analytics.custom_exceptions.report_exceptions import (
    InvalidReportParameterException,
    ReportException,
)
from dispatch_analytics.custom_exceptions.snowflake_exceptions import SnowflakeException
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim, SnowflakeCredentials
from dispatch_analytics.models.report_models import ReportResponse


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Round half away from zero, the way the dashboard displays money and percentages.

    Python's ``round`` uses banker's rounding, so 2.675 would otherwise become 2.67.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100


def completed_as_of(claims: list[Claim], as_of: date | None = None) -> list[Claim]:
    """
    Drop claims completed after ``as_of`` (today by default).

    Claims without a completion date cannot be placed in time and are kept.
    """
    cutoff = as_of or date.today()
    return [claim for claim in claims if claim.completion_date is None or claim.completion_date.date() <= cutoff]


def require_minimum(name: str, value: int, minimum: int) -> int:
    """Reject report parameters below ``minimum``."""
    if value < minimum:
        raise InvalidReportParameterException(f"{name} must be at least {minimum}, got {value}")
    return value


def create_snowflake_credentials() -> SnowflakeCredentials:
    """
    Create SnowflakeCredentials from the environment configuration.

    Returns:
        SnowflakeCredentials: Configured credentials object for the claims database.

    Example:
        >>> with SnowparkConnector(create_snowflake_credentials()) as connector:
        ...     repository = SnowparkClaimsRepository(connector)
    """
    return SnowflakeCredentials(
        account=environment_configuration.snowflake_account,
        user=environment_configuration.snowflake_user,
        password=environment_configuration.snowflake_password,
        role=environment_configuration.snowflake_role,
        warehouse=environment_configuration.snowflake_warehouse,
        database=environment_configuration.snowflake_database,
        table_schema=environment_configuration.snowflake_schema,
        authenticator=environment_configuration.snowflake_authenticator,
        private_key_file=environment_configuration.snowflake_private_key_file,
        private_key_password=environment_configuration.snowflake_private_key_password,
    )


def parse_date_argument(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def non_negative_int(value: str) -> int:
    """argparse type for counts of weeks or days."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative number, got {number}")
    return number


def parse_pretty_flag(value: str) -> bool:
    """Accept the same values as the dashboard's ``pretty`` query flag."""
    return value.strip().lower() in ("true", "1")


def create_report_parser(report_name: str) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the options shared by every report.

    Args:
        report_name (str): Name of the report (used in parser description).

    Returns:
        argparse.ArgumentParser: Parser with --as_of and --pretty; reports add their own options.

    Example:
        >>> parser = create_report_parser("revenue_risk")
        >>> parser.add_argument("--firm", type=str, default=None)
        >>> args = parser.parse_args()
    """
    parser = argparse.ArgumentParser(
        description=f"Run {report_name} report.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--as_of",
        type=parse_date_argument,
        default=None,
        help="Treat this date as today (YYYY-MM-DD, optional)",
    )
    parser.add_argument(
        "--pretty",
        type=parse_pretty_flag,
        nargs="?",
        const=True,
        default=False,
        help="Indent the JSON output (true/1)",
    )
    return parser


def serialize_report(
    report: BaseModel | None,
    pretty: bool = False,
    error_message: str | None = None,
) -> str:
    """
    Wrap a report in the JSON envelope used by the dashboard.

    Returns ``{"status": "success", "data": ...}`` or ``{"status": "error", "message": ...}``.
    """
    if error_message is not None:
        response = ReportResponse(status="error", message=error_message)
    else:
        response = ReportResponse(
            status="success",
            data=report.model_dump(mode="json") if report is not None else None,
        )
    return json.dumps(
        response.model_dump(mode="json", exclude_none=True),
        indent=2 if pretty else None,
    )


def run_report(
    report_name: str,
    generator: Callable[..., BaseModel | None],
    pretty: bool = False,
    repository: BaseClaimsRepository | None = None,
    **kwargs,
) -> str:
    """
    Run one report generator and return its JSON envelope.

    Opens a Snowpark session unless a repository is passed in. Report, store and
    configuration errors become an error envelope; anything else propagates.
    """
    execution_start = datetime.now()
    logger.info(f"Running report: {report_name}")

    try:
        if repository is not None:
            report = generator(repository, **kwargs)
        else:
            with SnowparkConnector(create_snowflake_credentials()) as connector:
                report = generator(SnowparkClaimsRepository(connector), **kwargs)
    except (ReportException, SnowflakeException, ConfigurationException) as e:
        duration = (datetime.now() - execution_start).total_seconds()
        logger.error(f"Report {report_name} failed after {duration:.2f}s: {e.message}")
        return serialize_report(None, pretty=pretty, error_message=e.message)

    duration = (datetime.now() - execution_start).total_seconds()
    logger.info(f"Report {report_name} completed in {duration:.2f} seconds")
    return serialize_report(report, pretty=pretty)
