import argparse
import json
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.custom_exceptions.report_exceptions import ReportNotFoundException
from dispatch_analytics.logger import logger
from dispatch_analytics.reports.registry import REPORTS, get_report_generator
from dispatch_analytics.tools.report_utils import (
    parse_date_argument,
    parse_pretty_flag,
    run_report,
)


def run_reports(
    report_names: list[str],
    as_of: date | None = None,
    max_workers: int | None = None,
    repository: BaseClaimsRepository | None = None,
) -> dict[str, dict]:
    """
    Run several reports concurrently and return their envelopes by name.

    Each worker opens its own Snowpark session unless a repository is given.
    Unknown names fail before any report starts.

    Raises:
        ReportNotFoundException: If a report name is not registered.
    """
    generators = {name: get_report_generator(name) for name in report_names}
    execution_start = datetime.now()
    logger.info(f"Running {len(generators)} report(s): {', '.join(generators)}")

    with ThreadPoolExecutor(max_workers=max_workers or len(generators) or 1) as executor:
        futures = {
            name: executor.submit(run_report, name, generator, repository=repository, as_of=as_of)
            for name, generator in generators.items()
        }
        results = {name: json.loads(future.result()) for name, future in futures.items()}

    failed = [name for name, result in results.items() if result["status"] != "success"]
    duration = (datetime.now() - execution_start).total_seconds()
    if failed:
        logger.warning(f"{len(failed)} report(s) failed: {', '.join(failed)}")
    logger.info(f"Completed {len(results)} report(s) in {duration:.2f} seconds")
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one or more reports concurrently.")
    parser.add_argument(
        "reports",
        nargs="+",
        help=f"Report names: {', '.join(sorted(REPORTS))}",
    )
    parser.add_argument("--as_of", type=parse_date_argument, default=None, help="Treat this date as today")
    parser.add_argument("--max_workers", type=int, default=None, help="Worker threads (default: one per report)")
    parser.add_argument("--pretty", type=parse_pretty_flag, nargs="?", const=True, default=False)
    args = parser.parse_args()

    try:
        output = run_reports(args.reports, as_of=args.as_of, max_workers=args.max_workers)
    except ReportNotFoundException as e:
        logger.error(e.message)
        parser.exit(2, f"{e.message}\n")
    print(json.dumps(output, indent=2 if args.pretty else None))


if __name__ == "__main__":
    main()
