from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any
from snowflake.snowpark import Row
from dispatch_analytics.connector.base_snowpark import BaseSnowparkConnector
from dispatch_analytics.custom_exceptions.report_exceptions import DataFetchException
from dispatch_analytics.custom_exceptions.snowflake_exceptions import SnowflakeException
from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.logging_models import (
    MonthlyFirmActivity,
    MonthlyPerformanceLogEntry,
)

CLAIM_COLUMNS = [
    "ID",
    "FIRM_NAME",
    "STATUS",
    "APPOINTMENT_START",
    "APPOINTMENT_END",
    "COMPLETION_DATE",
    "COMPLETED_MONTH",
    "CREATED_AT",
    "ASSIGNED_TO",
    "FILE_TOTAL",
    "PAY_AMOUNT",
    "MILEAGE",
    "EXPECTED_PAYOUT_DATE",
    "ACTUAL_PAYOUT_DATE",
    "PAYOUT_STATUS",
    "ARCHIVED_AT",
]


def _row_to_dict(row: Row) -> dict[str, Any]:
    """Snowflake returns upper-case column names; the models use lower case."""
    return {key.lower(): value for key, value in row.as_dict().items()}


class BaseClaimsRepository(ABC):
    """
    Read access to claims and read/write access to the monthly log tables.

    Every report takes one of these, so the same report code runs against
    Snowflake or an in-memory store.
    """

    @abstractmethod
    def fetch_claims(
        self,
        statuses: Iterable[ClaimStatus] | None = None,
        require_firm_name: bool = False,
        require_completion_date: bool = False,
    ) -> list[Claim]:
        """
        Fetch claims, optionally filtered.

        :param statuses: Only return claims in these statuses.
        :param require_firm_name: Skip claims without a firm name.
        :param require_completion_date: Skip claims without a completion date.
        :raises DataFetchException: If the store returns an error.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def fetch_monthly_logs(self) -> list[MonthlyPerformanceLogEntry]:
        """Fetch all monthly log rows ordered by month."""
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def month_logged(self, month: str) -> bool:
        """Return True if ``month`` (YYYY-MM) already has a log row."""
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def insert_monthly_log(self, entry: MonthlyPerformanceLogEntry) -> bool:
        """
        Insert a monthly log row unless the month is already logged.

        :return: True if the row was written, False if the month already existed.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def insert_firm_activity(self, rows: list[MonthlyFirmActivity]) -> None:
        """Write per-firm activity rows for a logged month."""
        raise NotImplementedError("Subclasses must implement this method.")


class SnowparkClaimsRepository(BaseClaimsRepository):
    """
    Claims repository backed by Snowflake tables.
    """

    def __init__(self, connector: BaseSnowparkConnector) -> None:
        self.connector = connector
        self.claims_table = environment_configuration.claims_table
        self.performance_log_table = environment_configuration.monthly_performance_log_table
        self.firm_activity_table = environment_configuration.monthly_firm_activity_table

    def _query(self, query: str, params: list[Any] | None = None) -> list[Row]:
        try:
            return self.connector.execute_query(query, lazy=False, params=params)
        except SnowflakeException as e:
            raise DataFetchException(e.message)

    def fetch_claims(
        self,
        statuses: Iterable[ClaimStatus] | None = None,
        require_firm_name: bool = False,
        require_completion_date: bool = False,
    ) -> list[Claim]:
        conditions: list[str] = []
        params: list[Any] = []

        if statuses is not None:
            status_values = [str(status) for status in statuses]
            conditions.append(f"STATUS IN ({', '.join('?' for _ in status_values)})")
            params.extend(status_values)
        if require_firm_name:
            conditions.append("FIRM_NAME IS NOT NULL")
        if require_completion_date:
            conditions.append("COMPLETION_DATE IS NOT NULL")

        query = f"SELECT {', '.join(CLAIM_COLUMNS)} FROM {self.claims_table}"
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY CREATED_AT"

        rows = self._query(query, params or None)
        logger.info(f"Fetched {len(rows)} claim(s) from {self.claims_table}")
        return [Claim(**_row_to_dict(row)) for row in rows]

    def fetch_monthly_logs(self) -> list[MonthlyPerformanceLogEntry]:
        rows = self._query(
            "SELECT MONTH, COMPLETED_CLAIMS, BACKLOG, AVG_VELOCITY, BURNOUT_RATIO, FIRMS_ACTIVE, LOGGED_AT "
            f"FROM {self.performance_log_table} ORDER BY MONTH"
        )
        return [MonthlyPerformanceLogEntry(**_row_to_dict(row)) for row in rows]

    def month_logged(self, month: str) -> bool:
        rows = self._query(
            f"SELECT MONTH FROM {self.performance_log_table} WHERE MONTH = ? LIMIT 1",
            [month],
        )
        return len(rows) > 0

    def insert_monthly_log(self, entry: MonthlyPerformanceLogEntry) -> bool:
        row = entry.model_dump(exclude={"logged_at"})
        inserted = self.connector.insert_if_absent(
            target_table_name=self.performance_log_table,
            row=row,
            join_keys=["month"],
        )
        return inserted > 0

    def insert_firm_activity(self, rows: list[MonthlyFirmActivity]) -> None:
        if not rows:
            return
        self.connector.upsert_rows(
            target_table_name=self.firm_activity_table,
            rows=[row.model_dump() for row in rows],
            join_keys=["month", "firm_name"],
        )
