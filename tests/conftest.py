from __future__ import annotations

import os

os.environ.setdefault("DISPATCH_ANALYTICS_ENVIRONMENT", "TEST")

from collections.abc import Iterable
from datetime import datetime
from itertools import count
from typing import Any

import pytest

from dispatch_analytics.connector.base_snowpark import BaseSnowparkConnector
from dispatch_analytics.connector.claims_repository import BaseClaimsRepository
from dispatch_analytics.definitions.custom_definitions import ClaimStatus
from dispatch_analytics.models.custom_models import Claim
from dispatch_analytics.models.logging_models import (
    MonthlyFirmActivity,
    MonthlyPerformanceLogEntry,
)
from dispatch_analytics.tools.firm_configuration import ConfigurationLoader, FirmRegistry

_claim_ids = count(1)


def make_claim(**fields: Any) -> Claim:
    fields.setdefault("id", str(next(_claim_ids)))
    return Claim(**fields)


def completed_claim(firm_name: str, completed_on, amount: float | None = None, **fields: Any) -> Claim:
    return make_claim(
        firm_name=firm_name,
        status=ClaimStatus.COMPLETED,
        completion_date=completed_on,
        file_total=amount,
        **fields,
    )


class InMemoryClaimsRepository(BaseClaimsRepository):
    def __init__(self, claims: Iterable[Claim] = ()) -> None:
        self.claims = list(claims)
        self.logs: dict[str, MonthlyPerformanceLogEntry] = {}
        self.firm_activity: dict[tuple[str, str], MonthlyFirmActivity] = {}
        self.fetch_calls = 0

    def fetch_claims(
        self,
        statuses=None,
        require_firm_name: bool = False,
        require_completion_date: bool = False,
    ) -> list[Claim]:
        self.fetch_calls += 1
        allowed = set(statuses) if statuses is not None else None
        return [
            claim
            for claim in self.claims
            if (allowed is None or claim.status in allowed)
            and (not require_firm_name or claim.firm_name is not None)
            and (not require_completion_date or claim.completion_date is not None)
        ]

    def fetch_monthly_logs(self) -> list[MonthlyPerformanceLogEntry]:
        return [self.logs[month] for month in sorted(self.logs)]

    def month_logged(self, month: str) -> bool:
        return month in self.logs

    def insert_monthly_log(self, entry: MonthlyPerformanceLogEntry) -> bool:
        if entry.month in self.logs:
            return False
        self.logs[entry.month] = entry.model_copy(update={"logged_at": datetime.now()})
        return True

    def insert_firm_activity(self, rows: list[MonthlyFirmActivity]) -> None:
        for row in rows:
            self.firm_activity[(row.month, row.firm_name)] = row


class RecordingConnector(BaseSnowparkConnector):
    """Returns canned rows and records every statement it is given."""

    def __init__(self, rows=None, merge_result: int = 1) -> None:
        self.rows = rows or []
        self.merge_result = merge_result
        self.queries: list[tuple[str, Any]] = []
        self.merges: list[dict[str, Any]] = []

    def execute_query(self, query, lazy=False, params=None):
        self.queries.append((query, params))
        return self.rows

    def table_exists(self, table_name: str) -> bool:
        return False

    def insert_if_absent(self, target_table_name, row, join_keys) -> int:
        self.merges.append({"table": target_table_name, "rows": [row], "join_keys": join_keys, "update": False})
        return self.merge_result

    def upsert_rows(self, target_table_name, rows, join_keys) -> int:
        self.merges.append({"table": target_table_name, "rows": rows, "join_keys": join_keys, "update": True})
        return len(rows)


@pytest.fixture(scope="session")
def registry() -> FirmRegistry:
    return ConfigurationLoader().registry


@pytest.fixture()
def repository() -> InMemoryClaimsRepository:
    return InMemoryClaimsRepository()
