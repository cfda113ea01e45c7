"""
Operations Module
=================

This module provides utility operations for the dispatch analytics reports,
including calendar arithmetic, key-pair loading and Snowflake table setup.

Functions:
    Date Operations:
        - add_days, week_start, week_end, last_day_of_month
        - adjust_for_weekend, next_weekday_after
        - business_days_between, business_days_in_month
        - month_key, parse_month_key, previous_month, next_month

    Key Pair Operations:
        - load_snowflake_private_key: Load a PEM key for JWT authentication

    Snowflake Query Operations:
        - create_monthly_log_tables: Create the monthly log tables in Snowflake
"""

from dispatch_analytics.operations.date_operations import (
    MONTH_NAMES,
    add_days,
    adjust_for_weekend,
    business_days_between,
    business_days_in_month,
    days_between,
    last_day_of_month,
    month_key,
    next_month,
    next_weekday_after,
    parse_month_key,
    previous_month,
    week_end,
    week_start,
)
from dispatch_analytics.operations.key_pair_operations import (
    load_snowflake_private_key,
)
from dispatch_analytics.operations.snowflake_query_operations import (
    create_monthly_log_tables,
)

__all__ = [
    "MONTH_NAMES",
    "add_days",
    "adjust_for_weekend",
    "business_days_between",
    "business_days_in_month",
    "days_between",
    "last_day_of_month",
    "month_key",
    "next_month",
    "next_weekday_after",
    "parse_month_key",
    "previous_month",
    "week_end",
    "week_start",
    "load_snowflake_private_key",
    "create_monthly_log_tables",
]
