"""
Tools Module
============

This module provides the firm configuration loader and the helpers shared by
every report entry point.

Classes:
    - ConfigurationLoader: Load firm configuration from YAML
    - FirmRegistry: Immutable view of firms and normalization rules

Functions:
    Firm Configuration:
        - get_firm_registry: Cached registry for the running process

    Report Utilities:
        - round_half_up: Round half away from zero
        - percentage: Safe percentage of a whole
        - create_snowflake_credentials: Build credentials from the environment
        - create_report_parser: Argument parser with the shared report options
        - serialize_report: Wrap a report in the JSON envelope
        - run_report: Open a session, run a generator and serialize the result
"""

from dispatch_analytics.tools.firm_configuration import (
    ConfigurationLoader,
    FirmRegistry,
    get_firm_registry,
)
from dispatch_analytics.tools.report_utils import (
    create_report_parser,
    create_snowflake_credentials,
    percentage,
    round_half_up,
    run_report,
    serialize_report,
)

__all__ = [
    "ConfigurationLoader",
    "FirmRegistry",
    "get_firm_registry",
    "create_report_parser",
    "create_snowflake_credentials",
    "percentage",
    "round_half_up",
    "run_report",
    "serialize_report",
]
