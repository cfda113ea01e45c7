"""
Custom Exceptions Module
=========================

This module provides custom exception classes for handling the error
scenarios of the dispatch analytics reports.

Exception Hierarchy:
    - ConfigurationException: Base for firm configuration errors
        - ConfigurationFileNotFoundException
        - ConfigurationLoadException
        - ConfigurationValidationException
        - FirmConfigurationNotFoundException
    - PayoutException: Base for pay-period inference errors
        - UnknownFirmException
        - PayCycleConfigurationException
    - ReportException: Base for report errors
        - DataFetchException
        - NoDataException
        - ReportNotFoundException
        - InvalidReportParameterException
    - SnowflakeException: Base for Snowflake-related errors
        - SnowflakeCredentialException
        - SnowflakeSessionException
        - SnowflakeQueryException
        - SnowflakeTableException
        - SnowflakeInsertException
        - SnowflakePrivateKeyException
"""

from dispatch_analytics.custom_exceptions.configuration_exceptions import (
    ConfigurationException,
    ConfigurationFileNotFoundException,
    ConfigurationLoadException,
    ConfigurationValidationException,
    FirmConfigurationNotFoundException,
)
from dispatch_analytics.custom_exceptions.payout_exceptions import (
    PayCycleConfigurationException,
    PayoutException,
    UnknownFirmException,
)
from dispatch_analytics.custom_exceptions.report_exceptions import (
    DataFetchException,
    InvalidReportParameterException,
    NoDataException,
    ReportException,
    ReportNotFoundException,
)
from dispatch_analytics.custom_exceptions.snowflake_exceptions import (
    SnowflakeCredentialException,
    SnowflakeException,
    SnowflakeInsertException,
    SnowflakePrivateKeyException,
    SnowflakeQueryException,
    SnowflakeSessionException,
    SnowflakeTableException,
)

__all__ = [
    "ConfigurationException",
    "ConfigurationFileNotFoundException",
    "ConfigurationLoadException",
    "ConfigurationValidationException",
    "FirmConfigurationNotFoundException",
    "PayoutException",
    "UnknownFirmException",
    "PayCycleConfigurationException",
    "ReportException",
    "DataFetchException",
    "NoDataException",
    "ReportNotFoundException",
    "InvalidReportParameterException",
    "SnowflakeException",
    "SnowflakeCredentialException",
    "SnowflakeSessionException",
    "SnowflakeQueryException",
    "SnowflakeTableException",
    "SnowflakeInsertException",
    "SnowflakePrivateKeyException",
]
