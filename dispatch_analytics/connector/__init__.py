"""
Connector Module
================

This module provides access to the claims store through Snowpark.

Classes:
    BaseSnowparkConnector: Abstract base class defining the Snowpark connector interface
    SnowparkConnector: Snowpark session wrapper used as a context manager
    BaseClaimsRepository: Store interface consumed by every report
    SnowparkClaimsRepository: Claims repository backed by Snowflake tables

Usage:
    from dispatch_analytics.connector import SnowparkClaimsRepository, SnowparkConnector
    from dispatch_analytics.tools import create_snowflake_credentials

    with SnowparkConnector(create_snowflake_credentials()) as connector:
        claims = SnowparkClaimsRepository(connector).fetch_claims()
"""

from dispatch_analytics.connector.base_snowpark import BaseSnowparkConnector
from dispatch_analytics.connector.claims_repository import (
    BaseClaimsRepository,
    SnowparkClaimsRepository,
)
from dispatch_analytics.connector.snowpark_connector import SnowparkConnector

__all__ = [
    "BaseSnowparkConnector",
    "SnowparkConnector",
    "BaseClaimsRepository",
    "SnowparkClaimsRepository",
]
