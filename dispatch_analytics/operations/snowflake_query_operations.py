from dispatch_analytics.connector.base_snowpark import BaseSnowparkConnector
from dispatch_analytics.custom_exceptions.snowflake_exceptions import (
    SnowflakeException,
    SnowflakeTableException,
)
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger


def create_monthly_log_tables(
    connector: BaseSnowparkConnector,
    database: str,
    schema: str,
) -> None:
    """
    Create the monthly performance log and firm activity tables if they do not exist.

    Parameters:
        connector: BaseSnowparkConnector
            An open connector for the target Snowflake environment.
        database: str
            The database that holds the claims tables.
        schema: str
            The schema that holds the claims tables.
    Returns:
        None
    """
    performance_log_table = f"{database}.{schema}.{environment_configuration.monthly_performance_log_table}"
    firm_activity_table = f"{database}.{schema}.{environment_configuration.monthly_firm_activity_table}"

    performance_log_sql = f"""
    CREATE TABLE IF NOT EXISTS {performance_log_table} (
        MONTH STRING(7) NOT NULL PRIMARY KEY,
        COMPLETED_CLAIMS NUMBER NOT NULL DEFAULT 0,
        BACKLOG NUMBER NOT NULL DEFAULT 0,
        AVG_VELOCITY FLOAT NOT NULL DEFAULT 0,
        BURNOUT_RATIO FLOAT NOT NULL DEFAULT 0,
        FIRMS_ACTIVE NUMBER NOT NULL DEFAULT 0,
        LOGGED_AT TIMESTAMP_NTZ DEFAULT CURRENT_TIMESTAMP
    )
    """

    firm_activity_sql = f"""
    CREATE TABLE IF NOT EXISTS {firm_activity_table} (
        MONTH STRING(7) NOT NULL,
        FIRM_NAME STRING(255) NOT NULL,
        CLAIMS_COMPLETED NUMBER NOT NULL DEFAULT 0,
        REVENUE_GENERATED NUMBER(12, 2) NOT NULL DEFAULT 0,
        PRIMARY KEY (MONTH, FIRM_NAME)
    )
    """

    try:
        for table_name, ddl in (
            (performance_log_table, performance_log_sql),
            (firm_activity_table, firm_activity_sql),
        ):
            if connector.table_exists(table_name):
                logger.info(f"Table '{table_name}' already exists")
                continue
            logger.info(f"Creating table: {table_name}")
            connector.execute_query(ddl, lazy=False)
            logger.info(f"Table '{table_name}' created successfully.")
    except SnowflakeException as e:
        logger.error(f"Failed to create monthly log tables in Snowflake. Error: {e}")
        raise SnowflakeTableException(f"Failed to create monthly log tables: {e.message}")
