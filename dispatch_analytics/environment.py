import os
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from dispatch_analytics.definitions.custom_definitions import (
    ApplicationEnvironment,
    DispatchAnalyticsTable,
    SnowflakeAuthenticatorType,
)


class EnvironmentConfiguration(BaseSettings):
    """
    Configuration class for environment variables.
    """

    dispatch_analytics_environment: ApplicationEnvironment = Field(
        default=ApplicationEnvironment.DEV, description="The environment the reports are running in"
    )
    snowflake_account: str | None = Field(
        default=None, description="The Snowflake account identifier, e.g. xy12345.us-east-1"
    )
    snowflake_user: str | None = Field(default=None, description="Snowflake user name")
    snowflake_password: str | None = Field(
        default=None, description="If not provided, an authenticator must be configured"
    )
    snowflake_role: str | None = Field(default=None, description="Snowflake role")
    snowflake_warehouse: str | None = Field(default=None, description="Snowflake warehouse")
    snowflake_database: str | None = Field(default=None, description="Database holding the claims tables")
    snowflake_schema: str | None = Field(default=None, description="Schema holding the claims tables")
    snowflake_authenticator: SnowflakeAuthenticatorType | None = Field(
        default=None, description="External authenticator, externalbrowser or snowflake_jwt"
    )
    snowflake_private_key_file: str | None = Field(
        default=None, description="Path to the private key file for key pair authentication"
    )
    snowflake_private_key_password: str | None = Field(
        default=None, description="Password for the private key"
    )
    claims_table: str = Field(
        default=DispatchAnalyticsTable.CLAIMS.value, description="Table holding claim rows"
    )
    monthly_performance_log_table: str = Field(
        default=DispatchAnalyticsTable.MONTHLY_PERFORMANCE_LOG.value,
        description="Table holding one row per logged month",
    )
    monthly_firm_activity_table: str = Field(
        default=DispatchAnalyticsTable.MONTHLY_FIRM_ACTIVITY.value,
        description="Table holding per-firm activity for logged months",
    )
    max_safe_capacity: int = Field(
        default=100, gt=0, description="Completed claims per month considered sustainable"
    )
    firm_configuration_path: str | None = Field(
        default=None, description="Override for the firm configuration YAML file"
    )
    log_level: str = Field(default="INFO", description="Level for the console and report log file")
    log_directory: str = Field(default=".", description="Directory the report and debug log files are written to")

    # When setting up environmental variables, there is no way to set them to None.
    # As a workaround, we will set them to an empty string and convert them to None here.

    @field_validator(
        "snowflake_account",
        "snowflake_user",
        "snowflake_password",
        "snowflake_role",
        "snowflake_warehouse",
        "snowflake_database",
        "snowflake_schema",
        "snowflake_private_key_file",
        "snowflake_private_key_password",
        "firm_configuration_path",
    )
    def check_empty_string(cls, value: str | None) -> str | None:
        """Convert empty strings to None."""
        if value is None:
            return None
        if len(value.strip()) == 0:
            return None
        return value

    @field_validator("snowflake_authenticator", mode="before")
    def check_snowflake_authenticator(cls, value: str | None) -> str | None:
        """Check if the snowflake authenticator is an empty string and convert it to None."""
        if value is None:
            return None
        if len(value) == 0:
            return None
        return value.upper()

    @field_validator("dispatch_analytics_environment", mode="before")
    def check_environment(cls, value: str | ApplicationEnvironment) -> str | ApplicationEnvironment:
        """Accept the environment name in any case."""
        if isinstance(value, str):
            return value.upper()
        return value

    class Config:
        """
        Configuration for Pydantic settings.
        """

        env_file = (
            ".env" if os.path.exists(".env") else ".env.example" if os.path.exists(".env.example") else None
        )
        env_file_encoding = "utf-8"
        extra = "ignore"


environment_configuration = EnvironmentConfiguration()
