from types import TracebackType
from typing import Any
from snowflake.snowpark import DataFrame, Row, Session
from dispatch_analytics.connector.base_snowpark import BaseSnowparkConnector
from dispatch_analytics.custom_exceptions.snowflake_exceptions import (
    SnowflakeCredentialException,
    SnowflakeInsertException,
    SnowflakeQueryException,
    SnowflakeSessionException,
)
from dispatch_analytics.definitions.custom_definitions import (
    ApplicationEnvironment,
    SnowflakeAuthenticatorType,
)
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import d_logger, logger
from dispatch_analytics.models.custom_models import SnowflakeCredentials
from dispatch_analytics.operations.key_pair_operations import (
    load_snowflake_private_key,
)


class SnowparkConnector(BaseSnowparkConnector):
    """
    Snowpark session wrapper used by the claims repository.

    Use it as a context manager; each worker thread opens its own.
    """

    def __init__(
        self,
        snowflake_credentials: SnowflakeCredentials,
    ) -> None:
        """
        Initialize the SnowparkConnector with Snowflake credentials.

        Params:
            snowflake_credentials (SnowflakeCredentials): Credentials for connecting to Snowflake.
        """
        self.snowflake_credentials: SnowflakeCredentials = snowflake_credentials
        self.session: Session | None = None

    def __enter__(self) -> "SnowparkConnector":
        """
        Enter the runtime context and open a Snowpark session.

        Returns:
            SnowparkConnector: The current instance of SnowparkConnector.
        """
        if environment_configuration.dispatch_analytics_environment != ApplicationEnvironment.TEST:
            if (
                self.snowflake_credentials.password is None
                and self.snowflake_credentials.authenticator is None
            ):
                raise SnowflakeCredentialException(
                    "Either password or authenticator must be provided in Snowflake credentials."
                )
            try:
                self.session = Session.builder.configs(
                    options=self._get_connection_options()
                ).create()
            except SnowflakeCredentialException:
                raise
            except Exception as e:
                logger.error(f"Could not create Snowpark session: {e}")
                raise SnowflakeSessionException(f"Could not create Snowpark session: {e}")
        else:
            logger.info(
                "Running in test environment. No real Snowpark session will be created."
            )
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_value: BaseException | None,
        _traceback: TracebackType | None,
    ) -> None:
        """
        Exit the runtime context and close the session.
        """
        if self.session is not None:
            self.session.close()
            self.session = None

    def _get_connection_options(self) -> dict[str, int | str | bytes]:
        """
        Get the connection options for Snowflake.

        Returns:
            dict: A dictionary containing the connection options.

        Raises:
            SnowflakeCredentialException: If key-pair settings are incomplete.
        """
        options: dict[str, int | str | bytes] = {
            "account": self.snowflake_credentials.account,
            "user": self.snowflake_credentials.user,
            "warehouse": self.snowflake_credentials.warehouse,
            "database": self.snowflake_credentials.database,
            "schema": self.snowflake_credentials.table_schema,
            "role": self.snowflake_credentials.role,
        }
        options = {key: value for key, value in options.items() if value is not None}

        if self.snowflake_credentials.password is not None:
            options["password"] = self.snowflake_credentials.password

        authenticator = self.snowflake_credentials.authenticator
        if authenticator == SnowflakeAuthenticatorType.EXTERNALBROWSER:
            options["authenticator"] = authenticator.value
        elif authenticator == SnowflakeAuthenticatorType.SNOWFLAKE_JWT:
            if self.snowflake_credentials.private_key_file is None:
                raise SnowflakeCredentialException(
                    "Private key file must be provided for JWT authentication."
                )
            options["authenticator"] = authenticator.value
            options["private_key"] = load_snowflake_private_key(
                private_key_file=self.snowflake_credentials.private_key_file,
                private_key_password=self.snowflake_credentials.private_key_password,
            )

        return options

    def _require_session(self) -> Session:
        if self.session is None:
            raise SnowflakeSessionException(
                "Session is not initialized. Please use the context manager."
            )
        return self.session

    def execute_query(
        self, query: str, lazy: bool = False, params: list[Any] | None = None
    ) -> list[Row] | DataFrame:
        """
        Execute a Snowflake query.

        Args:
            query (str): The SQL query to execute.
            lazy (bool): If True, return a DataFrame object. If False, return the collected rows.
            params (list | None): Bind values for ``?`` placeholders.

        Returns:
            list[Row] | DataFrame: The result of the query.

        Raises:
            SnowflakeQueryException: If Snowflake rejects the query.
        """
        session = self._require_session()
        d_logger.debug(f"Executing query: {query} params={params}")

        try:
            data_frame = session.sql(query, params=params)
            if lazy:
                return data_frame
            return data_frame.collect()
        except Exception as e:
            logger.error(f"Error executing query: {e}")
            raise SnowflakeQueryException(f"Error executing query: {e}")

    def table_exists(self, table_name: str) -> bool:
        """
        Check if a table exists in the Snowflake database.

        Args:
            table_name (str): The table name, e.g. "database.schema.table".

        Returns:
            bool: True if the table exists, False otherwise.
        """
        session = self._require_session()
        try:
            session.table(name=table_name).limit(1).collect()
            return True
        except Exception as e:
            d_logger.debug(f"Table {table_name} not readable: {e}")
            return False

    @staticmethod
    def _build_merge_sql(
        target_table_name: str,
        columns: list[str],
        row_count: int,
        join_keys: list[str],
        update_when_matched: bool,
    ) -> str:
        """
        Build a SQL MERGE statement whose source is a VALUES list of bind placeholders.

        Params:
            target_table_name: Target table name. FQN encouraged.
            columns: Columns supplied for every row.
            row_count: Number of rows in the VALUES list.
            join_keys: Columns to join on.
            update_when_matched: Whether matched rows are updated or left alone.

        Returns:
            SQL MERGE statement as a string
        """
        placeholders = "(" + ", ".join("?" for _ in columns) + ")"
        values_clause = ", ".join(placeholders for _ in range(row_count))
        source_columns = ", ".join(columns)

        join_clause = " AND ".join(f"target.{key} = source.{key}" for key in join_keys)
        insert_cols = ", ".join(columns)
        insert_values = ", ".join(f"source.{col}" for col in columns)

        merge_sql = f"""
MERGE INTO {target_table_name} AS target
USING (SELECT * FROM VALUES {values_clause}) AS source ({source_columns})
ON {join_clause}
"""
        update_columns = [col for col in columns if col not in join_keys]
        if update_when_matched and update_columns:
            update_clause = ", ".join(f"{col} = source.{col}" for col in update_columns)
            merge_sql += f"WHEN MATCHED THEN UPDATE SET {update_clause}\n"

        merge_sql += f"WHEN NOT MATCHED THEN INSERT ({insert_cols}) VALUES ({insert_values})\n"
        return merge_sql

    @staticmethod
    def _affected_rows(result: list[Row]) -> int:
        """Sum the 'number of rows inserted/updated' columns a MERGE returns."""
        if not result:
            return 0
        return sum(int(value) for value in result[0].as_dict().values() if value is not None)

    def _merge(
        self,
        target_table_name: str,
        rows: list[dict[str, Any]],
        join_keys: list[str],
        update_when_matched: bool,
    ) -> int:
        if not rows:
            return 0
        columns = [column.upper() for column in rows[0]]
        keys = [key.upper() for key in join_keys]
        params: list[Any] = []
        for row in rows:
            params.extend(row.values())

        merge_sql = self._build_merge_sql(
            target_table_name=target_table_name,
            columns=columns,
            row_count=len(rows),
            join_keys=keys,
            update_when_matched=update_when_matched,
        )
        try:
            result = self.execute_query(merge_sql, lazy=False, params=params)
        except SnowflakeQueryException as e:
            raise SnowflakeInsertException(f"Merge into {target_table_name} failed: {e.message}")

        affected = self._affected_rows(result)
        logger.info(f"Merged {affected} row(s) into {target_table_name}")
        return affected

    def insert_if_absent(
        self,
        target_table_name: str,
        row: dict[str, Any],
        join_keys: list[str],
    ) -> int:
        return self._merge(target_table_name, [row], join_keys, update_when_matched=False)

    def upsert_rows(
        self,
        target_table_name: str,
        rows: list[dict[str, Any]],
        join_keys: list[str],
    ) -> int:
        return self._merge(target_table_name, rows, join_keys, update_when_matched=True)
