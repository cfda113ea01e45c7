from abc import ABC, abstractmethod
from typing import Any
from snowflake.snowpark import DataFrame, Row


class BaseSnowparkConnector(ABC):
    """
    Base class for Snowpark connectors.
    """

    @abstractmethod
    def execute_query(
        self, query: str, lazy: bool = False, params: list[Any] | None = None
    ) -> list[Row] | DataFrame:
        """
        Execute a Snowflake query.

        :param query: The SQL query to execute, with ``?`` placeholders for params.
        :param lazy: If True, return a DataFrame object. If False, return the collected rows.
        :param params: Bind values for the placeholders.
        :return: The result of the query execution.
        :raises NotImplementedError: If the method is not implemented in the subclass.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def table_exists(self, table_name: str) -> bool:
        """
        Check whether a table exists.

        :param table_name: The table name, optionally fully qualified.
        :return: True if the table exists.
        :raises NotImplementedError: If the method is not implemented in the subclass.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def insert_if_absent(
        self,
        target_table_name: str,
        row: dict[str, Any],
        join_keys: list[str],
    ) -> int:
        """
        Insert a row unless a row with the same join keys already exists.

        :param target_table_name: The table to insert into.
        :param row: Column name to value mapping.
        :param join_keys: Columns that identify the row.
        :return: Number of rows inserted, 0 or 1.
        :raises NotImplementedError: If the method is not implemented in the subclass.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def upsert_rows(
        self,
        target_table_name: str,
        rows: list[dict[str, Any]],
        join_keys: list[str],
    ) -> int:
        """
        Insert or update rows keyed on the join keys.

        :param target_table_name: The table to merge into.
        :param rows: Column name to value mappings, all with the same columns.
        :param join_keys: Columns that identify a row.
        :return: Number of rows inserted or updated.
        :raises NotImplementedError: If the method is not implemented in the subclass.
        """
        raise NotImplementedError("Subclasses must implement this method.")
