from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence, Union

from athena_ops.db.partitions import PartitionDescriptor, PartitionLoadOptions, PartitionSQLGenerator
from athena_ops.db.status import QueryStatus
from athena_ops.db.utils import HIVE_DDL
from athena_ops.logging.logger import get_logger
from athena_ops.schema.table import TableSchema

if TYPE_CHECKING:
    from athena_ops.db.athena import Client

log = get_logger("db.database")


class Database:
    """One Athena database. DDL helpers always wait for the statement to finish."""

    def __init__(
        self,
        client: "Client",
        database_name: str,
        partitions_generator: Optional[PartitionSQLGenerator] = None,
    ):
        self.client = client
        self.database_name = database_name
        self.partitions_generator = partitions_generator or PartitionSQLGenerator()

    def create(self) -> QueryStatus:
        return self.client.execute_query(f"CREATE DATABASE {HIVE_DDL.ident(self.database_name)};", wait=True)

    def drop(self) -> QueryStatus:
        return self.client.execute_query(f"DROP DATABASE {HIVE_DDL.ident(self.database_name)};", wait=True)

    def create_table(self, table_name: str, table_schema: TableSchema, location: str, format: str = "tsv") -> QueryStatus:
        sql = table_schema.to_sql(table_name, location, format=format)
        return self.client.execute_query(sql, database=self.database_name, wait=True)

    def load_partitions(
        self, table_name: str, partitions: Sequence[PartitionDescriptor], permissive: bool = False
    ) -> Optional[QueryStatus]:
        """Register partitions; returns None without calling Athena when there are none."""
        sql = self.partitions_generator.to_sql(table_name, partitions, PartitionLoadOptions(permissive=permissive))
        if not sql:
            log.info("No partitions to load", extra={"database": self.database_name, "table": table_name})
            return None
        return self.client.execute_query(sql, database=self.database_name, wait=True)

    def drop_partitions(
        self, table_name: str, partitions: Sequence[PartitionDescriptor], permissive: bool = False
    ) -> Optional[QueryStatus]:
        sql = self.partitions_generator.drop_sql(table_name, partitions, PartitionLoadOptions(permissive=permissive))
        if not sql:
            log.info("No partitions to drop", extra={"database": self.database_name, "table": table_name})
            return None
        return self.client.execute_query(sql, database=self.database_name, wait=True)

    def execute_query(self, query: str, wait: bool = True) -> Union[str, QueryStatus]:
        return self.client.execute_query(query, database=self.database_name, wait=wait)

    def query_status(self, execution_id: str) -> QueryStatus:
        return self.client.query_status(execution_id)
