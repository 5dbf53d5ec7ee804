from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from athena_ops.db.utils import HIVE_DDL, SqlDialect

PartitionDescriptor = Mapping[str, str]


@dataclass(frozen=True)
class PartitionLoadOptions:
    # Permissive loads skip partitions that already exist instead of failing.
    permissive: bool = False


class PartitionSQLGenerator:
    """Render ALTER TABLE statements that add or drop many partitions at once.

    Keys render in each descriptor's own order, which must match the table's
    partition columns; nothing is reordered or checked against a schema. An
    empty partition list renders ``""`` and callers skip execution.
    """

    def __init__(self, dialect: SqlDialect = HIVE_DDL):
        self.dialect = dialect

    def partition_spec(self, partition: PartitionDescriptor) -> str:
        pairs = ", ".join(
            f"{self.dialect.ident(str(col))} = {self.dialect.literal(val)}" for col, val in partition.items()
        )
        return f"PARTITION ({pairs})"

    def to_sql(
        self,
        table_name: str,
        partitions: Sequence[PartitionDescriptor],
        options: PartitionLoadOptions = PartitionLoadOptions(),
    ) -> str:
        if not partitions:
            return ""
        add = "ADD IF NOT EXISTS" if options.permissive else "ADD"
        specs = " ".join(self.partition_spec(p) for p in partitions)
        return f"ALTER TABLE {self.dialect.ident(table_name)} {add} {specs};"

    def drop_sql(
        self,
        table_name: str,
        partitions: Sequence[PartitionDescriptor],
        options: PartitionLoadOptions = PartitionLoadOptions(),
    ) -> str:
        if not partitions:
            return ""
        drop = "DROP IF EXISTS" if options.permissive else "DROP"
        # Hive wants commas between partitions on DROP, spaces on ADD.
        specs = ", ".join(self.partition_spec(p) for p in partitions)
        return f"ALTER TABLE {self.dialect.ident(table_name)} {drop} {specs};"
