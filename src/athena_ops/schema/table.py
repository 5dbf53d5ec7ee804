from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import yaml

from athena_ops.db.utils import HIVE_DDL
from athena_ops.exceptions.errors import SchemaDefinitionError

# format -> (ROW FORMAT ..., STORED AS ...)
_FORMATS: Dict[str, str] = {
    "tsv": "ROW FORMAT DELIMITED FIELDS TERMINATED BY '\\t' STORED AS TEXTFILE",
    "csv": "ROW FORMAT DELIMITED FIELDS TERMINATED BY ',' STORED AS TEXTFILE",
    "json": "ROW FORMAT SERDE 'org.openx.data.jsonserde.JsonSerDe' STORED AS TEXTFILE",
    "parquet": "STORED AS PARQUET",
}


@dataclass(frozen=True)
class TableSchema:
    columns: Dict[str, str]
    partitions: Dict[str, str] = field(default_factory=dict)

    @staticmethod
    def load(path: str) -> "TableSchema":
        """Read a schema file shaped like ``{columns: {name: type}, partitions: {name: type}}``."""
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Table schema not found: {p}")
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        columns = {str(k): str(v) for k, v in (raw.get("columns") or {}).items()}
        partitions = {str(k): str(v) for k, v in (raw.get("partitions") or {}).items()}
        return TableSchema(columns=columns, partitions=partitions)

    def _column_list(self, cols: Dict[str, str]) -> str:
        return ", ".join(f"{HIVE_DDL.ident(name)} {typ}" for name, typ in cols.items())

    def to_sql(self, table_name: str, location: str, format: str = "tsv") -> str:
        if not self.columns:
            raise SchemaDefinitionError(f"Table {table_name} has no columns")
        fmt = (format or "").strip().lower()
        if fmt not in _FORMATS:
            raise SchemaDefinitionError(f"Unsupported table format: {format!r}")

        parts: List[str] = [
            f"CREATE EXTERNAL TABLE IF NOT EXISTS {HIVE_DDL.ident(table_name)} ({self._column_list(self.columns)})"
        ]
        if self.partitions:
            parts.append(f"PARTITIONED BY ({self._column_list(self.partitions)})")
        parts.append(_FORMATS[fmt])
        parts.append(f"LOCATION {HIVE_DDL.literal(location)}")
        return " ".join(parts) + ";"
