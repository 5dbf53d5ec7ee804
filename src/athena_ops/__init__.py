"""Athena query lifecycle client."""

from athena_ops.config.settings import Settings, load_settings
from athena_ops.db.athena import Client
from athena_ops.db.database import Database
from athena_ops.db.partitions import PartitionLoadOptions, PartitionSQLGenerator
from athena_ops.db.poller import ExecutionPoller, PollPolicy
from athena_ops.db.status import QueryState, QueryStatus
from athena_ops.db.utils import QueryOutputLocation, parse_output_location
from athena_ops.exceptions.errors import (
    AthenaOpsError,
    MalformedLocationError,
    PollLimitExceededError,
    QueryExecutionError,
    SchemaDefinitionError,
    UnmappedStatusError,
)
from athena_ops.schema.table import TableSchema

__all__ = [
    "AthenaOpsError",
    "Client",
    "Database",
    "ExecutionPoller",
    "MalformedLocationError",
    "PartitionLoadOptions",
    "PartitionSQLGenerator",
    "PollLimitExceededError",
    "PollPolicy",
    "QueryExecutionError",
    "QueryOutputLocation",
    "QueryState",
    "QueryStatus",
    "SchemaDefinitionError",
    "Settings",
    "TableSchema",
    "UnmappedStatusError",
    "load_settings",
]
