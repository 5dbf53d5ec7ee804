from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from athena_ops.db.utils import QueryOutputLocation, parse_output_location
from athena_ops.exceptions.errors import UnmappedStatusError


class QueryState(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (QueryState.QUEUED, QueryState.RUNNING)


# Athena QueryExecutionState -> local state
QUERY_STATE_MAPPING: Dict[str, QueryState] = {
    "QUEUED": QueryState.QUEUED,
    "RUNNING": QueryState.RUNNING,
    "SUCCEEDED": QueryState.FINISHED,
    "FAILED": QueryState.FAILED,
    "CANCELLED": QueryState.CANCELLED,
}


def map_query_state(token: str) -> QueryState:
    """Translate an Athena state token, refusing anything outside the known set."""
    try:
        return QUERY_STATE_MAPPING[token]
    except (KeyError, TypeError):
        raise UnmappedStatusError(token) from None


@dataclass(frozen=True)
class QueryStatus:
    """Snapshot of one get_query_execution call.

    ``output_url`` is kept raw; ``output_location`` parses it on access and only
    for finished queries, since Athena may report no location (or a placeholder)
    for executions that never produced results.
    """

    state: QueryState
    reason: Optional[str] = None
    output_url: Optional[str] = None
    execution_id: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def queued(self) -> bool:
        return self.state is QueryState.QUEUED

    @property
    def running(self) -> bool:
        return self.state is QueryState.RUNNING

    @property
    def finished(self) -> bool:
        return self.state is QueryState.FINISHED

    @property
    def failed(self) -> bool:
        return self.state is QueryState.FAILED

    @property
    def cancelled(self) -> bool:
        return self.state is QueryState.CANCELLED

    @property
    def output_location(self) -> Optional[QueryOutputLocation]:
        if not self.finished:
            return None
        return parse_output_location(self.output_url)

    @classmethod
    def from_response(cls, resp: Dict[str, Any]) -> "QueryStatus":
        """Build from a boto3 ``get_query_execution`` response."""
        qe = resp.get("QueryExecution", {})
        status = qe.get("Status", {})
        return cls(
            state=map_query_state(status.get("State", "")),
            reason=status.get("StateChangeReason") or None,
            output_url=qe.get("ResultConfiguration", {}).get("OutputLocation") or None,
            execution_id=qe.get("QueryExecutionId", ""),
        )
