from __future__ import annotations

from typing import Optional


class AthenaOpsError(Exception):
    """Base exception for athena_ops."""

class UnmappedStatusError(AthenaOpsError):
    """Athena reported a query state outside the known vocabulary."""

    def __init__(self, token: str):
        super().__init__(f"Unmapped Athena query state: {token!r}")
        self.token = token

class MalformedLocationError(AthenaOpsError):
    def __init__(self, url: Optional[str]):
        super().__init__(f"Invalid output location: {url!r}")
        self.url = url

class QueryExecutionError(AthenaOpsError):
    """A query waited on synchronously ended FAILED or CANCELLED."""

    def __init__(self, reason: Optional[str], execution_id: str = "", state: str = ""):
        message = reason or f"Query {execution_id} ended {state or 'unsuccessfully'}"
        super().__init__(message)
        self.reason = reason
        self.execution_id = execution_id
        self.state = state

class PollLimitExceededError(AthenaOpsError):
    pass

class SchemaDefinitionError(AthenaOpsError):
    pass
