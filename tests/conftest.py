"""Shared test fixtures for athena_ops."""

from typing import Any, Dict, List, Optional

import pytest

from athena_ops.config.settings import Settings
from athena_ops.db.athena import Client


class FakeAthena:
    """Scripted stand-in for the boto3 Athena client.

    Each get_query_execution call returns the next state in ``states``; the
    last one repeats once the script runs out.
    """

    def __init__(
        self,
        states: List[str],
        reason: Optional[str] = None,
        output_location: Optional[str] = "s3://query-results/athena/q-1.csv",
        execution_id: str = "q-1",
    ):
        self.states = list(states)
        self.reason = reason
        self.output_location = output_location
        self.execution_id = execution_id
        self.started: List[Dict[str, Any]] = []
        self.status_calls: List[str] = []

    def start_query_execution(self, **kwargs: Any) -> Dict[str, Any]:
        self.started.append(kwargs)
        return {"QueryExecutionId": self.execution_id}

    def get_query_execution(self, QueryExecutionId: str) -> Dict[str, Any]:
        idx = min(len(self.status_calls), len(self.states) - 1)
        self.status_calls.append(QueryExecutionId)
        state = self.states[idx]
        status: Dict[str, Any] = {"State": state}
        if self.reason and state in ("FAILED", "CANCELLED"):
            status["StateChangeReason"] = self.reason
        execution: Dict[str, Any] = {"QueryExecutionId": QueryExecutionId, "Status": status}
        if self.output_location:
            execution["ResultConfiguration"] = {"OutputLocation": self.output_location}
        return {"QueryExecution": execution}


@pytest.fixture
def sleeps() -> List[float]:
    """Records every wait the poller asks for instead of sleeping."""
    return []


@pytest.fixture
def make_client(sleeps):
    def _make(states: List[str], settings: Optional[Settings] = None, **fake_kwargs: Any):
        fake = FakeAthena(states, **fake_kwargs)
        client = Client(athena_client=fake, settings=settings or Settings(), sleep=sleeps.append)
        return client, fake

    return _make
