from __future__ import annotations

import asyncio
import random
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, Optional

from athena_ops.db.status import QueryStatus
from athena_ops.exceptions.errors import PollLimitExceededError
from athena_ops.logging.logger import get_logger

log = get_logger("db.poller")


@dataclass(frozen=True)
class PollPolicy:
    """Wait schedule between status polls.

    The default is an unbounded doubling from one second: no interval cap, no
    jitter, no attempt limit. ``max_interval``, ``max_attempts`` and ``jitter``
    are opt-in.
    """

    base_interval: float = 1.0
    multiplier: float = 2.0
    max_interval: Optional[float] = None
    max_attempts: Optional[int] = None
    jitter: float = 0.0

    def __post_init__(self) -> None:
        if self.base_interval < 0:
            raise ValueError(f"base_interval must be >= 0, got {self.base_interval}")
        if self.multiplier <= 0:
            raise ValueError(f"multiplier must be > 0, got {self.multiplier}")
        if self.max_interval is not None and self.max_interval < 0:
            raise ValueError(f"max_interval must be >= 0, got {self.max_interval}")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.jitter < 0:
            raise ValueError(f"jitter must be >= 0, got {self.jitter}")

    def intervals(self) -> Iterator[float]:
        wait = self.base_interval
        while True:
            step = wait if self.max_interval is None else min(wait, self.max_interval)
            if self.jitter:
                step += random.uniform(0.0, self.jitter)
            yield step
            wait *= self.multiplier


class ExecutionPoller:
    """Polls a status fetch until the query reaches a terminal state.

    QUEUED and RUNNING may alternate; any non-terminal status just schedules the
    next poll. Exceptions from ``fetch`` are not retried.
    """

    def __init__(self, policy: Optional[PollPolicy] = None, sleep: Callable[[float], None] = time.sleep):
        self.policy = policy or PollPolicy()
        self.sleep = sleep

    def wait(self, execution_id: str, fetch: Callable[[], QueryStatus]) -> QueryStatus:
        intervals = self.policy.intervals()
        attempts = 0
        while True:
            status = fetch()
            attempts += 1
            if status.is_terminal:
                return status
            self._check_attempts(execution_id, attempts, status)
            delay = next(intervals)
            log.debug(
                "Query not finished",
                extra={"query_execution_id": execution_id, "state": status.state.value, "attempt": attempts, "wait_s": delay},
            )
            self.sleep(delay)

    async def wait_async(
        self,
        execution_id: str,
        fetch: Callable[[], Awaitable[QueryStatus]],
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> QueryStatus:
        """Same loop as :meth:`wait`, suspending the task instead of the thread."""
        intervals = self.policy.intervals()
        attempts = 0
        while True:
            status = await fetch()
            attempts += 1
            if status.is_terminal:
                return status
            self._check_attempts(execution_id, attempts, status)
            delay = next(intervals)
            log.debug(
                "Query not finished",
                extra={"query_execution_id": execution_id, "state": status.state.value, "attempt": attempts, "wait_s": delay},
            )
            await sleep(delay)

    def _check_attempts(self, execution_id: str, attempts: int, status: QueryStatus) -> None:
        limit = self.policy.max_attempts
        if limit is not None and attempts >= limit:
            raise PollLimitExceededError(
                f"Query {execution_id} still {status.state.value} after {attempts} status checks"
            )
