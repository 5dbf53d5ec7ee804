from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union
import asyncio
import time

import boto3

from athena_ops.config.settings import Settings
from athena_ops.db.poller import ExecutionPoller
from athena_ops.db.status import QueryStatus
from athena_ops.exceptions.errors import QueryExecutionError
from athena_ops.logging.logger import get_logger

if TYPE_CHECKING:
    from athena_ops.db.database import Database

log = get_logger("db.athena")


@dataclass(frozen=True)
class ExecutionParams:
    work_group: Optional[str] = None
    database: Optional[str] = None
    output_location: Optional[str] = None
    catalog: Optional[str] = None

    def to_request(self, query: str) -> Dict[str, Any]:
        """Keyword arguments for ``start_query_execution``; unset values are omitted."""
        args: Dict[str, Any] = {"QueryString": query}
        if self.work_group:
            args["WorkGroup"] = self.work_group
        if self.database:
            context = {"Database": self.database}
            if self.catalog:
                context["Catalog"] = self.catalog
            args["QueryExecutionContext"] = context
        if self.output_location:
            args["ResultConfiguration"] = {"OutputLocation": self.output_location}
        return args


def athena_client_config(settings: Settings) -> Dict[str, str]:
    config: Dict[str, str] = {}
    if settings.aws_region:
        config["region_name"] = settings.aws_region
    if settings.aws_access_key_id:
        config["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        config["aws_secret_access_key"] = settings.aws_secret_access_key
    return config


class Client:
    """Submits Athena queries and tracks them to completion.

    ``execute_query(..., wait=False)`` returns the QueryExecutionId right away.
    With ``wait=True`` it polls until the query is terminal and returns the
    finished QueryStatus, or raises QueryExecutionError for FAILED/CANCELLED.

    Each call keeps its own execution id and status, so one Client can serve
    many threads; the wait only blocks the calling thread. Use
    :meth:`wait_for_query_async` inside an event loop.
    """

    def __init__(
        self,
        athena_client: Any = None,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or Settings()
        self.athena = athena_client or boto3.client("athena", **athena_client_config(self.settings))
        self.poller = ExecutionPoller(self.settings.poll_policy(), sleep=sleep)

    def database(self, database_name: str) -> "Database":
        from athena_ops.db.database import Database

        return Database(self, database_name)

    def execute_query(
        self,
        query: str,
        work_group: Optional[str] = None,
        database: Optional[str] = None,
        output_location: Optional[str] = None,
        wait: bool = False,
    ) -> Union[str, QueryStatus]:
        execution_id = self.start_query(query, work_group, database, output_location)
        if not wait:
            return execution_id
        return self.wait_for_query(execution_id)

    def start_query(
        self,
        query: str,
        work_group: Optional[str] = None,
        database: Optional[str] = None,
        output_location: Optional[str] = None,
    ) -> str:
        s = self.settings
        params = ExecutionParams(
            work_group=work_group or s.athena_workgroup or None,
            database=database or s.athena_database or None,
            output_location=output_location or s.athena_output_location or None,
            catalog=s.athena_catalog or None,
        )

        log.info(
            "Athena start_query_execution",
            extra={
                "database": params.database,
                "workgroup": params.work_group,
                "output": params.output_location,
                "sql_head": query[:300],
            },
        )

        execution_id = self.athena.start_query_execution(**params.to_request(query))["QueryExecutionId"]
        if not execution_id:
            raise QueryExecutionError("Athena returned an empty QueryExecutionId")
        return execution_id

    def query_status(self, execution_id: str) -> QueryStatus:
        resp = self.athena.get_query_execution(QueryExecutionId=execution_id)
        status = QueryStatus.from_response(resp)
        if not status.execution_id:
            status = QueryStatus(status.state, status.reason, status.output_url, execution_id)
        return status

    def wait_for_query(self, execution_id: str) -> QueryStatus:
        status = self.poller.wait(execution_id, lambda: self.query_status(execution_id))
        return _check_finished(execution_id, status)

    async def wait_for_query_async(self, execution_id: str) -> QueryStatus:
        """Await the terminal status without blocking the event loop.

        boto3 is synchronous, so each status fetch runs in the default executor.
        """
        loop = asyncio.get_running_loop()

        async def fetch() -> QueryStatus:
            return await loop.run_in_executor(None, self.query_status, execution_id)

        status = await self.poller.wait_async(execution_id, fetch)
        return _check_finished(execution_id, status)


def _check_finished(execution_id: str, status: QueryStatus) -> QueryStatus:
    if not status.finished:
        raise QueryExecutionError(status.reason, execution_id=execution_id, state=status.state.value)
    log.info("Athena query finished", extra={"query_execution_id": execution_id})
    return status
