"""Athena query execution.

  - status     : Athena state tokens -> QueryState, QueryStatus snapshots
  - utils      : SQL quoting, output location parsing
  - poller     : backoff loop until a query is terminal
  - athena     : Client (submit, status, wait)
  - partitions : ALTER TABLE ... ADD/DROP PARTITION rendering
  - database   : per-database DDL helpers
"""
