from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import re

from athena_ops.exceptions.errors import MalformedLocationError


_LOCATION_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*)://(?P<bucket>[^/\s]+)/(?P<key>\S+)$")


@dataclass(frozen=True)
class SqlDialect:
    """Quoting rules for the SQL we render.

    Athena DDL (CREATE/ALTER/DROP) goes through the Hive parser and wants
    backtick identifiers and backslash escapes inside string literals; DML goes
    through Trino and wants double quotes and doubled single quotes.
    """

    ident_quote: str  # either '"' or '`'
    backslash_escapes: bool = False

    def ident(self, name: str) -> str:
        q = self.ident_quote
        if q == '"':
            return '"' + name.replace('"', '""') + '"'
        # backtick
        return '`' + name.replace('`', '``') + '`'

    def literal(self, value: object) -> str:
        """Render ``value`` as a single-quoted SQL string literal."""
        text = str(value)
        if self.backslash_escapes:
            # Hive concatenates adjacent literals, so '' would read as nothing.
            return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"
        return "'" + text.replace("'", "''") + "'"


HIVE_DDL = SqlDialect(ident_quote="`", backslash_escapes=True)


@dataclass(frozen=True)
class QueryOutputLocation:
    url: str
    bucket: str
    key: str
    scheme: str = "s3"


def parse_output_location(url: Optional[str]) -> QueryOutputLocation:
    """Parse ``<scheme>://bucket/key`` into a QueryOutputLocation.

    The bucket stops at the first ``/``; the key is everything after it and may
    contain further slashes. Neither may be empty or contain whitespace.
    """
    m = _LOCATION_RE.match(url or "")
    if not m:
        raise MalformedLocationError(url)
    return QueryOutputLocation(url=url, bucket=m.group("bucket"), key=m.group("key"), scheme=m.group("scheme"))
