"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of CIndex, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Current default schema lookup.

The schema a connection resolves unqualified names against rarely changes, so
it is looked up once per resolver and reused for the resolver's lifetime.
Create one resolver per connection or session and hand it to the manager.
"""

import threading

from cindex.core.logging import get_logger
from cindex.dialects import SqlPlatform
from cindex.executor import Executor

logger = get_logger(__name__)

CURRENT_SCHEMA_COLUMN = "current_schema"


class CurrentSchemaResolver:
    """
    Memoizes the connection's current default schema.

    The first call to resolve() runs the lookup; concurrent first callers are
    serialized so the query runs once, and later callers read the cached value
    without locking. The value is never refreshed.
    """

    def __init__(self, executor: Executor, platform: SqlPlatform):
        self.executor = executor
        self.platform = platform
        self._lock = threading.Lock()
        self._resolved = False
        self._schema: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def resolve(self) -> str | None:
        """
        Return the current default schema, querying it on first use.

        Returns:
            The schema name, or None if the database did not report one

        """
        if self._resolved:
            return self._schema

        with self._lock:
            if not self._resolved:
                self._schema = self._lookup()
                self._resolved = True
                logger.debug(f"Current default schema resolved to {self._schema!r}")

        return self._schema

    def _lookup(self) -> str | None:
        statement = self.executor.prepare(self.platform.current_schema_sql())
        row = statement.execute().fetchone()
        if not row:
            return None
        return row.get(CURRENT_SCHEMA_COLUMN)
