"""
Runs a generated script against a live PostgreSQL server.

The executor is built from explicit ``DatabaseSettings``; nothing here keeps
process-wide connection state. Each ``execute`` call opens its own pool and
closes it again whether the script succeeded or not. Failures are not retried.
"""

import logging
from typing import List

import psycopg2
from psycopg2.pool import SimpleConnectionPool

from .config import DatabaseSettings
from .domain.database import Database, join_statements
from .exceptions import ExecutionError


logger = logging.getLogger(__name__)


class PostgreSQLExecutor:
    """Executes SQL text through a short lived psycopg2 connection pool."""

    def __init__(self, settings: DatabaseSettings, min_connections: int = 1, max_connections: int = 1):
        self.settings = settings
        self.min_connections = min_connections
        self.max_connections = max_connections

    def execute(self, sql: str) -> None:
        """Run ``sql`` in one round trip and commit it."""
        try:
            pool = SimpleConnectionPool(
                self.min_connections, self.max_connections, **self.settings.connection_kwargs()
            )
        except psycopg2.Error as e:
            raise ExecutionError(
                f"Could not connect to the database: {e}", database_url=self.settings.url
            ) from e

        try:
            conn = pool.getconn()
            try:
                with conn.cursor() as cur:
                    cur.execute(sql)
                conn.commit()
            except psycopg2.Error:
                conn.rollback()
                raise
            finally:
                pool.putconn(conn)
        except psycopg2.Error as e:
            raise ExecutionError(
                f"Executing the generated script failed: {e}", database_url=self.settings.url
            ) from e
        finally:
            pool.closeall()
            logger.debug("Connection pool closed.")


def deploy(database: Database, executor: PostgreSQLExecutor) -> List[str]:
    """
    Generate the statements for ``database`` and execute them once.

    Returns the generated statements.
    """
    statements = database.create()
    sql = join_statements(statements)
    logger.info(f"Executing {len(statements)} statements against {executor.settings.host}...")
    executor.execute(sql)
    return statements
