"""
Dialect independent database container.

A concrete dialect subclasses ``Database`` and implements ``create()``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import DefaultConfig
from ..exceptions import ModelValidationError
from .models import Table


logger = logging.getLogger(__name__)


def join_statements(statements: Sequence[str], separator: str = DefaultConfig.STATEMENT_SEPARATOR) -> str:
    """Join statements into one script, terminating the last one too."""
    if not statements:
        return ""
    return separator.join(statements) + separator


def collect_schemas(tables: Iterable[Table]) -> List[str]:
    """
    Return the distinct non-default schemas used by ``tables``.

    Schemas are listed in the order they are first encountered.
    """
    schemas: List[str] = []
    for table in tables:
        if table.schema != DefaultConfig.SCHEMA and table.schema not in schemas:
            schemas.append(table.schema)
    return schemas


class Database(ABC):
    """Ordered collection of tables that a dialect turns into statements."""

    def __init__(self):
        self._tables: List[Table] = []

    @abstractmethod
    def create(self) -> List[str]:
        """Generate the statements that (re)create every table."""

    def script(self, separator: str = DefaultConfig.STATEMENT_SEPARATOR) -> str:
        """Join ``create()`` into one executable, terminated script."""
        return join_statements(self.create(), separator)

    @property
    def tables(self) -> Tuple[Table, ...]:
        return tuple(self._tables)

    @property
    def schemas(self) -> List[str]:
        return collect_schemas(self._tables)

    def get_table(self, qualified_name: str) -> Optional[Table]:
        for table in self._tables:
            if table.qualified_name == qualified_name:
                return table
        return None

    def add_table(self, name: str, schema: Optional[str] = None) -> Table:
        """
        Add a table to the database.

        The schema is only ever given explicitly; a dotted table name is
        rejected instead of being split into schema and name.
        """
        if not name or "." in name:
            raise ModelValidationError(
                f"Invalid table name '{name}'",
                table=name,
                suggestions=["Pass the schema as a separate argument: add_table('users', 'auth')"],
            )
        table = Table(name, schema)
        if self.get_table(table.qualified_name) is not None:
            raise ModelValidationError(
                f"Table '{table.qualified_name}' is already declared",
                table=table.qualified_name,
                suggestions=["Reuse the Table returned by the first add_table call"],
            )
        self._tables.append(table)
        logger.debug(f"Added table {table.qualified_name}")
        return table
