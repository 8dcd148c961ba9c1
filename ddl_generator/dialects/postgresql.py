"""
PostgreSQL dialect.

``PostgreSQLDatabase.create()`` produces a destructive rebuild script in three
passes: drop everything, build every table, then link tables with foreign
keys. Because foreign keys are added last, a table may reference a table
declared after it.
"""

import logging
from typing import Dict, List

from ..domain.database import Database
from ..domain.models import ColumnType, ForeignKeyAction, Table
from ..exceptions import UnmappedEnumerationError


logger = logging.getLogger(__name__)


COLUMN_TYPE_MAP: Dict[ColumnType, str] = {
    ColumnType.STRING: "varchar",
    ColumnType.NUMBER: "integer",
    ColumnType.GUID: "uuid",
    ColumnType.DECIMAL: "decimal",
    ColumnType.DATE_TIME: "timestamp",
    ColumnType.BOOLEAN: "boolean",
    ColumnType.AUTO_INCREMENT: "serial",
}

FOREIGN_KEY_ACTION_MAP: Dict[ForeignKeyAction, str] = {
    ForeignKeyAction.CASCADE: "CASCADE",
    ForeignKeyAction.SET_NULL: "SET NULL",
}


def map_column_type(column_type: ColumnType) -> str:
    """Map a generic column type to its PostgreSQL type."""
    try:
        return COLUMN_TYPE_MAP[column_type]
    except KeyError:
        raise UnmappedEnumerationError(
            f"Undefined column type {column_type}", value=column_type, target="postgresql"
        ) from None


def map_foreign_key_action(action: ForeignKeyAction) -> str:
    """Map a referential action to its PostgreSQL keyword."""
    try:
        return FOREIGN_KEY_ACTION_MAP[action]
    except KeyError:
        raise UnmappedEnumerationError(
            f"Undefined reference action type {action}", value=action, target="postgresql"
        ) from None


class PostgreSQLDatabase(Database):
    """Generates PostgreSQL DDL for the declared tables."""

    dialect = "postgresql"

    def create(self) -> List[str]:
        """
        Return the ordered statements that rebuild every schema and table.

        A fresh list is built on every call. If a type or action cannot be
        mapped the error propagates and no statements are returned.
        """
        script: List[str] = []
        for schema in self.schemas:
            self._rebuild_schema(script, schema)
        for table in self._tables:
            self._drop_table(script, table)
        for table in self._tables:
            self._create_table(script, table)
            self._create_columns(script, table)
            self._create_primary_key(script, table)
            self._create_unique_constraints(script, table)
        for table in self._tables:
            self._create_foreign_keys(script, table)
        logger.debug(f"Generated {len(script)} statements for {len(self._tables)} tables")
        return script

    def _rebuild_schema(self, script: List[str], name: str):
        script.append(f"DROP SCHEMA IF EXISTS {name} CASCADE")
        script.append(f"CREATE SCHEMA {name}")

    def _drop_table(self, script: List[str], table: Table):
        script.append(f"DROP TABLE IF EXISTS {table.qualified_name} CASCADE")

    def _create_table(self, script: List[str], table: Table):
        script.append(f"CREATE TABLE {table.qualified_name}()")

    def _create_columns(self, script: List[str], table: Table):
        for column in table.columns:
            parts = [
                f"ALTER TABLE {table.qualified_name} ADD COLUMN {column.name}",
                map_column_type(column.type),
            ]
            if column.required:
                parts.append("NOT NULL")
            if column.default:
                parts.append(f"DEFAULT {column.default}")
            if column.check:
                parts.append(f"CHECK ({column.check})")
            script.append(" ".join(parts).strip())

    def _create_primary_key(self, script: List[str], table: Table):
        pkey = table.primary_key
        if pkey:
            script.append(f"ALTER TABLE {table.qualified_name} ADD PRIMARY KEY ({','.join(pkey.column_names)})")

    def _create_unique_constraints(self, script: List[str], table: Table):
        for unique in table.unique_constraints:
            script.append(f"ALTER TABLE {table.qualified_name} ADD UNIQUE ({','.join(unique.column_names)})")

    def _create_foreign_keys(self, script: List[str], table: Table):
        for fkey in table.foreign_keys:
            script.append(
                f"ALTER TABLE {table.qualified_name} ADD FOREIGN KEY ({','.join(fkey.column_names)}) "
                f"REFERENCES {fkey.ref_table.qualified_name} ({','.join(fkey.ref_columns)}) "
                f"ON UPDATE {map_foreign_key_action(fkey.on_update)} "
                f"ON DELETE {map_foreign_key_action(fkey.on_delete)}"
            )
