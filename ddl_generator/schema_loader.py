"""
Builds a ``Database`` from declarative table definitions.

Tables are created before any column is added, so a ``reference`` column
may point at a table declared further down the file.
"""

import logging
from typing import Dict, List

from .config import ColumnDefinition, TableDefinition, ToolConfigSchema
from .constants import DefaultConfig
from .dialects import new_database
from .domain.database import Database
from .domain.models import ForeignKeyAction, ForeignKeyActions, Table
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def _qualify(name: str, schema: str = None) -> str:
    if not schema or schema == DefaultConfig.SCHEMA:
        return name
    return f"{schema}.{name}"


def _resolve_table(tables: Dict[str, Table], name: str, source: str) -> Table:
    # "public.users" and "users" name the same table
    if name.startswith(f"{DefaultConfig.SCHEMA}."):
        name = name[len(DefaultConfig.SCHEMA) + 1:]
    table = tables.get(name)
    if table is None:
        raise ConfigurationError(
            f"Table '{source}' references unknown table '{name}'",
            context={"known_tables": sorted(tables)},
        )
    return table


def _add_column(table: Table, column: ColumnDefinition, tables: Dict[str, Table]):
    options = {
        "required": column.required,
        "unique": column.unique,
        "default": column.default,
        "check": column.check,
    }
    if column.type == "primary_key":
        table.primary_key_column(column.name)
    elif column.type == "reference":
        ref = column.references
        ref_table = _resolve_table(tables, ref.table, table.qualified_name)
        actions = ForeignKeyActions(
            on_update=ForeignKeyAction(ref.on_update),
            on_delete=ForeignKeyAction(ref.on_delete),
        )
        table.reference_column(column.name, ref_table, ref.column, actions, **options)
    else:
        add = getattr(table, f"{column.type}_column")
        add(column.name, **options)


def populate_database(database: Database, definitions: List[TableDefinition]) -> Database:
    """Add the declared tables to ``database``, keeping their order."""
    tables: Dict[str, Table] = {}
    for definition in definitions:
        table = database.add_table(definition.name, definition.schema_name)
        tables[_qualify(definition.name, definition.schema_name)] = table

    for definition in definitions:
        table = tables[_qualify(definition.name, definition.schema_name)]
        for column in definition.columns:
            _add_column(table, column, tables)
        for column_names in definition.unique:
            table.unique_constraint(column_names)
        logger.debug(
            f"Declared {table.qualified_name} with {len(table.columns)} columns "
            f"and {len(table.constraints)} constraints"
        )
    return database


def build_database(config: ToolConfigSchema) -> Database:
    """Create a database for the configured dialect and declare its tables."""
    database = new_database(config.dialect)
    return populate_database(database, config.tables)
