"""
Domain module for the DDL generator.

The schema model and the dialect independent parts of generation. Nothing
here knows about SQL dialects, templates or database connections.
"""

from .models import (
    Column,
    ColumnOptions,
    ColumnType,
    Constraint,
    ConstraintType,
    ForeignKeyAction,
    ForeignKeyActions,
    ForeignKeyConstraint,
    Table,
)

from .database import (
    Database,
    collect_schemas,
    join_statements,
)

from .naming import (
    interface_name,
    to_pascal_case,
)

__all__ = [
    # Schema model
    'Column',
    'ColumnOptions',
    'ColumnType',
    'Constraint',
    'ConstraintType',
    'ForeignKeyAction',
    'ForeignKeyActions',
    'ForeignKeyConstraint',
    'Table',

    # Database
    'Database',
    'collect_schemas',
    'join_statements',

    # Naming
    'interface_name',
    'to_pascal_case',
]
