"""
DDL Generator.

Describe tables, columns and constraints in Python and generate the SQL that
rebuilds them, plus TypeScript interfaces for the same tables::

    from ddl_generator import new_database

    db = new_database()
    users = db.add_table("users", "auth")
    users.primary_key_column().string_column("email", unique=True)
    posts = db.add_table("posts")
    posts.primary_key_column().reference_column("user_id", users, "id")
    statements = db.create()
"""

from .dialects import PostgreSQLDatabase, new_database
from .domain import (
    Column,
    ColumnOptions,
    ColumnType,
    Constraint,
    ConstraintType,
    Database,
    ForeignKeyAction,
    ForeignKeyActions,
    ForeignKeyConstraint,
    Table,
)
from .exceptions import (
    ConfigurationError,
    DDLGeneratorError,
    ExecutionError,
    ModelValidationError,
    UnmappedEnumerationError,
)
from .typegen import create_types, generate_interface

__version__ = "0.1.0"

__all__ = [
    'Column',
    'ColumnOptions',
    'ColumnType',
    'ConfigurationError',
    'Constraint',
    'ConstraintType',
    'DDLGeneratorError',
    'Database',
    'ExecutionError',
    'ForeignKeyAction',
    'ForeignKeyActions',
    'ForeignKeyConstraint',
    'ModelValidationError',
    'PostgreSQLDatabase',
    'Table',
    'UnmappedEnumerationError',
    'create_types',
    'generate_interface',
    'new_database',
]
