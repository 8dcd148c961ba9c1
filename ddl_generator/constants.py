"""
Centralized constants for the DDL generator.

Default values and naming rules shared by the schema model, the dialects
and the generators live here so they are changed in one place.
"""


class DefaultConfig:
    """Default configuration values."""

    SCHEMA = "public"
    PRIMARY_KEY_COLUMN = "id"
    DIALECT = "postgresql"

    # Generated SQL script
    STATEMENT_SEPARATOR = ";\n"

    # Generated TypeScript
    TAB_WIDTH = 4

    # Execution
    DATABASE_HOST = "localhost"
    DATABASE_PORT = 5432


class ConstraintNames:
    """Deterministic names given to constraints created by the table builder."""

    PRIMARY_KEY = "pkey"
    UNIQUE_PREFIX = "unique_"
    FOREIGN_KEY_PREFIX = "fkey_"


class InterfaceNames:
    """Naming rules for generated interface declarations."""

    PREFIX = "I"
    TEMPLATE = "typescript/interface.ts.j2"
