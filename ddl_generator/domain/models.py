"""
Core schema model for the DDL generator.

Tables, columns and constraints are plain in-memory objects built through the
fluent ``Table`` API. Every builder call validates its input before touching
the table, so an invalid model is rejected at the call site rather than at
generation time.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from ..constants import ConstraintNames, DefaultConfig
from ..exceptions import ModelValidationError


logger = logging.getLogger(__name__)


class ColumnType(Enum):
    """Generic, dialect independent column types."""

    AUTO_INCREMENT = "auto_increment"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    DATE_TIME = "date_time"
    GUID = "guid"
    DECIMAL = "decimal"


class ConstraintType(Enum):
    """Types of table constraints."""

    PRIMARY_KEY = "primary_key"
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"


class ForeignKeyAction(Enum):
    """Referential actions for ON UPDATE / ON DELETE."""

    CASCADE = "cascade"
    SET_NULL = "set_null"


@dataclass(frozen=True)
class ColumnOptions:
    """
    Column metadata.

    ``default`` and ``check`` are raw SQL expressions. Empty strings are
    treated as unset. ``None`` for ``required`` or ``unique`` means the
    default value.
    """

    required: bool = True
    unique: bool = False
    default: Optional[str] = None
    check: Optional[str] = None

    def __post_init__(self):
        if self.required is None:
            object.__setattr__(self, "required", True)
        if self.unique is None:
            object.__setattr__(self, "unique", False)
        # Normalize falsy expressions so generation never sees an empty clause
        if not self.default:
            object.__setattr__(self, "default", None)
        if not self.check:
            object.__setattr__(self, "check", None)


@dataclass(frozen=True)
class ForeignKeyActions:
    """Actions applied when a referenced row is updated or deleted."""

    on_update: ForeignKeyAction = ForeignKeyAction.CASCADE
    on_delete: ForeignKeyAction = ForeignKeyAction.CASCADE

    def __post_init__(self):
        # An unspecified action cascades
        if self.on_update is None:
            object.__setattr__(self, "on_update", ForeignKeyAction.CASCADE)
        if self.on_delete is None:
            object.__setattr__(self, "on_delete", ForeignKeyAction.CASCADE)


class Column:
    """A table column. Its type cannot change after construction."""

    def __init__(self, name: str, column_type: ColumnType, options: Optional[ColumnOptions] = None):
        self.name = name
        self._type = column_type
        self._options = options or ColumnOptions()

    @property
    def type(self) -> ColumnType:
        return self._type

    @property
    def options(self) -> ColumnOptions:
        return self._options

    @property
    def required(self) -> bool:
        return self._options.required

    @property
    def unique(self) -> bool:
        return self._options.unique

    @property
    def default(self) -> Optional[str]:
        return self._options.default

    @property
    def check(self) -> Optional[str]:
        return self._options.check

    def __repr__(self) -> str:
        return f"Column({self.name!r}, {self._type.value})"


class Constraint:
    """
    A named constraint over an ordered list of columns.

    Columns are referenced, not owned: they belong to the table.
    """

    def __init__(self, name: str, constraint_type: ConstraintType):
        self.name = name
        self._type = constraint_type
        self._columns: List[Column] = []

    @property
    def type(self) -> ConstraintType:
        return self._type

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self._columns]

    def add_column(self, column: Column) -> "Constraint":
        self._columns.append(column)
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.column_names})"


class ForeignKeyConstraint(Constraint):
    """A foreign key pointing at columns of another table."""

    def __init__(
        self,
        name: str,
        ref_table: "Table",
        ref_columns: Union[str, Sequence[str]],
        actions: Optional[ForeignKeyActions] = None,
    ):
        super().__init__(name, ConstraintType.FOREIGN_KEY)
        self.ref_table = ref_table
        if isinstance(ref_columns, str):
            ref_columns = [ref_columns]
        self._ref_columns = tuple(ref_columns)
        self._actions = actions or ForeignKeyActions()

    @property
    def ref_columns(self) -> Tuple[str, ...]:
        return self._ref_columns

    @property
    def on_update(self) -> ForeignKeyAction:
        return self._actions.on_update

    @property
    def on_delete(self) -> ForeignKeyAction:
        return self._actions.on_delete


class Table:
    """
    A database table and the builder API used to describe it.

    Columns and constraints keep insertion order; generation relies on it.
    All builder methods return the table so calls can be chained::

        users = db.add_table("users", "auth")
        users.primary_key_column().string_column("email", unique=True)
    """

    def __init__(self, name: str, schema: Optional[str] = None):
        self._name = name
        self._schema = schema or DefaultConfig.SCHEMA
        self._columns: List[Column] = []
        self._constraints: List[Constraint] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> str:
        return self._schema

    @property
    def qualified_name(self) -> str:
        """Name used in every generated statement, ``schema.name`` outside public."""
        if self._schema == DefaultConfig.SCHEMA:
            return self._name
        return f"{self._schema}.{self._name}"

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    def get_column(self, name: str) -> Optional[Column]:
        for column in self._columns:
            if column.name == name:
                return column
        return None

    def get_constraints(self, constraint_type: Optional[ConstraintType] = None) -> List[Constraint]:
        if constraint_type is None:
            return list(self._constraints)
        return [item for item in self._constraints if item.type == constraint_type]

    @property
    def primary_key(self) -> Optional[Constraint]:
        keys = self.get_constraints(ConstraintType.PRIMARY_KEY)
        return keys[0] if keys else None

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key is not None

    @property
    def foreign_keys(self) -> List[ForeignKeyConstraint]:
        return self.get_constraints(ConstraintType.FOREIGN_KEY)

    @property
    def has_foreign_keys(self) -> bool:
        return bool(self.foreign_keys)

    @property
    def unique_constraints(self) -> List[Constraint]:
        return self.get_constraints(ConstraintType.UNIQUE)

    # --- Builder API ---

    def _add_column(self, column: Column) -> Column:
        if self.get_column(column.name) is not None:
            raise ModelValidationError(
                f"Column '{column.name}' already exists on table '{self.qualified_name}'",
                table=self.qualified_name,
                columns=[column.name],
                suggestions=["Column names must be unique within a table"],
            )
        if column.unique:
            unique = Constraint(f"{ConstraintNames.UNIQUE_PREFIX}{column.name}", ConstraintType.UNIQUE)
            unique.add_column(column)
            self._constraints.append(unique)
        self._columns.append(column)
        logger.debug(f"Added column {column!r} to {self.qualified_name}")
        return column

    def primary_key_column(self, name: Optional[str] = None) -> "Table":
        """Add an auto increment column to the table's single primary key."""
        column = self._add_column(Column(name or DefaultConfig.PRIMARY_KEY_COLUMN, ColumnType.AUTO_INCREMENT))
        pkey = self.primary_key
        if pkey is None:
            pkey = Constraint(ConstraintNames.PRIMARY_KEY, ConstraintType.PRIMARY_KEY)
            self._constraints.append(pkey)
        pkey.add_column(column)
        return self

    def string_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.STRING, ColumnOptions(**options)))
        return self

    def number_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.NUMBER, ColumnOptions(**options)))
        return self

    def decimal_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.DECIMAL, ColumnOptions(**options)))
        return self

    def guid_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.GUID, ColumnOptions(**options)))
        return self

    def date_time_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.DATE_TIME, ColumnOptions(**options)))
        return self

    def boolean_column(self, name: str, **options) -> "Table":
        self._add_column(Column(name, ColumnType.BOOLEAN, ColumnOptions(**options)))
        return self

    def reference_column(
        self,
        name: str,
        ref_table: "Table",
        ref_column: Optional[str] = None,
        actions: Optional[ForeignKeyActions] = None,
        **options,
    ) -> "Table":
        """
        Add a numeric column and a foreign key from it to ``ref_table``.

        Args:
            name: Local column name
            ref_table: Referenced table, which may be declared later in the database
            ref_column: Referenced column name, defaults to ``name``
            actions: ON UPDATE / ON DELETE actions, both CASCADE by default
            **options: Column options for the local column
        """
        column = self._add_column(Column(name, ColumnType.NUMBER, ColumnOptions(**options)))
        fkey = ForeignKeyConstraint(
            f"{ConstraintNames.FOREIGN_KEY_PREFIX}{column.name}",
            ref_table,
            ref_column or name,
            actions,
        )
        fkey.add_column(column)
        self._constraints.append(fkey)
        return self

    def unique_constraint(self, column_names: Sequence[str]) -> "Table":
        """Add a unique constraint spanning two or more existing columns."""
        if isinstance(column_names, str):
            raise ModelValidationError(
                "Unique constraint columns must be a list of names, not a string",
                table=self.qualified_name,
                columns=[column_names],
            )
        column_names = list(column_names)
        if len(column_names) < 2:
            raise ModelValidationError(
                "Unique constraint needs at least two columns",
                table=self.qualified_name,
                columns=column_names,
                suggestions=["Pass unique=True when adding a column for a single column constraint"],
            )
        known = {column.name for column in self._columns}
        missing = [name for name in column_names if name not in known]
        if missing or len(set(column_names)) != len(column_names):
            raise ModelValidationError(
                "Column names do not match existing columns",
                table=self.qualified_name,
                columns=missing or column_names,
            )
        columns = [column for column in self._columns if column.name in column_names]
        unique = Constraint(
            ConstraintNames.UNIQUE_PREFIX + "_".join(column.name for column in columns),
            ConstraintType.UNIQUE,
        )
        for column in columns:
            unique.add_column(column)
        self._constraints.append(unique)
        return self

    def __repr__(self) -> str:
        return f"Table({self.qualified_name!r})"
