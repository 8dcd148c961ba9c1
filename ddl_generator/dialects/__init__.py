"""
SQL dialects. Each dialect is a ``Database`` subclass implementing ``create()``.
"""

from typing import Dict, Type

from ..constants import DefaultConfig
from ..domain.database import Database
from ..exceptions import ConfigurationError
from .postgresql import PostgreSQLDatabase, map_column_type, map_foreign_key_action


DIALECTS: Dict[str, Type[Database]] = {
    PostgreSQLDatabase.dialect: PostgreSQLDatabase,
}


def new_database(dialect: str = DefaultConfig.DIALECT) -> Database:
    """Create an empty database for the given dialect."""
    try:
        return DIALECTS[dialect]()
    except KeyError:
        raise ConfigurationError(
            f"Unsupported dialect: {dialect}",
            context={"supported_dialects": sorted(DIALECTS)},
        ) from None


__all__ = [
    'DIALECTS',
    'PostgreSQLDatabase',
    'map_column_type',
    'map_foreign_key_action',
    'new_database',
]
