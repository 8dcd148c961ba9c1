"""
Naming convention utilities for the DDL generator.
"""

import re

from ..constants import InterfaceNames


def to_pascal_case(name: str) -> str:
    """
    Convert a separated name to PascalCase.

    Any run of non-alphanumeric characters is a word boundary, so schema
    separators and underscores both split words.

    Example:
        >>> to_pascal_case("yours.table1")
        'YoursTable1'
        >>> to_pascal_case("user_accounts")
        'UserAccounts'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    words = [word for word in re.split(r"[^a-zA-Z0-9]+", name) if word]
    return "".join(word[0].upper() + word[1:] for word in words)


def interface_name(qualified_name: str) -> str:
    """Identifier of the interface generated for a table."""
    return f"{InterfaceNames.PREFIX}{to_pascal_case(qualified_name)}"
