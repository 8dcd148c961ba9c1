"""
TypeScript interface generation.

Each table becomes one ``export interface`` whose fields mirror the table's
columns in declaration order. Rendering goes through the Jinja2 templates in
``ddl_generator/templates``.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

from .constants import DefaultConfig, InterfaceNames
from .domain.models import Column, ColumnType, Table
from .domain.naming import interface_name
from .exceptions import UnmappedEnumerationError
from .templating import render


logger = logging.getLogger(__name__)


TYPESCRIPT_TYPE_MAP: Dict[ColumnType, str] = {
    ColumnType.STRING: "string",
    ColumnType.NUMBER: "number",
    ColumnType.GUID: "string",
    ColumnType.DECIMAL: "number",
    ColumnType.DATE_TIME: "Date",
    ColumnType.BOOLEAN: "boolean",
    ColumnType.AUTO_INCREMENT: "number",
}


def map_typescript_type(column_type: ColumnType) -> str:
    """Map a generic column type to a TypeScript type."""
    try:
        return TYPESCRIPT_TYPE_MAP[column_type]
    except KeyError:
        raise UnmappedEnumerationError(
            f"Undefined column type {column_type}", value=column_type, target="typescript"
        ) from None


def generate_interface(table_name: str, columns: Sequence[Column]) -> str:
    """Render the interface declaration for one table."""
    return render(
        InterfaceNames.TEMPLATE,
        {
            "name": interface_name(table_name),
            "table_name": table_name,
            "columns": list(columns),
            "map_type": map_typescript_type,
        },
    )


def tabs_to_spaces(text: str, width: int = DefaultConfig.TAB_WIDTH) -> str:
    """Replace tabs with spaces and strip trailing whitespace from every line."""
    lines = [line.replace("\t", " " * width).rstrip() for line in text.split("\n")]
    return "\n".join(lines)


def create_types(out_file: Union[str, Path], tables: Iterable[Table]) -> str:
    """
    Write interfaces for ``tables`` to ``out_file`` and return the written text.

    Interfaces are separated by a blank line and written as UTF-8.
    """
    result: List[str] = []
    for table in tables:
        result.append(generate_interface(table.qualified_name, table.columns).strip())
    content = tabs_to_spaces("\n\n".join(result))

    output_path = Path(out_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.debug(f"Generated file: {output_path}")
    return content
