# File: tests/conftest.py
# Shared fixtures for configuration and command line tests.

import copy
import logging
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml


SAMPLE_CONFIG: Dict[str, Any] = {
    "dialect": "postgresql",
    "tables": [
        {
            "name": "table2",
            "columns": [
                {"name": "id", "type": "primary_key"},
                {
                    "name": "table1_id",
                    "type": "reference",
                    "references": {"table": "yours.table1", "column": "id"},
                },
            ],
        },
        {
            "name": "table1",
            "schema": "yours",
            "columns": [
                {"name": "id", "type": "primary_key"},
                {"name": "email", "type": "string", "unique": True},
                {"name": "first_name", "type": "string", "required": False},
                {"name": "last_name", "type": "string", "required": False},
                {"name": "active", "type": "boolean", "default": True},
            ],
            "unique": [["first_name", "last_name"]],
        },
    ],
}


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """A fresh copy of the sample configuration dictionary."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Any], Path]:
    """Returns a function that dumps a configuration to a YAML file in tmp_path."""

    def _write(content: Any, name: str = "schema.yaml") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            if isinstance(content, str):
                f.write(content)
            else:
                yaml.safe_dump(content, f, sort_keys=False)
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_root_logger():
    """The CLI installs its own handler on the root logger; drop it after each test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
