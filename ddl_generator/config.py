import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DefaultConfig
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


# --- Pydantic Models for Configuration Schema ---


class DatabaseSettings(BaseModel):
    """Connection settings for executing the generated script."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, description="Database name.")
    user: Optional[str] = Field(None, description="Database user.")
    password: Optional[str] = Field(None, description="Database password.")
    host: str = Field(DefaultConfig.DATABASE_HOST, description="Database host address.")
    port: Optional[Union[str, int]] = Field(DefaultConfig.DATABASE_PORT, description="Database port number.")
    connect_timeout: int = Field(10, gt=0, description="Connection timeout in seconds.")

    @field_validator("port", mode="before")
    def validate_port(cls, v):
        """Ensure port is a number or string representation of one, and within range."""
        if v is None or v == "":
            return None
        if isinstance(v, int):
            port_num = v
        elif isinstance(v, str) and v.isdigit():
            port_num = int(v)
        else:
            raise ValueError(
                f"Port must be an integer or string containing only digits, got {type(v).__name__}"
            )
        if not 0 <= port_num <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {port_num}")
        return port_num

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for ``psycopg2.connect`` and its pools."""
        kwargs = {
            "dbname": self.name,
            "user": self.user,
            "password": self.password,
            "host": self.host,
            "port": self.port,
            "connect_timeout": self.connect_timeout,
        }
        return {key: value for key, value in kwargs.items() if value is not None}

    @property
    def url(self) -> str:
        credentials = ""
        if self.user:
            credentials = self.user
            if self.password:
                credentials += f":{self.password}"
            credentials += "@"
        port = f":{self.port}" if self.port else ""
        return f"postgresql://{credentials}{self.host}{port}/{self.name}"


class ReferenceDefinition(BaseModel):
    """Target of a ``reference`` column."""

    model_config = ConfigDict(extra="forbid")

    table: str = Field(..., min_length=1, description="Qualified name of the referenced table.")
    column: Optional[str] = Field(None, description="Referenced column, defaults to the column name.")
    on_update: Literal["cascade", "set_null"] = "cascade"
    on_delete: Literal["cascade", "set_null"] = "cascade"


class ColumnDefinition(BaseModel):
    """One column of a declared table."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: Literal[
        "primary_key", "string", "number", "decimal", "guid", "date_time", "boolean", "reference"
    ]
    required: bool = True
    unique: bool = False
    default: Optional[str] = Field(None, description="Raw SQL default expression.")
    check: Optional[str] = Field(None, description="Raw SQL boolean expression.")
    references: Optional[ReferenceDefinition] = None

    @field_validator("default", mode="before")
    def stringify_default(cls, v):
        """YAML turns ``default: 0`` into an int; keep the SQL literal."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)

    @model_validator(mode="after")
    def check_references(self):
        if self.type == "reference" and self.references is None:
            raise ValueError(f"Column '{self.name}' of type 'reference' needs a 'references' entry")
        if self.type != "reference" and self.references is not None:
            raise ValueError(f"Column '{self.name}' has 'references' but is of type '{self.type}'")
        if self.type == "primary_key":
            ignored = sorted(self.model_fields_set & {"required", "unique", "default", "check"})
            if ignored:
                raise ValueError(
                    f"Primary key column '{self.name}' does not accept {', '.join(ignored)}"
                )
        return self


class TableDefinition(BaseModel):
    """A declared table."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1)
    schema_name: Optional[str] = Field(None, alias="schema")
    columns: List[ColumnDefinition] = Field(default_factory=list)
    unique: List[List[str]] = Field(
        default_factory=list, description="Multi-column unique constraints."
    )


class ToolConfigSchema(BaseModel):
    """Pydantic schema defining the expected structure and types for the configuration."""

    model_config = ConfigDict(extra="ignore")

    dialect: Literal["postgresql"] = Field(DefaultConfig.DIALECT, description="Target SQL dialect.")
    sql_output: Optional[str] = Field(None, description="File to write the SQL script to.")
    types_output: Optional[str] = Field(None, description="File to write TypeScript interfaces to.")
    database: Optional[DatabaseSettings] = Field(None, description="Connection used by --execute.")
    tables: List[TableDefinition] = Field(..., min_length=1, description="Declared tables, in order.")


# --- Validation Function (Internal) ---
def _validate_and_parse_config(config_dict: Dict[str, Any], config_file: Optional[str] = None) -> ToolConfigSchema:
    """Validates a raw configuration dictionary against the Pydantic schema."""
    try:
        validated_config = ToolConfigSchema.model_validate(config_dict)
        logger.debug("Configuration dictionary parsed and validated successfully.")
        return validated_config
    except ValidationError as e:
        logger.error("Configuration validation failed. Please check your config file or arguments.")
        errors = {}
        for error in e.errors():
            # Format location path (e.g., tables -> 0 -> columns -> 1 -> type)
            loc_parts = [str(loc_item) for loc_item in error.get("loc", ())]
            loc_str = " -> ".join(loc_parts) if loc_parts else "Top Level"
            errors[loc_str] = error.get("msg", "Unknown error")
        raise ConfigurationError(
            f"Invalid configuration ({len(errors)} error(s))",
            config_file=config_file,
            context={"errors": errors},
        ) from e


# --- Main Configuration Loading Function ---


def load_config(config_path: str, cli_args: Optional[argparse.Namespace] = None) -> ToolConfigSchema:
    """
    Loads configuration from YAML file, merges with CLI arguments,
    validates the result, and returns a validated Pydantic model instance.
    """
    config_file = Path(config_path)
    if not config_file.is_file():
        raise ConfigurationError(f"Config file not found at {config_path}", config_file=config_path)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML file {config_path}: {e}", config_file=config_path) from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Content in config file {config_path} is not a dictionary",
            config_file=config_path,
        )
    logger.debug(f"Loaded configuration from {config_path}")

    # Override with CLI arguments (only those explicitly provided)
    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in ("sql_output", "types_output"):
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    validated_config = _validate_and_parse_config(raw_config, config_file=config_path)

    # Resolve output paths
    if validated_config.sql_output:
        validated_config.sql_output = str(Path(validated_config.sql_output).resolve())
    if validated_config.types_output:
        validated_config.types_output = str(Path(validated_config.types_output).resolve())

    logger.info("Configuration loaded and validated successfully.")
    return validated_config
