import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    select_autoescape,
)


logger = logging.getLogger(__name__)

# Define the path to the templates directory relative to this file
TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def setup_jinja_env() -> Environment:
    """Sets up and returns the Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml"]),  # Generated code is never HTML
        trim_blocks=True,  # Remove first newline after a block tag
        lstrip_blocks=True,  # Strip leading whitespace from lines with block tags
        keep_trailing_newline=True,
        undefined=StrictUndefined,  # Fail on missing template data
    )
    return env


def render(template_name: str, data: Dict[str, Any]) -> str:
    """Render a template from the package templates directory."""
    template = setup_jinja_env().get_template(template_name)
    logger.debug(f"Rendering template {template_name}")
    return template.render(data)
