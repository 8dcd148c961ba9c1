import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ddl_generator.config import load_config
from ddl_generator.domain.database import join_statements
from ddl_generator.exceptions import DDLGeneratorError
from ddl_generator.executor import PostgreSQLExecutor, deploy
from ddl_generator.schema_loader import build_database
from ddl_generator.typegen import create_types

from ddl_generator.colored_logging import (
    setup_colored_logging,
    log_success,
    log_progress,
    log_section
)


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ddl-generator",
        description="Generate a PostgreSQL schema build script and TypeScript interfaces from a YAML table definition.",
    )
    parser.add_argument(
        "-c",
        "--config",
        required=True,
        help="Path to the YAML configuration file declaring the tables.",
    )
    parser.add_argument(
        "-o",
        "--sql-output",
        dest="sql_output",
        help="File to write the SQL script to. Overrides config file setting.",
    )
    parser.add_argument(
        "-t",
        "--types-output",
        dest="types_output",
        help="File to write TypeScript interfaces to. Overrides config file setting.",
    )
    parser.add_argument(
        "--print",
        dest="print_sql",
        action="store_true",
        help="Print the SQL script to stdout.",
    )
    parser.add_argument(
        "--execute",
        action="store_true",
        help="Run the script against the database configured under 'database'.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)
    logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)

        # 2. Build the schema model
        log_section(logger, "Schema Model")
        database = build_database(config)
        logger.info(f"Declared {len(database.tables)} tables in {len(database.schemas)} non-public schemas.")

        # 3. Generate SQL
        log_section(logger, "SQL Generation")
        log_progress(logger, "Generating statements...")
        statements = database.create()
        script = join_statements(statements)
        if config.sql_output:
            output_path = Path(config.sql_output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(script)
            log_success(logger, f"Wrote {len(statements)} statements to {output_path}")
        # With nowhere else to go, the script goes to stdout
        if args.print_sql or not (config.sql_output or config.types_output or args.execute):
            sys.stdout.write(script)

        # 4. Generate TypeScript interfaces
        if config.types_output:
            log_section(logger, "TypeScript Generation")
            create_types(config.types_output, database.tables)
            log_success(logger, f"Wrote interfaces to {config.types_output}")

        # 5. Execute
        if args.execute:
            log_section(logger, "Execution")
            if config.database is None:
                logger.error("--execute needs a 'database' section in the configuration.")
                return 1
            deploy(database, PostgreSQLExecutor(config.database))
            log_success(logger, "Schema created successfully.")

    except DDLGeneratorError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.verbose)
        return 1
    except Exception as e:
        logger.error(f"An unexpected error occurred during generation: {e}", exc_info=True)
        return 1

    return 0


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
