"""
Custom exception hierarchy for the DDL generator.

Every error carries optional context and recovery suggestions so that the
command line can print something actionable.
"""

import re
from typing import Dict, Any, Optional, List


class DDLGeneratorError(Exception):
    """
    Base exception for all DDL generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ModelValidationError(DDLGeneratorError):
    """Raised when a builder call would leave the schema model invalid."""

    def __init__(self, message: str, table: str = None, columns: List[str] = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table
        if columns is not None:
            context['columns'] = columns

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Add the columns to the table before referencing them in a constraint",
                "Check column names for typos",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="MODEL_VALIDATION_ERROR"
        )


class UnmappedEnumerationError(DDLGeneratorError):
    """Raised when a column type or foreign key action has no mapping for a target."""

    def __init__(self, message: str, value: Any = None, target: str = None, **kwargs):
        context = kwargs.get('context', {})
        if value is not None:
            context['value'] = value
        if target:
            context['target'] = target  # e.g. 'postgresql', 'typescript'

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Extend the type mapping tables of every dialect and generator",
                "Report this as a missing mapping",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="UNMAPPED_ENUMERATION_ERROR"
        )


class ConfigurationError(DDLGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify all required fields are present",
                "Make sure referenced tables are declared in 'tables'",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class ExecutionError(DDLGeneratorError):
    """Raised when the generated script fails to run against the database server."""

    def __init__(self, message: str, database_url: str = None, **kwargs):
        context = kwargs.get('context', {})
        if database_url:
            context['database_url'] = self._mask_credentials(database_url)

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check database server is running",
                "Verify connection credentials",
                "Inspect the generated script with --print",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="EXECUTION_ERROR"
        )

    @staticmethod
    def _mask_credentials(url: str) -> str:
        """Mask sensitive credentials in database URL."""
        return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)
