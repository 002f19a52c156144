"""
Error formatting for the console front end
Provides user-friendly error messages as rich markup
"""
import traceback
from typing import Optional

from rich.markup import escape

from .exceptions import (
    TablePickerError,
    SchemaFileError,
    UnsupportedFormatError,
    SchemaParseError,
    InvalidSchemaError,
    InvalidTableError,
    AnalysisPreconditionError,
    ConfigError,
)

# (error class, style, label); first isinstance match wins
ERROR_STYLES = [
    (SchemaFileError, "red", "FILE READ ERROR"),
    (UnsupportedFormatError, "yellow", "UNSUPPORTED FILE"),
    (SchemaParseError, "magenta", "PARSE ERROR"),
    (InvalidSchemaError, "cyan", "INVALID SCHEMA"),
    (InvalidTableError, "cyan", "INVALID TABLE"),
    (AnalysisPreconditionError, "yellow", "NOTHING TO ANALYZE"),
    (ConfigError, "magenta", "CONFIG ERROR"),
    (TablePickerError, "red", "TABLE PICKER ERROR"),
]

SUGGESTIONS = {
    SchemaFileError: [
        "Check the path is correct",
        "Check the file is readable and UTF-8 encoded",
    ],
    UnsupportedFormatError: [
        "Save the schema as .json, .yaml or .yml",
    ],
    SchemaParseError: [
        "Validate the document with a JSON/YAML linter",
        "Look for trailing commas or unquoted keys",
    ],
    InvalidSchemaError: [
        "The top level must be an array of tables",
        "Each table needs a 'name' string and a 'columns' array",
        "Each column needs 'name' and 'type' strings",
    ],
    ConfigError: [
        "confidence_mode must be 'first_scanned' or 'top_ranked'",
        "detail_key must be 'name' or 'index'",
    ],
}


def _style_for(error: Exception):
    for error_type, style, label in ERROR_STYLES:
        if isinstance(error, error_type):
            return style, label
    return "red", "UNEXPECTED ERROR"


def format_error(error: Exception, show_traceback: bool = False) -> str:
    """
    Format an error as rich markup, styled by error type

    Args:
        error: The exception to format
        show_traceback: Whether to include full traceback

    Returns:
        Markup string for rich.console.Console.print
    """
    style, label = _style_for(error)

    formatted = f"[bold {style}]\\[{label}][/bold {style}]\n"
    formatted += f"[{style}]{escape(str(error))}[/{style}]"

    path = getattr(error, 'path', None)
    if path:
        formatted += f"\n[blue]File: {escape(str(path))}[/blue]"

    if show_traceback:
        tb = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        formatted += f"\n\n[yellow]Traceback:[/yellow]\n{escape(tb)}"

    return formatted


def get_error_suggestions(error: Exception) -> Optional[str]:
    """
    Get helpful suggestions based on error type

    Returns:
        Markup string or None
    """
    for error_type, suggestions in SUGGESTIONS.items():
        if isinstance(error, error_type):
            lines = ["[green]Suggestions:[/green]"]
            lines.extend(f"  - {escape(s)}" for s in suggestions)
            return "\n".join(lines)

    return None


def format_error_with_suggestions(error: Exception, show_traceback: bool = False) -> str:
    """
    Format error with helpful suggestions appended
    """
    formatted = format_error(error, show_traceback)
    suggestions = get_error_suggestions(error)
    if suggestions:
        formatted += f"\n\n{suggestions}"
    return formatted
