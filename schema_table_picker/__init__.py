"""
Schema Table Picker - Which tables does my question need?

Scores every table of a user-supplied schema against a natural language
query using name/column substring matching and a small synonym table.

Example:
    >>> from schema_table_picker import TablePicker, load_schema
    >>>
    >>> tables = load_schema("shop_schema.json").unwrap()
    >>> result = TablePicker().pick(tables, "find all orders with user information")
    >>> print(result.relevant_table_names, result.confidence)
"""

__version__ = "1.0.0"

# Models
from .models import (
    Column,
    Table,
    TableScore,
    SignalType,
    AnalysisResult,
    MatchDetails,
    ConfidenceLevel,
)

# Services
from .services import QueryProcessor, ScoringService, TablePicker

# Schema ingestion
from .repository import SchemaLoader, SchemaLoadResult, load_schema, parse_schema

# Config
from .config import PickerConfig, ConfidenceMode, DetailKey

# Exceptions
from .exceptions import (
    TablePickerError,
    SchemaError,
    SchemaFileError,
    UnsupportedFormatError,
    SchemaParseError,
    InvalidSchemaError,
    InvalidTableError,
    AnalysisPreconditionError,
    ConfigError,
)

__all__ = [
    # Models
    "Column",
    "Table",
    "TableScore",
    "SignalType",
    "AnalysisResult",
    "MatchDetails",
    "ConfidenceLevel",

    # Services
    "QueryProcessor",
    "ScoringService",
    "TablePicker",

    # Schema ingestion
    "SchemaLoader",
    "SchemaLoadResult",
    "load_schema",
    "parse_schema",

    # Config
    "PickerConfig",
    "ConfidenceMode",
    "DetailKey",

    # Exceptions
    "TablePickerError",
    "SchemaError",
    "SchemaFileError",
    "UnsupportedFormatError",
    "SchemaParseError",
    "InvalidSchemaError",
    "InvalidTableError",
    "AnalysisPreconditionError",
    "ConfigError",
]
