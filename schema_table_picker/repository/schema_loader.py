"""
Schema Loader - Parse and validate user-supplied schema documents

Public API:
- load_schema(path) -> SchemaLoadResult
- parse_schema(data) -> SchemaLoadResult
- SchemaLoadResult: tagged success/failure with tables or error
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..exceptions import (
    SchemaError,
    SchemaFileError,
    UnsupportedFormatError,
    SchemaParseError,
    InvalidSchemaError,
)
from ..logger import get_logger
from ..models.schema import Column, Table

logger = get_logger(__name__)


@dataclass
class SchemaLoadResult:
    """
    Outcome of loading a schema

    Exactly one of ``tables`` (on success) and ``error`` (on failure) is
    meaningful; check ``ok`` first or call ``unwrap()``.
    """
    tables: List[Table] = field(default_factory=list)
    error: Optional[SchemaError] = None
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, tables: List[Table], source: Optional[str] = None) -> 'SchemaLoadResult':
        return cls(tables=tables, source=source)

    @classmethod
    def failure(cls, error: SchemaError, source: Optional[str] = None) -> 'SchemaLoadResult':
        return cls(error=error, source=source)

    def unwrap(self) -> List[Table]:
        """Return the tables, raising the stored error on failure"""
        if self.error is not None:
            raise self.error
        return self.tables


class SchemaLoader:
    """
    Loads schemas from JSON or YAML documents

    Document format (JSON shown, YAML equivalent accepted):
    [
      {"name": "users",
       "columns": [{"name": "id", "type": "uuid", "constraints": ["PRIMARY KEY"]}]}
    ]

    Never raises for bad input: every failure comes back as a
    SchemaLoadResult carrying a SchemaError.
    """

    SUPPORTED_FORMATS = {
        '.json': 'json',
        '.yaml': 'yaml',
        '.yml': 'yaml',
    }

    def load_file(self, path: str) -> SchemaLoadResult:
        """
        Load schema from a file, format chosen by extension

        Args:
            path: Path to a .json, .yaml or .yml file
        """
        schema_path = Path(path)
        source = str(schema_path)

        fmt = self.SUPPORTED_FORMATS.get(schema_path.suffix.lower())
        if fmt is None:
            return SchemaLoadResult.failure(
                UnsupportedFormatError(source, schema_path.suffix), source
            )

        try:
            # utf-8-sig drops a leading byte order mark left by some editors
            text = schema_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            return SchemaLoadResult.failure(SchemaFileError(source, str(e)), source)

        result = self.load_text(text, fmt)
        result.source = source
        if result.ok:
            logger.info("Loaded %d tables from %s", len(result.tables), source)
        return result

    def load_text(self, text: str, fmt: str = 'json') -> SchemaLoadResult:
        """
        Load schema from a JSON or YAML string

        Args:
            text: Document text
            fmt: "json" or "yaml"
        """
        try:
            if fmt == 'yaml':
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            return SchemaLoadResult.failure(SchemaParseError(fmt, str(e)))

        return self.parse(data)

    def parse(self, data: Any) -> SchemaLoadResult:
        """
        Validate already-decoded data and build Table objects

        Args:
            data: Decoded document (expected: list of table mappings)
        """
        if not isinstance(data, list):
            return SchemaLoadResult.failure(
                InvalidSchemaError("Schema must be an array of tables")
            )

        try:
            tables = [self._parse_table(raw, index) for index, raw in enumerate(data)]
        except InvalidSchemaError as e:
            return SchemaLoadResult.failure(e)

        return SchemaLoadResult.success(tables)

    def _parse_table(self, raw: Any, index: int) -> Table:
        if not isinstance(raw, dict):
            raise InvalidSchemaError("must be an object with 'name' and 'columns'", index)

        name = raw.get('name')
        if not isinstance(name, str):
            raise InvalidSchemaError("'name' must be a string", index)

        raw_columns = raw.get('columns')
        if not isinstance(raw_columns, list):
            raise InvalidSchemaError(f"table '{name}' must have a 'columns' array", index)

        columns = tuple(
            self._parse_column(raw_column, name, index)
            for raw_column in raw_columns
        )
        return Table(name=name, columns=columns)

    def _parse_column(self, raw: Any, table_name: str, index: int) -> Column:
        if not isinstance(raw, dict):
            raise InvalidSchemaError(f"table '{table_name}' has a column that is not an object", index)

        name = raw.get('name')
        col_type = raw.get('type')
        if not isinstance(name, str) or not isinstance(col_type, str):
            raise InvalidSchemaError(
                f"table '{table_name}' columns need string 'name' and 'type' (got {raw!r})", index
            )

        constraints = raw.get('constraints')
        if constraints is None:
            constraints = []
        if not isinstance(constraints, list) or not all(isinstance(c, str) for c in constraints):
            raise InvalidSchemaError(
                f"column '{table_name}.{name}' constraints must be an array of strings", index
            )

        return Column(name=name, type=col_type, constraints=tuple(constraints))


def load_schema(path: str) -> SchemaLoadResult:
    """
    Convenience function to load a schema file

    Args:
        path: Path to a .json, .yaml or .yml schema

    Returns:
        SchemaLoadResult
    """
    return SchemaLoader().load_file(path)


def parse_schema(data: Any) -> SchemaLoadResult:
    """Convenience function to validate already-decoded schema data"""
    return SchemaLoader().parse(data)
