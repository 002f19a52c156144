"""
Custom exceptions for schema_table_picker
"""


class TablePickerError(Exception):
    """Base exception for all table picker errors"""
    pass


class SchemaError(TablePickerError):
    """Schema could not be ingested"""
    pass


class SchemaFileError(SchemaError):
    """Schema file could not be read"""
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Error reading file {path}: {message}")


class UnsupportedFormatError(SchemaError):
    """Schema file is not a JSON or YAML document"""
    def __init__(self, path: str, suffix: str):
        self.path = path
        self.suffix = suffix
        super().__init__(
            f"Please upload a JSON file (got '{suffix or 'no extension'}' for {path})"
        )


class SchemaParseError(SchemaError):
    """Schema document is not valid JSON/YAML"""
    def __init__(self, fmt: str, message: str):
        self.fmt = fmt
        super().__init__(
            f"Invalid {fmt.upper()} format. Please check your file structure ({message})"
        )


class InvalidSchemaError(SchemaError):
    """Schema document parsed but has the wrong shape"""
    def __init__(self, message: str, table_index: int = None):
        self.table_index = table_index
        prefix = f"Table #{table_index}: " if table_index is not None else ""
        super().__init__(prefix + message)


class InvalidTableError(TablePickerError):
    """A schema element handed to the scorer is not a well-formed table"""
    def __init__(self, message: str, table_index: int = None):
        self.table_index = table_index
        prefix = f"[table {table_index}] " if table_index is not None else ""
        super().__init__(prefix + message)


class AnalysisPreconditionError(TablePickerError):
    """Analysis invoked with a blank query or an empty schema"""
    pass


class ConfigError(TablePickerError):
    """Configuration file is unreadable or invalid"""
    pass
