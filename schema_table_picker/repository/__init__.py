"""
Repository layer for Schema Table Picker
"""

from .schema_loader import SchemaLoader, SchemaLoadResult, load_schema, parse_schema
from .synonym_loader import SynonymLoader, load_semantic_mappings_from_csv, merge_semantic_mappings

__all__ = [
    'SchemaLoader',
    'SchemaLoadResult',
    'load_schema',
    'parse_schema',
    'SynonymLoader',
    'load_semantic_mappings_from_csv',
    'merge_semantic_mappings'
]
