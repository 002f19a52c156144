"""
Services for Schema Table Picker
"""

from .query_processor import QueryProcessor
from .scoring_service import ScoringService
from .table_picker import TablePicker

__all__ = [
    'QueryProcessor',
    'ScoringService',
    'TablePicker'
]
