"""
Models for Schema Table Picker
"""

from .schema import Column, Table
from .table_score import TableScore, SignalType
from .analysis_result import AnalysisResult, MatchDetails, ConfidenceLevel

__all__ = [
    'Column',
    'Table',
    'TableScore',
    'SignalType',
    'AnalysisResult',
    'MatchDetails',
    'ConfidenceLevel'
]
