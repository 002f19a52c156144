"""
Models for analysis results
"""

from dataclasses import dataclass, field
from typing import List, Dict, Union
from enum import Enum

from .schema import Table
from .table_score import TableScore

# Table name, or the table's position in the schema when keyed by index
DetailKeyValue = Union[str, int]


class ConfidenceLevel(Enum):
    """
    Display bands for the confidence value
    """
    HIGH = "high"        # > 0.7
    MEDIUM = "medium"    # > 0.4
    LOW = "low"

    @classmethod
    def from_score(cls, confidence: float) -> 'ConfidenceLevel':
        if confidence > 0.7:
            return cls.HIGH
        if confidence > 0.4:
            return cls.MEDIUM
        return cls.LOW


@dataclass
class MatchDetails:
    """
    Raw score and matched columns for every scanned table, relevant or not
    """
    table_matches: Dict[DetailKeyValue, float] = field(default_factory=dict)
    column_matches: Dict[DetailKeyValue, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Convert to dictionary"""
        return {
            'table_matches': dict(self.table_matches),
            'column_matches': {key: list(value) for key, value in self.column_matches.items()}
        }


@dataclass
class AnalysisResult:
    """
    Result of analyzing one query against one schema
    """
    relevant_tables: List[Table]
    query: str
    confidence: float
    match_details: MatchDetails = field(default_factory=MatchDetails)
    query_terms: List[str] = field(default_factory=list)
    table_scores: List[TableScore] = field(default_factory=list, repr=False)  # Schema order
    ranked_scores: List[TableScore] = field(default_factory=list, repr=False)  # Same order as relevant_tables

    @property
    def relevant_table_names(self) -> List[str]:
        return [table.name for table in self.relevant_tables]

    @property
    def has_matches(self) -> bool:
        return bool(self.relevant_tables)

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return ConfidenceLevel.from_score(self.confidence)

    def to_dict(self) -> Dict:
        """Convert to dictionary"""
        return {
            'relevant_tables': [table.to_dict() for table in self.relevant_tables],
            'query': self.query,
            'confidence': self.confidence,
            'confidence_level': self.confidence_level.value,
            'match_details': self.match_details.to_dict(),
            'query_terms': list(self.query_terms)
        }
