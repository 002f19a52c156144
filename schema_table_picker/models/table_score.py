"""
Models for per-table relevance scores
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
from enum import Enum

from .schema import Table


class SignalType(Enum):
    """Types of scoring signals, in the order they are summed"""
    TABLE_NAME_MATCH = "table_name_match"
    COLUMN_NAME_MATCH = "column_name_match"
    SEMANTIC_BONUS = "semantic_bonus"


@dataclass
class TableScore:
    """
    Represents a scored table

    Points are tracked per signal so the total can be explained. The total is
    always name + column + semantic, summed in that order, so two runs over
    the same input produce bit-identical totals.
    """
    table: Table
    index: int = 0  # Position of the table in the scanned schema
    reasons: List[str] = field(default_factory=list)
    column_matches: List[str] = field(default_factory=list)

    # Signal vector (points per signal type)
    signal_scores: Dict[str, float] = field(default_factory=dict, repr=False)

    @property
    def table_name(self) -> str:
        return self.table.name

    @property
    def total(self) -> float:
        """Total relevance score"""
        return (
            self.signal_scores.get(SignalType.TABLE_NAME_MATCH.value, 0.0)
            + self.signal_scores.get(SignalType.COLUMN_NAME_MATCH.value, 0.0)
            + self.signal_scores.get(SignalType.SEMANTIC_BONUS.value, 0.0)
        )

    def add_score(
        self,
        points: float,
        reason: str,
        signal_type: SignalType,
        column: Optional[str] = None
    ):
        """
        Add points for a signal

        Args:
            points: Points to add
            reason: Human-readable reason
            signal_type: Signal the points belong to
            column: Original column name if the signal matched a column
        """
        key = signal_type.value
        self.signal_scores[key] = self.signal_scores.get(key, 0.0) + points
        self.reasons.append(reason)

        if column is not None:
            self.column_matches.append(column)

    def get_signal_breakdown(self) -> Dict[str, float]:
        """
        Get detailed breakdown of score by signal type

        Example:
            {'table_name_match': 1.0, 'column_name_match': 0.5}
        """
        return dict(self.signal_scores)

    def explain_score(self) -> str:
        """
        Generate human-readable explanation of score composition

        Example:
            "Table 'orders' scored 1.5 points:
               • Table Name Match: 1.0 pts
               • Column Name Match: 0.5 pts"
        """
        if not self.signal_scores:
            return f"Table '{self.table_name}' scored {self.total:.1f} points (no matches)"

        lines = [f"Table '{self.table_name}' scored {self.total:.1f} points:"]

        for signal_type, points in sorted(self.signal_scores.items(), key=lambda x: x[1], reverse=True):
            readable_name = signal_type.replace('_', ' ').title()
            lines.append(f"  • {readable_name}: {points:.1f} pts")

        for reason in self.reasons:
            lines.append(f"    - {reason}")

        return "\n".join(lines)

    def to_dict(self) -> Dict:
        """Convert to dictionary (includes signal vector)"""
        return {
            'table_name': self.table_name,
            'index': self.index,
            'total': self.total,
            'signal_scores': dict(self.signal_scores),
            'reasons': list(self.reasons),
            'column_matches': list(self.column_matches)
        }
