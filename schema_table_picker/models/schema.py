"""
Models for user-supplied schemas
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Column:
    """
    A single column as supplied by the caller
    """
    name: str
    type: str
    constraints: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (constraints omitted when empty)"""
        result = {'name': self.name, 'type': self.type}
        if self.constraints:
            result['constraints'] = list(self.constraints)
        return result


@dataclass(frozen=True)
class Table:
    """
    A table with an ordered sequence of columns

    ``columns`` may be empty but is always present.
    """
    name: str
    columns: Tuple[Column, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary in the same shape the schema document uses"""
        return {
            'name': self.name,
            'columns': [column.to_dict() for column in self.columns]
        }
