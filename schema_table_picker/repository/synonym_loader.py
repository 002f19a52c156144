"""
Synonym Loader - Load semantic concept mappings from CSV files

Public API:
- load_semantic_mappings_from_csv(csv_path) -> Dict[str, List[str]]
- merge_semantic_mappings(base, overrides) -> Dict[str, List[str]]
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Mapping

from ..logger import get_logger

logger = get_logger(__name__)


class SynonymLoader:
    """
    Loads concept -> related-term mappings from CSV files

    CSV Format:
    concept,related_terms,description
    student,"learner|pupil|enrollee",People enrolled in courses

    Related terms can be:
    - Pipe-separated: "term1|term2|term3"
    - Comma-separated in one quoted field: "term1,term2,term3"

    The description column is optional and only documents the row.
    """

    def __init__(self, csv_path: str):
        """
        Initialize synonym loader

        Args:
            csv_path: Path to CSV file containing concept mappings
        """
        self.csv_path = Path(csv_path)

    def load(self) -> Dict[str, List[str]]:
        """
        Load mappings from CSV file

        Returns:
            Dictionary: {concept: [related terms]}

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If CSV format is invalid
        """
        if not self.csv_path.exists():
            raise FileNotFoundError(f"Synonym CSV not found: {self.csv_path}")

        mappings: Dict[str, List[str]] = {}

        # utf-8-sig so a byte order mark does not end up in the first header
        with open(self.csv_path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)

            required_columns = {'concept', 'related_terms'}
            if not required_columns.issubset(reader.fieldnames or []):
                raise ValueError(
                    f"CSV must contain columns: {sorted(required_columns)}. "
                    f"Found: {reader.fieldnames}"
                )

            for row_num, row in enumerate(reader, start=2):  # Header is row 1
                concept = (row.get('concept') or '').strip().lower()
                terms_str = (row.get('related_terms') or '').strip()

                if not concept and not terms_str:
                    continue
                if not concept:
                    raise ValueError(f"Row {row_num}: related terms without a concept")

                terms = self._parse_terms(terms_str)
                if not terms:
                    logger.warning("Row %d: concept '%s' has no related terms, skipped", row_num, concept)
                    continue

                mappings[concept] = terms

        logger.info("Loaded %d semantic concepts from %s", len(mappings), self.csv_path)
        return mappings

    def _parse_terms(self, terms_str: str) -> List[str]:
        """
        Parse related-term string into list

        Supports:
        - Pipe-separated: "t1|t2|t3"
        - Comma-separated: "t1,t2,t3"
        - Mixed with spaces: "t1, t2, t3"

        Returns:
            List of cleaned terms (lowercase)
        """
        if not terms_str:
            return []

        # Try pipe separator first (less common in actual text)
        separator = '|' if '|' in terms_str else ','

        return [
            t.strip().lower()
            for t in terms_str.split(separator)
            if t.strip()
        ]


def merge_semantic_mappings(
    base: Mapping[str, Iterable[str]],
    overrides: Mapping[str, Iterable[str]]
) -> Dict[str, List[str]]:
    """
    Overlay loaded concepts on a base table

    A concept present in ``overrides`` replaces the base entry entirely.
    """
    merged = {concept: list(terms) for concept, terms in base.items()}
    for concept, terms in overrides.items():
        merged[concept] = list(terms)
    return merged


def load_semantic_mappings_from_csv(csv_path: str) -> Dict[str, List[str]]:
    """
    Convenience function to load concept mappings from CSV

    Args:
        csv_path: Path to synonym CSV file

    Returns:
        Dictionary: {concept: [related terms]}
    """
    loader = SynonymLoader(csv_path)
    return loader.load()
