"""
Scoring Service - Score tables based on query relevance

Public API:
- score_table(table, query_terms) -> TableScore
- semantic_bonus(table, query_terms) -> float
- score_all_tables(schema, query_terms) -> List[TableScore]
- filter_by_threshold(scores) -> List[TableScore]
- calculate_confidence(scores, candidates) -> float
- build_match_details(scores) -> MatchDetails
- analyze(schema, query) -> AnalysisResult
"""

import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import ConfidenceMode, DetailKey
from ..exceptions import AnalysisPreconditionError, InvalidTableError
from ..logger import get_logger
from ..models.schema import Column, Table
from ..models.table_score import TableScore, SignalType
from ..models.analysis_result import AnalysisResult, MatchDetails
from .query_processor import QueryProcessor, WHITESPACE_CHARS, is_blank

logger = get_logger(__name__)

# Concept -> related terms. A query term that is a concept earns a bonus when
# one of its related terms appears in the table or column names.
SEMANTIC_MAPPINGS: Mapping[str, tuple] = MappingProxyType({
    'user': ('customer', 'client', 'person', 'account'),
    'customer': ('user', 'client', 'buyer', 'consumer'),
    'order': ('purchase', 'transaction', 'sale'),
    'product': ('item', 'goods', 'merchandise'),
    'payment': ('transaction', 'purchase', 'sale'),
})

IDENTIFIER_SPLIT_PATTERN = re.compile(f'[_{WHITESPACE_CHARS}]+')


class ScoringService:
    """
    Service for scoring tables based on query relevance
    """

    # Scoring weights
    SCORE_TABLE_NAME_MATCH = 1.0   # Per table-name word
    SCORE_COLUMN_NAME_MATCH = 0.5  # Per column, at most once
    SCORE_SEMANTIC_BONUS = 0.3     # Per query term, at most once per table

    # Tables must score strictly above this to be relevant
    RELEVANCE_THRESHOLD = 0.5

    # A score of this much or more maps to full confidence
    CONFIDENCE_NORMALIZER = 2.0

    def __init__(self, query_processor: Optional[QueryProcessor] = None,
                 semantic_mappings: Optional[Mapping[str, Iterable[str]]] = None,
                 confidence_mode: ConfidenceMode = ConfidenceMode.FIRST_SCANNED,
                 detail_key: DetailKey = DetailKey.NAME):
        """
        Initialize Scoring Service

        Args:
            query_processor: Tokenizer/stop-word filter (default: QueryProcessor())
            semantic_mappings: Replacement concept -> related terms table
            confidence_mode: Which score the confidence is derived from
            detail_key: How match-detail mappings are keyed
        """
        self.query_processor = query_processor or QueryProcessor()
        if semantic_mappings is None:
            self.semantic_mappings = SEMANTIC_MAPPINGS
        else:
            self.semantic_mappings = MappingProxyType(
                {concept: tuple(terms) for concept, terms in semantic_mappings.items()}
            )
        self.confidence_mode = confidence_mode
        self.detail_key = detail_key

    @staticmethod
    def _split_identifier(name: str) -> List[str]:
        """
        Split a table/column name into lowercase words on ``_`` and whitespace

        Examples:
            "order_items" -> ["order", "items"]
            "Contact Info" -> ["contact", "info"]
        """
        return IDENTIFIER_SPLIT_PATTERN.split(name.lower())

    @staticmethod
    def _bidirectional_match(term: str, word: str) -> bool:
        """True if either string contains the other"""
        return term in word or word in term

    def _matching_term(self, word: str, query_terms: List[str]) -> Optional[str]:
        """First query term with bidirectional containment against word"""
        for term in query_terms:
            if self._bidirectional_match(term, word):
                return term
        return None

    def score_table(self, table: Table, query_terms: List[str], index: int = 0) -> TableScore:
        """
        Score a single table

        Args:
            table: Table to score
            query_terms: Filtered query terms (see QueryProcessor.extract_query_terms)
            index: Position of the table in the schema

        Returns:
            TableScore object
        """
        score_obj = TableScore(table=table, index=index)

        # 1. Table name matching
        self._score_table_name(score_obj, table, query_terms)

        # 2. Column name matching
        self._score_column_names(score_obj, table, query_terms)

        # 3. Semantic bonus
        self._score_semantic(score_obj, table, query_terms)

        return score_obj

    def _score_table_name(self, score_obj: TableScore, table: Table, query_terms: List[str]):
        """One point per table-name word that matches any query term"""
        for name_word in self._split_identifier(table.name):
            term = self._matching_term(name_word, query_terms)
            if term is not None:
                score_obj.add_score(
                    self.SCORE_TABLE_NAME_MATCH,
                    f"table name word '{name_word}' matches '{term}'",
                    signal_type=SignalType.TABLE_NAME_MATCH
                )

    def _score_column_names(self, score_obj: TableScore, table: Table, query_terms: List[str]):
        """Half a point per column with any word matching any query term"""
        for column in table.columns:
            for column_word in self._split_identifier(column.name):
                term = self._matching_term(column_word, query_terms)
                if term is not None:
                    score_obj.add_score(
                        self.SCORE_COLUMN_NAME_MATCH,
                        f"column '{column.name}' matches '{term}'",
                        signal_type=SignalType.COLUMN_NAME_MATCH,
                        column=column.name
                    )
                    break

    def _find_related_term(self, table: Table, term: str) -> Optional[str]:
        """
        First related term of ``term`` found inside the table or column names

        Plain (one-way) containment: the related term must appear in the name.
        """
        table_name = table.name.lower()
        column_names = [column.name.lower() for column in table.columns]

        for related in self.semantic_mappings.get(term, ()):
            if related in table_name or any(related in name for name in column_names):
                return related
        return None

    def semantic_bonus(self, table: Table, query_terms: List[str]) -> float:
        """
        Bonus for query terms whose related terms appear in the table

        Each query term earns SCORE_SEMANTIC_BONUS at most once, however many
        of its related terms match. Repeated query terms count again.
        """
        bonus = 0.0
        for term in query_terms:
            if self._find_related_term(table, term) is not None:
                bonus += self.SCORE_SEMANTIC_BONUS
        return bonus

    def _score_semantic(self, score_obj: TableScore, table: Table, query_terms: List[str]):
        """Record semantic_bonus on the score, one entry per contributing term"""
        for term in query_terms:
            related = self._find_related_term(table, term)
            if related is not None:
                score_obj.add_score(
                    self.SCORE_SEMANTIC_BONUS,
                    f"'{term}' is related to '{related}'",
                    signal_type=SignalType.SEMANTIC_BONUS
                )

    def validate_table(self, table, index: int):
        """
        Check that a schema element is a well-formed Table

        Raises:
            InvalidTableError: If the element cannot be scored
        """
        if not isinstance(table, Table):
            raise InvalidTableError(f"expected Table, got {type(table).__name__}", index)
        if not isinstance(table.name, str):
            raise InvalidTableError("table name must be a string", index)
        if table.columns is None or isinstance(table.columns, (str, bytes)):
            raise InvalidTableError(f"table '{table.name}' has no column sequence", index)
        for column in table.columns:
            if not isinstance(column, Column) or not isinstance(column.name, str):
                raise InvalidTableError(f"table '{table.name}' has a malformed column: {column!r}", index)

    def score_all_tables(self, schema: Sequence[Table], query_terms: List[str]) -> List[TableScore]:
        """
        Score every table, in schema order

        Every table is validated before any is scored.

        Returns:
            List of TableScore objects, in the same order as ``schema``
        """
        for index, table in enumerate(schema):
            self.validate_table(table, index)

        scores = []
        for index, table in enumerate(schema):
            score_obj = self.score_table(table, query_terms, index=index)
            logger.debug("Scored table %s: %.2f", table.name, score_obj.total)
            scores.append(score_obj)

        return scores

    def filter_by_threshold(self, scores: List[TableScore]) -> List[TableScore]:
        """
        Keep tables scoring strictly above RELEVANCE_THRESHOLD

        Returns:
            Candidates sorted by score descending; ties keep schema order
        """
        candidates = [s for s in scores if s.total > self.RELEVANCE_THRESHOLD]
        return sorted(candidates, key=lambda s: s.total, reverse=True)

    def calculate_confidence(self, scores: List[TableScore], candidates: List[TableScore]) -> float:
        """
        Confidence in [0, 1]

        Zero without candidates. Otherwise the selected score divided by
        CONFIDENCE_NORMALIZER and clamped. In FIRST_SCANNED mode the score is
        that of the first table in schema order, whether or not it is a
        candidate; in TOP_RANKED mode it is the top candidate's.

        Args:
            scores: All table scores, in schema order
            candidates: Relevant tables, ranked
        """
        if not candidates:
            return 0.0

        if self.confidence_mode == ConfidenceMode.TOP_RANKED:
            raw_score = candidates[0].total
        else:
            raw_score = scores[0].total

        return max(0.0, min(1.0, raw_score / self.CONFIDENCE_NORMALIZER))

    def build_match_details(self, scores: List[TableScore]) -> MatchDetails:
        """
        Score and matched columns for every table

        Keyed by table name (later duplicates win) or by schema index,
        depending on detail_key.
        """
        table_matches: Dict = {}
        column_matches: Dict = {}

        for score_obj in scores:
            key = score_obj.index if self.detail_key == DetailKey.INDEX else score_obj.table_name
            table_matches[key] = score_obj.total
            column_matches[key] = list(score_obj.column_matches)

        return MatchDetails(table_matches=table_matches, column_matches=column_matches)

    def analyze(self, schema: Sequence[Table], query: str) -> AnalysisResult:
        """
        Score a query against a whole schema

        Args:
            schema: Tables to consider, in upload order
            query: Natural language query

        Returns:
            AnalysisResult with ranked relevant tables

        Raises:
            AnalysisPreconditionError: If the query is blank or the schema is empty
            InvalidTableError: If a schema element is not a well-formed Table
        """
        if is_blank(query):
            raise AnalysisPreconditionError("Query is blank")
        if not schema:
            raise AnalysisPreconditionError("Schema has no tables")

        query_terms = self.query_processor.extract_query_terms(query)
        scores = self.score_all_tables(schema, query_terms)
        candidates = self.filter_by_threshold(scores)
        confidence = self.calculate_confidence(scores, candidates)

        logger.info(
            "Analyzed query against %d tables: %d relevant, confidence %.2f",
            len(scores), len(candidates), confidence,
            extra={'query_terms': query_terms}
        )

        return AnalysisResult(
            relevant_tables=[c.table for c in candidates],
            query=query,
            confidence=confidence,
            match_details=self.build_match_details(scores),
            query_terms=query_terms,
            table_scores=scores,
            ranked_scores=candidates
        )
