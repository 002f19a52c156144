"""
Table Picker - Caller-side entry point for schema analysis

Public API:
- TablePicker.from_config(config) -> TablePicker
- load_schema(path) -> SchemaLoadResult
- can_analyze(schema, query) -> bool
- pick(schema, query) -> Optional[AnalysisResult]
"""

from typing import Optional, Sequence

from ..config import PickerConfig
from ..exceptions import ConfigError
from ..logger import get_logger
from ..models.analysis_result import AnalysisResult
from ..models.schema import Table
from ..repository.schema_loader import SchemaLoader, SchemaLoadResult
from ..repository.synonym_loader import load_semantic_mappings_from_csv, merge_semantic_mappings
from .query_processor import QueryProcessor, STOPWORDS, is_blank
from .scoring_service import ScoringService, SEMANTIC_MAPPINGS

logger = get_logger(__name__)


class TablePicker:
    """
    Loads schemas and answers "which tables do I need" for a query

    Guards the analysis preconditions so the scorer is only invoked with a
    non-blank query and a non-empty schema.
    """

    def __init__(self, scoring_service: Optional[ScoringService] = None,
                 schema_loader: Optional[SchemaLoader] = None):
        self.scoring_service = scoring_service or ScoringService()
        self.schema_loader = schema_loader or SchemaLoader()

    @classmethod
    def from_config(cls, config: PickerConfig) -> 'TablePicker':
        """
        Build a picker from runtime config

        Raises:
            ConfigError: If the synonym CSV cannot be loaded
        """
        stopwords = STOPWORDS | frozenset(config.extra_stopwords)
        query_processor = QueryProcessor(stopwords=stopwords)

        semantic_mappings = SEMANTIC_MAPPINGS
        if config.synonyms_csv:
            try:
                loaded = load_semantic_mappings_from_csv(config.synonyms_csv)
            except (FileNotFoundError, ValueError) as e:
                raise ConfigError(f"Could not load synonyms: {e}") from e
            semantic_mappings = merge_semantic_mappings(SEMANTIC_MAPPINGS, loaded)

        scoring_service = ScoringService(
            query_processor=query_processor,
            semantic_mappings=semantic_mappings,
            confidence_mode=config.confidence_mode,
            detail_key=config.detail_key
        )
        return cls(scoring_service=scoring_service)

    def load_schema(self, path: str) -> SchemaLoadResult:
        """Load and validate a schema file"""
        return self.schema_loader.load_file(path)

    @staticmethod
    def can_analyze(schema: Sequence[Table], query: str) -> bool:
        """True if the query is non-blank and the schema has tables"""
        return not is_blank(query) and bool(schema)

    def pick(self, schema: Sequence[Table], query: str) -> Optional[AnalysisResult]:
        """
        Analyze a query against a schema

        Returns:
            AnalysisResult, or None when the query is blank or the schema is
            empty (no analysis is run)
        """
        if not self.can_analyze(schema, query):
            logger.debug("Skipping analysis: blank query or empty schema")
            return None

        return self.scoring_service.analyze(schema, query)
