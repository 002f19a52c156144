"""
Query Processor - Turn free-text queries into match terms

Public API:
- tokenize(query) -> List[str]
- filter_stopwords(tokens) -> List[str]
- extract_query_terms(query) -> List[str]
- is_blank(text) -> bool
"""

import re
from typing import Iterable, List, Optional

# Common words to ignore in matching
STOPWORDS = frozenset({
    # Articles
    'the', 'a', 'an',
    # Conjunctions
    'and', 'or', 'but',
    # Prepositions
    'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by', 'from', 'up',
    'about', 'into', 'over', 'after',
    # Quantifiers
    'all',
    # Action verbs
    'find', 'get', 'show', 'list', 'display',
    # Question words
    'where', 'which',
})

# Deleted outright, not replaced with a space: "user's." -> "user's"
PUNCTUATION_PATTERN = re.compile(r'[.,?!]')

# Whitespace in queries and identifiers: ASCII blanks plus the Unicode space separators, line and
# paragraph separators and the byte order mark. Not the \x1c-\x1f control
# characters or \x85, which str.split() would also treat as whitespace.
WHITESPACE_CHARS = r'\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff'
WHITESPACE_PATTERN = re.compile(f'[{WHITESPACE_CHARS}]+')


def is_blank(text: Optional[str]) -> bool:
    """True for None, empty strings and strings made only of query whitespace"""
    return not text or WHITESPACE_PATTERN.fullmatch(text) is not None


class QueryProcessor:
    """
    Tokenizes queries and removes stop-words

    No stemming and no deduplication: a word repeated in the query stays
    repeated in the terms.
    """

    # Tokens shorter than this are dropped
    MIN_TERM_LENGTH = 2

    def __init__(self, stopwords: Optional[Iterable[str]] = None):
        """
        Initialize Query Processor

        Args:
            stopwords: Replacement stop-word set (default: STOPWORDS)
        """
        self.stopwords = frozenset(stopwords) if stopwords is not None else STOPWORDS

    def tokenize(self, query: str) -> List[str]:
        """
        Lowercase, strip ``. , ? !`` and split on WHITESPACE_PATTERN

        Examples:
            "Find all orders, please!" -> ["find", "all", "orders", "please"]
            "   " -> []
        """
        normalized = PUNCTUATION_PATTERN.sub('', query.lower())
        tokens = WHITESPACE_PATTERN.split(normalized)
        return [token for token in tokens if len(token) >= self.MIN_TERM_LENGTH]

    def filter_stopwords(self, tokens: List[str]) -> List[str]:
        """Remove stop-words, keeping order and duplicates"""
        return [token for token in tokens if token not in self.stopwords]

    def extract_query_terms(self, query: str) -> List[str]:
        """
        Extract the terms used for matching

        Examples:
            "find all orders with user information" -> ["orders", "user", "information"]
        """
        return self.filter_stopwords(self.tokenize(query))
