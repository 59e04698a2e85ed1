"""Matchers for scoring inventory records against search queries."""
from motor_search.matchers.fuzzy_matcher import (
    fuzzy_search,
    get_similarity,
    is_fuzzy_match,
    levenshtein_distance,
    score_field,
    score_multi_word_query,
)

__all__ = [
    "fuzzy_search",
    "get_similarity",
    "is_fuzzy_match",
    "levenshtein_distance",
    "score_field",
    "score_multi_word_query",
]
