"""
Lightweight fuzzy search over inventory records.

Scores each record field against the query with tiered rules
(exact / starts-with / contains / fuzzy) and ranks the records that clear
the similarity threshold.
"""
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

from loguru import logger
from rapidfuzz.distance import Levenshtein

from motor_search.models import (
    MATCH_PRECEDENCE,
    FieldScore,
    FuzzyResult,
    MatchType,
    SearchOptions,
)

T = TypeVar("T")

MIN_QUERY_LENGTH = 2
MAX_LENGTH_DIFFERENCE = 5
WORD_MATCH_FACTOR = 0.9
WORD_FUZZY_FACTOR = 0.95

NO_MATCH = FieldScore(0.0, MatchType.NONE)

OptionsLike = Union[SearchOptions, Mapping, None]


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance between two strings.

    When the lengths differ by more than MAX_LENGTH_DIFFERENCE the true
    distance is not computed and the longer length is returned instead.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    if abs(len(a) - len(b)) > MAX_LENGTH_DIFFERENCE:
        return max(len(a), len(b))

    return Levenshtein.distance(a, b)


def get_similarity(str1: str, str2: str) -> float:
    """Case-insensitive similarity in [0, 1]; 0 if either string is empty."""
    if not str1 or not str2:
        return 0.0

    s1 = str1.lower()
    s2 = str2.lower()
    if s1 == s2:
        return 1.0

    distance = levenshtein_distance(s1, s2)
    return 1 - distance / max(len(s1), len(s2))


def is_fuzzy_match(match_type: Union[MatchType, str]) -> bool:
    """True when a result only matched through typo tolerance."""
    return match_type == MatchType.FUZZY


def score_field(field_value: str, token: str, options: SearchOptions) -> FieldScore:
    """
    Score a single field value against one query token.

    Rules are tried in order and the first that applies wins: exact,
    starts-with, contains (promoted to a discounted starts-with when the token
    begins one of the field's words), whole-field similarity, then
    per-word similarity.

    Args:
        field_value (str): The record's field value.
        token (str): One query token.
        options (SearchOptions): Resolved search options.

    Returns:
        FieldScore: Score in [0, 1] and the match type that produced it.
    """
    if not field_value:
        return NO_MATCH

    field = field_value.lower()
    q = token.lower()
    words = field.split()

    if field == q:
        return FieldScore(options.boost_exact, MatchType.EXACT)

    if field.startswith(q):
        return FieldScore(options.boost_starts_with, MatchType.STARTS_WITH)

    if q in field:
        if any(word.startswith(q) for word in words):
            return FieldScore(options.boost_starts_with * WORD_MATCH_FACTOR, MatchType.STARTS_WITH)
        return FieldScore(options.boost_contains, MatchType.CONTAINS)

    similarity = get_similarity(field, q)
    if similarity >= options.threshold:
        return FieldScore(similarity, MatchType.FUZZY)

    # Typo in a single word of a multi-word field, e.g. "verdo" in "Verado 300 XL"
    for word in words:
        word_similarity = get_similarity(word, q)
        if word_similarity >= options.threshold:
            return FieldScore(word_similarity * WORD_FUZZY_FACTOR, MatchType.FUZZY)

    return NO_MATCH


def _field_value(item: Any, key: str) -> Optional[str]:
    """Read a string field from a mapping or an object; anything else is None."""
    if isinstance(item, Mapping):
        value = item.get(key)
    else:
        value = getattr(item, key, None)
    return value if isinstance(value, str) else None


def _best_field(
    item: Any, token: str, keys: Sequence[str], options: SearchOptions
) -> Tuple[FieldScore, Optional[str]]:
    """Best-scoring field for one token; ties keep the earlier key."""
    best = NO_MATCH
    best_key = None
    for key in keys:
        value = _field_value(item, key)
        if value is None:
            continue
        field_score = score_field(value, token, options)
        if field_score.score > best.score:
            best = field_score
            best_key = key
    return best, best_key


def _better_match_type(candidate: MatchType, current: MatchType) -> bool:
    if candidate == MatchType.NONE:
        return False
    if current == MatchType.NONE:
        return True
    return MATCH_PRECEDENCE.index(candidate) < MATCH_PRECEDENCE.index(current)


def score_multi_word_query(
    item: Any, query_words: Sequence[str], keys: Sequence[str], options: SearchOptions
) -> Tuple[float, MatchType, Optional[str]]:
    """
    Score a multi-word query against an item.

    Each word takes its best field. The summed word scores are averaged over
    all words and then multiplied by coverage (matched words / all words), so
    partial matches fall well below single strong matches.

    Returns:
        Tuple[float, MatchType, Optional[str]]: (score, best match type,
            field of the last word whose best field matched).
    """
    total_score = 0.0
    matched_words = 0
    best_match_type = MatchType.NONE
    matched_field = None

    for word in query_words:
        word_best, word_key = _best_field(item, word, keys, options)
        if word_best.score <= 0:
            continue

        matched_words += 1
        total_score += word_best.score
        matched_field = word_key
        if _better_match_type(word_best.match_type, best_match_type):
            best_match_type = word_best.match_type

    if matched_words == 0:
        return 0.0, MatchType.NONE, None

    coverage = matched_words / len(query_words)
    return (total_score / len(query_words)) * coverage, best_match_type, matched_field


def _score_phrase(
    item: Any, phrase: str, keys: Sequence[str], options: SearchOptions
) -> Tuple[FieldScore, Optional[str]]:
    """Whole-phrase match against whitespace-normalized fields, fuzzy tier excluded."""
    best = NO_MATCH
    best_key = None
    for key in keys:
        value = _field_value(item, key)
        if value is None:
            continue
        field_score = score_field(" ".join(value.split()), phrase, options)
        if field_score.match_type == MatchType.FUZZY:
            continue
        if field_score.score > best.score:
            best = field_score
            best_key = key
    return best, best_key


def _score_item(
    item: Any, query_words: List[str], keys: Sequence[str], options: SearchOptions
) -> Tuple[float, MatchType, Optional[str]]:
    if len(query_words) == 1:
        best, best_key = _best_field(item, query_words[0], keys, options)
        return best.score, best.match_type, best_key

    score, match_type, matched_field = score_multi_word_query(item, query_words, keys, options)

    phrase, phrase_key = _score_phrase(item, " ".join(query_words), keys, options)
    if phrase.score > score:
        return phrase.score, phrase.match_type, phrase_key
    return score, match_type, matched_field


def fuzzy_search(
    items: Sequence[T],
    query: str,
    keys: Sequence[str],
    options: OptionsLike = None,
) -> List[FuzzyResult[T]]:
    """
    Perform fuzzy search across multiple fields.

    Never raises for well-typed input: queries shorter than two characters,
    empty item lists and non-string fields all degrade to empty or zero
    results.

    Args:
        items (Sequence[T]): Records to search (mappings or objects).
        query (str): Raw search query.
        keys (Sequence[str]): Field names to search within.
        options (SearchOptions | Mapping | None): Overrides merged over the defaults.

    Returns:
        List[FuzzyResult[T]]: Hits with score >= threshold, best first. Equal
            scores keep their input order.
    """
    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    opts = SearchOptions.resolve(options)
    query_words = query.lower().split()
    if not query_words:
        return []

    results: List[FuzzyResult[T]] = []
    for item in items:
        score, match_type, matched_field = _score_item(item, query_words, keys, opts)
        if score >= opts.threshold:
            results.append(FuzzyResult(item, score, match_type, matched_field))

    results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(f"Fuzzy search '{query}': {len(results)} of {len(items)} items matched")

    if opts.max_results is None:
        return results
    return results[:opts.max_results]
