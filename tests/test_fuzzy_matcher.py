import pytest

from motor_search.matchers.fuzzy_matcher import (
    fuzzy_search,
    get_similarity,
    is_fuzzy_match,
    levenshtein_distance,
    score_field,
    score_multi_word_query,
)
from motor_search.models import MatchType, MotorRecord, SearchOptions

DEFAULTS = SearchOptions()


def test_levenshtein_distance_known_values():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("verado", "verado") == 0
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("", "") == 0


@pytest.mark.parametrize("a,b", [("fourstroke", "forstroke"), ("pro xs", "proxs"), ("115", "150")])
def test_levenshtein_distance_is_symmetric(a, b):
    assert levenshtein_distance(a, b) == levenshtein_distance(b, a)


def test_levenshtein_distance_short_circuits_large_length_difference():
    # Lengths differ by 7, so the longer length is returned rather than the true distance (7)
    assert levenshtein_distance("a", "abcdefgh") == 8
    assert levenshtein_distance("abcdefgh", "a") == 8


def test_get_similarity():
    assert get_similarity("ABC", "abc") == 1.0
    assert get_similarity("", "abc") == 0.0
    assert get_similarity("abc", "") == 0.0
    assert get_similarity("verado", "verdo") == pytest.approx(1 - 1 / 6)
    assert get_similarity("Verado", "xyz123") == 0.0
    for a, b in [("fourstroke", "verado"), ("pro xs", "seapro"), ("a", "zzzzzzzzzz")]:
        assert 0.0 <= get_similarity(a, b) <= 1.0


def test_is_fuzzy_match():
    assert is_fuzzy_match(MatchType.FUZZY)
    assert is_fuzzy_match("fuzzy")
    assert not is_fuzzy_match(MatchType.CONTAINS)
    assert not is_fuzzy_match(MatchType.NONE)


def test_score_field_rules():
    empty = score_field("", "verado", DEFAULTS)
    assert empty.match_type == MatchType.NONE
    assert empty.score == 0.0

    exact = score_field("Verado", "verado", DEFAULTS)
    assert exact.match_type == MatchType.EXACT
    assert exact.score == 1.0

    prefix = score_field("Verado 300 XL", "verado", DEFAULTS)
    assert prefix.match_type == MatchType.STARTS_WITH
    assert prefix.score == 0.95

    contains = score_field("FourStroke", "stroke", DEFAULTS)
    assert contains.match_type == MatchType.CONTAINS
    assert contains.score == 0.85

    word_prefix = score_field("Mercury 115 FourStroke", "four", DEFAULTS)
    assert word_prefix.match_type == MatchType.STARTS_WITH
    assert word_prefix.score == pytest.approx(0.855)

    typo = score_field("FourStroke", "forstroke", DEFAULTS)
    assert typo.match_type == MatchType.FUZZY
    assert typo.score == pytest.approx(0.9)

    word_typo = score_field("Verado 300 XL", "verdo", DEFAULTS)
    assert word_typo.match_type == MatchType.FUZZY
    assert word_typo.score == pytest.approx((1 - 1 / 6) * 0.95)

    miss = score_field("Verado", "xyz123", DEFAULTS)
    assert miss.match_type == MatchType.NONE
    assert miss.score == 0.0


def test_score_field_uses_custom_boosts():
    options = SearchOptions(boost_exact=2.0, boost_contains=0.5)
    assert score_field("Verado", "VERADO", options).score == 2.0
    assert score_field("FourStroke", "stroke", options).score == 0.5


def test_multi_word_score_is_penalized_by_coverage():
    item = {"name": "Mercury Verado"}
    score, match_type, matched_field = score_multi_word_query(
        item, ["verado", "zzzzzz"], ["name"], DEFAULTS
    )
    # One of two words matched (0.855): averaged over both words, then halved again
    assert score == pytest.approx(0.855 / 2 * 0.5)
    assert match_type == MatchType.STARTS_WITH
    assert matched_field == "name"


def test_multi_word_score_picks_best_field_per_word():
    item = {"model": "Verado 300", "category": "FourStroke"}
    score, match_type, matched_field = score_multi_word_query(
        item, ["verado", "fourstroke"], ["model", "category"], DEFAULTS
    )
    assert score == pytest.approx((0.95 + 1.0) / 2)
    assert match_type == MatchType.EXACT
    assert matched_field == "category"


def test_multi_word_score_without_any_match():
    assert score_multi_word_query({"name": "Verado"}, ["qqq", "zzz"], ["name"], DEFAULTS) == (
        0.0,
        MatchType.NONE,
        None,
    )


def test_fuzzy_search_exact_match():
    results = fuzzy_search([{"name": "Mercury 115 FourStroke"}], "Mercury 115 FourStroke", ["name"])
    assert len(results) == 1
    assert results[0].score == 1.0
    assert results[0].match_type == "exact"
    assert results[0].matched_field == "name"


def test_fuzzy_search_prefix_match():
    results = fuzzy_search([{"name": "Mercury 115 FourStroke"}], "Mercury", ["name"])
    assert results[0].match_type == "starts-with"
    assert results[0].score == 0.95


def test_fuzzy_search_word_internal_prefix():
    results = fuzzy_search([{"name": "Mercury 115 FourStroke"}], "Four", ["name"])
    assert results[0].match_type == "starts-with"
    assert results[0].score == pytest.approx(0.95 * 0.9)


def test_fuzzy_search_typo_tolerance():
    results = fuzzy_search([{"name": "FourStroke"}], "Forstroke", ["name"])
    assert len(results) == 1
    assert results[0].match_type == "fuzzy"
    assert results[0].score >= 0.4


def test_fuzzy_search_no_match():
    assert fuzzy_search([{"name": "Verado"}], "xyz123", ["name"]) == []


@pytest.mark.parametrize("query", ["a", " a ", "", "   "])
def test_fuzzy_search_ignores_short_queries(query):
    assert fuzzy_search([{"name": "a"}, {"name": "Verado"}], query, ["name"]) == []


def test_fuzzy_search_orders_by_score_descending():
    items = [{"name": "Verdo"}, {"name": "Pro XS Verado"}, {"name": "Verado"}]
    results = fuzzy_search(items, "verado", ["name"])
    assert [r.item["name"] for r in results] == ["Verado", "Pro XS Verado", "Verdo"]
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_fuzzy_search_keeps_input_order_for_ties():
    items = [{"id": 1, "name": "Verado"}, {"id": 2, "name": "Verado"}, {"id": 3, "name": "Verado"}]
    results = fuzzy_search(items, "verado", ["name"])
    assert [r.item["id"] for r in results] == [1, 2, 3]


def test_fuzzy_search_threshold_filters_results():
    items = [{"name": "Verado"}, {"name": "Verdo"}, {"name": "FourStroke"}]
    results = fuzzy_search(items, "verado", ["name"], {"threshold": 0.9})
    assert [r.item["name"] for r in results] == ["Verado"]
    assert all(r.score >= 0.9 for r in results)


def test_fuzzy_search_max_results():
    items = [{"name": f"Verado {hp}"} for hp in (250, 300, 350, 400)]
    assert len(fuzzy_search(items, "verado", ["name"], SearchOptions(max_results=2))) == 2
    assert len(fuzzy_search(items, "verado", ["name"], {"maxResults": 3})) == 3
    assert len(fuzzy_search(items, "verado", ["name"], SearchOptions(max_results=None))) == 4
    assert fuzzy_search(items, "verado", ["name"], SearchOptions(max_results=0)) == []


def test_fuzzy_search_skips_non_string_and_missing_fields():
    items = [{"hp": 115, "model": "115 Pro XS"}, {"hp": 115}]
    results = fuzzy_search(items, "115", ["hp", "model", "missing"])
    assert len(results) == 1
    assert results[0].matched_field == "model"
    assert results[0].match_type == MatchType.STARTS_WITH


def test_fuzzy_search_reads_object_attributes():
    motors = [
        MotorRecord(id="m1", model="Verado 300 XL", category="Verado"),
        MotorRecord(id="m2", model="115 ELPT FourStroke", category="FourStroke"),
    ]
    results = fuzzy_search(motors, "fourstroke", ["model", "category"])
    assert [r.item.id for r in results] == ["m2"]
    assert results[0].matched_field == "category"


def test_fuzzy_search_partial_multi_word_query_falls_below_threshold():
    items = [{"name": "Mercury Verado"}]
    assert fuzzy_search(items, "verado zzzzzz", ["name"]) == []
    results = fuzzy_search(items, "verado zzzzzz", ["name"], {"threshold": 0.2})
    assert results[0].score == pytest.approx(0.21375)
