"""Weighted text search — pure tests for core/text_search.

Tests cover:
    - '+' normalization and query parsing (terms, exclusions, phrases, stop words)
    - Field weights: a name hit outranks a purposes hit
    - Exclusions and phrases filter documents
    - rank_by_relevance ordering
"""

from directory_api.core.text_search import (
    ParsedQuery, normalize_keywords, parse_query, rank_by_relevance, score_document,
)


def doc(name="", **fields):
    translations = {"en": {"name": name, **{
        k: v for k, v in fields.items()
        if k in ("short_description", "description", "offering", "purposes")
    }}}
    neutral = {k: v for k, v in fields.items() if k in ("website", "twitter")}
    return {"translations": translations, **neutral}


def test_normalize_keywords_replaces_plus():
    assert normalize_keywords("water+sanitation") == "water sanitation"


def test_parse_query_terms_are_lowercased_without_stop_words():
    q = parse_query("Water and the Sanitation")
    assert q.terms == ["water", "sanitation"]
    assert q.excluded == []


def test_parse_query_exclusions_and_phrases():
    q = parse_query('"clean water" -bread farms')
    assert q.phrases == ["clean water"]
    assert q.excluded == ["bread"]
    assert q.terms == ["clean", "water", "farms"]


def test_empty_query_matches_nothing():
    assert parse_query("the and").is_empty
    assert score_document(doc("The Water Co"), ParsedQuery()) == 0.0


def test_name_outweighs_purposes():
    q = parse_query("water")
    by_name = score_document(doc("Water Co"), q)
    by_purpose = score_document(doc("Co", purposes=["water"]), q)
    assert by_name == 20
    assert by_purpose == 3


def test_neutral_fields_are_searched():
    q = parse_query("wellsco")
    assert score_document(doc("X", twitter="@wellsco"), q) == 20


def test_excluded_term_removes_document():
    q = parse_query("water -bread")
    assert score_document(doc("Water Bread Co"), q) == 0.0
    assert score_document(doc("Water Co"), q) > 0


def test_phrase_must_appear():
    q = parse_query('"clean water"')
    assert score_document(doc("Co", short_description="Clean  water now"), q) > 0
    assert score_document(doc("Co", short_description="water that is clean"), q) == 0.0


def test_all_languages_are_searched():
    document = {"translations": {
        "en": {"name": "Water Co"}, "es": {"name": "Cooperativa de Agua"},
    }}
    assert score_document(document, parse_query("agua")) == 20


def test_rank_by_relevance_orders_descending_and_drops_misses():
    a = doc("Alpha", description="water")
    b = doc("Water Beta", short_description="water sanitation")
    c = doc("Gamma")
    ranked = rank_by_relevance([a, b, c], parse_query("water sanitation"))
    assert [d["translations"]["en"]["name"] for d, _ in ranked] == [
        "Water Beta", "Alpha",
    ]
