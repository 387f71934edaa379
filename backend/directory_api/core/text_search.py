"""Weighted Text Search — relevance scoring of enterprise documents against a keyword query.

Invariants:
    - Query terms are OR-ed; a document matches when its score is > 0
    - "-term" excludes any document containing term; a "quoted phrase" must appear verbatim
    - Field weights come from TEXT_SEARCH_WEIGHTS only
    - Matching is case-insensitive; stop words never contribute

Design Decisions:
    - Pure scoring over documents instead of a vendor-specific full-text index:
      identical behavior on PostgreSQL and on the SQLite test database
    - Score = sum over fields of weight * term occurrences, so a single hit in a
      heavy field (name) outranks several hits in a light one (purposes)
"""

import re
from dataclasses import dataclass, field

from directory_api.core.domain_types import TEXT_SEARCH_WEIGHTS

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)
_PHRASE_RE = re.compile(r'"([^"]*)"')

STOP_WORDS: frozenset[str] = frozenset({
    # en
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "in",
    "is", "it", "of", "on", "or", "the", "to", "with",
    # es
    "de", "del", "el", "en", "la", "las", "los", "por", "que", "un", "una", "y",
})


@dataclass
class ParsedQuery:
    """Keyword query split into scoring terms, exclusions, and required phrases."""
    terms: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    phrases: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.terms and not self.phrases


def normalize_keywords(search: str) -> str:
    """URL-style '+' separators become spaces."""
    return search.replace("+", " ")


def tokenize(text: str) -> list[str]:
    return [
        t for t in _TOKEN_RE.findall(text.lower()) if t not in STOP_WORDS
    ]


def parse_query(search: str) -> ParsedQuery:
    """Parse a keyword string into a ParsedQuery."""
    query = ParsedQuery()
    for phrase in _PHRASE_RE.findall(search):
        phrase = " ".join(phrase.lower().split())
        if phrase:
            query.phrases.append(phrase)
            query.terms.extend(tokenize(phrase))
    remainder = _PHRASE_RE.sub(" ", search)
    for word in remainder.split():
        if word.startswith("-") and len(word) > 1:
            query.excluded.extend(tokenize(word[1:]))
        else:
            query.terms.extend(tokenize(word))
    return query


def searchable_fields(document: dict) -> dict[str, list[str]]:
    """Collect the weighted fields' text, across every language block."""
    fields: dict[str, list[str]] = {name: [] for name in TEXT_SEARCH_WEIGHTS}
    for block in (document.get("translations") or {}).values():
        for name in fields:
            _append_text(fields[name], block.get(name))
    for name in fields:
        _append_text(fields[name], document.get(name))
    return fields


def _append_text(bucket: list[str], value) -> None:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        bucket.extend(str(v) for v in value if v is not None)
    else:
        bucket.append(str(value))


def score_document(document: dict, query: ParsedQuery) -> float:
    """Weighted relevance of one document; 0.0 means no match."""
    if query.is_empty:
        return 0.0
    fields = searchable_fields(document)
    tokens_by_field = {
        name: tokenize(" ".join(texts)) for name, texts in fields.items()
    }

    all_tokens = {t for tokens in tokens_by_field.values() for t in tokens}
    if any(term in all_tokens for term in query.excluded):
        return 0.0

    if query.phrases:
        haystack = [
            " ".join(text.lower().split())
            for texts in fields.values() for text in texts
        ]
        for phrase in query.phrases:
            if not any(phrase in text for text in haystack):
                return 0.0

    score = 0.0
    for name, tokens in tokens_by_field.items():
        hits = sum(tokens.count(term) for term in query.terms)
        score += TEXT_SEARCH_WEIGHTS[name] * hits
    return score


def rank_by_relevance(
    documents: list[dict], query: ParsedQuery,
) -> list[tuple[dict, float]]:
    """Matching documents ordered by descending score. Ties keep input order."""
    scored = []
    for document in documents:
        score = score_document(document, query)
        if score > 0:
            scored.append((document, score))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored
