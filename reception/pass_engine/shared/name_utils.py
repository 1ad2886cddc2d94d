"""Name normalization and fuzzy matching.

Used when the upstream name filter is unavailable, rejected by the account
configuration, or returns nothing."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")


def normalize_name(name: str | None) -> str:
    """Normalize a name for matching.

    1. Lowercase
    2. Decompose and strip combining marks (José -> jose)
    3. Replace every character outside [a-z0-9 ] with a space
    4. Collapse whitespace and trim

    Examples:
        "  José  O'Brien " -> "jose o brien"
        "SMITH, John" -> "smith john"
    """
    if not name:
        return ""
    decomposed = unicodedata.normalize("NFKD", name.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(_NON_ALNUM.sub(" ", stripped).split())


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute costs."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + (ca != cb),  # substitution
                )
            )
        previous = current
    return previous[-1]


def edit_threshold(query_length: int) -> int:
    """Maximum edit distance tolerated for a normalized query of this length."""
    if query_length <= 5:
        return 1
    if query_length <= 8:
        return 2
    return 3


def _tokens_contained(candidate: str, query: str) -> bool:
    candidate_tokens = candidate.split()
    query_tokens = query.split()
    if not query_tokens or not candidate_tokens:
        return False
    return all(any(q in c for c in candidate_tokens) for q in query_tokens)


def name_matches(candidate: str | None, query: str | None) -> bool:
    """Decide whether a candidate name matches a search name.

    On normalized forms, in order:
    1. either string contains the other
    2. every query token is contained in some candidate token (any order)
    3. edit distance within edit_threshold(len(query))

    Examples:
        ("Jonathan Smith", "jon smith") -> True (token containment)
        ("Amy Lee", "Emy Lee") -> True (distance 1)
        ("Amy Lee", "Zzz Qqq") -> False
    """
    normalized_candidate = normalize_name(candidate)
    normalized_query = normalize_name(query)
    if not normalized_candidate or not normalized_query:
        return False

    if normalized_query in normalized_candidate or normalized_candidate in normalized_query:
        return True

    if _tokens_contained(normalized_candidate, normalized_query):
        return True

    distance = edit_distance(normalized_candidate, normalized_query)
    return distance <= edit_threshold(len(normalized_query))
