# backend/remedy_matcher.py
# ------------------------------------------------------------
# Symptom matcher
# Flow: Exact  ➜  Substring  ➜  Fuzzy (token overlap)
#
# Each tier is a small pure function over (normalized query, table).
# The first tier that returns anything wins; later tiers are skipped.
# Results keep the table's remedy tuples as-is.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .remedy_table import RemedyTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemedyMatch:
    symptom: str
    remedies: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        return {"symptom": self.symptom, "remedies": list(self.remedies)}


def normalize_query(query: str) -> str:
    """Trim and lowercase; anything that isn't a string counts as empty."""
    if not isinstance(query, str):
        return ""
    return query.strip().lower()


def exact_tier(q: str, table: RemedyTable) -> List[RemedyMatch]:
    return [RemedyMatch(k, v) for k, v in table.items() if k == q]


def substring_tier(q: str, table: RemedyTable) -> List[RemedyMatch]:
    return [RemedyMatch(k, v) for k, v in table.items() if q in k]


def fuzzy_tier(q: str, table: RemedyTable) -> List[Tuple[RemedyMatch, int]]:
    """
    Score every entry by how many distinct query tokens appear inside its key.
    Zero scores are dropped; ties keep table order (sorted() is stable).
    """
    tokens = list(dict.fromkeys(q.split()))
    scored = []
    for k, v in table.items():
        score = sum(1 for t in tokens if t in k)
        if score > 0:
            scored.append((RemedyMatch(k, v), score))
    scored.sort(key=lambda x: x[1], reverse=True)
    return scored


def match_with_tier(query: str, table: RemedyTable) -> Tuple[str, List[RemedyMatch]]:
    """
    Run the tiers in order and report which one answered.

    Returns:
      (tier, results)
        - tier: "exact" | "substring" | "fuzzy" | "none"
        - results: list of RemedyMatch (empty when tier is "none")
    """
    q = normalize_query(query)
    if not q:
        return "none", []

    exact = exact_tier(q, table)
    if exact:
        logger.debug("Exact tier matched %r -> %s", q, [m.symptom for m in exact])
        return "exact", exact

    partial = substring_tier(q, table)
    if partial:
        logger.debug("Substring tier matched %r -> %s", q, [m.symptom for m in partial])
        return "substring", partial

    fuzzy = fuzzy_tier(q, table)
    if fuzzy:
        logger.debug("Fuzzy tier matched %r -> %s", q, [(m.symptom, s) for m, s in fuzzy])
        return "fuzzy", [m for m, _ in fuzzy]

    logger.debug("No tier matched %r", q)
    return "none", []


def find_remedies(query: str, table: RemedyTable) -> List[RemedyMatch]:
    """Ordered remedy matches for a free-text query (never raises)."""
    return match_with_tier(query, table)[1]
