# backend/remedy_table.py
# ------------------------------------------------------------
# Remedy table (the data the search page looks things up in)
#
# What this file does
#   • Holds the built-in symptom → remedies mapping (five entries).
#   • Wraps it in RemedyTable, a read-only mapping that keeps
#     definition order and stores remedies as tuples.
#   • Optionally loads a replacement table from a JSON file.
#
# The table is passed into the matcher and the Flask app rather than
# imported as a global, so tests can swap in their own.
# ------------------------------------------------------------

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Tuple, Union


class RemedyTableError(ValueError):
    """Raised when a remedy table is malformed."""


# Built-in dataset shown on the page
DEFAULT_REMEDIES = {
    "headache": [
        "Apply a paste of sandalwood powder to the forehead.",
        "Sip ginger tea (fresh ginger slices boiled in water) to reduce tension.",
        "Massage temples with a few drops of peppermint oil diluted in coconut oil.",
    ],
    "fever": [
        "Tulsi (holy basil) tea 2–3 times a day for immune support.",
        "Coriander seed water to promote sweating and temperature regulation.",
        "Light khichdi and warm fluids; avoid heavy, oily foods.",
    ],
    "cough": [
        "Licorice (yashtimadhu) tea to soothe the throat.",
        "Honey + ginger juice + pinch of black pepper twice daily.",
        "Steam inhalation with ajwain (carom) seeds.",
    ],
    "indigestion": [
        "Chew a small piece of fresh ginger with rock salt before meals.",
        "Warm cumin-coriander-fennel tea after meals.",
        "Buttermilk with roasted cumin powder and a pinch of rock salt.",
    ],
    "stress": [
        "Ashwagandha tea or capsules (as advised) to support resilience.",
        "Abhyanga (warm oil self-massage) before shower.",
        "Nadi shodhana (alternate nostril breathing) 5–10 minutes daily.",
    ],
}


class RemedyTable(Mapping):
    """
    Read-only symptom → remedies mapping.

    Keys are lowercase, non-blank and unique. Values are tuples, so the
    sequence handed out by the matcher is the stored one and cannot be
    changed by a caller.
    """

    def __init__(self, entries: Union[Mapping, Iterable[Tuple[str, Iterable[str]]]]):
        items = entries.items() if isinstance(entries, Mapping) else entries
        data = {}
        for key, remedies in items:
            if not isinstance(key, str) or not key.strip():
                raise RemedyTableError(f"symptom key must be a non-blank string: {key!r}")
            if key != key.strip().lower():
                raise RemedyTableError(f"symptom key must be lowercase and trimmed: {key!r}")
            if key in data:
                raise RemedyTableError(f"duplicate symptom key: {key!r}")
            if isinstance(remedies, str) or not isinstance(remedies, Iterable):
                raise RemedyTableError(f"remedies for {key!r} must be a list of strings")
            remedies = tuple(remedies)
            if not all(isinstance(r, str) for r in remedies):
                raise RemedyTableError(f"remedies for {key!r} must be a list of strings")
            data[key] = remedies
        self._data = MappingProxyType(data)

    def __getitem__(self, key: str) -> Tuple[str, ...]:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"RemedyTable({list(self._data)!r})"

    @property
    def symptoms(self) -> Tuple[str, ...]:
        """Symptom keys in definition order."""
        return tuple(self._data)


def default_table() -> RemedyTable:
    return RemedyTable(DEFAULT_REMEDIES)


def load_table(path: Union[str, Path]) -> RemedyTable:
    """Read a table from JSON shaped like {"symptom": ["remedy", ...], ...}."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RemedyTableError(f"could not read remedy table {path}: {e}") from e
    if not isinstance(raw, dict):
        raise RemedyTableError(f"remedy table {path} must be a JSON object")
    return RemedyTable(raw)
