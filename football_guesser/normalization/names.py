"""Team name canonicalization and lookup search terms."""

from typing import Iterable, List, Mapping, Optional

from .aliases import TEAM_SEARCH_ALIASES

# Trailing legal-form tokens stripped from raw names. " United FC" loses its
# " FC" like any other name and ends up as " United".
LEGAL_FORM_SUFFIXES = (" FC", " AFC", " CF")

# Short organisational prefixes tried as a last resort ("FC Porto" -> "Porto")
ORGANISATION_PREFIXES = ("FC ", "CF ", "AC ", "AS ", "SC ", "US ", "RC ")

# Single-token search terms this short return unrelated teams
MIN_TOKEN_TERM_LENGTH = 4


def normalize_team_name(raw_name: Optional[str]) -> str:
    """Returns the canonical display form of a raw team name.

    Strips trailing legal-form tokens until none is left, so the result is a
    fixed point: ``normalize_team_name(normalize_team_name(x)) == normalize_team_name(x)``.
    """
    if not isinstance(raw_name, str):
        return ""
    name = raw_name.strip()
    stripped = True
    while stripped:
        stripped = False
        for suffix in LEGAL_FORM_SUFFIXES:
            if name.endswith(suffix) and len(name) > len(suffix):
                name = name[: -len(suffix)].rstrip()
                stripped = True
    return name


def _dedupe(terms: Iterable[Optional[str]]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for term in terms:
        if not term or term in seen:
            continue
        seen.add(term)
        ordered.append(term)
    return ordered


def strip_organisation_prefix(name: str) -> str:
    for prefix in ORGANISATION_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):].strip()
    return name


def generate_search_terms(
    canonical_name: str, alias_table: Optional[Mapping[str, str]] = None
) -> List[str]:
    """Candidate search terms for a team, most likely match first.

    Order: alias table entry, the full name, the first and the last word
    (each only when it differs from the name and is longer than three
    characters), the name without a leading organisational prefix.
    """
    aliases = TEAM_SEARCH_ALIASES if alias_table is None else alias_table
    name = canonical_name.strip()
    if not name:
        return []

    tokens = name.split()
    first_word = tokens[0] if tokens else ""
    last_word = tokens[-1] if tokens else ""
    without_prefix = strip_organisation_prefix(name)

    return _dedupe(
        [
            aliases.get(name),
            name,
            first_word if first_word != name and len(first_word) >= MIN_TOKEN_TERM_LENGTH else None,
            last_word if last_word != name and len(last_word) >= MIN_TOKEN_TERM_LENGTH else None,
            without_prefix if without_prefix != name else None,
        ]
    )
