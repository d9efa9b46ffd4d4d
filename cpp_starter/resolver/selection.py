"""Selection normalisation and conflict resolution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .catalog import CATALOG, conflict_rules
from .models import CatalogEntry, ResolvedSelection


def normalize_selection(raw: str | Iterable[str] | None) -> list[str]:
    """Turn a comma-separated library string into canonical ids.

    Tokens are trimmed and lower-cased, empty tokens are dropped and
    duplicates are removed keeping the first occurrence::

        normalize_selection("GLFW, glfw ,opengl") -> ["glfw", "opengl"]

    An already-split iterable of tokens is accepted too (stored configs keep
    their libraries as a list).
    """
    if not raw:
        return []
    tokens = raw.split(",") if isinstance(raw, str) else raw

    seen: list[str] = []
    for token in tokens:
        lib_id = str(token).strip().lower()
        if lib_id and lib_id not in seen:
            seen.append(lib_id)
    return seen


def resolve_conflicts(
    libraries: Iterable[str],
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> ResolvedSelection:
    """Drop the losing side of every mutually exclusive pair.

    Rules are applied repeatedly until none fires. Notices follow catalog rule
    order, so the same input set always yields the same notices. A winner
    removes its loser even when a later rule removes the winner itself:
    with ``c`` beating ``a`` and ``d`` beating ``c``, ``{a, c, d}`` resolves
    to ``{d}``.
    """
    resolved = list(dict.fromkeys(libraries))
    notices: list[str] = []
    rules = conflict_rules(catalog)

    changed = True
    while changed:
        changed = False
        for rule in rules:
            if rule.winner in resolved and rule.loser in resolved:
                resolved.remove(rule.loser)
                notices.append(rule.notice())
                changed = True

    return ResolvedSelection(libraries=resolved, notices=notices)


def resolve_selection(
    raw: str | Iterable[str] | None,
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> ResolvedSelection:
    """Normalise *raw* and resolve its conflicts in one step."""
    return resolve_conflicts(normalize_selection(raw), catalog)
