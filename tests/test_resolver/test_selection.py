"""Tests for selection normalisation and conflict resolution.

Covers:
- normalize_selection: case folding, trimming, dedup, empty tokens
- resolve_conflicts: fixed winner, single notice, order independence
- Fixed-point behaviour with a larger custom catalog
- Unknown ids passing through untouched
"""

from __future__ import annotations

from itertools import permutations

import pytest

from cpp_starter.resolver.models import CatalogEntry
from cpp_starter.resolver.selection import (
    normalize_selection,
    resolve_conflicts,
    resolve_selection,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# normalize_selection
# ---------------------------------------------------------------------------


class TestNormalizeSelection:
    def test_case_fold_dedup_trim(self):
        assert normalize_selection("GLFW, glfw ,opengl") == ["glfw", "opengl"]

    def test_first_occurrence_wins(self):
        assert normalize_selection("glm,glad,GLM,stb") == ["glm", "glad", "stb"]

    def test_empty_tokens_dropped(self):
        assert normalize_selection(",glm,, ,stb,") == ["glm", "stb"]

    @pytest.mark.parametrize("raw", ["", None, " , ,"])
    def test_empty_input(self, raw):
        assert normalize_selection(raw) == []

    def test_accepts_token_list(self):
        assert normalize_selection([" GLAD", "glad", "Glm "]) == ["glad", "glm"]

    def test_unknown_tokens_preserved(self):
        assert normalize_selection("Vulkan,glm") == ["vulkan", "glm"]


# ---------------------------------------------------------------------------
# resolve_conflicts
# ---------------------------------------------------------------------------


class TestResolveConflicts:
    def test_no_conflict(self):
        result = resolve_conflicts(["glfw", "opengl"])
        assert result.libraries == ["glfw", "opengl"]
        assert result.notices == []

    def test_glad_wins_over_glew(self):
        result = resolve_conflicts(["glew", "glad"])
        assert result.libraries == ["glad"]
        assert len(result.notices) == 1
        assert "glew" in result.notices[0]
        assert "glad" in result.notices[0]

    def test_loser_alone_is_kept(self):
        result = resolve_conflicts(["glew"])
        assert result.libraries == ["glew"]
        assert result.notices == []

    def test_order_independent(self):
        base = ["glfw", "glew", "glad", "glm"]
        outcomes = {
            (frozenset(r.libraries), tuple(r.notices))
            for r in (resolve_conflicts(list(p)) for p in permutations(base))
        }
        assert len(outcomes) == 1
        libraries, notices = outcomes.pop()
        assert libraries == {"glfw", "glad", "glm"}
        assert len(notices) == 1

    def test_first_seen_order_kept(self):
        result = resolve_conflicts(["glm", "glew", "glfw", "glad"])
        assert result.libraries == ["glm", "glfw", "glad"]

    def test_unknown_ids_pass_through(self):
        result = resolve_conflicts(["vulkan", "glad", "glew"])
        assert result.libraries == ["vulkan", "glad"]

    def test_membership(self):
        result = resolve_conflicts(["glm"])
        assert "glm" in result
        assert "glad" not in result


class TestFixedPoint:
    @pytest.fixture
    def chained_catalog(self) -> dict[str, CatalogEntry]:
        # c beats a, a beats b; rules are listed a-first.
        return {
            "a": CatalogEntry(id="a", conflicts_with=("b",)),
            "b": CatalogEntry(id="b"),
            "c": CatalogEntry(id="c", conflicts_with=("a",)),
            "d": CatalogEntry(id="d", conflicts_with=("c",)),
        }

    def test_loops_until_no_rule_fires(self, chained_catalog):
        result = resolve_conflicts(["a", "b", "c", "d"], chained_catalog)
        assert result.libraries == ["d"]
        assert len(result.notices) == 3

    def test_removed_winner_still_removes_its_loser(self, chained_catalog):
        result = resolve_conflicts(["a", "c", "d"], chained_catalog)
        assert result.libraries == ["d"]
        assert result.notices == [
            "a removed because c takes precedence",
            "c removed because d takes precedence",
        ]

    def test_resolved_set_has_no_conflicting_pair(self, chained_catalog):
        result = resolve_conflicts(["b", "c", "a"], chained_catalog)
        for entry in chained_catalog.values():
            if entry.id in result:
                assert not any(loser in result for loser in entry.conflicts_with)

    def test_deterministic_across_orders(self, chained_catalog):
        results = {
            (frozenset(r.libraries), tuple(r.notices))
            for r in (
                resolve_conflicts(list(p), chained_catalog)
                for p in permutations(["a", "b", "c", "d"])
            )
        }
        assert len(results) == 1


class TestResolveSelection:
    def test_normalises_then_resolves(self):
        result = resolve_selection(" GLEW, glad ,GLAD, glm")
        assert result.libraries == ["glad", "glm"]
        assert len(result.notices) == 1
