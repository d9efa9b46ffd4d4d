"""Library-selection-to-build-plan resolver.

Pure, synchronous core of cpp-starter. Given a raw library string, a project
root and a platform, it produces the resolved selection, advisory validation
warnings, the ordered source list and the native build command.

Usage::

    from cpp_starter.resolver import Platform, resolve_selection, compose_build_plan

    selection = resolve_selection("GLFW, glad, glew")
    plan = compose_build_plan(
        compiler="g++",
        standard="c++17",
        selection=selection,
        platform=Platform.POSIX,
        sources=["src/main.cpp"],
        output_name="demo",
    )
    print(plan.command)
"""

from cpp_starter.resolver.catalog import CATALOG, conflict_rules, entries_for
from cpp_starter.resolver.composer import BuildResolution, compose_build_plan, resolve_build
from cpp_starter.resolver.models import (
    BuildPlan,
    CatalogEntry,
    ConflictRule,
    LibraryId,
    MissingArtifact,
    Platform,
    ResolvedSelection,
    ValidationReport,
)
from cpp_starter.resolver.selection import (
    normalize_selection,
    resolve_conflicts,
    resolve_selection,
)
from cpp_starter.resolver.sources import collect_sources
from cpp_starter.resolver.validator import validate_selection

__all__ = [
    "CATALOG",
    "BuildPlan",
    "BuildResolution",
    "CatalogEntry",
    "ConflictRule",
    "LibraryId",
    "MissingArtifact",
    "Platform",
    "ResolvedSelection",
    "ValidationReport",
    "collect_sources",
    "compose_build_plan",
    "conflict_rules",
    "entries_for",
    "normalize_selection",
    "resolve_build",
    "resolve_conflicts",
    "resolve_selection",
    "validate_selection",
]
