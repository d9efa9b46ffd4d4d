"""Build plan composition.

Combines the resolved selection, platform, compiler and language standard
into an ordered flag list. The order is significant: native linkers resolve
static-library symbols left to right, so linker and system flags always follow
catalog-definition order rather than the order the user typed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from .catalog import CATALOG, entries_for
from .models import BuildPlan, CatalogEntry, Platform, ResolvedSelection, ValidationReport
from .selection import resolve_selection
from .sources import collect_sources
from .validator import validate_selection

if TYPE_CHECKING:
    from cpp_starter.config import ProjectConfig

DEFAULT_INCLUDE_DIRS: tuple[str, ...] = ("include",)
DEFAULT_LIB_DIRS: tuple[str, ...] = ("lib",)


def _unique(flags: Iterable[str]) -> list[str]:
    """Keep the first occurrence of each flag."""
    return list(dict.fromkeys(flags))


def compose_build_plan(
    *,
    compiler: str,
    standard: str,
    selection: ResolvedSelection,
    platform: Platform,
    sources: Sequence[str],
    output_name: str,
    include_dirs: Sequence[str] = DEFAULT_INCLUDE_DIRS,
    lib_dirs: Sequence[str] = DEFAULT_LIB_DIRS,
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> BuildPlan:
    """Compose a ``BuildPlan``. Pure: no filesystem or environment access.

    Args:
        compiler: Compiler executable, e.g. ``g++``.
        standard: Language standard token, e.g. ``c++17``.
        selection: Conflict-adjusted library selection.
        platform: Platform whose flag tables apply.
        sources: Ordered source files, as returned by ``collect_sources``.
        output_name: Executable file name.
        include_dirs: Header search paths (``-I``).
        lib_dirs: Library search paths (``-L``).
        catalog: Library table to consult.

    Returns:
        The plan. ``plan.command`` is identical for identical inputs.
    """
    entries = entries_for(selection.libraries, catalog)

    linker_flags = _unique(
        flag for entry in entries for flag in entry.linker_flags_for(platform)
    )
    system_flags = _unique(
        flag for entry in entries for flag in entry.system_flags_for(platform)
    )

    return BuildPlan(
        compiler=compiler,
        standard=standard,
        sources=list(sources),
        include_dirs=list(include_dirs),
        lib_dirs=list(lib_dirs),
        linker_flags=linker_flags,
        system_flags=system_flags,
        output_name=output_name,
    )


class BuildResolution(BaseModel):
    """Everything a build invocation needs: plan plus advisory diagnostics."""

    selection: ResolvedSelection
    report: ValidationReport = Field(default_factory=ValidationReport)
    plan: BuildPlan

    @property
    def notices(self) -> list[str]:
        return self.selection.notices

    @property
    def warnings(self) -> list[str]:
        return [item.message() for item in self.report.missing]


def resolve_build(
    config: "ProjectConfig",
    project_root: str | Path,
    platform: Platform,
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> BuildResolution:
    """Run the full resolution pipeline for a stored project configuration.

    normalise -> resolve conflicts -> validate -> collect sources -> compose.
    """
    selection = resolve_selection(config.libs, catalog)
    report = validate_selection(selection, project_root, catalog)
    sources = collect_sources(project_root, selection, catalog)
    plan = compose_build_plan(
        compiler=config.compiler,
        standard=config.cpp_standard,
        selection=selection,
        platform=platform,
        sources=sources,
        output_name=config.output_name,
        catalog=catalog,
    )
    return BuildResolution(selection=selection, report=report, plan=plan)
