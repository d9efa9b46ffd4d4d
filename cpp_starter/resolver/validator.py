"""Best-effort preflight check for library artifacts.

Reports required headers and sources that are missing from the project tree.
The report is advisory: nothing is removed from the selection and nothing is
raised, the compiler fails on its own if a header is truly absent.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .catalog import CATALOG
from .models import CatalogEntry, MissingArtifact, ResolvedSelection, ValidationReport


def validate_selection(
    selection: ResolvedSelection,
    project_root: str | Path,
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> ValidationReport:
    """Check every required artifact of the selected libraries.

    Args:
        selection: The conflict-adjusted selection.
        project_root: Directory that artifact paths are relative to.
        catalog: Library table to consult.

    Returns:
        A report holding one ``MissingArtifact`` per absent file, in selection
        order then artifact order.
    """
    root = Path(project_root)
    missing: list[MissingArtifact] = []

    for lib_id in selection.libraries:
        entry = catalog.get(lib_id)
        if entry is None:
            continue
        for rel_path in entry.artifacts:
            if not (root / rel_path).is_file():
                missing.append(MissingArtifact(library=lib_id, path=rel_path))

    return ValidationReport(missing=missing)
