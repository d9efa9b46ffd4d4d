"""Discovery of the translation units handed to the compiler."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from .catalog import CATALOG
from .models import CatalogEntry, ResolvedSelection

SOURCE_DIR = "src"

# Extensions compiled from the source directory. Plain ``.c`` files are only
# picked up when the catalog asks for them (e.g. glad.c).
CPP_EXTENSIONS: frozenset[str] = frozenset({".cpp", ".cc", ".cxx", ".c++"})


def collect_sources(
    project_root: str | Path,
    selection: ResolvedSelection,
    catalog: Mapping[str, CatalogEntry] = CATALOG,
    source_dir: str = SOURCE_DIR,
) -> list[str]:
    """Return the ordered list of source files relative to *project_root*.

    Files discovered in *source_dir* come first, sorted by name. Generated
    sources of selected libraries that exist on disk are appended afterwards
    in catalog order, skipping any already listed.
    """
    root = Path(project_root)
    src_path = root / source_dir

    sources: list[str] = []
    if src_path.is_dir():
        for path in sorted(src_path.iterdir(), key=lambda p: p.name):
            if path.is_file() and path.suffix.lower() in CPP_EXTENSIONS:
                sources.append(f"{source_dir}/{path.name}")

    for lib_id, entry in catalog.items():
        if lib_id not in selection or not entry.generated_source:
            continue
        rel = Path(entry.generated_source).as_posix()
        if rel not in sources and (root / rel).is_file():
            sources.append(rel)

    return sources
