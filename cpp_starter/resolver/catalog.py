"""Static catalog of supported libraries.

Every flag, required file and conflict rule the resolver knows about lives in
this table. Definition order matters: linker and system flags are emitted in
this order regardless of how the user listed the libraries, which keeps the
link line reproducible.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .models import CatalogEntry, ConflictRule, LibraryId, Platform

_WIN = Platform.WINDOWS
_POSIX = Platform.POSIX


_ENTRIES: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        id=LibraryId.GLFW.value,
        description="Window, context and input handling",
        linker_flags={_WIN: ("-lglfw3",), _POSIX: ("-lglfw3",)},
        system_flags={
            _WIN: ("-lopengl32", "-lgdi32"),
            _POSIX: ("-lGL", "-ldl", "-pthread"),
        },
    ),
    CatalogEntry(
        id=LibraryId.OPENGL.value,
        description="System OpenGL library",
        system_flags={_WIN: ("-lopengl32",), _POSIX: ("-lGL",)},
    ),
    CatalogEntry(
        id=LibraryId.GLAD.value,
        description="OpenGL function loader (generated sources)",
        system_flags={_POSIX: ("-ldl",)},
        artifacts=(
            "include/glad/glad.h",
            "include/KHR/khrplatform.h",
            "src/glad.c",
        ),
        conflicts_with=(LibraryId.GLEW.value,),
        conflict_reason="both load OpenGL function pointers",
        generated_source="src/glad.c",
        scaffold_dirs=("include/glad", "include/KHR"),
        setup_hint=(
            "GLAD folders created. Place glad.h, KHR/khrplatform.h "
            "and src/glad.c manually."
        ),
    ),
    CatalogEntry(
        id=LibraryId.GLEW.value,
        description="OpenGL extension wrangler",
        linker_flags={_WIN: ("-lglew32",), _POSIX: ("-lGLEW",)},
        artifacts=("include/GL/glew.h",),
        scaffold_dirs=("include/GL",),
    ),
    CatalogEntry(
        id=LibraryId.GLM.value,
        description="Header-only mathematics",
        artifacts=("include/glm/glm.hpp",),
        scaffold_dirs=("include/glm",),
        setup_hint="Place the GLM headers in include/glm/.",
    ),
    CatalogEntry(
        id=LibraryId.STB.value,
        description="Single-header image loading",
        artifacts=("include/stb/stb_image.h",),
        generated_source="src/stb_image_impl.cpp",
        source_template="stb_image_impl.cpp.j2",
        scaffold_dirs=("include/stb",),
        setup_hint="Place stb_image.h in include/stb/.",
    ),
    CatalogEntry(
        id=LibraryId.TINYOBJ.value,
        description="Single-header Wavefront OBJ loading",
        artifacts=("include/tinyobjloader/tiny_obj_loader.h",),
        generated_source="src/tinyobjloader_impl.cpp",
        source_template="tinyobjloader_impl.cpp.j2",
        scaffold_dirs=("include/tinyobjloader",),
        setup_hint="Place tiny_obj_loader.h in include/tinyobjloader/.",
    ),
)


CATALOG: Mapping[str, CatalogEntry] = MappingProxyType(
    {entry.id: entry for entry in _ENTRIES}
)


def conflict_rules(catalog: Mapping[str, CatalogEntry] = CATALOG) -> list[ConflictRule]:
    """Flatten every entry's ``conflicts_with`` into winner/loser rules."""
    rules: list[ConflictRule] = []
    for entry in catalog.values():
        for loser in entry.conflicts_with:
            rules.append(
                ConflictRule(winner=entry.id, loser=loser, reason=entry.conflict_reason)
            )
    return rules


def entries_for(
    libraries: list[str],
    catalog: Mapping[str, CatalogEntry] = CATALOG,
) -> list[CatalogEntry]:
    """Catalog entries for the known ids in *libraries*, in catalog order.

    Unknown ids are skipped silently.
    """
    selected = set(libraries)
    return [entry for lib_id, entry in catalog.items() if lib_id in selected]
