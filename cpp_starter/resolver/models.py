"""Pydantic v2 models for the library-selection resolver.

Defines the data passed between the resolver stages: the target platform,
catalog entries, the resolved selection, the preflight validation report and
the final build plan handed to the native toolchain.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Platform(str, Enum):
    """Target platform family. Flags never mix across the two."""
    WINDOWS = "windows"
    POSIX = "posix"

    @classmethod
    def detect(cls, sys_platform: str) -> "Platform":
        """Map a ``sys.platform`` string to a platform family."""
        if sys_platform.startswith(("win32", "cygwin")):
            return cls.WINDOWS
        return cls.POSIX


class LibraryId(str, Enum):
    """Library identifiers known to the catalog, in catalog order."""
    GLFW = "glfw"
    OPENGL = "opengl"
    GLAD = "glad"
    GLEW = "glew"
    GLM = "glm"
    STB = "stb"
    TINYOBJ = "tinyobj"


# ---------------------------------------------------------------------------
# Catalog records
# ---------------------------------------------------------------------------

class CatalogEntry(BaseModel):
    """Static description of one supported library.

    ``conflicts_with`` lists the ids this entry takes precedence over when
    both are selected.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Canonical lower-case library id")
    description: str = Field(default="")
    linker_flags: dict[Platform, tuple[str, ...]] = Field(default_factory=dict)
    system_flags: dict[Platform, tuple[str, ...]] = Field(default_factory=dict)
    artifacts: tuple[str, ...] = Field(
        default=(), description="Required files, relative to the project root"
    )
    conflicts_with: tuple[str, ...] = Field(default=())
    conflict_reason: str = Field(default="")
    generated_source: Optional[str] = Field(
        default=None, description="Extra translation unit compiled when present"
    )
    source_template: Optional[str] = Field(
        default=None, description="Template rendered to generated_source on init"
    )
    scaffold_dirs: tuple[str, ...] = Field(default=())
    setup_hint: str = Field(default="")

    def linker_flags_for(self, platform: Platform) -> tuple[str, ...]:
        return self.linker_flags.get(platform, ())

    def system_flags_for(self, platform: Platform) -> tuple[str, ...]:
        return self.system_flags.get(platform, ())


class ConflictRule(BaseModel):
    """A mutually exclusive pair with a fixed winner."""

    model_config = ConfigDict(frozen=True)

    winner: str
    loser: str
    reason: str = ""

    def notice(self) -> str:
        text = f"{self.loser} removed because {self.winner} takes precedence"
        if self.reason:
            text += f" ({self.reason})"
        return text


# ---------------------------------------------------------------------------
# Resolution results
# ---------------------------------------------------------------------------

class ResolvedSelection(BaseModel):
    """Deduplicated, conflict-adjusted library ids plus resolution notices."""

    libraries: list[str] = Field(default_factory=list)
    notices: list[str] = Field(default_factory=list)

    def __contains__(self, library: object) -> bool:
        return library in self.libraries


class MissingArtifact(BaseModel):
    """A required file for a selected library that is absent on disk."""

    library: str
    path: str

    def message(self) -> str:
        return f"{self.library}: missing {self.path}"


class ValidationReport(BaseModel):
    """Advisory preflight result. Never blocks plan composition."""

    missing: list[MissingArtifact] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when every required artifact was found."""
        return not self.missing

    def for_library(self, library: str) -> list[MissingArtifact]:
        return [item for item in self.missing if item.library == library]


class BuildPlan(BaseModel):
    """Ordered compiler inputs and the invocation string derived from them."""

    compiler: str
    standard: str
    sources: list[str] = Field(default_factory=list)
    include_dirs: list[str] = Field(default_factory=list)
    lib_dirs: list[str] = Field(default_factory=list)
    linker_flags: list[str] = Field(default_factory=list)
    system_flags: list[str] = Field(default_factory=list)
    output_name: str

    @property
    def flags(self) -> list[str]:
        """Arguments following the compiler, in link-safe order."""
        return [
            f"-std={self.standard}",
            *self.sources,
            *(f"-I{path}" for path in self.include_dirs),
            *(f"-L{path}" for path in self.lib_dirs),
            *self.linker_flags,
            *self.system_flags,
            "-o",
            self.output_name,
        ]

    @computed_field  # type: ignore[misc]
    @property
    def command(self) -> str:
        """The full command line joined by single spaces."""
        return " ".join([self.compiler, *self.flags])
