"""Project initialisation orchestrator.

Takes an ``InitRequest`` and produces the project skeleton: the ``src/``,
``include/`` and ``lib/`` directories, a starter ``main.cpp``, per-library
include folders and generated implementation files, the VS Code files and
finally the persisted ``ProjectConfig``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from cpp_starter.config import (
    CONFIG_FILENAME,
    ProjectConfig,
    output_name_for,
    save_project_config,
)
from cpp_starter.resolver import CATALOG, Platform, ResolvedSelection, entries_for, resolve_selection
from cpp_starter.utils import ensure_dir, sanitize_name

from .templates import TemplateRenderer
from .vscode_gen import EditorConfigGenerator, editor_context

SKELETON_DIRS: tuple[str, ...] = ("src", "include", "lib", ".vscode")


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class InitRequest(BaseModel):
    """Answers collected by ``cpp-starter init``."""

    project_name: str = Field(..., min_length=1, description='Directory name, or "." for cwd')
    cpp_standard: str = Field(default="c++17", min_length=1)
    compiler: str = Field(default="g++", min_length=1)
    libs: str = Field(default="", description="Comma-separated library ids")


class ScaffoldResult(BaseModel):
    """What ``ProjectGenerator.generate`` produced."""

    project_root: Path
    config: ProjectConfig
    config_path: Path
    selection: ResolvedSelection
    hints: list[str] = Field(default_factory=list)
    written: list[Path] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates a C++ project skeleton for a library selection.

    The platform is passed in explicitly so generation never consults the
    running interpreter's environment.
    """

    def __init__(
        self,
        request: InitRequest,
        platform: Platform,
        *,
        config_filename: str = CONFIG_FILENAME,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.request = request
        self.project_name = request.project_name
        if self.project_name != ".":
            self.project_name = sanitize_name(self.project_name)
            if not self.project_name:
                raise ValueError(
                    f"Project name {request.project_name!r} has no usable characters"
                )
        self.platform = platform
        self.config_filename = config_filename
        self.renderer = renderer or TemplateRenderer()
        self.editor_gen = EditorConfigGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def project_root_for(self, base_dir: str | Path) -> Path:
        """``base_dir`` itself for ``"."``, else ``base_dir / project_name``.

        The name is sanitised first, so ``"My Game"`` becomes ``My_Game``.
        """
        if self.project_name == ".":
            return Path(base_dir)
        return Path(base_dir) / self.project_name

    async def generate(self, base_dir: str | Path) -> ScaffoldResult:
        """Generate the project and persist its configuration.

        Re-running on an existing project keeps ``src/main.cpp`` but rewrites
        the generated sources, the editor files and the config record.

        Args:
            base_dir: Directory the command was invoked from.

        Returns:
            A ``ScaffoldResult`` describing everything written.
        """
        project_root = self.project_root_for(base_dir)
        selection = resolve_selection(self.request.libs)
        written: list[Path] = []

        # 1. Skeleton and per-library include folders
        await asyncio.to_thread(self._create_directories, project_root, selection)

        context = self._build_context(project_root)

        # 2. Starter translation unit, never overwritten
        main_cpp = project_root / "src" / "main.cpp"
        if not main_cpp.exists():
            written.append(
                await self.renderer.render_to_file("main.cpp.j2", main_cpp, context)
            )

        # 3. Implementation files for single-header libraries
        hints: list[str] = []
        for entry in entries_for(selection.libraries):
            if entry.source_template and entry.generated_source:
                written.append(
                    await self.renderer.render_to_file(
                        entry.source_template,
                        project_root / entry.generated_source,
                        context,
                    )
                )
            if entry.setup_hint:
                hints.append(entry.setup_hint)

        # 4. Editor integration
        editor_files = await self.editor_gen.generate(project_root / ".vscode", context)
        written.extend(editor_files.values())

        # 5. Durable config record
        config = ProjectConfig(
            compiler=self.request.compiler,
            cpp_standard=self.request.cpp_standard,
            libs=selection.libraries,
            output_name=output_name_for(context["project_name"], self.platform),
        )
        config_file = await asyncio.to_thread(
            save_project_config, config, project_root, self.config_filename
        )

        return ScaffoldResult(
            project_root=project_root,
            config=config,
            config_path=config_file,
            selection=selection,
            hints=hints,
            written=written,
        )

    # -- Internal helpers --------------------------------------------------

    def _create_directories(self, project_root: Path, selection: ResolvedSelection) -> None:
        for name in SKELETON_DIRS:
            ensure_dir(project_root / name)
        for entry in entries_for(selection.libraries, CATALOG):
            for rel in entry.scaffold_dirs:
                ensure_dir(project_root / rel)

    def _build_context(self, project_root: Path) -> dict[str, Any]:
        name = self.project_name
        if name == ".":
            name = sanitize_name(project_root.resolve().name) or "cpp_project"
        return {
            "project_name": name,
            "greeting": "Hello C++!",
            **editor_context(
                compiler=self.request.compiler,
                cpp_standard=self.request.cpp_standard,
                platform=self.platform,
            ),
        }
