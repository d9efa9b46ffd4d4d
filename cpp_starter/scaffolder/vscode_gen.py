"""VS Code integration file generation.

Uses the ``vscode/tasks.json.j2`` and ``vscode/c_cpp_properties.json.j2``
templates to produce the build-task descriptor and the C/C++ extension
properties for the generated project. These files are downstream artifacts
only; cpp-starter never reads them back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from cpp_starter.resolver.models import Platform

from .templates import TemplateRenderer

INCLUDE_PATHS: tuple[str, ...] = (
    "${workspaceFolder}/include",
    "${workspaceFolder}/include/**",
    "${workspaceFolder}/**",
)


def editor_context(
    *,
    compiler: str,
    cpp_standard: str,
    platform: Platform,
) -> dict[str, Any]:
    """Template variables shared by both VS Code files."""
    is_windows = platform is Platform.WINDOWS
    return {
        "build_command": "cpp-starter build",
        "run_command": "cpp-starter run",
        "configuration_name": "Windows" if is_windows else "Linux",
        "include_paths": list(INCLUDE_PATHS),
        "compiler": compiler,
        "c_standard": "c11",
        "cpp_standard": cpp_standard,
        "intellisense_mode": "gcc-x64" if is_windows else "linux-gcc-x64",
    }


class EditorConfigGenerator:
    """Generates ``.vscode/tasks.json`` and ``.vscode/c_cpp_properties.json``."""

    # Template name -> output file name
    _FILES: dict[str, str] = {
        "vscode/tasks.json.j2": "tasks.json",
        "vscode/c_cpp_properties.json.j2": "c_cpp_properties.json",
    }

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(
        self,
        vscode_dir: Path,
        context: dict[str, Any],
    ) -> dict[str, Path]:
        """Render both editor files into *vscode_dir*.

        Args:
            vscode_dir: The project's ``.vscode/`` directory.
            context: Rendering context, usually from ``editor_context``.

        Returns:
            Mapping of output file name to written path.
        """
        result: dict[str, Path] = {}
        for template_name, output_name in self._FILES.items():
            path = await self.renderer.render_to_file(
                template_name, vscode_dir / output_name, context
            )
            result[output_name] = path
        return result
