"""Shared pytest fixtures for the cpp-starter test suite.

Provides reusable fixtures for:
- Temporary project directories with the standard layout
- Helpers to drop library artifacts into a project
- Sample project configurations
- A mocked async subprocess runner
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from cpp_starter.config import ProjectConfig


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project with ``src/``, ``include/`` and ``lib/`` directories."""
    root = tmp_path / "demo"
    for name in ("src", "include", "lib"):
        (root / name).mkdir(parents=True)
    yield root


@pytest.fixture
def touch(project_root: Path) -> Callable[..., Path]:
    """Create files relative to the project root.

    Usage::

        touch("src/main.cpp", "include/glm/glm.hpp")
    """

    def _touch(*rel_paths: str, content: str = "") -> Path:
        last = project_root
        for rel in rel_paths:
            last = project_root / rel
            last.parent.mkdir(parents=True, exist_ok=True)
            last.write_text(content, encoding="utf-8")
        return last

    return _touch


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def glfw_config() -> ProjectConfig:
    """Config for a GLFW + OpenGL project, as ``init`` writes by default."""
    return ProjectConfig(
        compiler="g++",
        cpp_standard="c++17",
        libs=["opengl", "glfw"],
        output_name="demo",
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Config selecting every catalog library, both loaders included."""
    return ProjectConfig(
        compiler="clang++",
        cpp_standard="c++20",
        libs=["tinyobj", "stb", "glm", "glew", "glad", "opengl", "glfw"],
        output_name="demo",
    )


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_run_command():
    """Patch the builder's ``run_command`` with an ``AsyncMock``.

    Defaults to a successful ``(0, "", "")`` result; override
    ``return_value`` per test.
    """
    with patch(
        "cpp_starter.builder.runner.run_command",
        new_callable=AsyncMock,
        return_value=(0, "", ""),
    ) as mocked:
        yield mocked
