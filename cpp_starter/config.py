"""cpp-starter configuration.

Two layers of typed configuration, both Pydantic v2 models:

* ``Settings`` -- tool-wide defaults (compiler, standard, libraries, build
  timeout), overridable through ``CPP_STARTER_*`` environment variables.
* ``ProjectConfig`` -- the durable per-project record written by ``init`` to
  ``.cpp-cli-config.json`` and read back by every ``build`` / ``run``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cpp_starter.resolver.models import Platform

CONFIG_FILENAME = ".cpp-cli-config.json"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigNotFound(FileNotFoundError):
    """Raised when a project has no configuration record (``init`` not run)."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"No project config found at {path}. Run `cpp-starter init` first."
        )


class ConfigError(ValueError):
    """Raised when a configuration record exists but cannot be used."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid project config {path}: {reason}")


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Defaults offered by ``init`` and knobs for ``build``."""

    project_name: str = Field(default="cpp_project")
    compiler: str = Field(default="g++")
    cpp_standard: str = Field(default="c++17")
    libs: str = Field(default="opengl,glfw", description="Comma-separated library ids")
    build_timeout: int = Field(default=300, ge=1, description="Compiler timeout in seconds")
    config_filename: str = Field(default=CONFIG_FILENAME)
    platform: Optional[Platform] = Field(
        default=None, description="Force a platform instead of detecting it"
    )

    def resolve_platform(self, sys_platform: str) -> Platform:
        """Return the forced platform, or detect one from *sys_platform*."""
        return self.platform or Platform.detect(sys_platform)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CPP_STARTER_PROJECT_NAME, CPP_STARTER_COMPILER, CPP_STARTER_STANDARD,
            CPP_STARTER_LIBS, CPP_STARTER_BUILD_TIMEOUT, CPP_STARTER_CONFIG_FILE,
            CPP_STARTER_PLATFORM.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CPP_STARTER_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["CPP_STARTER_PROJECT_NAME"]
        if os.environ.get("CPP_STARTER_COMPILER"):
            kwargs["compiler"] = os.environ["CPP_STARTER_COMPILER"]
        if os.environ.get("CPP_STARTER_STANDARD"):
            kwargs["cpp_standard"] = os.environ["CPP_STARTER_STANDARD"]
        if os.environ.get("CPP_STARTER_LIBS"):
            kwargs["libs"] = os.environ["CPP_STARTER_LIBS"]
        if os.environ.get("CPP_STARTER_BUILD_TIMEOUT"):
            kwargs["build_timeout"] = int(os.environ["CPP_STARTER_BUILD_TIMEOUT"])
        if os.environ.get("CPP_STARTER_CONFIG_FILE"):
            kwargs["config_filename"] = os.environ["CPP_STARTER_CONFIG_FILE"]
        if os.environ.get("CPP_STARTER_PLATFORM"):
            kwargs["platform"] = Platform(os.environ["CPP_STARTER_PLATFORM"].lower())
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Project record
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Per-project build settings.

    Serialised with camelCase keys (``cppStandard``, ``outputName``) so the
    file stays compatible with records written by earlier releases.
    """

    model_config = ConfigDict(populate_by_name=True)

    compiler: str = Field(..., min_length=1)
    cpp_standard: str = Field(..., alias="cppStandard", min_length=1)
    libs: list[str] = Field(default_factory=list)
    output_name: str = Field(..., alias="outputName", min_length=1)

    def to_json(self) -> str:
        return self.model_dump_json(indent=2, by_alias=True)


def output_name_for(project_name: str, platform: Platform) -> str:
    """Executable name for *project_name* on *platform*."""
    if platform is Platform.WINDOWS:
        return f"{project_name}.exe"
    return project_name


def config_path(project_root: str | Path, filename: str = CONFIG_FILENAME) -> Path:
    return Path(project_root) / filename


def save_project_config(
    config: ProjectConfig,
    project_root: str | Path,
    filename: str = CONFIG_FILENAME,
) -> Path:
    """Write *config* to the project root, replacing any existing record.

    Returns:
        The path that was written.
    """
    target = config_path(project_root, filename)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(config.to_json() + "\n", encoding="utf-8")
    return target


def load_project_config(
    project_root: str | Path,
    filename: str = CONFIG_FILENAME,
) -> ProjectConfig:
    """Read the project record.

    Raises:
        ConfigNotFound: If no record exists at the project root.
        ConfigError: If the record is unreadable or fails validation.
    """
    source = config_path(project_root, filename)
    if not source.is_file():
        raise ConfigNotFound(source)
    try:
        raw = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(source, str(exc)) from exc
    try:
        return ProjectConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(source, f"{exc.error_count()} validation error(s)") from exc
