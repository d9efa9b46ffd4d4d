"""Native build and run process management.

Loads the stored ``ProjectConfig``, resolves a fresh ``BuildPlan`` against the
live project tree, hands the command to the compiler and launches the
resulting executable. The compiler and the program are opaque external
processes with a single pass/fail outcome: a non-zero exit raises
``SubprocessFailure`` carrying the captured error stream.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from cpp_starter.config import CONFIG_FILENAME, ProjectConfig, load_project_config
from cpp_starter.resolver import BuildResolution, Platform, resolve_build
from cpp_starter.utils import (
    console,
    format_duration,
    print_success,
    print_warning,
    run_command,
)

RUN_TIMEOUT = 24 * 3600


@dataclass
class BuildResult:
    """Outcome of a successful compiler invocation."""

    command: str
    output_path: Path
    duration_seconds: float = 0.0
    stdout: str = ""
    notices: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class SubprocessFailure(Exception):
    """An external process (compiler or program) exited non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = stderr or f"Command exited with status {returncode}: {command}"
        super().__init__(message)


class ExecutableNotFound(FileNotFoundError):
    """The configured executable has not been built yet."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Executable not found: {path}. Run `cpp-starter build` first."
        )


def run_command_for(output_name: str, platform: Platform) -> str:
    """Shell command that launches the built executable."""
    if platform is Platform.WINDOWS:
        return f'cmd.exe /c start cmd /k "{output_name} & pause"'
    return f"./{output_name}"


class ProjectBuilder:
    """Builds and runs one project directory.

    Attributes:
        project_root: Directory holding the config record and ``src/``.
        platform: Platform whose flag tables apply.
        timeout: Compiler timeout in seconds.
    """

    def __init__(
        self,
        project_root: str | Path,
        platform: Platform,
        *,
        timeout: int = 300,
        config_filename: str = CONFIG_FILENAME,
    ) -> None:
        self.project_root = Path(project_root)
        self.platform = platform
        self.timeout = timeout
        self.config_filename = config_filename

    def load_config(self) -> ProjectConfig:
        """Raises ``ConfigNotFound`` when ``init`` has not been run."""
        return load_project_config(self.project_root, self.config_filename)

    def resolve(self, config: ProjectConfig | None = None) -> BuildResolution:
        """Resolve the build plan without executing anything."""
        config = config or self.load_config()
        return resolve_build(config, self.project_root, self.platform)

    async def build(self) -> BuildResult:
        """Compile the project.

        Raises:
            ConfigNotFound: If the project has no config record.
            SubprocessFailure: If the compiler exits non-zero.
        """
        resolution = self.resolve()
        for notice in resolution.notices:
            print_warning(notice)
        for warning in resolution.warnings:
            print_warning(f"Warning: {warning}")
        if not resolution.plan.sources:
            print_warning("Warning: no source files found in src/")

        command = resolution.plan.command
        console.print(f"\nCompiling: {command}\n", markup=False, highlight=False)

        start = time.monotonic()
        returncode, stdout, stderr = await run_command(
            command, cwd=self.project_root, timeout=self.timeout
        )
        elapsed = time.monotonic() - start

        if returncode != 0:
            raise SubprocessFailure(command, returncode, stderr or stdout)

        if stdout:
            console.print(stdout, markup=False, highlight=False)
        output_path = self.project_root / resolution.plan.output_name
        print_success(
            f"Build succeeded in {format_duration(elapsed)}! "
            f"Executable: {resolution.plan.output_name}"
        )
        return BuildResult(
            command=command,
            output_path=output_path,
            duration_seconds=elapsed,
            stdout=stdout,
            notices=list(resolution.notices),
            warnings=resolution.warnings,
        )

    async def run(self, *, rebuild: bool = False) -> int:
        """Launch the built executable, optionally rebuilding first.

        The program inherits the terminal so interactive output is visible.

        Raises:
            ConfigNotFound: If the project has no config record.
            ExecutableNotFound: If the output file does not exist.
            SubprocessFailure: If the program exits non-zero.
        """
        if rebuild:
            await self.build()
        config = self.load_config()
        exe_path = self.project_root / config.output_name
        if not exe_path.exists():
            raise ExecutableNotFound(exe_path)

        console.print(f"Running {config.output_name}...\n", markup=False)
        command = run_command_for(config.output_name, self.platform)
        returncode, _, stderr = await run_command(
            command, cwd=self.project_root, timeout=RUN_TIMEOUT, capture=False
        )
        if returncode != 0:
            raise SubprocessFailure(command, returncode, stderr)
        return returncode
