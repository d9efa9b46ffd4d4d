"""cpp-starter builder module.

Compiles a configured project with the native toolchain and runs the result.

Key classes:
    ProjectBuilder     - resolves the build plan and drives compiler / program
    BuildResult        - outcome of a successful compile
    SubprocessFailure  - compiler or program exited non-zero
    ExecutableNotFound - ``run`` before ``build``
"""

from .runner import (
    BuildResult,
    ExecutableNotFound,
    ProjectBuilder,
    SubprocessFailure,
    run_command_for,
)

__all__ = [
    "BuildResult",
    "ExecutableNotFound",
    "ProjectBuilder",
    "SubprocessFailure",
    "run_command_for",
]
