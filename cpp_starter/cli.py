"""cpp-starter command line.

Commands:

    init   -- scaffold a project and write its config record
    build  -- compile the project from its stored config
    run    -- launch the built executable
    plan   -- show the resolved build plan without compiling

Usage::

    cpp-starter init --name demo --libs glfw,glad,glm --yes
    cpp-starter build
    cpp-starter run --build
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Prompt

from cpp_starter.builder import ExecutableNotFound, ProjectBuilder, SubprocessFailure
from cpp_starter.config import ConfigError, ConfigNotFound, Settings
from cpp_starter.resolver import CATALOG, Platform
from cpp_starter.scaffolder import InitRequest, ProjectGenerator
from cpp_starter.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def collect_init_request(args: argparse.Namespace, settings: Settings) -> InitRequest:
    """Build an ``InitRequest`` from flags, prompting for anything missing.

    With ``--yes`` no prompt is shown and settings defaults fill the gaps.
    """
    questions = (
        ("name", "Project name", settings.project_name),
        ("std", "C++ standard", settings.cpp_standard),
        ("compiler", "Compiler command", settings.compiler),
        ("libs", "Libraries (comma separated)", settings.libs),
    )
    answers: dict[str, str] = {}
    for attr, prompt, default in questions:
        value = getattr(args, attr)
        if value is None:
            if args.yes:
                value = default
            else:
                value = Prompt.ask(prompt, default=default, console=console)
        answers[attr] = value

    return InitRequest(
        project_name=answers["name"],
        cpp_standard=answers["std"],
        compiler=answers["compiler"],
        libs=answers["libs"],
    )


async def cmd_init(args: argparse.Namespace, settings: Settings, platform: Platform) -> int:
    request = collect_init_request(args, settings)
    generator = ProjectGenerator(
        request, platform, config_filename=settings.config_filename
    )
    result = await generator.generate(args.project_dir)

    for notice in result.selection.notices:
        print_warning(notice)
    for hint in result.hints:
        console.print(hint, markup=False)

    unknown = [lib for lib in result.config.libs if lib not in CATALOG]
    if unknown:
        print_warning(f"Unknown libraries kept without flags: {', '.join(unknown)}")

    print_success(f"\nProject created at: {escape(str(result.project_root))}")
    console.print(f"Executable: {result.config.output_name}", markup=False)
    return 0


# ---------------------------------------------------------------------------
# build / run / plan
# ---------------------------------------------------------------------------


def _builder(args: argparse.Namespace, settings: Settings, platform: Platform) -> ProjectBuilder:
    return ProjectBuilder(
        args.project_dir,
        platform,
        timeout=settings.build_timeout,
        config_filename=settings.config_filename,
    )


async def cmd_build(args: argparse.Namespace, settings: Settings, platform: Platform) -> int:
    await _builder(args, settings, platform).build()
    return 0


async def cmd_run(args: argparse.Namespace, settings: Settings, platform: Platform) -> int:
    return await _builder(args, settings, platform).run(rebuild=args.build)


async def cmd_plan(args: argparse.Namespace, settings: Settings, platform: Platform) -> int:
    resolution = _builder(args, settings, platform).resolve()
    plan = resolution.plan

    print_header(f"Build plan ({platform.value})")
    print_summary_table(
        {
            "Compiler": plan.compiler,
            "Standard": plan.standard,
            "Libraries": ", ".join(resolution.selection.libraries) or "-",
            "Sources": "\n".join(plan.sources) or "-",
            "Linker flags": " ".join(plan.linker_flags) or "-",
            "System flags": " ".join(plan.system_flags) or "-",
            "Output": plan.output_name,
        },
        title="Resolved configuration",
    )
    for notice in resolution.notices:
        print_warning(notice)
    for warning in resolution.warnings:
        print_warning(f"Warning: {warning}")
    console.print(plan.command, markup=False, highlight=False)
    return 0


COMMANDS = {
    "init": cmd_init,
    "build": cmd_build,
    "run": cmd_run,
    "plan": cmd_plan,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpp-starter",
        description="Generate C++ project folders with VS Code configuration and build/run commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cpp-starter init\n"
            "  cpp-starter init --name demo --libs glfw,glad,glm --yes\n"
            "  cpp-starter build\n"
            "  cpp-starter run --build\n"
        ),
    )
    parser.add_argument(
        "--project-dir", "-C",
        type=Path,
        default=Path.cwd(),
        help="Directory to operate in (default: current directory)",
    )
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=None,
        help="Override platform detection",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Initialize a new C++ project")
    init.add_argument("--name", default=None, help='Project name ("." for the project dir itself)')
    init.add_argument("--std", default=None, help="C++ standard, e.g. c++17")
    init.add_argument("--compiler", default=None, help="Compiler command, e.g. g++")
    init.add_argument("--libs", default=None, help="Comma-separated libraries")
    init.add_argument("--yes", "-y", action="store_true", help="Accept defaults without prompting")

    sub.add_parser("build", help="Build the C++ project")

    run = sub.add_parser("run", help="Run the C++ project")
    run.add_argument("--build", action="store_true", help="Rebuild before running")

    sub.add_parser("plan", help="Show the resolved build command without compiling")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``cpp-starter``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print_error(f"Error: invalid CPP_STARTER_* setting: {escape(str(exc))}")
        sys.exit(1)

    if args.platform:
        platform = Platform(args.platform)
    else:
        platform = settings.resolve_platform(sys.platform)

    handler = COMMANDS[args.command]
    try:
        code = asyncio.run(handler(args, settings, platform))
    except ConfigNotFound as exc:
        print_error(escape(str(exc)))
        sys.exit(1)
    except ConfigError as exc:
        print_error(escape(str(exc)))
        sys.exit(1)
    except ValidationError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)
    except ValueError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)
    except ExecutableNotFound as exc:
        print_error(f"Run failed: {escape(str(exc))}")
        sys.exit(1)
    except SubprocessFailure as exc:
        label = "Build failed" if args.command == "build" else "Command failed"
        print_error(f"{label}:")
        console.print(exc.stderr or str(exc), markup=False, highlight=False)
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
