"""
cli.py

Responsibility: CLI entrypoint for projinit.

High-level flow (single command):
1) Gather a `ProjectConfig` interactively, or load it from --answers
2) Stop with exit 0 if the user declines the confirmation
3) Run the mutation phase (`initializer.py`)
4) Print next steps tailored to the selected components

Exit codes: 0 on success or cancellation, 1 on configuration or
initialization failure, 2 on usage errors (argparse).
"""

from __future__ import annotations

import argparse
from pathlib import Path

from projinit import __version__, log
from projinit.config import ConfigError, ProjectConfig, load_answers
from projinit.initializer import InitError, InitOptions, initialize_project
from projinit.prompts import Prompter, gather_project_config


def next_steps(config: ProjectConfig) -> list[str]:
    steps = [
        "Review the generated files",
        "Run 'make setup' to install development tools",
        "Run 'make check' to verify everything works",
    ]
    if config.enable_docs:
        steps.append("Update documentation in docs/ to match your project")
    steps.append("Start coding!")
    return [f"  {i}. {step}" for i, step in enumerate(steps, start=1)]


def init_cmd(args: argparse.Namespace) -> int:
    root = Path(args.root).resolve()
    if not root.is_dir():
        log.error(f"Project root is not a directory: {root}")
        return 1

    log.info("🚀 Go Template Project Initialization", style="bold")
    log.info("=====================================")

    try:
        if args.answers:
            config: ProjectConfig | None = load_answers(args.answers, root=root)
        else:
            config = gather_project_config(root, Prompter())
    except ConfigError as e:
        log.error(f"Failed to gather project info: {e}")
        return 1

    if config is None:
        log.info("❌ Initialization cancelled")
        return 0

    options = InitOptions.from_env(
        skip_git=True if args.skip_git else None,
        fetch_license=True if args.fetch_license else None,
        install_hooks=False if args.no_hooks else None,
        commit_timeout=args.commit_timeout,
    )
    try:
        initialize_project(root, config, options)
    except InitError as e:
        log.error(f"Failed to initialize project: {e}")
        return 1

    log.success("\n✅ Project initialized successfully!")
    log.info("\nNext steps:")
    for line in next_steps(config):
        log.info(line)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="projinit", description="Initialize a freshly cloned Go starter template")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--root", default=".", help="Template instance to initialize (default: current directory)")
    p.add_argument("--answers", default=None, help="YAML file with answers; skips the interactive prompts")
    p.add_argument("--skip-git", action="store_true", help="Do not initialize a git repository (or set SKIP_GIT_INIT)")
    p.add_argument(
        "--fetch-license",
        action="store_true",
        help="Download the LICENSE text from the GitHub API (network access; or set PROJINIT_FETCH_LICENSE)",
    )
    p.add_argument("--no-hooks", action="store_true", help="Do not install pre-commit hooks")
    p.add_argument(
        "--commit-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the initial git commit (default: 10)",
    )
    p.add_argument("--log-level", default=None, help="debug, info, warning or error (or set PROJINIT_LOG_LEVEL)")
    p.set_defaults(func=init_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        log.set_level(args.log_level)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
