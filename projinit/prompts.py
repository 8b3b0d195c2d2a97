"""
prompts.py

Responsibility: gather a validated `ProjectConfig` from a line-oriented dialogue.

Each prompt is one line of input. An empty line, end of input, or a read
error all mean "use the default", so a short or closed stdin still yields a
complete configuration. The two structural fields are validated as soon as
they are entered; nothing on disk is touched here.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, TextIO

from projinit import config as cfg
from projinit.config import ProjectConfig
from projinit.vcs import read_git_identity

IdentityLookup = Callable[[str, str], str]


class Prompter:
    """Reads answers from `stdin` and writes questions to `stdout`."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout

    def say(self, message: str = "") -> None:
        self._out.write(message + "\n")
        self._out.flush()

    def _read(self, label: str) -> str | None:
        self._out.write(label)
        self._out.flush()
        try:
            line = self._in.readline()
        except (OSError, ValueError):
            return None
        if line == "":
            return None
        return line.strip()

    def ask(self, question: str, default: str) -> str:
        answer = self._read(f"{question} [{default}]: ")
        if not answer:
            return default
        return answer

    def ask_optional(self, question: str) -> str:
        return self._read(f"{question}: ") or ""

    def confirm(self, question: str, default: bool) -> bool:
        suffix = "Y/n" if default else "y/N"
        answer = self._read(f"{question} [{suffix}]: ")
        if not answer:
            return default
        return answer.lower() in {"y", "yes"}


def format_summary(config: ProjectConfig) -> list[str]:
    return [
        "📋 Configuration Summary:",
        f"  Project Name: {config.project_name}",
        f"  Module Path:  {config.module_path}",
        f"  Description:  {config.description}",
        f"  Author:       {config.author_name} <{config.author_email}>",
        f"  License:      {config.license}",
        (
            f"  Components:   CLI={config.enable_cli} Server={config.enable_server} "
            f"Worker={config.enable_worker} Docs={config.enable_docs} E2E={config.enable_e2e_tests}"
        ),
        f"  Git Remote:   {config.git_remote or '(none)'}",
    ]


def gather_project_config(
    root: str | Path,
    prompter: Prompter,
    *,
    identity: IdentityLookup | None = None,
) -> ProjectConfig | None:
    """
    Ask for every field of a `ProjectConfig`, then for confirmation.

    Returns None when the user declines; raises `ConfigError` on an invalid
    project name or module path without asking anything further.
    """
    lookup = identity or read_git_identity

    project_name = prompter.ask("Project name", Path(root).resolve().name)
    cfg.check_project_name(project_name)

    module_path = prompter.ask("Go module path", cfg.default_module_path(project_name))
    cfg.check_module_path(module_path)

    description = prompter.ask("Project description", cfg.DEFAULT_DESCRIPTION)
    author_name = prompter.ask("Author name", lookup("user.name", cfg.DEFAULT_AUTHOR))
    author_email = prompter.ask("Author email", lookup("user.email", cfg.DEFAULT_EMAIL))
    license_name = prompter.ask("License", cfg.DEFAULT_LICENSE)

    prompter.say()
    prompter.say("Components to include:")
    enable_cli = prompter.confirm("Include CLI application", True)
    enable_server = prompter.confirm("Include HTTP server", True)
    enable_worker = prompter.confirm("Include background worker", False)
    enable_docs = prompter.confirm("Include documentation setup", True)
    enable_e2e_tests = prompter.confirm("Include E2E tests", False)

    git_remote = prompter.ask_optional("Git remote URL (optional)")

    config = ProjectConfig(
        project_name=project_name,
        module_path=module_path,
        description=description,
        author_name=author_name,
        author_email=author_email,
        license=license_name,
        enable_cli=enable_cli,
        enable_server=enable_server,
        enable_worker=enable_worker,
        enable_docs=enable_docs,
        enable_e2e_tests=enable_e2e_tests,
        git_remote=git_remote,
    )

    prompter.say()
    for line in format_summary(config):
        prompter.say(line)
    prompter.say()
    if not prompter.confirm("Proceed with initialization?", False):
        return None
    return config
