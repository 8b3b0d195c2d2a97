"""
vcs.py

Responsibility: every interaction with git and pre-commit.

- Read the user's global git identity (defaults for the prompts).
- Bootstrap a repository: init, identity, remote, stage, one commit.
- Install pre-commit hooks when the tool is available.

Both the bootstrap and the hook installer are advisory: they report a
`StepOutcome` instead of raising, so the caller decides how loud to be.
The commit runs under a deadline because commit hooks can hang.
"""

from __future__ import annotations

import os
import signal
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from projinit import log
from projinit.config import ProjectConfig

DEFAULT_COMMIT_TIMEOUT = 10.0


class VCSError(RuntimeError):
    pass


class CommitTimeoutError(VCSError):
    def __init__(self, seconds: float) -> None:
        super().__init__(f"git commit timed out after {seconds:g} seconds")
        self.seconds = seconds


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class StepOutcome:
    """Result of a best-effort step."""

    step: str
    status: Outcome
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status in (Outcome.SUCCESS, Outcome.SKIPPED)


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int | None
    output: str
    timed_out: bool = False


def _run(cmd: list[str], *, cwd: Path) -> str:
    """
    Run a subprocess command, raising a VCSError on failure.
    """
    try:
        proc = subprocess.run(
            cmd, cwd=str(cwd), check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
        )
    except FileNotFoundError as e:
        raise VCSError(f"Command not found: {cmd[0]}") from e
    except subprocess.CalledProcessError as e:
        raise VCSError(f"Command failed: {' '.join(cmd)}\n\n{e.stdout}") from e
    return proc.stdout


def read_git_identity(key: str, fallback: str) -> str:
    """
    Return `git config --global <key>`, or `fallback` when it cannot be read.
    """
    try:
        proc = subprocess.run(
            ["git", "config", "--global", key], stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, text=True
        )
    except OSError:
        return fallback
    value = proc.stdout.strip()
    if proc.returncode != 0 or not value:
        return fallback
    return value


def _terminate(proc: subprocess.Popen) -> None:
    # Commit hooks spawn their own children; take down the whole group.
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
        except OSError:
            pass
    proc.kill()


def run_with_deadline(argv: Sequence[str], *, cwd: Path, timeout: float) -> CommandResult:
    """
    Run `argv` and wait at most `timeout` seconds for it.

    On expiry the process is killed and reaped before returning, so no child
    outlives the call. Output collected before the kill is kept.
    """
    proc = subprocess.Popen(
        list(argv),
        cwd=str(cwd),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        start_new_session=(os.name == "posix"),
    )
    try:
        output, _ = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        _terminate(proc)
        output, _ = proc.communicate()
        return CommandResult(argv=tuple(argv), returncode=proc.returncode, output=output or "", timed_out=True)
    return CommandResult(argv=tuple(argv), returncode=proc.returncode, output=output or "")


def commit_message(config: ProjectConfig) -> str:
    return f"feat: initialize {config.project_name} project\n\nGenerated from go-template-project"


def _commit(root: Path, message: str, *, timeout: float) -> None:
    argv = ["git", "commit", "-m", message]
    try:
        result = run_with_deadline(argv, cwd=root, timeout=timeout)
    except FileNotFoundError as e:
        raise VCSError("Command not found: git") from e
    if result.timed_out:
        raise CommitTimeoutError(timeout)
    if result.returncode != 0:
        raise VCSError(f"failed to create initial commit (exit {result.returncode})\n\n{result.output}")


def _git_bootstrap(root: Path, config: ProjectConfig, *, commit_timeout: float) -> None:
    _run(["git", "init"], cwd=root)

    for key, value in (("user.name", config.author_name), ("user.email", config.author_email)):
        try:
            _run(["git", "config", key, value], cwd=root)
        except VCSError as e:
            log.warning(f"⚠ Failed to set git {key}: {e}")

    if config.git_remote:
        try:
            _run(["git", "remote", "add", "origin", config.git_remote], cwd=root)
        except VCSError as e:
            log.warning(f"⚠ Failed to add git remote: {e}")

    try:
        _run(["git", "add", "."], cwd=root)
    except VCSError as e:
        raise VCSError(f"failed to stage files: {e}") from e

    _commit(root, commit_message(config), timeout=commit_timeout)


def bootstrap_repository(
    root: str | Path,
    config: ProjectConfig,
    *,
    commit_timeout: float = DEFAULT_COMMIT_TIMEOUT,
) -> StepOutcome:
    """
    Initialize a git repository at `root` and create the initial commit.

    Returns TIMED_OUT when the commit outlives `commit_timeout`, FAILED for
    any other error, SUCCESS otherwise. Nothing is retried.
    """
    try:
        _git_bootstrap(Path(root), config, commit_timeout=commit_timeout)
    except CommitTimeoutError as e:
        return StepOutcome("git", Outcome.TIMED_OUT, str(e))
    except VCSError as e:
        return StepOutcome("git", Outcome.FAILED, str(e))
    return StepOutcome("git", Outcome.SUCCESS)


def install_precommit_hooks(root: str | Path) -> StepOutcome:
    """Install pre-commit hooks if the `pre-commit` tool is on PATH."""
    cwd = Path(root)
    try:
        _run(["pre-commit", "--version"], cwd=cwd)
    except VCSError:
        return StepOutcome("pre-commit", Outcome.FAILED, "pre-commit not installed")
    try:
        _run(["pre-commit", "install"], cwd=cwd)
    except VCSError as e:
        return StepOutcome("pre-commit", Outcome.FAILED, str(e))
    return StepOutcome("pre-commit", Outcome.SUCCESS)
