"""
initializer.py

Responsibility: run the mutation phase for a confirmed `ProjectConfig`.

Required steps (fatal on error, no rollback):
1) Overwrite go.mod
2) Rewrite the module path in every .go file
3) Prune unselected components and template artifacts
4) Render docs pages and README.md

Best-effort steps (reported as `StepOutcome`, never fatal):
5) Remove the template's scripts/init.go (and scripts/ if empty)
6) LICENSE from the GitHub licenses API, only when asked for (network access)
7) git bootstrap with a time-bounded commit (skippable via SKIP_GIT_INIT)
8) pre-commit hook installation
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Mapping, TypeVar

from projinit import log
from projinit.config import ProjectConfig
from projinit.license_client import GitHubClient, write_license
from projinit.pruner import INITIALIZER_SCRIPT, prune_components, remove_initializer_script, remove_template_artifacts
from projinit.renderer import RenderError, render_docs, render_readme
from projinit.rewriter import rewrite_import_paths, write_manifest
from projinit.vcs import DEFAULT_COMMIT_TIMEOUT, Outcome, StepOutcome, bootstrap_repository, install_precommit_hooks

T = TypeVar("T")

_REMEDIATION = {
    "init-script": f"You can remove it manually: rm {INITIALIZER_SCRIPT}",
    "license": "You can add a LICENSE file manually later.",
    "git": "Continuing without git initialization; run git init / git commit manually.",
    "pre-commit": "You can set them up later with: pre-commit install",
}


class InitError(RuntimeError):
    pass


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "") != ""


@dataclass(frozen=True)
class InitOptions:
    skip_git: bool = False
    fetch_license: bool = False
    install_hooks: bool = True
    commit_timeout: float = DEFAULT_COMMIT_TIMEOUT
    github_token: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides: object) -> InitOptions:
        env = os.environ if env is None else env
        values: dict[str, object] = {
            "skip_git": _env_flag(env, "SKIP_GIT_INIT"),
            "fetch_license": _env_flag(env, "PROJINIT_FETCH_LICENSE"),
            "github_token": env.get("GITHUB_TOKEN") or None,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]


@dataclass
class InitReport:
    manifest: Path | None = None
    rewritten: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    rendered: list[Path] = field(default_factory=list)
    outcomes: list[StepOutcome] = field(default_factory=list)

    def outcome(self, step: str) -> StepOutcome | None:
        for item in self.outcomes:
            if item.step == step:
                return item
        return None


def _required(step: str, fn: Callable[[], T]) -> T:
    try:
        return fn()
    except (OSError, RenderError) as e:
        raise InitError(f"failed to {step}: {e}") from e


def _report(report: InitReport, outcome: StepOutcome) -> None:
    report.outcomes.append(outcome)
    if outcome.status is Outcome.SUCCESS:
        log.debug(f"{outcome.step}: ok")
    elif outcome.status is Outcome.SKIPPED:
        log.info(f"ℹ️  {outcome.detail}")
    else:
        log.warning(f"⚠️  {outcome.step} step failed: {outcome.detail}")
        log.warning(f"   {_REMEDIATION.get(outcome.step, 'Continuing.')}")


def initialize_project(
    root: str | Path,
    config: ProjectConfig,
    options: InitOptions | None = None,
    *,
    github: GitHubClient | None = None,
) -> InitReport:
    """
    Apply `config` to the template instance at `root`.

    Raises `InitError` when a required step fails; the tree is then left
    partially initialized. Best-effort failures only show up in the report.
    """
    opts = options or InitOptions()
    root_dir = Path(root)
    report = InitReport()

    report.manifest = _required("update go.mod", lambda: write_manifest(root_dir, config.module_path))
    report.rewritten = _required("update import paths", lambda: rewrite_import_paths(root_dir, config.module_path))
    report.removed = _required("remove unwanted components", lambda: prune_components(root_dir, config))

    log.info("🧹 Cleaning up template artifacts...")
    report.removed += _required("clean up template artifacts", lambda: remove_template_artifacts(root_dir, config))
    report.rendered = _required("update documentation", lambda: render_docs(root_dir, config))
    report.rendered.append(_required("generate README", lambda: render_readme(root_dir, config)))

    _report(report, remove_initializer_script(root_dir))

    if opts.fetch_license:
        client = github or GitHubClient(opts.github_token)
        _report(report, write_license(root_dir, config, client, year=str(date.today().year)))
    else:
        _report(report, StepOutcome("license", Outcome.SKIPPED, "Skipping LICENSE generation (enable with --fetch-license)"))

    if opts.skip_git:
        _report(report, StepOutcome("git", Outcome.SKIPPED, "Skipping git initialization (SKIP_GIT_INIT is set)"))
    else:
        _report(report, bootstrap_repository(root_dir, config, commit_timeout=opts.commit_timeout))

    if opts.install_hooks:
        _report(report, install_precommit_hooks(root_dir))

    return report
