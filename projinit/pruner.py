"""
pruner.py

Responsibility: delete the parts of the template the user did not select.

Every removal ignores missing targets, so pruning twice is the same as
pruning once. Flags are independent of each other.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from projinit import log
from projinit.config import ProjectConfig
from projinit.vcs import Outcome, StepOutcome

COMPONENT_DIRECTORIES: dict[str, tuple[str, ...]] = {
    "enable_cli": ("cmd/cli",),
    "enable_server": ("cmd/server", "internal/handlers"),
    "enable_worker": ("cmd/worker",),
    "enable_docs": ("docs",),
    # All-or-nothing: disabling e2e tests drops the whole tests/ tree.
    "enable_e2e_tests": ("tests",),
}

# Only useful for testing the initializer itself.
TEMPLATE_ARTIFACTS: tuple[str, ...] = ("tests/e2e/init_e2e_test.go",)

# The template's own initializer; meaningless once the clone is customized.
INITIALIZER_SCRIPT = "scripts/init.go"

COMPONENT_E2E_TESTS: dict[str, str] = {
    "enable_cli": "tests/e2e/cli_e2e_test.go",
    "enable_server": "tests/e2e/server_e2e_test.go",
    "enable_worker": "tests/e2e/worker_e2e_test.go",
}


def _remove_tree(path: Path) -> bool:
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if not path.exists():
        return False
    shutil.rmtree(path)
    return True


def _remove_file(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def prune_components(root: str | Path, config: ProjectConfig) -> list[str]:
    """
    Remove the directories of every disabled component.

    Returns the relative paths that were actually removed.
    """
    root_dir = Path(root)
    removed: list[str] = []
    for flag, directories in COMPONENT_DIRECTORIES.items():
        if getattr(config, flag):
            continue
        for rel in directories:
            if _remove_tree(root_dir / rel):
                log.info(f"🗑️  Removed {rel}")
                removed.append(rel)
    return removed


def remove_template_artifacts(root: str | Path, config: ProjectConfig) -> list[str]:
    """
    Remove files that only make sense inside the template repository.

    When e2e tests are kept, the e2e test of every disabled component goes too.
    """
    root_dir = Path(root)
    targets = list(TEMPLATE_ARTIFACTS)
    if config.enable_e2e_tests:
        targets.extend(rel for flag, rel in COMPONENT_E2E_TESTS.items() if not getattr(config, flag))

    removed: list[str] = []
    for rel in targets:
        if _remove_file(root_dir / rel):
            log.info(f"🗑️  Removed {rel}")
            removed.append(rel)
    return removed


def remove_initializer_script(root: str | Path) -> StepOutcome:
    """
    Delete the template's initializer script, then its directory if that is now empty.

    Best-effort: failures come back as a FAILED outcome.
    """
    script = Path(root) / INITIALIZER_SCRIPT
    try:
        removed = _remove_file(script)
    except OSError as e:
        return StepOutcome("init-script", Outcome.FAILED, f"could not remove {INITIALIZER_SCRIPT}: {e}")
    if removed:
        log.info(f"🗑️  Removed {INITIALIZER_SCRIPT}")

    scripts_dir = script.parent
    try:
        if scripts_dir.is_dir() and not any(scripts_dir.iterdir()):
            scripts_dir.rmdir()
            log.info(f"🗑️  Removed empty {scripts_dir.name}/")
    except OSError as e:
        log.debug(f"Could not remove {scripts_dir.name}/: {e}")
    return StepOutcome("init-script", Outcome.SUCCESS, INITIALIZER_SCRIPT if removed else "")
