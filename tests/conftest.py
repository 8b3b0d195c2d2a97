"""Shared fixtures for projinit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests

from projinit.config import ProjectConfig

TEMPLATE_MODULE = "github.com/your-org/go-template-project"

TEMPLATE_FILES: dict[str, str] = {
    "go.mod": f"module {TEMPLATE_MODULE}\n\ngo 1.22\n\nrequire github.com/stretchr/testify v1.9.0\n",
    "Makefile": "build:\n\tgo build ./...\n",
    "cmd/cli/main.go": (
        "package main\n\n"
        f'import "{TEMPLATE_MODULE}/internal/app"\n\n'
        "func main() { app.Run() }\n"
    ),
    "cmd/server/main.go": (
        "package main\n\n"
        "import (\n"
        f'\t"{TEMPLATE_MODULE}/internal/config"\n'
        f'\t"{TEMPLATE_MODULE}/internal/handlers"\n'
        ")\n"
    ),
    "cmd/worker/main.go": "package main\n\nfunc main() {}\n",
    "internal/app/app.go": f"// Package app is part of {TEMPLATE_MODULE}.\npackage app\n\nfunc Run() {{}}\n",
    "internal/config/config.go": "package config\n",
    "internal/handlers/health.go": "package handlers\n",
    "docs/content/_index.md": "---\ntitle: go-template-project\n---\n",
    "docs/content/docs/getting-started.md": "# Getting started with go-template-project\n",
    "tests/e2e/common.go": f'package e2e\n\nconst module = "{TEMPLATE_MODULE}"\n',
    "tests/e2e/init_e2e_test.go": "package e2e\n",
    "tests/e2e/cli_e2e_test.go": "package e2e\n",
    "tests/e2e/server_e2e_test.go": "package e2e\n",
    "tests/e2e/worker_e2e_test.go": "package e2e\n",
    "README.md": "# go-template-project\n",
}


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A miniature clone of the Go starter template."""
    root = tmp_path / "example-project"
    for rel, content in TEMPLATE_FILES.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def example_config() -> ProjectConfig:
    return ProjectConfig(
        project_name="example-project",
        module_path="github.com/example/example-project",
        description="An example project",
        author_name="Example User",
        author_email="user@example.com",
        license="MIT",
        enable_cli=True,
        enable_server=False,
        enable_worker=False,
        enable_docs=True,
        enable_e2e_tests=False,
    )


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    """Map of relative path to bytes for every file under a root."""
    return _snapshot


@pytest.fixture(autouse=True)
def _no_network(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_request(*args: object, **kwargs: object) -> None:
        raise AssertionError("unexpected network access")

    monkeypatch.setattr(requests, "request", fail_request)


@pytest.fixture
def isolated_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's git config (hooks, signing, identity) out of tests."""
    empty = tmp_path / "gitconfig"
    empty.write_text("", encoding="utf-8")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(empty))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)
