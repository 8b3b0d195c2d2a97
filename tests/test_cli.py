"""Tests for the projinit command line."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from projinit.cli import main, next_steps
from projinit.config import ProjectConfig


@pytest.fixture(autouse=True)
def _offline(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SKIP_GIT_INIT", "1")
    monkeypatch.delenv("PROJINIT_FETCH_LICENSE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr("projinit.prompts.read_git_identity", lambda key, fallback: fallback)


def feed_stdin(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("".join(f"{line}\n" for line in lines)))


def test_answers_file_run(template_root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    answers = tmp_path / "answers.yaml"
    answers.write_text(
        "project_name: example-project\n"
        "module_path: github.com/example/example-project\n"
        "enable_server: false\n",
        encoding="utf-8",
    )

    code = main(["--root", str(template_root), "--answers", str(answers), "--no-hooks"])

    assert code == 0
    assert "github.com/example/example-project" in (template_root / "go.mod").read_text(encoding="utf-8")
    assert not (template_root / "cmd/server").exists()
    out = capsys.readouterr().out
    assert "Project initialized successfully" in out
    assert "Skipping git initialization" in out
    assert "4. Update documentation in docs/" in out


def test_interactive_run(template_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    feed_stdin(
        monkeypatch,
        "example-project", "github.com/example/example-project", "", "", "", "",
        "y", "n", "n", "n", "", "", "y",
    )

    assert main(["--root", str(template_root), "--no-hooks"]) == 0

    assert not (template_root / "docs").exists()
    assert (template_root / "cmd/cli").exists()


def test_declined_confirmation_changes_nothing(
    template_root: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tree_snapshot
) -> None:
    before = tree_snapshot(template_root)
    feed_stdin(
        monkeypatch,
        "example-project", "github.com/example/example-project", "", "", "", "",
        "n", "n", "n", "n", "", "", "n",
    )

    assert main(["--root", str(template_root)]) == 0

    assert tree_snapshot(template_root) == before
    assert "Initialization cancelled" in capsys.readouterr().out


def test_invalid_project_name_exits_nonzero(
    template_root: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tree_snapshot
) -> None:
    before = tree_snapshot(template_root)
    feed_stdin(monkeypatch, "-invalid-name")

    assert main(["--root", str(template_root)]) == 1

    assert tree_snapshot(template_root) == before
    assert "invalid project name" in capsys.readouterr().err


def test_invalid_module_path_exits_nonzero(template_root: Path, monkeypatch: pytest.MonkeyPatch, tree_snapshot) -> None:
    before = tree_snapshot(template_root)
    feed_stdin(monkeypatch, "valid-project", "invalid-module-path-no-slash")

    assert main(["--root", str(template_root)]) == 1

    assert tree_snapshot(template_root) == before


def test_missing_root(tmp_path: Path) -> None:
    assert main(["--root", str(tmp_path / "nope")]) == 1


def test_next_steps_depend_on_docs() -> None:
    with_docs = ProjectConfig(project_name="a", module_path="x.y/a/b")
    without_docs = ProjectConfig(project_name="a", module_path="x.y/a/b", enable_docs=False)

    assert next_steps(with_docs)[-1] == "  5. Start coding!"
    assert next_steps(without_docs)[-1] == "  4. Start coding!"
