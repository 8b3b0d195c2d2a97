"""Tests for manifest and import-path rewriting."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from projinit.rewriter import TEMPLATE_MODULE_PATH, rewrite_import_paths, write_manifest

NEW = "github.com/example/example-project"


def test_write_manifest_drops_old_requirements(template_root: Path) -> None:
    path = write_manifest(template_root, NEW)

    content = path.read_text(encoding="utf-8")
    assert content.startswith(f"module {NEW}\n\ngo 1.23\n")
    assert "testify" not in content
    assert TEMPLATE_MODULE_PATH not in content


def test_write_manifest_creates_missing_file(tmp_path: Path) -> None:
    write_manifest(tmp_path, NEW, go_version="1.24")
    assert "go 1.24" in (tmp_path / "go.mod").read_text(encoding="utf-8")


def test_rewrites_every_occurrence(template_root: Path) -> None:
    changed = rewrite_import_paths(template_root, NEW)

    assert changed == [
        "cmd/cli/main.go",
        "cmd/server/main.go",
        "internal/app/app.go",
        "tests/e2e/common.go",
    ]
    server = (template_root / "cmd/server/main.go").read_text(encoding="utf-8")
    assert server.count(NEW) == 2
    assert TEMPLATE_MODULE_PATH not in server
    # Comments and string literals are rewritten as plain text.
    assert NEW in (template_root / "internal/app/app.go").read_text(encoding="utf-8")
    assert f'"{NEW}"' in (template_root / "tests/e2e/common.go").read_text(encoding="utf-8")


def test_only_go_files_are_touched(template_root: Path) -> None:
    readme = template_root / "notes.md"
    readme.write_text(TEMPLATE_MODULE_PATH, encoding="utf-8")
    gomod_before = (template_root / "go.mod").read_text(encoding="utf-8")

    rewrite_import_paths(template_root, NEW)

    assert readme.read_text(encoding="utf-8") == TEMPLATE_MODULE_PATH
    assert (template_root / "go.mod").read_text(encoding="utf-8") == gomod_before


def test_match_is_literal(tmp_path: Path) -> None:
    source = tmp_path / "x.go"
    lookalike = "github.com/your-org/go-template-projectX github_com/your-org/go-template-project"
    source.write_text(lookalike, encoding="utf-8")

    rewrite_import_paths(tmp_path, NEW)

    assert source.read_text(encoding="utf-8") == (
        f"{NEW}X github_com/your-org/go-template-project"
    )


def test_unchanged_files_are_not_written(template_root: Path) -> None:
    worker = template_root / "cmd/worker/main.go"
    os.utime(worker, (1_000_000, 1_000_000))

    rewrite_import_paths(template_root, NEW)

    assert worker.stat().st_mtime == 1_000_000


@pytest.mark.skipif(os.name != "posix", reason="file modes are POSIX-specific")
def test_file_mode_is_preserved(template_root: Path) -> None:
    target = template_root / "cmd/cli/main.go"
    target.chmod(0o750)

    rewrite_import_paths(template_root, NEW)

    assert stat.S_IMODE(target.stat().st_mode) == 0o750


def test_second_run_is_a_no_op(template_root: Path) -> None:
    rewrite_import_paths(template_root, NEW)
    assert rewrite_import_paths(template_root, NEW) == []
