"""
rewriter.py

Responsibility: make the on-disk template consistent with a new module path.

Rules:
- `go.mod` is overwritten with a fixed manifest; old requirements are dropped.
- Every `.go` file under the root gets a literal, all-occurrence replacement
  of the template module path. Comments and string literals are rewritten too.
- Files are only written when their content changed; file modes are kept.

This module intentionally does NOT parse Go code.
"""

from __future__ import annotations

import os
from pathlib import Path

from projinit import log

TEMPLATE_MODULE_PATH = "github.com/your-org/go-template-project"
MANIFEST_NAME = "go.mod"
SOURCE_SUFFIX = ".go"
DEFAULT_GO_VERSION = "1.23"

_MANIFEST_TEMPLATE = """module {module_path}

go {go_version}

require (
	// Runtime dependencies will be added as needed
)
"""


def write_manifest(root: str | Path, module_path: str, *, go_version: str = DEFAULT_GO_VERSION) -> Path:
    path = Path(root) / MANIFEST_NAME
    path.write_text(_MANIFEST_TEMPLATE.format(module_path=module_path, go_version=go_version), encoding="utf-8")
    log.debug(f"Wrote {MANIFEST_NAME} for {module_path}")
    return path


def _iter_source_files(root: Path) -> list[Path]:
    """
    All regular `.go` files under root, in deterministic order.
    """
    files: list[Path] = []
    for dirpath, _dirs, filenames in os.walk(root):
        base = Path(dirpath)
        for name in filenames:
            if not name.endswith(SOURCE_SUFFIX):
                continue
            path = base / name
            if path.is_file() and not path.is_symlink():
                files.append(path)
    files.sort(key=lambda p: str(p.relative_to(root)).replace(os.sep, "/"))
    return files


def rewrite_import_paths(
    root: str | Path,
    new_path: str,
    *,
    old_path: str = TEMPLATE_MODULE_PATH,
) -> list[str]:
    """
    Replace every occurrence of `old_path` with `new_path` in source files.

    Returns the relative paths (POSIX style) of the files that were rewritten.
    """
    root_dir = Path(root)
    changed: list[str] = []
    if old_path == new_path:
        return changed

    for path in _iter_source_files(root_dir):
        # Bytes in, bytes out: the match is exact and nothing else is touched.
        content = path.read_bytes()
        updated = content.replace(old_path.encode("utf-8"), new_path.encode("utf-8"))
        if updated == content:
            continue
        mode = path.stat().st_mode
        path.write_bytes(updated)
        os.chmod(path, mode)
        changed.append(str(path.relative_to(root_dir)).replace(os.sep, "/"))

    log.debug(f"Rewrote module path in {len(changed)} file(s)")
    return changed
