"""
renderer.py

Responsibility: render project-specific documents from the packaged templates.

Rules:
- Templates live in `projinit/templates/` and are rendered with Jinja2.
- Undefined variables are errors (StrictUndefined); template failures raise
  `RenderError`. I/O errors propagate unchanged. Both are fatal to the caller.
- README.md is always overwritten. Docs pages are only rewritten if they exist.

This module intentionally does NOT know about git, prompts, or CLI parsing.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from projinit import log
from projinit.config import ProjectConfig


class RenderError(RuntimeError):
    pass


README_TEMPLATE = "README.md.j2"

DOCS_PAGES: dict[str, str] = {
    "docs/content/_index.md": "docs_index.md.j2",
    "docs/content/docs/getting-started.md": "getting_started.md.j2",
}


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("projinit", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def build_context(config: ProjectConfig) -> dict[str, Any]:
    context = config.template_context()
    context["year"] = str(date.today().year)
    return context


def render_string(template_name: str, config: ProjectConfig) -> str:
    try:
        template = _environment().get_template(template_name)
        return template.render(**build_context(config))
    except TemplateError as e:
        raise RenderError(f"Failed rendering template: {template_name}: {e}") from e


def render_readme(root: str | Path, config: ProjectConfig) -> Path:
    """
    Write README.md for `config`, replacing any existing file.
    """
    out = render_string(README_TEMPLATE, config)
    path = Path(root) / "README.md"
    path.write_text(out, encoding="utf-8", newline="\n")
    log.info("📝 Generated README.md")
    return path


def render_docs(root: str | Path, config: ProjectConfig) -> list[Path]:
    """
    Rewrite the docs landing pages so they describe the new project.

    Does nothing when docs are disabled. Pages missing from the tree are skipped.
    """
    if not config.enable_docs:
        return []
    root_dir = Path(root)
    written: list[Path] = []
    for rel, template_name in DOCS_PAGES.items():
        path = root_dir / rel
        if not path.exists():
            continue
        path.write_text(render_string(template_name, config), encoding="utf-8", newline="\n")
        log.debug(f"Updated {rel}")
        written.append(path)
    return written
