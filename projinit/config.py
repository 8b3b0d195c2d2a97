"""
config.py

Responsibility: the `ProjectConfig` model and everything needed to trust it.

- Validation of the two structural fields (project name, module path).
- Defaults shared by the interactive prompts and the answers-file loader.
- Loading a YAML answers file for non-interactive runs.

The mutation phase treats a validated `ProjectConfig` as read-only input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    pass


DEFAULT_DESCRIPTION = "A Go application built from go-template-project"
DEFAULT_AUTHOR = "Your Name"
DEFAULT_EMAIL = "your.email@example.com"
DEFAULT_LICENSE = "MIT"
DEFAULT_MODULE_HOST = "github.com/your-org"

_PROJECT_NAME_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")

_SEGMENT = r"[A-Za-z0-9](?:[A-Za-z0-9_.-]*[A-Za-z0-9])?"
_MODULE_PATH_RE = re.compile(rf"{_SEGMENT}/{_SEGMENT}/{_SEGMENT}")


def is_valid_project_name(name: str) -> bool:
    """
    Letters, digits and hyphens; must start and end with a letter or digit.

    >>> is_valid_project_name("example-project")
    True
    >>> is_valid_project_name("-abc")
    False
    """
    return bool(_PROJECT_NAME_RE.fullmatch(name))


def is_valid_module_path(path: str) -> bool:
    """
    Exactly three slash-delimited segments (host/org/repo).

    >>> is_valid_module_path("github.com/org/repo")
    True
    >>> is_valid_module_path("a/b")
    False
    """
    return bool(_MODULE_PATH_RE.fullmatch(path))


def default_module_path(project_name: str) -> str:
    return f"{DEFAULT_MODULE_HOST}/{project_name}"


@dataclass(frozen=True)
class ProjectConfig:
    """Everything the initializer needs to customize a template instance."""

    project_name: str
    module_path: str
    description: str = DEFAULT_DESCRIPTION
    author_name: str = DEFAULT_AUTHOR
    author_email: str = DEFAULT_EMAIL
    license: str = DEFAULT_LICENSE
    enable_cli: bool = True
    enable_server: bool = True
    enable_worker: bool = False
    enable_docs: bool = True
    enable_e2e_tests: bool = False
    git_remote: str = ""

    def validate(self) -> ProjectConfig:
        check_project_name(self.project_name)
        check_module_path(self.module_path)
        return self

    def template_context(self) -> dict[str, Any]:
        # Deterministic keys; templates should reference these.
        return {f.name: getattr(self, f.name) for f in fields(self)}


def check_project_name(name: str) -> None:
    if not is_valid_project_name(name):
        raise ConfigError(
            f"invalid project name {name!r}: must contain only letters, numbers, and hyphens "
            "and must start and end with a letter or number"
        )


def check_module_path(path: str) -> None:
    if not is_valid_module_path(path):
        raise ConfigError(f"invalid module path format: {path!r} (expected host/org/repo)")


_BOOL_FIELDS = ("enable_cli", "enable_server", "enable_worker", "enable_docs", "enable_e2e_tests")
_STR_FIELDS = ("project_name", "module_path", "description", "author_name", "author_email", "license", "git_remote")


def config_from_mapping(data: dict[str, Any], *, default_name: str) -> ProjectConfig:
    """
    Build and validate a `ProjectConfig` from a plain mapping.

    Missing keys take the same defaults the interactive prompts offer.
    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    known = set(_BOOL_FIELDS) | set(_STR_FIELDS)
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in _STR_FIELDS:
        if key not in data or data[key] is None:
            continue
        raw = data[key]
        if isinstance(raw, (dict, list, bool)):
            raise ConfigError(f"`{key}` must be a string.")
        values[key] = str(raw).strip()
    for key in _BOOL_FIELDS:
        if key not in data or data[key] is None:
            continue
        if not isinstance(data[key], bool):
            raise ConfigError(f"`{key}` must be true or false.")
        values[key] = data[key]

    project_name = values.pop("project_name", "") or default_name
    module_path = values.pop("module_path", "") or default_module_path(project_name)
    return ProjectConfig(project_name=project_name, module_path=module_path, **values).validate()


def load_answers(answers_path: str | Path, *, root: str | Path) -> ProjectConfig:
    """
    Parse a YAML answers file into a validated `ProjectConfig`.

    The default project name is the basename of `root`, as in interactive mode.
    """
    path = Path(answers_path)
    if not path.exists():
        raise ConfigError(f"Answers file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Answers file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Answers file must be a mapping/object at the top level.")
    return config_from_mapping(data, default_name=Path(root).resolve().name)
