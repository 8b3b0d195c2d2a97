"""
projinit package

This package implements the initializer for a freshly cloned Go starter
template as a CLI-first utility.

Key responsibilities are split across modules:
- `config.py`: the `ProjectConfig` model, validation, YAML answers files
- `prompts.py`: interactive gathering of a `ProjectConfig`
- `rewriter.py`: module manifest and import-path rewriting
- `pruner.py`: removal of unselected components and template artifacts
- `renderer.py`: README / docs rendering from Jinja2 templates
- `vcs.py`: git bootstrap (time-bounded commit) and pre-commit hooks
- `license_client.py`: isolated GitHub REST API interaction (license texts)
- `initializer.py`: orchestration of the mutation phase
- `cli.py`: CLI entrypoint (gather -> initialize -> next steps)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
