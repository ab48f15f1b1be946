"""Centralized path management for kassenbon.

Built-in rule files ship inside the package; project-level overrides live
under ``<project root>/config``. The project root comes from the
KASSENBON_ROOT environment variable and defaults to the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT_ENV_VAR = "KASSENBON_ROOT"


def _get_project_root() -> Path:
    """Determine the project root directory."""
    configured = os.environ.get(PROJECT_ROOT_ENV_VAR)
    return Path(configured).expanduser() if configured else Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Package paths ---
    @property
    def src(self) -> Path:
        """kassenbon package directory."""
        return Path(__file__).resolve().parent.parent

    @property
    def default_rules(self) -> Path:
        """Built-in rule tables shipped with the package."""
        return self.src / "receipt" / "rules"

    @property
    def default_vendor_rules(self) -> Path:
        """Built-in vendor registry TOML file."""
        return self.default_rules / "default_vendors.toml"

    @property
    def default_category_rules(self) -> Path:
        """Built-in category table TOML file."""
        return self.default_rules / "default_categories.toml"

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def vendor_rules(self) -> Path:
        """Project-level vendor registry overrides."""
        return self.config / "vendors.toml"

    @property
    def category_rules(self) -> Path:
        """Project-level category table overrides."""
        return self.config / "categories.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached singleton so KASSENBON_ROOT is read again."""
    global _paths
    _paths = None
