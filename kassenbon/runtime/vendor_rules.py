"""Runtime loader for the vendor registry."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from kassenbon.receipt.vendors import VendorRegistry, build_vendor_registry
from kassenbon.runtime.logging import get_logger
from kassenbon.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def _default_layer_files(default_path: Path, project_path: Path) -> list[Path]:
    """Built-in defaults first, then the project override (deduplicated)."""
    seen_paths: set[Path] = set()
    files: list[Path] = []
    for candidate in (default_path, project_path):
        resolved = candidate.resolve()
        if resolved in seen_paths:
            continue
        seen_paths.add(resolved)
        files.append(candidate)
    return files


@lru_cache(maxsize=8)
def load_vendor_registry(config_paths: tuple[str, ...] | None = None) -> VendorRegistry:
    """
    Load the vendor registry from TOML layers.

    Args:
        config_paths: Explicit layer files, applied in order. If None, the
            built-in default_vendors.toml is extended by config/vendors.toml.
    """
    if config_paths is None:
        p = get_paths()
        files = _default_layer_files(p.default_vendor_rules, p.vendor_rules)
    else:
        files = [Path(path) for path in config_paths]

    registry = build_vendor_registry(tuple(_load_toml(path) for path in files))
    logger.debug("Loaded %d vendors from %s", len(registry.vendors), ", ".join(str(path) for path in files))
    return registry
