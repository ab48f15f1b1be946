"""Shared pytest fixtures for kassenbon tests."""

from __future__ import annotations

import pytest

from kassenbon.runtime import get_paths, load_category_table, load_vendor_registry, reset_paths


@pytest.fixture(autouse=True)
def _isolated_project_root(tmp_path, monkeypatch):
    """Point the project root at an empty directory so local config/ files never leak into tests."""
    monkeypatch.setenv("KASSENBON_ROOT", str(tmp_path))
    reset_paths()
    load_vendor_registry.cache_clear()
    load_category_table.cache_clear()
    yield
    reset_paths()
    load_vendor_registry.cache_clear()
    load_category_table.cache_clear()


@pytest.fixture
def registry():
    return load_vendor_registry()


@pytest.fixture
def category_table():
    return load_category_table()


@pytest.fixture
def project_config():
    """The config/ directory of the isolated project root."""
    config_dir = get_paths().config
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
