"""CLI fixtures: isolated global config and ready-made snapshots."""

from __future__ import annotations

import pytest

from evo.core.schema import EvolutionMetadata
from evo.core.snapshot import EXPECTED_RESULTS_FILE, write_snapshot


@pytest.fixture(autouse=True)
def clean_config(monkeypatch, tmp_path):
    """Redirect the global config dir to a temp directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr("evo.utils.config.global_config_dir", lambda: config_dir)
    return config_dir


@pytest.fixture
def snapshot_dir(tmp_path, proposals_dir):
    """A snapshot without listing or expected results to compare against."""
    path = write_snapshot(tmp_path / "swift", proposals_dir, EvolutionMetadata())
    (path / EXPECTED_RESULTS_FILE).unlink()
    return path
