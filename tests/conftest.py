"""
Pytest configuration and fixtures for the merge sort tests.
"""
import numpy as np
import pytest
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_values(rng):
    """Random list of 1000 integers including negatives and duplicates."""
    return [int(v) for v in rng.integers(-500, 500, size=1000)]


@pytest.fixture
def random_array(rng):
    """Random int64 array of 5000 elements."""
    return rng.integers(-10**9, 10**9, size=5000, dtype=np.int64)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """SortSettings singleton backed by a settings file under tmp_path."""
    from models.sort_settings import SortSettings

    settings_dir = tmp_path / '.parsort'
    monkeypatch.setattr(SortSettings, 'SETTINGS_DIR', settings_dir)
    monkeypatch.setattr(SortSettings, 'SETTINGS_FILE', settings_dir / 'settings.json')
    monkeypatch.setattr(SortSettings, '_instance', None)
    yield SortSettings
    SortSettings._instance = None
