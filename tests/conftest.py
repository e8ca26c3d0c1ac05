"""Shared test fixtures."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def video_path(tmp_path: Path) -> Path:
    """A placeholder input file; ffmpeg itself is always mocked."""
    path = tmp_path / "video.mp4"
    path.write_bytes(b"original")
    return path
