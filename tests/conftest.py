"""Shared fixtures for the photo album tests."""

import pytest

from photo_album.core.models import AlbumConfig
from photo_album.testing.fakes import FakeImageTool, write_test_image


@pytest.fixture
def fast_config(tmp_path):
    """Album config writing into a temp dir, with short polling for tests."""
    return AlbumConfig(output_dir=str(tmp_path / "out"), poll_interval=0.01)


@pytest.fixture
def fake_tool():
    return FakeImageTool()


@pytest.fixture
def image_paths(tmp_path):
    """Factory writing real test images into a source directory."""
    source_dir = tmp_path / "src"
    source_dir.mkdir()

    def _make(*names):
        return [write_test_image(str(source_dir / name)) for name in names]

    return _make
