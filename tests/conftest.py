"""Shared fixtures."""

import pytest

from imgrename.core import AppHome


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep every test away from the real config directory."""
    monkeypatch.setenv("IMGRENAME_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("IMGRENAME_MAX_NAME_LENGTH", raising=False)


@pytest.fixture
def home(tmp_path):
    return AppHome(tmp_path / "config")


@pytest.fixture
def photo_root(tmp_path):
    """Input directory with nested images and one non-image file."""
    root = tmp_path / "photos"
    (root / "2023" / "summer").mkdir(parents=True)
    files = [
        root / "vintage_photo_album_collection_12345.jpg",
        root / "MyPackBox.png",
        root / "2023" / "beach_final.JPG",
        root / "2023" / "summer" / "sunset_final.jpeg",
        root / "notes.txt",
    ]
    for f in files:
        f.write_bytes(b"data-" + f.name.encode())
    return root

