"""Pytest fixtures for manga toolkit tests."""

import io
import zipfile
from pathlib import Path

import pytest
from PIL import Image


def make_image_bytes(
    width: int = 10,
    height: int = 10,
    fmt: str = "JPEG",
    color: tuple[int, int, int] = (255, 255, 255),
    mode: str = "RGB",
) -> bytes:
    """Encode a solid-color image in memory."""
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_archive(path: Path, entries: dict[str, bytes]) -> Path:
    """Write a ZIP archive with the given entry names and contents."""
    with zipfile.ZipFile(path, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return path


@pytest.fixture
def valid_archive(tmp_path):
    """Archive with ten portrait JPEG pages named 0.jpg .. 9.jpg.

    Page i is (10 + i) x (20 + i) pixels, so every entry is distinguishable.
    """
    entries = {f"{i}.jpg": make_image_bytes(10 + i, 20 + i) for i in range(10)}
    return make_archive(tmp_path / "valid.zip", entries)


@pytest.fixture
def prefixed_archive(tmp_path):
    """Archive with shuffled, prefixed page names and mixed formats."""
    entries = {
        "chapter12_3.png": make_image_bytes(30, 40, fmt="PNG", color=(0, 0, 255)),
        "chapter12_1.jpg": make_image_bytes(30, 40, color=(255, 0, 0)),
        "chapter12_10.jpeg": make_image_bytes(40, 30, color=(0, 255, 0)),
        "chapter12_2.JPG": make_image_bytes(30, 40),
    }
    return make_archive(tmp_path / "Chainsaw_Man_12.zip", entries)


@pytest.fixture
def invalid_extension_archive(tmp_path):
    """Archive with an entry whose extension is not an image format."""
    return make_archive(tmp_path / "invalid-ext.zip", {"0.random": make_image_bytes()})


@pytest.fixture
def unnumbered_archive(tmp_path):
    """Archive with an entry whose filename carries no page number."""
    return make_archive(tmp_path / "invalid-filename.zip", {"random.jpg": make_image_bytes()})


@pytest.fixture
def empty_archive(tmp_path):
    """Archive without entries."""
    return make_archive(tmp_path / "empty.zip", {})


@pytest.fixture
def image_bytes():
    """Factory fixture returning encoded solid-color images."""
    return make_image_bytes


@pytest.fixture
def archive_factory(tmp_path):
    """Factory fixture writing ZIP archives into tmp_path."""

    def _make(name: str, entries: dict[str, bytes]) -> Path:
        return make_archive(tmp_path / name, entries)

    return _make


@pytest.fixture
def corrupt_archive(tmp_path):
    """Stored archive whose only page has one payload byte flipped."""
    payload = make_image_bytes()
    path = tmp_path / "corrupt.zip"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as archive:
        archive.writestr("0.jpg", payload)

    data = bytearray(path.read_bytes())
    data[data.index(payload) + len(payload) // 2] ^= 0xFF
    path.write_bytes(bytes(data))
    return path
