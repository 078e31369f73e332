"""Shared pytest fixtures for all tests."""

import zipfile

import pytest

from bundlehost.core.config import ServerSettings

PACK_FILES = {
    'mods/a.jar': b'0123456789',
    'config/b.txt': b'abc',
}


def write_zip(path, files):
    """Write a zip archive containing ``files`` (name -> bytes)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def settings(tmp_path):
    """
    Settings pointing at temporary source and extraction directories.

    Startup processing completes before the app serves requests.
    """
    return ServerSettings(
        source_dir=tmp_path / 'minecraft-instances',
        extracted_dir=tmp_path / 'extracted',
        public_base_url='http://localhost:3000',
        serve_during_startup=False,
    )


@pytest.fixture
def make_zip(settings):
    """Factory writing an archive into the source directory."""
    def _make(name, files):
        return write_zip(settings.source_dir / name, files)
    return _make


@pytest.fixture
def pack_zip(make_zip):
    """pack.zip with mods/a.jar (10 bytes) and config/b.txt (3 bytes)."""
    return make_zip('pack.zip', PACK_FILES)
