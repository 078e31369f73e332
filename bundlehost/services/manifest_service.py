"""
Manifest Service - Scan an extracted bundle and generate its manifest
"""

import errno
from pathlib import Path
from typing import List
from urllib.parse import quote

from bundlehost.core.config import DOWNLOAD_ROUTE, HASH_ALGORITHM
from bundlehost.schemas.manifest import FileDescriptor
from bundlehost.services.hash_service import hash_file
from bundlehost.services.tree_walker import walk_files


def build_download_url(base_url: str, instance_name: str, relative_path: str) -> str:
    """
    Build the public download URL of one bundle file.

    Pure function of its inputs, so the same bundle always produces the same
    URLs for a given configuration.
    """
    base = base_url.rstrip("/")
    return f"{base}/{DOWNLOAD_ROUTE}/{quote(instance_name, safe='')}/{quote(relative_path, safe='/')}"


def to_relative_path(root: Path, file_path: Path) -> str:
    """Path of ``file_path`` relative to ``root``, with forward slashes.

    Raises:
        ValueError: If the file is not below the root.
    """
    return Path(file_path).relative_to(root).as_posix()


def describe_file(root: Path, file_path: Path, instance_name: str, base_url: str,
                  algorithm: str = HASH_ALGORITHM) -> FileDescriptor:
    relative_path = to_relative_path(root, file_path)
    stat = file_path.stat()
    digest = hash_file(file_path, algorithm)

    # size and hash must describe the same byte stream
    if digest.size != stat.st_size:
        raise OSError(errno.EIO, f"File changed while hashing ({stat.st_size} != {digest.size} bytes)", str(file_path))

    return FileDescriptor(
        url=build_download_url(base_url, instance_name, relative_path),
        size=digest.size,
        hash=digest.hexdigest,
        path=relative_path,
    )


def build_manifest(root: Path, instance_name: str, base_url: str,
                   algorithm: str = HASH_ALGORITHM) -> List[FileDescriptor]:
    """
    Describe every file of an extracted bundle.

    Args:
        root: Extraction directory of the bundle.
        instance_name: Bundle identifier, used in download URLs.
        base_url: Public address clients use to reach the server.
        algorithm: hashlib algorithm used for content digests.

    Returns:
        Descriptors in traversal order.

    Raises:
        OSError: On any listing, stat or read failure. No partial manifest
            is returned.
    """
    root = Path(root).absolute()
    return [
        describe_file(root, file_path, instance_name, base_url, algorithm)
        for file_path in walk_files(root)
    ]


def manifest_total_size(manifest: List[FileDescriptor]) -> int:
    return sum(f.size for f in manifest)
