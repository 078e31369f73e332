"""
Hash Service - Streaming content digests for bundle files
"""

import hashlib
from pathlib import Path
from typing import NamedTuple

from bundlehost.core.config import HASH_ALGORITHM

CHUNK_SIZE = 65536


class FileDigest(NamedTuple):
    hexdigest: str
    size: int


def hash_file(file_path: Path, algorithm: str = HASH_ALGORITHM, chunk_size: int = CHUNK_SIZE) -> FileDigest:
    """
    Hash a file by streaming it through hashlib in fixed-size chunks.

    Args:
        file_path: File to hash.
        algorithm: hashlib algorithm name.
        chunk_size: Bytes read per iteration.

    Returns:
        FileDigest: hex digest plus the number of bytes that were hashed.

    Raises:
        OSError: If the file cannot be opened or fully read.
    """
    hasher = hashlib.new(algorithm)
    size = 0
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(chunk_size), b""):
            hasher.update(byte_block)
            size += len(byte_block)
    return FileDigest(hasher.hexdigest(), size)
