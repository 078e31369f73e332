"""
Tree Walker - Enumerate regular files below an extraction root
"""

import errno
import os
from pathlib import Path
from typing import Iterator, List, Tuple

from bundlehost.core.logger import setup_logger

logger = setup_logger("walker")

MAX_DEPTH = 256


def _sorted_entries(directory: Path) -> List[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def walk_files(root: Path, max_depth: int = MAX_DEPTH) -> Iterator[Path]:
    """
    Yield every regular file below ``root``, depth-first and pre-order.

    Entries of each directory are visited in name order so that the result
    does not depend on the filesystem's listing order. Symbolic links are
    skipped, never followed.

    Args:
        root: Directory to walk.
        max_depth: Deepest directory level that may be descended into.

    Raises:
        OSError: If a directory cannot be listed, an entry cannot be stat'ed,
            or the tree is deeper than ``max_depth``.
    """
    root = Path(root)
    # Each frame holds the remaining entries of one directory, in reverse so
    # that pop() returns them in name order.
    stack: List[Tuple[int, List[os.DirEntry]]] = [(0, _sorted_entries(root)[::-1])]

    while stack:
        depth, pending = stack[-1]
        if not pending:
            stack.pop()
            continue

        entry = pending.pop()
        if entry.is_symlink():
            logger.debug(f"Skipping symbolic link {entry.path}")
            continue

        if entry.is_dir(follow_symlinks=False):
            if depth + 1 > max_depth:
                raise OSError(errno.ELOOP, f"Directory tree deeper than {max_depth} levels", entry.path)
            stack.append((depth + 1, _sorted_entries(Path(entry.path))[::-1]))
        elif entry.is_file(follow_symlinks=False):
            yield Path(entry.path).absolute()
