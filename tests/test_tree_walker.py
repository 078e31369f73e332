"""Tests for the recursive file enumeration."""

import os

import pytest

from bundlehost.services.tree_walker import walk_files


def _relative(root, paths):
    return [p.relative_to(root).as_posix() for p in paths]


def test_walk_depth_first_in_name_order(tmp_path):
    (tmp_path / 'b.txt').write_text('b')
    (tmp_path / 'a' / 'deep').mkdir(parents=True)
    (tmp_path / 'a' / 'z.txt').write_text('z')
    (tmp_path / 'a' / 'deep' / 'y.txt').write_text('y')
    (tmp_path / 'c.txt').write_text('c')

    result = _relative(tmp_path, walk_files(tmp_path))

    assert result == ['a/deep/y.txt', 'a/z.txt', 'b.txt', 'c.txt']


def test_walk_yields_absolute_paths(tmp_path):
    (tmp_path / 'f').write_text('x')

    paths = list(walk_files(tmp_path))

    assert len(paths) == 1
    assert paths[0].is_absolute()


def test_walk_empty_directories(tmp_path):
    (tmp_path / 'empty' / 'nested').mkdir(parents=True)

    assert list(walk_files(tmp_path)) == []


def test_walk_skips_symlinks(tmp_path):
    (tmp_path / 'real').mkdir()
    (tmp_path / 'real' / 'file.txt').write_text('x')
    try:
        os.symlink(tmp_path / 'real', tmp_path / 'loop', target_is_directory=True)
        os.symlink(tmp_path / 'real' / 'file.txt', tmp_path / 'link.txt')
    except (OSError, NotImplementedError):
        pytest.skip('symlinks not supported')

    result = _relative(tmp_path, walk_files(tmp_path))

    assert result == ['real/file.txt']


def test_walk_depth_guard(tmp_path):
    (tmp_path / 'one' / 'two').mkdir(parents=True)
    (tmp_path / 'one' / 'two' / 'f.txt').write_text('x')

    assert len(list(walk_files(tmp_path, max_depth=2))) == 1
    with pytest.raises(OSError):
        list(walk_files(tmp_path, max_depth=1))


def test_walk_missing_root_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        list(walk_files(tmp_path / 'missing'))
