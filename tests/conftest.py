"""Shared pytest fixtures for loosegit tests."""

import hashlib
import shutil
import tempfile
import zlib
from pathlib import Path

import pytest

from loosegit.core.config import Config
from loosegit.core.fs import OSFileSystem
from loosegit.core.gitdir import GitDir
from loosegit.core.storage import ObjectStorage


def write_loose_object(git_dir: Path, obj_type: str, content: bytes) -> str:
    """
    Store an object the way git does.
    
    Returns:
        str: 40-character hex hash of the object
    """
    payload = f"{obj_type} {len(content)}\0".encode() + content
    hex_hash = hashlib.sha1(payload).hexdigest()
    write_raw_object(git_dir, hex_hash, zlib.compress(payload))
    return hex_hash


def write_raw_object(git_dir: Path, hex_hash: str, data: bytes) -> Path:
    """Write data, as is, at the loose object path of a hash."""
    path = git_dir / 'objects' / hex_hash[:2] / hex_hash[2:]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def write_ref(git_dir: Path, name: str, value: str) -> Path:
    """Write a loose reference file (a hash or 'ref: <name>')."""
    path = git_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(value + '\n')
    return path


def make_tree(*entries) -> bytes:
    """Build tree content from (mode, name, hex_hash) tuples."""
    result = b''
    for mode, name, hex_hash in entries:
        result += f"{mode} {name}".encode() + b'\0' + bytes.fromhex(hex_hash)
    return result


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Keep the user's global config and environment out of tests."""
    for var in ('LOOSEGIT_CORE_LENIENTZLIB', 'LOOSEGIT_CORE_SYMREFDEPTH', 'LOOSEGIT_LOG_LEVEL'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', temp_dir / 'global.config')


@pytest.fixture
def git_dir(temp_dir, isolated_config):
    """Create an empty git directory with HEAD on main."""
    path = temp_dir / 'repo' / '.git'
    (path / 'objects').mkdir(parents=True)
    (path / 'refs' / 'heads').mkdir(parents=True)
    (path / 'refs' / 'tags').mkdir(parents=True)
    (path / 'HEAD').write_text('ref: refs/heads/main\n')
    return path


@pytest.fixture
def gitdir(git_dir):
    """GitDir over the git directory fixture."""
    return GitDir(OSFileSystem(), str(git_dir))


@pytest.fixture
def storage(git_dir):
    """ObjectStorage over the git directory fixture."""
    return ObjectStorage(OSFileSystem(), str(git_dir))


@pytest.fixture
def repo_with_commit(git_dir):
    """
    Repository with one commit on main, a lightweight tag and a remote.
    
    Returns:
        dict with the git_dir path and the hashes of each object
    """
    blob = write_loose_object(git_dir, 'blob', b"Hello, World!\n")
    tree = write_loose_object(git_dir, 'tree', make_tree(('100644', 'hello.txt', blob)))
    commit = write_loose_object(
        git_dir, 'commit',
        f"tree {tree}\n"
        "author Test User <test@example.com> 1700000000 +0000\n"
        "committer Test User <test@example.com> 1700000000 +0000\n"
        "\n"
        "First commit\n".encode(),
    )
    write_ref(git_dir, 'refs/heads/main', commit)
    write_ref(git_dir, 'refs/tags/v1.0', commit)
    write_ref(git_dir, 'refs/remotes/origin/main', commit)
    write_ref(git_dir, 'refs/remotes/origin/HEAD', 'ref: refs/remotes/origin/main')
    
    return {
        'git_dir': git_dir,
        'blob': blob,
        'tree': tree,
        'commit': commit,
    }
