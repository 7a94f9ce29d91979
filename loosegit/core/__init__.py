"""Core functionality for loosegit.

This module contains:
- Hashes and stored objects
- The directory scanner (GitDir)
- The read-only object storage (ObjectStorage)
- Capabilities, configuration and errors

For the command line interface, see loosegit.cli
"""

from loosegit.core.capabilities import Capabilities
from loosegit.core.compression import inflate
from loosegit.core.config import Config
from loosegit.core.errors import (LooseGitError, NotFoundError, ReferenceNotFoundError,
                                  UnsupportedError, DecodeError, PackedRefsError, HeadError)
from loosegit.core.fs import FileSystem, OSFileSystem
from loosegit.core.gitdir import GitDir
from loosegit.core.hash import Hash, ZERO_HASH, hash_object, to_hash
from loosegit.core.objects import Object, OBJECT_TYPES, decode_object
from loosegit.core.storage import ObjectStorage, LooseObjectIndex

__all__ = [
    'Capabilities',
    'inflate',
    'Config',
    'LooseGitError',
    'NotFoundError',
    'ReferenceNotFoundError',
    'UnsupportedError',
    'DecodeError',
    'PackedRefsError',
    'HeadError',
    'FileSystem',
    'OSFileSystem',
    'GitDir',
    'Hash',
    'ZERO_HASH',
    'hash_object',
    'to_hash',
    'Object',
    'OBJECT_TYPES',
    'decode_object',
    'ObjectStorage',
    'LooseObjectIndex',
]
