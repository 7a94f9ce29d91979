"""loosegit - Read-only access to on-disk git repositories."""

__version__ = '0.1.0'

from loosegit.core.storage import ObjectStorage
from loosegit.core.gitdir import GitDir
from loosegit.core.hash import Hash, ZERO_HASH
from loosegit.core.objects import Object

__all__ = [
    'ObjectStorage',
    'GitDir',
    'Hash',
    'ZERO_HASH',
    'Object',
]
