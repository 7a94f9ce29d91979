"""Read-only object storage over a git directory."""

import logging
import os
from typing import Dict, Iterator, Optional
from .capabilities import SYMREF
from .compression import inflate
from .config import Config
from .errors import HeadError, LooseGitError, ReferenceNotFoundError, UnsupportedError
from .fs import FileSystem, OSFileSystem
from .gitdir import GitDir, head_target
from .hash import ZERO_HASH, Hash, is_hex_hash
from .objects import Object, check_type, decode_object

logger = logging.getLogger(__name__)


class LooseObjectIndex:
    """
    Maps hashes to loose object files.
    
    Built by walking the shard directories once; it is a snapshot and
    does not follow later changes on disk.
    """
    
    def __init__(self, gitdir: GitDir):
        self._paths: Dict[Hash, str] = {}
        objects_dir = gitdir.fs.join(gitdir.path, 'objects')
        for h in gitdir.loose_objects():
            hex_hash = h.hex
            self._paths[h] = gitdir.fs.join(objects_dir, hex_hash[:2], hex_hash[2:])
    
    def path(self, hash: Hash) -> Optional[str]:
        return self._paths.get(hash)
    
    def __contains__(self, hash: Hash) -> bool:
        return hash in self._paths
    
    def __iter__(self) -> Iterator[Hash]:
        return iter(self._paths)
    
    def __len__(self) -> int:
        return len(self._paths)


class ObjectStorage:
    """
    Object storage for a repository in the standard git on-disk format.
    
    Only reads are supported. Loose objects are read; packfiles are
    not. Nothing is cached, so every call sees the directory as it is
    on disk at that moment.
    """
    
    def __init__(self, fs: FileSystem, path: str, config: Optional[Config] = None):
        """
        Initialize storage for the git directory at path.
        
        Args:
            fs: Filesystem to read through
            path: Absolute path of the git directory
            config: Configuration; read from the repository if omitted
            
        Raises:
            NotFoundError: If path does not exist
        """
        self.dir = GitDir(fs, path)
        self._config = config
    
    @property
    def config(self) -> Config:
        """Configuration, read from the repository on first use."""
        if self._config is None:
            self._config = Config.from_gitdir(self.dir)
        return self._config
    
    @classmethod
    def open(cls, path: str, config: Optional[Config] = None) -> 'ObjectStorage':
        """Open the git directory at path on the local disk."""
        return cls(OSFileSystem(), os.path.abspath(path), config)
    
    def get(self, hash) -> Object:
        """
        Read an object.
        
        Args:
            hash: Hash or 40-character hex string
            
        Returns:
            Object: The decoded object
            
        Raises:
            NotFoundError: If the object does not exist
            DecodeError: If the object cannot be decompressed or decoded
        """
        fs, path = self.dir.object_file(hash)
        return self._read(fs, path)
    
    def set(self, obj: Object) -> Hash:
        """
        Add an object to the storage.
        
        Writing is not supported: this always raises, and the error
        carries the zero hash.
        
        Raises:
            UnsupportedError: Always
        """
        raise UnsupportedError("not implemented yet", hash=ZERO_HASH)
    
    def iter(self, obj_type: str) -> Iterator[Object]:
        """
        Iterate over all loose objects of a type.
        
        Each call indexes the object directory afresh. Objects are read
        lazily as the iterator advances.
        
        Args:
            obj_type: One of commit, tree, blob, tag
            
        Raises:
            ValueError: If obj_type is unknown
        """
        check_type(obj_type)
        index = LooseObjectIndex(self.dir)
        return self._iter_index(index, obj_type)
    
    def _iter_index(self, index: LooseObjectIndex, obj_type: str) -> Iterator[Object]:
        for h in index:
            try:
                obj = self._read(self.dir.fs, index.path(h))
            except FileNotFoundError:
                # Pruned since the index was built
                logger.debug("object %s disappeared during iteration", h)
                continue
            if obj.type == obj_type:
                yield obj
    
    def _read(self, fs: FileSystem, path: str) -> Object:
        with fs.open(path) as f:
            data = inflate(f, lenient=self.config.lenient_zlib)
        return decode_object(data)
    
    def refs(self) -> Dict[str, Hash]:
        """Scan the repository references, see GitDir.refs."""
        return self.dir.refs(max_depth=self.config.symref_depth)
    
    def head(self) -> Hash:
        """
        Resolve HEAD to a hash.
        
        HEAD names a reference, which is looked up among the
        repository references. A detached HEAD holds the hash itself.
        
        Returns:
            Hash: The hash HEAD points to
            
        Raises:
            HeadError: If HEAD cannot be read or does not name a reference,
                or the references cannot be scanned
            ReferenceNotFoundError: If the reference HEAD names is missing
        """
        try:
            caps = self.dir.capabilities()
        except (OSError, LooseGitError) as e:
            raise HeadError(str(e)) from e
        
        if not caps.supports(SYMREF):
            raise HeadError("symref capability not supported")
        
        head_ref = head_target(caps)
        if not head_ref:
            raise HeadError("HEAD reference not found")
        logger.debug("HEAD points to %s", head_ref)
        
        try:
            refs = self.refs()
        except (OSError, ValueError, LooseGitError) as e:
            raise HeadError(str(e)) from e
        
        head = refs.get(head_ref)
        if head is not None:
            return head
        
        if is_hex_hash(head_ref):
            logger.debug("HEAD is detached")
            return Hash.from_hex(head_ref.lower())
        
        raise ReferenceNotFoundError(
            head_ref,
            f"{HeadError.PREFIX} reference {head_ref!r} not found",
        )
    
    def __repr__(self) -> str:
        return f"ObjectStorage(path={self.dir.path})"
