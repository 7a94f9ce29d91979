"""Directory scanner for on-disk git repositories."""

import logging
import os
from typing import Dict, Iterator, Optional, Tuple, Union
from .capabilities import Capabilities, SYMREF
from .config import DEFAULT_SYMREF_DEPTH
from .errors import DecodeError, NotFoundError, PackedRefsError
from .fs import FileSystem
from .hash import HEX_SIZE, Hash, is_hex_hash, to_hash

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref: '
HEAD_CAPABILITY_PREFIX = 'HEAD:'
PACKED_REFS = 'packed-refs'
LOCK_SUFFIX = '.lock'

# A ref file holds either a hash or the name of another ref
RefValue = Union[Hash, str]


class GitDir:
    """
    A git repository directory on disk (e.g. /foo/bar/.git).
    
    Translates the on-disk layout into hashes, references and
    capabilities. Nothing read from disk is kept between calls: every
    scan reflects the directory as it is at the time of the call.
    """
    
    def __init__(self, fs: FileSystem, path: str):
        """
        Open a repository directory.
        
        Only checks that the directory exists; everything else is read
        on demand.
        
        Args:
            fs: Filesystem to read through
            path: Absolute path of the repository directory
            
        Raises:
            ValueError: If path is not absolute
            NotFoundError: If path does not exist
            OSError: If path cannot be checked for another reason
        """
        if not os.path.isabs(path):
            raise ValueError(f"Repository path must be absolute: {path}")
        
        try:
            fs.stat(path)
        except FileNotFoundError:
            raise NotFoundError()
        
        self._fs = fs
        self._path = path
    
    @property
    def fs(self) -> FileSystem:
        return self._fs
    
    @property
    def path(self) -> str:
        return self._path
    
    def refs(self, max_depth: int = DEFAULT_SYMREF_DEPTH) -> Dict[str, Hash]:
        """
        Scan the repository references.
        
        Loose references under refs/ are combined with packed-refs; a
        loose reference wins over a packed one of the same name.
        Symbolic references are resolved and included as hashes.
        
        Args:
            max_depth: Longest chain of symbolic references to follow
        
        Returns:
            A new dict mapping reference names to hashes
            
        Raises:
            DecodeError: If a reference file is malformed, or a symbolic
                chain loops or exceeds max_depth
            OSError: If a reference file cannot be read
        """
        # Loose refs first: a concurrent pack-refs moves a ref into
        # packed-refs before deleting the loose file
        values: Dict[str, RefValue] = self._loose_refs()
        for name, packed in self.packed_refs().items():
            values.setdefault(name, packed)
        
        refs = {}
        for name in values:
            target = self._resolve(name, values, max_depth)
            if target is not None:
                refs[name] = target
        
        logger.debug("scanned %d references in %s", len(refs), self._path)
        return refs
    
    def packed_refs(self) -> Dict[str, Hash]:
        """
        Read the packed-refs file.
        
        Each line is "<hash> <refname>". Comment lines start with '#';
        lines starting with '^' hold the peeled hash of the tag above
        and are skipped.
        
        Returns:
            A new dict mapping reference names to hashes, empty if the
            file does not exist
            
        Raises:
            PackedRefsError: If a line is malformed
        """
        path = self._fs.join(self._path, PACKED_REFS)
        try:
            with self._fs.open(path) as f:
                data = f.read()
        except FileNotFoundError:
            return {}
        
        refs = {}
        last = None
        for lineno, raw_line in enumerate(data.splitlines(), 1):
            line = _decode(raw_line, path).strip()
            if not line or line.startswith('#'):
                continue
            
            if line.startswith('^'):
                if last is None or not is_hex_hash(line[1:]):
                    raise PackedRefsError(f"{PACKED_REFS}:{lineno}: unexpected peeled line {line!r}")
                last = None
                continue
            
            fields = line.split(' ')
            if len(fields) != 2 or not is_hex_hash(fields[0]) or not fields[1]:
                raise PackedRefsError(f"{PACKED_REFS}:{lineno}: invalid ref line {line!r}")
            
            hex_hash, name = fields
            refs[name] = Hash.from_hex(hex_hash.lower())
            last = name
        
        return refs
    
    def capabilities(self) -> Capabilities:
        """
        Describe the repository capabilities.
        
        Reads HEAD and records where it points as the symref capability,
        "HEAD:<target>". The target is a reference name, or a hash when
        HEAD is detached.
        
        Raises:
            OSError: If HEAD cannot be opened or read
        """
        caps = Capabilities()
        
        path = self._fs.join(self._path, 'HEAD')
        with self._fs.open(path) as f:
            content = _decode(f.read(), path).strip()
        
        if content.startswith(SYMREF_PREFIX):
            content = content[len(SYMREF_PREFIX):]
        
        caps.set(SYMREF, HEAD_CAPABILITY_PREFIX + content)
        return caps
    
    def object_file(self, hash) -> Tuple[FileSystem, str]:
        """
        Locate the loose object file of a hash.
        
        Objects are stored in subdirectories named by the first 2
        characters of the hash, with the remaining 38 characters as the
        filename.
        
        Args:
            hash: Hash or 40-character hex string
            
        Returns:
            (filesystem, path) of the existing object file
            
        Raises:
            NotFoundError: If there is no such loose object
        """
        hex_hash = to_hash(hash).hex
        path = self._fs.join(self._path, 'objects', hex_hash[:2], hex_hash[2:])
        logger.debug("object %s at %s", hex_hash, path)
        
        try:
            self._fs.stat(path)
        except FileNotFoundError:
            raise NotFoundError(f"object {hex_hash} not found")
        
        return self._fs, path
    
    def loose_objects(self) -> Iterator[Hash]:
        """
        Walk the object shard directories.
        
        Yields:
            The hash of every loose object, in hash order
        """
        objects_dir = self._fs.join(self._path, 'objects')
        if not self._fs.isdir(objects_dir):
            return
        
        for shard in sorted(self._fs.listdir(objects_dir)):
            if len(shard) != 2 or not _is_hex(shard):
                continue
            shard_dir = self._fs.join(objects_dir, shard)
            if not self._fs.isdir(shard_dir):
                continue
            
            try:
                names = sorted(self._fs.listdir(shard_dir))
            except FileNotFoundError:
                # Emptied and removed since the listing above
                logger.debug("shard %s disappeared during walk", shard_dir)
                continue
            
            for name in names:
                if len(name) == HEX_SIZE - 2 and _is_hex(name):
                    yield Hash.from_hex((shard + name).lower())
    
    def _loose_refs(self) -> Dict[str, RefValue]:
        refs = {}
        refs_dir = self._fs.join(self._path, 'refs')
        if self._fs.isdir(refs_dir):
            self._scan_ref_dir(refs_dir, 'refs', refs)
        return refs
    
    def _scan_ref_dir(self, directory: str, prefix: str, refs: Dict[str, RefValue]) -> None:
        try:
            entries = sorted(self._fs.listdir(directory))
        except FileNotFoundError:
            logger.debug("reference directory %s disappeared during scan", directory)
            return
        
        for entry in entries:
            path = self._fs.join(directory, entry)
            name = f"{prefix}/{entry}"
            
            if self._fs.isdir(path):
                self._scan_ref_dir(path, name, refs)
                continue
            
            # Left behind by a writer that is updating the ref
            if entry.endswith(LOCK_SUFFIX):
                continue
            
            try:
                refs[name] = self._read_ref_file(name, path)
            except FileNotFoundError:
                # Deleted or packed since the listing above
                logger.debug("reference %s disappeared during scan", name)
    
    def _read_ref_file(self, name: str, path: str) -> RefValue:
        with self._fs.open(path) as f:
            content = _decode(f.read(), path).strip()
        
        if content.startswith(SYMREF_PREFIX):
            target = content[len(SYMREF_PREFIX):].strip()
            if target:
                return target
        elif is_hex_hash(content):
            return Hash.from_hex(content.lower())
        
        raise DecodeError(f"invalid reference {name}: {content!r}")
    
    def _resolve(self, name: str, values: Dict[str, RefValue], max_depth: int) -> Optional[Hash]:
        value = values[name]
        seen = {name}
        depth = 0
        
        while not isinstance(value, Hash):
            depth += 1
            if depth > max_depth:
                raise DecodeError(f"reference {name}: symbolic chain longer than {max_depth}")
            if value in seen:
                raise DecodeError(f"reference {name}: symbolic reference loop at {value}")
            if value not in values:
                logger.warning("reference %s points to missing reference %s", name, value)
                return None
            seen.add(value)
            value = values[value]
        
        return value
    
    def __repr__(self) -> str:
        return f"GitDir(path={self._path})"


def _is_hex(value: str) -> bool:
    return all(c in '0123456789abcdefABCDEF' for c in value)


def _decode(data: bytes, path: str) -> str:
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(f"cannot decode {path}: {e}") from e


def head_target(caps: Capabilities) -> str:
    """
    Return the target HEAD points to according to the symref capability.
    
    Returns:
        The reference name, or the hash when HEAD is detached; an empty
        string if no HEAD: value is present
    """
    target = ''
    for value in caps.get(SYMREF):
        if value.startswith(HEAD_CAPABILITY_PREFIX):
            target = value[len(HEAD_CAPABILITY_PREFIX):]
    return target
