"""Stored objects for loosegit."""

from typing import List, Optional, Tuple
from .errors import DecodeError
from .hash import Hash, hash_object

COMMIT = 'commit'
TREE = 'tree'
BLOB = 'blob'
TAG = 'tag'

OBJECT_TYPES = (COMMIT, TREE, BLOB, TAG)

# Longest header is "commit <20 digits>"
_MAX_HEADER_SIZE = 32


def check_type(obj_type: str) -> str:
    """
    Validate an object type name.
    
    Raises:
        ValueError: If obj_type is not commit, tree, blob or tag
    """
    if obj_type not in OBJECT_TYPES:
        raise ValueError(f"Unknown object type: {obj_type!r}")
    return obj_type


class Object:
    """
    An immutable object read from the store.
    
    Holds the object type, its declared size and its content. The size
    always equals the length of the content.
    """
    
    __slots__ = ('_type', '_size', '_content', '_hash')
    
    def __init__(self, obj_type: str, size: int, content: bytes):
        """
        Initialize object.
        
        Args:
            obj_type: One of commit, tree, blob, tag
            size: Declared content size
            content: Decompressed content bytes
            
        Raises:
            ValueError: If the type is unknown or size does not match content
        """
        check_type(obj_type)
        content = bytes(content)
        if size != len(content):
            raise ValueError(f"Object size mismatch: expected {size}, got {len(content)}")
        self._type = obj_type
        self._size = size
        self._content = content
        self._hash: Optional[Hash] = None
    
    @property
    def type(self) -> str:
        return self._type
    
    @property
    def size(self) -> int:
        return self._size
    
    @property
    def content(self) -> bytes:
        return self._content
    
    @property
    def hash(self) -> Hash:
        """
        Object hash.
        
        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>
        """
        if self._hash is None:
            header = f"{self._type} {self._size}\0".encode()
            self._hash = Hash.from_hex(hash_object(header + self._content))
        return self._hash
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Object):
            return NotImplemented
        return self._type == other._type and self._content == other._content
    
    def __hash__(self) -> int:
        return hash((self._type, self._content))
    
    def __repr__(self) -> str:
        return f"Object(type={self._type}, size={self._size})"


def parse_header(data: bytes) -> Optional[Tuple[str, int, int]]:
    """
    Parse a loose object header.
    
    Format: <type> <size>\\0
    
    Args:
        data: Decompressed loose object payload
        
    Returns:
        (type, size, offset of content) or None if data has no header
    """
    null_idx = data.find(b'\0', 0, _MAX_HEADER_SIZE)
    if null_idx < 0:
        return None
    
    try:
        header = data[:null_idx].decode('ascii')
    except UnicodeDecodeError:
        return None
    
    obj_type, sep, size_str = header.partition(' ')
    if not sep or obj_type not in OBJECT_TYPES or not size_str.isdigit():
        return None
    
    return obj_type, int(size_str), null_idx + 1


def decode_object(data: bytes) -> Object:
    """
    Build an Object from a decompressed loose object payload.
    
    A payload starting with a valid header has its type read from it and
    its size checked. A payload without a header is taken as raw blob
    content.
    
    Raises:
        DecodeError: If the header size does not match the content
    """
    parsed = parse_header(data)
    if parsed is None:
        return Object(BLOB, len(data), data)
    
    obj_type, size, offset = parsed
    content = data[offset:]
    if len(content) != size:
        raise DecodeError(f"Object size mismatch: expected {size}, got {len(content)}")
    
    return Object(obj_type, size, content)


class TreeEntry:
    """
    A single entry in a tree object.
    
    Each entry contains:
    - mode: File permissions (e.g., '100644' for file, '40000' for directory)
    - type: Object type ('blob', 'tree' or 'commit' for submodules)
    - hash: Hash of the object
    - name: Filename or directory name
    """
    
    __slots__ = ('mode', 'type', 'hash', 'name')
    
    def __init__(self, mode: str, obj_type: str, obj_hash: Hash, name: str):
        self.mode = mode
        self.type = obj_type
        self.hash = obj_hash
        self.name = name
    
    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash.hex[:7]} {self.name})"


def _entry_type(mode: str) -> str:
    if mode.startswith('4'):
        return TREE
    if mode == '160000':
        return COMMIT
    return BLOB


def parse_tree(content: bytes) -> List[TreeEntry]:
    """
    Parse the content of a tree object.
    
    Format: <mode> <name>\\0<20-byte hash>, repeated
    
    Raises:
        DecodeError: If the content is truncated or malformed
    """
    entries = []
    pos = 0
    
    while pos < len(content):
        space_pos = content.find(b' ', pos)
        null_pos = content.find(b'\0', space_pos + 1)
        if space_pos < 0 or null_pos < 0 or null_pos + 21 > len(content):
            raise DecodeError(f"Invalid tree entry at offset {pos}")
        
        mode = content[pos:space_pos].decode('ascii', errors='replace')
        name = content[space_pos + 1:null_pos].decode('utf-8', errors='surrogateescape')
        obj_hash = Hash(content[null_pos + 1:null_pos + 21])
        entries.append(TreeEntry(mode, _entry_type(mode), obj_hash, name))
        
        pos = null_pos + 21
    
    return entries
