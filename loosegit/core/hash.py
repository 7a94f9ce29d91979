"""Hash utilities for loosegit."""

import hashlib
import string

HASH_SIZE = 20
HEX_SIZE = HASH_SIZE * 2

_HEX_DIGITS = frozenset(string.hexdigits)


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_hex_hash(value: str) -> bool:
    """Return True if value is a full 40-character hex hash."""
    return len(value) == HEX_SIZE and all(c in _HEX_DIGITS for c in value)


class Hash:
    """
    A 20-byte object identifier.
    
    Equality and ordering are byte-wise. The all-zero hash, ZERO_HASH,
    stands for an absent or unknown object.
    """
    
    __slots__ = ('_raw',)
    
    def __init__(self, raw: bytes):
        """
        Initialize hash from raw bytes.
        
        Args:
            raw: Exactly 20 bytes
            
        Raises:
            ValueError: If raw is not 20 bytes long
        """
        raw = bytes(raw)
        if len(raw) != HASH_SIZE:
            raise ValueError(f"hash must be {HASH_SIZE} bytes, got {len(raw)}")
        self._raw = raw
    
    @classmethod
    def from_hex(cls, value: str) -> 'Hash':
        """
        Parse a 40-character hex string.
        
        Raises:
            ValueError: If value is not a full hex hash
        """
        if not is_hex_hash(value):
            raise ValueError(f"invalid hex hash: {value!r}")
        return cls(bytes.fromhex(value))
    
    @property
    def raw(self) -> bytes:
        return self._raw
    
    @property
    def hex(self) -> str:
        """Lowercase 40-character hex form."""
        return self._raw.hex()
    
    def is_zero(self) -> bool:
        return self._raw == bytes(HASH_SIZE)
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Hash):
            return NotImplemented
        return self._raw == other._raw
    
    def __lt__(self, other: 'Hash') -> bool:
        return self._raw < other._raw
    
    def __hash__(self) -> int:
        return hash(self._raw)
    
    def __str__(self) -> str:
        return self.hex
    
    def __repr__(self) -> str:
        return f"Hash({self.hex})"


ZERO_HASH = Hash(bytes(HASH_SIZE))


def to_hash(value) -> Hash:
    """
    Coerce a Hash or 40-character hex string to a Hash.
    
    Raises:
        ValueError: If value is a string that is not a full hex hash
        TypeError: If value is neither a Hash nor a string
    """
    if isinstance(value, Hash):
        return value
    if isinstance(value, str):
        return Hash.from_hex(value.lower())
    raise TypeError(f"expected Hash or hex string, got {type(value).__name__}")
