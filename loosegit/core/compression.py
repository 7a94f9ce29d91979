"""Decompression of loose objects."""

import logging
import zlib
from typing import BinaryIO
from .errors import DecodeError

logger = logging.getLogger(__name__)


_HEADER_ERRORS = (
    'incorrect header check',
    'unknown compression method',
    'invalid window size',
)


def _is_header_error(err: zlib.error) -> bool:
    message = str(err)
    return any(e in message for e in _HEADER_ERRORS)


def _decompress(data: bytes, wbits: int) -> bytes:
    decomp = zlib.decompressobj(wbits)
    content = decomp.decompress(data) + decomp.flush()
    
    # flush() does not fail on a truncated stream, so check it ended
    if not decomp.eof:
        raise DecodeError("zlib reading error: unexpected end of stream")
    
    return content


def inflate(reader: BinaryIO, lenient: bool = True) -> bytes:
    """
    Decompress a zlib stream.
    
    A stream that fails the zlib header check is read again as raw
    deflate data when lenient is set; some objects written by old tools
    lack the header. Every other failure is fatal, including a bad
    trailing checksum.
    
    Args:
        reader: Binary stream positioned at the start of the data
        lenient: Retry header mismatches as raw deflate
        
    Returns:
        bytes: Decompressed data
        
    Raises:
        DecodeError: If the data cannot be decompressed
    """
    data = reader.read()
    try:
        return _decompress(data, zlib.MAX_WBITS)
    except zlib.error as e:
        if not (lenient and _is_header_error(e)):
            raise DecodeError(f"zlib reading error: {e}") from e
        logger.debug("zlib header mismatch, retrying as raw deflate")
    
    try:
        return _decompress(data, -zlib.MAX_WBITS)
    except zlib.error as e:
        raise DecodeError(f"zlib reading error: {e}") from e
