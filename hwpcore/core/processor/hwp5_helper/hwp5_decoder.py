# hwpcore/core/processor/hwp5_helper/hwp5_decoder.py
"""
HWP 5.0 Stream Decompression

Provides decompression utilities for HWP 5.0 OLE streams.

HWP 5.0 uses zlib Deflate compression for:
- DocInfo stream
- BodyText/Section streams
- BinData streams (images, OLE objects)

The compression flag is read from the FileHeader (FileHeader.compressed).
A stream is either inflated completely or rejected: truncated or
trailing-garbage deflate data raises DecompressionError instead of
returning a silently shortened buffer.
"""
import zlib
import logging

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    BINDATA_COMPRESS_YES,
    BINDATA_COMPRESS_NO,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import DecompressionError

logger = logging.getLogger("hwpcore.HWP5")

# Raw deflate (no header) is what HWP writes; zlib-wrapped data shows up
# in files produced by some third-party writers.
_WBITS_CANDIDATES = (
    (-zlib.MAX_WBITS, 'raw deflate'),
    (zlib.MAX_WBITS, 'zlib'),
)


def _inflate(data: bytes, wbits: int) -> bytes:
    """Inflate the complete deflate stream or raise zlib.error."""
    inflater = zlib.decompressobj(wbits)
    result = inflater.decompress(data)
    result += inflater.flush()
    if not inflater.eof:
        raise zlib.error("incomplete or truncated stream")
    if inflater.unused_data:
        raise zlib.error(f"{len(inflater.unused_data)} bytes of trailing data")
    return result


def decompress_stream(data: bytes, is_compressed_flag: bool = True, stream_name: str = "") -> bytes:
    """
    Decompress stream data if necessary.

    HWP uses zlib Deflate algorithm. Tries raw deflate (-15) first,
    then standard zlib (with header).

    Args:
        data: Stream binary data
        is_compressed_flag: Whether data should be decompressed
        stream_name: Stream name reported in errors

    Returns:
        Decompressed data (the input object itself when not compressed)

    Raises:
        DecompressionError: If data is flagged compressed but does not inflate
    """
    if not is_compressed_flag:
        return data

    if not data:
        return b''

    errors = []
    for wbits, label in _WBITS_CANDIDATES:
        try:
            result = _inflate(data, wbits)
        except zlib.error as e:
            errors.append(f"{label}: {e}")
            continue
        logger.debug(f"Stream '{stream_name}' inflated ({label}): {len(data)} -> {len(result)} bytes")
        return result

    raise DecompressionError(stream_name, "; ".join(errors))


def decompress_bindata(data: bytes, compress_mode: int, document_compressed: bool, name: str = "") -> bytes:
    """
    Decompress a BinData stream (images, OLE objects).

    Each BIN_DATA record carries its own compression mode; the default mode
    follows the document's FileHeader flag.

    Args:
        data: BinData binary data
        compress_mode: BinData attribute bits 4-5 (BINDATA_COMPRESS_*)
        document_compressed: FileHeader compression flag
        name: Stream name reported in errors

    Returns:
        Decompressed data
    """
    if compress_mode == BINDATA_COMPRESS_YES:
        compressed = True
    elif compress_mode == BINDATA_COMPRESS_NO:
        compressed = False
    else:
        compressed = document_compressed
    return decompress_stream(data, compressed, name)


__all__ = [
    'decompress_stream',
    'decompress_bindata',
]
