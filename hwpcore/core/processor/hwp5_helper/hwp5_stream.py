# hwpcore/core/processor/hwp5_helper/hwp5_stream.py
"""
HWP 5.0 OLE Container Access

HWP 5.0 files are OLE compound documents. OleStreamProvider exposes their
streams to the decoder through the BaseStreamProvider interface using
olefile:

- FileHeader, DocInfo, BodyText/SectionN, BinData/BINxxxx.ext
- \\x05HwpSummaryInformation
"""
import io
import logging
from typing import List, Optional, Union

import olefile

from hwpcore.core.functions.stream_provider import BaseStreamProvider
from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    OLE_MAGIC,
    ZIP_MAGIC,
    HWP_SIGNATURE,
)

logger = logging.getLogger("hwpcore.HWP5")


def check_file_signature(raw_data: bytes) -> Optional[str]:
    """
    Check file signature to identify file type.

    Args:
        raw_data: File binary data

    Returns:
        "OLE" (HWP 5.0), "ZIP" (HWPX), "HWP3.0", "HWP2.0", "HWP_LEGACY",
        or None if unknown
    """
    if len(raw_data) < 32:
        return None

    # OLE Compound Document (HWP 5.0)
    if raw_data[:8] == OLE_MAGIC:
        return "OLE"

    # ZIP (HWPX)
    if raw_data[:4] == ZIP_MAGIC:
        return "ZIP"

    # HWP 3.0/2.0 Legacy
    if HWP_SIGNATURE + b' V3' in raw_data[:32]:
        return "HWP3.0"

    if HWP_SIGNATURE + b' V2' in raw_data[:32]:
        return "HWP2.0"

    if HWP_SIGNATURE in raw_data[:32]:
        return "HWP_LEGACY"

    return None


class OleStreamProvider(BaseStreamProvider):
    """
    Stream provider backed by an olefile OleFileIO.

    Attributes:
        ole: Open OleFileIO (also used for OLE standard metadata)

    Usage:
        with OleStreamProvider.from_path("report.hwp") as provider:
            document = parse_document(provider)
    """

    def __init__(self, ole: olefile.OleFileIO):
        self.ole = ole

    @classmethod
    def from_path(cls, path: str) -> 'OleStreamProvider':
        return cls(olefile.OleFileIO(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'OleStreamProvider':
        return cls(olefile.OleFileIO(io.BytesIO(data)))

    @classmethod
    def open(cls, source: Union[str, bytes]) -> 'OleStreamProvider':
        """Open a path or in-memory file, rejecting non-OLE input."""
        if isinstance(source, (bytes, bytearray)):
            if not olefile.isOleFile(io.BytesIO(source)):
                raise ValueError(f"Not an OLE compound file (signature: {check_file_signature(bytes(source))})")
            return cls.from_bytes(bytes(source))
        if not olefile.isOleFile(source):
            raise ValueError(f"Not an OLE compound file: {source}")
        return cls.from_path(source)

    def get_stream(self, name: str) -> bytes:
        if not self.ole.exists(name):
            raise KeyError(name)
        stream = self.ole.openstream(name)
        try:
            return stream.read()
        finally:
            stream.close()

    def has_stream(self, name: str) -> bool:
        return self.ole.exists(name)

    def list_streams(self) -> List[str]:
        return ['/'.join(entry) for entry in self.ole.listdir(streams=True, storages=False)]

    def close(self) -> None:
        self.ole.close()

    def __enter__(self) -> 'OleStreamProvider':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    'check_file_signature',
    'OleStreamProvider',
]
