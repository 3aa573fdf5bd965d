# hwpcore/core/processor/hwp5_helper/hwp5_binary.py
"""
HWP 5.0 Binary Field Reader

Little-endian cursor over a record payload. Every read is bounds-checked
and raises InsufficientData naming the structure being decoded, so decode
routines never index past the payload.

HWP data types:
- BYTE/UINT8, INT8, WORD/UINT16, INT16, DWORD/UINT32, INT32
- HWPUNIT (UINT32), SHWPUNIT (INT32), HWPUNIT16 (INT16)
- COLORREF (UINT32, 0x00BBGGRR)
- WCHAR (UTF-16LE code unit)
"""
import struct
from typing import Tuple

from hwpcore.core.processor.hwp5_helper.hwp5_errors import InsufficientData


def require_length(data: bytes, what: str, expected: int) -> None:
    """
    Validate minimum payload length.

    Args:
        data: Payload bytes
        what: Structure name used in the error
        expected: Minimum number of bytes

    Raises:
        InsufficientData: If data is shorter than expected
    """
    if len(data) < expected:
        raise InsufficientData(what, expected, len(data))


def decode_ctrl_id(raw: bytes) -> str:
    """
    Convert the 4 stored bytes of a control id into its readable form.

    Control ids are written as a little-endian UINT32 of MAKE_4CHID(a, b, c, d),
    so the readable id is the byte sequence reversed ('lbt ' -> 'tbl ').
    """
    return bytes(reversed(raw[:4])).decode('latin-1')


def decode_utf16(data: bytes) -> str:
    """Decode UTF-16LE text, replacing unpaired surrogates."""
    return data.decode('utf-16le', errors='replace')


class ByteReader:
    """
    Bounds-checked little-endian reader.

    Attributes:
        data: Payload being read
        what: Structure name reported in InsufficientData
        offset: Current read position

    Usage:
        reader = ByteReader(payload, "PageDef")
        width = reader.u32()
        height = reader.u32()
    """

    def __init__(self, data: bytes, what: str, offset: int = 0):
        self.data = data
        self.what = what
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def has(self, size: int) -> bool:
        return self.offset + size <= len(self.data)

    def _check(self, size: int) -> None:
        if self.offset + size > len(self.data):
            raise InsufficientData(self.what, self.offset + size, len(self.data))

    def unpack(self, fmt: str) -> Tuple:
        """Read a struct format (little-endian prefix added) and advance."""
        fmt = '<' + fmt
        size = struct.calcsize(fmt)
        self._check(size)
        values = struct.unpack_from(fmt, self.data, self.offset)
        self.offset += size
        return values

    def u8(self) -> int:
        return self.unpack('B')[0]

    def u16(self) -> int:
        return self.unpack('H')[0]

    def i16(self) -> int:
        return self.unpack('h')[0]

    def u32(self) -> int:
        return self.unpack('I')[0]

    def i32(self) -> int:
        return self.unpack('i')[0]

    def read(self, size: int) -> bytes:
        self._check(size)
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def skip(self, size: int) -> None:
        self._check(size)
        self.offset += size

    def rest(self) -> bytes:
        """Return all unread bytes and move to the end."""
        chunk = self.data[self.offset:]
        self.offset = len(self.data)
        return chunk

    def wchars(self, count: int) -> str:
        """Read `count` UTF-16LE code units."""
        return decode_utf16(self.read(count * 2))

    def wstring(self) -> str:
        """Read a WORD length followed by that many WCHARs."""
        length = self.u16()
        return self.wchars(length)

    def ctrl_id(self) -> str:
        return decode_ctrl_id(self.read(4))


__all__ = [
    'require_length',
    'decode_ctrl_id',
    'decode_utf16',
    'ByteReader',
]
