# hwpcore/core/processor/hwp5_helper/hwp5_fileheader.py
"""
HWP 5.0 FileHeader Stream

FileHeader structure (256 bytes, never compressed):
- 0-31:   Signature "HWP Document File" (NUL padded)
- 32-35:  Version DWORD, 0xMMnnPPrr = MM.nn.PP.rr
- 36-39:  Property flags (compressed, encrypted, distribution, ...)
- 40-43:  License flags (CCL, copy/print restrictions)
- 44-47:  Encrypt version
- 48:     KOGL license country
- 49-255: Reserved
"""
import struct
import logging
from dataclasses import dataclass

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWP_SIGNATURE,
    FILE_HEADER_SIZE,
    FLAG_COMPRESSED,
    FLAG_ENCRYPTED,
    FLAG_DISTRIBUTION,
    FLAG_SCRIPT,
    FLAG_DRM,
    FLAG_XML_TEMPLATE,
    FLAG_HISTORY,
    FLAG_SIGNATURE,
    FLAG_CERT_ENCRYPTED,
    FLAG_CERT_DRM,
    FLAG_CCL,
    FLAG_MOBILE_OPTIMIZED,
    FLAG_PRIVACY_SECURITY,
    FLAG_TRACK_CHANGE,
    FLAG_KOGL,
    FLAG_VIDEO_CONTROL,
    FLAG_TOC_FIELD,
)
from hwpcore.core.processor.hwp5_helper.hwp5_binary import require_length
from hwpcore.core.processor.hwp5_helper.hwp5_errors import InvalidSignature

logger = logging.getLogger("hwpcore.HWP5")

# Bytes 0-48 carry every defined field; the remainder is reserved.
FILE_HEADER_MIN_SIZE = 49

KOGL_COUNTRIES = {6: 'KOR', 15: 'US'}


@dataclass
class FileHeader:
    """
    Decoded FileHeader stream.

    Attributes:
        signature: Signature text with NUL padding removed
        version: Packed version DWORD
        flags: Property flags DWORD
        license_flags: License flags DWORD
        encrypt_version: Encryption scheme version
        kogl_country: KOGL license country code
    """
    signature: str
    version: int
    flags: int
    license_flags: int = 0
    encrypt_version: int = 0
    kogl_country: int = 0

    @property
    def version_tuple(self):
        v = self.version
        return ((v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF)

    @property
    def version_string(self) -> str:
        return ".".join(str(part) for part in self.version_tuple)

    def _flag(self, mask: int) -> bool:
        return bool(self.flags & mask)

    @property
    def compressed(self) -> bool:
        return self._flag(FLAG_COMPRESSED)

    @property
    def encrypted(self) -> bool:
        return self._flag(FLAG_ENCRYPTED)

    @property
    def distribution(self) -> bool:
        return self._flag(FLAG_DISTRIBUTION)

    @property
    def has_script(self) -> bool:
        return self._flag(FLAG_SCRIPT)

    @property
    def drm(self) -> bool:
        return self._flag(FLAG_DRM)

    @property
    def has_xml_template(self) -> bool:
        return self._flag(FLAG_XML_TEMPLATE)

    @property
    def has_history(self) -> bool:
        return self._flag(FLAG_HISTORY)

    @property
    def has_signature(self) -> bool:
        return self._flag(FLAG_SIGNATURE)

    @property
    def cert_encrypted(self) -> bool:
        return self._flag(FLAG_CERT_ENCRYPTED)

    @property
    def cert_drm(self) -> bool:
        return self._flag(FLAG_CERT_DRM)

    @property
    def ccl(self) -> bool:
        return self._flag(FLAG_CCL)

    @property
    def mobile_optimized(self) -> bool:
        return self._flag(FLAG_MOBILE_OPTIMIZED)

    @property
    def privacy_security(self) -> bool:
        return self._flag(FLAG_PRIVACY_SECURITY)

    @property
    def track_change(self) -> bool:
        return self._flag(FLAG_TRACK_CHANGE)

    @property
    def kogl(self) -> bool:
        return self._flag(FLAG_KOGL)

    @property
    def has_video_control(self) -> bool:
        return self._flag(FLAG_VIDEO_CONTROL)

    @property
    def has_toc_field(self) -> bool:
        return self._flag(FLAG_TOC_FIELD)

    @property
    def kogl_country_name(self) -> str:
        return KOGL_COUNTRIES.get(self.kogl_country, '')


def parse_file_header(data: bytes, verify_signature: bool = True) -> FileHeader:
    """
    Parse FileHeader stream.

    Args:
        data: FileHeader stream bytes (normally 256)
        verify_signature: Reject data that does not start with the HWP signature

    Returns:
        FileHeader

    Raises:
        InsufficientData: If data is shorter than the defined fields
        InvalidSignature: If verify_signature and the signature mismatches
    """
    require_length(data, "FileHeader", FILE_HEADER_MIN_SIZE)

    raw_signature = data[:32]
    if verify_signature and not raw_signature.startswith(HWP_SIGNATURE):
        raise InvalidSignature(raw_signature.rstrip(b'\x00'))

    version, flags, license_flags, encrypt_version = struct.unpack('<IIII', data[32:48])
    header = FileHeader(
        signature=raw_signature.rstrip(b'\x00').decode('latin-1'),
        version=version,
        flags=flags,
        license_flags=license_flags,
        encrypt_version=encrypt_version,
        kogl_country=data[48],
    )

    if len(data) != FILE_HEADER_SIZE:
        logger.debug(f"FileHeader has {len(data)} bytes (expected {FILE_HEADER_SIZE})")
    logger.debug(
        f"FileHeader: version={header.version_string}, compressed={header.compressed}, "
        f"encrypted={header.encrypted}, distribution={header.distribution}"
    )
    return header


__all__ = [
    'FileHeader',
    'FILE_HEADER_MIN_SIZE',
    'parse_file_header',
]
