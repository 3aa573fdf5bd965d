# hwpcore/core/processor/hwp5_helper/hwp5_metadata.py
"""
HWP 5.0 Metadata Extraction

Reads document metadata from:
1. \\x05HwpSummaryInformation stream - OLE property set written by HWP
2. olefile's get_metadata() - OLE standard metadata, used for fields the
   HWP stream leaves empty (only when the container is an olefile)
"""
import struct
import logging
from dataclasses import dataclass, fields
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from hwpcore.core.functions.stream_provider import BaseStreamProvider
from hwpcore.core.processor.hwp5_helper.hwp5_constants import STREAM_SUMMARY_INFORMATION

logger = logging.getLogger("hwpcore.HWP5")

_FILETIME_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)

# Property ID to name mapping (OLE standard)
PROPERTY_NAMES = {
    0x02: 'title',
    0x03: 'subject',
    0x04: 'author',
    0x05: 'keywords',
    0x06: 'comments',
    0x08: 'last_saved_by',
    0x09: 'revision_number',
    0x0B: 'last_printed',
    0x0C: 'create_time',
    0x0D: 'last_saved_time',
    0x0E: 'page_count',
}

VT_I4 = 0x03
VT_LPWSTR = 0x1F
VT_FILETIME = 0x40


@dataclass
class HwpSummaryInfo:
    title: Optional[str] = None
    subject: Optional[str] = None
    author: Optional[str] = None
    keywords: Optional[str] = None
    comments: Optional[str] = None
    last_saved_by: Optional[str] = None
    revision_number: Optional[str] = None
    last_printed: Optional[datetime] = None
    create_time: Optional[datetime] = None
    last_saved_time: Optional[datetime] = None
    page_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def _filetime_to_datetime(ft: int) -> Optional[datetime]:
    # FILETIME is 100-nanosecond intervals since 1601-01-01
    if ft <= 0:
        return None
    try:
        return _FILETIME_EPOCH + timedelta(microseconds=ft // 10)
    except OverflowError:
        return None


def _read_property(data: bytes, prop_pos: int) -> Any:
    prop_type = struct.unpack_from('<I', data, prop_pos)[0]
    prop_pos += 4

    if prop_type == VT_LPWSTR:
        str_len = struct.unpack_from('<I', data, prop_pos)[0]
        prop_pos += 4
        if prop_pos + str_len * 2 <= len(data):
            return data[prop_pos:prop_pos + str_len * 2].decode('utf-16le', errors='ignore').rstrip('\x00')
    elif prop_type == VT_FILETIME:
        return _filetime_to_datetime(struct.unpack_from('<Q', data, prop_pos)[0])
    elif prop_type == VT_I4:
        return struct.unpack_from('<i', data, prop_pos)[0]
    return None


def parse_hwp_summary_information(data: bytes) -> Dict[str, Any]:
    """
    Parse HwpSummaryInformation stream (OLE Property Set format).

    Malformed property sets yield whatever was read before the problem.

    Args:
        data: HwpSummaryInformation stream binary data

    Returns:
        Dictionary containing parsed metadata
    """
    metadata: Dict[str, Any] = {}

    # Header (28 bytes), then FMTID (16 bytes) + section offset (4 bytes)
    if len(data) < 48:
        return metadata

    section_offset = struct.unpack_from('<I', data, 44)[0]
    if section_offset + 8 > len(data):
        return metadata

    _section_size, prop_count = struct.unpack_from('<II', data, section_offset)
    pos = section_offset + 8

    try:
        for _ in range(min(prop_count, 50)):  # Limit iterations
            if pos + 8 > len(data):
                break
            prop_id, prop_offset = struct.unpack_from('<II', data, pos)
            pos += 8

            name = PROPERTY_NAMES.get(prop_id)
            if name is None:
                continue

            value = _read_property(data, section_offset + prop_offset)
            if value is not None and value != '':
                metadata[name] = value
    except struct.error as e:
        logger.debug(f"Error parsing HwpSummaryInformation: {e}")

    return metadata


def _ole_metadata(ole) -> Dict[str, Any]:
    """Read olefile's standard SummaryInformation fields."""
    result: Dict[str, Any] = {}
    ole_meta = ole.get_metadata()
    for f in fields(HwpSummaryInfo):
        value = getattr(ole_meta, f.name, None)
        if isinstance(value, bytes):
            value = value.decode('utf-8', errors='replace')
        if value:
            result[f.name] = value
    return result


def read_summary_information(provider: BaseStreamProvider) -> Optional[HwpSummaryInfo]:
    """
    Read document metadata from a stream provider.

    Args:
        provider: Stream provider of the document

    Returns:
        HwpSummaryInfo, or None when no metadata source is available
    """
    metadata: Dict[str, Any] = {}

    ole = getattr(provider, 'ole', None)
    if ole is not None:
        try:
            metadata.update(_ole_metadata(ole))
            logger.debug(f"Extracted OLE metadata: {list(metadata.keys())}")
        except Exception as e:
            logger.warning(f"Failed to extract OLE metadata: {e}")

    if provider.has_stream(STREAM_SUMMARY_INFORMATION):
        logger.debug("Found HwpSummaryInformation stream")
        # HWP-specific metadata takes priority
        metadata.update(parse_hwp_summary_information(provider.get_stream(STREAM_SUMMARY_INFORMATION)))

    if not metadata:
        return None
    return HwpSummaryInfo(**metadata)


__all__ = [
    'HwpSummaryInfo',
    'PROPERTY_NAMES',
    'parse_hwp_summary_information',
    'read_summary_information',
]
