from __future__ import annotations

import struct
import sys
import zlib
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, Iterable, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from hwpcore.core.functions.stream_provider import DictStreamProvider
from hwpcore.core.processor.hwp5_helper.hwp5_constants import FLAG_COMPRESSED, HWP_SIGNATURE


def encode_record(tag_id: int, level: int, payload: bytes = b"", force_extended: bool = False) -> bytes:
    size = len(payload)
    if size >= 0xFFF or force_extended:
        header = tag_id | (level << 10) | (0xFFF << 20)
        return struct.pack("<II", header, size) + payload
    header = tag_id | (level << 10) | (size << 20)
    return struct.pack("<I", header) + payload


def encode_stream(records: Iterable[tuple]) -> bytes:
    return b"".join(encode_record(*item) for item in records)


def raw_deflate(data: bytes) -> bytes:
    compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
    return compressor.compress(data) + compressor.flush()


def file_header_bytes(
    version: int = 0x05000302,
    flags: int = FLAG_COMPRESSED,
    signature: bytes = HWP_SIGNATURE,
) -> bytes:
    header = signature.ljust(32, b"\x00")
    header += struct.pack("<IIII", version, flags, 0, 0)
    return header.ljust(256, b"\x00")


def para_header_payload(char_count: int = 1, control_mask: int = 0, style_id: int = 0) -> bytes:
    return struct.pack("<IIHBBHHHI", char_count, control_mask, 0, style_id, 0, 1, 0, 1, 0)


def list_header_payload(paragraph_count: int, attribute: int = 0) -> bytes:
    return struct.pack("<hHI", paragraph_count, 0, attribute)


def ctrl_header_payload(ctrl_id: str, data: bytes = b"") -> bytes:
    return ctrl_id.encode("latin-1")[::-1] + data


def wstring(text: str) -> bytes:
    return struct.pack("<H", len(text)) + text.encode("utf-16le")


def document_streams(
    doc_info: bytes = b"",
    sections: Optional[Iterable[bytes]] = None,
    flags: int = FLAG_COMPRESSED,
    version: int = 0x05000302,
    extra: Optional[Dict[str, bytes]] = None,
) -> Dict[str, bytes]:
    """Streams of a minimal document; DocInfo and sections deflated when flags say so."""
    compress = raw_deflate if flags & FLAG_COMPRESSED else (lambda data: data)
    streams = {
        "FileHeader": file_header_bytes(version=version, flags=flags),
        "DocInfo": compress(doc_info),
    }
    for index, section in enumerate(sections if sections is not None else [b""]):
        streams[f"BodyText/Section{index}"] = compress(section)
    streams.update(extra or {})
    return streams


@pytest.fixture()
def hwp() -> SimpleNamespace:
    """Byte builders for records, streams and FileHeaders."""
    return SimpleNamespace(
        record=encode_record,
        stream=encode_stream,
        deflate=raw_deflate,
        file_header=file_header_bytes,
        para_header=para_header_payload,
        list_header=list_header_payload,
        ctrl_header=ctrl_header_payload,
        wstring=wstring,
        streams=document_streams,
    )


@pytest.fixture()
def provider_factory() -> Callable[..., DictStreamProvider]:
    def _create(**kwargs) -> DictStreamProvider:
        return DictStreamProvider(document_streams(**kwargs))

    return _create
