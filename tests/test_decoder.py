from __future__ import annotations

import os
import zlib

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    BINDATA_COMPRESS_DEFAULT,
    BINDATA_COMPRESS_NO,
    BINDATA_COMPRESS_YES,
    FLAG_COMPRESSED,
)
from hwpcore.core.processor.hwp5_helper.hwp5_decoder import (
    decompress_bindata,
    decompress_stream,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import DecompressionError
from hwpcore.core.processor.hwp5_helper.hwp5_fileheader import parse_file_header


@pytest.mark.parametrize(
    "payload",
    [b"a", b"hello world" * 100, os.urandom(4096), bytes(range(256)) * 40],
)
def test_raw_deflate_inflates_to_original(hwp, payload: bytes) -> None:
    assert decompress_stream(hwp.deflate(payload), True) == payload


def test_zlib_wrapped_stream_is_accepted() -> None:
    payload = b"zlib wrapped section" * 20
    assert decompress_stream(zlib.compress(payload), True) == payload


def test_uncompressed_stream_is_returned_as_is() -> None:
    data = b"\x42\x00\x00\x00plain"
    assert decompress_stream(data, False) is data


def test_empty_compressed_stream_yields_empty_bytes() -> None:
    assert decompress_stream(b"", True) == b""


def test_truncated_deflate_raises(hwp) -> None:
    compressed = hwp.deflate(os.urandom(2048))
    with pytest.raises(DecompressionError) as excinfo:
        decompress_stream(compressed[: len(compressed) // 2], True, "DocInfo")
    assert excinfo.value.stream == "DocInfo"


def test_trailing_garbage_raises(hwp) -> None:
    compressed = hwp.deflate(b"section body" * 10) + b"\xde\xad\xbe\xef"
    with pytest.raises(DecompressionError):
        decompress_stream(compressed, True, "BodyText/Section0")


def test_non_deflate_data_raises() -> None:
    with pytest.raises(DecompressionError) as excinfo:
        decompress_stream(b"\xff" * 64, True, "BodyText/Section3")
    assert "BodyText/Section3" in str(excinfo.value)


def test_file_header_flag_selects_decompression(hwp) -> None:
    compressed = parse_file_header(hwp.file_header(flags=FLAG_COMPRESSED)).compressed
    stored = parse_file_header(hwp.file_header(flags=0)).compressed

    assert decompress_stream(hwp.deflate(b"body"), compressed) == b"body"
    assert decompress_stream(b"body", stored) == b"body"


@pytest.mark.parametrize(
    ("mode", "document_compressed", "expect_inflate"),
    [
        (BINDATA_COMPRESS_DEFAULT, True, True),
        (BINDATA_COMPRESS_DEFAULT, False, False),
        (BINDATA_COMPRESS_YES, False, True),
        (BINDATA_COMPRESS_NO, True, False),
    ],
)
def test_bindata_compression_mode(hwp, mode: int, document_compressed: bool, expect_inflate: bool) -> None:
    image = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
    stored = hwp.deflate(image) if expect_inflate else image
    assert decompress_bindata(stored, mode, document_compressed, "BinData/BIN0001.png") == image
