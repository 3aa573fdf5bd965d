from __future__ import annotations

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_bodytext import BODY_TEXT_DECODERS
from hwpcore.core.processor.hwp5_helper.hwp5_ctrl_header import (
    CTRL_HEADER_DECODERS,
    OtherControl,
    decode_ctrl_header_data,
)
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, RecordDecoder, dispatch
from hwpcore.core.processor.hwp5_helper.hwp5_docinfo import DOCINFO_DECODERS
from hwpcore.core.processor.hwp5_helper.hwp5_errors import InsufficientData
from hwpcore.core.processor.hwp5_helper.hwp5_paragraph import PARAGRAPH_DECODERS
from hwpcore.core.processor.hwp5_helper.hwp5_shape_component import SHAPE_COMPONENT_DECODERS

TABLES = {
    "docinfo": DOCINFO_DECODERS,
    "paragraph": PARAGRAPH_DECODERS,
    "shape": SHAPE_COMPONENT_DECODERS,
    "bodytext": BODY_TEXT_DECODERS,
}

SIZED_TAG_ENTRIES = [
    pytest.param(table, key, id=f"{name}-{entry.name}-{key}")
    for name, table in TABLES.items()
    for key, entry in table.items()
    if entry.min_length > 0
]

SIZED_CTRL_IDS = [
    pytest.param(ctrl_id, id=repr(ctrl_id))
    for ctrl_id, entry in CTRL_HEADER_DECODERS.items()
    if entry.min_length > 0
]

EXPECTED_MINIMUMS = {
    "DocumentProperties": 26,
    "IdMappings": 60,
    "CharShape": 68,
    "ParaShape": 46,
    "BorderFill": 32,
    "ParaHeader": 22,
    "PageDef": 40,
    "FootnoteShape": 26,
    "PageBorderFill": 14,
    "Table": 22,
    "ShapeEllipse": 60,
    "ShapePicture": 78,
    "ShapeOle": 24,
}


@pytest.mark.parametrize(("table", "key"), SIZED_TAG_ENTRIES)
def test_payload_one_byte_short_raises(table, key) -> None:
    entry = table[key]
    with pytest.raises(InsufficientData) as excinfo:
        dispatch(table, key, b"\x00" * (entry.min_length - 1))

    assert excinfo.value.what == entry.name
    assert excinfo.value.expected == entry.min_length
    assert excinfo.value.actual == entry.min_length - 1


@pytest.mark.parametrize("ctrl_id", SIZED_CTRL_IDS)
def test_control_data_one_byte_short_raises(ctrl_id: str) -> None:
    entry = CTRL_HEADER_DECODERS[ctrl_id]
    with pytest.raises(InsufficientData) as excinfo:
        decode_ctrl_header_data(ctrl_id, b"\x00" * (entry.min_length - 1))

    assert excinfo.value.expected == entry.min_length
    assert excinfo.value.actual == entry.min_length - 1


def test_generic_field_minimum() -> None:
    with pytest.raises(InsufficientData) as excinfo:
        decode_ctrl_header_data("%hlk", b"\x00" * 10)
    assert excinfo.value.expected == 11


@pytest.mark.parametrize(("name", "minimum"), sorted(EXPECTED_MINIMUMS.items()))
def test_declared_minimums(name: str, minimum: int) -> None:
    declared = {entry.name: entry.min_length for table in TABLES.values() for entry in table.values()}
    assert declared[name] == minimum


def test_unknown_key_is_not_an_error() -> None:
    assert dispatch(DOCINFO_DECODERS, 0x3FF, b"\x01\x02") is None
    assert isinstance(decode_ctrl_header_data("zzzz", b"\x01\x02"), OtherControl)


def test_default_entry_is_used_for_unknown_keys() -> None:
    default = RecordDecoder("Raw", 0, lambda payload, context: ("raw", payload, context.version))
    result = dispatch({}, 0x200, b"\xaa", DecodeContext(version=0x05000105), default=default)
    assert result == ("raw", b"\xaa", 0x05000105)


def test_context_child_does_not_modify_parent() -> None:
    parent = DecodeContext(version=0x05010000)
    child = parent.child(nested=True)

    assert child.nested and child.version == parent.version
    assert not parent.nested
