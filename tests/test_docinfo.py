from __future__ import annotations

import struct

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_BIN_DATA,
    HWPTAG_BORDER_FILL,
    HWPTAG_CHAR_SHAPE,
    HWPTAG_COMPATIBLE_DOCUMENT,
    HWPTAG_DOCUMENT_PROPERTIES,
    HWPTAG_FACE_NAME,
    HWPTAG_FORBIDDEN_CHAR,
    HWPTAG_ID_MAPPINGS,
    HWPTAG_MEMO_SHAPE,
    HWPTAG_NUMBERING,
    HWPTAG_PARA_SHAPE,
    HWPTAG_STYLE,
    HWPTAG_TAB_DEF,
    HWPTAG_TRACK_CHANGE_AUTHOR,
)
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, UnknownRecord
from hwpcore.core.processor.hwp5_helper.hwp5_docinfo import (
    BinData,
    BorderFill,
    CharShape,
    FaceName,
    MemoShape,
    Numbering,
    ParaShape,
    RawDocInfoRecord,
    Style,
    TabDef,
    decode_doc_info,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import InsufficientData
from hwpcore.core.processor.hwp5_helper.hwp5_record import parse_records


def _face_name(hwp, name: str) -> bytes:
    return b"\x00" + hwp.wstring(name)


def _char_shape(face_id: int = 0, attribute: int = 0, tail: bytes = b"") -> bytes:
    data = struct.pack("<7H", *([face_id] * 7))
    data += struct.pack("<7B", *([100] * 7))
    data += struct.pack("<7b", *([0] * 7))
    data += struct.pack("<7B", *([100] * 7))
    data += struct.pack("<7b", *([0] * 7))
    data += struct.pack("<iIbb", 1000, attribute, 10, 10)
    data += struct.pack("<4I", 0x000000, 0x0000FF, 0xFFFFFF, 0xB2B2B2)
    return data + tail


def _decode(hwp, records, **kwargs):
    diagnostics = []
    doc_info = decode_doc_info(parse_records(hwp.stream(records)), diagnostics=diagnostics, **kwargs)
    return doc_info, diagnostics


def test_tables_keep_declaration_order(hwp) -> None:
    doc_info, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_DOCUMENT_PROPERTIES, 0, struct.pack("<7H3I", 1, 1, 1, 1, 1, 1, 1, 0, 0, 0)),
            (HWPTAG_ID_MAPPINGS, 0, struct.pack("<15i", 0, 2, 1, 0, 0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0)),
            (HWPTAG_FACE_NAME, 1, _face_name(hwp, "함초롬바탕")),
            (HWPTAG_FACE_NAME, 1, _face_name(hwp, "함초롬돋움")),
            (HWPTAG_FACE_NAME, 1, _face_name(hwp, "Arial")),
            (HWPTAG_CHAR_SHAPE, 1, _char_shape(face_id=1)),
            (HWPTAG_CHAR_SHAPE, 1, _char_shape(attribute=0x3)),
        ],
    )

    assert diagnostics == []
    assert doc_info.document_properties.area_count == 1
    assert doc_info.id_mappings.font_korean == 2
    assert [f.name for f in doc_info.face_names] == ["함초롬바탕", "함초롬돋움", "Arial"]
    assert doc_info.char_shapes[0].face_name_ids["korean"] == 1
    assert doc_info.char_shapes[1].bold and doc_info.char_shapes[1].italic
    assert doc_info.char_shapes[0].border_fill_id is None


def test_failing_record_keeps_its_slot(hwp) -> None:
    doc_info, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_CHAR_SHAPE, 1, _char_shape(face_id=1)),
            (HWPTAG_CHAR_SHAPE, 1, b"\x00" * 10),
            (HWPTAG_CHAR_SHAPE, 1, _char_shape(face_id=3)),
        ],
    )

    assert len(doc_info.char_shapes) == 3
    placeholder = doc_info.char_shapes[1]
    assert isinstance(placeholder, UnknownRecord)
    assert placeholder.tag_id == HWPTAG_CHAR_SHAPE
    assert placeholder.payload == b"\x00" * 10
    assert doc_info.char_shapes[2].face_name_ids["korean"] == 3
    assert len(diagnostics) == 1
    assert diagnostics[0].error == "InsufficientData"
    assert diagnostics[0].tag_id == HWPTAG_CHAR_SHAPE
    assert diagnostics[0].stream == "DocInfo"


def test_strict_mode_reraises(hwp) -> None:
    with pytest.raises(InsufficientData):
        _decode(hwp, [(HWPTAG_CHAR_SHAPE, 0, b"\x00" * 10)], strict=True)


def test_unknown_tags_are_collected(hwp) -> None:
    doc_info, diagnostics = _decode(hwp, [(0x3F0, 0, b"\x01\x02"), (HWPTAG_COMPATIBLE_DOCUMENT, 0, struct.pack("<I", 2))])

    assert doc_info.unknown_records == [UnknownRecord(0x3F0, b"\x01\x02")]
    assert doc_info.compatible_document.target_name == "msword"
    assert diagnostics == []


def test_bin_data_variants(hwp) -> None:
    link = struct.pack("<H", 0x0000) + hwp.wstring("C:\\a.png") + hwp.wstring("a.png")
    embedding = struct.pack("<HH", 0x0001, 1) + hwp.wstring("jpg")
    storage = struct.pack("<HH", 0x0002 | 0x0020, 0x1A)

    doc_info, _ = _decode(hwp, [(HWPTAG_BIN_DATA, 1, link), (HWPTAG_BIN_DATA, 1, embedding), (HWPTAG_BIN_DATA, 1, storage)])
    first, second, third = doc_info.bin_data

    assert isinstance(first, BinData)
    assert first.absolute_path == "C:\\a.png" and first.relative_path == "a.png"
    assert first.stream_name is None
    assert second.stream_name == "BinData/BIN0001.jpg"
    assert third.stream_name == "BinData/BIN001A.OLE"
    assert third.compression == 0x20


def test_face_name_optional_parts(hwp) -> None:
    data = bytes([0x80 | 0x40 | 0x20]) + hwp.wstring("바탕") + b"\x01" + hwp.wstring("Batang")
    data += bytes(range(10)) + hwp.wstring("Serif")

    doc_info, _ = _decode(hwp, [(HWPTAG_FACE_NAME, 0, data)])
    face = doc_info.face_names[0]

    assert isinstance(face, FaceName)
    assert face.alternative_type == 1
    assert face.alternative_name == "Batang"
    assert face.type_info == tuple(range(10))
    assert face.default_name == "Serif"


def test_border_fill_solid(hwp) -> None:
    data = struct.pack("<H", 0x2)
    for index in range(5):
        data += struct.pack("<BBI", 1, index, 0x10 * index)
    data += struct.pack("<I", 0x1) + struct.pack("<IIi", 0xFFFFFF, 0x000000, -1) + b"\x00"

    doc_info, _ = _decode(hwp, [(HWPTAG_BORDER_FILL, 0, data)])
    border_fill = doc_info.border_fills[0]

    assert isinstance(border_fill, BorderFill)
    assert border_fill.has_shadow
    assert [b.width for b in border_fill.borders] == [0, 1, 2, 3]
    assert border_fill.diagonal.color == 0x40
    assert border_fill.has_solid_fill
    assert border_fill.background_color == 0xFFFFFF
    assert border_fill.pattern_type == -1
    assert border_fill.fill_data == b"\x00"


def test_char_shape_optional_tail(hwp) -> None:
    doc_info, _ = _decode(hwp, [(HWPTAG_CHAR_SHAPE, 0, _char_shape(tail=struct.pack("<HI", 2, 0xABCDEF)))])
    shape = doc_info.char_shapes[0]

    assert isinstance(shape, CharShape)
    assert shape.border_fill_id == 2
    assert shape.strikethrough_color == 0xABCDEF
    assert shape.base_size == 1000


def test_tab_def_and_para_shape(hwp) -> None:
    tab_def = struct.pack("<Ih", 0x1, 2) + struct.pack("<IBB2x", 4000, 1, 0) + struct.pack("<IBB2x", 8000, 2, 3)
    para_shape = struct.pack("<I6i3H4hI", 0x4 << 2, 0, 0, 0, 0, 0, 160, 1, 0, 0, 0, 0, 0, 0, 0)
    para_shape += struct.pack("<II", 0, 160)

    doc_info, _ = _decode(hwp, [(HWPTAG_TAB_DEF, 0, tab_def), (HWPTAG_PARA_SHAPE, 0, para_shape)])

    assert isinstance(doc_info.tab_defs[0], TabDef)
    assert doc_info.tab_defs[0].has_left_auto_tab
    assert [(t.position, t.tab_type) for t in doc_info.tab_defs[0].tabs] == [(4000, 1), (8000, 2)]
    shape = doc_info.para_shapes[0]
    assert isinstance(shape, ParaShape)
    assert shape.alignment == 4
    assert shape.line_spacing == 160
    assert shape.tab_def_id == 1
    assert shape.line_spacing2 == 160


def test_style(hwp) -> None:
    data = hwp.wstring("바탕글") + hwp.wstring("Normal") + struct.pack("<BBhHH", 0, 0, 1042, 0, 0)

    doc_info, _ = _decode(hwp, [(HWPTAG_STYLE, 0, data)])

    assert doc_info.styles == [Style("바탕글", "Normal", 0, 0, 1042, 0, 0)]
    assert not doc_info.styles[0].is_char_style


def test_layouts_left_raw(hwp) -> None:
    memo = b"\x01" * 22 + b"\x02\x03"
    doc_info, _ = _decode(
        hwp,
        [
            (HWPTAG_MEMO_SHAPE, 0, memo),
            (HWPTAG_FORBIDDEN_CHAR, 0, b"\x04\x05"),
            (HWPTAG_TRACK_CHANGE_AUTHOR, 0, b"\x06"),
        ],
    )

    assert doc_info.memo_shapes == [MemoShape(prefix=b"\x01" * 22, tail=b"\x02\x03")]
    assert doc_info.forbidden_chars == [RawDocInfoRecord(HWPTAG_FORBIDDEN_CHAR, b"\x04\x05")]
    assert doc_info.track_change_authors == [RawDocInfoRecord(HWPTAG_TRACK_CHANGE_AUTHOR, b"\x06")]


def _numbering_level(hwp, attribute: int, fmt: str, start: int, level_start=None) -> bytes:
    data = struct.pack("<IhhI", attribute, 25, 850, 0xFFFFFFFF) + hwp.wstring(fmt) + struct.pack("<H", start)
    if level_start is not None:
        data += struct.pack("<I", level_start)
    return data


def test_numbering_levels_and_extended_formats(hwp) -> None:
    data = b"".join(_numbering_level(hwp, 0x11 if i == 0 else 0, f"^{i + 1}.", 1, i + 1) for i in range(7))
    data += hwp.wstring("^8)") + hwp.wstring("") + hwp.wstring("^10")

    doc_info, diagnostics = _decode(hwp, [(HWPTAG_NUMBERING, 0, data)], context=DecodeContext(version=0x05000205))

    assert diagnostics == []
    numbering = doc_info.numberings[0]
    assert isinstance(numbering, Numbering)
    assert [level.format_string for level in numbering.levels] == [f"^{i}." for i in range(1, 8)]
    first = numbering.levels[0]
    assert (first.width, first.distance, first.char_shape_id) == (25, 850, 0xFFFFFFFF)
    assert first.align_type == "center"
    assert first.distance_type == "value"
    assert not first.auto_outdent
    assert [level.level_start_number for level in numbering.levels] == list(range(1, 8))
    assert numbering.extended_formats == ["^8)", "", "^10"]


def test_numbering_before_level_start_numbers(hwp) -> None:
    data = b"".join(_numbering_level(hwp, 0, "^1.", 3) for _ in range(7))

    doc_info, _ = _decode(hwp, [(HWPTAG_NUMBERING, 0, data)], context=DecodeContext(version=0x05000204))

    levels = doc_info.numberings[0].levels
    assert len(levels) == 7
    assert all(level.start_number == 3 and level.level_start_number is None for level in levels)
    assert doc_info.numberings[0].extended_formats == []


def test_short_numbering_keeps_complete_levels(hwp) -> None:
    data = _numbering_level(hwp, 0x2, "^1", 1) + struct.pack("<IhhI", 0, 0, 0, 0) + struct.pack("<H", 40)

    doc_info, _ = _decode(hwp, [(HWPTAG_NUMBERING, 0, data)], context=DecodeContext(version=0x05000204))

    levels = doc_info.numberings[0].levels
    assert [level.align_type for level in levels] == ["right", "left"]
    # format length points past the end of the record
    assert levels[1].format_string == ""
    assert levels[1].start_number == 0
