from __future__ import annotations

import struct

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_ctrl_header import (
    AutoNumber,
    ColumnDefinition,
    Comment,
    CtrlHeader,
    Field,
    FootnoteEndnote,
    HeaderFooter,
    Hide,
    ObjectCommon,
    OtherControl,
    PageAdjust,
    SectionDefinition,
    decode_ctrl_header,
    decode_ctrl_header_data,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import InsufficientData


@pytest.mark.parametrize("ctrl_id", ["fn  ", "en  "])
def test_footnote_endnote(ctrl_id: str) -> None:
    note = decode_ctrl_header_data(ctrl_id, bytes([3, 0, 0, 0, 0, 0, 7, 0]))

    assert isinstance(note, FootnoteEndnote)
    assert note.number == 3
    assert note.attribute == 7
    assert note.reserved2 == 0
    assert note.reserved == b"\x00" * 5


def test_footnote_seven_bytes_is_insufficient() -> None:
    with pytest.raises(InsufficientData) as excinfo:
        decode_ctrl_header_data("fn  ", bytes([3, 0, 0, 0, 0, 0, 7]))

    assert excinfo.value.expected == 8
    assert excinfo.value.actual == 7


def test_hide() -> None:
    hide = decode_ctrl_header_data("pghd", bytes([1, 0]))

    assert hide == Hide(attribute=1)
    assert hide.hide_header
    assert not hide.hide_footer


def test_page_adjust() -> None:
    assert decode_ctrl_header_data("pgad", bytes([2, 0, 0, 0])) == PageAdjust(attribute=2)


def test_full_payload_reverses_ctrl_id(hwp) -> None:
    header = decode_ctrl_header(hwp.ctrl_header("pghd", b"\x03\x00"))

    assert isinstance(header, CtrlHeader)
    assert header.ctrl_id == "pghd"
    assert header.ctrl_id_value == struct.unpack("<I", b"dhgp")[0]
    assert header.data.hide_footer


def test_ctrl_header_needs_ctrl_id() -> None:
    with pytest.raises(InsufficientData) as excinfo:
        decode_ctrl_header(b"lbt")
    assert excinfo.value.what == "CtrlHeader"
    assert excinfo.value.expected == 4


def test_table_object_common(hwp) -> None:
    # treat-as-char, text wrap = 2
    attribute = 0x1 | (2 << 21)
    data = struct.pack("<IiiIIi4hIi", attribute, 100, 200, 3000, 4000, 5, 10, 20, 30, 40, 77, 1)
    data += hwp.wstring("표 설명")

    obj = decode_ctrl_header_data("tbl ", data)

    assert isinstance(obj, ObjectCommon)
    assert obj.offset_y == 100 and obj.offset_x == 200
    assert (obj.width, obj.height) == (3000, 4000)
    # stored bottom, left, right, top
    assert obj.margins == (20, 30, 40, 10)
    assert obj.instance_id == 77
    assert obj.treat_as_char
    assert obj.text_wrap == 2
    assert obj.description == "표 설명"


def test_object_common_without_description() -> None:
    obj = decode_ctrl_header_data("gso ", b"\x00" * 40)
    assert obj.description == ""


def test_header_footer_optional_tail() -> None:
    short = decode_ctrl_header_data("head", struct.pack("<I", 2))
    full = decode_ctrl_header_data("foot", struct.pack("<IIIBB", 1, 500, 600, 1, 2))

    assert short == HeaderFooter(attribute=2)
    assert short.apply_page == 2
    assert (full.text_width, full.text_height, full.number_ref) == (500, 600, 2)


def test_column_definition_with_widths() -> None:
    # two columns, widths listed
    attribute = 2 << 2
    data = struct.pack("<Hh", attribute, 850) + struct.pack("<HH", 1000, 2000) + struct.pack("<HBBI", 0, 1, 3, 0xFF)

    column = decode_ctrl_header_data("cold", data)

    assert isinstance(column, ColumnDefinition)
    assert column.column_count == 2
    assert column.column_widths == [1000, 2000]
    assert column.divider_color == 0xFF


def test_section_definition() -> None:
    data = struct.pack("<IhhhIHHHHHH", 0x21, 1134, 0, 0, 8000, 0, 1, 1, 1, 1, 1042)

    section = decode_ctrl_header_data("secd", data)

    assert isinstance(section, SectionDefinition)
    assert section.hide_header and section.hide_page_number
    assert section.default_tab_spacing == 8000
    assert section.language == 1042


def test_auto_number() -> None:
    data = struct.pack("<IH", 0x1001, 4) + "*".encode("utf-16le") + "(".encode("utf-16le") + ")".encode("utf-16le")

    number = decode_ctrl_header_data("atno", data)

    assert isinstance(number, AutoNumber)
    assert number.number == 4
    assert number.number_type == 1
    assert number.superscript
    assert (number.user_symbol, number.prefix, number.suffix) == ("*", "(", ")")


def test_field_start_reads_type_from_payload(hwp) -> None:
    data = b"klh%" + struct.pack("<IB", 0x1, 0) + hwp.wstring("https://example.com") + struct.pack("<I", 99)

    field = decode_ctrl_header_data("%%%%", data)

    assert isinstance(field, Field)
    assert field.field_type == "%hlk"
    assert field.command == "https://example.com"
    assert field.field_id == 99
    assert field.editable_in_form


def test_other_field_uses_ctrl_id_as_type(hwp) -> None:
    data = struct.pack("<IB", 0x8000, 0) + hwp.wstring("yyyy")

    field = decode_ctrl_header_data("%dte", data)

    assert field.field_type == "%dte"
    assert field.command == "yyyy"
    assert field.field_id is None
    assert field.dirty


def test_comment_with_empty_strings() -> None:
    data = struct.pack("<H", 0) + b"\x00\x00" + struct.pack("<H", 0) + b"\x00\x00" + struct.pack("<IIIII", 1, 2, 3, 4, 5)

    comment = decode_ctrl_header_data("cmtt", data)

    assert isinstance(comment, Comment)
    assert (comment.main_text, comment.sub_text) == ("", "")
    assert (comment.position, comment.alignment) == (1, 5)


def test_unlisted_control_keeps_raw_data() -> None:
    assert decode_ctrl_header_data("tcmt", b"\x01\x02\x03") == OtherControl(b"\x01\x02\x03")
