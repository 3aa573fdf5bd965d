from __future__ import annotations

import struct

import pytest

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_PAGE_DEF,
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_SHAPE_COMPONENT,
    HWPTAG_SHAPE_COMPONENT_CONTAINER,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_TABLE,
)
from hwpcore.core.processor.hwp5_helper.hwp5_bodytext import decode_section
from hwpcore.core.processor.hwp5_helper.hwp5_ctrl_header import CtrlHeader
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, UnknownRecord
from hwpcore.core.processor.hwp5_helper.hwp5_errors import InsufficientData
from hwpcore.core.processor.hwp5_helper.hwp5_model import (
    CtrlHeaderRecord,
    ListHeaderRecord,
    Paragraph,
    ShapeComponentRecord,
)
from hwpcore.core.processor.hwp5_helper.hwp5_paragraph import PageDef, ParaText, Table
from hwpcore.core.processor.hwp5_helper.hwp5_record import HwpRecord, parse_records
from hwpcore.core.processor.hwp5_helper.hwp5_shape_component import ShapeContainer, ShapePicture

CONTEXT = DecodeContext(version=0x05000302)


def _text(value: str) -> bytes:
    return value.encode("utf-16le")


def _table_payload(rows: int = 1, cols: int = 2) -> bytes:
    return struct.pack("<IHHh4h", 0, rows, cols, 0, 0, 0, 0, 0) + struct.pack(f"<{rows}h", *([cols] * rows)) + struct.pack("<HH", 1, 0)


def _component(ctrl_id: str, nested: bool) -> bytes:
    raw_id = ctrl_id.encode("latin-1")[::-1]
    ids = raw_id if nested else raw_id * 2
    body = struct.pack("<iiHH5Ihii", 0, 0, 0, 1, 100, 100, 100, 100, 0, 0, 50, 50)
    body += struct.pack("<H", 0) + struct.pack("<6d", 1.0, 0.0, 0.0, 0.0, 1.0, 0.0)
    return ids + body


def _picture(bindata_id: int) -> bytes:
    return b"\x00" * 68 + struct.pack("<bbBHBI", 0, 0, 0, bindata_id, 0, 0)


def _decode(hwp, records, strict: bool = False):
    diagnostics = []
    section = decode_section(0, parse_records(hwp.stream(records)), CONTEXT, diagnostics, strict)
    return section, diagnostics


def test_paragraphs_and_text(hwp) -> None:
    section, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(3)),
            (HWPTAG_PARA_TEXT, 1, _text("첫째\r")),
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(3)),
            (HWPTAG_PARA_TEXT, 1, _text("둘째\r")),
        ],
    )

    assert diagnostics == []
    assert [p.text for p in section.paragraphs] == ["첫째\n", "둘째\n"]
    assert section.paragraphs[0].header.char_count == 3
    assert section.extra_records == []
    assert not section.partial


def test_table_cells_take_following_paragraphs(hwp) -> None:
    section, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(9)),
            (HWPTAG_PARA_TEXT, 1, _text("\x0b")),
            (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("tbl ", b"\x00" * 40)),
            (HWPTAG_TABLE, 2, _table_payload()),
            (HWPTAG_LIST_HEADER, 2, hwp.list_header(1)),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(2)),
            (HWPTAG_PARA_TEXT, 3, _text("A1")),
            (HWPTAG_LIST_HEADER, 2, hwp.list_header(2)),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(2)),
            (HWPTAG_PARA_TEXT, 3, _text("B1")),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(2)),
            (HWPTAG_PARA_TEXT, 3, _text("B2")),
        ],
    )

    assert diagnostics == []
    ctrl = section.paragraphs[0].find_records(CtrlHeaderRecord)[0]
    assert ctrl.ctrl_id == "tbl "
    assert isinstance(ctrl.children[0], Table)
    cells = [c for c in ctrl.children if isinstance(c, ListHeaderRecord)]
    assert [[p.text for p in cell.paragraphs] for cell in cells] == [["A1"], ["B1", "B2"]]
    # taken paragraphs do not show up again as control paragraphs
    assert ctrl.paragraphs == []


def test_header_paragraphs_belong_to_control(hwp) -> None:
    section, _ = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(9)),
            (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("head", struct.pack("<I", 0))),
            (HWPTAG_LIST_HEADER, 2, hwp.list_header(1)),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(4)),
            (HWPTAG_PARA_TEXT, 3, _text("머리말")),
        ],
    )

    ctrl = section.paragraphs[0].records[0]
    assert isinstance(ctrl.header, CtrlHeader)
    assert ctrl.children[0].paragraphs[0].text == "머리말"


def test_drawing_object_components(hwp) -> None:
    section, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(9)),
            (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("gso ", b"\x00" * 40)),
            (HWPTAG_SHAPE_COMPONENT, 2, _component("$con", nested=False)),
            (HWPTAG_SHAPE_COMPONENT_CONTAINER, 3, struct.pack("<H", 1) + b"cip$"),
            (HWPTAG_SHAPE_COMPONENT, 3, _component("$pic", nested=True)),
            (HWPTAG_SHAPE_COMPONENT_PICTURE, 4, _picture(1)),
        ],
    )

    assert diagnostics == []
    ctrl = section.paragraphs[0].records[0]
    group = ctrl.children[0]
    assert isinstance(group, ShapeComponentRecord)
    assert group.component.ctrl_id == "$con" and group.component.ctrl_id2 == "$con"
    assert isinstance(group.children[0], ShapeContainer)
    inner = group.children[1]
    assert inner.component.ctrl_id == "$pic" and inner.component.ctrl_id2 is None
    assert isinstance(inner.children[0], ShapePicture)
    assert inner.children[0].bindata_id == 1


def test_failed_record_keeps_children(hwp) -> None:
    section, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(9)),
            (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("fn  ", b"\x01\x02")),
            (HWPTAG_LIST_HEADER, 2, hwp.list_header(1)),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(3)),
            (HWPTAG_PARA_TEXT, 3, _text("각주")),
        ],
    )

    ctrl = section.paragraphs[0].records[0]
    assert isinstance(ctrl.header, UnknownRecord)
    assert ctrl.header.tag_id == HWPTAG_CTRL_HEADER
    assert "FootnoteEndnote" in ctrl.header.error
    assert ctrl.children[0].paragraphs[0].text == "각주"
    assert len(diagnostics) == 1
    assert diagnostics[0].stream == "BodyText/Section0"
    assert diagnostics[0].tag_id == HWPTAG_CTRL_HEADER


def test_strict_mode_reraises(hwp) -> None:
    with pytest.raises(InsufficientData):
        _decode(hwp, [(HWPTAG_PARA_HEADER, 0, b"\x00" * 10)], strict=True)


def test_unknown_tags_and_stray_roots(hwp) -> None:
    section, diagnostics = _decode(
        hwp,
        [
            (HWPTAG_PAGE_DEF, 0, struct.pack("<10I", *range(10))),
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(1)),
            (0x3F0, 1, b"\xaa\xbb"),
        ],
    )

    assert diagnostics == []
    assert isinstance(section.extra_records[0], PageDef)
    assert section.paragraphs[0].records == [UnknownRecord(0x3F0, b"\xaa\xbb")]


def test_nested_paragraph_text_is_not_merged(hwp) -> None:
    section, _ = _decode(
        hwp,
        [
            (HWPTAG_PARA_HEADER, 0, hwp.para_header(2)),
            (HWPTAG_PARA_TEXT, 1, _text("바깥")),
            (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("tbl ", b"\x00" * 40)),
            (HWPTAG_LIST_HEADER, 2, hwp.list_header(1)),
            (HWPTAG_PARA_HEADER, 2, hwp.para_header(2)),
            (HWPTAG_PARA_TEXT, 3, _text("안쪽")),
        ],
    )

    paragraph = section.paragraphs[0]
    assert isinstance(paragraph, Paragraph)
    assert paragraph.text == "바깥"
    assert [type(r) for r in paragraph.records] == [ParaText, CtrlHeaderRecord]


def test_truncated_section_is_partial(hwp) -> None:
    data = hwp.stream([(HWPTAG_PARA_HEADER, 0, hwp.para_header(1)), (HWPTAG_PARA_TEXT, 1, _text("잘림"))])
    diagnostics = []

    section = decode_section(2, parse_records(data[:-2], diagnostics, "BodyText/Section2"), CONTEXT, diagnostics)

    assert section.index == 2
    assert section.partial
    assert len(section.paragraphs) == 1
    assert section.paragraphs[0].records == []


def test_wide_table_reads_each_child_list_once(hwp, monkeypatch) -> None:
    cells = 400
    records = [
        (HWPTAG_PARA_HEADER, 0, hwp.para_header(9)),
        (HWPTAG_CTRL_HEADER, 1, hwp.ctrl_header("tbl ", b"\x00" * 40)),
        (HWPTAG_TABLE, 2, _table_payload(rows=1, cols=cells)),
    ]
    for _ in range(cells):
        records.append((HWPTAG_LIST_HEADER, 2, hwp.list_header(1)))
        records.append((HWPTAG_PARA_HEADER, 2, hwp.para_header(1)))
        records.append((HWPTAG_PARA_TEXT, 3, _text("x")))
    tree = parse_records(hwp.stream(records))

    materialized = []
    children = HwpRecord.children

    def counting_children(self):
        materialized.append(len(self.child_indices))
        return children.fget(self)

    monkeypatch.setattr(HwpRecord, "children", property(counting_children))

    section = decode_section(0, tree, CONTEXT)

    ctrl = section.paragraphs[0].records[0]
    decoded = [c for c in ctrl.children if isinstance(c, ListHeaderRecord)]
    assert len(decoded) == cells
    assert all(cell.paragraphs[0].text == "x" for cell in decoded)
    # every child list is built once, so the total stays linear in the record count
    assert sum(materialized) < len(tree)
