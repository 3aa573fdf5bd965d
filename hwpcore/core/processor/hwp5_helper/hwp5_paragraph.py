# hwpcore/core/processor/hwp5_helper/hwp5_paragraph.py
"""
HWP 5.0 BodyText Paragraph Records

Decoders for the records that make up a paragraph and the page/table
records that hang off control headers:

- PARA_HEADER: paragraph properties, control mask
- PARA_TEXT: UTF-16LE text with inline/extended control characters
- PARA_CHAR_SHAPE / PARA_LINE_SEG / PARA_RANGE_TAG: fixed-size arrays
- LIST_HEADER: paragraph list of table cells, text boxes, header/footer
- PAGE_DEF / FOOTNOTE_SHAPE / PAGE_BORDER_FILL: section page setup
- TABLE: table properties (rows, cols, row sizes, zones)
- EQEDIT: equation script

Control/shape records are handled by hwp5_ctrl_header and
hwp5_shape_component.
"""
import struct
import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_PARA_CHAR_SHAPE,
    HWPTAG_PARA_LINE_SEG,
    HWPTAG_PARA_RANGE_TAG,
    HWPTAG_LIST_HEADER,
    HWPTAG_PAGE_DEF,
    HWPTAG_FOOTNOTE_SHAPE,
    HWPTAG_PAGE_BORDER_FILL,
    HWPTAG_TABLE,
    HWPTAG_CTRL_DATA,
    HWPTAG_EQEDIT,
    HWPTAG_FORM_OBJECT,
    HWPTAG_MEMO_LIST,
    HWPTAG_CHART_DATA,
    HWPTAG_VIDEO_DATA,
    CHAR_CONTROL_CODES,
    CONTROL_CHAR_WCHARS,
    VERSION_5_0_1_0,
    VERSION_5_0_3_2,
)
from hwpcore.core.processor.hwp5_helper.hwp5_binary import ByteReader, decode_ctrl_id, decode_utf16
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, RecordDecoder

logger = logging.getLogger("hwpcore.HWP5")


# ============================================================================
# Paragraph Header
# ============================================================================

def _mask_bit(bit: int):
    return property(lambda self: bool(self.control_mask & (1 << bit)))


@dataclass
class ParaHeader:
    """
    PARA_HEADER record.

    control_mask has one bit per control character code present in the
    paragraph text; the bits are exposed as read-only properties.
    """
    char_count: int
    control_mask: int
    para_shape_id: int
    style_id: int
    column_divide: int
    char_shape_count: int
    range_tag_count: int
    line_align_count: int
    instance_id: int
    section_merge: Optional[int] = None
    last_in_list: bool = False

    has_section_column_def = _mask_bit(2)
    has_field_start = _mask_bit(3)
    has_field_end = _mask_bit(4)
    has_title_mark = _mask_bit(8)
    has_tab = _mask_bit(9)
    has_line_break = _mask_bit(10)
    has_drawing_table_object = _mask_bit(11)
    has_para_break = _mask_bit(13)
    has_hidden_comment = _mask_bit(15)
    has_header_footer = _mask_bit(16)
    has_footnote_endnote = _mask_bit(17)
    has_auto_number = _mask_bit(18)
    has_page_control = _mask_bit(21)
    has_bookmark = _mask_bit(22)
    has_overlap = _mask_bit(23)
    has_hyphen = _mask_bit(24)
    has_bundle_blank = _mask_bit(30)
    has_fixed_width_blank = _mask_bit(31)


def decode_para_header(data: bytes, context: DecodeContext) -> ParaHeader:
    reader = ByteReader(data, "ParaHeader")
    raw_count, control_mask, para_shape_id, style_id, column_divide = reader.unpack('IIHBB')
    char_shape_count, range_tag_count, line_align_count, instance_id = reader.unpack('HHHI')

    header = ParaHeader(
        # Top bit marks the last paragraph of a list
        char_count=raw_count & 0x7FFFFFFF,
        control_mask=control_mask,
        para_shape_id=para_shape_id,
        style_id=style_id,
        column_divide=column_divide,
        char_shape_count=char_shape_count,
        range_tag_count=range_tag_count,
        line_align_count=line_align_count,
        instance_id=instance_id,
        last_in_list=bool(raw_count & 0x80000000),
    )
    if context.version >= VERSION_5_0_3_2 and reader.has(2):
        header.section_merge = reader.u16()
    return header


# ============================================================================
# Paragraph Text
# ============================================================================

_CONTROL_TEXT = {
    0x09: '\t',
    0x0A: '\n',
    0x0B: '\x0b',
    0x0D: '\n',
    0x18: '-',
    0x1E: ' ',
    0x1F: ' ',
}


class ControlChar(NamedTuple):
    """
    Control character found in PARA_TEXT.

    Attributes:
        position: Position in WCHAR units from the start of the text
        code: Control code (0-31)
        payload: Bytes following the code for 8-WCHAR controls (14 bytes), else b''
    """
    position: int
    code: int
    payload: bytes

    @property
    def is_extended(self) -> bool:
        return self.code not in CHAR_CONTROL_CODES

    @property
    def ctrl_id(self) -> Optional[str]:
        """Control id carried by extended controls (e.g. 'tbl ', 'gso ')."""
        if len(self.payload) < 4:
            return None
        return decode_ctrl_id(self.payload[:4])


@dataclass
class ParaText:
    """
    PARA_TEXT record.

    Attributes:
        text: Decoded text with control characters mapped
        controls: Control characters in order of position
        trailing: Dangling byte of an odd-length payload (b'' normally)
    """
    text: str
    controls: List[ControlChar] = field(default_factory=list)
    trailing: bytes = b''


def decode_para_text(data: bytes, context: DecodeContext) -> ParaText:
    """
    Decode PARA_TEXT.

    Codes 0, 10, 13, 24, 30, 31 occupy one WCHAR; every other code below 32
    is followed by seven more WCHARs of control data.
    """
    pieces = []
    controls = []
    wchar_count = len(data) // 2
    cursor = 0
    run_start = 0

    while cursor < wchar_count:
        code = struct.unpack_from('<H', data, cursor * 2)[0]
        if code >= 32:
            cursor += 1
            continue

        if run_start < cursor:
            pieces.append(decode_utf16(data[run_start * 2:cursor * 2]))

        if code in CHAR_CONTROL_CODES:
            width = 1
        else:
            width = CONTROL_CHAR_WCHARS
        end = min(cursor + width, wchar_count)
        controls.append(ControlChar(cursor, code, data[(cursor + 1) * 2:end * 2]))
        pieces.append(_CONTROL_TEXT.get(code, ''))

        cursor = end
        run_start = cursor

    if run_start < wchar_count:
        pieces.append(decode_utf16(data[run_start * 2:wchar_count * 2]))

    trailing = data[wchar_count * 2:]
    if trailing:
        logger.debug(f"PARA_TEXT: odd payload length {len(data)}, last byte kept aside")
    return ParaText(''.join(pieces), controls, trailing)


# ============================================================================
# Fixed-size Arrays
# ============================================================================

class CharShapeRef(NamedTuple):
    position: int
    shape_id: int


@dataclass
class ParaCharShape:
    shapes: List[CharShapeRef] = field(default_factory=list)


def decode_para_char_shape(data: bytes, context: DecodeContext) -> ParaCharShape:
    return ParaCharShape([CharShapeRef(*item) for item in struct.iter_unpack('<II', data[:len(data) // 8 * 8])])


class LineSegment(NamedTuple):
    text_start: int
    vertical_position: int
    line_height: int
    text_height: int
    baseline_distance: int
    line_spacing: int
    column_start: int
    segment_width: int
    tag: int

    @property
    def is_first_line_in_page(self) -> bool:
        return bool(self.tag & 0x1)

    @property
    def is_first_line_in_column(self) -> bool:
        return bool(self.tag & 0x2)

    @property
    def is_indented(self) -> bool:
        return bool(self.tag & 0x10000)


@dataclass
class ParaLineSeg:
    segments: List[LineSegment] = field(default_factory=list)


def decode_para_line_seg(data: bytes, context: DecodeContext) -> ParaLineSeg:
    usable = len(data) // 36 * 36
    return ParaLineSeg([LineSegment(*item) for item in struct.iter_unpack('<I7iI', data[:usable])])


class RangeTag(NamedTuple):
    start: int
    end: int
    tag: int

    @property
    def tag_type(self) -> int:
        return (self.tag >> 24) & 0xFF

    @property
    def tag_data(self) -> int:
        return self.tag & 0xFFFFFF


@dataclass
class ParaRangeTag:
    tags: List[RangeTag] = field(default_factory=list)


def decode_para_range_tag(data: bytes, context: DecodeContext) -> ParaRangeTag:
    usable = len(data) // 12 * 12
    return ParaRangeTag([RangeTag(*item) for item in struct.iter_unpack('<III', data[:usable])])


# ============================================================================
# List Header
# ============================================================================

@dataclass
class CellAttributes:
    """Table cell fields following a cell's LIST_HEADER prefix."""
    col: int
    row: int
    col_span: int
    row_span: int
    width: int
    height: int
    margins: Tuple[int, int, int, int]
    border_fill_id: int


@dataclass
class ListHeader:
    """
    LIST_HEADER record.

    Two prefixes exist in the wild: [count:2][attribute:4] and
    [count:2][unknown:2][attribute:4]. The 8-byte form wins when present.
    """
    paragraph_count: int
    attribute: int
    cell: Optional[CellAttributes] = None
    extra: bytes = b""

    @property
    def text_direction(self) -> int:
        return self.attribute & 0x7

    @property
    def line_break(self) -> int:
        return (self.attribute >> 3) & 0x3

    @property
    def vertical_align(self) -> int:
        return (self.attribute >> 5) & 0x3


def decode_list_header(data: bytes, context: DecodeContext) -> ListHeader:
    reader = ByteReader(data, "ListHeader")
    paragraph_count = reader.i16()
    if len(data) >= 8:
        reader.skip(2)
    header = ListHeader(paragraph_count, reader.u32())

    if len(data) >= 34:
        col, row, col_span, row_span, width, height = reader.unpack('4H2I')
        margins = reader.unpack('4H')
        header.cell = CellAttributes(col, row, col_span, row_span, width, height, margins, reader.u16())
    header.extra = reader.rest()
    return header


# ============================================================================
# Page Setup
# ============================================================================

@dataclass
class PageDef:
    width: int
    height: int
    left_margin: int
    right_margin: int
    top_margin: int
    bottom_margin: int
    header_margin: int
    footer_margin: int
    gutter_margin: int
    attribute: int

    @property
    def landscape(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def binding(self) -> int:
        return (self.attribute >> 1) & 0x3


def decode_page_def(data: bytes, context: DecodeContext) -> PageDef:
    return PageDef(*ByteReader(data, "PageDef").unpack('10I'))


@dataclass
class FootnoteShape:
    attribute: int
    user_symbol: str
    prefix: str
    suffix: str
    start_number: int
    divider_length: int
    divider_margin_top: int
    divider_margin_bottom: int
    note_spacing: int
    divider_type: int
    divider_thickness: int
    divider_color: int

    @property
    def number_shape(self) -> int:
        return self.attribute & 0xFF

    @property
    def placement(self) -> int:
        return (self.attribute >> 8) & 0x3

    @property
    def numbering(self) -> int:
        return (self.attribute >> 10) & 0x3


def decode_footnote_shape(data: bytes, context: DecodeContext) -> FootnoteShape:
    reader = ByteReader(data, "FootnoteShape")
    attribute = reader.u32()
    user_symbol, prefix, suffix = reader.wchars(1), reader.wchars(1), reader.wchars(1)
    start_number = reader.u16()
    spacing = reader.unpack('4h')
    divider_type, divider_thickness, divider_color = reader.unpack('BBI')
    return FootnoteShape(attribute, user_symbol, prefix, suffix, start_number, *spacing,
                         divider_type, divider_thickness, divider_color)


@dataclass
class PageBorderFill:
    attribute: int
    left_spacing: int
    right_spacing: int
    top_spacing: int
    bottom_spacing: int
    border_fill_id: int

    @property
    def relative_to_paper(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def includes_header(self) -> bool:
        return bool(self.attribute & 0x2)

    @property
    def includes_footer(self) -> bool:
        return bool(self.attribute & 0x4)

    @property
    def fill_area(self) -> int:
        return (self.attribute >> 3) & 0x3


def decode_page_border_fill(data: bytes, context: DecodeContext) -> PageBorderFill:
    return PageBorderFill(*ByteReader(data, "PageBorderFill").unpack('I4hH'))


# ============================================================================
# Table
# ============================================================================

class TableZone(NamedTuple):
    start_col: int
    start_row: int
    end_col: int
    end_row: int
    border_fill_id: int


@dataclass
class Table:
    """
    TABLE record.

    Attributes:
        row_sizes: Cell count per row
        zones: Border/fill zones (documents 5.0.1.0 and later)
    """
    attribute: int
    row_count: int
    col_count: int
    cell_spacing: int
    padding: Tuple[int, int, int, int]
    row_sizes: List[int]
    border_fill_id: int
    zones: List[TableZone] = field(default_factory=list)

    @property
    def page_break(self) -> int:
        return self.attribute & 0x3

    @property
    def repeat_header(self) -> bool:
        return bool(self.attribute & 0x4)


def decode_table(data: bytes, context: DecodeContext) -> Table:
    reader = ByteReader(data, "Table")
    attribute, row_count, col_count, cell_spacing = reader.unpack('IHHh')
    padding = reader.unpack('4h')
    row_sizes = list(reader.unpack(f'{row_count}h'))
    table = Table(attribute, row_count, col_count, cell_spacing, padding, row_sizes, reader.u16())

    if context.version >= VERSION_5_0_1_0 and reader.has(2):
        zone_count = reader.u16()
        for _ in range(zone_count):
            table.zones.append(TableZone(*reader.unpack('5H')))
    return table


# ============================================================================
# Equation / Raw
# ============================================================================

@dataclass
class EqEdit:
    attribute: int
    script: str
    char_size: int
    color: int
    baseline: int
    version_info: str = ""
    font_name: str = ""


def decode_eqedit(data: bytes, context: DecodeContext) -> EqEdit:
    reader = ByteReader(data, "EqEdit")
    attribute = reader.u32()
    script = reader.wstring()
    char_size, color, baseline = reader.unpack('IIh')
    equation = EqEdit(attribute, script, char_size, color, baseline)
    if reader.has(2):
        equation.version_info = reader.wstring()
    if reader.has(2):
        equation.font_name = reader.wstring()
    return equation


@dataclass
class RawBodyRecord:
    """BodyText record kept as raw bytes (CTRL_DATA, FORM_OBJECT, ...)."""
    tag_id: int
    data: bytes


def _raw(tag_id: int):
    def decode(data: bytes, context: DecodeContext) -> RawBodyRecord:
        return RawBodyRecord(tag_id, data)
    return decode


# ============================================================================
# Dispatch Table
# ============================================================================

PARAGRAPH_DECODERS: Dict[int, RecordDecoder] = {
    HWPTAG_PARA_HEADER: RecordDecoder("ParaHeader", 22, decode_para_header),
    HWPTAG_PARA_TEXT: RecordDecoder("ParaText", 0, decode_para_text),
    HWPTAG_PARA_CHAR_SHAPE: RecordDecoder("ParaCharShape", 0, decode_para_char_shape),
    HWPTAG_PARA_LINE_SEG: RecordDecoder("ParaLineSeg", 0, decode_para_line_seg),
    HWPTAG_PARA_RANGE_TAG: RecordDecoder("ParaRangeTag", 0, decode_para_range_tag),
    HWPTAG_LIST_HEADER: RecordDecoder("ListHeader", 6, decode_list_header),
    HWPTAG_PAGE_DEF: RecordDecoder("PageDef", 40, decode_page_def),
    HWPTAG_FOOTNOTE_SHAPE: RecordDecoder("FootnoteShape", 26, decode_footnote_shape),
    HWPTAG_PAGE_BORDER_FILL: RecordDecoder("PageBorderFill", 14, decode_page_border_fill),
    HWPTAG_TABLE: RecordDecoder("Table", 22, decode_table),
    HWPTAG_EQEDIT: RecordDecoder("EqEdit", 16, decode_eqedit),
    HWPTAG_CTRL_DATA: RecordDecoder("CtrlData", 0, _raw(HWPTAG_CTRL_DATA)),
    HWPTAG_FORM_OBJECT: RecordDecoder("FormObject", 0, _raw(HWPTAG_FORM_OBJECT)),
    HWPTAG_MEMO_LIST: RecordDecoder("MemoList", 0, _raw(HWPTAG_MEMO_LIST)),
    HWPTAG_CHART_DATA: RecordDecoder("ChartData", 0, _raw(HWPTAG_CHART_DATA)),
    HWPTAG_VIDEO_DATA: RecordDecoder("VideoData", 0, _raw(HWPTAG_VIDEO_DATA)),
}


__all__ = [
    'ParaHeader',
    'ControlChar',
    'ParaText',
    'CharShapeRef',
    'ParaCharShape',
    'LineSegment',
    'ParaLineSeg',
    'RangeTag',
    'ParaRangeTag',
    'CellAttributes',
    'ListHeader',
    'PageDef',
    'FootnoteShape',
    'PageBorderFill',
    'TableZone',
    'Table',
    'EqEdit',
    'RawBodyRecord',
    'PARAGRAPH_DECODERS',
    'decode_para_header',
    'decode_para_text',
    'decode_para_char_shape',
    'decode_para_line_seg',
    'decode_para_range_tag',
    'decode_list_header',
    'decode_page_def',
    'decode_footnote_shape',
    'decode_page_border_fill',
    'decode_table',
    'decode_eqedit',
]
