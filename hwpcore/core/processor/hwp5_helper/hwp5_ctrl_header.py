# hwpcore/core/processor/hwp5_helper/hwp5_ctrl_header.py
"""
HWP 5.0 Control Header Decoder

A CTRL_HEADER record starts with a 4-byte control id followed by data
whose layout depends on that id:

- 'tbl ', 'gso ': common object properties (position, size, margins)
- 'secd', 'cold': section / column definition
- 'head', 'foot', 'fn  ', 'en  ': header/footer, footnote/endnote
- 'atno', 'nwno', 'pgnp', 'pghd', 'pgad': numbering and page controls
- 'bkmk', 'over', 'cmtt', 'hide': bookmark, overlap, comment, hidden text
- '%xxx': fields (hyperlinks, dates, ...)

Control ids not listed decode to OtherControl carrying the raw data.
Trailing fields that newer writers append are optional: when missing they
decode to their default value.
"""
import struct
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    CTRL_ID_TABLE,
    CTRL_ID_GSO,
    CTRL_ID_SECTION,
    CTRL_ID_COLUMN,
    CTRL_ID_HEADER,
    CTRL_ID_FOOTER,
    CTRL_ID_FOOTNOTE,
    CTRL_ID_ENDNOTE,
    CTRL_ID_AUTO_NUM,
    CTRL_ID_AUTO_NUM_ALT,
    CTRL_ID_NEW_NUM,
    CTRL_ID_NEW_NUM_ALT,
    CTRL_ID_HIDE,
    CTRL_ID_PAGE_ADJUST,
    CTRL_ID_PAGE_NUMBER,
    CTRL_ID_PAGE_NUMBER_POS,
    CTRL_ID_BOOKMARK,
    CTRL_ID_OVERLAP,
    CTRL_ID_COMMENT,
    CTRL_ID_HIDDEN_DESC,
    CTRL_ID_FIELD_START,
    CTRL_ID_FIELD_PREFIX,
)
from hwpcore.core.processor.hwp5_helper.hwp5_binary import ByteReader, require_length
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext, RecordDecoder, run_decoder

logger = logging.getLogger("hwpcore.HWP5")


def _optional(reader: ByteReader, fmt: str, default=0):
    """Read a single value when enough bytes remain, else return default."""
    if not reader.has(struct.calcsize('<' + fmt)):
        return default
    return reader.unpack(fmt)[0]


def _optional_wstring(reader: ByteReader) -> str:
    """Read a length-prefixed string, tolerating a short or missing body."""
    length = _optional(reader, 'H')
    if length and reader.has(length * 2):
        return reader.wchars(length)
    reader.skip(min(length * 2, reader.remaining))
    return ""


# ============================================================================
# Control Variants
# ============================================================================

@dataclass
class ObjectCommon:
    """Common properties of table/drawing objects ('tbl ', 'gso ')."""
    attribute: int
    offset_y: int
    offset_x: int
    width: int
    height: int
    z_order: int
    margins: Tuple[int, int, int, int]
    instance_id: int
    page_divide: int
    description: str = ""

    @property
    def treat_as_char(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def affect_line_spacing(self) -> bool:
        return bool(self.attribute & 0x4)

    @property
    def vert_rel_to(self) -> int:
        return (self.attribute >> 3) & 0x3

    @property
    def vert_relative(self) -> int:
        return (self.attribute >> 5) & 0x7

    @property
    def horz_rel_to(self) -> int:
        return (self.attribute >> 8) & 0x3

    @property
    def horz_relative(self) -> int:
        return (self.attribute >> 10) & 0x7

    @property
    def allow_overlap(self) -> bool:
        return bool(self.attribute & 0x4000)

    @property
    def width_basis(self) -> int:
        return (self.attribute >> 15) & 0x7

    @property
    def height_basis(self) -> int:
        return (self.attribute >> 18) & 0x3

    @property
    def text_wrap(self) -> int:
        return (self.attribute >> 21) & 0x7

    @property
    def text_flow(self) -> int:
        return (self.attribute >> 24) & 0x3

    @property
    def object_category(self) -> int:
        return (self.attribute >> 26) & 0x7


@dataclass
class ColumnDefinition:
    attribute: int
    column_spacing: int
    column_widths: List[int] = field(default_factory=list)
    attribute_high: int = 0
    divider_type: int = 0
    divider_thickness: int = 0
    divider_color: int = 0

    @property
    def column_type(self) -> int:
        return self.attribute & 0x3

    @property
    def column_count(self) -> int:
        return ((self.attribute >> 2) & 0xFF) or 1

    @property
    def direction(self) -> int:
        return (self.attribute >> 10) & 0x3

    @property
    def equal_width(self) -> bool:
        return bool(self.attribute & 0x1000)


@dataclass
class FootnoteEndnote:
    number: int
    reserved: bytes
    attribute: int
    reserved2: int


@dataclass
class HeaderFooter:
    attribute: int
    text_width: int = 0
    text_height: int = 0
    text_ref: int = 0
    number_ref: int = 0

    @property
    def apply_page(self) -> int:
        """0: both, 1: even pages, 2: odd pages."""
        return self.attribute & 0x3


@dataclass
class PageNumberPosition:
    flags: int
    user_symbol: str
    prefix: str
    suffix: str

    @property
    def shape(self) -> int:
        return self.flags & 0xFF

    @property
    def position(self) -> int:
        return (self.flags >> 8) & 0xF


@dataclass
class Field:
    """
    Field control ('%hlk', '%dte', ...).

    Attributes:
        field_type: Field control id, e.g. '%hlk'
        command: Field command string (hyperlink target, date format, ...)
        field_id: Document-unique field id
    """
    field_type: str
    attribute: int
    other_attribute: int
    command: str = ""
    field_id: Optional[int] = None

    @property
    def editable_in_form(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def dirty(self) -> bool:
        return bool(self.attribute & 0x8000)


@dataclass
class SectionDefinition:
    attribute: int
    column_spacing: int = 0
    vertical_alignment: int = 0
    horizontal_alignment: int = 0
    default_tab_spacing: int = 0
    number_para_shape_id: int = 0
    page_number: int = 0
    figure_number: int = 0
    table_number: int = 0
    equation_number: int = 0
    language: int = 0

    @property
    def hide_header(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def hide_footer(self) -> bool:
        return bool(self.attribute & 0x2)

    @property
    def hide_master_page(self) -> bool:
        return bool(self.attribute & 0x4)

    @property
    def hide_border(self) -> bool:
        return bool(self.attribute & 0x8)

    @property
    def hide_fill(self) -> bool:
        return bool(self.attribute & 0x10)

    @property
    def hide_page_number(self) -> bool:
        return bool(self.attribute & 0x20)

    @property
    def text_direction(self) -> int:
        return (self.attribute >> 16) & 0x7


@dataclass
class AutoNumber:
    attribute: int
    number: int
    user_symbol: str
    prefix: str
    suffix: str

    @property
    def number_type(self) -> int:
        return self.attribute & 0xF

    @property
    def number_shape(self) -> int:
        return (self.attribute >> 4) & 0xFF

    @property
    def superscript(self) -> bool:
        return bool(self.attribute & 0x1000)


@dataclass
class NewNumber:
    attribute: int
    number: int

    @property
    def number_type(self) -> int:
        return self.attribute & 0xF


@dataclass
class Hide:
    """Hide header/footer/border/page number on the current page."""
    attribute: int

    @property
    def hide_header(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def hide_footer(self) -> bool:
        return bool(self.attribute & 0x2)

    @property
    def hide_master_page(self) -> bool:
        return bool(self.attribute & 0x4)

    @property
    def hide_border(self) -> bool:
        return bool(self.attribute & 0x8)

    @property
    def hide_fill(self) -> bool:
        return bool(self.attribute & 0x10)

    @property
    def hide_page_number(self) -> bool:
        return bool(self.attribute & 0x20)


@dataclass
class PageAdjust:
    """Odd/even page adjustment."""
    attribute: int


@dataclass
class BookmarkMarker:
    keyword1: str
    keyword2: str


@dataclass
class Overlap:
    ctrl_id: str
    text: str
    border_type: int = 0
    internal_text_size: int = 0
    border_internal_text_spread: int = 0
    char_shape_ids: List[int] = field(default_factory=list)


@dataclass
class Comment:
    main_text: str
    sub_text: str
    position: int = 0
    fsize_ratio: int = 0
    option: int = 0
    style_number: int = 0
    alignment: int = 0


@dataclass
class HiddenDescription:
    data: bytes


@dataclass
class OtherControl:
    """Control whose data layout is not decoded."""
    data: bytes


@dataclass
class CtrlHeader:
    """
    Decoded CTRL_HEADER record.

    Attributes:
        ctrl_id: Readable 4-character control id (e.g. 'tbl ')
        ctrl_id_value: Control id as stored (UINT32)
        data: Control-specific variant
    """
    ctrl_id: str
    ctrl_id_value: int
    data: Any


# ============================================================================
# Decoders
# ============================================================================

def decode_object_common(data: bytes, context: DecodeContext) -> ObjectCommon:
    reader = ByteReader(data, "ObjectCommon")
    attribute, offset_y, offset_x, width, height, z_order = reader.unpack('IiiIIi')
    bottom, left, right, top = reader.unpack('4h')
    instance_id, page_divide = reader.unpack('Ii')
    obj = ObjectCommon(
        attribute=attribute,
        offset_y=offset_y,
        offset_x=offset_x,
        width=width,
        height=height,
        z_order=z_order,
        margins=(left, right, top, bottom),
        instance_id=instance_id,
        page_divide=page_divide,
    )
    obj.description = _optional_wstring(reader)
    return obj


def decode_column_definition(data: bytes, context: DecodeContext) -> ColumnDefinition:
    reader = ByteReader(data, "ColumnDefinition")
    attribute, column_spacing = reader.unpack('Hh')
    column = ColumnDefinition(attribute, column_spacing)
    if not column.equal_width:
        for _ in range(column.column_count):
            if not reader.has(2):
                break
            column.column_widths.append(reader.u16())
    column.attribute_high = _optional(reader, 'H')
    column.divider_type = _optional(reader, 'B')
    column.divider_thickness = _optional(reader, 'B')
    column.divider_color = _optional(reader, 'I')
    return column


def decode_footnote_endnote(data: bytes, context: DecodeContext) -> FootnoteEndnote:
    reader = ByteReader(data, "FootnoteEndnote")
    number = reader.u8()
    reserved = reader.read(5)
    attribute, reserved2 = reader.unpack('BB')
    return FootnoteEndnote(number, reserved, attribute, reserved2)


def decode_header_footer(data: bytes, context: DecodeContext) -> HeaderFooter:
    reader = ByteReader(data, "HeaderFooter")
    header = HeaderFooter(reader.u32())
    header.text_width = _optional(reader, 'I')
    header.text_height = _optional(reader, 'I')
    header.text_ref = _optional(reader, 'B')
    header.number_ref = _optional(reader, 'B')
    return header


def decode_page_number_position(data: bytes, context: DecodeContext) -> PageNumberPosition:
    reader = ByteReader(data, "PageNumberPosition")
    flags = reader.u32()
    return PageNumberPosition(flags, reader.wchars(1), reader.wchars(1), reader.wchars(1))


def _decode_field_body(reader: ByteReader, field_type: str) -> Field:
    attribute, other_attribute = reader.unpack('IB')
    result = Field(field_type, attribute, other_attribute)
    command_length = reader.u16()
    if command_length and reader.has(command_length * 2):
        result.command = reader.wchars(command_length)
    else:
        reader.skip(min(command_length * 2, reader.remaining))
    result.field_id = _optional(reader, 'I', None)
    return result


def decode_field_start(data: bytes, context: DecodeContext) -> Field:
    reader = ByteReader(data, "Field")
    return _decode_field_body(reader, reader.ctrl_id())


def _field_decoder(ctrl_id: str):
    def decode(data: bytes, context: DecodeContext) -> Field:
        return _decode_field_body(ByteReader(data, "Field"), ctrl_id)
    return decode


def decode_section_definition(data: bytes, context: DecodeContext) -> SectionDefinition:
    reader = ByteReader(data, "SectionDefinition")
    section = SectionDefinition(reader.u32())
    (section.column_spacing,
     section.vertical_alignment,
     section.horizontal_alignment,
     section.default_tab_spacing,
     section.number_para_shape_id,
     section.page_number,
     section.figure_number,
     section.table_number,
     section.equation_number) = reader.unpack('hhhIHHHHH')
    section.language = _optional(reader, 'H')
    return section


def decode_auto_number(data: bytes, context: DecodeContext) -> AutoNumber:
    reader = ByteReader(data, "AutoNumber")
    attribute, number = reader.unpack('IH')
    return AutoNumber(attribute, number, reader.wchars(1), reader.wchars(1), reader.wchars(1))


def decode_new_number(data: bytes, context: DecodeContext) -> NewNumber:
    return NewNumber(*ByteReader(data, "NewNumber").unpack('IH'))


def decode_hide(data: bytes, context: DecodeContext) -> Hide:
    return Hide(ByteReader(data, "Hide").u16())


def decode_page_adjust(data: bytes, context: DecodeContext) -> PageAdjust:
    return PageAdjust(ByteReader(data, "PageAdjust").u32())


def decode_bookmark_marker(data: bytes, context: DecodeContext) -> BookmarkMarker:
    reader = ByteReader(data, "BookmarkMarker")
    keyword1 = _optional_wstring(reader)
    keyword2 = _optional_wstring(reader)
    return BookmarkMarker(keyword1, keyword2)


def decode_overlap(data: bytes, context: DecodeContext) -> Overlap:
    reader = ByteReader(data, "Overlap")
    overlap = Overlap(reader.ctrl_id(), _optional_wstring(reader))
    overlap.border_type = _optional(reader, 'B')
    overlap.internal_text_size = _optional(reader, 'b')
    overlap.border_internal_text_spread = _optional(reader, 'B')
    count = _optional(reader, 'B')
    if count and reader.has(count * 4):
        overlap.char_shape_ids = list(reader.unpack(f'{count}I'))
    return overlap


def decode_comment(data: bytes, context: DecodeContext) -> Comment:
    reader = ByteReader(data, "Comment")
    # Empty strings still occupy one WCHAR
    texts = []
    for _ in range(2):
        length = _optional(reader, 'H')
        if length and reader.has(length * 2):
            texts.append(reader.wchars(length))
        else:
            reader.skip(min(max(length, 1) * 2, reader.remaining))
            texts.append("")
    comment = Comment(*texts)
    comment.position = _optional(reader, 'I')
    comment.fsize_ratio = _optional(reader, 'I')
    comment.option = _optional(reader, 'I')
    comment.style_number = _optional(reader, 'I')
    comment.alignment = _optional(reader, 'I')
    return comment


def decode_hidden_description(data: bytes, context: DecodeContext) -> HiddenDescription:
    return HiddenDescription(data)


def decode_other_control(data: bytes, context: DecodeContext) -> OtherControl:
    return OtherControl(data)


# ============================================================================
# Dispatch Table
# ============================================================================

_FIELD_START = RecordDecoder("Field", 15, decode_field_start)
_OTHER_CONTROL = RecordDecoder("OtherControl", 0, decode_other_control)

CTRL_HEADER_DECODERS: Dict[str, RecordDecoder] = {
    CTRL_ID_TABLE: RecordDecoder("ObjectCommon", 40, decode_object_common),
    CTRL_ID_GSO: RecordDecoder("ObjectCommon", 40, decode_object_common),
    CTRL_ID_COLUMN: RecordDecoder("ColumnDefinition", 12, decode_column_definition),
    CTRL_ID_FOOTNOTE: RecordDecoder("FootnoteEndnote", 8, decode_footnote_endnote),
    CTRL_ID_ENDNOTE: RecordDecoder("FootnoteEndnote", 8, decode_footnote_endnote),
    CTRL_ID_HEADER: RecordDecoder("HeaderFooter", 4, decode_header_footer),
    CTRL_ID_FOOTER: RecordDecoder("HeaderFooter", 4, decode_header_footer),
    CTRL_ID_PAGE_NUMBER: RecordDecoder("PageNumberPosition", 12, decode_page_number_position),
    CTRL_ID_PAGE_NUMBER_POS: RecordDecoder("PageNumberPosition", 12, decode_page_number_position),
    CTRL_ID_FIELD_START: _FIELD_START,
    CTRL_ID_SECTION: RecordDecoder("SectionDefinition", 24, decode_section_definition),
    CTRL_ID_AUTO_NUM: RecordDecoder("AutoNumber", 12, decode_auto_number),
    CTRL_ID_AUTO_NUM_ALT: RecordDecoder("AutoNumber", 12, decode_auto_number),
    CTRL_ID_NEW_NUM: RecordDecoder("NewNumber", 8, decode_new_number),
    CTRL_ID_NEW_NUM_ALT: RecordDecoder("NewNumber", 8, decode_new_number),
    CTRL_ID_HIDE: RecordDecoder("Hide", 2, decode_hide),
    CTRL_ID_PAGE_ADJUST: RecordDecoder("PageAdjust", 4, decode_page_adjust),
    CTRL_ID_BOOKMARK: RecordDecoder("BookmarkMarker", 6, decode_bookmark_marker),
    CTRL_ID_OVERLAP: RecordDecoder("Overlap", 10, decode_overlap),
    CTRL_ID_COMMENT: RecordDecoder("Comment", 18, decode_comment),
    CTRL_ID_HIDDEN_DESC: RecordDecoder("HiddenDescription", 0, decode_hidden_description),
}


def _decoder_for(ctrl_id: str) -> RecordDecoder:
    entry = CTRL_HEADER_DECODERS.get(ctrl_id)
    if entry is not None:
        return entry
    if ctrl_id.startswith(CTRL_ID_FIELD_PREFIX):
        return RecordDecoder("Field", 11, _field_decoder(ctrl_id))
    return _OTHER_CONTROL


def decode_ctrl_header_data(ctrl_id: str, data: bytes, context: Optional[DecodeContext] = None) -> Any:
    """
    Decode the data following a control id.

    Args:
        ctrl_id: Readable control id (e.g. 'fn  ')
        data: CTRL_HEADER payload after the 4-byte control id
        context: Decode context

    Returns:
        Control variant (OtherControl for unlisted ids)

    Raises:
        InsufficientData: If data is shorter than the variant's minimum
    """
    return run_decoder(_decoder_for(ctrl_id), data, context or DecodeContext())


def decode_ctrl_header(data: bytes, context: Optional[DecodeContext] = None) -> CtrlHeader:
    """
    Decode a CTRL_HEADER payload.

    Args:
        data: Full CTRL_HEADER payload
        context: Decode context

    Returns:
        CtrlHeader
    """
    require_length(data, "CtrlHeader", 4)
    ctrl_id_value = struct.unpack('<I', data[:4])[0]
    reader = ByteReader(data, "CtrlHeader")
    ctrl_id = reader.ctrl_id()
    logger.debug(f"CTRL_HEADER '{ctrl_id}' ({len(data) - 4} bytes)")
    return CtrlHeader(ctrl_id, ctrl_id_value, decode_ctrl_header_data(ctrl_id, reader.rest(), context))


__all__ = [
    'ObjectCommon',
    'ColumnDefinition',
    'FootnoteEndnote',
    'HeaderFooter',
    'PageNumberPosition',
    'Field',
    'SectionDefinition',
    'AutoNumber',
    'NewNumber',
    'Hide',
    'PageAdjust',
    'BookmarkMarker',
    'Overlap',
    'Comment',
    'HiddenDescription',
    'OtherControl',
    'CtrlHeader',
    'CTRL_HEADER_DECODERS',
    'decode_ctrl_header',
    'decode_ctrl_header_data',
]
