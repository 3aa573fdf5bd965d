# hwpcore/core/processor/hwp5_helper/hwp5_docinfo.py
"""
HWP 5.0 DocInfo Stream Decoder

DocInfo holds the document-global resource tables that BodyText refers to
by index: BinData entries, font face names, border/fill definitions,
character/paragraph shapes, tab definitions, numbering, bullets, styles.

Every table keeps declaration order. A record that fails to decode keeps
its slot as an UnknownRecord, so later indices stay valid.

BinData records map storage IDs to embedded files (images, OLE objects).
Each BIN_DATA record contains:
- Storage type (LINK, EMBEDDING, STORAGE)
- Storage ID (reference to BinData/BINxxxx.ext)
- Extension
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_DOCUMENT_PROPERTIES,
    HWPTAG_ID_MAPPINGS,
    HWPTAG_BIN_DATA,
    HWPTAG_FACE_NAME,
    HWPTAG_BORDER_FILL,
    HWPTAG_CHAR_SHAPE,
    HWPTAG_TAB_DEF,
    HWPTAG_NUMBERING,
    HWPTAG_BULLET,
    HWPTAG_PARA_SHAPE,
    HWPTAG_STYLE,
    HWPTAG_DOC_DATA,
    HWPTAG_DISTRIBUTE_DOC_DATA,
    HWPTAG_COMPATIBLE_DOCUMENT,
    HWPTAG_LAYOUT_COMPATIBILITY,
    HWPTAG_TRACKCHANGE,
    HWPTAG_MEMO_SHAPE,
    HWPTAG_FORBIDDEN_CHAR,
    HWPTAG_TRACK_CHANGE,
    HWPTAG_TRACK_CHANGE_AUTHOR,
    BINDATA_LINK,
    BINDATA_EMBEDDING,
    BINDATA_STORAGE,
    VERSION_5_0_2_5,
)
from hwpcore.core.processor.hwp5_helper.hwp5_binary import ByteReader
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import (
    DecodeContext,
    RecordDecoder,
    UnknownRecord,
    run_decoder,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import DecodeDiagnostic, HwpError
from hwpcore.core.processor.hwp5_helper.hwp5_record import RecordTree

logger = logging.getLogger("hwpcore.HWP5")

LANGUAGES = ('korean', 'english', 'chinese', 'japanese', 'other', 'symbol', 'user')

NUMBERING_LEVELS = 7
NUMBERING_EXTENDED_LEVELS = 3


# ============================================================================
# Record Types
# ============================================================================

@dataclass
class DocumentProperties:
    area_count: int
    page_start: int
    footnote_start: int
    endnote_start: int
    picture_start: int
    table_start: int
    equation_start: int
    list_id: int
    paragraph_id: int
    char_position: int


@dataclass
class IdMappings:
    """
    Number of records of each DocInfo table.

    Attributes:
        counts: Mapping name -> count, in stream order
    """
    counts: Dict[str, int]

    def __getattr__(self, name: str) -> int:
        counts = self.__dict__.get('counts', {})
        if name in counts:
            return counts[name]
        raise AttributeError(name)


ID_MAPPING_FIELDS = (
    'bin_data',
    'font_korean', 'font_english', 'font_chinese', 'font_japanese',
    'font_other', 'font_symbol', 'font_user',
    'border_fill', 'char_shape', 'tab_def', 'numbering', 'bullet',
    'para_shape', 'style',
    # Present in newer documents only
    'memo_shape', 'track_change', 'track_change_author',
)


@dataclass
class BinData:
    """
    BIN_DATA record.

    Attributes:
        attribute: Raw attribute word
        bin_id: Storage id for EMBEDDING/STORAGE (BinData/BIN%04X.ext)
        extension: File extension for EMBEDDING
        absolute_path: Link target for LINK
        relative_path: Relative link target for LINK
    """
    attribute: int
    bin_id: Optional[int] = None
    extension: str = ""
    absolute_path: str = ""
    relative_path: str = ""

    @property
    def storage_type(self) -> int:
        return self.attribute & 0x000F

    @property
    def compression(self) -> int:
        return self.attribute & 0x0030

    @property
    def access_state(self) -> int:
        return (self.attribute & 0x0300) >> 8

    @property
    def stream_name(self) -> Optional[str]:
        """Name of the BinData stream holding the item, None for links."""
        if self.bin_id is None:
            return None
        if self.storage_type == BINDATA_EMBEDDING:
            return f"BinData/BIN{self.bin_id:04X}.{self.extension}"
        return f"BinData/BIN{self.bin_id:04X}.OLE"


@dataclass
class FaceName:
    attribute: int
    name: str
    alternative_type: Optional[int] = None
    alternative_name: Optional[str] = None
    type_info: Optional[Tuple[int, ...]] = None
    default_name: Optional[str] = None


@dataclass
class BorderLine:
    line_type: int
    width: int
    color: int


@dataclass
class BorderFill:
    """
    BORDER_FILL record.

    Borders are stored left, right, top, bottom. Only the solid fill is
    decoded; gradient/image fill bytes are kept in fill_data.
    """
    attribute: int
    borders: List[BorderLine]
    diagonal: BorderLine
    fill_type: int = 0
    background_color: Optional[int] = None
    pattern_color: Optional[int] = None
    pattern_type: Optional[int] = None
    fill_data: bytes = b""

    @property
    def has_3d_effect(self) -> bool:
        return bool(self.attribute & 0x0001)

    @property
    def has_shadow(self) -> bool:
        return bool(self.attribute & 0x0002)

    @property
    def has_solid_fill(self) -> bool:
        return bool(self.fill_type & 0x1)

    @property
    def has_image_fill(self) -> bool:
        return bool(self.fill_type & 0x2)

    @property
    def has_gradient_fill(self) -> bool:
        return bool(self.fill_type & 0x4)


@dataclass
class CharShape:
    """
    CHAR_SHAPE record.

    Per-language tables are keyed by LANGUAGES. Attribute bits are decoded
    on access.
    """
    face_name_ids: Dict[str, int]
    ratios: Dict[str, int]
    spacings: Dict[str, int]
    relative_sizes: Dict[str, int]
    positions: Dict[str, int]
    base_size: int
    attribute: int
    shadow_gap_x: int
    shadow_gap_y: int
    text_color: int
    underline_color: int
    shade_color: int
    shadow_color: int
    border_fill_id: Optional[int] = None
    strikethrough_color: Optional[int] = None

    @property
    def italic(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def bold(self) -> bool:
        return bool(self.attribute & 0x2)

    @property
    def underline_type(self) -> int:
        return (self.attribute >> 2) & 0x3

    @property
    def underline_style(self) -> int:
        return (self.attribute >> 4) & 0xF

    @property
    def outline_type(self) -> int:
        return (self.attribute >> 8) & 0x7

    @property
    def shadow_type(self) -> int:
        return (self.attribute >> 11) & 0x3

    @property
    def emboss(self) -> bool:
        return bool(self.attribute & 0x2000)

    @property
    def engrave(self) -> bool:
        return bool(self.attribute & 0x4000)

    @property
    def superscript(self) -> bool:
        return bool(self.attribute & 0x8000)

    @property
    def subscript(self) -> bool:
        return bool(self.attribute & 0x10000)

    @property
    def strikethrough(self) -> int:
        return (self.attribute >> 18) & 0x7

    @property
    def emphasis_mark(self) -> int:
        return (self.attribute >> 21) & 0xF

    @property
    def kerning(self) -> bool:
        return bool(self.attribute & 0x40000000)


@dataclass
class TabItem:
    position: int
    tab_type: int
    fill_type: int


@dataclass
class TabDef:
    attribute: int
    tabs: List[TabItem] = field(default_factory=list)

    @property
    def has_left_auto_tab(self) -> bool:
        return bool(self.attribute & 0x1)

    @property
    def has_right_auto_tab(self) -> bool:
        return bool(self.attribute & 0x2)


@dataclass
class NumberingLevel:
    """
    Paragraph head of one numbering level (1-7).

    Attributes:
        attribute: Alignment, instance-like, auto outdent and distance type bits
        width: Width correction (HWPUNIT16)
        distance: Distance from body text (HWPUNIT16)
        char_shape_id: CHAR_SHAPE reference
        format_string: Number format, e.g. '^1.' (empty when absent)
        start_number: Start number
        level_start_number: Per-level start number (5.0.2.5 and later)
    """
    attribute: int
    width: int
    distance: int
    char_shape_id: int
    format_string: str = ""
    start_number: int = 0
    level_start_number: Optional[int] = None

    @property
    def align_type(self) -> str:
        return {1: 'center', 2: 'right'}.get(self.attribute & 0x3, 'left')

    @property
    def instance_like(self) -> bool:
        return bool(self.attribute & 0x4)

    @property
    def auto_outdent(self) -> bool:
        return bool(self.attribute & 0x8)

    @property
    def distance_type(self) -> str:
        return 'value' if self.attribute & 0x10 else 'ratio'


@dataclass
class Numbering:
    """NUMBERING: seven level heads plus up to three extended level formats (8-10)."""
    levels: List[NumberingLevel] = field(default_factory=list)
    extended_formats: List[str] = field(default_factory=list)


@dataclass
class ParaShape:
    attribute1: int
    left_margin: int
    right_margin: int
    indent: int
    top_spacing: int
    bottom_spacing: int
    line_spacing: int
    tab_def_id: int
    numbering_id: int
    border_fill_id: int
    border_offsets: Tuple[int, int, int, int]
    attribute2: int
    attribute3: Optional[int] = None
    line_spacing2: Optional[int] = None

    @property
    def line_spacing_type(self) -> int:
        return self.attribute1 & 0x3

    @property
    def alignment(self) -> int:
        return (self.attribute1 >> 2) & 0x7

    @property
    def heading_type(self) -> int:
        return (self.attribute1 >> 23) & 0x3

    @property
    def heading_level(self) -> int:
        return (self.attribute1 >> 25) & 0x7


@dataclass
class Style:
    local_name: str
    english_name: str
    attribute: int
    next_style_id: int
    lang_id: int
    para_shape_id: int
    char_shape_id: int

    @property
    def is_char_style(self) -> bool:
        return (self.attribute & 0x7) == 1


@dataclass
class CompatibleDocument:
    target_program: int

    @property
    def target_name(self) -> str:
        return {0: 'hwp', 1: 'hwp2007', 2: 'msword'}.get(self.target_program, 'unknown')


@dataclass
class LayoutCompatibility:
    char_level: int
    paragraph_level: int
    section_level: int
    object_level: int
    field_level: int


@dataclass
class MemoShape:
    """MEMO_SHAPE: fixed 22-byte prefix plus an undocumented tail, both raw."""
    prefix: bytes
    tail: bytes = b""


@dataclass
class RawDocInfoRecord:
    """DocInfo record whose layout is kept as raw bytes."""
    tag_id: int
    data: bytes


# ============================================================================
# Decoders
# ============================================================================

def decode_document_properties(data: bytes, context: DecodeContext) -> DocumentProperties:
    reader = ByteReader(data, "DocumentProperties")
    values = reader.unpack('7H3I')
    return DocumentProperties(*values)


def decode_id_mappings(data: bytes, context: DecodeContext) -> IdMappings:
    reader = ByteReader(data, "IdMappings")
    counts = {}
    for name in ID_MAPPING_FIELDS:
        if not reader.has(4):
            break
        counts[name] = reader.i32()
    return IdMappings(counts)


def decode_bin_data(data: bytes, context: DecodeContext) -> BinData:
    reader = ByteReader(data, "BinData")
    record = BinData(attribute=reader.u16())
    storage_type = record.storage_type

    if storage_type == BINDATA_LINK:
        record.absolute_path = reader.wstring()
        record.relative_path = reader.wstring()
    elif storage_type == BINDATA_EMBEDDING:
        record.bin_id = reader.u16()
        record.extension = reader.wstring()
    elif storage_type == BINDATA_STORAGE:
        record.bin_id = reader.u16()
    else:
        logger.debug(f"BIN_DATA with unknown storage type {storage_type}")
    return record


def decode_face_name(data: bytes, context: DecodeContext) -> FaceName:
    reader = ByteReader(data, "FaceName")
    attribute = reader.u8()
    face = FaceName(attribute=attribute, name=reader.wstring())

    if attribute & 0x80:
        face.alternative_type = reader.u8()
        face.alternative_name = reader.wstring()
    if attribute & 0x40:
        face.type_info = reader.unpack('10B')
    if attribute & 0x20:
        face.default_name = reader.wstring()
    return face


def decode_border_fill(data: bytes, context: DecodeContext) -> BorderFill:
    reader = ByteReader(data, "BorderFill")
    attribute = reader.u16()
    borders = [BorderLine(*reader.unpack('BBI')) for _ in range(4)]
    diagonal = BorderLine(*reader.unpack('BBI'))
    border_fill = BorderFill(attribute=attribute, borders=borders, diagonal=diagonal)

    if reader.has(4):
        border_fill.fill_type = reader.u32()
        if border_fill.has_solid_fill and reader.has(12):
            (border_fill.background_color,
             border_fill.pattern_color,
             border_fill.pattern_type) = reader.unpack('IIi')
        border_fill.fill_data = reader.rest()
    return border_fill


def decode_char_shape(data: bytes, context: DecodeContext) -> CharShape:
    reader = ByteReader(data, "CharShape")
    face_name_ids = dict(zip(LANGUAGES, reader.unpack('7H')))
    ratios = dict(zip(LANGUAGES, reader.unpack('7B')))
    spacings = dict(zip(LANGUAGES, reader.unpack('7b')))
    relative_sizes = dict(zip(LANGUAGES, reader.unpack('7B')))
    positions = dict(zip(LANGUAGES, reader.unpack('7b')))
    base_size, attribute, shadow_x, shadow_y = reader.unpack('iIbb')
    text_color, underline_color, shade_color, shadow_color = reader.unpack('4I')

    shape = CharShape(
        face_name_ids=face_name_ids,
        ratios=ratios,
        spacings=spacings,
        relative_sizes=relative_sizes,
        positions=positions,
        base_size=base_size,
        attribute=attribute,
        shadow_gap_x=shadow_x,
        shadow_gap_y=shadow_y,
        text_color=text_color,
        underline_color=underline_color,
        shade_color=shade_color,
        shadow_color=shadow_color,
    )
    if reader.has(2):
        shape.border_fill_id = reader.u16()
    if reader.has(4):
        shape.strikethrough_color = reader.u32()
    return shape


def decode_tab_def(data: bytes, context: DecodeContext) -> TabDef:
    reader = ByteReader(data, "TabDef")
    tab_def = TabDef(attribute=reader.u32())
    count = reader.i16()
    for _ in range(max(count, 0)):
        position, tab_type, fill_type = reader.unpack('IBB2x')
        tab_def.tabs.append(TabItem(position, tab_type, fill_type))
    return tab_def


def decode_numbering(data: bytes, context: DecodeContext) -> Numbering:
    """
    Decode a NUMBERING record.

    Levels and extended formats are read while data remains; a level needs
    at least its 12-byte fixed part. A format string that runs past the
    end of the record is left empty.
    """
    reader = ByteReader(data, "Numbering")
    numbering = Numbering()

    for _ in range(NUMBERING_LEVELS):
        if not reader.has(12):
            break
        level = NumberingLevel(*reader.unpack('IhhI'))
        if reader.has(2):
            length = reader.u16()
            if reader.has(length * 2):
                level.format_string = reader.wchars(length)
        if reader.has(2):
            level.start_number = reader.u16()
        if context.version >= VERSION_5_0_2_5 and reader.has(4):
            level.level_start_number = reader.u32()
        numbering.levels.append(level)

    for _ in range(NUMBERING_EXTENDED_LEVELS):
        if not reader.has(2):
            break
        length = reader.u16()
        if not reader.has(length * 2):
            break
        numbering.extended_formats.append(reader.wchars(length))

    if reader.remaining:
        logger.debug(f"Numbering: {reader.remaining} trailing bytes ignored")
    return numbering


def decode_para_shape(data: bytes, context: DecodeContext) -> ParaShape:
    reader = ByteReader(data, "ParaShape")
    attribute1 = reader.u32()
    margins = reader.unpack('6i')
    tab_def_id, numbering_id, border_fill_id = reader.unpack('3H')
    border_offsets = reader.unpack('4h')
    attribute2 = reader.u32()

    shape = ParaShape(
        attribute1, *margins,
        tab_def_id=tab_def_id,
        numbering_id=numbering_id,
        border_fill_id=border_fill_id,
        border_offsets=border_offsets,
        attribute2=attribute2,
    )
    if reader.has(4):
        shape.attribute3 = reader.u32()
    if reader.has(4):
        shape.line_spacing2 = reader.u32()
    return shape


def decode_style(data: bytes, context: DecodeContext) -> Style:
    reader = ByteReader(data, "Style")
    local_name = reader.wstring()
    english_name = reader.wstring()
    attribute, next_style_id, lang_id, para_shape_id, char_shape_id = reader.unpack('BBhHH')
    return Style(local_name, english_name, attribute, next_style_id, lang_id, para_shape_id, char_shape_id)


def decode_compatible_document(data: bytes, context: DecodeContext) -> CompatibleDocument:
    return CompatibleDocument(ByteReader(data, "CompatibleDocument").u32())


def decode_layout_compatibility(data: bytes, context: DecodeContext) -> LayoutCompatibility:
    return LayoutCompatibility(*ByteReader(data, "LayoutCompatibility").unpack('5I'))


def decode_memo_shape(data: bytes, context: DecodeContext) -> MemoShape:
    return MemoShape(prefix=data[:22], tail=data[22:])


def _raw(tag_id: int):
    def decode(data: bytes, context: DecodeContext) -> RawDocInfoRecord:
        return RawDocInfoRecord(tag_id, data)
    return decode


# ============================================================================
# Dispatch Table
# ============================================================================

DOCINFO_DECODERS: Dict[int, RecordDecoder] = {
    HWPTAG_DOCUMENT_PROPERTIES: RecordDecoder("DocumentProperties", 26, decode_document_properties),
    HWPTAG_ID_MAPPINGS: RecordDecoder("IdMappings", 60, decode_id_mappings),
    HWPTAG_BIN_DATA: RecordDecoder("BinData", 2, decode_bin_data),
    HWPTAG_FACE_NAME: RecordDecoder("FaceName", 3, decode_face_name),
    HWPTAG_BORDER_FILL: RecordDecoder("BorderFill", 32, decode_border_fill),
    HWPTAG_CHAR_SHAPE: RecordDecoder("CharShape", 68, decode_char_shape),
    HWPTAG_TAB_DEF: RecordDecoder("TabDef", 6, decode_tab_def),
    HWPTAG_NUMBERING: RecordDecoder("Numbering", 0, decode_numbering),
    HWPTAG_BULLET: RecordDecoder("Bullet", 0, _raw(HWPTAG_BULLET)),
    HWPTAG_PARA_SHAPE: RecordDecoder("ParaShape", 46, decode_para_shape),
    HWPTAG_STYLE: RecordDecoder("Style", 12, decode_style),
    HWPTAG_DOC_DATA: RecordDecoder("DocData", 0, _raw(HWPTAG_DOC_DATA)),
    HWPTAG_DISTRIBUTE_DOC_DATA: RecordDecoder("DistributeDocData", 0, _raw(HWPTAG_DISTRIBUTE_DOC_DATA)),
    HWPTAG_COMPATIBLE_DOCUMENT: RecordDecoder("CompatibleDocument", 4, decode_compatible_document),
    HWPTAG_LAYOUT_COMPATIBILITY: RecordDecoder("LayoutCompatibility", 20, decode_layout_compatibility),
    HWPTAG_TRACKCHANGE: RecordDecoder("TrackChange", 0, _raw(HWPTAG_TRACKCHANGE)),
    HWPTAG_MEMO_SHAPE: RecordDecoder("MemoShape", 22, decode_memo_shape),
    HWPTAG_FORBIDDEN_CHAR: RecordDecoder("ForbiddenChar", 0, _raw(HWPTAG_FORBIDDEN_CHAR)),
    HWPTAG_TRACK_CHANGE: RecordDecoder("TrackChangeContent", 0, _raw(HWPTAG_TRACK_CHANGE)),
    HWPTAG_TRACK_CHANGE_AUTHOR: RecordDecoder("TrackChangeAuthor", 0, _raw(HWPTAG_TRACK_CHANGE_AUTHOR)),
}

# Tag -> DocInfo list attribute (index-addressed tables)
DOCINFO_TABLES: Dict[int, str] = {
    HWPTAG_BIN_DATA: 'bin_data',
    HWPTAG_FACE_NAME: 'face_names',
    HWPTAG_BORDER_FILL: 'border_fills',
    HWPTAG_CHAR_SHAPE: 'char_shapes',
    HWPTAG_TAB_DEF: 'tab_defs',
    HWPTAG_NUMBERING: 'numberings',
    HWPTAG_BULLET: 'bullets',
    HWPTAG_PARA_SHAPE: 'para_shapes',
    HWPTAG_STYLE: 'styles',
    HWPTAG_MEMO_SHAPE: 'memo_shapes',
    HWPTAG_FORBIDDEN_CHAR: 'forbidden_chars',
    HWPTAG_TRACK_CHANGE: 'track_changes',
    HWPTAG_TRACK_CHANGE_AUTHOR: 'track_change_authors',
    HWPTAG_DOC_DATA: 'doc_data',
}

# Tag -> DocInfo singleton attribute
DOCINFO_SINGLETONS: Dict[int, str] = {
    HWPTAG_DOCUMENT_PROPERTIES: 'document_properties',
    HWPTAG_ID_MAPPINGS: 'id_mappings',
    HWPTAG_COMPATIBLE_DOCUMENT: 'compatible_document',
    HWPTAG_LAYOUT_COMPATIBILITY: 'layout_compatibility',
    HWPTAG_DISTRIBUTE_DOC_DATA: 'distribute_doc_data',
    HWPTAG_TRACKCHANGE: 'track_change_info',
}


# ============================================================================
# DocInfo Container
# ============================================================================

@dataclass
class BinaryDataItem:
    """
    Blob stored in a BinData stream.

    Attributes:
        index: 1-based position of the owning BIN_DATA record (bindata_id)
        bin_id: Storage id from the BIN_DATA record
        name: Stream name the blob was read from
        data: Decompressed bytes
    """
    index: int
    bin_id: int
    name: str
    data: bytes


@dataclass
class DocInfo:
    """
    Decoded DocInfo stream.

    Index-addressed tables hold the decoded record, or an UnknownRecord
    placeholder when a record could not be decoded.
    """
    document_properties: Optional[DocumentProperties] = None
    id_mappings: Optional[IdMappings] = None
    compatible_document: Optional[CompatibleDocument] = None
    layout_compatibility: Optional[LayoutCompatibility] = None
    distribute_doc_data: Optional[Any] = None
    track_change_info: Optional[Any] = None
    bin_data: List[Any] = field(default_factory=list)
    face_names: List[Any] = field(default_factory=list)
    border_fills: List[Any] = field(default_factory=list)
    char_shapes: List[Any] = field(default_factory=list)
    tab_defs: List[Any] = field(default_factory=list)
    numberings: List[Any] = field(default_factory=list)
    bullets: List[Any] = field(default_factory=list)
    para_shapes: List[Any] = field(default_factory=list)
    styles: List[Any] = field(default_factory=list)
    memo_shapes: List[Any] = field(default_factory=list)
    forbidden_chars: List[Any] = field(default_factory=list)
    track_changes: List[Any] = field(default_factory=list)
    track_change_authors: List[Any] = field(default_factory=list)
    doc_data: List[Any] = field(default_factory=list)
    binary_data: List[BinaryDataItem] = field(default_factory=list)
    unknown_records: List[UnknownRecord] = field(default_factory=list)


def decode_doc_info(
    tree: RecordTree,
    context: Optional[DecodeContext] = None,
    diagnostics: Optional[List[DecodeDiagnostic]] = None,
    stream_name: str = "DocInfo",
    strict: bool = False,
) -> DocInfo:
    """
    Decode every DocInfo record in stream order.

    Args:
        tree: Record tree of the decompressed DocInfo stream
        context: Decode context (document version)
        diagnostics: List receiving per-record failures
        stream_name: Stream name used in diagnostics
        strict: Re-raise per-record failures instead of keeping raw bytes

    Returns:
        DocInfo
    """
    context = context or DecodeContext()
    doc_info = DocInfo()
    tag_counts: Dict[int, int] = {}

    # Arena order is stream order, so tables fill in declaration order
    # regardless of how records are nested under ID_MAPPINGS.
    for record in tree.records:
        tag_counts[record.tag_id] = tag_counts.get(record.tag_id, 0) + 1
        entry = DOCINFO_DECODERS.get(record.tag_id)

        if entry is None:
            doc_info.unknown_records.append(UnknownRecord(record.tag_id, record.payload))
            continue

        try:
            value = run_decoder(entry, record.payload, context)
        except HwpError as e:
            if strict:
                raise
            logger.warning(f"DocInfo {entry.name} at offset {record.offset} kept raw: {e}")
            if diagnostics is not None:
                diagnostics.append(
                    DecodeDiagnostic.from_error(stream_name, e, offset=record.offset, tag_id=record.tag_id)
                )
            value = UnknownRecord(record.tag_id, record.payload, error=str(e))

        table = DOCINFO_TABLES.get(record.tag_id)
        if table is not None:
            getattr(doc_info, table).append(value)
        else:
            setattr(doc_info, DOCINFO_SINGLETONS[record.tag_id], value)

    logger.debug(f"DocInfo tag distribution: {tag_counts}")
    logger.info(
        f"DocInfo parsed: {len(doc_info.bin_data)} BIN_DATA, {len(doc_info.face_names)} fonts, "
        f"{len(doc_info.char_shapes)} char shapes, {len(doc_info.para_shapes)} para shapes, "
        f"{len(doc_info.styles)} styles"
    )
    return doc_info


__all__ = [
    'LANGUAGES',
    'ID_MAPPING_FIELDS',
    'DocumentProperties',
    'IdMappings',
    'BinData',
    'FaceName',
    'BorderLine',
    'BorderFill',
    'CharShape',
    'TabItem',
    'TabDef',
    'NumberingLevel',
    'Numbering',
    'ParaShape',
    'Style',
    'CompatibleDocument',
    'LayoutCompatibility',
    'MemoShape',
    'RawDocInfoRecord',
    'BinaryDataItem',
    'DocInfo',
    'DOCINFO_DECODERS',
    'DOCINFO_TABLES',
    'DOCINFO_SINGLETONS',
    'decode_document_properties',
    'decode_id_mappings',
    'decode_bin_data',
    'decode_face_name',
    'decode_border_fill',
    'decode_char_shape',
    'decode_tab_def',
    'decode_numbering',
    'decode_para_shape',
    'decode_style',
    'decode_compatible_document',
    'decode_layout_compatibility',
    'decode_memo_shape',
    'decode_doc_info',
]
