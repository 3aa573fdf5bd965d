# hwpcore/core/processor/hwp5_helper/__init__.py
"""
HWP 5.0 OLE Format Helper Module

Provides the decoding pipeline for HWP 5.0 OLE format files.

HWP 5.0 is a binary format based on OLE (Object Linking and Embedding)
compound document structure. The file contains:
- FileHeader: Version, compression flags, etc.
- DocInfo: BinData mappings, fonts, styles
- BodyText: Sections containing paragraph/text records
- BinData: Embedded images and OLE objects

File structure:
- hwp5_constants.py: HWP 5.0 tag IDs and constants
- hwp5_errors.py: Exception hierarchy and diagnostics
- hwp5_binary.py: Bounds-checked little-endian field reader
- hwp5_decoder.py: Stream decompression
- hwp5_record.py: Record framing and tree building (tag/level/size/payload)
- hwp5_dispatch.py: Tag -> decoder tables
- hwp5_fileheader.py: FileHeader stream parsing
- hwp5_docinfo.py: DocInfo stream parsing
- hwp5_paragraph.py: Paragraph/page/table record parsing
- hwp5_ctrl_header.py: Control header parsing
- hwp5_shape_component.py: Drawing object parsing
- hwp5_bodytext.py: Section/paragraph assembly
- hwp5_model.py: Document model
- hwp5_document.py: Document assembly and configuration
- hwp5_metadata.py: Metadata extraction
- hwp5_stream.py: OLE container access
"""

# Constants
from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_BEGIN,
    HWPTAG_BIN_DATA,
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_SHAPE_COMPONENT,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_TABLE,
    CTRL_CHAR_DRAWING_TABLE_OBJECT,
)

# Errors
from hwpcore.core.processor.hwp5_helper.hwp5_errors import (
    HwpError,
    InsufficientData,
    TruncatedRecord,
    InvalidRecordTag,
    MalformedNesting,
    DecompressionError,
    MissingStream,
    InvalidSignature,
    UnsupportedDocument,
    DecodeDiagnostic,
)

# Decoder
from hwpcore.core.processor.hwp5_helper.hwp5_decoder import (
    decompress_stream,
    decompress_bindata,
)

# Record Parser
from hwpcore.core.processor.hwp5_helper.hwp5_record import (
    RecordFrame,
    HwpRecord,
    RecordTree,
    frame_records,
    build_tree,
    parse_records,
)

# Dispatch
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import (
    DecodeContext,
    RecordDecoder,
    UnknownRecord,
    dispatch,
)

# Streams
from hwpcore.core.processor.hwp5_helper.hwp5_fileheader import FileHeader, parse_file_header
from hwpcore.core.processor.hwp5_helper.hwp5_docinfo import (
    DocInfo,
    BinaryDataItem,
    DOCINFO_DECODERS,
    decode_doc_info,
)
from hwpcore.core.processor.hwp5_helper.hwp5_paragraph import PARAGRAPH_DECODERS
from hwpcore.core.processor.hwp5_helper.hwp5_ctrl_header import (
    CtrlHeader,
    CTRL_HEADER_DECODERS,
    decode_ctrl_header,
    decode_ctrl_header_data,
)
from hwpcore.core.processor.hwp5_helper.hwp5_shape_component import SHAPE_COMPONENT_DECODERS
from hwpcore.core.processor.hwp5_helper.hwp5_bodytext import decode_section

# Model
from hwpcore.core.processor.hwp5_helper.hwp5_model import (
    Paragraph,
    CtrlHeaderRecord,
    ListHeaderRecord,
    ShapeComponentRecord,
    Section,
    BodyText,
    DocumentModel,
)

# Document
from hwpcore.core.processor.hwp5_helper.hwp5_document import (
    Hwp5DecoderConfig,
    assemble,
    parse_document,
)

# Metadata
from hwpcore.core.processor.hwp5_helper.hwp5_metadata import (
    HwpSummaryInfo,
    parse_hwp_summary_information,
)

# Container
from hwpcore.core.processor.hwp5_helper.hwp5_stream import (
    OleStreamProvider,
    check_file_signature,
)


__all__ = [
    # Constants
    'HWPTAG_BEGIN',
    'HWPTAG_BIN_DATA',
    'HWPTAG_PARA_HEADER',
    'HWPTAG_PARA_TEXT',
    'HWPTAG_CTRL_HEADER',
    'HWPTAG_LIST_HEADER',
    'HWPTAG_SHAPE_COMPONENT',
    'HWPTAG_SHAPE_COMPONENT_PICTURE',
    'HWPTAG_TABLE',
    'CTRL_CHAR_DRAWING_TABLE_OBJECT',
    # Errors
    'HwpError',
    'InsufficientData',
    'TruncatedRecord',
    'InvalidRecordTag',
    'MalformedNesting',
    'DecompressionError',
    'MissingStream',
    'InvalidSignature',
    'UnsupportedDocument',
    'DecodeDiagnostic',
    # Decoder
    'decompress_stream',
    'decompress_bindata',
    # Record
    'RecordFrame',
    'HwpRecord',
    'RecordTree',
    'frame_records',
    'build_tree',
    'parse_records',
    # Dispatch
    'DecodeContext',
    'RecordDecoder',
    'UnknownRecord',
    'dispatch',
    'DOCINFO_DECODERS',
    'PARAGRAPH_DECODERS',
    'CTRL_HEADER_DECODERS',
    'SHAPE_COMPONENT_DECODERS',
    # Streams
    'FileHeader',
    'parse_file_header',
    'DocInfo',
    'BinaryDataItem',
    'decode_doc_info',
    'CtrlHeader',
    'decode_ctrl_header',
    'decode_ctrl_header_data',
    'decode_section',
    # Model
    'Paragraph',
    'CtrlHeaderRecord',
    'ListHeaderRecord',
    'ShapeComponentRecord',
    'Section',
    'BodyText',
    'DocumentModel',
    # Document
    'Hwp5DecoderConfig',
    'assemble',
    'parse_document',
    # Metadata
    'HwpSummaryInfo',
    'parse_hwp_summary_information',
    # Container
    'OleStreamProvider',
    'check_file_signature',
]
