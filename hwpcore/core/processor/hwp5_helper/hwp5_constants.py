# hwpcore/core/processor/hwp5_helper/hwp5_constants.py
"""
HWP 5.0 OLE Format Constants

Defines record tag IDs, control IDs, FileHeader flags and stream names
for HWP 5.0 OLE format decoding.

Record Structure:
- Header (4 bytes): TagID (10 bits) | Level (10 bits) | Size (12 bits)
- If Size == 0xFFF, next 4 bytes contain actual size
- Payload: Variable length data

Reference: HWP 5.0 File Format Specification (한글과컴퓨터)
"""

# ==========================================================================
# Record Header Layout
# ==========================================================================

RECORD_TAG_MASK = 0x3FF
RECORD_LEVEL_SHIFT = 10
RECORD_LEVEL_MASK = 0x3FF
RECORD_SIZE_SHIFT = 20
RECORD_SIZE_MASK = 0xFFF
RECORD_EXTENDED_SIZE = 0xFFF     # Size sentinel, real size follows as UINT32


# ==========================================================================
# HWP 5.0 Tag Constants
# ==========================================================================

HWPTAG_BEGIN = 0x10

# DocInfo 관련
HWPTAG_DOCUMENT_PROPERTIES = HWPTAG_BEGIN + 0    # 16 - Document properties
HWPTAG_ID_MAPPINGS = HWPTAG_BEGIN + 1            # 17 - ID mappings
HWPTAG_BIN_DATA = HWPTAG_BEGIN + 2               # 18 - Binary data info in DocInfo
HWPTAG_FACE_NAME = HWPTAG_BEGIN + 3              # 19 - Font face name
HWPTAG_BORDER_FILL = HWPTAG_BEGIN + 4            # 20 - Border/fill style
HWPTAG_CHAR_SHAPE = HWPTAG_BEGIN + 5             # 21 - Character shape
HWPTAG_TAB_DEF = HWPTAG_BEGIN + 6                # 22 - Tab definition
HWPTAG_NUMBERING = HWPTAG_BEGIN + 7              # 23 - Numbering
HWPTAG_BULLET = HWPTAG_BEGIN + 8                 # 24 - Bullet
HWPTAG_PARA_SHAPE = HWPTAG_BEGIN + 9             # 25 - Paragraph shape
HWPTAG_STYLE = HWPTAG_BEGIN + 10                 # 26 - Style
HWPTAG_DOC_DATA = HWPTAG_BEGIN + 11              # 27 - Document arbitrary data
HWPTAG_DISTRIBUTE_DOC_DATA = HWPTAG_BEGIN + 12   # 28 - Distribution document data
HWPTAG_COMPATIBLE_DOCUMENT = HWPTAG_BEGIN + 14   # 30 - Compatible document
HWPTAG_LAYOUT_COMPATIBILITY = HWPTAG_BEGIN + 15  # 31 - Layout compatibility
HWPTAG_TRACKCHANGE = HWPTAG_BEGIN + 16           # 32 - Track change info
HWPTAG_MEMO_SHAPE = HWPTAG_BEGIN + 76            # 92 - Memo shape
HWPTAG_FORBIDDEN_CHAR = HWPTAG_BEGIN + 78        # 94 - Forbidden characters
HWPTAG_TRACK_CHANGE = HWPTAG_BEGIN + 80          # 96 - Track change content
HWPTAG_TRACK_CHANGE_AUTHOR = HWPTAG_BEGIN + 81   # 97 - Track change author

# Section/Paragraph 관련
HWPTAG_PARA_HEADER = HWPTAG_BEGIN + 50           # 66 - Paragraph header
HWPTAG_PARA_TEXT = HWPTAG_BEGIN + 51             # 67 - Paragraph text
HWPTAG_PARA_CHAR_SHAPE = HWPTAG_BEGIN + 52       # 68 - Paragraph character shape
HWPTAG_PARA_LINE_SEG = HWPTAG_BEGIN + 53         # 69 - Paragraph line segment
HWPTAG_PARA_RANGE_TAG = HWPTAG_BEGIN + 54        # 70 - Paragraph range tag

# Control/Shape 관련
HWPTAG_CTRL_HEADER = HWPTAG_BEGIN + 55           # 71 - Control header
HWPTAG_LIST_HEADER = HWPTAG_BEGIN + 56           # 72 - List header (table cells, text boxes)
HWPTAG_PAGE_DEF = HWPTAG_BEGIN + 57              # 73 - Page definition
HWPTAG_FOOTNOTE_SHAPE = HWPTAG_BEGIN + 58        # 74 - Footnote shape
HWPTAG_PAGE_BORDER_FILL = HWPTAG_BEGIN + 59      # 75 - Page border fill
HWPTAG_SHAPE_COMPONENT = HWPTAG_BEGIN + 60       # 76 - Shape component (common)
HWPTAG_TABLE = HWPTAG_BEGIN + 61                 # 77 - Table properties
HWPTAG_SHAPE_COMPONENT_LINE = HWPTAG_BEGIN + 62       # 78 - Line
HWPTAG_SHAPE_COMPONENT_RECTANGLE = HWPTAG_BEGIN + 63  # 79 - Rectangle
HWPTAG_SHAPE_COMPONENT_ELLIPSE = HWPTAG_BEGIN + 64    # 80 - Ellipse
HWPTAG_SHAPE_COMPONENT_ARC = HWPTAG_BEGIN + 65        # 81 - Arc
HWPTAG_SHAPE_COMPONENT_POLYGON = HWPTAG_BEGIN + 66    # 82 - Polygon
HWPTAG_SHAPE_COMPONENT_CURVE = HWPTAG_BEGIN + 67      # 83 - Curve
HWPTAG_SHAPE_COMPONENT_OLE = HWPTAG_BEGIN + 68        # 84 - OLE object (charts are OLE)
HWPTAG_SHAPE_COMPONENT_PICTURE = HWPTAG_BEGIN + 69    # 85 - Picture
HWPTAG_SHAPE_COMPONENT_CONTAINER = HWPTAG_BEGIN + 70  # 86 - Group container
HWPTAG_CTRL_DATA = HWPTAG_BEGIN + 71             # 87 - Control arbitrary data
HWPTAG_EQEDIT = HWPTAG_BEGIN + 72                # 88 - Equation
HWPTAG_SHAPE_COMPONENT_TEXTART = HWPTAG_BEGIN + 74    # 90 - TextArt
HWPTAG_FORM_OBJECT = HWPTAG_BEGIN + 75           # 91 - Form object
HWPTAG_MEMO_LIST = HWPTAG_BEGIN + 77             # 93 - Memo list
HWPTAG_CHART_DATA = HWPTAG_BEGIN + 79            # 95 - Chart data
HWPTAG_VIDEO_DATA = HWPTAG_BEGIN + 82            # 98 - Video data
HWPTAG_SHAPE_COMPONENT_UNKNOWN = HWPTAG_BEGIN + 99    # 115 - Unknown shape


# ==========================================================================
# Control Character Codes
# ==========================================================================

# PARA_TEXT에서 사용되는 컨트롤 문자 코드
CTRL_CHAR_UNUSABLE = 0x00
CTRL_CHAR_TAB = 0x09                   # Tab (inline, 8 wchars)
CTRL_CHAR_LINE_BREAK = 0x0A            # Line break
CTRL_CHAR_DRAWING_TABLE_OBJECT = 0x0B  # Extended control for GSO (images, tables, etc.)
CTRL_CHAR_PARA_BREAK = 0x0D            # Paragraph break
CTRL_CHAR_HYPHEN = 0x18
CTRL_CHAR_KEEP_WORD_SPACE = 0x1E
CTRL_CHAR_FIXED_WIDTH_SPACE = 0x1F

# Control chars occupying a single wchar; every other code below 32
# carries 7 extra wchars of inline/extended data.
CHAR_CONTROL_CODES = frozenset([0x00, 0x0A, 0x0D, 0x18, 0x1E, 0x1F])
CONTROL_CHAR_WCHARS = 8


# ==========================================================================
# Control IDs (as read from CTRL_HEADER, bytes already reversed)
# ==========================================================================

CTRL_ID_TABLE = 'tbl '       # Table control
CTRL_ID_GSO = 'gso '         # Generic Shape Object
CTRL_ID_SECTION = 'secd'     # Section definition
CTRL_ID_COLUMN = 'cold'      # Column definition
CTRL_ID_HEADER = 'head'      # Header
CTRL_ID_FOOTER = 'foot'      # Footer
CTRL_ID_FOOTNOTE = 'fn  '    # Footnote
CTRL_ID_ENDNOTE = 'en  '     # Endnote
CTRL_ID_AUTO_NUM = 'atno'    # Auto number
CTRL_ID_AUTO_NUM_ALT = 'autn'
CTRL_ID_NEW_NUM = 'nwno'     # New number
CTRL_ID_NEW_NUM_ALT = 'newn'
CTRL_ID_HIDE = 'pghd'        # Hide header/footer/page number on a page
CTRL_ID_PAGE_ADJUST = 'pgad' # Odd/even page adjust
CTRL_ID_PAGE_NUMBER = 'pgno'
CTRL_ID_PAGE_NUMBER_POS = 'pgnp'
CTRL_ID_BOOKMARK = 'bkmk'
CTRL_ID_OVERLAP = 'over'     # Overlapping letters
CTRL_ID_COMMENT = 'cmtt'     # Ruby text / comment
CTRL_ID_HIDDEN_DESC = 'hide' # Hidden description
CTRL_ID_FIELD_START = '%%%%'
CTRL_ID_FIELD_PREFIX = '%'   # Field controls (%hlk, %dte, ...)


# ==========================================================================
# File Signatures and Stream Names
# ==========================================================================

# OLE Compound Document signature
OLE_MAGIC = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'

# ZIP signature (HWPX)
ZIP_MAGIC = b'PK\x03\x04'

# HWP file signature (in FileHeader stream)
HWP_SIGNATURE = b'HWP Document File'

STREAM_FILE_HEADER = 'FileHeader'
STREAM_DOC_INFO = 'DocInfo'
STREAM_BODY_TEXT = 'BodyText'
STREAM_BIN_DATA = 'BinData'
STREAM_SECTION_PREFIX = 'BodyText/Section'
STREAM_SUMMARY_INFORMATION = '\x05HwpSummaryInformation'

FILE_HEADER_SIZE = 256


# ==========================================================================
# FileHeader Property Flags (offset 36)
# ==========================================================================

FLAG_COMPRESSED = 0x0001
FLAG_ENCRYPTED = 0x0002
FLAG_DISTRIBUTION = 0x0004
FLAG_SCRIPT = 0x0008
FLAG_DRM = 0x0010
FLAG_XML_TEMPLATE = 0x0020
FLAG_HISTORY = 0x0040
FLAG_SIGNATURE = 0x0080
FLAG_CERT_ENCRYPTED = 0x0100
FLAG_SIGNATURE_SPARE = 0x0200
FLAG_CERT_DRM = 0x0400
FLAG_CCL = 0x0800
FLAG_MOBILE_OPTIMIZED = 0x1000
FLAG_PRIVACY_SECURITY = 0x2000
FLAG_TRACK_CHANGE = 0x4000
FLAG_KOGL = 0x8000
FLAG_VIDEO_CONTROL = 0x10000
FLAG_TOC_FIELD = 0x20000


# ==========================================================================
# Version thresholds (major << 24 | minor << 16 | build << 8 | revision)
# ==========================================================================

VERSION_5_0_1_0 = 0x05000100   # Table zone info
VERSION_5_0_2_1 = 0x05000201   # CharShape border fill id
VERSION_5_0_2_5 = 0x05000205   # Numbering per-level start number
VERSION_5_0_3_2 = 0x05000302   # ParaHeader section merge


# ==========================================================================
# BinData Storage Types
# ==========================================================================

BINDATA_LINK = 0        # External link
BINDATA_EMBEDDING = 1   # Embedded in BinData folder
BINDATA_STORAGE = 2     # OLE storage in BinData folder

BINDATA_COMPRESS_DEFAULT = 0x00   # Follow FileHeader compression flag
BINDATA_COMPRESS_YES = 0x10
BINDATA_COMPRESS_NO = 0x20


# ==========================================================================
# Export List
# ==========================================================================

__all__ = [
    # Record header
    'RECORD_TAG_MASK',
    'RECORD_LEVEL_SHIFT',
    'RECORD_LEVEL_MASK',
    'RECORD_SIZE_SHIFT',
    'RECORD_SIZE_MASK',
    'RECORD_EXTENDED_SIZE',
    # Tag IDs
    'HWPTAG_BEGIN',
    'HWPTAG_DOCUMENT_PROPERTIES',
    'HWPTAG_ID_MAPPINGS',
    'HWPTAG_BIN_DATA',
    'HWPTAG_FACE_NAME',
    'HWPTAG_BORDER_FILL',
    'HWPTAG_CHAR_SHAPE',
    'HWPTAG_TAB_DEF',
    'HWPTAG_NUMBERING',
    'HWPTAG_BULLET',
    'HWPTAG_PARA_SHAPE',
    'HWPTAG_STYLE',
    'HWPTAG_DOC_DATA',
    'HWPTAG_DISTRIBUTE_DOC_DATA',
    'HWPTAG_COMPATIBLE_DOCUMENT',
    'HWPTAG_LAYOUT_COMPATIBILITY',
    'HWPTAG_TRACKCHANGE',
    'HWPTAG_MEMO_SHAPE',
    'HWPTAG_FORBIDDEN_CHAR',
    'HWPTAG_TRACK_CHANGE',
    'HWPTAG_TRACK_CHANGE_AUTHOR',
    'HWPTAG_PARA_HEADER',
    'HWPTAG_PARA_TEXT',
    'HWPTAG_PARA_CHAR_SHAPE',
    'HWPTAG_PARA_LINE_SEG',
    'HWPTAG_PARA_RANGE_TAG',
    'HWPTAG_CTRL_HEADER',
    'HWPTAG_LIST_HEADER',
    'HWPTAG_PAGE_DEF',
    'HWPTAG_FOOTNOTE_SHAPE',
    'HWPTAG_PAGE_BORDER_FILL',
    'HWPTAG_SHAPE_COMPONENT',
    'HWPTAG_TABLE',
    'HWPTAG_SHAPE_COMPONENT_LINE',
    'HWPTAG_SHAPE_COMPONENT_RECTANGLE',
    'HWPTAG_SHAPE_COMPONENT_ELLIPSE',
    'HWPTAG_SHAPE_COMPONENT_ARC',
    'HWPTAG_SHAPE_COMPONENT_POLYGON',
    'HWPTAG_SHAPE_COMPONENT_CURVE',
    'HWPTAG_SHAPE_COMPONENT_OLE',
    'HWPTAG_SHAPE_COMPONENT_PICTURE',
    'HWPTAG_SHAPE_COMPONENT_CONTAINER',
    'HWPTAG_CTRL_DATA',
    'HWPTAG_EQEDIT',
    'HWPTAG_SHAPE_COMPONENT_TEXTART',
    'HWPTAG_FORM_OBJECT',
    'HWPTAG_MEMO_LIST',
    'HWPTAG_CHART_DATA',
    'HWPTAG_VIDEO_DATA',
    'HWPTAG_SHAPE_COMPONENT_UNKNOWN',
    # Control chars
    'CTRL_CHAR_UNUSABLE',
    'CTRL_CHAR_TAB',
    'CTRL_CHAR_LINE_BREAK',
    'CTRL_CHAR_DRAWING_TABLE_OBJECT',
    'CTRL_CHAR_PARA_BREAK',
    'CTRL_CHAR_HYPHEN',
    'CTRL_CHAR_KEEP_WORD_SPACE',
    'CTRL_CHAR_FIXED_WIDTH_SPACE',
    'CHAR_CONTROL_CODES',
    'CONTROL_CHAR_WCHARS',
    # Control IDs
    'CTRL_ID_TABLE',
    'CTRL_ID_GSO',
    'CTRL_ID_SECTION',
    'CTRL_ID_COLUMN',
    'CTRL_ID_HEADER',
    'CTRL_ID_FOOTER',
    'CTRL_ID_FOOTNOTE',
    'CTRL_ID_ENDNOTE',
    'CTRL_ID_AUTO_NUM',
    'CTRL_ID_AUTO_NUM_ALT',
    'CTRL_ID_NEW_NUM',
    'CTRL_ID_NEW_NUM_ALT',
    'CTRL_ID_HIDE',
    'CTRL_ID_PAGE_ADJUST',
    'CTRL_ID_PAGE_NUMBER',
    'CTRL_ID_PAGE_NUMBER_POS',
    'CTRL_ID_BOOKMARK',
    'CTRL_ID_OVERLAP',
    'CTRL_ID_COMMENT',
    'CTRL_ID_HIDDEN_DESC',
    'CTRL_ID_FIELD_START',
    'CTRL_ID_FIELD_PREFIX',
    # File signatures / streams
    'OLE_MAGIC',
    'ZIP_MAGIC',
    'HWP_SIGNATURE',
    'STREAM_FILE_HEADER',
    'STREAM_DOC_INFO',
    'STREAM_BODY_TEXT',
    'STREAM_BIN_DATA',
    'STREAM_SECTION_PREFIX',
    'STREAM_SUMMARY_INFORMATION',
    'FILE_HEADER_SIZE',
    # FileHeader flags
    'FLAG_COMPRESSED',
    'FLAG_ENCRYPTED',
    'FLAG_DISTRIBUTION',
    'FLAG_SCRIPT',
    'FLAG_DRM',
    'FLAG_XML_TEMPLATE',
    'FLAG_HISTORY',
    'FLAG_SIGNATURE',
    'FLAG_CERT_ENCRYPTED',
    'FLAG_SIGNATURE_SPARE',
    'FLAG_CERT_DRM',
    'FLAG_CCL',
    'FLAG_MOBILE_OPTIMIZED',
    'FLAG_PRIVACY_SECURITY',
    'FLAG_TRACK_CHANGE',
    'FLAG_KOGL',
    'FLAG_VIDEO_CONTROL',
    'FLAG_TOC_FIELD',
    # Versions
    'VERSION_5_0_1_0',
    'VERSION_5_0_2_1',
    'VERSION_5_0_2_5',
    'VERSION_5_0_3_2',
    # BinData types
    'BINDATA_LINK',
    'BINDATA_EMBEDDING',
    'BINDATA_STORAGE',
    'BINDATA_COMPRESS_DEFAULT',
    'BINDATA_COMPRESS_YES',
    'BINDATA_COMPRESS_NO',
]
