# hwpcore/core/processor/hwp5_helper/hwp5_model.py
"""
HWP 5.0 Document Model

Result of a decode:

    DocumentModel
      file_header    FileHeader
      doc_info       DocInfo (resource tables, BinData blobs)
      body_text      BodyText -> Section -> Paragraph -> records
      diagnostics    non-fatal conditions met while decoding
      summary        HwpSummaryInformation metadata (optional)

Cross references (char shape -> face name, picture -> BinData, ...) stay
as indices. The get_* helpers resolve them on demand and return None for
indices that point nowhere.
"""
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from hwpcore.core.processor.hwp5_helper.hwp5_docinfo import (
    LANGUAGES,
    BinaryDataItem,
    DocInfo,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import DecodeDiagnostic
from hwpcore.core.processor.hwp5_helper.hwp5_fileheader import FileHeader
from hwpcore.core.processor.hwp5_helper.hwp5_metadata import HwpSummaryInfo
from hwpcore.core.processor.hwp5_helper.hwp5_paragraph import ListHeader, ParaHeader, ParaText


@dataclass
class Paragraph:
    """
    One paragraph: its PARA_HEADER plus the decoded child records.

    header is an UnknownRecord when the PARA_HEADER itself failed to decode.
    """
    header: Any
    records: List[Any] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Concatenated PARA_TEXT of this paragraph (nested paragraphs excluded)."""
        return ''.join(r.text for r in self.records if isinstance(r, ParaText))

    def find_records(self, record_type: type) -> List[Any]:
        return [r for r in self.records if isinstance(r, record_type)]


@dataclass
class CtrlHeaderRecord:
    """
    CTRL_HEADER with its subtree.

    Attributes:
        header: CtrlHeader (or UnknownRecord)
        children: Non-paragraph child records (TABLE, LIST_HEADER, SHAPE_COMPONENT, ...)
        paragraphs: PARA_HEADER children (header/footer/footnote text)
    """
    header: Any
    children: List[Any] = field(default_factory=list)
    paragraphs: List[Paragraph] = field(default_factory=list)

    @property
    def ctrl_id(self) -> Optional[str]:
        return getattr(self.header, 'ctrl_id', None)


@dataclass
class ListHeaderRecord:
    """LIST_HEADER (table cell, text box) and the paragraphs it owns."""
    header: Any
    paragraphs: List[Paragraph] = field(default_factory=list)
    children: List[Any] = field(default_factory=list)

    @property
    def cell(self):
        if isinstance(self.header, ListHeader):
            return self.header.cell
        return None


@dataclass
class ShapeComponentRecord:
    """SHAPE_COMPONENT with its type record and nested components."""
    component: Any
    children: List[Any] = field(default_factory=list)


@dataclass
class Section:
    """
    One BodyText/SectionN stream.

    Attributes:
        index: Section number N
        paragraphs: Root-level paragraphs in stream order
        extra_records: Root records that are not PARA_HEADER (demoted or stray)
        partial: True when the stream ended early and only a prefix was decoded
    """
    index: int
    paragraphs: List[Paragraph] = field(default_factory=list)
    extra_records: List[Any] = field(default_factory=list)
    partial: bool = False


@dataclass
class BodyText:
    sections: List[Section] = field(default_factory=list)

    def iter_paragraphs(self) -> Iterator[Paragraph]:
        for section in self.sections:
            yield from section.paragraphs


@dataclass
class DocumentModel:
    """
    Decoded HWP 5.0 document.

    Built once by parse_document(); consumers read it and must not modify it.
    """
    file_header: FileHeader
    doc_info: DocInfo
    body_text: BodyText
    diagnostics: List[DecodeDiagnostic] = field(default_factory=list)
    summary: Optional[HwpSummaryInfo] = None

    @property
    def version(self) -> str:
        return self.file_header.version_string

    @staticmethod
    def _at(items: List[Any], index: int) -> Any:
        if 0 <= index < len(items):
            return items[index]
        return None

    def get_bin_data(self, bindata_id: int):
        """BIN_DATA record for a 1-based bindata_id (as stored in pictures/OLE)."""
        return self._at(self.doc_info.bin_data, bindata_id - 1)

    def get_binary_data(self, bindata_id: int) -> Optional[BinaryDataItem]:
        """Loaded BinData blob for a 1-based bindata_id."""
        for item in self.doc_info.binary_data:
            if item.index == bindata_id:
                return item
        return None

    def get_face_name(self, index: int, language: str = 'korean'):
        """
        Face name for a CharShape face_name_ids entry.

        Face names are stored per language, one block after another, with
        block sizes given by ID_MAPPINGS. Without ID_MAPPINGS the index is
        applied to the whole list.

        Args:
            index: 0-based index within the language block
            language: One of LANGUAGES
        """
        mappings = self.doc_info.id_mappings
        counts = getattr(mappings, 'counts', None)
        if not counts:
            return self._at(self.doc_info.face_names, index)

        offset = 0
        for name in LANGUAGES:
            count = counts.get(f'font_{name}', 0)
            if name == language:
                if not 0 <= index < count:
                    return None
                return self._at(self.doc_info.face_names, offset + index)
            offset += count
        raise ValueError(f"Unknown language: {language}")

    def get_border_fill(self, border_fill_id: int):
        """BORDER_FILL for a 1-based border_fill_id (0 means none)."""
        return self._at(self.doc_info.border_fills, border_fill_id - 1)

    def get_char_shape(self, index: int):
        return self._at(self.doc_info.char_shapes, index)

    def get_para_shape(self, index: int):
        return self._at(self.doc_info.para_shapes, index)

    def get_style(self, index: int):
        return self._at(self.doc_info.styles, index)

    def get_tab_def(self, index: int):
        return self._at(self.doc_info.tab_defs, index)

    def get_numbering(self, index: int):
        return self._at(self.doc_info.numberings, index)

    def get_paragraph_style(self, paragraph: Paragraph):
        if isinstance(paragraph.header, ParaHeader):
            return self.get_style(paragraph.header.style_id)
        return None


__all__ = [
    'Paragraph',
    'CtrlHeaderRecord',
    'ListHeaderRecord',
    'ShapeComponentRecord',
    'Section',
    'BodyText',
    'DocumentModel',
]
