# hwpcore/core/processor/hwp5_handler.py
"""
HWP5 Handler - HWP 5.0 OLE Format File Loader

Class-based entry point that opens an HWP 5.0 file (path or bytes),
decodes it into a DocumentModel, and offers plain-text extraction over
the decoded paragraphs.

HWP 5.0 files are OLE compound documents. HWPX (ZIP) and HWP 2.0/3.0
legacy files are detected by signature and rejected.

Usage Example:
    handler = HWP5Handler()
    document = handler.load("report.hwp")
    for paragraph in document.body_text.iter_paragraphs():
        print(paragraph.text)
"""
import os
import logging
from typing import List, Optional, Union

from hwpcore.core.functions.stream_provider import BaseStreamProvider
from hwpcore.core.processor.hwp5_helper import (
    CtrlHeaderRecord,
    DocumentModel,
    Hwp5DecoderConfig,
    ListHeaderRecord,
    OleStreamProvider,
    Paragraph,
    ShapeComponentRecord,
    UnsupportedDocument,
    check_file_signature,
    parse_document,
)

logger = logging.getLogger("hwpcore.HWP5")


class HWP5Handler:
    """
    HWP 5.0 File Loading Handler Class.

    Attributes:
        config: Decoder configuration
    """

    def __init__(self, config: Optional[Hwp5DecoderConfig] = None):
        self._config = config or Hwp5DecoderConfig()
        self._logger = logging.getLogger(f"hwpcore.{self.__class__.__name__}")

    @property
    def config(self) -> Hwp5DecoderConfig:
        return self._config

    def load(self, source: Union[str, bytes, os.PathLike]) -> DocumentModel:
        """
        Decode an HWP 5.0 file.

        Args:
            source: File path or file bytes

        Returns:
            DocumentModel

        Raises:
            UnsupportedDocument: If the input is not an HWP 5.0 OLE file
            HwpError: If decoding fails (see parse_document)
        """
        if isinstance(source, (bytes, bytearray)):
            file_data = bytes(source)
            file_path = "<bytes>"
        else:
            file_path = os.fspath(source)
            with open(file_path, 'rb') as f:
                file_data = f.read()

        file_type = check_file_signature(file_data)
        if file_type != "OLE":
            raise UnsupportedDocument(f"{file_path} is not an HWP 5.0 file (detected: {file_type or 'unknown'})")

        self._logger.info(f"Loading HWP 5.0 file: {file_path}")
        with OleStreamProvider.from_bytes(file_data) as provider:
            return self.load_provider(provider)

    def load_provider(self, provider: BaseStreamProvider) -> DocumentModel:
        """Decode a document from an already opened stream provider."""
        document = parse_document(provider, self._config)
        if document.diagnostics:
            self._logger.info(f"Decoded with {len(document.diagnostics)} diagnostics")
        return document

    def extract_text(self, source: Union[str, bytes, os.PathLike]) -> str:
        """
        Extract plain text from an HWP 5.0 file.

        Table cells, text boxes, headers/footers and notes are visited in
        document order after the paragraph that anchors them.

        Args:
            source: File path or file bytes

        Returns:
            Extracted text, one line per paragraph
        """
        document = self.load(source)
        lines: List[str] = []
        for paragraph in document.body_text.iter_paragraphs():
            self._collect_text(paragraph, lines)
        return '\n'.join(lines)

    def _collect_text(self, paragraph: Paragraph, lines: List[str]) -> None:
        text = paragraph.text.replace('\x0b', '').rstrip('\n')
        if text:
            lines.append(text)
        self._collect_records(paragraph.records, lines)

    def _collect_records(self, records: List, lines: List[str]) -> None:
        for record in records:
            if isinstance(record, Paragraph):
                self._collect_text(record, lines)
            elif isinstance(record, CtrlHeaderRecord):
                self._collect_records(record.children, lines)
                self._collect_records(record.paragraphs, lines)
            elif isinstance(record, ListHeaderRecord):
                self._collect_records(record.paragraphs, lines)
            elif isinstance(record, ShapeComponentRecord):
                # Text boxes hang off the drawing object's component
                self._collect_records(record.children, lines)


__all__ = [
    'HWP5Handler',
]
