# hwpcore/core/processor/hwp5_helper/hwp5_document.py
"""
HWP 5.0 Document Assembly

Pipeline:
    Stream Provider -> Decompressor -> Record Framer -> Tree Builder
        -> Tag Dispatchers -> DocumentModel

parse_document() fetches every stream once from the provider, then decodes:
1. FileHeader (mandatory, never compressed)
2. DocInfo (mandatory)
3. BodyText/Section0..N (at least Section0)
4. BinData/BINxxxx.ext blobs referenced by BIN_DATA records
5. \\x05HwpSummaryInformation (optional)

Fatal conditions (missing mandatory stream, undecompressable stream,
encrypted document) raise. Everything else is recorded in
DocumentModel.diagnostics and decoding continues.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from hwpcore.core.functions.stream_provider import BaseStreamProvider
from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    STREAM_FILE_HEADER,
    STREAM_DOC_INFO,
    STREAM_SECTION_PREFIX,
    BINDATA_LINK,
)
from hwpcore.core.processor.hwp5_helper.hwp5_bodytext import decode_section
from hwpcore.core.processor.hwp5_helper.hwp5_decoder import decompress_bindata, decompress_stream
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import DecodeContext
from hwpcore.core.processor.hwp5_helper.hwp5_docinfo import (
    BinData,
    BinaryDataItem,
    DocInfo,
    decode_doc_info,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import (
    DecodeDiagnostic,
    DecompressionError,
    MissingStream,
    UnsupportedDocument,
)
from hwpcore.core.processor.hwp5_helper.hwp5_fileheader import FileHeader, parse_file_header
from hwpcore.core.processor.hwp5_helper.hwp5_metadata import HwpSummaryInfo, read_summary_information
from hwpcore.core.processor.hwp5_helper.hwp5_model import BodyText, DocumentModel
from hwpcore.core.processor.hwp5_helper.hwp5_record import RecordTree, parse_records

logger = logging.getLogger("hwpcore.HWP5")


@dataclass
class Hwp5DecoderConfig:
    """
    Configuration for HWP 5.0 decoding.

    Attributes:
        accept_partial: Keep the decoded prefix of truncated streams
        verify_signature: Reject FileHeaders without the HWP signature
        load_bin_data: Load and decompress BinData blobs
        read_summary_information: Read document metadata
        strict: Re-raise per-record decode failures instead of keeping raw bytes
    """
    accept_partial: bool = True
    verify_signature: bool = True
    load_bin_data: bool = True
    read_summary_information: bool = True
    strict: bool = False


def list_section_streams(provider: BaseStreamProvider) -> List[str]:
    """
    Section stream names in numeric order, stopping at the first gap.

    Returns:
        ['BodyText/Section0', 'BodyText/Section1', ...]
    """
    names = []
    index = 0
    while provider.has_stream(f"{STREAM_SECTION_PREFIX}{index}"):
        names.append(f"{STREAM_SECTION_PREFIX}{index}")
        index += 1
    return names


def _load_bin_data(
    provider: BaseStreamProvider,
    doc_info: DocInfo,
    document_compressed: bool,
    diagnostics: List[DecodeDiagnostic],
) -> List[BinaryDataItem]:
    """
    Load BinData blobs for EMBEDDING/STORAGE BIN_DATA records.

    Blob index is the 1-based position of its BIN_DATA record, which is
    the bindata_id pictures and OLE objects refer to.
    """
    items = []
    for position, record in enumerate(doc_info.bin_data, start=1):
        if not isinstance(record, BinData) or record.storage_type == BINDATA_LINK:
            continue

        name = record.stream_name
        if name is None:
            continue

        if not provider.has_stream(name):
            logger.warning(f"BinData stream not found: {name}")
            diagnostics.append(DecodeDiagnostic(name, f"BinData stream '{name}' not found", error='MissingStream'))
            continue

        raw = provider.get_stream(name)
        try:
            data = decompress_bindata(raw, record.compression, document_compressed, name)
        except DecompressionError as e:
            logger.warning(f"BinData {name} kept compressed: {e}")
            diagnostics.append(DecodeDiagnostic.from_error(name, e))
            data = raw

        items.append(BinaryDataItem(index=position, bin_id=record.bin_id, name=name, data=data))
        logger.debug(f"BinData {name}: {len(data)} bytes")

    return items


def assemble(
    file_header: FileHeader,
    doc_info_tree: RecordTree,
    section_trees: List[RecordTree],
    binary_data: Optional[List[BinaryDataItem]] = None,
    diagnostics: Optional[List[DecodeDiagnostic]] = None,
    summary: Optional[HwpSummaryInfo] = None,
    strict: bool = False,
) -> DocumentModel:
    """
    Decode record trees into a DocumentModel.

    Cross references are left as indices; index lists keep declaration order.

    Args:
        file_header: Parsed FileHeader
        doc_info_tree: Record tree of DocInfo
        section_trees: Record trees of BodyText/Section0..N in order
        binary_data: BinData blobs (may be empty)
        diagnostics: Diagnostics collected so far (extended in place)
        summary: Document metadata
        strict: Re-raise per-record failures

    Returns:
        DocumentModel
    """
    diagnostics = diagnostics if diagnostics is not None else []
    context = DecodeContext(version=file_header.version)

    doc_info = decode_doc_info(doc_info_tree, context, diagnostics, STREAM_DOC_INFO, strict)
    doc_info.binary_data = list(binary_data or [])

    body_text = BodyText()
    for index, tree in enumerate(section_trees):
        body_text.sections.append(decode_section(index, tree, context, diagnostics, strict))

    return DocumentModel(
        file_header=file_header,
        doc_info=doc_info,
        body_text=body_text,
        diagnostics=diagnostics,
        summary=summary,
    )


def parse_document(provider: BaseStreamProvider, config: Optional[Hwp5DecoderConfig] = None) -> DocumentModel:
    """
    Decode an HWP 5.0 document.

    Args:
        provider: Stream provider of the document container
        config: Decoder configuration

    Returns:
        DocumentModel

    Raises:
        MissingStream: If FileHeader, DocInfo or BodyText/Section0 is absent
        UnsupportedDocument: If the document is password-encrypted
        InvalidSignature: If the FileHeader signature mismatches
        DecompressionError: If DocInfo or a section does not inflate
    """
    config = config or Hwp5DecoderConfig()
    diagnostics: List[DecodeDiagnostic] = []

    if not provider.has_stream(STREAM_FILE_HEADER):
        raise MissingStream(STREAM_FILE_HEADER)
    file_header = parse_file_header(provider.get_stream(STREAM_FILE_HEADER), config.verify_signature)

    if file_header.encrypted:
        raise UnsupportedDocument("Password-encrypted documents are not supported")
    if file_header.distribution:
        logger.warning("Distribution document: body text is stored encrypted in ViewText")

    if not provider.has_stream(STREAM_DOC_INFO):
        raise MissingStream(STREAM_DOC_INFO)
    section_names = list_section_streams(provider)
    if not section_names:
        raise MissingStream(f"{STREAM_SECTION_PREFIX}0")

    # Fetch and inflate every stream before decoding
    compressed = file_header.compressed
    streams: Dict[str, bytes] = {}
    for name in [STREAM_DOC_INFO] + section_names:
        streams[name] = decompress_stream(provider.get_stream(name), compressed, name)

    doc_info_tree = parse_records(streams[STREAM_DOC_INFO], diagnostics, STREAM_DOC_INFO, config.accept_partial)
    section_trees = [
        parse_records(streams[name], diagnostics, name, config.accept_partial)
        for name in section_names
    ]

    summary = None
    if config.read_summary_information:
        summary = read_summary_information(provider)

    document = assemble(
        file_header,
        doc_info_tree,
        section_trees,
        diagnostics=diagnostics,
        summary=summary,
        strict=config.strict,
    )

    if config.load_bin_data:
        document.doc_info.binary_data = _load_bin_data(provider, document.doc_info, compressed, diagnostics)

    logger.info(
        f"HWP {file_header.version_string}: {len(document.body_text.sections)} sections, "
        f"{len(document.doc_info.binary_data)} BinData items, {len(diagnostics)} diagnostics"
    )
    return document


__all__ = [
    'Hwp5DecoderConfig',
    'list_section_streams',
    'assemble',
    'parse_document',
]
