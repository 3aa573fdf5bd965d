# hwpcore/core/processor/hwp5_helper/hwp5_bodytext.py
"""
HWP 5.0 BodyText Section Assembly

Turns the record tree of one BodyText/SectionN stream into Section ->
Paragraph -> records, decoding every record depth-first.

Record Tree Structure:
    PARA_HEADER (level 0)
      PARA_TEXT, PARA_CHAR_SHAPE, PARA_LINE_SEG (level 1)
      CTRL_HEADER 'tbl ' (level 1)
        TABLE (level 2)
        LIST_HEADER (level 2)          cell
        PARA_HEADER (level 2)          cell paragraph (sibling of LIST_HEADER)
      CTRL_HEADER 'gso ' (level 1)
        SHAPE_COMPONENT (level 2)
          SHAPE_COMPONENT_PICTURE (level 3)

A LIST_HEADER's paragraphs follow it as siblings; it takes as many as its
paragraph_count says. Records that fail to decode become UnknownRecord
with a diagnostic, and their subtrees are still decoded.
"""
import logging
from typing import Any, Dict, List, Optional

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_PARA_HEADER,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_SHAPE_COMPONENT,
    STREAM_SECTION_PREFIX,
)
from hwpcore.core.processor.hwp5_helper.hwp5_ctrl_header import decode_ctrl_header
from hwpcore.core.processor.hwp5_helper.hwp5_dispatch import (
    DecodeContext,
    RecordDecoder,
    UnknownRecord,
    run_decoder,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import DecodeDiagnostic, HwpError
from hwpcore.core.processor.hwp5_helper.hwp5_model import (
    CtrlHeaderRecord,
    ListHeaderRecord,
    Paragraph,
    Section,
    ShapeComponentRecord,
)
from hwpcore.core.processor.hwp5_helper.hwp5_paragraph import PARAGRAPH_DECODERS, ListHeader
from hwpcore.core.processor.hwp5_helper.hwp5_record import HwpRecord, RecordTree
from hwpcore.core.processor.hwp5_helper.hwp5_shape_component import SHAPE_COMPONENT_DECODERS

logger = logging.getLogger("hwpcore.HWP5")

BODY_TEXT_DECODERS: Dict[int, RecordDecoder] = dict(PARAGRAPH_DECODERS)
BODY_TEXT_DECODERS.update(SHAPE_COMPONENT_DECODERS)
BODY_TEXT_DECODERS[HWPTAG_CTRL_HEADER] = RecordDecoder("CtrlHeader", 4, decode_ctrl_header)


class SectionDecoder:
    """
    Decodes the record tree of one section.

    Args:
        tree: Record tree of the decompressed section stream
        context: Decode context (document version)
        diagnostics: List receiving per-record failures
        stream_name: Stream name used in diagnostics
        strict: Re-raise per-record failures instead of keeping raw bytes
    """

    def __init__(
        self,
        tree: RecordTree,
        context: Optional[DecodeContext] = None,
        diagnostics: Optional[List[DecodeDiagnostic]] = None,
        stream_name: str = "",
        strict: bool = False,
    ):
        self._tree = tree
        self._context = context or DecodeContext()
        self._diagnostics = diagnostics if diagnostics is not None else []
        self._stream_name = stream_name
        self._strict = strict

    def decode(self, index: int) -> Section:
        section = Section(index=index, partial=self._tree.is_partial)
        for item in self._decode_siblings(self._tree.roots, self._context):
            if isinstance(item, Paragraph):
                section.paragraphs.append(item)
            else:
                section.extra_records.append(item)

        if section.extra_records:
            logger.debug(f"Section {index}: {len(section.extra_records)} non-paragraph root records")
        return section

    # ========================================================================
    # Record Decoding
    # ========================================================================

    def _decode_payload(self, record: HwpRecord, context: DecodeContext) -> Any:
        """Decode one record's payload, falling back to UnknownRecord."""
        entry = BODY_TEXT_DECODERS.get(record.tag_id)
        if entry is None:
            logger.debug(f"Unknown BodyText tag {record.tag_id} at offset {record.offset}")
            return UnknownRecord(record.tag_id, record.payload)

        try:
            return run_decoder(entry, record.payload, context)
        except HwpError as e:
            if self._strict:
                raise
            logger.warning(f"{self._stream_name}: {entry.name} at offset {record.offset} kept raw: {e}")
            self._diagnostics.append(
                DecodeDiagnostic.from_error(self._stream_name, e, offset=record.offset, tag_id=record.tag_id)
            )
            return UnknownRecord(record.tag_id, record.payload, error=str(e))

    def _decode_siblings(self, records: List[HwpRecord], context: DecodeContext) -> List[Any]:
        """Decode a list of sibling records in order."""
        results = []
        pos = 0

        while pos < len(records):
            record = records[pos]
            pos += 1

            if record.tag_id == HWPTAG_LIST_HEADER:
                item, taken = self._decode_list_header(record, records, pos, context)
                pos += taken
                results.append(item)
            else:
                results.extend(self._decode_record(record, context))

        return results

    def _decode_record(self, record: HwpRecord, context: DecodeContext) -> List[Any]:
        tag_id = record.tag_id

        if tag_id == HWPTAG_PARA_HEADER:
            return [self._decode_paragraph(record, context)]

        if tag_id == HWPTAG_CTRL_HEADER:
            ctrl = CtrlHeaderRecord(self._decode_payload(record, context))
            for item in self._decode_siblings(record.children, context.child(nested=False)):
                if isinstance(item, Paragraph):
                    ctrl.paragraphs.append(item)
                else:
                    ctrl.children.append(item)
            return [ctrl]

        if tag_id == HWPTAG_SHAPE_COMPONENT:
            component = self._decode_payload(record, context)
            children = self._decode_siblings(record.children, context.child(nested=True))
            return [ShapeComponentRecord(component, children)]

        # Plain record: any children follow it in the same list
        results = [self._decode_payload(record, context)]
        if record.child_indices:
            results.extend(self._decode_siblings(record.children, context))
        return results

    def _decode_paragraph(self, record: HwpRecord, context: DecodeContext) -> Paragraph:
        header = self._decode_payload(record, context)
        return Paragraph(header, self._decode_siblings(record.children, context))

    def _decode_list_header(self, record: HwpRecord, siblings: List[HwpRecord], start: int, context: DecodeContext):
        """
        Decode a LIST_HEADER and collect its paragraphs.

        Args:
            record: The LIST_HEADER record
            siblings: Sibling list the LIST_HEADER belongs to
            start: Position in siblings right after the LIST_HEADER
            context: Decode context

        Returns:
            (ListHeaderRecord, number of following siblings taken)
        """
        header = self._decode_payload(record, context)
        item = ListHeaderRecord(header)

        for child in self._decode_siblings(record.children, context):
            if isinstance(child, Paragraph):
                item.paragraphs.append(child)
            else:
                item.children.append(child)

        taken = 0
        if isinstance(header, ListHeader):
            needed = header.paragraph_count - len(item.paragraphs)
            for sibling in siblings[start:start + max(needed, 0)]:
                if sibling.tag_id != HWPTAG_PARA_HEADER:
                    break
                item.paragraphs.append(self._decode_paragraph(sibling, context))
                taken += 1

        return item, taken


def decode_section(
    index: int,
    tree: RecordTree,
    context: Optional[DecodeContext] = None,
    diagnostics: Optional[List[DecodeDiagnostic]] = None,
    strict: bool = False,
) -> Section:
    """
    Decode one BodyText section.

    Args:
        index: Section number (N of BodyText/SectionN)
        tree: Record tree of the decompressed section stream
        context: Decode context
        diagnostics: List receiving per-record failures
        strict: Re-raise per-record failures

    Returns:
        Section
    """
    stream_name = f"{STREAM_SECTION_PREFIX}{index}"
    section = SectionDecoder(tree, context, diagnostics, stream_name, strict).decode(index)
    logger.info(
        f"{stream_name}: {len(section.paragraphs)} paragraphs"
        + (" (partial)" if section.partial else "")
    )
    return section


__all__ = [
    'BODY_TEXT_DECODERS',
    'SectionDecoder',
    'decode_section',
]
