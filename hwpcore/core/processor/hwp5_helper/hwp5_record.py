# hwpcore/core/processor/hwp5_helper/hwp5_record.py
"""
HWP 5.0 Record Framer and Tree Builder

Parses HWP 5.0 binary records from DocInfo and BodyText/Section streams.

Record Structure:
- Header (4 bytes): TagID (10 bits) | Level (10 bits) | Size (12 bits)
- Extended Size (4 bytes): Only if Size field == 0xFFF
- Payload: Variable length data

Records form a tree structure based on Level values.
Level 0 = roots, Level N+1 = children of the nearest preceding Level N record.

The tree is stored as an append-only arena: every record lives in
RecordTree.records (stream order) and refers to its parent and children
by integer index.
"""
import struct
import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional

from hwpcore.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_BEGIN,
    RECORD_TAG_MASK,
    RECORD_LEVEL_SHIFT,
    RECORD_LEVEL_MASK,
    RECORD_SIZE_SHIFT,
    RECORD_SIZE_MASK,
    RECORD_EXTENDED_SIZE,
)
from hwpcore.core.processor.hwp5_helper.hwp5_errors import (
    HwpError,
    DecodeDiagnostic,
    InvalidRecordTag,
    MalformedNesting,
    TruncatedRecord,
)

logger = logging.getLogger("hwpcore.HWP5")


class RecordFrame(NamedTuple):
    """One framed record as read from the stream."""
    tag_id: int
    level: int
    size: int
    offset: int
    payload: bytes


def frame_records(data: bytes) -> Iterator[RecordFrame]:
    """
    Split a decompressed stream into framed records.

    Lazy, single forward pass. Frames are yielded as soon as they are
    complete; when the stream ends mid-record the generator raises after
    the last complete frame, so callers keep everything decoded before it.

    Args:
        data: Decompressed DocInfo or BodyText/Section stream data

    Yields:
        RecordFrame for each complete record

    Raises:
        TruncatedRecord: If a header or payload runs past the end of data
        InvalidRecordTag: If a record tag is below HWPTAG_BEGIN
    """
    pos = 0
    size = len(data)

    while pos < size:
        start = pos

        if pos + 4 > size:
            raise TruncatedRecord(start, 4, size - pos)

        # Parse 4-byte header
        header = struct.unpack('<I', data[pos:pos + 4])[0]
        pos += 4

        tag_id = header & RECORD_TAG_MASK                               # bits 0-9
        level = (header >> RECORD_LEVEL_SHIFT) & RECORD_LEVEL_MASK      # bits 10-19
        rec_len = (header >> RECORD_SIZE_SHIFT) & RECORD_SIZE_MASK      # bits 20-31

        if tag_id < HWPTAG_BEGIN:
            raise InvalidRecordTag(start, tag_id)

        # Extended size: if rec_len == 0xFFF, next 4 bytes contain actual size
        if rec_len == RECORD_EXTENDED_SIZE:
            if pos + 4 > size:
                raise TruncatedRecord(start, pos + 4 - start, size - start)
            rec_len = struct.unpack('<I', data[pos:pos + 4])[0]
            pos += 4

        if pos + rec_len > size:
            raise TruncatedRecord(start, pos + rec_len - start, size - start)

        yield RecordFrame(tag_id, level, rec_len, start, data[pos:pos + rec_len])
        pos += rec_len


class HwpRecord:
    """
    HWP 5.0 Binary Record.

    Represents a single record in the HWP binary stream. Records are owned
    by a RecordTree arena; parent/children are resolved through it.

    Attributes:
        tag_id: Record type identifier (10 bits, 0-1023)
        level: Nesting level as written in the stream
        payload: Record data (variable length)
        offset: Byte offset of the record header in its stream
        index: Position in the arena (stream order)
        parent_index: Arena index of the parent (None for roots)
        child_indices: Arena indices of children, in stream order
        sibling_position: Position among the parent's children (or the roots)
    """

    __slots__ = ('tag_id', 'level', 'payload', 'offset', 'index',
                 'parent_index', 'child_indices', 'sibling_position', '_tree')

    def __init__(self, tree: 'RecordTree', index: int, frame: RecordFrame):
        self._tree = tree
        self.index = index
        self.tag_id = frame.tag_id
        self.level = frame.level
        self.payload = frame.payload
        self.offset = frame.offset
        self.parent_index: Optional[int] = None
        self.child_indices: List[int] = []
        self.sibling_position = 0

    @property
    def parent(self) -> Optional['HwpRecord']:
        if self.parent_index is None:
            return None
        return self._tree.records[self.parent_index]

    @property
    def children(self) -> List['HwpRecord']:
        records = self._tree.records
        return [records[i] for i in self.child_indices]

    def get_next_siblings(self, count=None):
        """
        Get subsequent sibling records.

        Used for list headers (table cells, text boxes) whose paragraphs
        follow them as siblings rather than children.

        Args:
            count: Maximum number of siblings to return (None for all)

        Returns:
            Iterator of sibling records
        """
        if self.parent_index is None:
            sibling_indices = self._tree.root_indices
        else:
            sibling_indices = self.parent.child_indices
        start_idx = self.sibling_position + 1
        end_idx = None if count is None else start_idx + count
        records = self._tree.records
        return (records[i] for i in sibling_indices[start_idx:end_idx])

    def find_children_by_tag(self, tag_id: int) -> List['HwpRecord']:
        """
        Find all direct children with specified tag ID.

        Args:
            tag_id: Tag ID to search for

        Returns:
            List of matching child records
        """
        return [c for c in self.children if c.tag_id == tag_id]

    def find_first_child_by_tag(self, tag_id: int) -> Optional['HwpRecord']:
        for c in self.children:
            if c.tag_id == tag_id:
                return c
        return None

    def find_descendants_by_tag(self, tag_id: int) -> List['HwpRecord']:
        """
        Find all descendants (recursive) with specified tag ID.

        Args:
            tag_id: Tag ID to search for

        Returns:
            List of all matching records, including self when it matches
        """
        results = []
        if self.tag_id == tag_id:
            results.append(self)
        for child in self.children:
            results.extend(child.find_descendants_by_tag(tag_id))
        return results

    def __repr__(self) -> str:
        return (
            f"HwpRecord(tag_id={self.tag_id}, level={self.level}, "
            f"payload_size={len(self.payload)}, children={len(self.child_indices)})"
        )


class RecordTree:
    """
    Arena holding every record of one stream.

    Attributes:
        records: All records in stream order
        root_indices: Arena indices of root records
        error: Framing condition that ended the stream early, if any
    """

    def __init__(self):
        self.records: List[HwpRecord] = []
        self.root_indices: List[int] = []
        self.error: Optional[HwpError] = None

    @property
    def roots(self) -> List[HwpRecord]:
        return [self.records[i] for i in self.root_indices]

    @property
    def is_partial(self) -> bool:
        return self.error is not None

    def append(self, frame: RecordFrame, parent: Optional[HwpRecord]) -> HwpRecord:
        record = HwpRecord(self, len(self.records), frame)
        self.records.append(record)
        if parent is None:
            record.sibling_position = len(self.root_indices)
            self.root_indices.append(record.index)
        else:
            record.parent_index = parent.index
            record.sibling_position = len(parent.child_indices)
            parent.child_indices.append(record.index)
        return record

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[HwpRecord]:
        return iter(self.records)

    def __repr__(self) -> str:
        return f"RecordTree(records={len(self.records)}, roots={len(self.root_indices)}, partial={self.is_partial})"


def build_tree(
    frames: Iterable[RecordFrame],
    diagnostics: Optional[List[DecodeDiagnostic]] = None,
    stream_name: str = "",
    accept_partial: bool = True,
) -> RecordTree:
    """
    Build record tree from framed records.

    Keeps a stack of the most recent record per level. For a record at
    level L the stack is popped down to the nearest record with level < L;
    that record is the parent when its level is exactly L-1.

    Malformed nesting (no ancestor at L-1) demotes the record to a root
    and records a diagnostic. Framing conditions raised by `frames` end
    the tree; the records read so far are kept.

    Args:
        frames: Iterable of RecordFrame (usually frame_records(data))
        diagnostics: List receiving non-fatal conditions
        stream_name: Stream name used in diagnostics
        accept_partial: Keep the prefix of a truncated stream (False re-raises)

    Returns:
        RecordTree arena
    """
    tree = RecordTree()
    stack: List[HwpRecord] = []
    frame_iter = iter(frames)

    while True:
        try:
            frame = next(frame_iter)
        except StopIteration:
            break
        except (TruncatedRecord, InvalidRecordTag) as e:
            if not accept_partial:
                raise
            tree.error = e
            logger.warning(f"Stream '{stream_name}': {e}; keeping {len(tree.records)} records")
            if diagnostics is not None:
                diagnostics.append(DecodeDiagnostic.from_error(stream_name, e))
            break

        level = frame.level
        while stack and stack[-1].level >= level:
            stack.pop()

        parent = None
        if level > 0:
            if stack and stack[-1].level == level - 1:
                parent = stack[-1]
            else:
                nesting = MalformedNesting(frame.offset, level, stack[-1].level if stack else None)
                logger.debug(f"Stream '{stream_name}': {nesting}; demoting to root")
                if diagnostics is not None:
                    diagnostics.append(
                        DecodeDiagnostic.from_error(stream_name, nesting, tag_id=frame.tag_id)
                    )

        record = tree.append(frame, parent)
        stack.append(record)

    return tree


def parse_records(
    data: bytes,
    diagnostics: Optional[List[DecodeDiagnostic]] = None,
    stream_name: str = "",
    accept_partial: bool = True,
) -> RecordTree:
    """Frame and build the record tree of a decompressed stream."""
    tree = build_tree(frame_records(data), diagnostics, stream_name, accept_partial)
    logger.debug(f"Stream '{stream_name}': {len(tree.records)} records, {len(tree.root_indices)} roots")
    return tree


__all__ = [
    'RecordFrame',
    'frame_records',
    'HwpRecord',
    'RecordTree',
    'build_tree',
    'parse_records',
]
