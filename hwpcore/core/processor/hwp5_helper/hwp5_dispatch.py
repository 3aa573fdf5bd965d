# hwpcore/core/processor/hwp5_helper/hwp5_dispatch.py
"""
HWP 5.0 Tag Dispatch

Data-driven mapping from a record key (tag id, or control id for control
headers) to a decode routine. Each partition (DocInfo, BodyText paragraph
records, control headers, shape components) owns one table of
RecordDecoder entries; adding a record type means adding a table row.

dispatch() validates the entry's minimum length before calling the
decoder, so every decoder can read its fixed fields unconditionally.
Keys missing from a table are not errors: the caller falls back to the
partition's Unknown variant carrying the raw payload.
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Hashable, NamedTuple, Optional

from hwpcore.core.processor.hwp5_helper.hwp5_binary import require_length


@dataclass
class DecodeContext:
    """
    Per-document state decoders may consult.

    Attributes:
        version: FileHeader version as a packed DWORD (0x05000302 = 5.0.3.2)
        nested: True while decoding a shape component inside a container
    """
    version: int = 0x05000000
    nested: bool = False

    def child(self, **changes) -> 'DecodeContext':
        return replace(self, **changes)


class RecordDecoder(NamedTuple):
    """
    One dispatch table row.

    Attributes:
        name: Structure name used in InsufficientData
        min_length: Minimum payload length in bytes
        decode: Callable(payload, context) -> decoded value
    """
    name: str
    min_length: int
    decode: Callable[[bytes, DecodeContext], Any]


@dataclass
class UnknownRecord:
    """
    Record kept verbatim: unknown tag or a payload that failed to decode.

    Attributes:
        tag_id: Record tag (or 0 when not applicable)
        payload: Raw record bytes
        error: Reason the record was not decoded, when it failed
    """
    tag_id: int
    payload: bytes
    error: Optional[str] = None


def run_decoder(entry: RecordDecoder, payload: bytes, context: DecodeContext) -> Any:
    """Check the entry's minimum length, then decode."""
    require_length(payload, entry.name, entry.min_length)
    return entry.decode(payload, context)


def dispatch(
    table: Dict[Hashable, RecordDecoder],
    key: Hashable,
    payload: bytes,
    context: Optional[DecodeContext] = None,
    default: Optional[RecordDecoder] = None,
) -> Any:
    """
    Decode a payload with the table entry registered for key.

    Args:
        table: Partition dispatch table
        key: Tag id or control id
        payload: Record payload
        context: Decode context (default: DecodeContext())
        default: Entry used when key is not in table

    Returns:
        Decoded value, or None when neither key nor default is registered

    Raises:
        InsufficientData: If payload is shorter than the entry's minimum
    """
    entry = table.get(key, default)
    if entry is None:
        return None
    return run_decoder(entry, payload, context or DecodeContext())


__all__ = [
    'DecodeContext',
    'RecordDecoder',
    'UnknownRecord',
    'run_decoder',
    'dispatch',
]
