# hwpcore/core/processor/hwp5_helper/hwp5_errors.py
"""
HWP 5.0 Decode Errors

Exception hierarchy raised while decoding HWP 5.0 streams, plus the
DecodeDiagnostic record used to report non-fatal conditions.

Severity:
- Per-record (InsufficientData, MalformedNesting): the record falls back
  to an Unknown/raw variant and decoding continues.
- Per-stream (TruncatedRecord, InvalidRecordTag): the prefix decoded so far
  is kept.
- Per-document (DecompressionError, MissingStream, InvalidSignature,
  UnsupportedDocument): decoding of the document stops.
"""
from dataclasses import dataclass
from typing import Optional


class HwpError(Exception):
    """Base class for all HWP decoding failures."""


class InsufficientData(HwpError):
    """Raised when a payload is shorter than the structure being decoded."""

    def __init__(self, what: str, expected: int, actual: int):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: need {expected} bytes, got {actual}")


class TruncatedRecord(HwpError):
    """Raised when a record header or payload runs past the end of its stream."""

    def __init__(self, offset: int, expected: int, actual: int):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Truncated record at offset {offset}: "
            f"need {expected} bytes, {actual} remaining"
        )


class InvalidRecordTag(HwpError):
    """Raised when a record carries a tag id below HWPTAG_BEGIN."""

    def __init__(self, offset: int, tag_id: int):
        self.offset = offset
        self.tag_id = tag_id
        super().__init__(f"Invalid record tag {tag_id} at offset {offset}")


class MalformedNesting(HwpError):
    """Raised when a record's level has no parent one level above it."""

    def __init__(self, offset: int, level: int, parent_level: Optional[int]):
        self.offset = offset
        self.level = level
        self.parent_level = parent_level
        super().__init__(
            f"Record at offset {offset} has level {level} "
            f"but nearest ancestor level is {parent_level}"
        )


class DecompressionError(HwpError):
    """Raised when a stream flagged as compressed does not inflate completely."""

    def __init__(self, stream: str, reason: str):
        self.stream = stream
        self.reason = reason
        super().__init__(f"Failed to decompress stream '{stream}': {reason}")


class MissingStream(HwpError):
    """Raised when a mandatory stream is absent from the container."""

    def __init__(self, stream: str):
        self.stream = stream
        super().__init__(f"Mandatory stream '{stream}' not found")


class InvalidSignature(HwpError):
    """Raised when the FileHeader does not start with the HWP signature."""

    def __init__(self, signature: bytes):
        self.signature = signature
        super().__init__(f"Not an HWP 5.0 document (signature {signature!r})")


class UnsupportedDocument(HwpError):
    """Raised for documents this decoder cannot read, e.g. password-encrypted ones."""


@dataclass
class DecodeDiagnostic:
    """
    Non-fatal condition recorded during a decode.

    Attributes:
        stream: Stream name the condition occurred in
        message: Human-readable description
        offset: Byte offset of the record header, when known
        tag_id: Tag of the affected record, when known
        error: Exception class name (e.g. 'InsufficientData')
    """
    stream: str
    message: str
    offset: Optional[int] = None
    tag_id: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_error(
        cls,
        stream: str,
        error: HwpError,
        offset: Optional[int] = None,
        tag_id: Optional[int] = None,
    ) -> 'DecodeDiagnostic':
        if offset is None:
            offset = getattr(error, 'offset', None)
        return cls(
            stream=stream,
            message=str(error),
            offset=offset,
            tag_id=tag_id,
            error=type(error).__name__,
        )


__all__ = [
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
]
