# hwpcore/__init__.py
"""
hwpcore

Decoder library for HWP 5.0 (Hangul Word Processor) binary documents.

Package structure:
- core: Document decoding modules
    - HWP5Handler: File loading and text extraction
    - processor: Format handlers and the hwp5_helper decoding pipeline
    - functions: Stream provider abstraction

Usage Example:
    from hwpcore import HWP5Handler
    document = HWP5Handler().load("report.hwp")

    from hwpcore import parse_document, DictStreamProvider
    document = parse_document(DictStreamProvider(streams))
"""

__version__ = "1.0.0"

# Core classes
from hwpcore.core import HWP5Handler
from hwpcore.core.functions import BaseStreamProvider, DictStreamProvider
from hwpcore.core.processor.hwp5_helper import (
    DocumentModel,
    Hwp5DecoderConfig,
    OleStreamProvider,
    parse_document,
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

# Subpackages
from hwpcore import core

__all__ = [
    "__version__",
    # Core classes
    "HWP5Handler",
    "DocumentModel",
    "Hwp5DecoderConfig",
    "parse_document",
    # Stream providers
    "BaseStreamProvider",
    "DictStreamProvider",
    "OleStreamProvider",
    # Errors
    "HwpError",
    "InsufficientData",
    "TruncatedRecord",
    "InvalidRecordTag",
    "MalformedNesting",
    "DecompressionError",
    "MissingStream",
    "InvalidSignature",
    "UnsupportedDocument",
    "DecodeDiagnostic",
    # Subpackages
    "core",
]
