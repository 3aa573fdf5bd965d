# hwpcore/core/processor/__init__.py
"""
Processor - Format handler module

Handlers:
- hwp5_handler: HWP 5.0 (OLE) document loading and text extraction

Helper modules (subdirectories):
- hwp5_helper/: HWP 5.0 decoding pipeline

Usage Example:
    from hwpcore.core.processor import HWP5Handler
    from hwpcore.core.processor.hwp5_helper import parse_document
"""

# === HWP 5.0 Handler ===
from hwpcore.core.processor.hwp5_handler import HWP5Handler

__all__ = [
    "HWP5Handler",
]
