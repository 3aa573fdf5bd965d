# hwpcore/core/__init__.py
"""
Core - HWP document decoding modules

Module layout:
- processor: Format handlers (HWP5Handler) and helper packages
- functions: Shared utilities (stream providers)
"""

from hwpcore.core.processor import HWP5Handler

__all__ = [
    "HWP5Handler",
]
