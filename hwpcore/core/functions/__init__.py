# hwpcore/core/functions/__init__.py
"""
Functions - Shared utility module

Module layout:
- stream_provider: Named byte-stream access over a document container

Usage Example:
    from hwpcore.core.functions import DictStreamProvider
"""

from hwpcore.core.functions.stream_provider import (
    BaseStreamProvider,
    DictStreamProvider,
)

__all__ = [
    "BaseStreamProvider",
    "DictStreamProvider",
]
