# hwpcore/core/functions/stream_provider.py
"""
BaseStreamProvider - Abstract base class for named-stream sources

Defines the interface the HWP 5.0 decoder reads its input through. The
decoder never opens files itself: it asks a provider for each stream by
name, once, before decoding it.

Stream names use '/' as the storage separator:
    FileHeader, DocInfo, BodyText/Section0, BinData/BIN0001.png

Usage:
    class ZipStreamProvider(BaseStreamProvider):
        def get_stream(self, name: str) -> bytes:
            return self._zip.read(name)

        def has_stream(self, name: str) -> bool:
            return name in self._zip.namelist()

        def list_streams(self) -> List[str]:
            return self._zip.namelist()
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping


class BaseStreamProvider(ABC):
    """
    Abstract base class for stream providers.

    Subclasses must implement:
    - get_stream(): Return the raw bytes of a named stream
    - has_stream(): Report whether a stream exists
    - list_streams(): Return every stream name
    """

    @abstractmethod
    def get_stream(self, name: str) -> bytes:
        """
        Return the raw bytes of a stream.

        Args:
            name: Stream name, e.g. 'BodyText/Section0'

        Returns:
            Stream data exactly as stored (still compressed)

        Raises:
            KeyError: If the stream does not exist
        """
        pass

    @abstractmethod
    def has_stream(self, name: str) -> bool:
        pass

    @abstractmethod
    def list_streams(self) -> List[str]:
        pass

    def list_streams_under(self, storage: str) -> List[str]:
        """Stream names directly inside a storage (e.g. 'BinData')."""
        prefix = storage.rstrip('/') + '/'
        return [name for name in self.list_streams() if name.startswith(prefix)]


class DictStreamProvider(BaseStreamProvider):
    """
    In-memory provider backed by a name -> bytes mapping.

    Used for tests and for containers already unpacked by the caller.
    """

    def __init__(self, streams: Mapping[str, bytes]):
        self._streams: Dict[str, bytes] = dict(streams)

    def get_stream(self, name: str) -> bytes:
        return self._streams[name]

    def has_stream(self, name: str) -> bool:
        return name in self._streams

    def list_streams(self) -> List[str]:
        return list(self._streams)


__all__ = [
    'BaseStreamProvider',
    'DictStreamProvider',
]
