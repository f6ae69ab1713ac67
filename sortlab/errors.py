"""
Errors raised by the sorter.
"""

from __future__ import annotations


class SortError(Exception):
    pass


class InvalidArgument(SortError, ValueError):
    """
    Raised when a buffer/length pair cannot describe a valid span.
    """

    def __init__(
        self,
        message: str,
        *,
        length: int | None = None,
        size: int | None = None,
    ) -> None:
        super().__init__(message)
        self.length = length
        self.size = size


class ResourceExhaustion(SortError, MemoryError):
    """
    Raised when the temporary buffers of a merge cannot be allocated.
    """

    def __init__(self, message: str, *, requested: int | None = None) -> None:
        super().__init__(message)
        self.requested = requested
