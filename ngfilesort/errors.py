"""Exceptions raised by the sort stage."""

from __future__ import annotations


class FileSortError(RuntimeError):
    """Base class for errors that abort a sort run."""


class EmptyContentError(FileSortError):
    """Raised when a file reaches the stage without readable content."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f'File: "{path}" without content. Read it before passing it to the sorter.'
        )
        self.path = path


class UnsupportedInputError(FileSortError):
    """Raised when file contents are delivered as a stream."""

    def __init__(self, path: str) -> None:
        super().__init__(f'File: "{path}" is streamed; streaming is not supported.')
        self.path = path


class ExtractionError(FileSortError):
    """Raised when module declarations cannot be extracted from a file."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f'Error in parsing: "{path}", {message}')
        self.path = path
        self.reason = message


__all__ = [
    "EmptyContentError",
    "ExtractionError",
    "FileSortError",
    "UnsupportedInputError",
]
