"""Host-facing stage: buffer files as they arrive, emit them sorted at the end."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import EmptyContentError, ExtractionError, FileSortError, UnsupportedInputError
from .extractor import ModuleExtractor
from .logging import get_logger
from .models import SourceFile
from .sorter import FileSorter


class FileSortStream:
    """Accepts files through :meth:`write` and returns them ordered from :meth:`end`.

    The first content error fails the run: it is raised from ``write``, later
    writes are ignored and ``end`` emits nothing.
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        extractor: Optional[ModuleExtractor] = None,
    ) -> None:
        self.sorter = FileSorter(patterns)
        self.extractor = extractor or ModuleExtractor()
        self.error: Optional[FileSortError] = None
        self.logger = get_logger("stream")
        self._ended = False

    @property
    def failed(self) -> bool:
        return self.error is not None

    def write(self, file: SourceFile) -> None:
        if self._ended:
            raise RuntimeError("write() called after end()")
        if self.error is not None:
            self.logger.debug("Ignoring %s after earlier failure", file.relative)
            return

        if file.is_null():
            raise self._fail(EmptyContentError(file.relative))
        if file.is_stream():
            raise self._fail(UnsupportedInputError(file.relative))

        try:
            extraction = self.extractor.extract(file.read_bytes(), file.relative)
        except ExtractionError as exc:
            raise self._fail(exc)
        except (ValueError, UnicodeDecodeError) as exc:
            raise self._fail(ExtractionError(file.relative, str(exc))) from exc

        self.sorter.add(file, extraction)

    def end(self) -> List[SourceFile]:
        if self._ended:
            raise RuntimeError("end() may only be called once")
        self._ended = True
        if self.error is not None:
            self.logger.info("Sort aborted: %s", self.error)
            return []
        return self.sorter.resolve()

    def _fail(self, error: FileSortError) -> FileSortError:
        self.error = error
        self.logger.debug("Sort run failed: %s", error)
        return error


def sort_files(
    files: Iterable[SourceFile],
    patterns: Iterable[str] = (),
    extractor: Optional[ModuleExtractor] = None,
) -> List[SourceFile]:
    """Sort ``files`` in one call; content errors propagate to the caller."""
    stream = FileSortStream(patterns, extractor=extractor)
    for file in files:
        stream.write(file)
    return stream.end()


__all__ = ["FileSortStream", "sort_files"]
