"""Order AngularJS source files so modules are declared before they are used."""

from .errors import (
    EmptyContentError,
    ExtractionError,
    FileSortError,
    UnsupportedInputError,
)
from .models import Extraction, ModuleRecord, SourceFile
from .sorter import FileSorter
from .stream import FileSortStream, sort_files

__all__ = [
    "EmptyContentError",
    "Extraction",
    "ExtractionError",
    "FileSortError",
    "FileSortStream",
    "FileSorter",
    "ModuleRecord",
    "SourceFile",
    "UnsupportedInputError",
    "sort_files",
]
