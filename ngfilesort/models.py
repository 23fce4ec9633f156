"""Core data models shared across ngfilesort components."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import IO, Dict, List, Optional, Union

Contents = Union[bytes, bytearray, str, IO[bytes], None]


@dataclass(eq=False)
class SourceFile:
    """Handle to one input file.

    Instances compare by identity: two handles with the same path are still
    distinct inputs and each one is emitted exactly once.
    """

    path: str
    base: str = ""
    contents: Contents = None

    @property
    def relative(self) -> str:
        """Path relative to ``base`` using forward slashes."""
        if not self.base:
            return self.path.replace("\\", "/")
        return os.path.relpath(self.path, self.base).replace("\\", "/")

    def is_null(self) -> bool:
        return self.contents is None

    def is_stream(self) -> bool:
        return self.contents is not None and not isinstance(
            self.contents, (bytes, bytearray, str)
        )

    def read_bytes(self) -> bytes:
        """Return buffered contents as bytes."""
        if isinstance(self.contents, str):
            return self.contents.encode("utf-8")
        if isinstance(self.contents, (bytes, bytearray)):
            return bytes(self.contents)
        raise TypeError(f"Contents of {self.relative} are not buffered")


@dataclass
class Extraction:
    """Module declarations and references found in one file."""

    modules: Dict[str, List[str]] = field(default_factory=dict)
    dependencies: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.modules and not self.dependencies


@dataclass(eq=False)
class ModuleRecord:
    """Everything known about one module id during a sort run.

    Records are hashable by identity so they can serve as graph nodes.
    """

    id: str
    declaration_files: List[SourceFile] = field(default_factory=list)
    attachments: List[SourceFile] = field(default_factory=list)
    has_dependencies: bool = False
    has_dependents: bool = False

    @property
    def is_declared(self) -> bool:
        return bool(self.declaration_files)

    @property
    def is_standalone(self) -> bool:
        """True for a declared module with no dependencies and no dependents."""
        return self.is_declared and not self.has_dependencies and not self.has_dependents

    @property
    def first_declaration(self) -> Optional[SourceFile]:
        return self.declaration_files[0] if self.declaration_files else None


__all__ = ["Contents", "Extraction", "ModuleRecord", "SourceFile"]
