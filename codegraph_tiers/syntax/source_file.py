"""
Source File representation
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SourceFile:
    """
    Represents one module of source text.

    Offsets handed out by the parser are byte offsets into ``data``
    (the encoded content), so slicing always goes through ``slice``.

    Attributes:
        file_path: Path used in diagnostics
        content: Source text
        language: Grammar name
        encoding: Text encoding (default: utf-8)
    """

    file_path: str
    content: str
    language: str = "javascript"
    encoding: str = "utf-8"
    _data: bytes | None = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_file(
        cls,
        file_path: str | Path,
        language: str = "javascript",
        encoding: str = "utf-8",
    ) -> "SourceFile":
        """
        Load source file from disk.

        Args:
            file_path: Path to file
            language: Grammar name
            encoding: File encoding

        Returns:
            SourceFile instance
        """
        file_path = Path(file_path)
        content = file_path.read_text(encoding=encoding)

        return cls(
            file_path=str(file_path),
            content=content,
            language=language,
            encoding=encoding,
        )

    @classmethod
    def from_content(
        cls,
        file_path: str,
        content: str,
        language: str = "javascript",
        encoding: str = "utf-8",
    ) -> "SourceFile":
        return cls(
            file_path=file_path,
            content=content,
            language=language,
            encoding=encoding,
        )

    @property
    def data(self) -> bytes:
        """Encoded content (what the parser sees)."""
        if self._data is None:
            self._data = self.content.encode(self.encoding)
        return self._data

    def slice(self, start: int, end: int) -> str:
        """Text between two byte offsets."""
        return self.data[start:end].decode(self.encoding)

    @property
    def byte_size(self) -> int:
        return len(self.data)
