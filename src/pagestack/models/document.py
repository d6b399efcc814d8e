"""Document entity representing a single source file in the page tree.

A document is classified once, from its suffix, when it is read. The rest of
the pipeline branches on the DocumentKind instead of re-checking suffixes.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pagestack.errors import DocumentReadError

# Latin-1 and other legacy pages pass through byte for byte.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


class DocumentKind(Enum):
    """How a document takes part in composition."""

    MARKDOWN = "markdown"
    HTML = "html"
    OPAQUE = "opaque"

    @classmethod
    def from_path(cls, path: Path | str) -> "DocumentKind":
        """Classify a path by its suffix.

        Args:
            path: Document path

        Returns:
            MARKDOWN for .md, HTML for .html, OPAQUE for everything else
        """
        name = str(path)
        if name.endswith(".md"):
            return cls.MARKDOWN
        if name.endswith(".html"):
            return cls.HTML
        return cls.OPAQUE

    @property
    def is_text(self) -> bool:
        """Return True if the document goes through metadata and templates."""
        return self is not DocumentKind.OPAQUE


@dataclass(frozen=True)
class Document:
    """A source file plus its raw content.

    Attributes:
        path: Location the document was read from
        raw: Raw file bytes
        kind: Classification decided from the path suffix
    """

    path: Path
    raw: bytes
    kind: DocumentKind

    @classmethod
    def read(cls, path: Path | str) -> "Document":
        """Read a document from disk.

        Args:
            path: File to read

        Returns:
            Document with raw bytes and classification

        Raises:
            DocumentReadError: If the file is missing or unreadable
        """
        path = Path(path)
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise DocumentReadError(path, e.strerror or str(e)) from e
        return cls(path=path, raw=raw, kind=DocumentKind.from_path(path))

    @property
    def text(self) -> str:
        """Decode the document as text.

        Bytes that are not valid UTF-8 are kept as surrogate escapes, so
        encode_text() gives back the original bytes.
        """
        return decode_text(self.raw)


def decode_text(raw: bytes) -> str:
    """Decode document bytes without losing non-UTF-8 content."""
    return raw.decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def encode_text(text: str) -> bytes:
    """Inverse of decode_text()."""
    return text.encode(TEXT_ENCODING, errors=TEXT_ERRORS)
