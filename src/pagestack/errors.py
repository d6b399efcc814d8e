"""pagestack exceptions.

Every fatal condition of a single document render derives from
PageStackError so the site build can log it and move on to the next page.
"""

from pathlib import Path


class PageStackError(Exception):
    """Base exception for all pagestack errors."""

    pass


class DocumentReadError(PageStackError):
    """Raised when a document, template or section file cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class TemplateParseError(PageStackError):
    """Raised when composed page text is not a valid Jinja2 template."""

    def __init__(self, name: str, message: str, lineno: int | None = None):
        self.name = name
        self.message = message
        self.lineno = lineno
        location = f"{name}:{lineno}" if lineno is not None else name
        super().__init__(f"Template syntax error in {location}: {message}")


class TemplateRenderError(PageStackError):
    """Raised when executing the final template against page variables fails."""

    def __init__(self, name: str, message: str):
        self.name = name
        self.message = message
        super().__init__(f"Template rendering failed for {name}: {message}")


class CyclicSectionReference(PageStackError):
    """Raised when section placeholders keep expanding into each other."""

    def __init__(self, names: list[str]):
        self.names = sorted(set(names))
        super().__init__(
            f"Cyclic section reference involving: {', '.join(self.names)}"
        )
