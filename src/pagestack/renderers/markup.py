"""Markdown to HTML conversion.

Wraps Python-Markdown with the common extension set (tables, fenced code,
footnotes, header ids).
"""

import logging
from collections.abc import Sequence

import markdown

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("extra", "sane_lists", "toc")


class MarkdownConverter:
    """Converts markdown page bodies to HTML.

    One Markdown instance is reused and reset between documents, so header
    ids and footnotes never leak from one document into the next.
    """

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        """Initialize the converter.

        Args:
            extensions: Python-Markdown extension names (defaults to
                DEFAULT_EXTENSIONS)
        """
        self.extensions = list(extensions if extensions is not None else DEFAULT_EXTENSIONS)
        self._md = markdown.Markdown(extensions=self.extensions, output_format="html")

    def convert(self, text: str) -> str:
        """Convert a markdown body to HTML.

        Args:
            text: Markdown source (metadata block already stripped)

        Returns:
            HTML fragment
        """
        html = self._md.reset().convert(text)
        logger.debug("Converted markdown (%d -> %d characters)", len(text), len(html))
        return html
