"""Metadata block parsing.

A page may open with a metadata block:

    <!--!
    @template base.html article.html
    @section nav nav.html
    @append scripts analytics.html
    @title Release notes
    -->

Directives push wrapper templates, load named sections, or assign variables
for the final render. A document without the block is left untouched, and
lines that are not directives are skipped.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from pagestack.models import RenderContext

logger = logging.getLogger(__name__)

META_START = "<!--!"
META_END = "-->"

TEMPLATE_DIRECTIVE = "@template"
SECTION_DIRECTIVE = "@section"
APPEND_DIRECTIVE = "@append"

_WHITESPACE = re.compile(r"\s+")
_TRIM = " \r\n\t"

# Loads a section source (relative to the sections root) as an independent
# document and returns its composed content.
SectionLoadFn = Callable[[RenderContext, str], str]


@dataclass(frozen=True)
class MetaDirective:
    """A single metadata line split into command and raw argument."""

    command: str
    argument: str

    @classmethod
    def parse(cls, line: str) -> "MetaDirective | None":
        """Split a line on its first whitespace run.

        Returns:
            The directive, or None if the line does not have two parts
        """
        parts = _WHITESPACE.split(line.strip(_TRIM), maxsplit=1)
        if len(parts) != 2:
            return None
        return cls(command=parts[0], argument=parts[1])


def split_meta_block(content: str) -> tuple[str, str] | None:
    """Separate the metadata block from the document body.

    Args:
        content: Full document text

    Returns:
        (block, body) with the block trimmed and the body's leading
        whitespace removed, or None if the document has no complete block
    """
    if not content.startswith(META_START):
        return None
    block, sep, body = content[len(META_START):].partition(META_END)
    if not sep:
        return None
    return block.strip(_TRIM), body.lstrip(_TRIM)


class MetaParser:
    """Interprets metadata directives against a RenderContext."""

    def __init__(self, load_section: SectionLoadFn) -> None:
        """Initialize the parser.

        Args:
            load_section: Callback used to load @section/@append sources
        """
        self._load_section = load_section

    def parse(self, content: str, ctx: RenderContext) -> str:
        """Strip and apply the document's metadata block.

        Args:
            content: Document text
            ctx: Context receiving templates, sections and variables

        Returns:
            The body without its metadata block, or the content unchanged
            when no complete block is present

        Raises:
            PageStackError: Only from nested section loads
        """
        split = split_meta_block(content)
        if split is None:
            return content

        block, body = split
        for line in block.split("\n"):
            directive = MetaDirective.parse(line)
            if directive is not None:
                self.apply(directive, ctx)
        return body

    def apply(self, directive: MetaDirective, ctx: RenderContext) -> None:
        """Apply one directive to the context."""
        command = directive.command
        if command == TEMPLATE_DIRECTIVE:
            names = _WHITESPACE.split(directive.argument)
            ctx.template_stack.extend(names)
            logger.debug("Queued templates %s", names)
        elif command in (SECTION_DIRECTIVE, APPEND_DIRECTIVE):
            self._apply_section(directive, ctx)
        else:
            key = command.removeprefix("@")
            if not ctx.set_variable(key, directive.argument):
                logger.debug("Variable %s already set, keeping first value", key)

    def _apply_section(self, directive: MetaDirective, ctx: RenderContext) -> None:
        pair = _WHITESPACE.split(directive.argument, maxsplit=1)
        if len(pair) != 2:
            logger.debug("Ignoring malformed %s directive: %r", directive.command, directive.argument)
            return

        name, source = pair
        appending = directive.command == APPEND_DIRECTIVE
        if ctx.has_section(name) and not appending:
            logger.debug("Section %s already loaded, skipping %s", name, source)
            return

        with ctx.loading_section(source):
            content = self._load_section(ctx, source)
        ctx.add_section(name, content)
        logger.debug("Loaded section %s from %s (%d characters)", name, source, len(content))
