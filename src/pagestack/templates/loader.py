"""Document loading and template-chain composition.

A page is composed by folding it into its templates one level at a time:
the content produced so far becomes the inner document of the next template
popped off the stack. The loop runs until the stack is empty, so stack
depth stays constant no matter how long the chain grows.
"""

import logging
from pathlib import Path

from pagestack.models import (
    Document,
    DocumentKind,
    RenderContext,
    SiteLayout,
    decode_text,
    encode_text,
)
from pagestack.renderers import MarkdownConverter
from pagestack.templates.meta import MetaParser

logger = logging.getLogger(__name__)

INNER_DOCUMENT = "{{#INNER_DOCUMENT}}"


class DocumentLoader:
    """Loads a document and resolves its entire template chain.

    Usage:
        loader = DocumentLoader(layout)
        content = loader.load(RenderContext(), layout.pages_dir / "index.md")
    """

    def __init__(
        self,
        layout: SiteLayout,
        converter: MarkdownConverter | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            layout: Site directories (templates and sections roots)
            converter: Markdown converter (defaults to the standard extensions)
        """
        self.layout = layout
        self.converter = converter or MarkdownConverter()
        self.meta_parser = MetaParser(self.load_section)

    def load(self, ctx: RenderContext, path: Path | str) -> bytes:
        """Compose a document with every template it declares.

        Args:
            ctx: Render context shared by the whole page
            path: Document to load

        Returns:
            Composed content; opaque documents are returned as raw bytes

        Raises:
            DocumentReadError: If the document or any template cannot be read
        """
        path = Path(path)
        inner: str | None = None

        while True:
            document = Document.read(path)
            if not document.kind.is_text:
                logger.debug("Passing through %s unchanged", path)
                return document.raw

            content = self.meta_parser.parse(document.text, ctx)
            if document.kind is DocumentKind.MARKDOWN:
                content = self.converter.convert(content)
            if inner is not None:
                content = content.replace(INNER_DOCUMENT, inner)

            if not ctx.template_stack:
                return encode_text(content)

            template_name = ctx.template_stack.pop()
            logger.debug("Wrapping %s in template %s", path, template_name)
            path = self.layout.template_path(template_name)
            inner = content

    def load_section(self, ctx: RenderContext, source: str) -> str:
        """Load a section source as an independent document.

        Called by the metadata parser with the page's template stack already
        set aside; variables and sections stay shared with the page.

        Args:
            ctx: Render context of the page being composed
            source: Section path relative to the sections root

        Returns:
            Composed section content
        """
        content = self.load(ctx, self.layout.section_path(source))
        return decode_text(content)
