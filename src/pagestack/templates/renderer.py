"""Final page rendering.

Renders composed, section-expanded page text as a Jinja2 template against
the variables collected from metadata directives, and wires the full
per-page pipeline together.
"""

import logging
from pathlib import Path

from jinja2 import (
    Environment,
    StrictUndefined,
    TemplateError,
    TemplateSyntaxError,
    Undefined,
    select_autoescape,
)

from pagestack.errors import TemplateParseError, TemplateRenderError
from pagestack.models import (
    Document,
    DocumentKind,
    RenderContext,
    SiteLayout,
    decode_text,
    encode_text,
)
from pagestack.renderers import MarkdownConverter
from pagestack.templates.loader import DocumentLoader
from pagestack.templates.sections import SectionResolver

logger = logging.getLogger(__name__)


def create_environment(strict_variables: bool = False) -> Environment:
    """Create the Jinja2 environment used for variable interpolation.

    Args:
        strict_variables: Raise on referenced but unset variables instead of
            rendering them as empty strings

    Returns:
        Configured Jinja2 environment
    """
    return Environment(
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        undefined=StrictUndefined if strict_variables else Undefined,
        keep_trailing_newline=True,
    )


class VariableRenderer:
    """Interpolates page variables into composed text.

    By default a referenced variable that was never set renders as an empty
    string. With strict_variables it raises TemplateRenderError instead.
    """

    def __init__(self, strict_variables: bool = False) -> None:
        self.strict_variables = strict_variables
        self._env = create_environment(strict_variables)

    def render(
        self,
        text: str,
        variables: dict[str, str],
        name: str | None = None,
    ) -> str:
        """Render text as a template.

        Args:
            text: Section-resolved page text
            variables: Variables collected for the page
            name: Template name used in error messages

        Returns:
            Rendered text

        Raises:
            TemplateParseError: If text is not valid template syntax
            TemplateRenderError: If executing the template fails
        """
        label = name or "<page>"
        try:
            template = self._env.from_string(text)
        except TemplateSyntaxError as e:
            raise TemplateParseError(label, e.message or str(e), e.lineno) from e

        # Template expressions can raise anything (1 / 0, "3" + 1), not just
        # TemplateError.
        try:
            return template.render(variables)
        except TemplateError as e:
            raise TemplateRenderError(label, e.message or str(e)) from e
        except Exception as e:
            raise TemplateRenderError(label, f"{type(e).__name__}: {e}") from e


class PageRenderer:
    """Renders one page through the whole composition pipeline.

    Usage:
        renderer = PageRenderer(layout)
        html = renderer.render(layout.pages_dir / "index.md")
    """

    def __init__(
        self,
        layout: SiteLayout,
        converter: MarkdownConverter | None = None,
        strict_variables: bool = False,
    ) -> None:
        """Initialize the page renderer.

        Args:
            layout: Site directories
            converter: Markdown converter for .md documents
            strict_variables: Missing-variable policy for the final render
        """
        self.layout = layout
        self.loader = DocumentLoader(layout, converter)
        self.section_resolver = SectionResolver()
        self.variable_renderer = VariableRenderer(strict_variables)

    def render(self, path: Path | str) -> bytes:
        """Render a page.

        Args:
            path: Page to render

        Returns:
            Final output bytes; opaque files are returned unchanged

        Raises:
            PageStackError: If reading, composing or rendering fails
        """
        path = Path(path)
        if not DocumentKind.from_path(path).is_text:
            return Document.read(path).raw

        ctx = RenderContext()
        composed = decode_text(self.loader.load(ctx, path))
        text = self.section_resolver.resolve(composed, ctx.sections)
        rendered = self.variable_renderer.render(text, ctx.variables, name=str(path))
        logger.debug(
            "Rendered %s (%d variables, %d sections)",
            path,
            len(ctx.variables),
            len(ctx.sections),
        )
        return encode_text(rendered)
