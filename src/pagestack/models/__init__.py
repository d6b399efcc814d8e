"""pagestack data models.

This module exports the core entities used by the composition engine:
- Document: A source file and its classification
- DocumentKind: Markdown, HTML or opaque passthrough
- RenderContext: Per-render template stack, variables and sections
- TemplateStack: LIFO stack of template names
- SiteLayout: Pages, templates, sections and output locations
"""

from pagestack.models.context import RenderContext, TemplateStack
from pagestack.models.document import Document, DocumentKind, decode_text, encode_text
from pagestack.models.layout import SiteLayout

__all__ = [
    "Document",
    "DocumentKind",
    "RenderContext",
    "SiteLayout",
    "TemplateStack",
    "decode_text",
    "encode_text",
]
