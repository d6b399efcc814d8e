"""pagestack composition engine.

- MetaParser: applies a document's metadata directives
- DocumentLoader: folds a document into its template chain
- SectionResolver: expands {{#name}} section placeholders
- VariableRenderer: Jinja2 interpolation of page variables
- PageRenderer: the full per-page pipeline
"""

from pagestack.templates.loader import INNER_DOCUMENT, DocumentLoader
from pagestack.templates.meta import MetaDirective, MetaParser
from pagestack.templates.renderer import PageRenderer, VariableRenderer
from pagestack.templates.sections import SectionResolver

__all__ = [
    "INNER_DOCUMENT",
    "DocumentLoader",
    "MetaDirective",
    "MetaParser",
    "PageRenderer",
    "SectionResolver",
    "VariableRenderer",
]
