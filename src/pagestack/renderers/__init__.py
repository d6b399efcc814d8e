"""Markup conversion for page bodies."""

from pagestack.renderers.markup import DEFAULT_EXTENSIONS, MarkdownConverter

__all__ = ["DEFAULT_EXTENSIONS", "MarkdownConverter"]
