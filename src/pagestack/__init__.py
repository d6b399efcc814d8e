"""pagestack - Template-chain static site generator.

pagestack turns a tree of markdown and HTML pages into a static site. Each
page may carry a small metadata block that wraps it in a chain of templates,
pulls in named sections, and sets variables for the final render.

Core principles:
- Composition over inheritance: pages pick their wrappers, templates nest freely
- Sections are independent documents, never tied to a page's template chain
- Partial failure: one broken page never aborts a site build
- Passthrough: anything that is not markdown or HTML is copied unchanged
"""

__version__ = "0.1.0"
__author__ = "pagestack contributors"
