"""Directory roles of a site.

The core only consumes these locations: pages are rendered, templates are
referenced by @template, sections by @section and @append.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PAGES_DIR = "pages"
DEFAULT_TEMPLATES_DIR = "templates"
DEFAULT_SECTIONS_DIR = "sections"
DEFAULT_OUTPUT_DIR = "www"


@dataclass
class SiteLayout:
    """Resolved site directories.

    Attributes:
        root: Site root; relative directories below are resolved against it
        pages_dir: Documents to render
        templates_dir: Wrapper templates
        sections_dir: Section source files
        output_dir: Rendered output
    """

    root: Path
    pages_dir: Path
    templates_dir: Path
    sections_dir: Path
    output_dir: Path

    @classmethod
    def from_root(
        cls,
        root: Path | str,
        pages_dir: str = DEFAULT_PAGES_DIR,
        templates_dir: str = DEFAULT_TEMPLATES_DIR,
        sections_dir: str = DEFAULT_SECTIONS_DIR,
        output_dir: str = DEFAULT_OUTPUT_DIR,
    ) -> "SiteLayout":
        """Build a layout from a root directory and relative role names.

        Absolute role directories are kept as given.
        """
        root = Path(root)
        return cls(
            root=root,
            pages_dir=root / pages_dir,
            templates_dir=root / templates_dir,
            sections_dir=root / sections_dir,
            output_dir=root / output_dir,
        )

    def template_path(self, name: str) -> Path:
        return self.templates_dir / name

    def section_path(self, relative: str) -> Path:
        return self.sections_dir / relative

    def output_path_for(self, relative: Path | str) -> Path:
        """Map a page path relative to the pages root to its output path.

        Markdown sources are emitted as .html; every other file keeps its
        extension.
        """
        relative = Path(relative)
        if relative.name.endswith(".md"):
            relative = relative.with_name(relative.name[: -len(".md")] + ".html")
        return self.output_dir / relative
