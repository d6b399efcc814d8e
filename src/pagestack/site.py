"""Site generation.

Walks the pages root, renders every file through the composition pipeline
and writes the result under the output root. A page that fails is logged
and skipped; the rest of the site is still built.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pagestack.errors import PageStackError
from pagestack.models import SiteLayout
from pagestack.templates import PageRenderer

logger = logging.getLogger(__name__)


@dataclass
class PageFailure:
    """A page that could not be built.

    Attributes:
        source: Page path relative to the pages root
        message: Error description
    """

    source: Path
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"source": str(self.source), "message": self.message}


@dataclass
class BuildReport:
    """Outcome of a site build.

    Attributes:
        written: (source relative to pages root, destination) per built page
        failed: Pages that were skipped
    """

    written: list[tuple[Path, Path]] = field(default_factory=list)
    failed: list[PageFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Return True if every page was built."""
        return not self.failed


class Site:
    """Builds a whole site from its page tree.

    Usage:
        site = Site(layout)
        report = site.generate()
    """

    def __init__(
        self,
        layout: SiteLayout,
        renderer: PageRenderer | None = None,
    ) -> None:
        """Initialize the site.

        Args:
            layout: Site directories
            renderer: Page renderer (defaults to one built from layout)
        """
        self.layout = layout
        self.renderer = renderer or PageRenderer(layout)

    def iter_pages(self) -> list[Path]:
        """List every file under the pages root, in sorted order.

        Raises:
            ValueError: If the pages root does not exist
        """
        pages_dir = self.layout.pages_dir
        if not pages_dir.is_dir():
            raise ValueError(f"Pages directory does not exist: {pages_dir}")
        return sorted(p for p in pages_dir.rglob("*") if p.is_file())

    def build_page(self, path: Path) -> Path:
        """Render one page and write it to its output location.

        Args:
            path: Page path under the pages root

        Returns:
            Destination path

        Raises:
            PageStackError: If rendering fails
            OSError: If the output cannot be written
        """
        content = self.renderer.render(path)
        relative = path.relative_to(self.layout.pages_dir)
        dest = self.layout.output_path_for(relative)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(content)
        return dest

    def generate(self) -> BuildReport:
        """Build every page.

        Returns:
            BuildReport listing written and failed pages
        """
        report = BuildReport()
        pages = self.iter_pages()
        logger.info("Building %d file(s) from %s", len(pages), self.layout.pages_dir)

        for path in pages:
            relative = path.relative_to(self.layout.pages_dir)
            try:
                dest = self.build_page(path)
            except (PageStackError, OSError) as e:
                logger.warning("Handling %s failed, skipping: %s", relative, e)
                report.failed.append(PageFailure(source=relative, message=str(e)))
                continue
            report.written.append((relative, dest))
            logger.info("%s -> %s", relative, dest)

        logger.info(
            "Build complete: %d written, %d failed",
            len(report.written),
            len(report.failed),
        )
        return report
