"""Unit tests for site generation."""

from collections.abc import Callable
from pathlib import Path

import pytest

from pagestack.models import SiteLayout
from pagestack.site import Site
from tests.fixtures import SAMPLE_SITE_PATH

WriteFile = Callable[[Path, str | bytes], Path]


class TestSiteGenerate:
    """Tests for Site.generate against the sample site."""

    @pytest.fixture
    def site(self, sample_layout: SiteLayout) -> Site:
        return Site(sample_layout)

    def test_iter_pages_sorted(self, site: Site, sample_layout: SiteLayout) -> None:
        pages = [p.relative_to(sample_layout.pages_dir).as_posix() for p in site.iter_pages()]

        assert pages == sorted(pages)
        assert set(pages) == {"about.html", "broken.html", "docs/guide.html", "img/logo.png", "index.md"}

    def test_partial_failure(self, site: Site) -> None:
        report = site.generate()

        assert not report.success
        assert [f.source for f in report.failed] == [Path("broken.html")]
        assert "syntax error" in report.failed[0].message
        assert len(report.written) == 4

    def test_markdown_output_renamed(self, site: Site, sample_layout: SiteLayout) -> None:
        site.generate()

        out = sample_layout.output_dir
        assert (out / "index.html").exists()
        assert not (out / "index.md").exists()
        assert (out / "docs" / "guide.html").exists()
        assert not (out / "broken.html").exists()

    def test_index_composition(self, site: Site, sample_layout: SiteLayout) -> None:
        site.generate()

        html = (sample_layout.output_dir / "index.html").read_text()
        assert "<title>Home</title>" in html
        assert "<nav>Sample Site</nav>" in html
        assert "<footer>Sample footer</footer>" in html
        assert '<article><h1 id="hello">Hello</h1>' in html
        assert html.index("<body>") < html.index("<article>") < html.index("</body>")
        assert "{{" not in html

    def test_guide_unset_variable_renders_empty(self, site: Site, sample_layout: SiteLayout) -> None:
        site.generate()

        html = (sample_layout.output_dir / "docs" / "guide.html").read_text()
        assert "<nav></nav>" in html
        assert "<p>Read the Guide.</p>" in html

    def test_plain_page_identical(self, site: Site, sample_layout: SiteLayout) -> None:
        site.generate()

        source = (SAMPLE_SITE_PATH / "pages" / "about.html").read_bytes()
        assert (sample_layout.output_dir / "about.html").read_bytes() == source

    def test_opaque_asset_copied(self, site: Site, sample_layout: SiteLayout) -> None:
        site.generate()

        source = (SAMPLE_SITE_PATH / "pages" / "img" / "logo.png").read_bytes()
        assert (sample_layout.output_dir / "img" / "logo.png").read_bytes() == source

    def test_missing_pages_dir_raises(self, tmp_path: Path) -> None:
        site = Site(SiteLayout.from_root(tmp_path))

        with pytest.raises(ValueError, match="Pages directory does not exist"):
            site.generate()

    def test_failure_is_logged(self, site: Site, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="pagestack"):
            site.generate()

        assert any("broken.html" in record.getMessage() for record in caplog.records)


class TestSiteExecutionFailures:
    """Pages whose template expressions fail at render time."""

    @pytest.mark.parametrize(
        "bad_page",
        [
            "<p>{{ 1 / 0 }}</p>\n",
            "<!--!\n@n 3\n-->\n<p>{{ n + 1 }}</p>\n",
        ],
    )
    def test_build_continues_after_execution_error(
        self, layout: SiteLayout, write_file: WriteFile, bad_page: str
    ) -> None:
        write_file(layout.pages_dir / "a_bad.html", bad_page)
        write_file(layout.pages_dir / "b_good.html", "<p>fine</p>\n")

        report = Site(layout).generate()

        assert [f.source for f in report.failed] == [Path("a_bad.html")]
        assert "Template rendering failed" in report.failed[0].message
        assert [source for source, _ in report.written] == [Path("b_good.html")]
        assert (layout.output_dir / "b_good.html").read_bytes() == b"<p>fine</p>\n"
        assert not (layout.output_dir / "a_bad.html").exists()
