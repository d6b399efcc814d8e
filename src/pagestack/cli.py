"""pagestack CLI interface.

Commands:
- build: Render the page tree into the output directory
- render: Render a single page to stdout
- serve: Serve the output directory for local preview
- init: Scaffold a new site
- validate: Check a file's template syntax

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log lines
- --version: Show version and exit
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from pagestack import __version__
from pagestack.config import PageStackConfig, create_default_config, load_config
from pagestack.utils.logging import configure_from_cli, get_logger

if TYPE_CHECKING:
    from pagestack.templates import PageRenderer

app = typer.Typer(
    name="pagestack",
    help="Compose markdown and HTML pages through template chains into a static site",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: PageStackConfig = PageStackConfig()
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pagestack {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """pagestack - template-chain static site generator.

    Pages declare their wrapper templates, sections and variables in a
    leading <!--! ... --> metadata block.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


def _page_renderer(root: Path) -> "PageRenderer":
    from pagestack.renderers import MarkdownConverter
    from pagestack.templates import PageRenderer

    layout = _config.layout(root)
    return PageRenderer(
        layout,
        converter=MarkdownConverter(_config.markdown.extensions),
        strict_variables=_config.render.strict_variables,
    )


def _serve(directory: Path, host: str, port: int) -> None:
    from pagestack.server import serve

    try:
        serve(directory, host=host, port=port)
    except (ValueError, OSError) as e:
        _logger.error(f"Cannot start server: {e}")
        raise typer.Exit(1)


# =============================================================================
# build command
# =============================================================================


@app.command()
def build(
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Site root containing pages, templates and sections",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (overrides config)",
        ),
    ] = None,
    serve_after: Annotated[
        bool,
        typer.Option(
            "--serve",
            help="Start the preview server after building",
        ),
    ] = False,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Preview server port (overrides config)",
            min=1,
            max=65535,
        ),
    ] = None,
) -> None:
    """Render every page into the output directory.

    Pages that fail are logged and skipped.

    Exit codes:
        0: All pages built
        1: Build could not start
        2: Built with some pages skipped
    """
    from pagestack.site import Site

    root = root.resolve()
    layout = _config.layout(root, output_dir=output)
    _logger.info(f"Building site: {root}")
    _logger.info(f"Output: {layout.output_dir}")

    site = Site(layout, renderer=_page_renderer(root))
    try:
        report = site.generate()
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.structured(
        logging.INFO,
        f"Wrote {len(report.written)} file(s), skipped {len(report.failed)}",
        written=len(report.written),
        failed=[failure.to_dict() for failure in report.failed],
    )

    if serve_after:
        _serve(layout.output_dir, _config.server.host, port or _config.server.port)

    raise typer.Exit(0 if report.success else 2)


# =============================================================================
# render command
# =============================================================================


@app.command()
def render(
    page: Annotated[
        Path,
        typer.Argument(
            help="Page to render",
            exists=True,
            dir_okay=False,
        ),
    ],
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Site root containing templates and sections",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
) -> None:
    """Render a single page to stdout."""
    from pagestack.errors import PageStackError

    renderer = _page_renderer(root.resolve())
    try:
        content = renderer.render(page)
    except PageStackError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    sys.stdout.buffer.write(content)
    sys.stdout.flush()


# =============================================================================
# serve command
# =============================================================================


@app.command()
def serve(
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Site root",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            help="Interface to bind (overrides config)",
        ),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Port (overrides config)",
            min=1,
            max=65535,
        ),
    ] = None,
) -> None:
    """Serve the output directory for local preview."""
    layout = _config.layout(root.resolve())
    _serve(layout.output_dir, host or _config.server.host, port or _config.server.port)


# =============================================================================
# init command
# =============================================================================

_SAMPLE_PAGE = """<!--!
@template base.html
@section nav nav.html
@title Welcome
-->
# {{ title }}

This page was composed by pagestack.
"""

_SAMPLE_TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>{{ title }}</title></head>
<body>
{{#nav}}
<main>
{{#INNER_DOCUMENT}}
</main>
</body>
</html>
"""

_SAMPLE_SECTION = """<nav><a href="/index.html">Home</a></nav>
"""


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize a site in the current directory.

    Creates the config file, the pages/templates/sections directories and a
    sample page wired through a template and a section.
    """
    config_dir = Path(".pagestack")
    config_file = config_dir / "config.yaml"

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_dir.mkdir(exist_ok=True)
    config_file.write_text(create_default_config())
    _logger.info(f"Created config: {config_file}")

    samples = {
        Path(_config.site.pages_dir) / "index.md": _SAMPLE_PAGE,
        Path(_config.site.templates_dir) / "base.html": _SAMPLE_TEMPLATE,
        Path(_config.site.sections_dir) / "nav.html": _SAMPLE_SECTION,
    }
    for path, content in samples.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            path.write_text(content)
            _logger.info(f"Created example: {path}")

    typer.echo("\n✅ pagestack site initialized")
    typer.echo(f"   Config: {config_file}")
    typer.echo("   Run `pagestack build --serve` to preview")
    raise typer.Exit(0)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Page, template or section to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate the template syntax of a file.

    Section placeholders are blanked first, as they are expanded before the
    final render.
    """
    from jinja2 import TemplateSyntaxError

    from pagestack.errors import DocumentReadError
    from pagestack.models import Document
    from pagestack.templates.renderer import create_environment
    from pagestack.templates.sections import SECTION_PLACEHOLDER

    _logger.info(f"Validating template: {template}")

    try:
        source = Document.read(template).text
    except DocumentReadError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    try:
        create_environment().parse(SECTION_PLACEHOLDER.sub("", source))
    except TemplateSyntaxError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"❌ Template syntax error at line {e.lineno}: {e.message}")
        raise typer.Exit(1)

    _logger.info("Template syntax is valid")
    typer.echo(f"✅ Template is valid: {template}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
