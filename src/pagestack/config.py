"""pagestack configuration system.

Configuration is YAML-based with a few CLI overrides (--root, --output, --port).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.pagestack/config.yaml
3. ./pagestack.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from pagestack.models.layout import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PAGES_DIR,
    DEFAULT_SECTIONS_DIR,
    DEFAULT_TEMPLATES_DIR,
    SiteLayout,
)
from pagestack.renderers.markup import DEFAULT_EXTENSIONS

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class SiteConfig:
    """Site directory configuration.

    Relative directories are resolved against the site root.

    Attributes:
        pages_dir: Documents to render
        templates_dir: Wrapper templates referenced by @template
        sections_dir: Section sources referenced by @section/@append
        output_dir: Rendered output
    """

    pages_dir: str = DEFAULT_PAGES_DIR
    templates_dir: str = DEFAULT_TEMPLATES_DIR
    sections_dir: str = DEFAULT_SECTIONS_DIR
    output_dir: str = DEFAULT_OUTPUT_DIR


@dataclass
class MarkdownConfig:
    """Markdown conversion settings.

    Attributes:
        extensions: Python-Markdown extension names
    """

    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))


@dataclass
class RenderConfig:
    """Final render settings.

    Attributes:
        strict_variables: Fail pages that reference unset variables
    """

    strict_variables: bool = False


@dataclass
class ServerConfig:
    """Development server settings.

    Attributes:
        host: Interface to bind
        port: TCP port to listen on
    """

    host: str = "127.0.0.1"
    port: int = 8080

    def __post_init__(self) -> None:
        """Validate server configuration."""
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid server port: {self.port}. Valid: 1-65535")


@dataclass
class PageStackConfig:
    """Top-level pagestack configuration.

    Attributes:
        site: Directory roles
        markdown: Markdown conversion
        render: Final render policy
        server: Development server
    """

    site: SiteConfig = field(default_factory=SiteConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    # Set when loaded from a file
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path

    def layout(self, root: Path | None = None, output_dir: Path | None = None) -> SiteLayout:
        """Build the site layout.

        Args:
            root: Site root (defaults to the current directory)
            output_dir: Output directory override

        Returns:
            SiteLayout with all directories resolved
        """
        layout = SiteLayout.from_root(
            root or Path.cwd(),
            pages_dir=self.site.pages_dir,
            templates_dir=self.site.templates_dir,
            sections_dir=self.site.sections_dir,
            output_dir=self.site.output_dir,
        )
        if output_dir is not None:
            layout.output_dir = output_dir
        return layout


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SITE_OUTPUT} -> value of SITE_OUTPUT

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.pagestack/config.yaml
    2. ./pagestack.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".pagestack" / "config.yaml",
        start_path / "pagestack.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> PageStackConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        PageStackConfig instance
    """
    data = substitute_env_vars(data)

    config = PageStackConfig()

    if "site" in data:
        site_data = data["site"] or {}
        config.site = SiteConfig(
            pages_dir=site_data.get("pages_dir", config.site.pages_dir),
            templates_dir=site_data.get("templates_dir", config.site.templates_dir),
            sections_dir=site_data.get("sections_dir", config.site.sections_dir),
            output_dir=site_data.get("output_dir", config.site.output_dir),
        )

    if "markdown" in data:
        markdown_data = data["markdown"] or {}
        config.markdown = MarkdownConfig(
            extensions=list(markdown_data.get("extensions", config.markdown.extensions)),
        )

    if "render" in data:
        render_data = data["render"] or {}
        config.render = RenderConfig(
            strict_variables=bool(render_data.get("strict_variables", False)),
        )

    if "server" in data:
        server_data = data["server"] or {}
        config.server = ServerConfig(
            host=server_data.get("host", config.server.host),
            port=int(server_data.get("port", config.server.port)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> PageStackConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        PageStackConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = PageStackConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# pagestack configuration

# Directory roles, relative to the site root
site:
  pages_dir: "pages"          # documents to render
  templates_dir: "templates"  # wrappers referenced by @template
  sections_dir: "sections"    # sources referenced by @section / @append
  output_dir: "www"           # rendered site

# Markdown conversion (Python-Markdown extension names)
markdown:
  extensions:
    - "extra"
    - "sane_lists"
    - "toc"

# Final render
render:
  strict_variables: false  # true: fail pages that reference unset variables

# Development server
server:
  host: "127.0.0.1"
  port: 8080
'''
