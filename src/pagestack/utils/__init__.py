"""pagestack utility modules.

- logging: CLI logging setup (plain, timestamped or JSON lines)
"""

from pagestack.utils.logging import configure_from_cli, get_logger

__all__ = [
    "configure_from_cli",
    "get_logger",
]
