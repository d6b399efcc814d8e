"""Test fixtures for pagestack.

Sample Sites:
- sample_site: pages wrapped in a two-level template chain with nav and
  footer sections, a plain HTML page, a broken page and a binary asset
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to the sample site
SAMPLE_SITE_PATH = FIXTURES_DIR / "sample_site"
