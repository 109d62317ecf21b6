"""
Pytest configuration and shared fixtures for the token sync tests.

This module provides:
- Token factory for building DesignTokens with sensible defaults
- In-memory fakes for the Figma token source, Notion store and swatch host
- Sample Figma variable definitions
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add the project root to the path
PROJECT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_DIR))

from models.design_tokens import DesignToken, TokenType  # noqa: E402
from token_sync.notion_properties import FIGMA_ID_PROPERTY  # noqa: E402


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that wire several components together")


# ============================================================================
# FAKES
# ============================================================================

class FakeTokenStore:
    """In-memory stand-in for the Notion database."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, fail_on: Optional[set] = None):
        # page_id -> figma_id
        self.pages: Dict[str, str] = dict(pages or {})
        self.fail_on = set(fail_on or ())
        self.created: List[Dict[str, Any]] = []
        self.updated: List[tuple] = []
        self.calls: List[str] = []

    @staticmethod
    def figma_id_of(properties: Dict[str, Any]) -> str:
        return properties[FIGMA_ID_PROPERTY]["rich_text"][0]["text"]["content"]

    async def iter_figma_ids(self):
        self.calls.append("index")
        for page_id, figma_id in list(self.pages.items()):
            yield page_id, figma_id

    async def create_page(self, properties):
        figma_id = self.figma_id_of(properties)
        self.calls.append(f"create:{figma_id}")
        if figma_id in self.fail_on:
            raise RuntimeError(f"validation failed for {figma_id}")
        page_id = f"page-{len(self.pages) + 1}"
        self.pages[page_id] = figma_id
        self.created.append(properties)
        return {"id": page_id}

    async def update_page(self, page_id, properties):
        figma_id = self.figma_id_of(properties)
        self.calls.append(f"update:{figma_id}")
        if figma_id in self.fail_on:
            raise RuntimeError(f"validation failed for {figma_id}")
        self.updated.append((page_id, properties))
        return {"id": page_id}


class FakeTokenSource:
    """Token source returning canned records."""

    def __init__(self, variables=None, styles=None):
        self.variables = list(variables or [])
        self.styles = list(styles or [])

    async def fetch_variables(self):
        return self.variables

    async def fetch_styles(self):
        return self.styles


class FakeSwatches:
    """Swatch host that records requests and returns a fixed URL (or None)."""

    def __init__(self, url: Optional[str] = "https://i.ibb.co/swatch.png"):
        self.url = url
        self.requests: List[tuple] = []

    async def provision_swatch(self, hex_color, file_name):
        self.requests.append((hex_color, file_name))
        return self.url


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def make_token():
    """Factory for DesignTokens, a color variable unless told otherwise."""
    def _make(name="Sys/outline/error", value="#ed7d70", collection="hE",
              type=TokenType.VARIABLE, id=None, **kwargs):
        return DesignToken(
            id=id or f"var_{collection}/{name}",
            name=name,
            collection=collection,
            type=type,
            value=value,
            resolved_value=value,
            **kwargs,
        )
    return _make


@pytest.fixture
def fake_store():
    return FakeTokenStore()


@pytest.fixture
def fake_swatches():
    return FakeSwatches()


@pytest.fixture
def sample_variable_defs():
    """A slice of real variable definitions exported from a design file."""
    return {
        "hE/Sys/on-surface/primary": "#2e2e2e",
        "hE/Sys/outline/error": "#ed7d70",
        "hE/Sys/opacity/primary-8%": "#f5f7fd14",
        "Font/Letter spacing/base": "0",
        "Font/Size/2xs": "12",
        "Font/Line height/xl": "44",
        "Font/Weight/Regular": "Regular",
        "Font/Family/Display": "Inter",
        "Display/Large": "Font(family: \"Inter\", style: Regular, size: 44, weight: 400, lineHeight: 48)",
        "semantic/state/ce/space04": "4",
        "radius": 8,
    }


@pytest.fixture
def make_source():
    """Factory for FakeTokenSource."""
    return FakeTokenSource
