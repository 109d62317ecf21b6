"""
Clients package for external API integrations
"""

from .figma_client import DefinitionsTokenSource, FigmaClient
from .notion_client import NotionClient
from .swatch_host import SwatchProvisioner

__all__ = ["DefinitionsTokenSource", "FigmaClient", "NotionClient", "SwatchProvisioner"]
