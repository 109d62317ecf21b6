"""
Notion property mapping
Converts a DesignToken into the property payload written to the token database
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Protocol

from models.design_tokens import Category, DesignToken
from .colors import extract_hex_color

logger = logging.getLogger(__name__)

FIGMA_ID_PROPERTY = "Figma ID"
SYNC_STATUS = "In Sync"


class SwatchProvider(Protocol):
    async def provision_swatch(self, hex_color: str, file_name: str) -> Optional[str]:
        ...


def _rich_text(content: str) -> Dict[str, Any]:
    return {"rich_text": [{"text": {"content": content}}]}


def _select(name: str) -> Dict[str, Any]:
    return {"select": {"name": name}}


def swatch_file_name(token_name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", token_name) + "-swatch.png"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotionPropertyMapper:
    """Build Notion page properties for tokens, attaching color swatches when possible"""

    def __init__(
        self,
        swatches: Optional[SwatchProvider] = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.swatches = swatches
        self.clock = clock

    def base_properties(self, token: DesignToken) -> Dict[str, Any]:
        properties = {
            "Name": {"title": [{"text": {"content": token.name}}]},
            "Category": _select(token.category.value),
            "Collection": _select(token.collection),
            "Mode": _select(token.mode),
            "Type": _select(token.type.value),
            "Value": _rich_text(token.value or ""),
            "Resolved Value": _rich_text(token.resolved_value or token.value or ""),
            FIGMA_ID_PROPERTY: _rich_text(token.id),
            "Figma Collection": _rich_text(token.collection),
            "Status": _select(SYNC_STATUS),
            "Last Synced": {"date": {"start": self.clock().isoformat()}},
        }

        if token.description:
            properties["Description"] = _rich_text(token.description)

        # Columns filled in by hand inside Notion
        properties["CSS Variable"] = _rich_text("")
        properties["Code Path"] = _rich_text("")
        properties["Component Usage"] = {"multi_select": []}

        return properties

    async def swatch_property(self, token: DesignToken) -> Optional[Dict[str, Any]]:
        if self.swatches is None or token.category != Category.COLOR:
            return None

        hex_color = extract_hex_color(token.value)
        if not hex_color:
            return None

        file_name = swatch_file_name(token.name)
        try:
            image_url = await self.swatches.provision_swatch(hex_color, file_name)
        except Exception as e:
            logger.warning(f"Swatch provisioning failed for {token.name}: {e}")
            image_url = None
        if not image_url:
            logger.info(f"No swatch image for {token.name}, leaving Image empty")
            return None

        return {
            "files": [
                {
                    "name": file_name,
                    "type": "external",
                    "external": {"url": image_url},
                }
            ]
        }

    async def build(self, token: DesignToken) -> Dict[str, Any]:
        properties = self.base_properties(token)

        image = await self.swatch_property(token)
        if image:
            properties["Image"] = image

        return properties
