"""
Figma API Client for extracting design tokens
Uses the Figma REST API to fetch local variables and published styles
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from models.design_tokens import StyleRecord, VariableRecord
from token_sync.exceptions import FigmaAPIError
from token_sync.normalizer import variable_records_from_defs

logger = logging.getLogger(__name__)

# Anything that leaves a fetch without a usable payload; ValueError covers non-JSON bodies
FETCH_ERRORS = (FigmaAPIError, httpx.HTTPError, ValueError, AttributeError, KeyError, TypeError)


class FigmaClient:
    """Client for Figma REST API to extract variables and styles"""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(
        self,
        access_token: str,
        file_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        if not access_token:
            raise ValueError("Figma access token required")
        if not file_key:
            raise ValueError("Figma file key required")
        self.access_token = access_token
        self.file_key = file_key
        self.transport = transport
        self.timeout = timeout

    async def _get(self, path: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.get(
                f"{self.BASE_URL}{path}",
                headers={"X-Figma-Token": self.access_token},
                timeout=self.timeout
            )
            if response.status_code >= 400:
                raise FigmaAPIError(response.status_code, response.text)
            return response.json()

    async def get_file(self) -> Dict[str, Any]:
        """Get complete Figma file data"""
        return await self._get(f"/files/{self.file_key}")

    async def get_variables(self) -> Dict[str, Any]:
        """Get local variables and their collections"""
        return await self._get(f"/files/{self.file_key}/variables/local")

    async def fetch_variables(self) -> List[VariableRecord]:
        """Fetch variables as records, first mode of each; empty list on failure"""
        try:
            data = await self.get_variables()
            return FigmaVariablesParser.parse(data)
        except FETCH_ERRORS as e:
            logger.error(f"Error fetching Figma variables: {e}")
            return []

    async def fetch_styles(self) -> List[StyleRecord]:
        """Fetch published styles as records; empty list on failure"""
        try:
            data = await self.get_file()
            return FigmaStylesParser.parse(data)
        except FETCH_ERRORS as e:
            logger.error(f"Error fetching Figma styles: {e}")
            return []


class FigmaVariablesParser:
    """Turn a /variables/local payload into variable records"""

    @staticmethod
    def parse(payload: Dict[str, Any]) -> List[VariableRecord]:
        meta = payload.get("meta", {})
        collections = meta.get("variableCollections", {})
        records = []

        collection_names = {
            collection.get("id"): collection.get("name")
            for collection in collections.values()
        }

        for variable in meta.get("variables", {}).values():
            values_by_mode = variable.get("valuesByMode", {})
            if not values_by_mode:
                continue

            collection_id = variable.get("variableCollectionId")
            first_mode_id = next(iter(values_by_mode))

            records.append(VariableRecord(
                id=variable["id"],
                name=variable.get("name", ""),
                description=variable.get("description") or None,
                collection=collection_names.get(collection_id) or "Unknown",
                mode=FigmaVariablesParser.mode_name(collections.get(collection_id), first_mode_id),
                resolved_type=variable.get("resolvedType", "COLOR"),
                raw_value=values_by_mode[first_mode_id],
            ))

        return records

    @staticmethod
    def mode_name(collection: Optional[Dict[str, Any]], mode_id: str) -> str:
        if collection:
            for mode in collection.get("modes", []):
                if mode.get("modeId") == mode_id and mode.get("name"):
                    return mode["name"]
        return "Default"


class FigmaStylesParser:
    """Turn the `styles` section of a file payload into style records"""

    @staticmethod
    def parse(payload: Dict[str, Any]) -> List[StyleRecord]:
        records = []
        for style_id, style in payload.get("styles", {}).items():
            records.append(StyleRecord(
                key=style.get("key") or style_id,
                name=style.get("name", ""),
                style_type=style.get("styleType", ""),
                description=style.get("description") or None,
            ))
        return records


class DefinitionsTokenSource:
    """
    Token source over flat variable definitions

    Used when variables were exported ahead of time (e.g. through the Figma
    desktop MCP `get_variable_defs` tool) instead of fetched over REST.
    Definitions carry no style data.
    """

    def __init__(self, variable_defs: Dict[str, Any], node_id: Optional[str] = None):
        self.variable_defs = variable_defs
        self.node_id = node_id

    @classmethod
    def from_file(cls, path: Union[str, Path], node_id: Optional[str] = None) -> "DefinitionsTokenSource":
        with open(path, encoding="utf-8") as f:
            return cls(json.load(f), node_id=node_id)

    async def fetch_variables(self) -> List[VariableRecord]:
        return variable_records_from_defs(self.variable_defs)

    async def fetch_styles(self) -> List[StyleRecord]:
        return []
