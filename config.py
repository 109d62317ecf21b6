"""
Configuration Module for the Figma to Notion token sync
Reads environment variables once and hands an explicit SyncConfig to every component
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from token_sync.exceptions import ConfigurationError


class SyncConfig(BaseModel):
    """Settings for one sync run"""
    notion_token: str
    notion_db_id: str
    figma_token: Optional[str] = None
    figma_file_key: Optional[str] = None
    figma_node_id: Optional[str] = None
    variable_defs_path: Optional[str] = None  # pre-exported variable definitions (JSON)
    imgbb_api_key: Optional[str] = None
    enable_swatches: bool = True

    @property
    def uses_variable_defs(self) -> bool:
        return bool(self.variable_defs_path)


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    variable_defs_path: Optional[str] = None,
    node_id: Optional[str] = None,
) -> SyncConfig:
    """
    Build a SyncConfig from the environment (and .env file)

    Args:
        environ: Mapping to read instead of os.environ; no .env loading when given
        variable_defs_path: Overrides FIGMA_VARIABLE_DEFS
        node_id: Overrides FIGMA_NODE_ID

    Raises:
        ConfigurationError: listing every missing required variable
    """
    if environ is None:
        # Load environment variables from .env file
        load_dotenv()
        environ = os.environ

    def get(name: str) -> Optional[str]:
        value = environ.get(name)
        return value.strip() if value and value.strip() else None

    notion_token = get("NOTION_TOKEN")
    notion_db_id = get("NOTION_DB_ID")
    figma_token = get("FIGMA_TOKEN") or get("FIGMA_ACCESS_TOKEN")
    figma_file_key = get("FIGMA_FILE_KEY")
    defs_path = variable_defs_path or get("FIGMA_VARIABLE_DEFS")

    missing = []
    if not notion_token:
        missing.append("NOTION_TOKEN")
    if not notion_db_id:
        missing.append("NOTION_DB_ID")

    # REST mode needs Figma credentials; definitions mode reads a local file
    if not defs_path:
        if not figma_token:
            missing.append("FIGMA_TOKEN")
        if not figma_file_key:
            missing.append("FIGMA_FILE_KEY")

    if missing:
        hint = "Create a .env file with these variables."
        if defs_path:
            hint += " With variable definitions only NOTION_TOKEN and NOTION_DB_ID are needed."
        raise ConfigurationError(missing, hint)

    return SyncConfig(
        notion_token=notion_token,
        notion_db_id=notion_db_id,
        figma_token=figma_token,
        figma_file_key=figma_file_key,
        figma_node_id=node_id or get("FIGMA_NODE_ID"),
        variable_defs_path=defs_path,
        imgbb_api_key=get("IMGBB_API_KEY"),
        enable_swatches=_flag(environ.get("ENABLE_SWATCHES"), True),
    )
