"""
Sync orchestration
Fetches tokens from Figma, normalizes and classifies them, then upserts into Notion
"""

import asyncio
import logging
from typing import List, Optional, Protocol

from clients.figma_client import DefinitionsTokenSource, FigmaClient
from clients.notion_client import NotionClient
from clients.swatch_host import SwatchProvisioner
from config import SyncConfig
from models.design_tokens import DesignToken, StyleRecord, SyncResult, TokenType, VariableRecord
from .normalizer import normalize_all
from .notion_properties import NotionPropertyMapper, SwatchProvider
from .reconciliation import TokenStore, build_store_index, reconcile

logger = logging.getLogger(__name__)


class TokenSource(Protocol):
    async def fetch_variables(self) -> List[VariableRecord]:
        ...

    async def fetch_styles(self) -> List[StyleRecord]:
        ...


def build_token_source(config: SyncConfig) -> TokenSource:
    if config.uses_variable_defs:
        return DefinitionsTokenSource.from_file(config.variable_defs_path, node_id=config.figma_node_id)
    return FigmaClient(config.figma_token, config.figma_file_key)


def build_swatch_provider(config: SyncConfig) -> Optional[SwatchProvider]:
    if not config.enable_swatches:
        return None
    return SwatchProvisioner(imgbb_api_key=config.imgbb_api_key)


async def fetch_tokens(source: TokenSource) -> List[DesignToken]:
    """Fetch variables and styles concurrently; variables come first"""
    variables, styles = await asyncio.gather(
        source.fetch_variables(),
        source.fetch_styles(),
    )
    return normalize_all([*variables, *styles])


async def sync_figma_to_notion(
    config: SyncConfig,
    source: Optional[TokenSource] = None,
    store: Optional[TokenStore] = None,
    swatches: Optional[SwatchProvider] = None,
) -> SyncResult:
    """
    Synchronize Figma design tokens into the Notion database

    Collaborators default to the REST clients built from config; tests pass
    their own.
    """
    logger.info("Starting sync from Figma to Notion...")

    if config.uses_variable_defs:
        logger.info(f"Using variable definitions from {config.variable_defs_path}")
        if config.figma_node_id:
            logger.info(f"Figma Node ID: {config.figma_node_id}")
    else:
        logger.info(f"Figma File Key: {config.figma_file_key}")
    logger.info(f"Notion Database ID: {config.notion_db_id}")

    source = source or build_token_source(config)
    store = store or NotionClient(config.notion_token, config.notion_db_id)
    if swatches is None:
        swatches = build_swatch_provider(config)

    logger.info("Fetching tokens from Figma...")
    tokens = await fetch_tokens(source)

    variable_count = sum(1 for t in tokens if t.type == TokenType.VARIABLE)
    style_count = len(tokens) - variable_count
    logger.info(f"Found {len(tokens)} tokens in Figma ({variable_count} variables, {style_count} styles)")

    if not tokens:
        logger.warning("No tokens found in Figma. Check your configuration.")
        return SyncResult(created=0, updated=0, total=0)

    store_index = await build_store_index(store)

    logger.info("Syncing tokens to Notion...")
    result = await reconcile(tokens, store_index, store, NotionPropertyMapper(swatches))

    logger.info("Sync complete!")
    return result
