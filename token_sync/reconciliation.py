"""
Reconciliation
Upserts tokens into the Notion database, matching existing rows by Figma ID
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, Tuple

from models.design_tokens import DesignToken, SyncResult
from .notion_properties import NotionPropertyMapper

logger = logging.getLogger(__name__)

StoreIndex = Dict[str, str]


class TokenStore(Protocol):
    def iter_figma_ids(self) -> AsyncIterator[Tuple[str, str]]:
        ...

    async def create_page(self, properties: Dict[str, Any]) -> Any:
        ...

    async def update_page(self, page_id: str, properties: Dict[str, Any]) -> Any:
        ...


async def build_store_index(store: TokenStore) -> StoreIndex:
    """
    Snapshot every existing row as Figma ID -> page ID

    Must finish before any write begins. Errors propagate: without a
    complete snapshot every token would look new and be duplicated.
    """
    index: StoreIndex = {}
    async for page_id, figma_id in store.iter_figma_ids():
        if figma_id in index:
            logger.warning(f"Figma ID {figma_id} appears on several pages, using {page_id}")
        index[figma_id] = page_id

    logger.info(f"Found {len(index)} existing tokens in Notion")
    return index


async def reconcile(
    tokens: List[DesignToken],
    store_index: StoreIndex,
    store: TokenStore,
    mapper: Optional[NotionPropertyMapper] = None,
) -> SyncResult:
    """
    Create pages for new tokens and update pages for known ones

    Tokens are written one at a time. A failing token is logged and skipped;
    it counts toward total but not toward created or updated.
    """
    mapper = mapper or NotionPropertyMapper()
    created = 0
    updated = 0

    for token in tokens:
        try:
            properties = await mapper.build(token)
            existing_page_id = store_index.get(token.id)

            if existing_page_id:
                await store.update_page(existing_page_id, properties)
                updated += 1
            else:
                await store.create_page(properties)
                created += 1
        except Exception as e:
            logger.error(f"Failed to upsert token {token.id} ({token.name}): {e}")

    result = SyncResult(created=created, updated=updated, total=len(tokens))
    if result.failed:
        logger.warning(f"{result.failed} of {result.total} tokens were not synced")
    return result
