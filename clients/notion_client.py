"""
Notion API Client for the design token database
Queries existing token pages and creates/updates them over the Notion REST API
"""

import logging
from typing import Any, AsyncIterator, Dict, Optional, Tuple

import httpx

from token_sync.exceptions import NotionAPIError
from token_sync.notion_properties import FIGMA_ID_PROPERTY

logger = logging.getLogger(__name__)


def _first_plain_text(items: Any) -> Optional[str]:
    if isinstance(items, list) and items:
        first = items[0] or {}
        text = first.get("text") or {}
        content = text.get("content") or first.get("plain_text")
        if content:
            return content
    return None


def extract_figma_id(page: Dict[str, Any]) -> Optional[str]:
    """Read the Figma ID stored on a page (rich text, or title as fallback)"""
    prop = (page.get("properties") or {}).get(FIGMA_ID_PROPERTY)
    if not prop:
        return None
    if "rich_text" in prop:
        return _first_plain_text(prop["rich_text"])
    if "title" in prop:
        return _first_plain_text(prop["title"])
    return None


class NotionClient:
    """Client for the Notion REST API scoped to one database"""

    BASE_URL = "https://api.notion.com/v1"
    NOTION_VERSION = "2022-06-28"
    PAGE_SIZE = 100

    def __init__(
        self,
        token: str,
        database_id: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        if not token:
            raise ValueError("Notion token required")
        if not database_id:
            raise ValueError("Notion database id required")
        self.token = token
        self.database_id = database_id
        self.transport = transport
        self.timeout = timeout

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.NOTION_VERSION,
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self.transport) as client:
            response = await client.request(
                method,
                f"{self.BASE_URL}{path}",
                json=payload,
                headers=self.headers,
                timeout=self.timeout
            )

        if response.status_code >= 400:
            code = None
            try:
                code = response.json().get("code")
            except ValueError:
                pass
            raise NotionAPIError(response.status_code, response.text, code)

        return response.json()

    async def query_database(
        self,
        start_cursor: Optional[str] = None,
        filter: Optional[Dict[str, Any]] = None,
        page_size: int = PAGE_SIZE,
    ) -> Dict[str, Any]:
        """Fetch one page of database results"""
        payload: Dict[str, Any] = {"page_size": page_size}
        if start_cursor:
            payload["start_cursor"] = start_cursor
        if filter:
            payload["filter"] = filter
        return await self._request("POST", f"/databases/{self.database_id}/query", payload)

    async def iter_pages(self, filter: Optional[Dict[str, Any]] = None) -> AsyncIterator[Dict[str, Any]]:
        """Yield every page in the database, following cursors until has_more is false"""
        cursor = None
        while True:
            response = await self.query_database(start_cursor=cursor, filter=filter)
            for page in response.get("results", []):
                yield page

            cursor = response.get("next_cursor")
            if not response.get("has_more") or not cursor:
                break

    async def iter_figma_ids(self) -> AsyncIterator[Tuple[str, str]]:
        """Yield (page_id, figma_id) for every page that carries a Figma ID"""
        async for page in self.iter_pages():
            figma_id = extract_figma_id(page)
            if figma_id:
                yield page["id"], figma_id

    async def find_page_id(self, figma_id: str) -> Optional[str]:
        """Look up a single page by its Figma ID"""
        response = await self.query_database(
            filter={"property": FIGMA_ID_PROPERTY, "rich_text": {"equals": figma_id}},
            page_size=1,
        )
        results = response.get("results", [])
        return results[0]["id"] if results else None

    async def create_page(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/pages", {
            "parent": {"database_id": self.database_id},
            "properties": properties,
        })

    async def update_page(self, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PATCH", f"/pages/{page_id}", {"properties": properties})

