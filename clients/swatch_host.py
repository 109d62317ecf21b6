"""
Color swatch provisioning
Renders a solid PNG swatch with Pillow and uploads it to a public image host
so Notion can show it as an external file
"""

import base64
import io
import logging
from typing import Optional

import httpx
from PIL import Image

from token_sync.colors import hex_to_rgb

logger = logging.getLogger(__name__)

SWATCH_SIZE = (100, 100)


def render_swatch_png(hex_color: str) -> bytes:
    """Render a 100x100 PNG filled with the given color"""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        raise ValueError(f"Invalid hex color: {hex_color}")

    buffer = io.BytesIO()
    Image.new("RGB", SWATCH_SIZE, rgb).save(buffer, format="PNG")
    return buffer.getvalue()


class SwatchProvisioner:
    """Upload swatches to ImgBB (when a key is set) with Postimages as fallback"""

    IMGBB_URL = "https://api.imgbb.com/1/upload"
    POSTIMAGES_URL = "https://postimages.org/json/rr"

    def __init__(
        self,
        imgbb_api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.imgbb_api_key = imgbb_api_key
        self.transport = transport
        self.timeout = timeout

    async def upload_to_imgbb(self, png: bytes) -> Optional[str]:
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.IMGBB_URL,
                    params={"key": self.imgbb_api_key},
                    data={"image": base64.b64encode(png).decode("ascii")},
                    timeout=self.timeout
                )

            if response.status_code >= 400:
                logger.warning(f"ImgBB upload failed: {response.status_code}")
                return None

            data = response.json().get("data") or {}
            return data.get("display_url") or data.get("url")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"ImgBB upload error: {e}")
            return None

    async def upload_to_postimages(self, png: bytes, file_name: str) -> Optional[str]:
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.POSTIMAGES_URL,
                    files={"upload": (file_name, png, "image/png")},
                    data={"token": "default"},
                    timeout=self.timeout
                )

            if response.status_code >= 400:
                logger.warning(f"Postimages upload failed: {response.status_code}")
                return None

            return response.json().get("url")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"Postimages upload error: {e}")
            return None

    async def provision_swatch(self, hex_color: str, file_name: str) -> Optional[str]:
        """
        Return a public URL for a swatch of hex_color, or None

        None is an expected outcome (no host reachable, bad color); the
        caller simply leaves the image field out.
        """
        try:
            png = render_swatch_png(hex_color)

            if self.imgbb_api_key:
                url = await self.upload_to_imgbb(png)
                if url:
                    return url

            return await self.upload_to_postimages(png, file_name)
        except Exception as e:
            logger.warning(f"Error uploading color swatch for {hex_color}: {e}")
            return None
