"""Error types raised across the token sync pipeline"""

from typing import List, Optional


class TokenSyncError(Exception):
    """Base class for sync failures"""


class ConfigurationError(TokenSyncError):
    """Required settings are missing; raised before any network call"""

    def __init__(self, missing: List[str], hint: Optional[str] = None):
        self.missing = list(missing)
        self.hint = hint
        message = "Missing required environment variables: " + ", ".join(self.missing)
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


class FigmaAPIError(TokenSyncError):
    """Non-success response from the Figma REST API"""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Figma API error ({status_code}): {body}")


class NotionAPIError(TokenSyncError):
    """Non-success response from the Notion REST API"""

    def __init__(self, status_code: int, body: str, code: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.code = code
        label = f"{status_code} {code}" if code else str(status_code)
        super().__init__(f"Notion API error ({label}): {body}")
