"""
Models package for data structures and domain models
"""

from .design_tokens import (
    Category,
    DesignToken,
    SourceRecord,
    StyleRecord,
    SyncResult,
    TokenType,
    VariableRecord,
)

__all__ = [
    "Category",
    "DesignToken",
    "SourceRecord",
    "StyleRecord",
    "SyncResult",
    "TokenType",
    "VariableRecord",
]
