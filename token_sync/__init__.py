"""Figma to Notion Design Token Sync Package"""

from .category_inference import infer_category
from .exceptions import ConfigurationError, FigmaAPIError, NotionAPIError, TokenSyncError
from .normalizer import normalize, normalize_all, variable_records_from_defs
from .notion_properties import NotionPropertyMapper
from .reconciliation import build_store_index, reconcile

__all__ = [
    'infer_category',
    'ConfigurationError',
    'FigmaAPIError',
    'NotionAPIError',
    'TokenSyncError',
    'normalize',
    'normalize_all',
    'variable_records_from_defs',
    'NotionPropertyMapper',
    'build_store_index',
    'reconcile',
]
