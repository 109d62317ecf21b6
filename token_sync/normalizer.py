"""
Token Normalizer
Converts raw Figma variable and style records into canonical DesignTokens
"""

import json
import logging
import math
from typing import Any, Dict, Iterable, List

from models.design_tokens import (
    Category,
    DesignToken,
    SourceRecord,
    StyleRecord,
    TokenType,
    VariableRecord,
)
from .category_inference import infer_category

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "Global"
DEFAULT_MODE = "Default"
STYLES_COLLECTION = "Styles"

# Style kinds whose category is stated by Figma itself, matched exactly
STYLE_TYPE_CATEGORIES = {
    "FILL": Category.COLOR,
    "TEXT": Category.TYPOGRAPHY,
    "EFFECT": Category.SHADOW,
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: Any) -> str:
    """Render a number the way it appears in JSON (16.0 -> "16")"""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _channel(value: Any) -> int:
    # Half-up rounding of a 0-1 channel onto 0-255
    return int(math.floor(float(value) * 255 + 0.5))


def format_color(rgba: Dict[str, Any]) -> str:
    """Format a Figma {r, g, b, a} color object as rgb()/rgba()"""
    r, g, b = _channel(rgba["r"]), _channel(rgba["g"]), _channel(rgba["b"])
    alpha = rgba.get("a")
    if alpha is None:
        alpha = 1
    if alpha < 1:
        return f"rgba({r}, {g}, {b}, {format_number(alpha)})"
    return f"rgb({r}, {g}, {b})"


def format_variable_value(raw_value: Any, resolved_type: str) -> str:
    """Format a variable value based on its resolved type"""
    if raw_value is None:
        return ""

    if isinstance(raw_value, bool):
        return "true" if raw_value else "false"

    if resolved_type.upper() == "COLOR" and isinstance(raw_value, dict):
        if all(raw_value.get(channel) is not None for channel in ("r", "g", "b")):
            return format_color(raw_value)

    if _is_number(raw_value):
        return format_number(raw_value)

    # Aliases and other structured values
    if isinstance(raw_value, (dict, list)):
        return json.dumps(raw_value)

    return str(raw_value)


def infer_resolved_type(raw_value: Any) -> str:
    """Provisional Figma type for a value that arrived without one"""
    if _is_number(raw_value):
        return "FLOAT"
    return "COLOR"


def split_variable_key(key: str):
    """Split "collection/name" on the first slash; bare keys land in Global"""
    if "/" in key:
        collection, name = key.split("/", 1)
        return collection, name
    return DEFAULT_COLLECTION, key


def variable_records_from_defs(variable_defs: Dict[str, Any]) -> List[VariableRecord]:
    """
    Build variable records from flat variable definitions

    Expected format: {"collection/variable": "#FF0000", "spacing": 4, ...}.
    This shape carries no mode data, so every record uses the Default mode.
    """
    records = []
    for key, raw_value in variable_defs.items():
        collection, name = split_variable_key(key)
        records.append(VariableRecord(
            id=f"var_{key}",
            name=name,
            collection=collection,
            mode=DEFAULT_MODE,
            resolved_type=infer_resolved_type(raw_value),
            raw_value=raw_value,
        ))
    return records


def normalize_variable(record: VariableRecord) -> DesignToken:
    value = format_variable_value(record.raw_value, record.resolved_type)
    token = DesignToken(
        id=record.id,
        name=record.name,
        description=record.description,
        collection=record.collection,
        mode=record.mode,
        type=TokenType.VARIABLE,
        value=value,
        resolved_value=value,
    )
    token.category = infer_category(token)
    return token


def normalize_style(record: StyleRecord) -> DesignToken:
    # The file endpoint does not expose style values, so value stays empty
    token = DesignToken(
        id=record.key,
        name=record.name,
        description=record.description,
        collection=STYLES_COLLECTION,
        mode=DEFAULT_MODE,
        type=TokenType.STYLE,
        value="",
        resolved_value="",
    )

    category = STYLE_TYPE_CATEGORIES.get(record.style_type)
    token.category = category if category is not None else infer_category(token)
    return token


def normalize(record: SourceRecord) -> DesignToken:
    """Turn one provider record into a canonical token"""
    if isinstance(record, VariableRecord):
        return normalize_variable(record)
    if isinstance(record, StyleRecord):
        return normalize_style(record)
    raise TypeError(f"Unsupported source record: {type(record).__name__}")


def normalize_all(records: Iterable[SourceRecord]) -> List[DesignToken]:
    """Normalize records in order, keeping the first token for each id"""
    tokens = []
    seen_ids = set()

    for record in records:
        token = normalize(record)
        if token.id in seen_ids:
            logger.warning(f"Duplicate token id {token.id} ({token.name}), keeping first occurrence")
            continue
        seen_ids.add(token.id)
        tokens.append(token)

    return tokens
