"""
Color helpers for swatch generation
Turns the formatted token values (#hex, rgb(), rgba()) into plain hex colors
"""

import re
from typing import Optional, Tuple

_RGB_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*[\d.]+)?\)")


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """Convert #RGB or #RRGGBB to an (r, g, b) tuple"""
    clean = hex_color.replace("#", "")

    try:
        if len(clean) == 3:
            return tuple(int(ch * 2, 16) for ch in clean)
        if len(clean) == 6:
            return tuple(int(clean[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None

    return None


def extract_hex_color(value: str) -> Optional[str]:
    """
    Extract a displayable hex color from a token value

    Handles #RRGGBBAA (alpha dropped), #RRGGBB, #RGB (expanded),
    rgb(r, g, b) and rgba(r, g, b, a). Returns None for anything else.
    """
    if not value:
        return None

    if value.startswith("#"):
        hex_part = value[1:]
        if len(hex_part) == 8:
            return f"#{hex_part[:6]}"
        if len(hex_part) == 6:
            return value
        if len(hex_part) == 3:
            return "#" + "".join(ch * 2 for ch in hex_part)
        return None

    match = _RGB_PATTERN.search(value)
    if match:
        r, g, b = (int(channel) for channel in match.groups())
        return f"#{r:02x}{g:02x}{b:02x}"

    return None
