"""
Design Token Model
Canonical representation of a design token pulled from Figma
plus the raw provider records it is normalized from
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class Category(str, Enum):
    """Semantic bucket assigned to a token"""
    COLOR = "Color"
    TYPOGRAPHY = "Typography"
    SPACING = "Spacing"
    SIZING = "Sizing"
    RADIUS = "Radius"
    SHADOW = "Shadow"
    OPACITY = "Opacity"
    ELEVATION = "Elevation"


class TokenType(str, Enum):
    """Provenance shape a token came from"""
    VARIABLE = "Variable"
    STYLE = "Style"


class DesignToken(BaseModel):
    """Normalized representation of a design token from Figma"""
    id: str  # Figma variable/style ID
    name: str
    description: Optional[str] = None
    collection: str
    mode: str = "Default"  # e.g. "Light", "Dark", "Default"
    type: TokenType
    value: str = ""  # hex, px, number, Font(...) descriptor
    resolved_value: str = ""
    category: Category = Category.COLOR

    @property
    def full_path(self) -> str:
        return f"{self.collection}/{self.name}"


class VariableRecord(BaseModel):
    """Raw Figma variable, one mode already selected"""
    kind: Literal["variable"] = "variable"
    id: str
    name: str
    collection: str = "Global"
    mode: str = "Default"
    resolved_type: str = "COLOR"  # COLOR | FLOAT | STRING | BOOLEAN
    raw_value: Any = None
    description: Optional[str] = None


class StyleRecord(BaseModel):
    """Raw Figma style entry from the file endpoint"""
    kind: Literal["style"] = "style"
    key: str
    name: str
    style_type: str  # FILL | TEXT | EFFECT | GRID
    description: Optional[str] = None


SourceRecord = Annotated[Union[VariableRecord, StyleRecord], Field(discriminator="kind")]


class SyncResult(BaseModel):
    """Counts reported at the end of every sync"""
    created: int = 0
    updated: int = 0
    total: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.created - self.updated
