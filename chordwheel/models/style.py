"""Highlight styling model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

RGBA = tuple[int, int, int, int]


class HighlightStyle(BaseModel):
    """Colours are 8-bit RGBA; alpha 204 ≈ 0.8, 26 ≈ 0.1."""

    outline_color: RGBA = (255, 0, 0, 204)
    outline_width: float = Field(default=4.0, gt=0)
    fill_color: RGBA = (255, 0, 0, 26)
    # Colour of cells in the edge-detect bitmap
    edge_color: RGBA = (255, 0, 0, 255)

    @field_validator("outline_color", "fill_color", "edge_color")
    @classmethod
    def _channels_in_range(cls, value: RGBA) -> RGBA:
        if any(c < 0 or c > 255 for c in value):
            raise ValueError(f"RGBA channels must be 0-255, got {value}")
        return value
