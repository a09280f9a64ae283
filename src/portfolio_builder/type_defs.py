"""
Defines shared type aliases for the portfolio builder.

Centralizes reusable type hints to improve consistency and readability.
"""
from __future__ import annotations

from typing import Literal

ImageFormat = Literal["webp", "jpeg", "png"]
LayoutMode = Literal["justified", "grid"]
ProcessingStep = Literal[
    "read", "decode", "resize", "encode", "write", "process",
]
GridName = Literal["desktop", "mobile"]
Cell = tuple[int, int]
