"""
Geometry and translation-unit data structures shared by the parser,
the imaging helpers and the pipeline.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Rectangle:
    """Pixel-space box, origin top-left."""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rectangle size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class Token:
    """A single OCR word box, already truncated to integer pixels."""
    left: int
    top: int
    width: int
    height: int

    @classmethod
    def from_values(cls, left: str, top: str, width: str, height: str) -> "Token":
        # OCR.space reports floats; truncate toward zero like an int cast
        return cls(
            left=int(float(left)),
            top=int(float(top)),
            width=int(float(width)),
            height=int(float(height)),
        )


@dataclass
class TranslationUnit:
    region: Rectangle
    original_text: str
    translated_text: Optional[str] = None

    @property
    def needs_render(self) -> bool:
        return bool(self.translated_text)
