"""Scene graph layers."""

from dataclasses import dataclass
from enum import Enum

from PIL import Image


class ZOrder(Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class ImageLayer:
    """Bitmap layer. scale_x/scale_y are independent (template is stretched)."""

    id: str
    source: Image.Image                  # decoded RGBA, owned by the session
    position: Position
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0                # degrees, counter-clockwise

    kind = "image"

    @property
    def rendered_size(self) -> tuple[int, int]:
        """Pixel size after scaling (at least 1x1)."""
        width, height = self.source.size
        return (
            max(1, round(width * self.scale_x)),
            max(1, round(height * self.scale_y)),
        )


@dataclass(frozen=True)
class TextLayer:
    id: str
    content: str
    position: Position
    font_size: int = 24
    color: str = "#000000"

    kind = "text"


Layer = ImageLayer | TextLayer
