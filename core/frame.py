# core/frame.py
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class AxisId(Enum):
    BOTTOM = "x0"
    TOP = "x1"
    LEFT = "y0"
    RIGHT = "y1"

    @property
    def horizontal(self) -> bool:
        return self in (AxisId.BOTTOM, AxisId.TOP)


@dataclass(frozen=True)
class Tick:
    value: float
    labeled: bool
    label: str


@dataclass
class CoordinateFrame:
    """
    Pixel-space bounds of the plot area and the user coordinates they map to.

    Pixel y grows upwards; surfaces that draw top-down flip it themselves.
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    coord_min_x: float = 0.0
    coord_max_x: float = 1.0
    coord_min_y: float = 0.0
    coord_max_y: float = 1.0

    def x_affine(self) -> Tuple[float, float]:
        """Return (ax, bx) such that coord_x = ax + bx * px."""
        bx = (self.coord_max_x - self.coord_min_x) / (self.max_x - self.min_x)
        ax = self.coord_max_x - bx * self.max_x
        return ax, bx

    def coord_to_pixel(self, x: float, y: float) -> Tuple[float, float]:
        sx = (self.max_x - self.min_x) / (self.coord_max_x - self.coord_min_x)
        sy = (self.max_y - self.min_y) / (self.coord_max_y - self.coord_min_y)
        return (self.min_x + (x - self.coord_min_x) * sx,
                self.min_y + (y - self.coord_min_y) * sy)
