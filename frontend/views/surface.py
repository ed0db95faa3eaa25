# frontend/views/surface.py
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

from core.frame import AxisId, CoordinateFrame, Tick

Color = Tuple[int, int, int]
Point = Sequence[float]


class DrawingContext(ABC):
    """
    Pixel-space path drawing with a mutable stroke color, in the manner of a
    canvas 2D context.
    """
    def __init__(self, stroke_style: Color = (0, 0, 0)) -> None:
        self._stroke_style = stroke_style

    @property
    def stroke_style(self) -> Color:
        return self._stroke_style

    @stroke_style.setter
    def stroke_style(self, value: Color) -> None:
        self._stroke_style = tuple(value)

    @abstractmethod
    def begin_path(self) -> None:
        ...

    @abstractmethod
    def move_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def line_to(self, x: float, y: float) -> None:
        ...

    @abstractmethod
    def stroke(self) -> None:
        ...


class Surface(ABC):
    """
    Plotting capability surface: a coordinate frame, axes, a data line and a
    drawing context.
    """
    def __init__(self, frame: CoordinateFrame, context: DrawingContext) -> None:
        self.frame = frame
        self.context = context

    @abstractmethod
    def axis(self, axis_id: AxisId, ticks: Sequence[Tick]) -> None:
        ...

    @abstractmethod
    def line(self, points: Sequence[Point]) -> None:
        """Draw a series given in user coordinates."""

    @abstractmethod
    def redraw(self) -> None:
        """Refresh the visible frame."""
