# frontend/views/dpg_surface.py
"""
Dear PyGui implementation of the plotting surface.

Everything is drawn into a single drawlist split into layers, back to front:
the context layer (color band), frame, one layer per axis, then the data
series. Redrawing a layer clears its children first, so a new series
replaces the previous one.
"""
from typing import List, Sequence, Tuple

import dearpygui.dearpygui as dpg

from core.frame import AxisId, CoordinateFrame, Tick
from frontend.utils.constants import AXIS_COLOR, LABELED_TICK_LENGTH, SERIES_COLOR, TICK_LENGTH
from frontend.utils.tag_factory import TagFactory
from frontend.views.surface import DrawingContext, Point, Surface
from utils.logging_config import get_logger

logger = get_logger(__name__)

LAYERS = ("context", "frame", "series")
LABEL_SIZE = 13


class DpgDrawingContext(DrawingContext):
    def __init__(self, surface: "DpgSurface") -> None:
        super().__init__()
        self.surface = surface
        self._subpaths: List[List[Tuple[float, float]]] = []

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([self.surface.to_screen(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].append(self.surface.to_screen(x, y))

    def stroke(self) -> None:
        color = (*self.stroke_style, 255)
        parent = self.surface.layer("context")
        for path in self._subpaths:
            if len(path) >= 2:
                dpg.draw_polyline(path, color=color, thickness=1, parent=parent)


class DpgSurface(Surface):
    def __init__(self, canvas_id: str, width: int, height: int, margin: int) -> None:
        frame = CoordinateFrame(min_x=margin, max_x=width - margin, min_y=margin, max_y=height - margin)
        self.canvas_id = canvas_id
        self.width = width
        self.height = height
        super().__init__(frame, DpgDrawingContext(self))

    @property
    def drawlist_tag(self) -> str:
        return f"canvas_{self.canvas_id}"

    def build(self, parent) -> None:
        """Create the drawlist and its layers under ``parent``."""
        dpg.add_drawlist(width=self.width, height=self.height, parent=parent, tag=self.drawlist_tag)
        dpg.add_draw_layer(parent=self.drawlist_tag, tag=self.layer("context"))
        dpg.add_draw_layer(parent=self.drawlist_tag, tag=self.layer("frame"))
        for axis_id in AxisId:
            dpg.add_draw_layer(parent=self.drawlist_tag, tag=TagFactory.get_axis_layer_tag(self.canvas_id, axis_id))
        dpg.add_draw_layer(parent=self.drawlist_tag, tag=self.layer("series"))

    def layer(self, name: str) -> str:
        return TagFactory.get_layer_tag(self.canvas_id, name)

    def to_screen(self, px: float, py: float) -> Tuple[float, float]:
        # Drawlists grow downwards.
        return float(px), float(self.height - py)

    def _clear(self, tag: str) -> None:
        if dpg.does_item_exist(tag):
            dpg.delete_item(tag, children_only=True)

    def axis(self, axis_id: AxisId, ticks: Sequence[Tick]) -> None:
        f = self.frame
        tag = TagFactory.get_axis_layer_tag(self.canvas_id, axis_id)
        self._clear(tag)
        if axis_id.horizontal:
            y = f.min_y if axis_id is AxisId.BOTTOM else f.max_y
            sign = -1 if axis_id is AxisId.BOTTOM else 1
            dpg.draw_line(self.to_screen(f.min_x, y), self.to_screen(f.max_x, y), color=AXIS_COLOR, parent=tag)
        else:
            x = f.min_x if axis_id is AxisId.LEFT else f.max_x
            sign = -1 if axis_id is AxisId.LEFT else 1
            dpg.draw_line(self.to_screen(x, f.min_y), self.to_screen(x, f.max_y), color=AXIS_COLOR, parent=tag)

        for tick in ticks:
            length = LABELED_TICK_LENGTH if tick.labeled else TICK_LENGTH
            if axis_id.horizontal:
                px, _ = f.coord_to_pixel(tick.value, f.coord_min_y)
                start, end = (px, y), (px, y + sign * length)
                label_pos = (px - 3 * len(tick.label), y + sign * (length + 4) + (LABEL_SIZE if sign > 0 else 0))
            else:
                _, py = f.coord_to_pixel(f.coord_min_x, tick.value)
                start, end = (x, py), (x + sign * length, py)
                offset = length + 4 if sign > 0 else -(length + 4 + 7 * len(tick.label))
                label_pos = (x + offset, py + LABEL_SIZE / 2)
            dpg.draw_line(self.to_screen(*start), self.to_screen(*end), color=AXIS_COLOR, parent=tag)
            if tick.labeled:
                dpg.draw_text(self.to_screen(*label_pos), tick.label, color=AXIS_COLOR, size=LABEL_SIZE, parent=tag)

    def line(self, points: Sequence[Point]) -> None:
        tag = self.layer("series")
        self._clear(tag)
        screen = [self.to_screen(*self.frame.coord_to_pixel(x, y)) for x, y in points]
        if len(screen) < 2:
            logger.debug("Series with %d points not drawn", len(screen))
            return
        dpg.draw_polyline(screen, color=SERIES_COLOR, thickness=1, parent=tag)

    def redraw(self) -> None:
        f = self.frame
        tag = self.layer("frame")
        self._clear(tag)
        dpg.draw_rectangle(self.to_screen(f.min_x, f.max_y), self.to_screen(f.max_x, f.min_y),
                           color=AXIS_COLOR, parent=tag)
