# frontend/controllers/plot_controller.py
from typing import List, Sequence

import numpy as np

from core.frame import AxisId, Tick
from core.spectrum import iter_band
from frontend.utils import constants as C
from frontend.views.surface import Surface
from inout.config_loader import ViewConfig
from utils.logging_config import get_logger

logger = get_logger(__name__)


def build_ticks(start: float, stop: float, step: float, label_step: float = None, suffix: str = "") -> List[Tick]:
    """
    Ticks from start to stop inclusive. With ``label_step`` only multiples of it
    are labelled.
    """
    ticks = []
    for value in np.arange(start, stop + step / 2, step):
        value = float(value)
        labeled = label_step is None or abs(value / label_step - round(value / label_step)) < 1e-9
        ticks.append(Tick(value, labeled, f"{value:g}{suffix}"))
    return ticks


class PlotController:
    """
    Draws the spectrum view on a surface: frame and axes at startup, the
    wavelength color band, and the scale/sample series once both arrive.
    """
    def __init__(self, surface: Surface, view: ViewConfig = None) -> None:
        self.surface = surface
        self.view = view if view is not None else ViewConfig()

    def setup_frame(self) -> None:
        view = self.view
        frame = self.surface.frame
        # Open up some space below the data for the color band.
        frame.min_y -= view.band_reserve
        self.surface.redraw()

        frame.coord_min_x, frame.coord_max_x = view.wavelength_range
        frame.coord_min_y, frame.coord_max_y = view.intensity_range

        x_ticks = build_ticks(*view.wavelength_range, C.WAVELENGTH_TICK_STEP, suffix="nm")
        y_ticks = build_ticks(*view.intensity_range, C.INTENSITY_TICK_STEP, label_step=C.INTENSITY_LABEL_STEP)
        for axis_id in (AxisId.BOTTOM, AxisId.TOP):
            self.surface.axis(axis_id, x_ticks)
        for axis_id in (AxisId.LEFT, AxisId.RIGHT):
            self.surface.axis(axis_id, y_ticks)

    def render_color_band(self) -> None:
        frame = self.surface.frame
        ctx = self.surface.context
        y0 = frame.min_y + self.view.band_offset
        y1 = y0 + self.view.band_span
        old_style = ctx.stroke_style
        columns = 0
        try:
            for px, rgb in iter_band(frame, self.view.gamma):
                ctx.stroke_style = rgb
                ctx.begin_path()
                ctx.move_to(px, y0)
                ctx.line_to(px, y1)
                ctx.stroke()
                columns += 1
        finally:
            ctx.stroke_style = old_style
        logger.debug("Drew color band across %d columns", columns)

    def render_series(self, xs: Sequence[float], ys: Sequence[float]) -> None:
        scale = self.view.value_scale
        points = [[x / scale, y / scale] for x, y in zip(xs, ys)]
        self.surface.line(points)
        self.surface.redraw()
        logger.info("Rendered spectrum with %d points", len(points))
