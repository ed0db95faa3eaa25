# frontend/controllers/ui_controller.py
import logging

import dearpygui.dearpygui as dpg

from frontend.controllers.fetch_controller import FetchController
from frontend.controllers.plot_controller import PlotController
from frontend.models.state import ViewerState
from frontend.views.dpg_surface import DpgSurface
from frontend.views.layout_builder import LayoutBuilder
from inout.config_loader import ViewerConfig
from inout.rpc_client import RpcTransport
from utils.logging_config import StateLogHandler


class UIController:
    """
    Owns the Dear PyGui lifecycle and wires the surface, plot and fetch
    controllers together.
    """
    def __init__(self, state: ViewerState, config: ViewerConfig) -> None:
        self.state = state
        self.config = config
        self.state.server_url = config.server.url
        view = config.view
        self.surface = DpgSurface("spectrum", view.width, view.height, view.margin)
        self.plot_controller = PlotController(self.surface, view)
        self.transport = RpcTransport(config.server.url, config.server.path, timeout=config.server.timeout)
        self.fetch_controller = FetchController(state, self.transport, self.plot_controller,
                                                refresh_interval=view.refresh_interval)
        self.layout_builder = LayoutBuilder(self)
        self.log_handler = StateLogHandler(state.append_log)

    def start(self) -> None:
        """Draw the static parts of the view, then request the data."""
        self.plot_controller.setup_frame()
        self.plot_controller.render_color_band()
        self.fetch_controller.start()

    def run(self) -> None:
        logging.getLogger().addHandler(self.log_handler)
        dpg.create_context()
        try:
            self.layout_builder.build_ui()
            dpg.create_viewport(title="Spectrum Viewer", width=self.surface.width + 40,
                                height=self.surface.height + 230)
            dpg.setup_dearpygui()
            dpg.show_viewport()
            self.start()
            while dpg.is_dearpygui_running():
                self.fetch_controller.poll()
                self.layout_builder.update_ui()
                dpg.render_dearpygui_frame()
        finally:
            self.transport.close()
            logging.getLogger().removeHandler(self.log_handler)
            dpg.destroy_context()
