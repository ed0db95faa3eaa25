# frontend/views/layout_builder.py
import dearpygui.dearpygui as dpg


class LayoutBuilder:
    """
    Responsible for building and updating the UI layout.
    """
    def __init__(self, controller) -> None:
        self.controller = controller

    def build_ui(self) -> None:
        with dpg.window(tag="root_window", label="Spectrum Viewer", no_title_bar=True, no_resize=True, no_move=True, no_close=True):
            dpg.set_primary_window("root_window", True)
            self._build_toolbar()
            with dpg.child_window(tag="canvas_container", autosize_x=True,
                                  height=self.controller.surface.height + 16, border=True):
                self.controller.surface.build(parent="canvas_container")
            self._build_log_console()

    def _build_toolbar(self) -> None:
        with dpg.group(horizontal=True):
            dpg.add_button(label="Refresh", callback=lambda s, a: self.controller.fetch_controller.start())
            dpg.add_text(self.controller.state.server_url, tag="server_url_text")
            dpg.add_text("", tag="fetch_status_text")

    def _build_log_console(self) -> None:
        with dpg.child_window(tag="log_console", height=140, autosize_x=True, border=True):
            dpg.add_text("Log Console")
            with dpg.child_window(tag="log_child", autosize_x=True, autosize_y=True):
                dpg.add_input_text(multiline=True, readonly=True, tag="log_text_tag", width=-1, height=120)

    def _status_text(self) -> str:
        status = self.controller.state.fetch_status
        if status.running:
            return "Fetching..."
        if status.generation == 0:
            return ""
        return "Spectrum loaded" if status.rendered else "No spectrum"

    def update_ui(self) -> None:
        dpg.set_value("fetch_status_text", self._status_text())
        dpg.set_value("log_text_tag", "\n".join(self.controller.state.recent_logs(100)))
        dpg.set_y_scroll("log_child", 10000)
