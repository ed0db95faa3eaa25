# frontend/controllers/fetch_controller.py
import time
from typing import Optional

from core.join import JoinCoordinator, Transport
from frontend.controllers.plot_controller import PlotController
from frontend.models.state import ViewerState


class FetchController:
    """
    Fetches the scale/sample pair and hands it to the plot controller.
    """
    def __init__(self, state: ViewerState, transport: Transport, plot_controller: PlotController,
                 refresh_interval: float = 0.0) -> None:
        self.state = state
        self.transport = transport
        self.plot_controller = plot_controller
        self.refresh_interval = refresh_interval
        self.coordinator = JoinCoordinator(transport, plot_controller.render_series)

    def start(self) -> None:
        status = self.state.fetch_status
        if status.running and not self.coordinator.settled:
            self.state.add_log("Fetch is already running.")
            return
        status.running = True
        status.rendered = False
        status.last_started = time.monotonic()
        status.generation = self.coordinator.start()
        self.state.add_log(f"Requested scale and sample from {self.state.server_url}")

    def poll(self, now: Optional[float] = None) -> None:
        """Update the fetch status and start an automatic refresh when one is due."""
        status = self.state.fetch_status
        if status.running and self.coordinator.settled:
            status.running = False
            status.rendered = self.coordinator.wait(0)
            if not status.rendered:
                self.state.add_log("Fetch finished without a complete spectrum.")
        if self.refresh_interval <= 0 or status.running or status.last_started is None:
            return
        now = time.monotonic() if now is None else now
        if now - status.last_started >= self.refresh_interval:
            self.start()
