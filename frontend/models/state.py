import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from utils.logging_config import get_logger

logger = get_logger(__name__)

MAX_LOG_LINES = 500


@dataclass
class FetchStatus:
    running: bool = False
    generation: int = 0
    last_started: Optional[float] = None
    rendered: bool = False


class ViewerState:
    """
    Shared viewer state: the fetch status and the lines shown in the log console.
    """
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.server_url: str = ""
        self.fetch_status: FetchStatus = FetchStatus()
        self.logs: List[str] = []

    def add_log(self, message: str) -> None:
        timestamp = time.strftime("%H:%M:%S")
        self.append_log(f"[{timestamp}] {message}")
        logger.info(message, extra={"in_console": True})

    def append_log(self, line: str) -> None:
        with self.lock:
            self.logs.append(line)
            if len(self.logs) > MAX_LOG_LINES:
                del self.logs[:-MAX_LOG_LINES]

    def recent_logs(self, count: int = 100) -> List[str]:
        with self.lock:
            return list(self.logs[-count:])
