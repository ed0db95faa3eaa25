import logging
from typing import Callable, Optional, Union

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class StateLogHandler(logging.Handler):
    """
    Forward formatted records to a sink, typically the viewer's log console.
    """
    def __init__(self, sink: Callable[[str], None], level: int = logging.INFO) -> None:
        super().__init__(level)
        self.sink = sink
        self.setFormatter(logging.Formatter('[%(asctime)s] %(message)s', datefmt='%H:%M:%S'))

    def filter(self, record: logging.LogRecord) -> bool:
        # ViewerState.add_log has already put these lines in the console.
        if getattr(record, "in_console", False):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.format(record))
        except Exception:
            self.handleError(record)


def resolve_level(level: Union[int, str]) -> int:
    """Accept either a logging constant or a level name such as 'debug'."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level}")
    return value


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Set up logging with a console handler and optionally a file handler.

    Args:
        level: Logging level, as a constant or a name.
        log_file: Optional path to a file for logging output.
    """
    logger = logging.getLogger()
    logger.setLevel(resolve_level(level))

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    # requests/urllib3 log every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(logger.level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a module logger. The level is inherited from the root logger
    configured by setup_logging.
    """
    return logging.getLogger(name)
