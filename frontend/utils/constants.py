# frontend/utils/constants.py
from typing import List

# Server
DEFAULT_SERVER_URL: str = "http://localhost:8080"
DEFAULT_RPC_PATH: str = "rpc"
DEFAULT_TIMEOUT: float = 10.0

# Canvas
CANVAS_WIDTH: int = 900
CANVAS_HEIGHT: int = 600
CANVAS_MARGIN: int = 60

# Axis ranges: wavelength in nm, intensity in device counts / 10
WAVELENGTH_RANGE: List[float] = [200.0, 900.0]
INTENSITY_RANGE: List[float] = [0.0, 500.0]
WAVELENGTH_TICK_STEP: float = 100.0
INTENSITY_TICK_STEP: float = 50.0
INTENSITY_LABEL_STEP: float = 100.0

# Color strip below the data
BAND_RESERVE: int = 50
BAND_OFFSET: int = 30
BAND_SPAN: int = 20

SPECTRUM_GAMMA: float = 0.96
VALUE_SCALE: float = 10.0

# Seconds between automatic re-fetches, 0 disables
REFRESH_INTERVAL: float = 0.0

TICK_LENGTH: int = 5
LABELED_TICK_LENGTH: int = 9
SERIES_COLOR = (235, 235, 235, 255)
AXIS_COLOR = (200, 200, 200, 255)
