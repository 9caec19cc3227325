# Trial Configuration Constants
# These values control trial timing, camera capture and the on-screen display

from dataclasses import dataclass

from detection.detection_config import env_value

# Trial Timing Settings (seconds, measured on the monotonic clock)
WAIT_DELAY_MIN = 2.0  # Shortest random delay before the "go" cue
WAIT_DELAY_MAX = 4.0  # Upper bound (exclusive) of the random delay
MOVING_WINDOW = 1.0  # Time after onset during which peak speed is tracked
RESULT_DISPLAY_TIME = 3.0  # Time after onset until the next trial starts

# Result Display Precision
REACTION_TIME_DECIMALS = 3
PEAK_SPEED_DECIMALS = 3

# Text Colors (BGR)
STATUS_TEXT_COLOR = (255, 255, 255)  # White for preparing / calibration text
SIGNAL_TEXT_COLOR = (0, 255, 255)  # Yellow for the "go" cue
MOVING_TEXT_COLOR = (0, 255, 0)  # Lime while the punch is being measured
RESULT_TEXT_COLOR = (255, 255, 0)  # Cyan for reaction time and peak speed
INSTRUCTION_COLOR = (200, 200, 200)  # Grey for key hints

# UI Layout
STATUS_TEXT_POSITION = (40, 60)
RESULT_TEXT_POSITION = (40, 80)
RESULT_LINE_SPACING = 50

# Camera Settings
CAMERA_WIDTH = 480
CAMERA_HEIGHT = 360
CAMERA_INDEX = env_value("CAMERA_INDEX", 0, int)  # Default camera device index
WINDOW_NAME = 'Reflex Trainer'


@dataclass(frozen=True)
class TrialTimingConfig:
    """Phase durations of a single reflex trial."""

    wait_delay_min: float = WAIT_DELAY_MIN
    wait_delay_max: float = WAIT_DELAY_MAX
    moving_window: float = MOVING_WINDOW
    result_display_time: float = RESULT_DISPLAY_TIME

    def __post_init__(self):
        if not 0 <= self.wait_delay_min < self.wait_delay_max:
            raise ValueError(
                f"wait delay range must satisfy 0 <= min < max, got "
                f"[{self.wait_delay_min}, {self.wait_delay_max})"
            )
        if self.moving_window <= 0:
            raise ValueError(f"moving_window must be > 0, got {self.moving_window}")
        if self.result_display_time < self.moving_window:
            raise ValueError("result_display_time must not be shorter than moving_window")
