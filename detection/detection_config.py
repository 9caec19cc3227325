# Detection Configuration Constants
# These values control wrist speed estimation, noise calibration and onset detection

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Motion Estimation Settings
SMOOTHING_ALPHA = 0.5  # Weight of the newest raw speed in the exponential smoothing (0 < alpha <= 1)
MIN_MOVE_DIST = 0.015  # Normalized units - Displacements below this count as zero speed (0 disables)

# Noise Calibration Settings
NOISE_SAMPLE_COUNT = 30  # Frames of idle motion averaged into the noise floor (~1 s at 30 fps)

# Onset Detection Settings
START_FACTOR = 3.0  # Threshold = noise floor * START_FACTOR ...
MIN_START_VEL = 0.03  # ... but never below this speed
CONSEC_FRAMES = 2  # Consecutive above-threshold frames required to confirm onset

# Tracked Landmarks (MediaPipe Pose indices)
LEFT_WRIST_INDEX = 15
RIGHT_WRIST_INDEX = 16

# MediaPipe Configuration
MP_MIN_DETECTION_CONFIDENCE = 0.7
MP_MIN_TRACKING_CONFIDENCE = 0.7
MP_MODEL_COMPLEXITY = 1
MP_SMOOTH_LANDMARKS = True

ENV_PREFIX = "REFLEX_"


def env_value(name: str, default, cast, environ: Optional[Mapping[str, str]] = None):
    """
    Read an override for a tunable value from the environment.

    Args:
        name: Variable name without the REFLEX_ prefix
        default: Value used when the variable is unset or empty
        cast: Conversion applied to the raw string (int, float, ...)
        environ: Mapping to read from, defaults to os.environ

    Returns:
        The converted override or the default

    Raises:
        ValueError: If the variable is set but cannot be converted
    """
    environ = os.environ if environ is None else environ
    key = ENV_PREFIX + name
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from None


@dataclass(frozen=True)
class DetectionConfig:
    """Tunable parameters for speed estimation and movement onset detection."""

    smoothing_alpha: float = SMOOTHING_ALPHA
    min_move_dist: float = MIN_MOVE_DIST
    noise_sample_count: int = NOISE_SAMPLE_COUNT
    start_factor: float = START_FACTOR
    min_start_velocity: float = MIN_START_VEL
    consec_frames: int = CONSEC_FRAMES
    left_wrist_index: int = LEFT_WRIST_INDEX
    right_wrist_index: int = RIGHT_WRIST_INDEX

    def __post_init__(self):
        if not 0 < self.smoothing_alpha <= 1:
            raise ValueError(f"smoothing_alpha must be in (0, 1], got {self.smoothing_alpha}")
        if self.min_move_dist < 0:
            raise ValueError(f"min_move_dist must be >= 0, got {self.min_move_dist}")
        if self.noise_sample_count < 1:
            raise ValueError(f"noise_sample_count must be >= 1, got {self.noise_sample_count}")
        if self.consec_frames < 1:
            raise ValueError(f"consec_frames must be >= 1, got {self.consec_frames}")
        if self.start_factor < 0 or self.min_start_velocity < 0:
            raise ValueError("start_factor and min_start_velocity must be >= 0")

    @property
    def required_landmarks(self) -> int:
        """Minimum landmark list length that contains both wrists."""
        return max(self.left_wrist_index, self.right_wrist_index) + 1

    def onset_threshold(self, noise_level: float) -> float:
        """Adaptive movement threshold calibrated to the subject's idle jitter."""
        return max(noise_level * self.start_factor, self.min_start_velocity)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DetectionConfig":
        """Build a config from the defaults above and any REFLEX_* overrides."""
        return cls(
            smoothing_alpha=env_value("SMOOTHING_ALPHA", SMOOTHING_ALPHA, float, environ),
            min_move_dist=env_value("MIN_MOVE_DIST", MIN_MOVE_DIST, float, environ),
            noise_sample_count=env_value("NOISE_SAMPLES", NOISE_SAMPLE_COUNT, int, environ),
            start_factor=env_value("START_FACTOR", START_FACTOR, float, environ),
            min_start_velocity=env_value("MIN_START_VEL", MIN_START_VEL, float, environ),
            consec_frames=env_value("CONSEC_FRAMES", CONSEC_FRAMES, int, environ),
        )
