"""
Wrist speed estimation from consecutive pose landmark frames.

Speeds are measured in normalized image coordinates per second and smoothed
with a first-order exponential filter, one filter per wrist.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from detection.detection_config import DetectionConfig


@dataclass(frozen=True)
class LandmarkPoint:
    """Normalized image-plane position plus relative depth of one body point."""
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class MotionState:
    """Smoothing history for both tracked wrists."""
    prev_left: Optional[LandmarkPoint] = None
    prev_right: Optional[LandmarkPoint] = None
    smooth_left: float = 0.0
    smooth_right: float = 0.0
    last_timestamp: Optional[float] = None


def to_point(landmark) -> LandmarkPoint:
    """Copy the coordinates of a MediaPipe landmark (or any x/y/z object)."""
    if isinstance(landmark, LandmarkPoint):
        return landmark
    return LandmarkPoint(float(landmark.x), float(landmark.y), float(getattr(landmark, 'z', 0.0)))


def distance(a, b) -> float:
    """Euclidean distance between two landmarks in 3-D normalized space."""
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def estimate(current, previous, previous_smoothed: float, dt: float,
             alpha: float, min_displacement: float = 0.0) -> Tuple[float, object]:
    """
    Estimate the smoothed speed of one tracked point.

    Args:
        current: Landmark position in this frame
        previous: Landmark position in the previous frame, or None
        previous_smoothed: Smoothed speed returned for the previous frame
        dt: Seconds elapsed since the previous frame
        alpha: Smoothing factor in (0, 1]
        min_displacement: Dead zone; shorter displacements count as no motion

    Returns:
        tuple: (smoothed_speed, new_previous) where new_previous is always current
    """
    if previous is None or dt <= 0:
        return 0.0, current

    d = distance(current, previous)

    # Landmark jitter
    if d < min_displacement:
        return 0.0, current

    raw = d / dt
    smoothed = alpha * raw + (1 - alpha) * previous_smoothed
    return smoothed, current


def has_wrists(landmarks: Optional[Sequence], config: DetectionConfig) -> bool:
    """Check that a frame contains both wrist landmarks."""
    return landmarks is not None and len(landmarks) >= config.required_landmarks


def estimate_wrist_speed(motion: MotionState, landmarks: Sequence, now: float,
                         config: DetectionConfig) -> Tuple[float, MotionState]:
    """
    Update both wrist filters with a new frame.

    Args:
        motion: Smoothing history from the previous frame
        landmarks: Indexed pose landmarks containing both wrists
        now: Monotonic timestamp of this frame in seconds
        config: Detection parameters

    Returns:
        tuple: (max of left and right smoothed speed, new MotionState)
    """
    dt = now - motion.last_timestamp if motion.last_timestamp is not None else 0.0

    left = to_point(landmarks[config.left_wrist_index])
    right = to_point(landmarks[config.right_wrist_index])

    speed_left, prev_left = estimate(left, motion.prev_left, motion.smooth_left, dt,
                                     config.smoothing_alpha, config.min_move_dist)
    speed_right, prev_right = estimate(right, motion.prev_right, motion.smooth_right, dt,
                                       config.smoothing_alpha, config.min_move_dist)

    new_motion = MotionState(
        prev_left=prev_left,
        prev_right=prev_right,
        smooth_left=speed_left,
        smooth_right=speed_right,
        last_timestamp=now,
    )
    return max(speed_left, speed_right), new_motion
