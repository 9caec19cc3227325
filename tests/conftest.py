import random
import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_str = str(repo_root)
    if repo_str not in sys.path:
        sys.path.insert(0, repo_str)


_ensure_repo_root_on_path()

from detection.pose.motion_estimator import LandmarkPoint  # noqa: E402

NUM_POSE_LANDMARKS = 33
LEFT_WRIST = 15
RIGHT_WRIST = 16


def make_frame(left=(0.4, 0.5, 0.0), right=(0.6, 0.5, 0.0)):
    """33 MediaPipe-style landmarks with the wrists at the given positions."""
    frame = [LandmarkPoint(0.5, 0.5, 0.0) for _ in range(NUM_POSE_LANDMARKS)]
    frame[LEFT_WRIST] = LandmarkPoint(*left)
    frame[RIGHT_WRIST] = LandmarkPoint(*right)
    return frame


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


@pytest.fixture
def frame_factory():
    return make_frame


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()
