"""
Unit tests for detection/pose/motion_estimator.py

Synthetic wrist positions only, no camera or MediaPipe required.
"""

from types import SimpleNamespace

import pytest

from detection.detection_config import DetectionConfig
from detection.pose.motion_estimator import (
    LandmarkPoint,
    MotionState,
    distance,
    estimate,
    estimate_wrist_speed,
    has_wrists,
    to_point,
)

ORIGIN = LandmarkPoint(0.0, 0.0, 0.0)


class TestEstimate:

    def test_no_previous_sample_gives_zero(self):
        current = LandmarkPoint(0.5, 0.5, 0.0)
        speed, new_prev = estimate(current, None, 3.0, 0.033, alpha=0.5)
        assert speed == 0.0
        assert new_prev is current

    @pytest.mark.parametrize("dt", [0.0, -0.01])
    def test_non_positive_dt_gives_zero(self, dt):
        current = LandmarkPoint(0.9, 0.9, 0.0)
        speed, new_prev = estimate(current, ORIGIN, 3.0, dt, alpha=0.5)
        assert speed == 0.0
        assert new_prev is current

    def test_raw_speed_without_smoothing(self):
        current = LandmarkPoint(0.3, 0.4, 0.0)
        speed, _ = estimate(current, ORIGIN, 0.0, 0.1, alpha=1.0)
        assert speed == pytest.approx(5.0)

    def test_distance_includes_depth(self):
        assert distance(LandmarkPoint(0.1, 0.2, 0.2), ORIGIN) == pytest.approx(0.3)

    def test_exponential_smoothing(self):
        current = LandmarkPoint(0.2, 0.0, 0.0)
        speed, _ = estimate(current, ORIGIN, 1.0, 0.1, alpha=0.5)
        # raw = 2.0 -> 0.5 * 2.0 + 0.5 * 1.0
        assert speed == pytest.approx(1.5)

    def test_dead_zone_suppresses_jitter(self):
        current = LandmarkPoint(0.01, 0.0, 0.0)
        speed, new_prev = estimate(current, ORIGIN, 2.0, 0.033, alpha=0.5, min_displacement=0.015)
        assert speed == 0.0
        assert new_prev is current

    def test_dead_zone_disabled(self):
        current = LandmarkPoint(0.01, 0.0, 0.0)
        speed, _ = estimate(current, ORIGIN, 0.0, 0.1, alpha=1.0, min_displacement=0.0)
        assert speed == pytest.approx(0.1)


class TestWristSpeed:

    def test_first_frame_reports_zero_and_stores_positions(self, frame_factory):
        config = DetectionConfig()
        speed, motion = estimate_wrist_speed(MotionState(), frame_factory(), 10.0, config)
        assert speed == 0.0
        assert motion.prev_left == LandmarkPoint(0.4, 0.5, 0.0)
        assert motion.prev_right == LandmarkPoint(0.6, 0.5, 0.0)
        assert motion.last_timestamp == 10.0

    def test_uses_faster_wrist(self, frame_factory):
        config = DetectionConfig(smoothing_alpha=0.5, min_move_dist=0.015)
        _, motion = estimate_wrist_speed(MotionState(), frame_factory(), 10.0, config)

        moved = frame_factory(right=(0.7, 0.5, 0.0))
        speed, motion = estimate_wrist_speed(motion, moved, 10.1, config)

        # right: 0.1 / 0.1 s = 1.0 raw -> 0.5 smoothed; left did not move
        assert speed == pytest.approx(0.5)
        assert motion.smooth_right == pytest.approx(0.5)
        assert motion.smooth_left == 0.0

    def test_each_wrist_smoothed_independently(self, frame_factory):
        config = DetectionConfig(smoothing_alpha=0.5, min_move_dist=0.0)
        _, motion = estimate_wrist_speed(MotionState(), frame_factory(), 0.0, config)
        _, motion = estimate_wrist_speed(motion, frame_factory(left=(0.5, 0.5, 0.0)), 0.1, config)
        speed, motion = estimate_wrist_speed(motion, frame_factory(left=(0.5, 0.5, 0.0)), 0.2, config)

        # left decays 0.5 -> 0.25 while right stays at rest
        assert motion.smooth_left == pytest.approx(0.25)
        assert motion.smooth_right == 0.0
        assert speed == pytest.approx(0.25)

    def test_duplicate_timestamp_gives_zero(self, frame_factory):
        config = DetectionConfig()
        _, motion = estimate_wrist_speed(MotionState(), frame_factory(), 5.0, config)
        speed, _ = estimate_wrist_speed(motion, frame_factory(right=(0.9, 0.1, 0.0)), 5.0, config)
        assert speed == 0.0


class TestHelpers:

    def test_to_point_without_depth(self):
        point = to_point(SimpleNamespace(x=0.25, y=0.75))
        assert point == LandmarkPoint(0.25, 0.75, 0.0)

    def test_has_wrists(self, frame_factory):
        config = DetectionConfig()
        assert has_wrists(frame_factory(), config)
        assert not has_wrists(None, config)
        assert not has_wrists(frame_factory()[:16], config)
