"""
Landmark source that manages MediaPipe pose processing.
Handles its own MediaPipe lifecycle through event hooks.
"""

import cv2
import mediapipe as mp
from typing import Optional, List
from detection.detection_config import (
    MP_MIN_DETECTION_CONFIDENCE,
    MP_MIN_TRACKING_CONFIDENCE,
    MP_MODEL_COMPLEXITY,
    MP_SMOOTH_LANDMARKS
)
from game.event_manager import EventManager


class LandmarkSource:
    """
    Supplies one frame of body landmarks per camera frame.

    Runs MediaPipe Pose on each frame received through the event manager and
    keeps the latest landmark list for the trial session to consume.
    """

    def __init__(self, event_manager: EventManager):
        """
        Initialize landmark source.

        Args:
            event_manager: Event manager for registering hooks
        """
        self.event_manager = event_manager

        # MediaPipe components
        self.mp_pose = None
        self.mp_drawing = None
        self.pose = None

        self.latest_pose_results = None
        self.latest_landmarks: Optional[List] = None
        self.is_active = False

        self.register_hooks()

    def register_hooks(self) -> None:
        """Register event hooks for the landmark source."""
        self.event_manager.register_hook('setup', self.setup_mediapipe, priority=10)
        self.event_manager.register_hook('frame_received', self.process_frame, priority=10)
        self.event_manager.register_hook('draw_overlays', self.draw_landmarks, priority=10)
        self.event_manager.register_hook('cleanup', self.cleanup_mediapipe, priority=10)

    def setup_mediapipe(self) -> None:
        """Initialize MediaPipe pose detection components."""
        try:
            print("LandmarkSource: Initializing MediaPipe...")

            self.mp_pose = mp.solutions.pose
            self.mp_drawing = mp.solutions.drawing_utils
            self.pose = self.mp_pose.Pose(
                static_image_mode=False,
                model_complexity=MP_MODEL_COMPLEXITY,
                smooth_landmarks=MP_SMOOTH_LANDMARKS,
                enable_segmentation=False,
                min_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
                min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE
            )

            self.is_active = True
            print("LandmarkSource: MediaPipe initialized successfully")

        except Exception as e:
            print(f"LandmarkSource: Error during setup: {e}")
            self.is_active = False

    def cleanup_mediapipe(self) -> None:
        """Clean up MediaPipe resources."""
        if self.pose:
            self.pose.close()
            self.pose = None

        self.mp_pose = None
        self.mp_drawing = None
        self.is_active = False
        self.latest_pose_results = None
        self.latest_landmarks = None

        print("LandmarkSource: MediaPipe cleanup completed")

    def process_frame(self, frame) -> Optional[List]:
        """
        Process camera frame and extract pose landmarks.

        Args:
            frame: OpenCV camera frame (BGR format)

        Returns:
            Landmark list, or None when no pose was detected
        """
        if not self.is_active or not self.pose:
            return None

        # MediaPipe expects RGB
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        pose_results = self.pose.process(rgb_frame)
        self.latest_pose_results = pose_results

        if pose_results.pose_landmarks:
            self.latest_landmarks = pose_results.pose_landmarks.landmark
        else:
            self.latest_landmarks = None

        return self.latest_landmarks

    def draw_landmarks(self, frame) -> None:
        """
        Draw pose landmarks on the frame.

        Args:
            frame: OpenCV frame to draw on
        """
        if not self.is_active or not self.mp_drawing or not self.latest_pose_results:
            return

        if self.latest_pose_results.pose_landmarks:
            self.mp_drawing.draw_landmarks(
                frame,
                self.latest_pose_results.pose_landmarks,
                self.mp_pose.POSE_CONNECTIONS
            )

    def get_latest_landmarks(self) -> Optional[List]:
        """
        Get the most recent pose landmarks.

        Returns:
            Latest pose landmarks or None if no pose was detected in the last frame
        """
        return self.latest_landmarks
