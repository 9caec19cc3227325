import argparse
import logging
import random

import cv2
from dotenv import load_dotenv

# Load environment variables before the config modules read their overrides
load_dotenv()

from detection.detection_config import DetectionConfig
from game.game_config import *
from detection.pose.landmark_source import LandmarkSource
from game.trial_session import TrialSession
from game.ui_manager import UIManager
from game.event_manager import EventManager


class ReflexTrainer:
    def __init__(self, camera_index=CAMERA_INDEX, seed=None, mirror=True):
        # Event system
        self.event_manager = EventManager()

        # Camera setup
        self.cap = None
        self.camera_index = camera_index
        self.mirror = mirror

        # Trial state
        self.session = TrialSession(
            self.event_manager,
            detection=DetectionConfig.from_env(),
            timing=TrialTimingConfig(),
            rng=random.Random(seed),
        )

        # UI Manager
        self.ui_manager = UIManager()

        # Pose landmarks (MediaPipe)
        self.landmark_source = LandmarkSource(self.event_manager)

        self.event_manager.register_hook('signal_shown', self._on_signal_shown)
        self.event_manager.register_hook('trial_completed', self._on_trial_completed)

    def _on_signal_shown(self, view):
        print("GO!")

    def _on_trial_completed(self, view):
        print(f"Trial {view.trial_count}: reaction time {view.format_reaction_time()}, "
              f"peak speed {view.format_peak_speed()}")

    def run(self):
        """Main capture loop: one landmark frame, one trial update"""
        print("Starting Reflex Trainer...")

        self.event_manager.trigger_event('setup')

        self.cap = cv2.VideoCapture(self.camera_index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAMERA_WIDTH)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAMERA_HEIGHT)

        if not self.cap.isOpened():
            print("Error: Could not open camera")
            self.event_manager.trigger_event('cleanup')
            return

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    print("Error: Could not read frame")
                    break

                if self.mirror:
                    frame = cv2.flip(frame, 1)

                # LandmarkSource runs MediaPipe on the frame
                self.event_manager.trigger_event('frame_received', frame)

                # Frames without a pose leave the trial untouched
                self.session.process_landmarks(self.landmark_source.get_latest_landmarks())

                self.event_manager.trigger_event('draw_overlays', frame)
                self.ui_manager.draw_trial_ui(frame, self.session)

                cv2.imshow(WINDOW_NAME, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                elif key == ord('r'):
                    self.session.restart()
                    print("Trial restarted")

        except KeyboardInterrupt:
            print("\nInterrupted by user")

        finally:
            self.event_manager.trigger_event('cleanup')
            if self.cap:
                self.cap.release()
                self.cap = None
            cv2.destroyAllWindows()
            print(f"\nCompleted trials: {self.session.get_trial_count()}")


def main():
    parser = argparse.ArgumentParser(
        description="Measure punch reaction time and peak wrist speed from a webcam"
    )
    parser.add_argument(
        "--camera",
        type=int,
        default=CAMERA_INDEX,
        help="Camera device index (default: %(default)s)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random pre-cue delay"
    )
    parser.add_argument(
        "--no-mirror",
        action="store_true",
        help="Do not flip the camera image horizontally"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: %(default)s)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    trainer = ReflexTrainer(camera_index=args.camera, seed=args.seed, mirror=not args.no_mirror)
    trainer.run()


if __name__ == "__main__":
    main()
