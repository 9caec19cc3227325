"""
UI Manager module for drawing trial status and results.
Separates rendering from the main capture loop.
"""

import cv2
from game.game_config import *


class UIManager:
    """
    Draws the phase prompt, the "go" cue and the trial result on video frames.
    Reads the session after its update has returned, never during one.
    """

    def draw_trial_ui(self, image, session):
        """
        Draw the UI for the current phase on the provided image.

        Args:
            image: OpenCV image/frame to draw on
            session: TrialSession after the latest update

        Returns:
            None (modifies image in place)
        """
        height, width = image.shape[:2]
        view = session.get_view()

        if session.is_calibrating():
            self._draw_status(image, "Stay still... calibrating", STATUS_TEXT_COLOR)
        elif session.is_waiting():
            self._draw_status(image, "Get ready...", STATUS_TEXT_COLOR)
        elif session.is_signal():
            self._draw_signal(image, width, height)
        elif session.is_moving():
            self._draw_status(image, "Detecting punch...", MOVING_TEXT_COLOR)
        elif session.has_result():
            self._draw_result(image, view)

        self._draw_instructions(image, view, height)

    def _draw_status(self, image, text, color):
        cv2.putText(image, text, STATUS_TEXT_POSITION,
                    cv2.FONT_HERSHEY_SIMPLEX, 0.9, color, 2)

    def _draw_signal(self, image, width, height):
        """Draw the centered "go" cue."""
        text = "PUNCH!"
        text_size = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, 2, 4)[0]
        text_x = (width - text_size[0]) // 2
        text_y = (height + text_size[1]) // 2
        cv2.putText(image, text, (text_x, text_y),
                    cv2.FONT_HERSHEY_SIMPLEX, 2, SIGNAL_TEXT_COLOR, 4)

    def _draw_result(self, image, view):
        """Draw reaction time and peak speed."""
        lines = [
            f"Reaction time: {view.format_reaction_time()}",
            f"Peak speed: {view.format_peak_speed()}",
        ]
        x, y = RESULT_TEXT_POSITION
        for i, line in enumerate(lines):
            cv2.putText(image, line, (x, y + i * RESULT_LINE_SPACING),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.9, RESULT_TEXT_COLOR, 2)

    def _draw_instructions(self, image, view, height):
        text = f"Trials: {view.trial_count}   R: restart   Q: quit"
        cv2.putText(image, text, (20, height - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, INSTRUCTION_COLOR, 1)
