"""
Trial session owning the live trial state.
Feeds landmark frames through the pure state machine and announces phase changes.
"""

import logging
import random
import time
from typing import Callable, Optional, Sequence

from detection.detection_config import DetectionConfig
from game.event_manager import EventManager
from game.game_config import TrialTimingConfig
from game.result_recorder import ResultView
from game.trial_state import TrialPhase, TrialState, initial_state, reset_to_calm, update

logger = logging.getLogger(__name__)


class TrialSession:
    """
    Runs reflex trials one frame at a time.

    The session holds the only reference to the current TrialState. Each call to
    process_landmarks runs exactly one update to completion; readers get a
    ResultView snapshot afterwards.
    """

    def __init__(self, event_manager: Optional[EventManager] = None,
                 detection: Optional[DetectionConfig] = None,
                 timing: Optional[TrialTimingConfig] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        """Initialize the session in INIT.

        Args:
            event_manager: Optional event manager for phase change events
            detection: Speed estimation and onset parameters
            timing: Phase durations
            rng: Random source for the pre-cue delay (seed it for reproducible trials)
            clock: Monotonic clock returning seconds
        """
        self.event_manager = event_manager
        self.detection = detection or DetectionConfig()
        self.timing = timing or TrialTimingConfig()
        self.rng = rng or random.Random()
        self.clock = clock
        self.state: TrialState = initial_state()

    def process_landmarks(self, landmarks: Optional[Sequence], now: Optional[float] = None) -> ResultView:
        """
        Advance the trial with one frame of pose landmarks.

        Args:
            landmarks: Indexed pose landmarks, or None when no pose was detected
            now: Optional monotonic timestamp, reads the clock if None

        Returns:
            ResultView: Snapshot after the update
        """
        if now is None:
            now = self.clock()

        previous = self.state
        self.state = update(previous, landmarks, now, self.rng, self.detection, self.timing)

        if self.state.tag != previous.tag:
            self._on_phase_changed(previous.tag)

        return self.get_view()

    def restart(self) -> None:
        """Abandon the current trial and start calibrating again."""
        previous = self.state.tag
        self.state = reset_to_calm(self.state)
        logger.info("Trial restarted")
        if previous != TrialPhase.CALM:
            self._on_phase_changed(previous)

    def get_view(self) -> ResultView:
        return ResultView.from_state(self.state)

    def is_calibrating(self) -> bool:
        """Check if the noise floor is still being measured."""
        return self.state.tag in (TrialPhase.INIT, TrialPhase.CALM)

    def is_waiting(self) -> bool:
        return self.state.tag == TrialPhase.WAIT

    def is_signal(self) -> bool:
        """Check if the cue is showing and onset has not been confirmed yet."""
        return self.state.tag == TrialPhase.SIGNAL

    def is_moving(self) -> bool:
        return self.state.tag == TrialPhase.MOVING

    def has_result(self) -> bool:
        return self.state.tag == TrialPhase.RESULT

    def get_trial_count(self) -> int:
        """Get number of completed trials."""
        return self.state.trial_count

    def _on_phase_changed(self, previous: TrialPhase) -> None:
        view = self.get_view()
        logger.debug("Phase %s -> %s", previous.value, view.phase.value)

        if view.phase == TrialPhase.WAIT:
            logger.debug("Noise floor %.4f", view.noise_level)
        elif view.phase == TrialPhase.RESULT:
            logger.info("Trial %d: reaction %s, peak speed %s",
                        view.trial_count, view.format_reaction_time(), view.format_peak_speed())

        if not self.event_manager:
            return

        self.event_manager.trigger_event('phase_changed', previous, view.phase, view)
        if view.phase == TrialPhase.SIGNAL:
            self.event_manager.trigger_event('signal_shown', view)
        elif view.phase == TrialPhase.RESULT:
            self.event_manager.trigger_event('trial_completed', view)
