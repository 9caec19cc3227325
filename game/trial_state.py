"""
Reflex trial state machine.

A trial walks through INIT -> CALM -> WAIT -> SIGNAL -> MOVING -> RESULT and
loops back to CALM. All state is immutable: `update` and `step` return a new
TrialState for every frame, so the machine can be driven without a camera.
"""

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Optional, Sequence, Tuple, Union

from detection.detection_config import DetectionConfig
from detection.noise_calibrator import add_noise_sample
from detection.pose.motion_estimator import MotionState, estimate_wrist_speed, has_wrists
from game.game_config import TrialTimingConfig


class TrialPhase(Enum):
    """Trial phases"""
    INIT = "init"
    CALM = "calm"
    WAIT = "wait"
    SIGNAL = "signal"
    MOVING = "moving"
    RESULT = "result"


@dataclass(frozen=True)
class InitPhase:
    """Before the first frame; moves to CALM on the first update."""
    tag: ClassVar[TrialPhase] = TrialPhase.INIT


@dataclass(frozen=True)
class CalmPhase:
    """Collecting idle speed samples for the noise floor."""
    tag: ClassVar[TrialPhase] = TrialPhase.CALM
    samples: Tuple[float, ...] = ()


@dataclass(frozen=True)
class WaitPhase:
    """Random delay before the cue."""
    tag: ClassVar[TrialPhase] = TrialPhase.WAIT
    wait_start: float
    delay: float


@dataclass(frozen=True)
class SignalPhase:
    """Cue shown, waiting for a confirmed movement onset."""
    tag: ClassVar[TrialPhase] = TrialPhase.SIGNAL
    signal_time: float
    onset_counter: int = 0


@dataclass(frozen=True)
class MovingPhase:
    """Onset confirmed, tracking peak speed for the moving window."""
    tag: ClassVar[TrialPhase] = TrialPhase.MOVING
    onset_time: float


@dataclass(frozen=True)
class ResultPhase:
    """Measurements final, shown until the display time runs out."""
    tag: ClassVar[TrialPhase] = TrialPhase.RESULT
    onset_time: float


PhaseState = Union[InitPhase, CalmPhase, WaitPhase, SignalPhase, MovingPhase, ResultPhase]


@dataclass(frozen=True)
class Trial:
    """Measurements of the current trial. Times are monotonic seconds."""
    signal_time: Optional[float] = None
    onset_time: Optional[float] = None
    reaction_time: Optional[float] = None
    peak_speed: float = 0.0
    noise_level: Optional[float] = None


@dataclass(frozen=True)
class TrialState:
    phase: PhaseState = field(default_factory=InitPhase)
    trial: Trial = field(default_factory=Trial)
    motion: MotionState = field(default_factory=MotionState)
    trial_count: int = 0  # Completed trials

    @property
    def tag(self) -> TrialPhase:
        return self.phase.tag


DEFAULT_DETECTION = DetectionConfig()
DEFAULT_TIMING = TrialTimingConfig()


def initial_state() -> TrialState:
    """State before the first frame: INIT with an empty noise buffer."""
    return TrialState()


def draw_wait_delay(rng: random.Random, timing: TrialTimingConfig) -> float:
    """Random delay in [wait_delay_min, wait_delay_max) seconds."""
    return timing.wait_delay_min + rng.random() * (timing.wait_delay_max - timing.wait_delay_min)


def reset_to_calm(state: TrialState) -> TrialState:
    """Start a new trial: fresh record, empty noise buffer, no smoothing history."""
    return TrialState(
        phase=CalmPhase(),
        trial=Trial(),
        motion=MotionState(),
        trial_count=state.trial_count,
    )


def update(state: TrialState, landmarks: Optional[Sequence], now: float, rng: random.Random,
           detection: DetectionConfig = DEFAULT_DETECTION,
           timing: TrialTimingConfig = DEFAULT_TIMING) -> TrialState:
    """
    Advance the trial by one landmark frame.

    Args:
        state: Current trial state
        landmarks: Indexed pose landmarks, or None when no body was detected
        now: Monotonic timestamp of the frame in seconds
        rng: Random source for the pre-cue delay
        detection: Speed estimation and onset parameters
        timing: Phase durations

    Returns:
        TrialState: The new state; the same object if the frame had no wrists
    """
    if not has_wrists(landmarks, detection):
        return state

    speed, motion = estimate_wrist_speed(state.motion, landmarks, now, detection)
    return step(replace(state, motion=motion), speed, now, rng, detection, timing)


def step(state: TrialState, speed: float, now: float, rng: random.Random,
         detection: DetectionConfig = DEFAULT_DETECTION,
         timing: TrialTimingConfig = DEFAULT_TIMING) -> TrialState:
    """
    Advance the trial with an already estimated max-of-wrists speed.

    Returns:
        TrialState: The new state
    """
    if isinstance(state.phase, InitPhase):
        # No exit condition, the frame is the first calibration sample
        state = replace(state, phase=CalmPhase(), trial=Trial())

    phase = state.phase

    if isinstance(phase, CalmPhase):
        return _step_calm(state, phase, speed, now, rng, detection, timing)
    if isinstance(phase, WaitPhase):
        return _step_wait(state, phase, now)
    if isinstance(phase, SignalPhase):
        return _step_signal(state, phase, speed, now, detection)
    if isinstance(phase, MovingPhase):
        return _step_moving(state, phase, speed, now, timing)
    if isinstance(phase, ResultPhase):
        return _step_result(state, phase, now, timing)
    raise TypeError(f"Unknown trial phase: {phase!r}")


def _step_calm(state, phase, speed, now, rng, detection, timing):
    samples, noise_level = add_noise_sample(phase.samples, speed, detection.noise_sample_count)
    if noise_level is None:
        return replace(state, phase=CalmPhase(samples))

    return replace(
        state,
        phase=WaitPhase(wait_start=now, delay=draw_wait_delay(rng, timing)),
        trial=replace(state.trial, noise_level=noise_level),
    )


def _step_wait(state, phase, now):
    if now - phase.wait_start < phase.delay:
        return state

    return replace(
        state,
        phase=SignalPhase(signal_time=now),
        trial=replace(state.trial, signal_time=now),
    )


def _step_signal(state, phase, speed, now, detection):
    threshold = detection.onset_threshold(state.trial.noise_level)
    counter = phase.onset_counter + 1 if speed > threshold else 0

    if counter < detection.consec_frames:
        return replace(state, phase=replace(phase, onset_counter=counter))

    return replace(
        state,
        phase=MovingPhase(onset_time=now),
        trial=replace(
            state.trial,
            onset_time=now,
            reaction_time=now - phase.signal_time,
            peak_speed=0.0,
        ),
    )


def _step_moving(state, phase, speed, now, timing):
    trial = state.trial
    if speed > trial.peak_speed:
        trial = replace(trial, peak_speed=speed)

    if now - phase.onset_time > timing.moving_window:
        return replace(
            state,
            phase=ResultPhase(onset_time=phase.onset_time),
            trial=trial,
            trial_count=state.trial_count + 1,
        )
    return replace(state, trial=trial)


def _step_result(state, phase, now, timing):
    if now - phase.onset_time > timing.result_display_time:
        return reset_to_calm(state)
    return state
