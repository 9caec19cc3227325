"""
Read-only view of the current trial for display.
"""

from dataclasses import dataclass
from typing import Optional

from game.game_config import PEAK_SPEED_DECIMALS, REACTION_TIME_DECIMALS
from game.trial_state import TrialPhase, TrialState


@dataclass(frozen=True)
class ResultView:
    """Snapshot of the phase and trial metrics taken after an update."""
    phase: TrialPhase
    reaction_time: Optional[float]
    peak_speed: float
    noise_level: Optional[float]
    trial_count: int

    @classmethod
    def from_state(cls, state: TrialState) -> "ResultView":
        trial = state.trial
        return cls(
            phase=state.tag,
            reaction_time=trial.reaction_time,
            peak_speed=trial.peak_speed,
            noise_level=trial.noise_level,
            trial_count=state.trial_count,
        )

    def format_reaction_time(self) -> str:
        if self.reaction_time is None:
            return "--"
        return f"{self.reaction_time:.{REACTION_TIME_DECIMALS}f} s"

    def format_peak_speed(self) -> str:
        return f"{self.peak_speed:.{PEAK_SPEED_DECIMALS}f}"
