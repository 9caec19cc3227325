from game.result_recorder import ResultView
from game.trial_state import ResultPhase, SignalPhase, Trial, TrialPhase, TrialState


def test_view_reflects_trial_record():
    state = TrialState(
        phase=ResultPhase(onset_time=12.0),
        trial=Trial(signal_time=11.7, onset_time=12.0, reaction_time=0.3004,
                    peak_speed=1.23456, noise_level=0.012),
        trial_count=2,
    )
    view = ResultView.from_state(state)

    assert view.phase == TrialPhase.RESULT
    assert view.reaction_time == 0.3004
    assert view.noise_level == 0.012
    assert view.trial_count == 2
    assert view.format_reaction_time() == "0.300 s"
    assert view.format_peak_speed() == "1.235"


def test_view_before_onset():
    state = TrialState(phase=SignalPhase(signal_time=3.0), trial=Trial(signal_time=3.0, noise_level=0.01))
    view = ResultView.from_state(state)

    assert view.phase == TrialPhase.SIGNAL
    assert view.reaction_time is None
    assert view.format_reaction_time() == "--"
    assert view.format_peak_speed() == "0.000"
