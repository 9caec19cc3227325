import logging

from game.event_manager import EventManager


def test_callbacks_run_by_priority():
    events = EventManager()
    order = []
    events.register_hook('frame_received', lambda: order.append('low'), priority=0)
    events.register_hook('frame_received', lambda: order.append('high'), priority=10)
    events.register_hook('frame_received', lambda: order.append('low2'), priority=0)

    events.trigger_event('frame_received')

    assert order == ['high', 'low', 'low2']


def test_failing_callback_does_not_stop_others(caplog):
    events = EventManager()

    def broken(view):
        raise RuntimeError("boom")

    events.register_hook('trial_completed', broken, priority=5)
    events.register_hook('trial_completed', lambda view: view * 2)

    with caplog.at_level(logging.ERROR):
        results = events.trigger_event('trial_completed', 21)

    assert results == [None, 42]
    assert "trial_completed" in caplog.text


def test_unknown_event_has_no_results():
    events = EventManager()
    assert events.trigger_event('cleanup') == []
