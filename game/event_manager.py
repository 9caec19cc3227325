import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class EventManager:
    """
    Hook registry connecting the trial session, landmark source and capture loop.

    Components register callbacks for named events ('setup', 'frame_received',
    'phase_changed', 'trial_completed', ...). Triggering an event runs every
    callback in priority order.
    """

    def __init__(self):
        self.hooks: Dict[str, List[Tuple[int, Callable]]] = defaultdict(list)

    def register_hook(self, event_name: str, callback: Callable, priority: int = 0) -> None:
        """
        Register a callback for an event.

        Args:
            event_name: Name of the event to listen for
            callback: Function to call when event is triggered
            priority: Execution priority (higher numbers run first)
        """
        self.hooks[event_name].append((priority, callback))
        # Stable sort keeps registration order within one priority
        self.hooks[event_name].sort(key=lambda x: x[0], reverse=True)

    def trigger_event(self, event_name: str, *args, **kwargs) -> List[Any]:
        """
        Run the callbacks registered for an event.

        A failing callback is logged and yields None; the remaining callbacks
        still run.

        Returns:
            List of return values, one per callback
        """
        results = []

        for _, callback in self.hooks.get(event_name, []):
            try:
                results.append(callback(*args, **kwargs))
            except Exception:
                logger.exception("Error in event callback for '%s'", event_name)
                results.append(None)

        return results
