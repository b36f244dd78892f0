"""Event scheduling on a simpy environment."""

from __future__ import annotations

from typing import Any, Callable, Generator, Optional, Tuple

import simpy

from .device import NO_CONTEXT


class SimpyScheduler:
    """Schedule callbacks after a delay, tagged with the target node's id.

    Each scheduled callback runs in its own simpy process. While it runs,
    :attr:`context` holds the node id it was scheduled for.

    Attributes:
        env: simulation environment created by simpy (time in seconds)
        context: node id of the event currently being executed
    """

    def __init__(self, env: Optional[simpy.Environment] = None) -> None:
        self.env = env if env is not None else simpy.Environment()
        self.context = NO_CONTEXT

    @property
    def now(self) -> float:
        return float(self.env.now)

    def schedule_with_context(
        self, node_id: int, delay: float, callback: Callable[..., Any], *args: Any
    ) -> None:
        """Run ``callback(*args)`` *delay* seconds from now in *node_id*'s context."""
        if delay < 0:
            raise ValueError(f"Cannot schedule into the past (delay={delay})")
        self.env.process(self._fire(node_id, delay, callback, args))

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> None:
        self.schedule_with_context(NO_CONTEXT, delay, callback, *args)

    def _fire(
        self, node_id: int, delay: float, callback: Callable[..., Any], args: Tuple[Any, ...]
    ) -> Generator[simpy.Event, Any, None]:
        yield self.env.timeout(delay)
        previous = self.context
        self.context = node_id
        try:
            callback(*args)
        finally:
            self.context = previous
