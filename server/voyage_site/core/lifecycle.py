"""Render lifecycle hooks."""

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class RenderScope:
    """
    Lifecycle of one rendered page or component.

    Callbacks registered with ``on_mounted`` run once, in registration order,
    when ``mount()`` is called. A callback registered after mounting runs
    immediately.
    """

    def __init__(self, name: str):
        self.name = name
        self.mounted = False
        self._on_mounted: list[Callable[[], None]] = []

    def on_mounted(self, callback: Callable[[], None]) -> None:
        if self.mounted:
            callback()
            return
        self._on_mounted.append(callback)

    def mount(self) -> None:
        if self.mounted:
            logger.warning(f"{self.name} scope is already mounted")
            return

        self.mounted = True
        callbacks, self._on_mounted = self._on_mounted, []
        for callback in callbacks:
            callback()
