from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from .hit_test import CategoryClick


LOGGER = logging.getLogger(__name__)

DEFAULT_ACTION_DELAY_S = 0.1


class _Timer(Protocol):
    daemon: bool

    def start(self) -> None:
        ...


class HostClickBridge:
    """Turns a category click into host side effects.

    The variable is set immediately; the action fires once after a short fixed
    delay so the host can propagate the variable first. Host failures are not
    caught and nothing is retried.
    """

    def __init__(
        self,
        *,
        set_variable: Callable[[str, str], None] | None = None,
        variable_name: str | None = None,
        trigger_action: Callable[[], None] | None = None,
        action_delay_s: float = DEFAULT_ACTION_DELAY_S,
        timer_factory: Callable[[float, Callable[[], None]], _Timer] = threading.Timer,
    ) -> None:
        if action_delay_s < 0:
            raise ValueError("action_delay_s must be >= 0")
        self._set_variable = set_variable
        self._variable_name = variable_name
        self._trigger_action = trigger_action
        self._action_delay_s = action_delay_s
        self._timer_factory = timer_factory

    def __call__(self, click: CategoryClick) -> None:
        if self._variable_name and self._set_variable is not None:
            self._set_variable(self._variable_name, click.category)
        if self._trigger_action is not None:
            timer = self._timer_factory(self._action_delay_s, self._trigger_action)
            timer.daemon = True
            timer.start()
            LOGGER.debug("scheduled click action for %r in %.3fs", click.category, self._action_delay_s)
