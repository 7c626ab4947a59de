from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .parsing import parse_amount
from .tip_core import calculate_tip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormState:
    """Raw contents of the form, exactly as the user typed them."""

    bill_amount_text: str = ""
    tip_percent_text: str = ""
    round_up: bool = False


def derive_result(state: FormState, *, locale: Optional[str] = None) -> str:
    """Formatted tip for ``state``; unparseable fields count as zero."""
    return calculate_tip(
        parse_amount(state.bill_amount_text),
        parse_amount(state.tip_percent_text),
        state.round_up,
        locale=locale,
    )


Listener = Callable[[FormState, str], None]


class TipForm:
    """Holds the form inputs and the tip derived from them.

    Every setter swaps in a new ``FormState`` and recomputes the result
    before returning, then notifies subscribers in registration order.
    """

    def __init__(self, state: Optional[FormState] = None, *, locale: Optional[str] = None) -> None:
        self._locale = locale
        self._listeners: List[Listener] = []
        self._state = state or FormState()
        self._result = derive_result(self._state, locale=self._locale)

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_bill_amount_text(self, text: str) -> str:
        return self._update(replace(self._state, bill_amount_text=text))

    def set_tip_percent_text(self, text: str) -> str:
        return self._update(replace(self._state, tip_percent_text=text))

    def set_round_up(self, flag: bool) -> str:
        return self._update(replace(self._state, round_up=bool(flag)))

    def reset(self) -> str:
        return self._update(FormState())

    def current_result(self) -> str:
        return self._result

    def _update(self, state: FormState) -> str:
        self._state = state
        self._result = derive_result(state, locale=self._locale)
        logger.debug("Form updated: %s -> %s", state, self._result)
        for listener in list(self._listeners):
            listener(state, self._result)
        return self._result
