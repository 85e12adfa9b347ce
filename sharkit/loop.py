"""Main interactive event loop for the picker.

Each iteration renders one frame, blocks for exactly one key, and applies at
most one session mutation. The loop ends on confirm or cancel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .keys import KeyHandler, LoopState
from .session import DisplaySnapshot, SelectionSession

logger = logging.getLogger(__name__)


def run_picker_loop(
    session: SelectionSession,
    *,
    read_key: Callable[[], str],
    render: Callable[[DisplaySnapshot], None],
) -> LoopState:
    """Drive ``session`` from key input until a terminal state is reached.

    ``read_key`` returning ``""`` means input reached EOF and cancels.
    """
    handler = KeyHandler(session)
    state = LoopState.RUNNING
    while not state.is_terminal:
        render(session.snapshot())
        key = read_key()
        if not key:
            logger.debug("input closed; cancelling")
            state = LoopState.CANCELLED
            break
        state = handler.handle(key)
    logger.info("picker finished: %s with %d selected", state.value, session.selected_count())
    return state
