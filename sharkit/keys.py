"""Key-token to session-action mapping for the picker loop."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from .session import SelectionSession

# Shift+1..Shift+9 as delivered by a raw terminal on a US layout.
SHIFTED_DIGIT_KEYS: tuple[str, ...] = ("!", "@", "#", "$", "%", "^", "&", "*", "(")
SHIFTED_ZERO_KEY = ")"

CONFIRM_KEYS: tuple[str, ...] = ("ENTER",)
CANCEL_KEYS: tuple[str, ...] = ("ESC", "q", "CTRL_C")


class LoopState(enum.Enum):
    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not LoopState.RUNNING


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], LoopState | None]


class KeyComboRegistry:
    """Small key-dispatch table keyed by exact key token."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], LoopState | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> LoopState | None:
        """Invoke bound handler for ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


def _select_only(session: SelectionSession, ordinal: int) -> Callable[[], None]:
    def handler() -> None:
        session.select_only_index(ordinal)

    return handler


def build_key_registry(session: SelectionSession) -> KeyComboRegistry:
    """Bind every picker key to its session operation or loop transition."""
    registry = KeyComboRegistry().register_bindings(
        KeyComboBinding(("UP", "k"), session.move_up),
        KeyComboBinding(("DOWN", "j"), session.move_down),
        KeyComboBinding(("SPACE",), session.toggle_current),
        KeyComboBinding(("a", "A"), session.select_all),
        KeyComboBinding(("n",), session.select_none),
        KeyComboBinding(("p",), session.toggle_preview),
        KeyComboBinding(CONFIRM_KEYS, lambda: LoopState.CONFIRMED),
        KeyComboBinding(CANCEL_KEYS, lambda: LoopState.CANCELLED),
        KeyComboBinding((SHIFTED_ZERO_KEY,), session.select_last),
    )
    for ordinal, key in enumerate(SHIFTED_DIGIT_KEYS):
        registry.register_binding(KeyComboBinding((key,), _select_only(session, ordinal)))
    return registry


class KeyHandler:
    """Reusable key handler bound to one session."""

    def __init__(self, session: SelectionSession) -> None:
        self.session = session
        self.registry = build_key_registry(session)

    def handle(self, key: str) -> LoopState:
        """Apply ``key`` and return the resulting loop state.

        Unbound keys are no-ops and keep the loop running.
        """
        result = self.registry.dispatch(key)
        return result if isinstance(result, LoopState) else LoopState.RUNNING


def handle_key(session: SelectionSession, key: str) -> LoopState:
    """Handle one key against ``session`` and return the resulting loop state."""
    return KeyHandler(session).handle(key)
