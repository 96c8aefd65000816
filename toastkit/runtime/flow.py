"""Declarative state-transition tables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FlowTransition[TState]:
    """One allowed move from ``source`` to ``target`` on ``trigger``."""

    trigger: str
    source: TState
    target: TState


class FlowProgram[TState]:
    """Reusable transition table resolving the next state for a trigger."""

    def __init__(self, transitions: tuple[FlowTransition[TState], ...]) -> None:
        self._transitions = transitions
        self._index: dict[tuple[str, TState], TState] = {}
        for transition in transitions:
            key = (transition.trigger, transition.source)
            if key in self._index:
                raise ValueError(f"duplicate transition for {transition.trigger!r} from {transition.source!r}")
            self._index[key] = transition.target

    @property
    def transitions(self) -> tuple[FlowTransition[TState], ...]:
        return self._transitions

    def resolve(self, current_state: TState, trigger: str) -> TState | None:
        """Return the target state, or None if ``trigger`` is not allowed here."""
        return self._index.get((trigger, current_state))

    def triggers_from(self, current_state: TState) -> tuple[str, ...]:
        return tuple(t.trigger for t in self._transitions if t.source == current_state)
