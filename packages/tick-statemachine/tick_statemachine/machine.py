"""StateMachine - binds states and transitions to one owner and ticks it."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable

from tick_statemachine.state import State
from tick_statemachine.transition import Transition
from tick_statemachine.types import PREVIOUS, InvalidConfiguration, T

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[T, State[T], State[T]], None]


class StateMachine(Generic[T]):
    """Finite state machine driven by an external tick.

    Transitions are checked in registration order and the first one that
    matches wins. Each ``update()`` call performs at most one state change
    and then runs the current state's update hook.

    ``on_transition`` is called with ``(owner, old_state, new_state)`` after
    every real state change, once the new state has been entered.

    Not safe for concurrent ``update()`` calls; run one machine per owner.
    """

    def __init__(
        self,
        owner: T,
        initial_state: State[T],
        on_transition: TransitionCallback[T] | None = None,
    ) -> None:
        if not isinstance(initial_state, State):
            raise InvalidConfiguration(
                f"StateMachine requires an initial State, got {initial_state!r}"
            )
        self._owner = owner
        self._current_state: State[T] = initial_state
        self._previous_state: State[T] | None = None
        self._transitions: list[Transition[T]] = []
        self._on_transition = on_transition
        initial_state.enter(owner)

    @property
    def owner(self) -> T:
        return self._owner

    @property
    def current_state(self) -> State[T]:
        return self._current_state

    @property
    def previous_state(self) -> State[T] | None:
        """State active before the last change. None until the first change."""
        return self._previous_state

    @property
    def transitions(self) -> tuple[Transition[T], ...]:
        """Registered transitions in priority order."""
        return tuple(self._transitions)

    # --- Registration ---

    def add_transition(self, transition: Transition[T]) -> StateMachine[T]:
        """Append a transition with the lowest priority so far."""
        if not isinstance(transition, Transition):
            raise InvalidConfiguration(f"Expected a Transition, got {transition!r}")
        self._transitions.append(transition)
        logger.debug("added %r", transition)
        return self

    def add_transitions(
        self, *transitions: Transition[T] | Iterable[Transition[T]]
    ) -> StateMachine[T]:
        """Append several transitions, keeping their order.

        Accepts either transitions as positional arguments or one iterable.
        """
        if len(transitions) == 1 and not isinstance(transitions[0], Transition):
            try:
                transitions = tuple(transitions[0])
            except TypeError:
                raise InvalidConfiguration(
                    f"Expected a Transition or an iterable of Transitions, got {transitions[0]!r}"
                ) from None
        for transition in transitions:
            self.add_transition(transition)
        return self

    def remove_transition(self, transition: Transition[T]) -> None:
        """Remove the first registered transition equal to ``transition``.

        Does nothing if no such transition is registered.
        """
        for index, registered in enumerate(self._transitions):
            if registered == transition:
                del self._transitions[index]
                logger.debug("removed %r", registered)
                return

    def remove_transitions(self, transitions: Iterable[Transition[T]]) -> None:
        for transition in transitions:
            self.remove_transition(transition)

    # --- Evaluation ---

    def update(self) -> None:
        """Run one tick: pick a transition, change state if needed, update.

        Exceptions from conditions and hooks propagate to the caller. A
        failing condition leaves the machine unchanged.
        """
        current = self._current_state
        target = self._select_target(current)
        if target is not None and target is not current:
            self._change_state(current, target)
        self._current_state.update(self._owner)

    def is_current_state(self, state: State[T]) -> bool:
        return self._current_state is state

    def _select_target(self, current: State[T]) -> State[T] | None:
        # Scan a copy: hooks and conditions may register or remove transitions.
        for transition in tuple(self._transitions):
            if not transition.matches(current, self._owner):
                continue
            if transition.target is PREVIOUS:
                if self._previous_state is None:
                    logger.debug("%r: no previous state to return to", current)
                return self._previous_state
            return transition.target
        return None

    def _change_state(self, old: State[T], new: State[T]) -> None:
        old.exit(self._owner)
        self._previous_state = old
        self._current_state = new
        logger.debug("%r -> %r", old, new)
        new.enter(self._owner)
        if self._on_transition is not None:
            self._on_transition(self._owner, old, new)

    def __repr__(self) -> str:
        return (
            f"StateMachine(owner={self._owner!r}, current={self._current_state!r}, "
            f"previous={self._previous_state!r}, transitions={len(self._transitions)})"
        )
