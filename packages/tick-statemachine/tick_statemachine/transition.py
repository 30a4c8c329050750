"""Transition - an immutable rule for leaving the current state."""
from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable

from tick_statemachine.state import State
from tick_statemachine.types import PREVIOUS, Condition, InvalidConfiguration, T, _Previous


@dataclass(frozen=True, eq=False)
class Transition(Generic[T]):
    """A guarded move from a set of source states to a target.

    The source filter is either an explicit set (``sources``) or, when
    ``sources`` is None, "any state except ``exceptions``". An empty
    exception set matches every state. ``target`` is a State or PREVIOUS.

    Two transitions are equal when they share the same condition object
    (or bound methods of the same object and function), the same target
    and equal source/exception sets, regardless of order or duplicates in
    the iterables they were built from.
    """

    condition: Condition[T]
    target: State[T] | _Previous
    sources: frozenset[State[T]] | None = None
    exceptions: frozenset[State[T]] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.condition is None:
            raise InvalidConfiguration("Transition requires a condition")
        if not callable(self.condition):
            raise InvalidConfiguration(
                f"Transition condition must be callable, got {self.condition!r}"
            )
        if self.target is None:
            raise InvalidConfiguration("Transition requires a target state or PREVIOUS")
        if not isinstance(self.target, (State, _Previous)):
            raise InvalidConfiguration(
                f"Transition target must be a State or PREVIOUS, got {self.target!r}"
            )
        exceptions = _state_set(self.exceptions or (), "exceptions")
        object.__setattr__(self, "exceptions", exceptions)
        if self.sources is not None:
            if exceptions:
                raise InvalidConfiguration(
                    "Transition cannot have both source states and exception states"
                )
            object.__setattr__(self, "sources", _state_set(self.sources, "sources"))

    # --- Constructors ---

    @classmethod
    def from_state(
        cls, state: State[T], target: State[T] | _Previous, condition: Condition[T]
    ) -> Transition[T]:
        """Transition from a single state."""
        if state is None:
            raise InvalidConfiguration("from_state requires a source state")
        return cls(condition=condition, target=target, sources=(state,))

    @classmethod
    def from_states(
        cls,
        states: Iterable[State[T]],
        target: State[T] | _Previous,
        condition: Condition[T],
    ) -> Transition[T]:
        """Transition from any of several states. At least one is required."""
        if states is None:
            raise InvalidConfiguration("from_states requires source states")
        sources = tuple(states)
        if not sources:
            raise InvalidConfiguration("At least one source state must be defined")
        return cls(condition=condition, target=target, sources=sources)

    @classmethod
    def from_any(
        cls, target: State[T] | _Previous, condition: Condition[T]
    ) -> Transition[T]:
        """Transition that can fire from every state."""
        return cls(condition=condition, target=target)

    @classmethod
    def from_any_except(
        cls,
        exceptions: Iterable[State[T]],
        target: State[T] | _Previous,
        condition: Condition[T],
    ) -> Transition[T]:
        """Transition that can fire from every state not in ``exceptions``."""
        if exceptions is None:
            raise InvalidConfiguration("from_any_except requires exception states")
        return cls(condition=condition, target=target, exceptions=tuple(exceptions))

    # --- Matching ---

    @property
    def returns_to_previous(self) -> bool:
        return self.target is PREVIOUS

    def applies_to(self, state: State[T]) -> bool:
        """Check the source filter only. Never calls the condition."""
        if self.sources is not None:
            return state in self.sources
        return state not in self.exceptions

    def matches(self, current_state: State[T], owner: T) -> bool:
        """True if the filter admits ``current_state`` and the condition holds.

        The condition is not evaluated when the filter rejects the state.
        """
        if not self.applies_to(current_state):
            return False
        return bool(self.condition(owner))

    # --- Value equality ---

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Transition):
            return NotImplemented
        return (
            _same_callable(self.condition, other.condition)
            and self.target is other.target
            and self.sources == other.sources
            and self.exceptions == other.exceptions
        )

    def __hash__(self) -> int:
        return hash(
            (_callable_key(self.condition), id(self.target), self.sources, self.exceptions)
        )

    def __repr__(self) -> str:
        if self.sources is not None:
            origin = f"from {sorted(map(repr, self.sources))}"
        elif self.exceptions:
            origin = f"from any except {sorted(map(repr, self.exceptions))}"
        else:
            origin = "from any"
        name = getattr(self.condition, "__qualname__", repr(self.condition))
        return f"Transition({origin} to {self.target!r} when {name})"


def _state_set(states: Iterable[State[Any]], what: str) -> frozenset[State[Any]]:
    states = tuple(states)
    for state in states:
        if not isinstance(state, State):
            raise InvalidConfiguration(f"Transition {what} must be States, got {state!r}")
    return frozenset(states)


def _same_callable(a: Any, b: Any) -> bool:
    # Bound methods are created on each attribute access; compare what they wrap.
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return a is b


def _callable_key(fn: Any) -> tuple[int, int]:
    if inspect.ismethod(fn):
        return (id(fn.__self__), id(fn.__func__))
    return (id(fn), 0)
