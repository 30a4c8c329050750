"""Fluent transition builder.

Reads left to right like the rule it produces::

    transition_from(IDLE).to(WALK).when(Entity.has_target)
    transition_from_any().except_(IDLE, TALK).to(IDLE).when(Entity.has_no_target)
    transition_from(TALK).to_previous().when(Entity.interrupted)

Every step returns a new immutable config object, so a partial chain can be
kept and finished several times with different targets or conditions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from tick_statemachine.state import State
from tick_statemachine.transition import Transition
from tick_statemachine.types import PREVIOUS, Condition, InvalidConfiguration, T, _Previous


def _require_states(states: tuple[State[T], ...], message: str) -> tuple[State[T], ...]:
    if not states or any(state is None for state in states):
        raise InvalidConfiguration(message)
    return states


@dataclass(frozen=True)
class _Origin(Generic[T]):
    sources: tuple[State[T], ...] | None = None
    exceptions: tuple[State[T], ...] = ()

    def to(self, state: State[T]) -> TargetConfig[T]:
        """Fire into ``state`` when the transition triggers."""
        if state is None:
            raise InvalidConfiguration("Transition must define a target state")
        return TargetConfig(self.sources, self.exceptions, state)

    def to_previous(self) -> TargetConfig[T]:
        """Fire back into whatever state the machine was in before."""
        return TargetConfig(self.sources, self.exceptions, PREVIOUS)


@dataclass(frozen=True)
class SourceConfig(_Origin[T]):
    """Transition origin restricted to an explicit set of states."""

    def transition_from(self, *states: State[T]) -> SourceConfig[T]:
        """Add more states the transition may start from."""
        _require_states(states, "At least one origin state required")
        return SourceConfig(sources=(self.sources or ()) + states)


@dataclass(frozen=True)
class AnySourceConfig(_Origin[T]):
    """Transition origin covering every state but the listed exceptions."""

    def except_(self, *states: State[T]) -> AnySourceConfig[T]:
        """Add states the transition must not start from."""
        _require_states(states, "At least one exceptional state required")
        return AnySourceConfig(exceptions=self.exceptions + states)


@dataclass(frozen=True)
class TargetConfig(Generic[T]):
    """Origin and target chosen; only the condition is missing."""

    sources: tuple[State[T], ...] | None
    exceptions: tuple[State[T], ...]
    target: State[T] | _Previous

    def when(self, condition: Condition[T]) -> Transition[T]:
        """Finish the chain with the condition that triggers the transition."""
        if condition is None:
            raise InvalidConfiguration("A condition must be configured")
        return Transition(
            condition=condition,
            target=self.target,
            sources=self.sources,
            exceptions=self.exceptions,
        )


def transition_from(*states: State[T]) -> SourceConfig[T]:
    """Start a transition that fires only from the given states."""
    _require_states(states, "At least an origin state must be defined")
    return SourceConfig(sources=states)


def transition_from_any() -> AnySourceConfig[T]:
    """Start a transition that may fire from any state."""
    return AnySourceConfig()
