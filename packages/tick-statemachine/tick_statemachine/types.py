"""Shared type aliases, sentinels, protocols and errors for the state machine."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from tick_statemachine.machine import StateMachine

T = TypeVar("T")

Hook = Callable[[T], None]
Condition = Callable[[T], bool]


class _Previous(Enum):
    PREVIOUS = "previous"

    def __repr__(self) -> str:
        return "PREVIOUS"


PREVIOUS = _Previous.PREVIOUS
"""Transition target meaning "go back to the machine's previous state"."""


class StateMachineError(Exception):
    """Base class for errors raised by the state machine engine."""


class InvalidConfiguration(StateMachineError, ValueError):
    """Raised when a transition or machine is built from missing or bad parts."""


@runtime_checkable
class Stateful(Protocol[T]):
    """An owner that exposes the machine driving its behaviour."""

    @property
    def state_machine(self) -> StateMachine[T]: ...
