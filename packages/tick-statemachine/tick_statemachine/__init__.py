"""tick-statemachine - Owner-driven finite state machines ticked by the host."""
from __future__ import annotations

import logging

from tick_statemachine.builder import (
    AnySourceConfig,
    SourceConfig,
    TargetConfig,
    transition_from,
    transition_from_any,
)
from tick_statemachine.machine import StateMachine
from tick_statemachine.state import State
from tick_statemachine.transition import Transition
from tick_statemachine.types import (
    PREVIOUS,
    InvalidConfiguration,
    StateMachineError,
    Stateful,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "PREVIOUS",
    "AnySourceConfig",
    "InvalidConfiguration",
    "SourceConfig",
    "State",
    "StateMachine",
    "StateMachineError",
    "Stateful",
    "TargetConfig",
    "Transition",
    "transition_from",
    "transition_from_any",
]
