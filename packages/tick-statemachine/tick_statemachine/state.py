"""State - a behaviour unit with optional enter/update/exit hooks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from tick_statemachine.types import Hook, T


@dataclass(frozen=True, eq=False)
class State(Generic[T]):
    """One discrete behavioural mode of an owner.

    States compare and hash by identity: two states are the same state only
    if they are the same object. Build them once (usually as module-level
    constants) and share them between any number of machines.

    ``name`` is only used for ``repr`` and log output.
    """

    on_enter: Hook[T] | None = None
    on_update: Hook[T] | None = None
    on_exit: Hook[T] | None = None
    name: str = ""

    @classmethod
    def build(
        cls,
        on_enter: Hook[T] | None = None,
        on_update: Hook[T] | None = None,
        on_exit: Hook[T] | None = None,
        name: str = "",
    ) -> State[T]:
        """Create a state from up to three hooks. Missing hooks are no-ops."""
        return cls(on_enter=on_enter, on_update=on_update, on_exit=on_exit, name=name)

    def enter(self, owner: T) -> None:
        if self.on_enter is not None:
            self.on_enter(owner)

    def update(self, owner: T) -> None:
        if self.on_update is not None:
            self.on_update(owner)

    def exit(self, owner: T) -> None:
        if self.on_exit is not None:
            self.on_exit(owner)

    def __repr__(self) -> str:
        if self.name:
            return f"State({self.name!r})"
        return f"State(<anonymous {id(self):#x}>)"
