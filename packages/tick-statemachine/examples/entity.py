"""Entity -- an NPC that walks up to a target and talks to it.

Demonstrates:
- Module-level states shared by every entity
- Plain functions and unbound methods as hooks and conditions
- A catch-all "any except" transition listed first
- Ticking the machine once per host cycle

Run: python -m examples.entity
"""
from __future__ import annotations

import logging

from tick_statemachine import State, StateMachine, transition_from, transition_from_any

ARRIVAL_DISTANCE = 0.01
WALK_SPEED = 2.0
PHRASES = 10


class Entity:
    """Host object. The machine only ever hands it to hooks and conditions."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.target: Entity | None = None
        self.distance_to_target = 0.0
        self.phrases_left = 0
        self.state_machine = make_state_machine(self)

    def set_target(self, target: Entity | None) -> None:
        self.target = target
        if target is not None:
            self.distance_to_target = self.distance_to(target)

    def distance_to(self, other: Entity) -> float:
        return 15.0  # no positions in this example

    def move(self, distance: float) -> None:
        self.distance_to_target -= distance

    def update(self) -> None:
        self.state_machine.update()

    # --- Conditions ---

    def has_target(self) -> bool:
        return self.target is not None

    def has_no_target(self) -> bool:
        return self.target is None

    def is_target_in_range(self) -> bool:
        return self.distance_to_target <= ARRIVAL_DISTANCE

    def done_talking(self) -> bool:
        return self.phrases_left == 0

    def __repr__(self) -> str:
        return f"Entity({self.name!r})"


def _look_for_target(entity: Entity) -> None:
    pass


def _walk(entity: Entity) -> None:
    entity.move(WALK_SPEED)


def _start_talking(entity: Entity) -> None:
    entity.phrases_left = PHRASES


def _talk(entity: Entity) -> None:
    entity.phrases_left -= 1


IDLE: State[Entity] = State.build(on_update=_look_for_target, name="idle")
WALK: State[Entity] = State.build(on_update=_walk, name="walk")
TALK: State[Entity] = State.build(on_enter=_start_talking, on_update=_talk, name="talk")


def make_state_machine(entity: Entity) -> StateMachine[Entity]:
    return StateMachine(entity, IDLE).add_transitions(
        transition_from_any().except_(IDLE, TALK).to(IDLE).when(Entity.has_no_target),
        transition_from(IDLE).to(WALK).when(Entity.has_target),
        transition_from(WALK).to(TALK).when(Entity.is_target_in_range),
        transition_from(TALK).to(IDLE).when(Entity.done_talking),
    )


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    print("=== Entity ===\n")

    alice = Entity("alice")
    bob = Entity("bob")

    for tick in range(1, 4):
        alice.update()
        print(f"  tick {tick:2}  |  {alice.state_machine.current_state.name}")

    # Talk to bob once, then wander off mid-walk on the second approach.
    alice.set_target(bob)
    talked = False
    for tick in range(4, 27):
        alice.update()
        sm = alice.state_machine
        print(
            f"  tick {tick:2}  |  {sm.current_state.name:<5}"
            f"  distance={alice.distance_to_target:5.1f}  phrases={alice.phrases_left}"
        )
        if sm.is_current_state(TALK):
            talked = True
        elif talked and sm.is_current_state(WALK):
            alice.set_target(None)

    print(f"\nDone. {alice} is {alice.state_machine.current_state.name}.")


if __name__ == "__main__":
    main()
