"""Integration test: an NPC that walks to its target and talks to it."""
from tick_statemachine import State, StateMachine, transition_from, transition_from_any


class Entity:
    """Host owner with domain predicates and actions."""

    def __init__(self):
        self.target = None
        self.distance_to_target = 0.0
        self.phrases_left = 0
        self.looked = 0
        self.entered = []
        self.exited = []

    def set_target(self, target):
        self.target = target
        if target is not None:
            self.distance_to_target = 15.0

    def has_target(self):
        return self.target is not None

    def has_no_target(self):
        return self.target is None

    def is_target_in_range(self):
        return self.distance_to_target <= 0.01

    def done_talking(self):
        return self.phrases_left == 0


def _look(e):
    e.looked += 1


def _walk(e):
    e.distance_to_target -= 2


def _start_talking(e):
    e.entered.append("talk")
    e.phrases_left = 10


def _talk(e):
    e.phrases_left -= 1


IDLE = State.build(on_update=_look, on_exit=lambda e: e.exited.append("idle"), name="idle")
WALK = State.build(on_enter=lambda e: e.entered.append("walk"), on_update=_walk, name="walk")
TALK = State.build(on_enter=_start_talking, on_update=_talk, name="talk")


def make_machine(entity):
    return StateMachine(entity, IDLE).add_transitions(
        transition_from_any().except_(IDLE, TALK).to(IDLE).when(Entity.has_no_target),
        transition_from(IDLE).to(WALK).when(Entity.has_target),
        transition_from(WALK).to(TALK).when(Entity.is_target_in_range),
        transition_from(TALK).to(IDLE).when(Entity.done_talking),
    )


class TestEntityScenario:
    """Idle -> Walk -> Talk -> Idle, plus the catch-all back to Idle."""

    def test_idle_without_target(self):
        entity = Entity()
        sm = make_machine(entity)

        for _ in range(3):
            sm.update()

        assert sm.is_current_state(IDLE)
        assert entity.looked == 3
        assert entity.exited == []
        assert sm.previous_state is None

    def test_full_conversation(self):
        # Arrange
        entity = Entity()
        sm = make_machine(entity)
        sm.update()
        entity.set_target(object())

        # Act & Assert - first tick with a target starts walking and moves
        sm.update()
        assert sm.is_current_state(WALK)
        assert entity.exited == ["idle"]
        assert entity.entered == ["walk"]
        assert entity.distance_to_target == 13.0

        for _ in range(7):
            sm.update()
        assert sm.is_current_state(WALK)
        assert entity.distance_to_target <= 0.01

        # In range: talk starts with 10 phrases and speaks one the same tick
        sm.update()
        assert sm.is_current_state(TALK)
        assert sm.previous_state is WALK
        assert entity.phrases_left == 9

        for _ in range(9):
            sm.update()
        assert sm.is_current_state(TALK)
        assert entity.phrases_left == 0

        sm.update()
        assert sm.is_current_state(IDLE)
        assert sm.previous_state is TALK

    def test_target_lost_while_walking(self):
        entity = Entity()
        sm = make_machine(entity)
        entity.set_target(object())
        sm.update()
        sm.update()
        assert sm.is_current_state(WALK)

        entity.set_target(None)
        sm.update()

        assert sm.is_current_state(IDLE)
        assert sm.previous_state is WALK

    def test_target_lost_while_talking_keeps_talking(self):
        entity = Entity()
        sm = make_machine(entity)
        entity.set_target(object())
        for _ in range(9):
            sm.update()
        assert sm.is_current_state(TALK)

        entity.set_target(None)
        sm.update()

        assert sm.is_current_state(TALK)
        assert entity.phrases_left == 8

    def test_states_shared_between_owners(self):
        busy, lazy = Entity(), Entity()
        busy_sm, lazy_sm = make_machine(busy), make_machine(lazy)
        busy.set_target(object())

        for _ in range(3):
            busy_sm.update()
            lazy_sm.update()

        assert busy_sm.is_current_state(WALK)
        assert lazy_sm.is_current_state(IDLE)
        assert busy.distance_to_target == 9.0
        assert lazy.looked == 3
