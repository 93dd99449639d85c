"""Tests for initiative ordering and turn advancement."""

from __future__ import annotations

import itertools

import pytest

from dm_combat.core.exceptions import InvalidEncounterStateError
from dm_combat.engine.turn_manager import (
    InitiativeEntry,
    InitiativeTracker,
    begin_turn,
    sort_initiative,
)
from dm_combat.models.combat import Encounter, Entity


def make_entity(entity_id: str, initiative: int, **kwargs: object) -> Entity:
    return Entity(
        id=entity_id,
        name=entity_id.upper(),
        initiative=initiative,
        max_hp=10,
        current_hp=10,
        armor_class=12,
        **kwargs,
    )


def start(entities: list[Entity]) -> tuple[Encounter, InitiativeTracker]:
    encounter = Encounter(entities={e.id: e for e in entities})
    tracker = InitiativeTracker(encounter)
    tracker.start(entities)
    return encounter, tracker


class TestSortInitiative:
    """Tests for initiative ordering."""

    def test_highest_first(self) -> None:
        """Test entries sort by initiative descending."""
        entries = [
            InitiativeEntry("a", 5, 0),
            InitiativeEntry("b", 20, 1),
            InitiativeEntry("c", 12, 2),
        ]

        assert [e.entity_id for e in sort_initiative(entries)] == ["b", "c", "a"]

    def test_ties_keep_request_order(self) -> None:
        """Test ties are broken by position in the request."""
        entries = [
            InitiativeEntry("x", 10, 0),
            InitiativeEntry("y", 10, 1),
            InitiativeEntry("z", 10, 2),
        ]

        assert [e.entity_id for e in sort_initiative(entries)] == ["x", "y", "z"]

    def test_any_input_ordering_is_non_increasing(self) -> None:
        """Test every permutation yields a non-increasing initiative order."""
        initiatives = {"a": 3, "b": 17, "c": 9, "d": 17}
        for perm in itertools.permutations(initiatives):
            entries = [InitiativeEntry(eid, initiatives[eid], i) for i, eid in enumerate(perm)]
            ordered = [initiatives[e.entity_id] for e in sort_initiative(entries)]
            assert ordered == sorted(ordered, reverse=True)


class TestInitiativeTracker:
    """Tests for the round/turn cursor."""

    def test_start_resets_cursor(self) -> None:
        """Test start fixes order and puts cursor on round 1, index 0."""
        encounter, tracker = start([make_entity("a", 5), make_entity("b", 15)])

        assert encounter.turn_order == ["b", "a"]
        assert tracker.current_index == 0
        assert tracker.current_round == 1

    def test_advance_moves_cursor(self) -> None:
        """Test advancing moves to the next entity in the same round."""
        _, tracker = start([make_entity("a", 15), make_entity("b", 10)])

        advance = tracker.advance()

        assert advance.entity_id == "b"
        assert advance.turn_index == 1
        assert advance.round_number == 1
        assert advance.new_round is False

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_n_advances_start_round_two(self, count: int) -> None:
        """Test N advancements over N entities lands on round 2, index 0."""
        entities = [make_entity(f"e{i}", 20 - i) for i in range(count)]
        encounter, tracker = start(entities)

        for _ in range(count):
            advance = tracker.advance()

        assert advance.new_round is True
        assert encounter.round_number == 2
        assert encounter.turn_index == 0

    def test_advance_empty_order_raises(self) -> None:
        """Test advancing an empty turn order fails without changes."""
        encounter, tracker = start([])

        with pytest.raises(InvalidEncounterStateError):
            tracker.advance()

        assert encounter.round_number == 1
        assert encounter.turn_index == 0


class TestBeginTurn:
    """Tests for start-of-turn effects."""

    def test_legendary_actions_reset(self) -> None:
        """Test monsters with a legendary pool get it refilled."""
        monster = make_entity(
            "m", 10, is_monster=True, legendary_actions=0, max_legendary_actions=3
        )

        effects = begin_turn(monster)

        assert monster.legendary_actions == 3
        assert effects == ["Legendary actions reset to 3"]

    def test_no_reset_without_pool(self) -> None:
        """Test monsters without legendary actions get no reset effect."""
        monster = make_entity("m", 10, is_monster=True)

        assert begin_turn(monster) == []

    def test_condition_ticks_down(self) -> None:
        """Test timed conditions lose one turn."""
        entity = make_entity("a", 10, conditions={"prone": 3})

        effects = begin_turn(entity)

        assert entity.conditions == {"prone": 2}
        assert effects == []

    def test_condition_expires(self) -> None:
        """Test a condition reaching zero is removed with an effect line."""
        entity = make_entity("a", 10, conditions={"stunned": 1})

        effects = begin_turn(entity)

        assert "stunned" not in entity.conditions
        assert effects == ["Condition 'stunned' ended"]

    def test_permanent_condition_untouched(self) -> None:
        """Test -1 conditions are never decremented."""
        entity = make_entity("a", 10, conditions={"cursed": -1})

        for _ in range(10):
            begin_turn(entity)

        assert entity.conditions == {"cursed": -1}

    def test_reset_reported_before_expiry(self) -> None:
        """Test effect ordering: legendary reset first, then conditions."""
        monster = make_entity(
            "m",
            10,
            is_monster=True,
            max_legendary_actions=2,
            conditions={"frightened": 1},
        )

        assert begin_turn(monster) == [
            "Legendary actions reset to 2",
            "Condition 'frightened' ended",
        ]
