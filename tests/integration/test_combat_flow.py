"""Integration tests for combat flow.

Tests complete encounters driven through the tool dispatcher, the way an
agent host would drive them.
"""

from __future__ import annotations

from typing import Any

import pytest

from dm_combat.engine.combat import CombatEngine
from dm_combat.engine.tools import ToolCall, ToolResult, execute_tool


def call(engine: CombatEngine, tool_name: str, **arguments: Any) -> ToolResult:
    result = execute_tool(engine, ToolCall(tool_name=tool_name, arguments=arguments))
    assert result.success, result.error
    return result


@pytest.fixture
def dragon_fight(engine: CombatEngine) -> CombatEngine:
    """A dragon against a fighter and a cleric, started through the tools."""
    call(
        engine,
        "start_combat",
        entities=[
            {"id": "fighter", "name": "Fighter", "initiative": 12, "hp": 44, "ac": 18},
            {
                "id": "dragon",
                "name": "Ancient Red Dragon",
                "initiative": 19,
                "hp": 546,
                "ac": 22,
                "is_monster": True,
                "monster_name": "Ancient Red Dragon",
            },
            {"id": "cleric", "name": "Cleric", "initiative": 12, "hp": 38, "ac": 16},
        ],
    )
    return engine


class TestCombatFlow:
    """Test complete combat scenarios."""

    def test_initiative_and_turn_order(self, dragon_fight: CombatEngine) -> None:
        """Dragon first, then the tied party members in request order."""
        view = dragon_fight.view()

        assert view.turn_order == ["dragon", "fighter", "cleric"]
        assert view.current_entity_id == "dragon"

    def test_full_round(self, dragon_fight: CombatEngine, d20: Any) -> None:
        """Play one full round and check every piece of state it touches."""
        # Dragon's breath: the fighter fails a DEX save and takes full damage
        d20.rolls = [6]
        save = call(dragon_fight, "make_saving_throw", entity_id="fighter", save_type="DEX", dc=24)
        assert save.result["success"] is False
        call(dragon_fight, "apply_damage", target_id="fighter", damage=26, damage_type="fire")

        # Fighter's turn: knocked prone for one turn by a wing attack
        turn = call(dragon_fight, "next_turn")
        assert turn.result["current_entity_id"] == "fighter"
        spent = call(
            dragon_fight,
            "use_legendary_action",
            monster_id="dragon",
            action_name="Wing Attack",
            cost=2,
        )
        assert spent.result["remaining_actions"] == 1
        call(dragon_fight, "add_condition", target_id="fighter", condition="prone", duration=1)

        # Cleric's turn: heal the fighter and spend a spell slot
        turn = call(dragon_fight, "next_turn")
        assert turn.result["current_entity_id"] == "cleric"
        heal = call(dragon_fight, "apply_healing", target_id="fighter", amount=40)
        assert heal.result["amount_healed"] == 26
        call(dragon_fight, "track_resource", entity_id="cleric", resource_name="spell_slots_3", current_value=1)

        # Cleric casts Hold Monster; the dragon burns a legendary resistance
        d20.rolls = [3]
        save = call(dragon_fight, "make_saving_throw", entity_id="dragon", save_type="WIS", dc=17)
        assert save.result["success"] is True
        assert save.result["used_legendary_resistance"] is True
        assert save.result["remaining_legendary_resists"] == 2

        # Round 2: dragon's pool refills
        turn = call(dragon_fight, "next_turn")
        assert turn.result["round_number"] == 2
        assert turn.result["effects"] == ["Legendary actions reset to 3"]

        # Fighter's prone expires at the start of its turn
        turn = call(dragon_fight, "next_turn")
        assert turn.result["effects"] == ["Condition 'prone' ended"]

        view = dragon_fight.view()
        assert view.entities["fighter"].current_hp == 44
        assert view.entities["fighter"].conditions == {}
        assert view.entities["cleric"].resources == {"spell_slots_3": 1}
        assert view.entities["dragon"].legendary_actions == 3
        assert view.entities["dragon"].legendary_resistances == 2

    def test_knockout_and_recovery(self, dragon_fight: CombatEngine) -> None:
        """Drop the cleric to 0 HP and bring them back."""
        down = call(dragon_fight, "apply_damage", target_id="cleric", damage=90, damage_type="fire")
        assert down.result["remaining_hp"] == 0
        assert down.result["is_unconscious"] is True

        status = call(dragon_fight, "next_turn").result["combat_status"]
        assert status["cleric"] == "Cleric: 0/38 HP"

        up = call(dragon_fight, "apply_healing", target_id="cleric", amount=5)
        assert up.result["current_hp"] == 5
        assert dragon_fight.view().entities["cleric"].is_unconscious is False

    def test_legendary_resistances_run_out(self, dragon_fight: CombatEngine, d20: Any) -> None:
        """The fourth failed save in a fight sticks."""
        d20.rolls = [1]
        results = [
            call(dragon_fight, "make_saving_throw", entity_id="dragon", save_type="CON", dc=30).result
            for _ in range(4)
        ]

        assert [r["used_legendary_resistance"] for r in results] == [True, True, True, False]
        assert results[-1]["success"] is False
        assert results[-1]["message"] == "Ancient Red Dragon rolled 1+3=4 vs DC 30: FAILURE"

    def test_failed_call_leaves_state_unchanged(self, dragon_fight: CombatEngine) -> None:
        """A refused request writes nothing."""
        before = dragon_fight.view()

        result = execute_tool(
            dragon_fight,
            ToolCall("apply_damage", {"target_id": "ghost", "damage": 10, "damage_type": "fire"}),
        )

        assert result.success is False
        assert dragon_fight.view() == before

    def test_restart_replaces_encounter(self, dragon_fight: CombatEngine) -> None:
        """Starting again discards the previous encounter."""
        call(dragon_fight, "next_turn")

        call(
            dragon_fight,
            "start_combat",
            entities=[{"id": "goblin", "name": "Goblin", "initiative": 14, "hp": 7, "ac": 15,
                       "is_monster": True, "monster_name": "Goblin"}],
        )

        view = dragon_fight.view()
        assert list(view.entities) == ["goblin"]
        assert view.entities["goblin"].max_legendary_actions == 0
        assert view.round_number == 1
