"""Request and result records for the combat tools.

Every tool takes one flat request record and returns one flat result
record. Field names follow the tool-call wire contract.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dm_combat.models.combat import EntityDefinition


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid")


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Requests
# =============================================================================


class StartCombatRequest(_Request):
    entities: list[EntityDefinition] = Field(
        default_factory=list,
        description="List of combatants with initiative",
    )


class NextTurnRequest(_Request):
    pass


class ApplyDamageRequest(_Request):
    target_id: str = Field(description="Entity receiving damage")
    damage: int = Field(description="Damage amount")
    damage_type: str = Field(description="Type of damage (fire, slashing, etc)")


class ApplyHealingRequest(_Request):
    target_id: str
    amount: int


class AddConditionRequest(_Request):
    target_id: str
    condition: str = Field(description="Condition name (stunned, prone, etc)")
    duration: int = Field(description="Turns remaining, -1 for permanent")


class SavingThrowRequest(_Request):
    entity_id: str
    save_type: str = Field(description="STR, DEX, CON, INT, WIS, CHA")
    dc: int = Field(description="Difficulty class")


class LegendaryActionRequest(_Request):
    monster_id: str
    action_name: str
    cost: int = Field(default=1, description="Number of legendary actions to spend")


class TrackResourceRequest(_Request):
    entity_id: str
    resource_name: str
    current_value: int


# =============================================================================
# Results
# =============================================================================


class StartCombatResult(_Result):
    turn_order: list[str]
    message: str


class NextTurnResult(_Result):
    current_entity_id: str
    current_entity_name: str
    round_number: int
    effects: list[str] = Field(default_factory=list)
    combat_status: dict[str, str] = Field(default_factory=dict)


class ApplyDamageResult(_Result):
    final_damage: int
    remaining_hp: int
    is_unconscious: bool
    message: str


class ApplyHealingResult(_Result):
    amount_healed: int
    current_hp: int
    message: str


class AddConditionResult(_Result):
    message: str


class SavingThrowResult(_Result):
    roll: int
    bonus: int
    total: int
    success: bool
    used_legendary_resistance: bool
    remaining_legendary_resists: int
    message: str


class LegendaryActionResult(_Result):
    """Outcome of spending legendary actions.

    ``success`` is False when the pool was too small; that is an expected
    outcome, not an error, and nothing was deducted.
    """

    success: bool
    remaining_actions: int
    message: str


class TrackResourceResult(_Result):
    message: str


__all__ = [
    "StartCombatRequest",
    "NextTurnRequest",
    "ApplyDamageRequest",
    "ApplyHealingRequest",
    "AddConditionRequest",
    "SavingThrowRequest",
    "LegendaryActionRequest",
    "TrackResourceRequest",
    "StartCombatResult",
    "NextTurnResult",
    "ApplyDamageResult",
    "ApplyHealingResult",
    "AddConditionResult",
    "SavingThrowResult",
    "LegendaryActionResult",
    "TrackResourceResult",
]
