"""Pydantic V2 schemas for the combat assistant.

Submodules:
    combat: Entity, Encounter and the read-only EncounterView.
    operations: Request and result records for each tool.
    monsters: Monster stat blocks and legendary capability defaults.
    rules: SRD rule summaries (damage, conditions, saves, legendary).
"""

from __future__ import annotations

from dm_combat.models.combat import (
    Condition,
    Encounter,
    EncounterSnapshot,
    EncounterView,
    Entity,
    EntityDefinition,
    TurnPreview,
)
from dm_combat.models.monsters import (
    NO_LEGENDARY_CAPABILITY,
    LairAction,
    LegendaryActionOption,
    LegendaryActionSet,
    LegendaryDefaults,
    MonsterAction,
    MonsterStatBlock,
    MonsterSummary,
    MonsterTrait,
)
from dm_combat.models.operations import (
    AddConditionRequest,
    AddConditionResult,
    ApplyDamageRequest,
    ApplyDamageResult,
    ApplyHealingRequest,
    ApplyHealingResult,
    LegendaryActionRequest,
    LegendaryActionResult,
    NextTurnRequest,
    NextTurnResult,
    SavingThrowRequest,
    SavingThrowResult,
    StartCombatRequest,
    StartCombatResult,
    TrackResourceRequest,
    TrackResourceResult,
)
from dm_combat.models.rules import (
    ConditionDefinition,
    DamageRules,
    LairActionRule,
    LegendaryActionRule,
    LegendaryResistanceRule,
    LegendaryRules,
    SavingThrowRules,
)


__all__ = [
    # Encounter
    "Condition",
    "EntityDefinition",
    "Entity",
    "TurnPreview",
    "EncounterSnapshot",
    "Encounter",
    "EncounterView",
    # Monsters
    "MonsterTrait",
    "MonsterAction",
    "LegendaryActionOption",
    "LegendaryActionSet",
    "LairAction",
    "MonsterStatBlock",
    "MonsterSummary",
    "LegendaryDefaults",
    "NO_LEGENDARY_CAPABILITY",
    # Requests
    "StartCombatRequest",
    "NextTurnRequest",
    "ApplyDamageRequest",
    "ApplyHealingRequest",
    "AddConditionRequest",
    "SavingThrowRequest",
    "LegendaryActionRequest",
    "TrackResourceRequest",
    # Results
    "StartCombatResult",
    "NextTurnResult",
    "ApplyDamageResult",
    "ApplyHealingResult",
    "AddConditionResult",
    "SavingThrowResult",
    "LegendaryActionResult",
    "TrackResourceResult",
    # Rules
    "DamageRules",
    "ConditionDefinition",
    "SavingThrowRules",
    "LegendaryActionRule",
    "LegendaryResistanceRule",
    "LairActionRule",
    "LegendaryRules",
]
