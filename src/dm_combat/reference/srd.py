"""Static SRD reference data: monster stat blocks and rule summaries.

Everything here is read-only. Stat blocks double as the source of the
default monster-template lookup used when combat starts.
"""

from __future__ import annotations

from dm_combat.core.constants import SAVE_TYPES
from dm_combat.core.exceptions import ReferenceNotFoundError
from dm_combat.models.monsters import (
    LairAction,
    LegendaryActionOption,
    LegendaryActionSet,
    MonsterAction,
    MonsterStatBlock,
    MonsterSummary,
    MonsterTrait,
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


# =============================================================================
# Monster Stat Blocks
# =============================================================================

ANCIENT_RED_DRAGON = MonsterStatBlock(
    name="Ancient Red Dragon",
    size="Gargantuan",
    type="dragon",
    alignment="chaotic evil",
    hp=546,
    ac=22,
    speed={"walk": 40, "climb": 40, "fly": 80},
    ability_scores={"STR": 30, "DEX": 10, "CON": 29, "INT": 18, "WIS": 15, "CHA": 23},
    saving_throws={"DEX": 7, "CON": 16, "WIS": 9, "CHA": 13},
    skills={"Perception": 16, "Stealth": 7},
    damage_immunities=("fire",),
    senses={"blindsight": 60, "darkvision": 120, "perception": 26},
    languages=("Common", "Draconic"),
    challenge_rating=24,
    traits=(
        MonsterTrait(
            name="Legendary Resistance",
            description=(
                "If the dragon fails a saving throw, it can choose to succeed "
                "instead (3/day)."
            ),
        ),
    ),
    actions=(
        MonsterAction(
            name="Multiattack",
            description=(
                "The dragon can use its Frightful Presence. It then makes three "
                "attacks: one with its bite and two with its claws."
            ),
        ),
        MonsterAction(
            name="Bite",
            attack_bonus=17,
            damage_type="piercing",
            damage_dice="2d10+10",
        ),
        MonsterAction(
            name="Fire Breath",
            description=(
                "The dragon exhales fire in a 90-foot cone. Each creature must "
                "make a DC 24 Dexterity saving throw, taking 91 (26d6) fire "
                "damage on a failed save, or half as much on a successful one."
            ),
            save_dc=24,
            save_type="DEX",
        ),
    ),
    legendary_actions=LegendaryActionSet(
        actions_per_round=3,
        options=(
            LegendaryActionOption(
                name="Detect",
                cost=1,
                description="The dragon makes a Wisdom (Perception) check.",
            ),
            LegendaryActionOption(
                name="Tail Attack",
                cost=1,
                description="The dragon makes a tail attack.",
            ),
            LegendaryActionOption(
                name="Wing Attack",
                cost=2,
                description=(
                    "The dragon beats its wings. Each creature within 15 feet "
                    "must succeed on a DC 25 Dexterity saving throw or take 17 "
                    "(2d6+10) bludgeoning damage and be knocked prone."
                ),
            ),
        ),
    ),
    legendary_resistances=3,
    lair_actions=(
        LairAction(
            description=(
                "Magma erupts from a point on the ground the dragon can see "
                "within 120 feet. Each creature within 20 feet must make a DC "
                "15 Dexterity saving throw or take 21 (6d6) fire damage."
            ),
            save_dc=15,
            save_type="DEX",
        ),
    ),
)

GOBLIN = MonsterStatBlock(
    name="Goblin",
    size="Small",
    type="humanoid",
    alignment="neutral evil",
    hp=7,
    ac=15,
    speed={"walk": 30},
    ability_scores={"STR": 8, "DEX": 14, "CON": 10, "INT": 10, "WIS": 8, "CHA": 8},
    skills={"Stealth": 6},
    senses={"darkvision": 60},
    languages=("Common", "Goblin"),
    challenge_rating=0.25,
    traits=(
        MonsterTrait(
            name="Nimble Escape",
            description=(
                "The goblin can take the Disengage or Hide action as a bonus "
                "action on each of its turns."
            ),
        ),
    ),
    actions=(
        MonsterAction(
            name="Scimitar",
            attack_bonus=4,
            damage_type="slashing",
            damage_dice="1d6+2",
        ),
    ),
)

STAT_BLOCKS: tuple[MonsterStatBlock, ...] = (ANCIENT_RED_DRAGON, GOBLIN)

_MONSTER_INDEX: tuple[tuple[str, float, str], ...] = (
    ("Ancient Red Dragon", 24, "dragon"),
    ("Goblin", 0.25, "humanoid"),
    ("Beholder", 13, "aberration"),
    ("Lich", 21, "undead"),
)


def _key(name: str) -> str:
    return name.strip().casefold()


_BLOCKS_BY_KEY = {_key(block.name): block for block in STAT_BLOCKS}


def get_stat_block(name: str) -> MonsterStatBlock:
    """Return the stat block for a monster name (case-insensitive).

    Raises:
        ReferenceNotFoundError: If no stat block exists for the name.
    """
    block = _BLOCKS_BY_KEY.get(_key(name))
    if block is None:
        raise ReferenceNotFoundError(f"No stat block for monster: {name}", key=name)
    return block


def list_monsters() -> list[MonsterSummary]:
    """Index of known monsters, noting which have a full stat block."""
    return [
        MonsterSummary(
            name=name,
            challenge_rating=cr,
            type=monster_type,
            has_stat_block=_key(name) in _BLOCKS_BY_KEY,
        )
        for name, cr, monster_type in _MONSTER_INDEX
    ]


# =============================================================================
# Rules
# =============================================================================


def damage_rules() -> DamageRules:
    return DamageRules(
        resistance_multiplier=0.5,
        vulnerability_multiplier=2.0,
        immunity_effect="no damage taken",
        critical_multiplier=2,
        condition_effects={
            "resistance": "Damage of specified type is halved",
            "vulnerability": "Damage of specified type is doubled",
            "immunity": "No damage of specified type is taken",
        },
    )


def condition_rules() -> list[ConditionDefinition]:
    return [
        ConditionDefinition(
            name="Stunned",
            description=(
                "A stunned creature is incapacitated, can't move, and can speak "
                "only falteringly."
            ),
            effects=(
                "Automatically fails Strength and Dexterity saving throws",
                "Attack rolls against the creature have advantage",
            ),
            end_condition="End of specified duration or until condition is removed",
        ),
        ConditionDefinition(
            name="Prone",
            description="A prone creature's only movement option is to crawl.",
            effects=(
                "Disadvantage on attack rolls",
                "Attack rolls against creature have advantage if attacker is within 5 feet",
                "Attack rolls against creature have disadvantage if attacker is more than 5 feet away",
            ),
            end_condition="Use half movement to stand up",
        ),
        ConditionDefinition(
            name="Paralyzed",
            description="A paralyzed creature is incapacitated and can't move or speak.",
            effects=(
                "Automatically fails Strength and Dexterity saving throws",
                "Attack rolls against the creature have advantage",
                "Any attack that hits is a critical hit if attacker is within 5 feet",
            ),
            end_condition="End of specified duration or until condition is removed",
        ),
        ConditionDefinition(
            name="Poisoned",
            description=(
                "A poisoned creature has disadvantage on attack rolls and ability checks."
            ),
            effects=(
                "Disadvantage on attack rolls",
                "Disadvantage on ability checks",
            ),
            end_condition="End of poison duration",
        ),
    ]


def saving_throw_rules() -> SavingThrowRules:
    return SavingThrowRules(
        types=SAVE_TYPES,
        critical_success="Natural 20 always succeeds",
        critical_failure="Natural 1 always fails",
        modifiers={
            "proficiency": "Add proficiency bonus if proficient in that save",
            "advantage": "Roll twice, take higher result",
            "disadvantage": "Roll twice, take lower result",
        },
    )


def legendary_rules() -> LegendaryRules:
    return LegendaryRules(
        legendary_actions=LegendaryActionRule(
            description="Special actions that can be taken outside the creature's turn",
            timing="At the end of another creature's turn",
            reset_timing="Start of the legendary creature's turn",
            default_per_round=3,
        ),
        legendary_resistances=LegendaryResistanceRule(
            description="Ability to automatically succeed on a failed saving throw",
            default_count=3,
            usage="Choose to succeed on a failed save",
            reset_timing="After a long rest or per encounter (DM discretion)",
        ),
        lair_actions=LairActionRule(
            description="Environmental effects that occur in the creature's lair",
            initiative=20,
            frequency="Once per round on initiative count 20",
        ),
    )


__all__ = [
    "ANCIENT_RED_DRAGON",
    "GOBLIN",
    "STAT_BLOCKS",
    "get_stat_block",
    "list_monsters",
    "damage_rules",
    "condition_rules",
    "saving_throw_rules",
    "legendary_rules",
]
