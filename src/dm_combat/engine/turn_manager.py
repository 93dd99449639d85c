"""Initiative ordering and round/turn advancement.

Turn order is fixed when combat starts: initiative descending, ties kept in
the order the combatants were supplied. Advancing moves the cursor by one,
wrapping to the top of the order and starting a new round when it runs off
the end. The entity whose turn begins then gets its start-of-turn effects.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from dm_combat.core.constants import PERMANENT_DURATION
from dm_combat.core.exceptions import InvalidEncounterStateError
from dm_combat.core.logging import get_logger
from dm_combat.models.combat import Encounter, Entity


logger = get_logger(__name__)


@dataclass(frozen=True)
class InitiativeEntry:
    """An entry in the initiative order.

    Attributes:
        entity_id: ID of the combatant.
        initiative: Initiative roll.
        position: Position in the start_combat request, used for tie-breaking.
    """

    entity_id: str
    initiative: int
    position: int


@dataclass(frozen=True)
class TurnAdvance:
    """Where the cursor landed after an advancement."""

    entity_id: str
    turn_index: int
    round_number: int
    new_round: bool


def sort_initiative(entries: Iterable[InitiativeEntry]) -> list[InitiativeEntry]:
    """Sort entries by initiative (highest first, earlier position on ties)."""
    return sorted(entries, key=lambda e: (-e.initiative, e.position))


class InitiativeTracker:
    """Round/turn cursor over an encounter's fixed turn order."""

    def __init__(self, encounter: Encounter) -> None:
        self._encounter = encounter

    @property
    def current_round(self) -> int:
        return self._encounter.round_number

    @property
    def current_index(self) -> int:
        return self._encounter.turn_index

    def start(self, entities: Iterable[Entity]) -> list[str]:
        """Fix the turn order and put the cursor on round 1, index 0.

        Args:
            entities: Combatants in request order.

        Returns:
            The turn order as entity ids.
        """
        entries = [
            InitiativeEntry(entity_id=entity.id, initiative=entity.initiative, position=i)
            for i, entity in enumerate(entities)
        ]
        order = [entry.entity_id for entry in sort_initiative(entries)]

        self._encounter.turn_order = order
        self._encounter.turn_index = 0
        self._encounter.round_number = 1

        logger.debug("Initiative order fixed", turn_order=order)
        return order

    def advance(self) -> TurnAdvance:
        """Move the cursor to the next entity.

        Returns:
            The new cursor position.

        Raises:
            InvalidEncounterStateError: If the turn order is empty.
        """
        order = self._encounter.turn_order
        if not order:
            raise InvalidEncounterStateError(
                "Cannot advance turn: empty turn order",
                current_state="active",
            )

        next_index = self._encounter.turn_index + 1
        new_round = next_index >= len(order)
        if new_round:
            next_index = 0
            self._encounter.round_number += 1
            logger.info("New round started", round=self._encounter.round_number)
        self._encounter.turn_index = next_index

        return TurnAdvance(
            entity_id=order[next_index],
            turn_index=next_index,
            round_number=self._encounter.round_number,
            new_round=new_round,
        )


def begin_turn(entity: Entity) -> list[str]:
    """Apply start-of-turn effects to the entity whose turn just began.

    Legendary actions refill to their maximum, and every timed condition
    loses one turn; conditions reaching zero are removed. Permanent
    conditions are left alone.

    Args:
        entity: The entity now acting.

    Returns:
        Human-readable descriptions of the effects applied.
    """
    effects: list[str] = []

    if entity.is_monster and entity.max_legendary_actions > 0:
        entity.legendary_actions = entity.max_legendary_actions
        effects.append(f"Legendary actions reset to {entity.max_legendary_actions}")

    for condition, remaining in list(entity.conditions.items()):
        if remaining == PERMANENT_DURATION or remaining <= 0:
            continue
        remaining -= 1
        if remaining == 0:
            del entity.conditions[condition]
            effects.append(f"Condition '{condition}' ended")
        else:
            entity.conditions[condition] = remaining

    return effects


__all__ = [
    "InitiativeEntry",
    "TurnAdvance",
    "InitiativeTracker",
    "sort_initiative",
    "begin_turn",
]
