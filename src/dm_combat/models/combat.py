"""Pydantic V2 schemas for the live encounter.

This module defines the combatant record, the definitions used to create it,
and the encounter that owns combatants, turn order and the round/turn
cursor. ``EncounterView`` is the frozen snapshot handed to read-only
collaborators.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from dm_combat.core.constants import PERMANENT_DURATION
from dm_combat.core.exceptions import EntityNotFoundError, InvalidEncounterStateError


class Condition(StrEnum):
    """D&D 5E conditions.

    Conditions on an entity are free text; this enum backs the strict
    condition catalog for callers that want to restrict names.
    """

    BLINDED = "blinded"
    CHARMED = "charmed"
    DEAFENED = "deafened"
    EXHAUSTION = "exhaustion"
    FRIGHTENED = "frightened"
    GRAPPLED = "grappled"
    INCAPACITATED = "incapacitated"
    INVISIBLE = "invisible"
    PARALYZED = "paralyzed"
    PETRIFIED = "petrified"
    POISONED = "poisoned"
    PRONE = "prone"
    RESTRAINED = "restrained"
    STUNNED = "stunned"
    UNCONSCIOUS = "unconscious"


class EntityDefinition(BaseModel):
    """One combatant as supplied to start_combat.

    Attributes:
        id: Caller-chosen unique identifier.
        name: Display name.
        initiative: Initiative roll.
        hp: Maximum hit points; the entity starts at full health.
        ac: Armor class.
        is_monster: Whether the entity is a monster.
        monster_name: Template name used to seed legendary capability.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1, description="Unique identifier")
    name: str = Field(description="Display name")
    initiative: int = Field(description="Initiative roll")
    hp: Annotated[int, Field(ge=0, description="Max hit points")]
    ac: int = Field(description="Armor class")
    is_monster: bool = Field(default=False, description="Whether this is a monster")
    monster_name: str | None = Field(
        default=None,
        description="Monster type name for loading stats",
    )


class Entity(BaseModel):
    """A combatant in the live encounter.

    Attributes:
        id: Unique identifier within the encounter.
        name: Display name.
        initiative: Initiative roll used for turn order.
        max_hp: Maximum hit points.
        current_hp: Current hit points, always within [0, max_hp].
        armor_class: Armor class.
        conditions: Condition name -> turns remaining (-1 = permanent).
        resources: Resource name -> current count.
        is_monster: Whether this is a monster.
        monster_name: Template name the monster was created from.
        legendary_actions: Legendary actions remaining this round.
        max_legendary_actions: Legendary actions restored each turn.
        legendary_resistances: Legendary resistances remaining.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    id: str
    name: str
    initiative: int
    max_hp: Annotated[int, Field(ge=0)]
    current_hp: Annotated[int, Field(ge=0)]
    armor_class: int
    conditions: dict[str, int] = Field(default_factory=dict)
    resources: dict[str, int] = Field(default_factory=dict)
    is_monster: bool = False
    monster_name: str | None = None
    legendary_actions: Annotated[int, Field(ge=0)] = 0
    max_legendary_actions: Annotated[int, Field(ge=0)] = 0
    legendary_resistances: Annotated[int, Field(ge=0)] = 0

    @model_validator(mode="after")
    def check_hp_bounds(self) -> "Entity":
        if self.current_hp > self.max_hp:
            raise ValueError(
                f"current_hp ({self.current_hp}) exceeds max_hp ({self.max_hp})"
            )
        return self

    @classmethod
    def from_definition(cls, definition: EntityDefinition) -> "Entity":
        """Create a full-health entity with no conditions or resources."""
        return cls(
            id=definition.id,
            name=definition.name,
            initiative=definition.initiative,
            max_hp=definition.hp,
            current_hp=definition.hp,
            armor_class=definition.ac,
            is_monster=definition.is_monster,
            monster_name=definition.monster_name,
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_unconscious(self) -> bool:
        """True when the entity is at exactly 0 HP."""
        return self.current_hp == 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hp_fraction(self) -> float:
        """Current HP as a fraction of max HP (0.0 for a 0 max HP entity)."""
        if self.max_hp <= 0:
            return 0.0
        return self.current_hp / self.max_hp

    def has_condition(self, condition: str) -> bool:
        return condition in self.conditions

    def is_permanent(self, condition: str) -> bool:
        return self.conditions.get(condition) == PERMANENT_DURATION

    def status_line(self) -> str:
        """Render "name: current/max HP [conditions]"."""
        line = f"{self.name}: {self.current_hp}/{self.max_hp} HP"
        if self.conditions:
            line += f" [{', '.join(self.conditions)}]"
        return line


class TurnPreview(BaseModel):
    """Who acts after the next turn advancement, without advancing."""

    model_config = ConfigDict(frozen=True)

    entity_id: str
    entity_name: str
    turn_index: int
    round_number: int
    starts_new_round: bool


class EncounterSnapshot(BaseModel):
    """Fields and read helpers shared by the live encounter and its views."""

    entities: dict[str, Entity] = Field(default_factory=dict)
    turn_order: list[str] = Field(default_factory=list)
    turn_index: Annotated[int, Field(ge=0)] = 0
    round_number: Annotated[int, Field(ge=1)] = 1

    @property
    def is_empty(self) -> bool:
        return not self.turn_order

    @property
    def current_entity_id(self) -> str | None:
        """Id at the turn cursor, or None for an empty turn order."""
        if not self.turn_order:
            return None
        return self.turn_order[self.turn_index]

    @property
    def current_entity(self) -> Entity | None:
        entity_id = self.current_entity_id
        if entity_id is None:
            return None
        return self.entities[entity_id]

    def require_entity(self, entity_id: str, *, role: str = "entity") -> Entity:
        """Look up an entity or raise.

        Args:
            entity_id: Id to resolve.
            role: Word used in the error message ("target", "monster", ...).

        Returns:
            The matching entity.

        Raises:
            EntityNotFoundError: If the id is not in the encounter.
        """
        entity = self.entities.get(entity_id)
        if entity is None:
            raise EntityNotFoundError(f"{role} not found: {entity_id}", entity_id=entity_id)
        return entity

    def combat_status(self) -> dict[str, str]:
        """Status line for every entity, keyed by id, in turn order."""
        return {
            entity_id: self.entities[entity_id].status_line()
            for entity_id in self.turn_order
        }

    def preview_next_turn(self) -> TurnPreview:
        """Describe the result of the next advancement without applying it.

        Raises:
            InvalidEncounterStateError: If the turn order is empty.
        """
        if not self.turn_order:
            raise InvalidEncounterStateError(
                "empty turn order",
                current_state="active",
            )
        next_index = (self.turn_index + 1) % len(self.turn_order)
        starts_new_round = next_index == 0
        entity_id = self.turn_order[next_index]
        return TurnPreview(
            entity_id=entity_id,
            entity_name=self.entities[entity_id].name,
            turn_index=next_index,
            round_number=self.round_number + 1 if starts_new_round else self.round_number,
            starts_new_round=starts_new_round,
        )


class Encounter(EncounterSnapshot):
    """The single live encounter owned by a CombatEngine."""

    model_config = ConfigDict(validate_assignment=True)


class EncounterView(EncounterSnapshot):
    """Read-only deep copy of an encounter.

    Mutating the entities of a view never affects the live encounter.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, encounter: Encounter) -> "EncounterView":
        snapshot = encounter.model_copy(deep=True)
        return cls(
            entities=snapshot.entities,
            turn_order=snapshot.turn_order,
            turn_index=snapshot.turn_index,
            round_number=snapshot.round_number,
        )


__all__ = [
    "Condition",
    "EntityDefinition",
    "Entity",
    "TurnPreview",
    "EncounterSnapshot",
    "Encounter",
    "EncounterView",
]
