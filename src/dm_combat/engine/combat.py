"""The combat engine: the owned encounter and every operation against it.

A ``CombatEngine`` holds exactly one live encounter. Each public operation
runs under the engine's lock, validates its inputs and resolves its target
before writing anything, then mutates the encounter and returns a flat
result record. ``view()`` hands out a deep-copied snapshot for read-only
collaborators.

Example:
    >>> engine = CombatEngine()
    >>> engine.start_combat([
    ...     EntityDefinition(id="a", name="Dragon", initiative=15, hp=546, ac=22,
    ...                      is_monster=True, monster_name="Ancient Red Dragon"),
    ...     EntityDefinition(id="b", name="Fighter", initiative=10, hp=30, ac=14),
    ... ]).turn_order
    ['a', 'b']
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from dm_combat.core.config import CombatSettings, get_settings
from dm_combat.core.constants import PERMANENT_DURATION, RESISTANCES_RESOURCE, RESISTED_SUFFIX
from dm_combat.core.exceptions import InvalidEncounterStateError, ValidationError
from dm_combat.core.logging import get_logger
from dm_combat.engine.dice import D20Source, DiceRoller
from dm_combat.engine.turn_manager import InitiativeTracker, begin_turn
from dm_combat.models.combat import (
    Encounter,
    EncounterView,
    Entity,
    EntityDefinition,
    TurnPreview,
)
from dm_combat.models.operations import (
    AddConditionResult,
    ApplyDamageResult,
    ApplyHealingResult,
    LegendaryActionResult,
    NextTurnResult,
    SavingThrowResult,
    StartCombatResult,
    TrackResourceResult,
)
from dm_combat.reference.catalog import (
    LegendaryLookup,
    MonsterCatalog,
    NameCatalog,
    OpenNameCatalog,
)


logger = get_logger(__name__)


def _require_non_negative(value: int, field_name: str) -> None:
    if value < 0:
        raise ValidationError(
            f"{field_name} must not be negative",
            field_name=field_name,
            invalid_value=value,
        )


class CombatEngine:
    """Serialized operations over a single live encounter.

    Args:
        settings: Engine settings; defaults to the cached application settings.
        dice: Source of d20 rolls for saving throws.
        monsters: Template name -> legendary capability lookup.
        conditions: Catalog normalizing condition names.
        resources: Catalog normalizing resource names.
    """

    def __init__(
        self,
        *,
        settings: CombatSettings | None = None,
        dice: D20Source | None = None,
        monsters: LegendaryLookup | None = None,
        conditions: NameCatalog | None = None,
        resources: NameCatalog | None = None,
    ) -> None:
        self._settings = settings if settings is not None else get_settings()
        self._dice = dice if dice is not None else DiceRoller(seed=self._settings.dice_seed)
        self._monsters = monsters if monsters is not None else MonsterCatalog.default()
        self._conditions = conditions if conditions is not None else OpenNameCatalog(kind="condition")
        self._resources = resources if resources is not None else OpenNameCatalog(kind="resource")
        self._encounter: Encounter | None = None
        self._lock = threading.RLock()

    @property
    def settings(self) -> CombatSettings:
        return self._settings

    @property
    def has_encounter(self) -> bool:
        with self._lock:
            return self._encounter is not None

    def _active(self) -> Encounter:
        if self._encounter is None:
            raise InvalidEncounterStateError(
                "No active encounter: call start_combat first",
                current_state="uninitialized",
            )
        return self._encounter

    # =========================================================================
    # Read access
    # =========================================================================

    def view(self) -> EncounterView:
        """Snapshot of the live encounter, safe to read without the lock.

        Raises:
            InvalidEncounterStateError: If no encounter has been started.
        """
        with self._lock:
            return EncounterView.of(self._active())

    def preview_next_turn(self) -> TurnPreview:
        """Who would act after ``next_turn``, without changing anything.

        Raises:
            InvalidEncounterStateError: If there is no encounter or the turn
                order is empty.
        """
        with self._lock:
            return self._active().preview_next_turn()

    # =========================================================================
    # Encounter lifecycle
    # =========================================================================

    def start_combat(self, definitions: Sequence[EntityDefinition]) -> StartCombatResult:
        """Replace any prior encounter with a fresh one.

        Raises:
            ValidationError: If duplicate ids are rejected by configuration
                and the request repeats an id.
        """
        with self._lock:
            entities = self._build_entities(definitions)
            encounter = Encounter(entities=entities)
            turn_order = InitiativeTracker(encounter).start(entities.values())
            self._encounter = encounter

        logger.info(
            "Combat started",
            combatants=len(entities),
            turn_order=turn_order,
        )
        return StartCombatResult(
            turn_order=turn_order,
            message=f"Combat started with {len(entities)} combatants. Round 1, turn 1.",
        )

    def _build_entities(self, definitions: Sequence[EntityDefinition]) -> dict[str, Entity]:
        entities: dict[str, Entity] = {}
        for definition in definitions:
            if definition.id in entities:
                if self._settings.reject_duplicate_ids:
                    raise ValidationError(
                        f"Duplicate entity id: {definition.id}",
                        field_name="id",
                        invalid_value=definition.id,
                    )
                logger.warning("Duplicate entity id replaced", entity_id=definition.id)
                # the replacing definition also takes over the tie-break position
                del entities[definition.id]
            entities[definition.id] = self._build_entity(definition)
        return entities

    def _build_entity(self, definition: EntityDefinition) -> Entity:
        entity = Entity.from_definition(definition)
        if definition.is_monster and definition.monster_name:
            defaults = self._monsters.legendary_defaults(definition.monster_name)
            entity.max_legendary_actions = defaults.max_legendary_actions
            entity.legendary_actions = defaults.max_legendary_actions
            entity.legendary_resistances = defaults.legendary_resistances
            if defaults.is_legendary:
                logger.debug(
                    "Monster defaults applied",
                    entity_id=entity.id,
                    template=definition.monster_name,
                    legendary_actions=defaults.max_legendary_actions,
                    legendary_resistances=defaults.legendary_resistances,
                )
        return entity

    # =========================================================================
    # Turn advancement
    # =========================================================================

    def next_turn(self) -> NextTurnResult:
        """Advance to the next entity and apply its start-of-turn effects.

        Raises:
            InvalidEncounterStateError: If there is no encounter or the turn
                order is empty.
        """
        with self._lock:
            encounter = self._active()
            advance = InitiativeTracker(encounter).advance()
            current = encounter.entities[advance.entity_id]
            effects = begin_turn(current)
            status = encounter.combat_status()

        logger.info(
            "Turn advanced",
            entity_id=current.id,
            round=advance.round_number,
            turn_index=advance.turn_index,
            effects=effects,
        )
        return NextTurnResult(
            current_entity_id=current.id,
            current_entity_name=current.name,
            round_number=advance.round_number,
            effects=effects,
            combat_status=status,
        )

    # =========================================================================
    # Hit points
    # =========================================================================

    def apply_damage(self, target_id: str, damage: int, damage_type: str) -> ApplyDamageResult:
        """Subtract damage, halved (floor) if the target has a "resistances" resource.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the target does not exist.
            ValidationError: If damage is negative.
        """
        with self._lock:
            target = self._active().require_entity(target_id, role="target")
            _require_non_negative(damage, "damage")

            resisted = RESISTANCES_RESOURCE in target.resources
            final_damage = damage // 2 if resisted else damage
            target.current_hp = max(0, target.current_hp - final_damage)
            remaining = target.current_hp

        modifier = RESISTED_SUFFIX if resisted else ""
        logger.info(
            "Damage applied",
            target=target_id,
            damage=damage,
            final_damage=final_damage,
            damage_type=damage_type,
            resisted=resisted,
            remaining_hp=remaining,
        )
        return ApplyDamageResult(
            final_damage=final_damage,
            remaining_hp=remaining,
            is_unconscious=remaining == 0,
            message=(
                f"{target.name} takes {final_damage} {damage_type} damage{modifier}. "
                f"{remaining} HP remaining."
            ),
        )

    def apply_healing(self, target_id: str, amount: int) -> ApplyHealingResult:
        """Add hit points up to the target's maximum.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the target does not exist.
            ValidationError: If amount is negative.
        """
        with self._lock:
            target = self._active().require_entity(target_id, role="target")
            _require_non_negative(amount, "amount")

            before = target.current_hp
            target.current_hp = min(target.max_hp, before + amount)
            healed = target.current_hp - before
            current_hp, max_hp = target.current_hp, target.max_hp

        logger.info("Healing applied", target=target_id, amount=amount, healed=healed)
        return ApplyHealingResult(
            amount_healed=healed,
            current_hp=current_hp,
            message=f"{target.name} healed for {healed} HP. Now at {current_hp}/{max_hp}.",
        )

    # =========================================================================
    # Conditions & resources
    # =========================================================================

    def add_condition(self, target_id: str, condition: str, duration: int) -> AddConditionResult:
        """Set a condition, replacing any duration it already had.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the target does not exist.
            ValidationError: If the duration is neither -1 nor positive, or the
                condition catalog refuses the name.
        """
        with self._lock:
            target = self._active().require_entity(target_id, role="target")
            if duration != PERMANENT_DURATION and duration <= 0:
                raise ValidationError(
                    "duration must be positive, or -1 for permanent",
                    field_name="duration",
                    invalid_value=duration,
                )
            name = self._conditions.resolve(condition)
            target.conditions[name] = duration

        duration_text = "permanent" if duration == PERMANENT_DURATION else f"{duration} turns"
        logger.info("Condition applied", target=target_id, condition=name, duration=duration)
        return AddConditionResult(message=f"{target.name} is now {name} ({duration_text}).")

    def track_resource(self, entity_id: str, resource_name: str, current_value: int) -> TrackResourceResult:
        """Overwrite (or create) a resource counter.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the entity does not exist.
        """
        with self._lock:
            entity = self._active().require_entity(entity_id)
            name = self._resources.resolve(resource_name)
            entity.resources[name] = current_value

        logger.info("Resource tracked", entity_id=entity_id, resource=name, value=current_value)
        return TrackResourceResult(message=f"{entity.name} now has {current_value} {name}.")

    # =========================================================================
    # Saving throws & legendary abilities
    # =========================================================================

    def make_saving_throw(self, entity_id: str, save_type: str, dc: int) -> SavingThrowResult:
        """Roll a d20 save; a failure is overturned by a legendary resistance if any remain.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the entity does not exist.
        """
        with self._lock:
            entity = self._active().require_entity(entity_id)

            roll = self._dice.roll_d20()
            bonus = self._settings.monster_save_bonus if entity.is_monster else 0
            total = roll + bonus
            success = total >= dc

            used_legendary = False
            if not success and entity.legendary_resistances > 0:
                entity.legendary_resistances -= 1
                success = True
                used_legendary = True
            remaining = entity.legendary_resistances

        message = (
            f"{entity.name} rolled {roll}+{bonus}={total} vs DC {dc}: "
            f"{'SUCCESS' if success else 'FAILURE'}"
        )
        if used_legendary:
            message += f" (used legendary resistance, {remaining} remaining)"

        logger.info(
            "Saving throw",
            entity_id=entity_id,
            save_type=save_type,
            roll=roll,
            bonus=bonus,
            dc=dc,
            success=success,
            used_legendary_resistance=used_legendary,
        )
        return SavingThrowResult(
            roll=roll,
            bonus=bonus,
            total=total,
            success=success,
            used_legendary_resistance=used_legendary,
            remaining_legendary_resists=remaining,
            message=message,
        )

    def use_legendary_action(self, monster_id: str, action_name: str, cost: int) -> LegendaryActionResult:
        """Spend legendary actions from the monster's pool for this round.

        An insufficient pool is a normal outcome: ``success`` is False and
        nothing is deducted.

        Raises:
            InvalidEncounterStateError: If there is no encounter.
            EntityNotFoundError: If the monster does not exist.
            ValidationError: If cost is negative.
        """
        with self._lock:
            monster = self._active().require_entity(monster_id, role="monster")
            _require_non_negative(cost, "cost")

            available = monster.legendary_actions
            if available < cost:
                logger.info(
                    "Legendary action refused",
                    monster_id=monster_id,
                    action=action_name,
                    cost=cost,
                    available=available,
                )
                return LegendaryActionResult(
                    success=False,
                    remaining_actions=available,
                    message=f"Insufficient legendary actions. Has {available}, needs {cost}.",
                )

            monster.legendary_actions = available - cost
            remaining = monster.legendary_actions

        logger.info(
            "Legendary action used",
            monster_id=monster_id,
            action=action_name,
            cost=cost,
            remaining=remaining,
        )
        return LegendaryActionResult(
            success=True,
            remaining_actions=remaining,
            message=(
                f"{monster.name} uses {action_name} (cost {cost}). "
                f"{remaining} legendary actions remaining."
            ),
        )


__all__ = [
    "CombatEngine",
]
