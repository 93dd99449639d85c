"""Pydantic V2 schemas for monster reference data.

Stat blocks are read-only reference material. The engine only consumes the
legendary capability derived from them (``LegendaryDefaults``).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class MonsterTrait(_Frozen):
    """A passive ability or feature."""

    name: str
    description: str


class MonsterAction(_Frozen):
    """An action a monster can take on its turn."""

    name: str
    description: str = ""
    attack_bonus: int | None = None
    damage_type: str | None = None
    damage_dice: str | None = None
    save_dc: int | None = None
    save_type: str | None = None


class LegendaryActionOption(_Frozen):
    name: str
    cost: Annotated[int, Field(ge=1)] = 1
    description: str


class LegendaryActionSet(_Frozen):
    actions_per_round: Annotated[int, Field(ge=0)]
    options: tuple[LegendaryActionOption, ...] = ()


class LairAction(_Frozen):
    """An action taken on initiative count 20 while in the lair."""

    description: str
    save_dc: int | None = None
    save_type: str | None = None


class MonsterStatBlock(_Frozen):
    """A complete SRD-style monster stat block.

    Attributes:
        name: Monster name, also the template name used by start_combat.
        legendary_actions: Legendary action economy, if the monster has one.
        legendary_resistances: Legendary resistances per day.
    """

    name: str
    size: str
    type: str
    alignment: str
    hp: int
    ac: int
    speed: dict[str, int] = Field(default_factory=dict)
    ability_scores: dict[str, int] = Field(default_factory=dict)
    saving_throws: dict[str, int] = Field(default_factory=dict)
    skills: dict[str, int] = Field(default_factory=dict)
    damage_resistances: tuple[str, ...] = ()
    damage_immunities: tuple[str, ...] = ()
    damage_vulnerabilities: tuple[str, ...] = ()
    condition_immunities: tuple[str, ...] = ()
    senses: dict[str, int] = Field(default_factory=dict)
    languages: tuple[str, ...] = ()
    challenge_rating: float
    traits: tuple[MonsterTrait, ...] = ()
    actions: tuple[MonsterAction, ...] = ()
    legendary_actions: LegendaryActionSet | None = None
    legendary_resistances: Annotated[int, Field(ge=0)] = 0
    lair_actions: tuple[LairAction, ...] = ()


class MonsterSummary(_Frozen):
    """Entry in the monster index."""

    name: str
    challenge_rating: float
    type: str
    has_stat_block: bool = False


class LegendaryDefaults(_Frozen):
    """Legendary capability seeded onto a monster at combat start."""

    max_legendary_actions: Annotated[int, Field(ge=0)] = 0
    legendary_resistances: Annotated[int, Field(ge=0)] = 0

    @classmethod
    def from_stat_block(cls, block: MonsterStatBlock) -> "LegendaryDefaults":
        per_round = block.legendary_actions.actions_per_round if block.legendary_actions else 0
        return cls(
            max_legendary_actions=per_round,
            legendary_resistances=block.legendary_resistances,
        )

    @property
    def is_legendary(self) -> bool:
        return self.max_legendary_actions > 0 or self.legendary_resistances > 0


NO_LEGENDARY_CAPABILITY = LegendaryDefaults()


__all__ = [
    "MonsterTrait",
    "MonsterAction",
    "LegendaryActionOption",
    "LegendaryActionSet",
    "LairAction",
    "MonsterStatBlock",
    "MonsterSummary",
    "LegendaryDefaults",
    "NO_LEGENDARY_CAPABILITY",
]
