"""Pydantic V2 schemas for SRD rule summaries served as reference data."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DamageRules(_Frozen):
    resistance_multiplier: float
    vulnerability_multiplier: float
    immunity_effect: str
    critical_multiplier: int
    condition_effects: dict[str, str] = Field(default_factory=dict)


class ConditionDefinition(_Frozen):
    name: str
    description: str
    effects: tuple[str, ...] = ()
    end_condition: str


class SavingThrowRules(_Frozen):
    types: tuple[str, ...]
    critical_success: str
    critical_failure: str
    modifiers: dict[str, str] = Field(default_factory=dict)


class LegendaryActionRule(_Frozen):
    description: str
    timing: str
    reset_timing: str
    default_per_round: int


class LegendaryResistanceRule(_Frozen):
    description: str
    default_count: int
    usage: str
    reset_timing: str


class LairActionRule(_Frozen):
    description: str
    initiative: int
    frequency: str


class LegendaryRules(_Frozen):
    legendary_actions: LegendaryActionRule
    legendary_resistances: LegendaryResistanceRule
    lair_actions: LairActionRule


__all__ = [
    "DamageRules",
    "ConditionDefinition",
    "SavingThrowRules",
    "LegendaryActionRule",
    "LegendaryResistanceRule",
    "LairActionRule",
    "LegendaryRules",
]
