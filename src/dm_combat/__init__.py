"""dm-combat - D&D 5E combat state for AI dungeon masters.

The engine owns the truth of an encounter (hit points, conditions,
initiative, legendary actions and resistances). An agent drives it through
a small set of tools and never mutates state or rolls dice itself.

Example:
    >>> from dm_combat import CombatEngine, EntityDefinition
    >>>
    >>> engine = CombatEngine()
    >>> engine.start_combat([
    ...     EntityDefinition(id="a", name="Dragon", initiative=15, hp=546, ac=22,
    ...                      is_monster=True, monster_name="Ancient Red Dragon"),
    ...     EntityDefinition(id="b", name="Fighter", initiative=10, hp=30, ac=14),
    ... ])
    >>> engine.apply_damage("b", 20, "fire").message
    'Fighter takes 20 fire damage. 10 HP remaining.'

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for entities, encounters and tool records.
    reference: SRD stat blocks, rule summaries and lookup catalogs.
    engine: Combat engine, turn management, dice and tool dispatch.
"""

from __future__ import annotations

# Core
from dm_combat.core.config import CombatSettings, get_settings
from dm_combat.core.exceptions import DmCombatError
from dm_combat.core.logging import configure_logging, get_logger

# Models
from dm_combat.models.combat import (
    Condition,
    EncounterView,
    Entity,
    EntityDefinition,
)

# Engine
from dm_combat.engine.combat import CombatEngine
from dm_combat.engine.tools import ToolCall, ToolResult, execute_tool


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DmCombatError",
    "CombatSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Condition",
    "EntityDefinition",
    "Entity",
    "EncounterView",
    # Engine
    "CombatEngine",
    "ToolCall",
    "ToolResult",
    "execute_tool",
]
