"""Combat engine for the D&D 5E combat assistant.

This module owns the live encounter and every operation against it, plus
the tool layer agents call into.

Submodules:
    dice: d20-library dice rolling and the injectable D20Source protocol
    turn_manager: Initiative order, round/turn cursor, start-of-turn effects
    combat: CombatEngine, the serialized owner of the encounter
    tools: Tool registry and dispatcher over CombatEngine operations

Example:
    >>> from dm_combat.engine import CombatEngine, ToolCall, execute_tool
    >>>
    >>> engine = CombatEngine()
    >>> result = execute_tool(engine, ToolCall(
    ...     tool_name="start_combat",
    ...     arguments={"entities": [
    ...         {"id": "b", "name": "Fighter", "initiative": 10, "hp": 30, "ac": 14},
    ...     ]},
    ... ))
    >>> result.result["turn_order"]
    ['b']
"""

from __future__ import annotations

# =============================================================================
# Dice Rolling
# =============================================================================
from dm_combat.engine.dice import (
    D20Source,
    DiceExpression,
    DiceRoller,
)

# =============================================================================
# Turn Management
# =============================================================================
from dm_combat.engine.turn_manager import (
    InitiativeEntry,
    InitiativeTracker,
    TurnAdvance,
    begin_turn,
    sort_initiative,
)

# =============================================================================
# Combat Engine
# =============================================================================
from dm_combat.engine.combat import CombatEngine

# =============================================================================
# Tools
# =============================================================================
from dm_combat.engine.tools import (
    ToolCall,
    ToolCategory,
    ToolDefinition,
    ToolResult,
    execute_tool,
    execute_tool_calls,
    get_all_tools,
    get_tool,
    get_tools_as_openai_schema,
    get_tools_by_category,
)


__all__ = [
    # Dice
    "D20Source",
    "DiceExpression",
    "DiceRoller",
    # Turn management
    "InitiativeEntry",
    "InitiativeTracker",
    "TurnAdvance",
    "begin_turn",
    "sort_initiative",
    # Engine
    "CombatEngine",
    # Tools
    "ToolCall",
    "ToolCategory",
    "ToolDefinition",
    "ToolResult",
    "execute_tool",
    "execute_tool_calls",
    "get_all_tools",
    "get_tool",
    "get_tools_as_openai_schema",
    "get_tools_by_category",
]
