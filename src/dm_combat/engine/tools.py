"""Combat tools for AI agents and manual execution.

Each tool wraps one ``CombatEngine`` operation behind a flat request record
and a flat result record. Tools are registered with the ``@tool`` decorator
so an agent host can list them, read their JSON schemas and dispatch calls
by name through ``execute_tool``.

Tools:
    start_combat: Initialize combat with entities and initiative order
    next_turn: Advance to the next entity's turn
    apply_damage: Apply damage to an entity, respecting resistances
    apply_healing: Heal an entity up to its maximum HP
    add_condition: Add a condition with a duration
    make_saving_throw: Roll a saving throw, using legendary resistance if needed
    use_legendary_action: Spend legendary actions from a monster's pool
    track_resource: Set a resource counter on an entity
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as ArgumentsError

from dm_combat.core.exceptions import (
    DmCombatError,
    EntityNotFoundError,
    InvalidEncounterStateError,
    ValidationError,
)
from dm_combat.core.logging import bind_context, clear_context, get_logger
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


if TYPE_CHECKING:
    from dm_combat.engine.combat import CombatEngine


logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., BaseModel])


# =============================================================================
# Tool Registry
# =============================================================================


class ToolCategory(StrEnum):
    """Categories of combat tools."""

    ENCOUNTER = "encounter"
    HIT_POINTS = "hit_points"
    CONDITION = "condition"
    SAVING_THROW = "saving_throw"
    LEGENDARY = "legendary"
    RESOURCE = "resource"


@dataclass
class ToolDefinition:
    """Definition of a combat tool for AI binding.

    Attributes:
        name: Tool name on the wire.
        description: Human-readable description for AI.
        category: Tool category.
        request_model: Pydantic model the call arguments are validated into.
        handler: Function taking the engine and a validated request.
    """

    name: str
    description: str
    category: ToolCategory
    request_model: type[BaseModel]
    handler: Callable[..., BaseModel]

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON schema for the tool's arguments."""
        return self.request_model.model_json_schema()


# Global tool registry
_tool_registry: dict[str, ToolDefinition] = {}


def tool(
    *,
    description: str,
    category: ToolCategory,
    request_model: type[BaseModel],
) -> Callable[[F], F]:
    """Decorator to register a function as a combat tool.

    Args:
        description: Description for AI agents.
        category: Tool category.
        request_model: Model the raw arguments are validated into.

    Returns:
        Decorated function.
    """
    def decorator(func: F) -> F:
        tool_def = ToolDefinition(
            name=func.__name__,
            description=description,
            category=category,
            request_model=request_model,
            handler=func,
        )
        _tool_registry[func.__name__] = tool_def
        func._tool_definition = tool_def  # type: ignore[attr-defined]
        return func

    return decorator


def get_tool(name: str) -> ToolDefinition | None:
    """Get a tool definition by name."""
    return _tool_registry.get(name)


def get_all_tools() -> list[ToolDefinition]:
    """Get all registered tools."""
    return list(_tool_registry.values())


def get_tools_by_category(category: ToolCategory) -> list[ToolDefinition]:
    """Get tools filtered by category."""
    return [t for t in _tool_registry.values() if t.category == category]


def get_tools_as_openai_schema() -> list[dict[str, Any]]:
    """Get all tools in OpenAI function calling schema format."""
    tools = []
    for tool_def in _tool_registry.values():
        tools.append({
            "type": "function",
            "function": {
                "name": tool_def.name,
                "description": tool_def.description,
                "parameters": tool_def.parameters,
            },
        })
    return tools


# =============================================================================
# Encounter Tools
# =============================================================================


@tool(
    description="Initialize combat with entities and initiative order",
    category=ToolCategory.ENCOUNTER,
    request_model=StartCombatRequest,
)
def start_combat(engine: CombatEngine, request: StartCombatRequest) -> StartCombatResult:
    return engine.start_combat(request.entities)


@tool(
    description="Advance to next entity's turn, process start-of-turn effects",
    category=ToolCategory.ENCOUNTER,
    request_model=NextTurnRequest,
)
def next_turn(engine: CombatEngine, request: NextTurnRequest) -> NextTurnResult:
    return engine.next_turn()


# =============================================================================
# Hit Point Tools
# =============================================================================


@tool(
    description="Apply damage to an entity, accounting for resistances",
    category=ToolCategory.HIT_POINTS,
    request_model=ApplyDamageRequest,
)
def apply_damage(engine: CombatEngine, request: ApplyDamageRequest) -> ApplyDamageResult:
    return engine.apply_damage(request.target_id, request.damage, request.damage_type)


@tool(
    description="Heal an entity, capped at max HP",
    category=ToolCategory.HIT_POINTS,
    request_model=ApplyHealingRequest,
)
def apply_healing(engine: CombatEngine, request: ApplyHealingRequest) -> ApplyHealingResult:
    return engine.apply_healing(request.target_id, request.amount)


# =============================================================================
# Condition, Save & Resource Tools
# =============================================================================


@tool(
    description="Add a condition to an entity with duration",
    category=ToolCategory.CONDITION,
    request_model=AddConditionRequest,
)
def add_condition(engine: CombatEngine, request: AddConditionRequest) -> AddConditionResult:
    return engine.add_condition(request.target_id, request.condition, request.duration)


@tool(
    description="Roll a saving throw, automatically using legendary resistance if needed",
    category=ToolCategory.SAVING_THROW,
    request_model=SavingThrowRequest,
)
def make_saving_throw(engine: CombatEngine, request: SavingThrowRequest) -> SavingThrowResult:
    return engine.make_saving_throw(request.entity_id, request.save_type, request.dc)


@tool(
    description="Use a legendary action, tracking remaining uses",
    category=ToolCategory.LEGENDARY,
    request_model=LegendaryActionRequest,
)
def use_legendary_action(
    engine: CombatEngine,
    request: LegendaryActionRequest,
) -> LegendaryActionResult:
    return engine.use_legendary_action(request.monster_id, request.action_name, request.cost)


@tool(
    description="Track resource usage (spell slots, abilities, etc)",
    category=ToolCategory.RESOURCE,
    request_model=TrackResourceRequest,
)
def track_resource(engine: CombatEngine, request: TrackResourceRequest) -> TrackResourceResult:
    return engine.track_resource(request.entity_id, request.resource_name, request.current_value)


# =============================================================================
# Tool Execution
# =============================================================================


@dataclass
class ToolCall:
    """A request to execute a tool.

    Attributes:
        tool_name: Name of the tool to call.
        arguments: Arguments to validate into the tool's request model.
        call_id: Unique identifier for this call.
    """

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    call_id: str = ""


@dataclass
class ToolResult:
    """Result of executing a tool.

    Attributes:
        tool_name: Name of the tool that was called.
        call_id: ID of the original call.
        result: The tool's result record, dumped to a dict.
        success: Whether execution succeeded.
        error: Error message if failed.
        error_kind: Short machine-readable failure category.
    """

    tool_name: str
    call_id: str
    result: dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error: str = ""
    error_kind: str = ""


def _error_kind(exc: DmCombatError) -> str:
    if isinstance(exc, EntityNotFoundError):
        return "not_found"
    if isinstance(exc, InvalidEncounterStateError):
        return "invalid_state"
    if isinstance(exc, ValidationError):
        return "validation"
    return "engine_error"


def _failure(call: ToolCall, error: str, kind: str) -> ToolResult:
    return ToolResult(
        tool_name=call.tool_name,
        call_id=call.call_id,
        success=False,
        error=error,
        error_kind=kind,
    )


def execute_tool(engine: CombatEngine, call: ToolCall) -> ToolResult:
    """Execute a tool call against an engine.

    Engine errors never escape: they come back as a failed ToolResult with
    the error message and kind set.

    Args:
        engine: The engine owning the encounter.
        call: The tool call to execute.

    Returns:
        ToolResult with outcome.
    """
    tool_def = get_tool(call.tool_name)

    if tool_def is None:
        return _failure(call, f"Unknown tool: {call.tool_name}", "unknown_tool")

    bind_context(tool=call.tool_name, call_id=call.call_id)
    try:
        try:
            request = tool_def.request_model.model_validate(call.arguments)
        except ArgumentsError as exc:
            logger.warning("Invalid tool arguments", errors=exc.error_count())
            return _failure(call, f"Invalid arguments: {exc}", "invalid_arguments")

        try:
            result = tool_def.handler(engine, request)
        except DmCombatError as exc:
            logger.warning("Tool execution failed", error=exc.message, error_type=type(exc).__name__)
            return _failure(call, exc.message, _error_kind(exc))
        except Exception as exc:
            logger.exception("Tool execution crashed")
            return _failure(call, str(exc), "internal")

        return ToolResult(
            tool_name=call.tool_name,
            call_id=call.call_id,
            result=result.model_dump(mode="json"),
            success=True,
        )
    finally:
        clear_context()


def execute_tool_calls(engine: CombatEngine, calls: list[ToolCall]) -> list[ToolResult]:
    """Execute multiple tool calls in sequence.

    Args:
        engine: The engine owning the encounter.
        calls: List of tool calls.

    Returns:
        List of results.
    """
    return [execute_tool(engine, call) for call in calls]


__all__ = [
    # Types
    "ToolCategory",
    "ToolDefinition",
    "ToolCall",
    "ToolResult",
    # Registry
    "tool",
    "get_tool",
    "get_all_tools",
    "get_tools_by_category",
    "get_tools_as_openai_schema",
    # Execution
    "execute_tool",
    "execute_tool_calls",
    # Tools
    "start_combat",
    "next_turn",
    "apply_damage",
    "apply_healing",
    "add_condition",
    "make_saving_throw",
    "use_legendary_action",
    "track_resource",
]
