"""Dice rolling for the combat engine.

Rolls go through the d20 library. The engine depends only on the small
``D20Source`` protocol, so tests and callers can inject a deterministic
source and assert exact saving throw outcomes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from dm_combat.core.constants import D20_SIDES
from dm_combat.core.exceptions import DiceRollError
from dm_combat.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class D20Source(Protocol):
    """Anything that can produce a uniform integer in [1, 20]."""

    def roll_d20(self) -> int: ...


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int


class DiceRoller:
    """d20-library backed roller.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 1 <= roller.roll_d20() <= 20
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls. The d20
                library draws from the global ``random`` module, so the
                seed is applied there.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d20', '2d6+3').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            import d20

            result = d20.roll(expression)
        except ImportError as exc:
            raise DiceRollError(
                "d20 library not installed. Install with: pip install d20",
                expression=expression,
            ) from exc
        except Exception as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", expression=expression, total=rolled.total)
        return rolled

    def roll_d20(self) -> int:
        return self.roll(f"1d{D20_SIDES}").total

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Collect kept die values from a d20 expression tree."""
        import d20

        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if getattr(die, "kept", True):
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


__all__ = [
    "D20Source",
    "DiceExpression",
    "DiceRoller",
]
