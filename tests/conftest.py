"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the dm-combat test suite.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import pytest

from dm_combat.core.config import CombatSettings
from dm_combat.engine.combat import CombatEngine
from dm_combat.models.combat import EntityDefinition


if TYPE_CHECKING:
    from collections.abc import Generator


class ScriptedD20:
    """D20 source that returns a fixed script of rolls, then repeats the last."""

    def __init__(self, rolls: Iterable[int] = (10,)) -> None:
        self.rolls = list(rolls)
        self.calls = 0

    def push(self, *rolls: int) -> None:
        self.rolls.extend(rolls)

    def roll_d20(self) -> int:
        index = min(self.calls, len(self.rolls) - 1)
        self.calls += 1
        return self.rolls[index]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dm_combat.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DM_COMBAT_MONSTER_SAVE_BONUS": "5",
        "DM_COMBAT_REJECT_DUPLICATE_IDS": "true",
        "DM_COMBAT_LOG_LEVEL": "debug",
        "DM_COMBAT_DICE_SEED": "42",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings() -> CombatSettings:
    """Settings with defaults, independent of any .env file."""
    return CombatSettings(_env_file=None)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def dragon_definition() -> EntityDefinition:
    """Ancient red dragon, initiative 15."""
    return EntityDefinition(
        id="A",
        name="Dragon",
        initiative=15,
        hp=546,
        ac=22,
        is_monster=True,
        monster_name="Ancient Red Dragon",
    )


@pytest.fixture
def fighter_definition() -> EntityDefinition:
    """Player fighter, initiative 10."""
    return EntityDefinition(id="B", name="Fighter", initiative=10, hp=30, ac=14)


@pytest.fixture
def sample_definitions(
    dragon_definition: EntityDefinition,
    fighter_definition: EntityDefinition,
) -> list[EntityDefinition]:
    """Fighter listed first so ordering is done by initiative, not input order."""
    return [fighter_definition, dragon_definition]


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def d20() -> ScriptedD20:
    """Scripted d20 source; every roll is 10 unless a test pushes others."""
    return ScriptedD20([10])


@pytest.fixture
def engine(settings: CombatSettings, d20: ScriptedD20) -> CombatEngine:
    """Engine with default settings and scripted dice, no encounter yet."""
    return CombatEngine(settings=settings, dice=d20)


@pytest.fixture
def started_engine(
    engine: CombatEngine,
    sample_definitions: list[EntityDefinition],
) -> CombatEngine:
    """Engine with the dragon/fighter encounter already started."""
    engine.start_combat(sample_definitions)
    return engine
