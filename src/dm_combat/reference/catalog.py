"""Lookups the combat engine consumes from reference data.

Two seams live here:

* ``LegendaryLookup`` maps a monster template name to the legendary
  capability seeded at combat start. ``MonsterCatalog`` is the default
  implementation, built from SRD stat blocks or from an explicit mapping.
  Unknown templates resolve to "no legendary capability", never an error.
* ``NameCatalog`` normalizes free-text condition and resource names.
  ``OpenNameCatalog`` accepts anything; ``EnumNameCatalog`` restricts names
  to the members of an enum, so a stricter vocabulary can be swapped in
  without changing any operation signature.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Protocol, runtime_checkable

from dm_combat.core.exceptions import ValidationError
from dm_combat.core.logging import get_logger
from dm_combat.models.monsters import (
    NO_LEGENDARY_CAPABILITY,
    LegendaryDefaults,
    MonsterStatBlock,
)
from dm_combat.reference.srd import STAT_BLOCKS


logger = get_logger(__name__)


def _template_key(name: str) -> str:
    return name.strip().casefold()


# =============================================================================
# Monster Templates
# =============================================================================


@runtime_checkable
class LegendaryLookup(Protocol):
    """Resolves a monster template name to its legendary capability."""

    def legendary_defaults(self, template_name: str) -> LegendaryDefaults: ...


class MonsterCatalog:
    """Template name -> legendary capability, matched case-insensitively.

    Example:
        >>> catalog = MonsterCatalog.from_stat_blocks(STAT_BLOCKS)
        >>> catalog.legendary_defaults("ancient red dragon").max_legendary_actions
        3
    """

    def __init__(self, defaults: Mapping[str, LegendaryDefaults] | None = None) -> None:
        self._defaults: dict[str, LegendaryDefaults] = {
            _template_key(name): value for name, value in (defaults or {}).items()
        }

    @classmethod
    def from_stat_blocks(cls, blocks: Iterable[MonsterStatBlock]) -> "MonsterCatalog":
        return cls({block.name: LegendaryDefaults.from_stat_block(block) for block in blocks})

    @classmethod
    def default(cls) -> "MonsterCatalog":
        """Catalog built from the bundled SRD stat blocks."""
        return cls.from_stat_blocks(STAT_BLOCKS)

    def __contains__(self, template_name: object) -> bool:
        return isinstance(template_name, str) and _template_key(template_name) in self._defaults

    def __len__(self) -> int:
        return len(self._defaults)

    def register(self, template_name: str, defaults: LegendaryDefaults) -> None:
        self._defaults[_template_key(template_name)] = defaults

    def legendary_defaults(self, template_name: str) -> LegendaryDefaults:
        defaults = self._defaults.get(_template_key(template_name))
        if defaults is None:
            logger.debug("Unknown monster template", template=template_name)
            return NO_LEGENDARY_CAPABILITY
        return defaults


# =============================================================================
# Condition / Resource Names
# =============================================================================


@runtime_checkable
class NameCatalog(Protocol):
    """Normalizes a free-text condition or resource name."""

    def resolve(self, name: str) -> str: ...


class OpenNameCatalog:
    """Accepts any non-blank name, trimmed of surrounding whitespace."""

    def __init__(self, kind: str = "name") -> None:
        self.kind = kind

    def resolve(self, name: str) -> str:
        resolved = name.strip()
        if not resolved:
            raise ValidationError(f"{self.kind} must not be blank", field_name=self.kind)
        return resolved


class EnumNameCatalog:
    """Restricts names to the values of a string enum (case-insensitive).

    Example:
        >>> from dm_combat.models.combat import Condition
        >>> EnumNameCatalog(Condition, kind="condition").resolve("Stunned")
        'stunned'
    """

    def __init__(self, members: type[StrEnum], *, kind: str = "name") -> None:
        self.kind = kind
        self._values = {member.value.casefold(): member.value for member in members}

    def resolve(self, name: str) -> str:
        value = self._values.get(name.strip().casefold())
        if value is None:
            raise ValidationError(
                f"Unknown {self.kind}: {name}",
                field_name=self.kind,
                invalid_value=name,
            )
        return value


__all__ = [
    "LegendaryLookup",
    "MonsterCatalog",
    "NameCatalog",
    "OpenNameCatalog",
    "EnumNameCatalog",
]
