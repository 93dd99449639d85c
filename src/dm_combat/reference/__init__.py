"""Read-only reference data and the lookups the engine consumes from it.

Submodules:
    srd: Monster stat blocks and SRD rule summaries.
    catalog: Monster-template lookup and condition/resource name catalogs.
"""

from __future__ import annotations

from dm_combat.reference.catalog import (
    EnumNameCatalog,
    LegendaryLookup,
    MonsterCatalog,
    NameCatalog,
    OpenNameCatalog,
)
from dm_combat.reference.srd import (
    ANCIENT_RED_DRAGON,
    GOBLIN,
    STAT_BLOCKS,
    condition_rules,
    damage_rules,
    get_stat_block,
    legendary_rules,
    list_monsters,
    saving_throw_rules,
)


__all__ = [
    # Catalogs
    "LegendaryLookup",
    "MonsterCatalog",
    "NameCatalog",
    "OpenNameCatalog",
    "EnumNameCatalog",
    # SRD data
    "ANCIENT_RED_DRAGON",
    "GOBLIN",
    "STAT_BLOCKS",
    "get_stat_block",
    "list_monsters",
    "damage_rules",
    "condition_rules",
    "saving_throw_rules",
    "legendary_rules",
]
