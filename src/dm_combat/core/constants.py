"""Constants shared across the combat assistant."""

from __future__ import annotations

# =============================================================================
# Conditions
# =============================================================================

PERMANENT_DURATION = -1
"""Condition duration meaning the condition never expires on its own."""

# =============================================================================
# Damage
# =============================================================================

RESISTANCES_RESOURCE = "resistances"
"""Resource key whose presence marks an entity as resisting all damage."""

RESISTED_SUFFIX = " (resisted)"

# =============================================================================
# Dice & Saving Throws
# =============================================================================

D20_SIDES = 20

SAVE_TYPES = ("STR", "DEX", "CON", "INT", "WIS", "CHA")
"""Standard saving throw abilities. Informational; save types are not validated."""
