"""
Habitica Calculator - Core Constants
====================================
Single source of truth for all game constants, enums, and reference data.

Values follow the Habitica wiki (https://habitica.fandom.com/wiki/Class_System)
unless noted otherwise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


# =============================================================================
# ENUMS
# =============================================================================

class ClassKind(Enum):
    """The four Habitica classes. The set is fixed by the game's rules."""
    WARRIOR = "warrior"
    MAGE = "mage"
    HEALER = "healer"
    ROGUE = "rogue"


# =============================================================================
# SPELL COSTS
# =============================================================================

@dataclass(frozen=True)
class SpellCosts:
    """Names and mana costs of a class's attack spell and team buff spell."""
    attack_cost: int
    buff_cost: int
    attack_spell: str
    buff_spell: str


# Warrior: Brutal Smash / Valorous Presence
# Mage: Burst of Flames / Earthquake
# Healer: Healing Light / Protective Aura (no damage)
# Rogue: Pickpocket / Tools of the Trade (no damage)
CLASS_SPELLS: Dict[ClassKind, SpellCosts] = {
    ClassKind.WARRIOR: SpellCosts(
        attack_cost=10,
        buff_cost=20,
        attack_spell="Brutal Smash",
        buff_spell="Valorous Presence",
    ),
    ClassKind.MAGE: SpellCosts(
        attack_cost=10,
        buff_cost=35,
        attack_spell="Burst of Flames",
        buff_spell="Earthquake",
    ),
    ClassKind.HEALER: SpellCosts(
        attack_cost=15,
        buff_cost=30,
        attack_spell="Healing Light",
        buff_spell="Protective Aura",
    ),
    ClassKind.ROGUE: SpellCosts(
        attack_cost=10,
        buff_cost=25,
        attack_spell="Pickpocket",
        buff_spell="Tools of the Trade",
    ),
}


# =============================================================================
# MANA
# =============================================================================

# Max mana = INT * 2 + 30
MANA_PER_INT = 2
BASE_MANA = 30

# Cron restores a tenth of max mana
CRON_MANA_FRACTION = 0.1

# Fraction of max mana restored per completed task (no crit).
# Habits are assumed to be completed at half rate (+) and half (-), so they
# count for a quarter of a daily/to-do.
MANA_PER_DAILY_OR_TODO = 0.01
MANA_PER_HABIT = 0.0025


# =============================================================================
# TASK DAMAGE
# =============================================================================

# Lowest value multiplier a task can reach (a task that has been completed
# every day for a very long time). Damage is estimated from this floor.
MIN_TASK_VALUE_FACTOR = 0.9747 ** 21.27

# Damage bonus per point of STR
TASK_DAMAGE_PER_STR = 0.005

# Habits average half a task of damage
HABIT_TASK_WEIGHT = 0.5


# =============================================================================
# CRITICAL HITS (informational only)
# =============================================================================

BASE_CRIT_CHANCE = 0.03
BASE_CRIT_BONUS = 0.5
MAX_EXTRA_CRIT_BONUS = 4.0
CRIT_BONUS_HALF_STR = 200


# =============================================================================
# INPUT / SEARCH LIMITS
# =============================================================================

# name, class, level, eq int, eq str, alloc int, alloc str, day bonus,
# starting mana, projected dailies + to dos, projected habits
EXPECTED_COLUMNS = 11

# How many parent directories to climb looking for the repository root
REPO_SEARCH_MAX_LEVELS = 5

PARTY_FILE_SUFFIX = ".csv"
