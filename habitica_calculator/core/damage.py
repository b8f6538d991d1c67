"""
Habitica Calculator - Core Damage Calculation
=============================================
Single source of truth for the class spell formulas and the task/crit
formulas shared by every class.

All functions are pure. Buff effects take the caster's *unbuffed* stats;
attack damage takes the caster's current stats (starting stats + buffs).
"""

import math
from dataclasses import dataclass

from .constants import (
    BASE_CRIT_BONUS,
    BASE_CRIT_CHANCE,
    CRIT_BONUS_HALF_STR,
    HABIT_TASK_WEIGHT,
    MAX_EXTRA_CRIT_BONUS,
    MIN_TASK_VALUE_FACTOR,
    TASK_DAMAGE_PER_STR,
)
from .stats import Stats


# =============================================================================
# RESULT DATACLASS
# =============================================================================

@dataclass(frozen=True)
class AttackDamageResult:
    """Attack spell damage for one player over a day, with its breakdown."""
    total: float
    num_attacks: int
    damage_per_attack: float
    mana_regen: float
    total_mana: float
    num_buffs: int

    def describe(self) -> str:
        """One-line explanation used in verbose output."""
        return (f"{self.num_attacks} attacks at {self.damage_per_attack:.1f} damage each; "
                f"mana regenerated = {self.mana_regen:.1f}")

    def breakdown(self) -> str:
        """Return formatted breakdown of the attack damage calculation."""
        return f"""
Attack Damage Breakdown
=======================
Total Mana:         {self.total_mana:,.1f}
  from tasks:       {self.mana_regen:,.1f}
Buffs Cast:         {self.num_buffs}
Attacks:            {self.num_attacks}
x Damage/Attack:    {self.damage_per_attack:,.1f}
-----------------------
= Attack Damage:    {self.total:,.1f}
"""


# =============================================================================
# WARRIOR
# =============================================================================

def warrior_buff(unbuffed: Stats) -> Stats:
    """
    Valorous Presence: party STR buff.

    Formula:
        STR buff = 20 * STR / (STR + 200)
    """
    strength = unbuffed.str_
    return Stats(0, 20 * strength / (strength + 200))


def warrior_attack_damage(current: Stats) -> float:
    """
    Brutal Smash damage per cast.

    Formula:
        Damage = 55 * STR / (STR + 70)
    """
    strength = current.str_
    return 55 * strength / (strength + 70)


# =============================================================================
# MAGE
# =============================================================================

def mage_buff(unbuffed: Stats) -> Stats:
    """
    Earthquake: party INT buff.

    Formula:
        INT buff = 30 * INT / (INT + 200)
    """
    intelligence = unbuffed.int_
    return Stats(30 * intelligence / (intelligence + 200), 0)


def mage_attack_damage(current: Stats) -> float:
    """
    Burst of Flames damage per cast.

    Formula:
        Damage = ceil(INT / 10)

    Assumes the cheapest possible target task (value of zero).
    """
    return math.ceil(current.int_ / 10)


# =============================================================================
# HEALER / ROGUE
# =============================================================================

def no_buff(unbuffed: Stats) -> Stats:
    """Healer and Rogue buffs (CON, PER) do not affect damage."""
    return Stats.zero()


def no_attack_damage(current: Stats) -> float:
    """Healer and Rogue have no damaging spell."""
    return 0.0


# =============================================================================
# TASKS
# =============================================================================

def calculate_task_damage(dailies_and_todos: int, habits: int, strength: float) -> float:
    """
    Boss damage from completing the projected tasks.

    Formula:
        Damage = (Dailies + ToDos + Habits/2) * (1 + 0.005 * STR) * MinTaskValue

    To be conservative the minimum possible task value and no crits are
    assumed. Habits are assumed to be clicked up half the time.
    """
    num_tasks = dailies_and_todos + habits * HABIT_TASK_WEIGHT
    str_multiplier = 1 + TASK_DAMAGE_PER_STR * strength
    return num_tasks * str_multiplier * MIN_TASK_VALUE_FACTOR


# =============================================================================
# CRITICAL HITS
# =============================================================================

def calculate_crit_chance(strength: float) -> float:
    """
    Chance of a critical hit when completing a task, in [0, 1].

    Formula:
        Chance = 0.03 * (1 + STR / 100)
    """
    return BASE_CRIT_CHANCE * (1 + strength / 100)


def calculate_crit_bonus(strength: float) -> float:
    """
    Extra rewards on a critical hit, as a fraction of the normal reward.

    Formula:
        Bonus = 0.5 + 4 * STR / (STR + 200)
    """
    return BASE_CRIT_BONUS + MAX_EXTRA_CRIT_BONUS * strength / (strength + CRIT_BONUS_HALF_STR)
