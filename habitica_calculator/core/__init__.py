"""
Habitica Calculator - Core Math Module
======================================
Single source of truth for stats, mana, damage formulas and game constants.

All other modules should import from here rather than implementing their own formulas.
"""

from .constants import (
    # Classes
    ClassKind,
    SpellCosts,
    CLASS_SPELLS,
    # Mana
    MANA_PER_INT,
    BASE_MANA,
    CRON_MANA_FRACTION,
    MANA_PER_DAILY_OR_TODO,
    MANA_PER_HABIT,
    # Tasks
    MIN_TASK_VALUE_FACTOR,
    TASK_DAMAGE_PER_STR,
    # Limits
    EXPECTED_COLUMNS,
    REPO_SEARCH_MAX_LEVELS,
    PARTY_FILE_SUFFIX,
)

from .stats import Stats

from .damage import (
    AttackDamageResult,
    warrior_buff,
    warrior_attack_damage,
    mage_buff,
    mage_attack_damage,
    calculate_task_damage,
    calculate_crit_chance,
    calculate_crit_bonus,
)

from .player import (
    Player,
    Warrior,
    Mage,
    Healer,
    Rogue,
    PLAYER_CLASSES,
    ROW_FIELDS,
    create_player,
    parse_class_kind,
)

__all__ = [
    # Constants
    'ClassKind',
    'SpellCosts',
    'CLASS_SPELLS',
    'MANA_PER_INT',
    'BASE_MANA',
    'CRON_MANA_FRACTION',
    'MANA_PER_DAILY_OR_TODO',
    'MANA_PER_HABIT',
    'MIN_TASK_VALUE_FACTOR',
    'TASK_DAMAGE_PER_STR',
    'EXPECTED_COLUMNS',
    'REPO_SEARCH_MAX_LEVELS',
    'PARTY_FILE_SUFFIX',
    # Stats
    'Stats',
    # Damage formulas
    'AttackDamageResult',
    'warrior_buff',
    'warrior_attack_damage',
    'mage_buff',
    'mage_attack_damage',
    'calculate_task_damage',
    'calculate_crit_chance',
    'calculate_crit_bonus',
    # Players
    'Player',
    'Warrior',
    'Mage',
    'Healer',
    'Rogue',
    'PLAYER_CLASSES',
    'ROW_FIELDS',
    'create_player',
    'parse_class_kind',
]
