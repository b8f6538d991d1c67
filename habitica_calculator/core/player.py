"""
Habitica Calculator - Player Model
==================================
A party member and everything derived from their attributes: stats, mana
income, task damage, attack spell damage and team buff.

Player is the abstract contract; Warrior, Mage, Healer and Rogue bind the
class-specific spell costs and formulas. Players are immutable: every
derived value is a pure function of the fields set at construction.

Party file row layout (11 columns):
    name, class, level, equipment INT, equipment STR, allocated INT,
    allocated STR, perfect day bonus, starting mana,
    projected dailies + to dos, projected habits
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Sequence, Type

from ..exceptions import (
    InfeasibleBuffError,
    InvalidAttributesError,
    MalformedRecordError,
    UnboundedBuffError,
)
from .constants import (
    BASE_MANA,
    CLASS_SPELLS,
    CRON_MANA_FRACTION,
    EXPECTED_COLUMNS,
    MANA_PER_DAILY_OR_TODO,
    MANA_PER_HABIT,
    MANA_PER_INT,
    ClassKind,
)
from .damage import (
    AttackDamageResult,
    calculate_crit_bonus,
    calculate_crit_chance,
    calculate_task_damage,
    mage_attack_damage,
    mage_buff,
    no_attack_damage,
    no_buff,
    warrior_attack_damage,
    warrior_buff,
)
from .stats import Stats

logger = logging.getLogger(__name__)


# Column names, in file order, used in error messages
ROW_FIELDS = (
    'name',
    'class',
    'level',
    'equipment_int',
    'equipment_str',
    'allocated_int',
    'allocated_str',
    'day_bonus',
    'starting_mana',
    'projected_dailies_and_todos',
    'projected_habits',
)


# =============================================================================
# BASE CLASS
# =============================================================================

@dataclass(frozen=True)
class Player(ABC):
    """Base player shared between all classes."""
    name: str
    level: int
    equipment: Stats
    allocation: Stats
    day_bonus: bool
    starting_mana: int
    projected_dailies_and_todos: int
    projected_habits: int

    kind: ClassVar[ClassKind]

    def __post_init__(self):
        numeric = {
            'starting_mana': self.starting_mana,
            'equipment_int': self.equipment.int_,
            'equipment_str': self.equipment.str_,
            'allocated_int': self.allocation.int_,
            'allocated_str': self.allocation.str_,
            'projected_dailies_and_todos': self.projected_dailies_and_todos,
            'projected_habits': self.projected_habits,
        }
        if self.level < 1:
            raise InvalidAttributesError(
                f"{self.name}: level must be at least 1 (was {self.level}).",
                field='level', value=self.level)
        for field_name, value in numeric.items():
            if value < 0:
                raise InvalidAttributesError(
                    f"{self.name}: {field_name} cannot be negative (was {value}).",
                    field=field_name, value=value)

        if self.allocation.total() > self.level:
            raise InvalidAttributesError(
                f"{self.name}: total allocation cannot exceed level. "
                f"Allocation={self.allocation}, Level={self.level}.",
                field='allocation', value=self.allocation)

        capacity = self.mana_capacity()
        if self.starting_mana > capacity:
            raise InvalidAttributesError(
                f"{self.name}: starting mana exceeds limit. "
                f"Mana={self.starting_mana}, Max={capacity:.0f}, Int={self.starting_stats.int_:.1f}.",
                field='starting_mana', value=self.starting_mana)

    # -------------------------------------------------------------------------
    # Class contract
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def attack_cost(self) -> int:
        """Mana cost of this class's attack spell."""

    @property
    @abstractmethod
    def buff_cost(self) -> int:
        """Mana cost of this class's team buff spell."""

    @property
    @abstractmethod
    def buff(self) -> Stats:
        """Increase in party stats from one cast of the team buff."""

    @abstractmethod
    def attack_damage(self, buffs: Stats) -> float:
        """Damage dealt by one attack spell with the given party buffs."""

    @property
    def attack_spell(self) -> str:
        return CLASS_SPELLS[self.kind].attack_spell

    @property
    def buff_spell(self) -> str:
        return CLASS_SPELLS[self.kind].buff_spell

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    @property
    def unbuffed_stats(self) -> Stats:
        """Stats before any buffs; buff spells scale from these."""
        return self.level // 2 + self.equipment + self.allocation

    @property
    def starting_stats(self) -> Stats:
        """Stats before any team buffs are cast (includes perfect day bonus)."""
        bonus = (self.level + 1) // 2 if self.day_bonus else 0
        return self.unbuffed_stats + bonus

    def current_stats(self, buffs: Stats) -> Stats:
        return self.starting_stats + buffs

    # -------------------------------------------------------------------------
    # Mana
    # -------------------------------------------------------------------------

    def mana_capacity(self, buffs: Stats = Stats()) -> float:
        """Max mana = 2 * INT + 30."""
        return MANA_PER_INT * (self.starting_stats.int_ + buffs.int_) + BASE_MANA

    @property
    def mana_regen_from_cron(self) -> float:
        """Mana restored on the next cron."""
        return self.mana_capacity() * CRON_MANA_FRACTION

    def mana_regen_from_tasks(self, buffs: Stats) -> float:
        """
        Mana restored by completing the projected tasks, assuming no crits.

        Dailies and to dos restore 1% of max mana; habits a quarter of that.
        """
        return self.mana_capacity(buffs) * self.task_mana_fraction

    @property
    def task_mana_fraction(self) -> float:
        """Share of max mana restored by the projected tasks."""
        return (self.projected_dailies_and_todos * MANA_PER_DAILY_OR_TODO
                + self.projected_habits * MANA_PER_HABIT)

    def sustainable_mana(self, buffs: Stats = Stats()) -> float:
        return self.mana_regen_from_tasks(buffs) + self.mana_regen_from_cron

    @property
    def max_buff_count(self) -> int:
        """Team buffs castable from starting mana alone."""
        return self.starting_mana // self.buff_cost

    @property
    def regen_per_buff(self) -> float:
        """Extra mana regenerated from tasks for every team buff this player casts."""
        return MANA_PER_INT * self.buff.int_ * self.task_mana_fraction

    def sustainable_buff_iterations(self) -> List[int]:
        """
        Successive estimates of the sustainable buff count.

        The buff itself can raise max mana and with it the mana regenerated
        from tasks, which may pay for more buffs. Iterates until the estimate
        stops growing; the last entry is the answer.

        While a buff regenerates less than it costs, the estimates are bounded
        by sustainable_mana() / (buff_cost - regen_per_buff) and the loop ends.

        Raises:
            UnboundedBuffError: if a buff regenerates at least its own cost
        """
        num_buffs = math.floor(self.sustainable_mana() / self.buff_cost)
        iterations = [num_buffs]

        while True:
            next_buffs = math.floor(self.sustainable_mana(self.buff * num_buffs) / self.buff_cost)
            if next_buffs <= num_buffs:
                logger.debug("%s: sustainable buffs converged to %d after %d steps",
                             self.name, num_buffs, len(iterations))
                return iterations
            if self.regen_per_buff >= self.buff_cost:
                raise UnboundedBuffError(self.name, self.regen_per_buff, self.buff_cost)
            num_buffs = next_buffs
            iterations.append(num_buffs)

    @property
    def sustainable_buff_count(self) -> int:
        """Most team buffs castable per day while starting tomorrow with at least as much mana."""
        return self.sustainable_buff_iterations()[-1]

    # -------------------------------------------------------------------------
    # Damage
    # -------------------------------------------------------------------------

    def task_damage(self, buffs: Stats) -> float:
        """Damage from completing the projected tasks (minimum task value, no crits)."""
        strength = self.current_stats(buffs).str_
        return calculate_task_damage(self.projected_dailies_and_todos, self.projected_habits, strength)

    def crit_chance(self, buffs: Stats) -> float:
        return calculate_crit_chance(self.current_stats(buffs).str_)

    def crit_bonus(self, buffs: Stats) -> float:
        return calculate_crit_bonus(self.current_stats(buffs).str_)

    def max_attack_damage(self, buffs: Stats, num_buffs: int) -> AttackDamageResult:
        """
        Most attack spell damage this player can deal today.

        Starting mana pays for `num_buffs` team buffs first; everything left,
        plus mana regenerated from tasks, goes into attacks. No crits.

        Raises:
            InfeasibleBuffError: if starting mana cannot pay for num_buffs
        """
        if num_buffs < 0:
            raise ValueError(f"num_buffs cannot be negative (was {num_buffs})")
        if num_buffs * self.buff_cost > self.starting_mana:
            raise InfeasibleBuffError(num_buffs, self.buff_cost, self.starting_mana)

        mana_regen = self.mana_regen_from_tasks(buffs)
        total_mana = self.starting_mana + mana_regen
        damage_per_attack = self.attack_damage(buffs)
        num_attacks = math.floor((total_mana - num_buffs * self.buff_cost) / self.attack_cost)

        return AttackDamageResult(
            total=damage_per_attack * num_attacks,
            num_attacks=num_attacks,
            damage_per_attack=damage_per_attack,
            mana_regen=mana_regen,
            total_mana=total_mana,
            num_buffs=num_buffs,
        )

    # -------------------------------------------------------------------------
    # Reporting
    # -------------------------------------------------------------------------

    def verbose_report(self) -> str:
        """Detailed information about the player before any team buffs."""
        zero = Stats.zero()
        regen_from_tasks = self.mana_regen_from_tasks(zero)
        total_mana = self.starting_mana + regen_from_tasks

        sustainable_mana = self.sustainable_mana()
        sustainable_attacks = math.floor(sustainable_mana / self.attack_cost)
        damage_per_attack = self.attack_damage(zero)
        attack = self.max_attack_damage(zero, 0)
        sustainable_buffs = self.sustainable_buff_count

        return (
            f"{self.name} Info (before team buffs):\n"
            f"Starting Stats = {self.starting_stats}\n"
            f"Crit Chance = {100 * self.crit_chance(zero):.1f}% for a {100 * self.crit_bonus(zero):.0f}% bonus\n"
            f"Buff Effect = {self.buff}, for a max of {self.buff * self.max_buff_count} ({self.max_buff_count} casts)\n"
            f"Total Mana = {total_mana:.1f} ({self.starting_mana:.1f} at start, {regen_from_tasks:.1f} regenerated from tasks)\n"
            f"Task Damage = {self.task_damage(zero):.1f}\n"
            f"Max Attack Damage = {attack.total:.1f} ({attack.describe()})\n"
            f"Sustainable Mana = {sustainable_mana:.1f} ({regen_from_tasks:.1f} from tasks, {self.mana_regen_from_cron:.1f} from cron)\n"
            f"Sustainable Attack Damage = {sustainable_attacks * damage_per_attack:.1f} "
            f"({sustainable_attacks} attacks at {damage_per_attack:.1f} damage each)\n"
            f"Sustainable Buff = {self.buff * sustainable_buffs} ({sustainable_buffs} casts)\n"
        )

    def to_row(self) -> List[str]:
        """Serialize back to the 11-column party file layout."""
        return [
            self.name,
            self.kind.value,
            str(self.level),
            _format_number(self.equipment.int_),
            _format_number(self.equipment.str_),
            _format_number(self.allocation.int_),
            _format_number(self.allocation.str_),
            str(self.day_bonus).lower(),
            str(self.starting_mana),
            str(self.projected_dailies_and_todos),
            str(self.projected_habits),
        ]


# =============================================================================
# CLASSES
# =============================================================================

class Warrior(Player):
    """Attacks with Brutal Smash, buffs party STR with Valorous Presence."""
    kind = ClassKind.WARRIOR

    @property
    def attack_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.WARRIOR].attack_cost

    @property
    def buff_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.WARRIOR].buff_cost

    @property
    def buff(self) -> Stats:
        return warrior_buff(self.unbuffed_stats)

    def attack_damage(self, buffs: Stats) -> float:
        return warrior_attack_damage(self.current_stats(buffs))


class Mage(Player):
    """Attacks with Burst of Flames, buffs party INT with Earthquake."""
    kind = ClassKind.MAGE

    @property
    def attack_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.MAGE].attack_cost

    @property
    def buff_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.MAGE].buff_cost

    @property
    def buff(self) -> Stats:
        return mage_buff(self.unbuffed_stats)

    def attack_damage(self, buffs: Stats) -> float:
        return mage_attack_damage(self.current_stats(buffs))


class Healer(Player):
    kind = ClassKind.HEALER

    @property
    def attack_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.HEALER].attack_cost

    @property
    def buff_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.HEALER].buff_cost

    @property
    def buff(self) -> Stats:
        return no_buff(self.unbuffed_stats)

    def attack_damage(self, buffs: Stats) -> float:
        return no_attack_damage(self.current_stats(buffs))


class Rogue(Player):
    kind = ClassKind.ROGUE

    @property
    def attack_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.ROGUE].attack_cost

    @property
    def buff_cost(self) -> int:
        return CLASS_SPELLS[ClassKind.ROGUE].buff_cost

    @property
    def buff(self) -> Stats:
        return no_buff(self.unbuffed_stats)

    def attack_damage(self, buffs: Stats) -> float:
        return no_attack_damage(self.current_stats(buffs))


PLAYER_CLASSES: Dict[ClassKind, Type[Player]] = {
    ClassKind.WARRIOR: Warrior,
    ClassKind.MAGE: Mage,
    ClassKind.HEALER: Healer,
    ClassKind.ROGUE: Rogue,
}


# =============================================================================
# ROW PARSING
# =============================================================================

def parse_class_kind(value: str) -> ClassKind:
    """
    Match a class name case-insensitively.

    Raises:
        MalformedRecordError: if the name is not a Habitica class
    """
    try:
        return ClassKind(value.strip().lower())
    except ValueError:
        raise MalformedRecordError(
            f"The provided class of '{value}' is not a Habitica class. Please see "
            f"https://habitica.fandom.com/wiki/Class_System for the possible classes.",
            field='class', value=value) from None


def create_player(row: Sequence[str]) -> Player:
    """
    Create a player from one party file row, already split into columns.

    Raises:
        MalformedRecordError: wrong column count, unknown class or unparseable field
        InvalidAttributesError: values that are impossible in the game
    """
    if len(row) != EXPECTED_COLUMNS:
        raise MalformedRecordError(
            f"Row does not contain the correct number of columns "
            f"(expected {EXPECTED_COLUMNS}, but was {len(row)})",
            field='row', value=len(row))

    fields = dict(zip(ROW_FIELDS, row))
    player_class = PLAYER_CLASSES[parse_class_kind(fields['class'])]

    return player_class(
        name=fields['name'].strip(),
        level=_parse_int(fields, 'level'),
        equipment=Stats(_parse_int(fields, 'equipment_int'), _parse_int(fields, 'equipment_str')),
        allocation=Stats(_parse_int(fields, 'allocated_int'), _parse_int(fields, 'allocated_str')),
        day_bonus=_parse_bool(fields, 'day_bonus'),
        starting_mana=_parse_int(fields, 'starting_mana'),
        projected_dailies_and_todos=_parse_int(fields, 'projected_dailies_and_todos'),
        projected_habits=_parse_int(fields, 'projected_habits'),
    )


def _parse_int(fields: Dict[str, str], field_name: str) -> int:
    value = fields[field_name]
    try:
        return int(value.strip())
    except ValueError:
        raise MalformedRecordError(
            f"Field '{field_name}' must be a whole number (was '{value}')",
            field=field_name, value=value) from None


def _parse_bool(fields: Dict[str, str], field_name: str) -> bool:
    value = fields[field_name]
    normalized = value.strip().lower()
    if normalized == 'true':
        return True
    if normalized == 'false':
        return False
    raise MalformedRecordError(
        f"Field '{field_name}' must be true or false (was '{value}')",
        field=field_name, value=value)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
