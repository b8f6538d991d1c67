"""
Party Buff Optimizer
====================
Finds how many team buffs each party member should cast to maximize damage
dealt to the boss in one day.

Key concepts:
- Every buff cast costs starting mana that would otherwise go into attacks
- Buffs raise party STR (more task and Brutal Smash damage) and party INT
  (more mana from tasks and more Burst of Flames damage)
- Buff and attack formulas have diminishing returns, so party damage rises
  then falls as a player casts more buffs
- Crits are ignored and tasks are assumed to be at minimum value
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .core import AttackDamageResult, Player, Stats

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class MemberDamage:
    """Damage dealt by one party member under a buff assignment."""
    player: Player
    num_buffs: int
    task_damage: float
    attack: AttackDamageResult

    @property
    def total(self) -> float:
        return self.task_damage + self.attack.total

    def describe(self) -> str:
        return (f"- {self.player.name} deals {self.task_damage:.1f} task and "
                f"{self.attack.total:.1f} attack damage ({self.attack.describe()})")


@dataclass
class PartyOptimum:
    """Best party damage found and the buffs each member casts for it."""
    damage: float
    buff_counts: List[int]
    total_buff: Stats
    members: List[MemberDamage] = field(default_factory=list)

    def summary(self) -> str:
        buffs = ", ".join(f"{m.player.name}: {m.num_buffs}" for m in self.members)
        return f"Max Party Damage = {self.damage:.1f}; Buffs = {buffs}"

    def explain(self) -> str:
        lines = [member.describe() for member in self.members]
        lines.append(f"Total Buff = {self.total_buff}")
        return "\n".join(lines) + "\n"


@dataclass
class SingleAttackerResult:
    """Best damage for one attacker with the rest of the party fully buffing."""
    attacker: Player
    damage: float
    num_buffs: int
    attack: AttackDamageResult
    task_damage: float
    total_buff: Stats
    attacker_buff: Stats
    # (teammate name, buff contributed)
    contributions: List[Tuple[str, Stats]] = field(default_factory=list)

    def summary(self) -> str:
        return f"Max {self.attacker.name} Damage = {self.damage:.1f} with {self.num_buffs} buffs cast"

    def explain(self) -> str:
        sources = "".join(f"{buff} from {name}, " for name, buff in self.contributions)
        return (
            f"Attack Damage = {self.attack.total:.1f} ({self.attack.describe()})\n"
            f"Task Damage = {self.task_damage:.1f}\n"
            f"Buff = {self.total_buff} ({sources}{self.attacker_buff} from {self.attacker.name})\n"
        )


# =============================================================================
# TEAM DAMAGE
# =============================================================================

def calculate_team_buff(party: Sequence[Player], buff_counts: Sequence[int]) -> Stats:
    """Total party buff when member i casts buff_counts[i] buffs."""
    _check_assignment(party, buff_counts)
    total = Stats.zero()
    for player, num_buffs in zip(party, buff_counts):
        total += player.buff * num_buffs
    return total


def calculate_team_damage(party: Sequence[Player], buff_counts: Sequence[int]) -> float:
    """
    Most damage the party can deal with the given buffs per member.

    Formula:
        buff = sum(buff_i * n_i)
        damage = sum(max_attack_damage_i(buff, n_i) + task_damage_i(buff))

    Raises:
        InfeasibleBuffError: if a member cannot afford their buff count
    """
    buff = calculate_team_buff(party, buff_counts)
    damage = 0.0
    for player, num_buffs in zip(party, buff_counts):
        damage += player.max_attack_damage(buff, num_buffs).total
        damage += player.task_damage(buff)
    return damage


def evaluate_assignment(party: Sequence[Player], buff_counts: Sequence[int]) -> PartyOptimum:
    """Per-member damage breakdown for a buff assignment."""
    buff = calculate_team_buff(party, buff_counts)
    members = [
        MemberDamage(
            player=player,
            num_buffs=num_buffs,
            task_damage=player.task_damage(buff),
            attack=player.max_attack_damage(buff, num_buffs),
        )
        for player, num_buffs in zip(party, buff_counts)
    ]
    return PartyOptimum(
        damage=sum(member.total for member in members),
        buff_counts=list(buff_counts),
        total_buff=buff,
        members=members,
    )


def _check_assignment(party: Sequence[Player], buff_counts: Sequence[int]) -> None:
    if len(buff_counts) != len(party):
        raise ValueError(
            f"Expected one buff count per party member ({len(party)}), got {len(buff_counts)}")


# =============================================================================
# SINGLE ATTACKER
# =============================================================================

def calculate_max_single_damage(attacker: Player, party: Sequence[Player]) -> SingleAttackerResult:
    """
    Most damage one attacker can deal while the rest of the party casts as
    many buffs as their starting mana allows.

    The attacker's own buff count is scanned upward from zero and the scan
    stops at the first count that does not beat the previous one. Unlike the
    party optimizer, no dip is tolerated. The scan also stops once the
    attacker cannot afford another buff.

    Args:
        attacker: The player dealing damage
        party: The whole party; `attacker` itself is skipped if present
    """
    contributions = []
    team_buff = Stats.zero()
    for player in party:
        if player is attacker:
            continue
        buff = player.buff * player.max_buff_count
        team_buff += buff
        contributions.append((player.name, buff))

    best: Optional[SingleAttackerResult] = None
    for num_buffs in range(attacker.max_buff_count + 1):
        attacker_buff = attacker.buff * num_buffs
        total_buff = team_buff + attacker_buff
        attack = attacker.max_attack_damage(total_buff, num_buffs)
        task_damage = attacker.task_damage(total_buff)

        candidate = SingleAttackerResult(
            attacker=attacker,
            damage=attack.total + task_damage,
            num_buffs=num_buffs,
            attack=attack,
            task_damage=task_damage,
            total_buff=total_buff,
            attacker_buff=attacker_buff,
            contributions=contributions,
        )

        if best is None:
            # Zero buffs is always reported, even when it deals no damage
            best = candidate
            if candidate.damage <= 0:
                break
        elif candidate.damage <= best.damage:
            break
        else:
            best = candidate

    return best


# =============================================================================
# WHOLE PARTY
# =============================================================================

def calculate_max_party_damage(party: Sequence[Player]) -> PartyOptimum:
    """
    Most damage the whole party can deal, and the buffs per member to get it.

    Strategy: brute force every buff count per member, left to right, but
    stop raising a member's buff count once it is past the peak.
    """
    damage, buff_counts = _optimize_buffs(party, (), 0)
    optimum = evaluate_assignment(party, buff_counts)
    logger.debug("Party optimum %.1f with buffs %s", damage, buff_counts)
    return optimum


def _optimize_buffs(party: Sequence[Player], fixed: Tuple[int, ...],
                    position: int) -> Tuple[float, List[int]]:
    """
    Optimize buff counts for members at `position` and beyond.

    Args:
        party: The players in the party
        fixed: Buff counts already chosen for members before `position`
        position: First member whose buff count is still free

    Returns:
        (best damage, full assignment) given the fixed prefix
    """
    if position >= len(party):
        return calculate_team_damage(party, fixed), list(fixed)

    best_damage = 0.0
    best_counts = list(fixed) + [0] * (len(party) - position)

    no_gain = False
    for num_buffs in range(party[position].max_buff_count + 1):
        damage, counts = _optimize_buffs(party, fixed + (num_buffs,), position + 1)

        if damage > best_damage:
            no_gain = False
            best_damage = damage
            best_counts = counts
        else:
            # Continuous damage is concave down in buff count, so the first
            # drop would mark the peak. Spells are discrete though: a Mage
            # buff (35) is not a multiple of an attack (10), so damage can
            # dip once while still rising.
            if no_gain:
                logger.debug("%s: stopped at %d of %d buffs",
                             party[position].name, num_buffs, party[position].max_buff_count)
                break
            no_gain = True

    return best_damage, best_counts
