"""
Unit tests for buff_optimizer.py - Team damage, single attacker and party search.

Scripted players make the search behaviour easy to pin down: their damage
for each buff count comes from a table instead of the game formulas.
"""
import itertools

import pytest

from habitica_calculator.buff_optimizer import (
    PartyOptimum,
    calculate_max_party_damage,
    calculate_max_single_damage,
    calculate_team_buff,
    calculate_team_damage,
    evaluate_assignment,
)
from habitica_calculator.core import AttackDamageResult, Stats, create_player
from habitica_calculator.exceptions import InfeasibleBuffError


def make_player(name="Wulf", kind="warrior", level=10, eq_int=0, eq_str=0, alloc_int=0, alloc_str=0,
                day_bonus=False, mana=0, dailies=0, habits=0):
    return create_player([name, kind, str(level), str(eq_int), str(eq_str), str(alloc_int),
                          str(alloc_str), str(day_bonus).lower(), str(mana), str(dailies), str(habits)])


class ScriptedPlayer:
    """Stand-in player whose attack damage for n buffs is damage_table[n]."""

    def __init__(self, name, damage_table):
        self.name = name
        self.damage_table = damage_table
        self.buff = Stats.zero()
        self.max_buff_count = len(damage_table) - 1
        self.calls = []

    def max_attack_damage(self, buffs, num_buffs):
        if num_buffs > self.max_buff_count:
            raise InfeasibleBuffError(num_buffs, 1, self.max_buff_count)
        self.calls.append(num_buffs)
        return AttackDamageResult(
            total=self.damage_table[num_buffs],
            num_attacks=0,
            damage_per_attack=0,
            mana_regen=0,
            total_mana=0,
            num_buffs=num_buffs,
        )

    def task_damage(self, buffs):
        return 0.0


def exhaustive_best(party):
    """Best damage over every affordable assignment."""
    ranges = [range(p.max_buff_count + 1) for p in party]
    return max(calculate_team_damage(party, list(counts)) for counts in itertools.product(*ranges))


@pytest.fixture
def realistic_party():
    return [
        make_player(name="Wulf", kind="warrior", level=40, eq_str=40, alloc_str=40, mana=70,
                    dailies=12, habits=10),
        make_player(name="Merlin", kind="mage", level=35, eq_int=35, alloc_int=35, mana=140,
                    dailies=15, habits=6),
        make_player(name="Flo", kind="healer", level=20, mana=40, dailies=20, habits=20),
        make_player(name="Shade", kind="rogue", level=25, eq_str=10, mana=50, dailies=8),
    ]


class TestTeamDamage:
    """Tests for calculate_team_buff / calculate_team_damage."""

    def test_team_buff_sums_casts(self):
        warrior = make_player(name="A", mana=40)
        mage = make_player(name="B", kind="mage", mana=40)
        buff = calculate_team_buff([warrior, mage], [2, 1])
        assert buff == Stats(0, 0) + warrior.buff * 2 + mage.buff * 1

    def test_team_damage_sums_members(self):
        warrior = make_player(name="A", mana=40, dailies=10)
        healer = make_player(name="B", kind="healer", mana=30, dailies=5)
        party = [warrior, healer]
        buff = calculate_team_buff(party, [1, 0])
        expected = (warrior.max_attack_damage(buff, 1).total + warrior.task_damage(buff)
                    + healer.max_attack_damage(buff, 0).total + healer.task_damage(buff))
        assert calculate_team_damage(party, [1, 0]) == pytest.approx(expected)

    def test_all_zero_assignment(self):
        warrior = make_player(mana=40, dailies=10, habits=4)
        expected = warrior.max_attack_damage(Stats.zero(), 0).total + warrior.task_damage(Stats.zero())
        assert calculate_team_damage([warrior], [0]) == pytest.approx(expected)

    def test_unaffordable_assignment_fails(self):
        with pytest.raises(InfeasibleBuffError):
            calculate_team_damage([make_player(mana=40)], [3])

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            calculate_team_damage([make_player()], [0, 0])

    def test_evaluate_assignment_breakdown(self):
        party = [make_player(name="A", mana=40, dailies=10), make_player(name="B", kind="mage", mana=40)]
        result = evaluate_assignment(party, [1, 1])
        assert result.damage == pytest.approx(calculate_team_damage(party, [1, 1]))
        assert [m.num_buffs for m in result.members] == [1, 1]
        assert result.total_buff == calculate_team_buff(party, [1, 1])


class TestPartySearch:
    """Tests for calculate_max_party_damage with scripted damage curves."""

    def test_empty_party(self):
        result = calculate_max_party_damage([])
        assert result.damage == 0
        assert result.buff_counts == []

    def test_finds_peak(self):
        player = ScriptedPlayer("P", [1, 3, 5, 4, 2, 0])
        result = calculate_max_party_damage([player])
        assert result.buff_counts == [2]
        assert result.damage == 5

    def test_tolerates_one_dip(self):
        """A single non-improving step does not end the scan."""
        player = ScriptedPlayer("P", [1, 3, 2, 6, 0, 0])
        result = calculate_max_party_damage([player])
        assert result.buff_counts == [3]
        assert result.damage == 6

    def test_stops_after_two_misses(self):
        """Two non-improving steps in a row end the scan, even if a later count is better."""
        player = ScriptedPlayer("P", [1, 3, 2, 2, 9])
        result = calculate_max_party_damage([player])
        assert result.buff_counts == [1]
        assert result.damage == 3
        assert 4 not in player.calls

    def test_no_damage_keeps_zero_buffs(self):
        player = ScriptedPlayer("P", [0, 0, 0])
        result = calculate_max_party_damage([player])
        assert result.buff_counts == [0]
        assert result.damage == 0

    def test_two_members(self):
        a = ScriptedPlayer("A", [1, 4, 2])
        b = ScriptedPlayer("B", [0, 2, 5, 1])
        result = calculate_max_party_damage([a, b])
        assert result.buff_counts == [1, 2]
        assert result.damage == 9


class TestPartyOptimum:
    """Tests for calculate_max_party_damage with real players."""

    def test_lone_warrior_does_not_buff(self):
        """Each buff costs two attacks and only adds 0.49 STR."""
        warrior = make_player(mana=40)
        result = calculate_max_party_damage([warrior])
        assert result.buff_counts == [0]
        assert result.damage == pytest.approx(4 * 55 * 5 / 75)

    def test_never_worse_than_no_buffs(self, realistic_party):
        result = calculate_max_party_damage(realistic_party)
        no_buffs = calculate_team_damage(realistic_party, [0] * len(realistic_party))
        assert result.damage >= no_buffs

    def test_result_is_consistent(self, realistic_party):
        result = calculate_max_party_damage(realistic_party)
        assert isinstance(result, PartyOptimum)
        assert result.damage == pytest.approx(calculate_team_damage(realistic_party, result.buff_counts))
        assert result.damage == pytest.approx(sum(m.total for m in result.members))
        for player, num_buffs in zip(realistic_party, result.buff_counts):
            assert 0 <= num_buffs <= player.max_buff_count

    def test_no_better_than_exhaustive(self, realistic_party):
        result = calculate_max_party_damage(realistic_party)
        assert result.damage <= exhaustive_best(realistic_party) + 1e-9

    def test_matches_exhaustive_on_small_party(self):
        """Buffs only lose the Warrior attacks here, so the search must find zero buffs."""
        party = [make_player(name="Wulf", mana=40), make_player(name="Flo", kind="healer", level=20, mana=30)]
        result = calculate_max_party_damage(party)
        assert result.damage == pytest.approx(exhaustive_best(party))
        assert result.buff_counts == [0, 0]

    def test_summary(self):
        party = [make_player(name="Wulf", mana=40), make_player(name="Flo", kind="healer", level=20)]
        summary = calculate_max_party_damage(party).summary()
        assert summary == "Max Party Damage = 14.7; Buffs = Wulf: 0, Flo: 0"

    def test_explain(self):
        text = calculate_max_party_damage([make_player(name="Wulf", mana=40)]).explain()
        assert "- Wulf deals 0.0 task and 14.7 attack damage (4 attacks at 3.7 damage each" in text
        assert text.endswith("Total Buff = [Int: 0.0, Str: 0.0]\n")


class TestSingleAttacker:
    """Tests for calculate_max_single_damage."""

    def test_stops_at_first_non_improvement(self):
        """Unlike the party search, no dip is tolerated."""
        attacker = ScriptedPlayer("P", [1, 3, 2, 6])
        result = calculate_max_single_damage(attacker, [attacker])
        assert result.num_buffs == 1
        assert result.damage == 3

    def test_stops_when_out_of_mana(self):
        attacker = ScriptedPlayer("P", [1, 2, 3])
        result = calculate_max_single_damage(attacker, [attacker])
        assert result.num_buffs == 2
        assert result.damage == 3

    def test_zero_damage_reports_zero_buffs(self):
        attacker = ScriptedPlayer("P", [0, 5])
        result = calculate_max_single_damage(attacker, [attacker])
        assert result.num_buffs == 0
        assert result.damage == 0

    def test_teammates_cast_max_buffs(self):
        attacker = make_player(name="Wulf", mana=40, dailies=10)
        mage = make_player(name="Merlin", kind="mage", level=20, eq_int=20, mana=70)
        healer = make_player(name="Flo", kind="healer", level=20, mana=30)
        result = calculate_max_single_damage(attacker, [attacker, mage, healer])
        assert result.contributions == [("Merlin", mage.buff * 2), ("Flo", Stats.zero())]
        assert result.total_buff == mage.buff * 2 + attacker.buff * result.num_buffs

    def test_attacker_excluded_by_identity(self):
        """A teammate with identical attributes still counts as a teammate."""
        attacker = make_player(name="Twin", kind="mage", mana=40)
        twin = make_player(name="Twin", kind="mage", mana=40)
        assert attacker == twin
        result = calculate_max_single_damage(attacker, [attacker, twin])
        assert len(result.contributions) == 1

    def test_attacker_not_in_party(self):
        attacker = make_player(mana=40)
        result = calculate_max_single_damage(attacker, [])
        assert result.contributions == []
        assert result.damage == pytest.approx(4 * 55 * 5 / 75)

    def test_damage_matches_components(self, realistic_party):
        for attacker in realistic_party:
            result = calculate_max_single_damage(attacker, realistic_party)
            assert result.damage == pytest.approx(result.attack.total + result.task_damage)
            assert 0 <= result.num_buffs <= attacker.max_buff_count

    def test_summary_and_explain(self):
        attacker = make_player(name="Wulf", mana=40)
        healer = make_player(name="Flo", kind="healer", level=20)
        result = calculate_max_single_damage(attacker, [attacker, healer])
        assert result.summary() == "Max Wulf Damage = 14.7 with 0 buffs cast"
        explain = result.explain()
        assert "Attack Damage = 14.7 (4 attacks at 3.7 damage each; mana regenerated = 0.0)" in explain
        assert "Task Damage = 0.0" in explain
        assert "Buff = [Int: 0.0, Str: 0.0] ([Int: 0.0, Str: 0.0] from Flo, [Int: 0.0, Str: 0.0] from Wulf)" in explain
