"""
Habitica Calculator - Exceptions
================================
Every error raised by the calculator derives from CalculatorError so the
console and web front ends can report them in one place.

The core never catches these; callers decide whether to abort or skip.
"""

from typing import Any, Optional


class CalculatorError(Exception):
    """Base class for calculator errors."""

    def __init__(self, message: str = "Unknown calculator error"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# PLAYER RECORDS
# =============================================================================

class MalformedRecordError(CalculatorError, ValueError):
    """A party row has the wrong shape or a field that cannot be parsed."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidAttributesError(CalculatorError, ValueError):
    """A parsed player has attributes that are impossible in the game."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


# =============================================================================
# CALCULATIONS
# =============================================================================

class InfeasibleBuffError(CalculatorError, ValueError):
    """More buff casts were requested than the starting mana can pay for."""

    def __init__(self, num_buffs: int, buff_cost: int, starting_mana: int):
        self.num_buffs = num_buffs
        self.buff_cost = buff_cost
        self.starting_mana = starting_mana
        super().__init__(
            f"Not enough mana to cast {num_buffs} buffs "
            f"({num_buffs * buff_cost} mana needed, {starting_mana} available)."
        )


class UnboundedBuffError(CalculatorError):
    """Each team buff regenerates at least its own cost, so buffs never run out."""

    def __init__(self, name: str, regen_per_buff: float, buff_cost: int):
        self.name = name
        self.regen_per_buff = regen_per_buff
        self.buff_cost = buff_cost
        super().__init__(
            f"{name}: each buff regenerates {regen_per_buff:.1f} mana from tasks but only costs "
            f"{buff_cost}, so the sustainable buff count has no limit."
        )


# =============================================================================
# PARTY FILES
# =============================================================================

class PartyFileError(CalculatorError):
    """A party file could not be found or contains a bad row."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        super().__init__(message)
