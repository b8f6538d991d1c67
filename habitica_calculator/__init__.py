"""
Habitica Party Damage Calculator
================================
Estimates how much boss damage a Habitica party can deal in one day and how
many team buffs each member should cast to maximize it.
"""

__version__ = "1.0.0"
