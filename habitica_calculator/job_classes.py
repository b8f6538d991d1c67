"""
Habitica Calculator - Class Display Data
========================================
Display names and colors for each Habitica class.

The math for each class lives in core.player; this module only covers how a
class is presented in the console and web front ends.
"""

from typing import Dict

from .core import ClassKind, Player


# Display names for classes
CLASS_DISPLAY_NAMES: Dict[ClassKind, str] = {
    ClassKind.WARRIOR: "Warrior",
    ClassKind.MAGE: "Mage",
    ClassKind.HEALER: "Healer",
    ClassKind.ROGUE: "Rogue",
}


# ANSI foreground colors for console output
ANSI_RESET = "\033[0m"
ANSI_RED = "\033[31m"
ANSI_YELLOW = "\033[33m"
ANSI_MAGENTA = "\033[35m"
ANSI_CYAN = "\033[36m"
ANSI_WHITE = "\033[97m"
ANSI_GRAY = "\033[90m"

CLASS_ANSI_COLORS: Dict[ClassKind, str] = {
    ClassKind.WARRIOR: ANSI_RED,
    ClassKind.MAGE: ANSI_CYAN,
    ClassKind.HEALER: ANSI_YELLOW,
    ClassKind.ROGUE: ANSI_MAGENTA,
}


# Hex colors for the web UI (roughly Habitica's class colors)
CLASS_HEX_COLORS: Dict[ClassKind, str] = {
    ClassKind.WARRIOR: "#ff6666",
    ClassKind.MAGE: "#55ccff",
    ClassKind.HEALER: "#ffcc00",
    ClassKind.ROGUE: "#cc77ff",
}


def get_display_name(kind: ClassKind) -> str:
    return CLASS_DISPLAY_NAMES[kind]


def get_ansi_color(player: Player) -> str:
    """Console color used to identify a player's class."""
    return CLASS_ANSI_COLORS[player.kind]


def get_hex_color(player: Player) -> str:
    """Web color used to identify a player's class."""
    return CLASS_HEX_COLORS[player.kind]


# Export list for convenience
__all__ = [
    'CLASS_DISPLAY_NAMES',
    'CLASS_ANSI_COLORS',
    'CLASS_HEX_COLORS',
    'ANSI_RESET',
    'ANSI_WHITE',
    'ANSI_GRAY',
    'ANSI_RED',
    'get_display_name',
    'get_ansi_color',
    'get_hex_color',
]
