"""
Party file loading.

A party file is a CSV with one header row followed by one row per player
(see core.player for the column layout). Candidate files are found by
searching the repository the calculator is run from.
"""
import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .core import PARTY_FILE_SUFFIX, REPO_SEARCH_MAX_LEVELS, Player, create_player
from .exceptions import InvalidAttributesError, MalformedRecordError, PartyFileError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Written by write_party and expected (but not checked) by read_party
PARTY_FILE_HEADER = [
    "Name", "Class", "Level", "Equipment Int", "Equipment Str",
    "Allocated Int", "Allocated Str", "Perfect Day", "Starting Mana",
    "Projected Dailies and To Dos", "Projected Habits",
]


def read_party(path: PathLike, skip_invalid: bool = False) -> List[Player]:
    """
    Read every player from a party file.

    Args:
        path: Path to the party CSV
        skip_invalid: Log and skip bad rows instead of raising

    Raises:
        PartyFileError: if a row is malformed or describes an impossible player
    """
    with open(path, newline='', encoding='utf-8') as f:
        return parse_party(f, source=str(path), skip_invalid=skip_invalid)


def parse_party(lines: Iterable[str], source: str = "<party>",
                skip_invalid: bool = False) -> List[Player]:
    """Parse party file contents (header row first). See read_party."""
    players = []
    reader = csv.reader(lines)
    next(reader, None)  # header

    for row in reader:
        if not row or all(not cell.strip() for cell in row):
            continue
        try:
            players.append(create_player(row))
        except (MalformedRecordError, InvalidAttributesError) as e:
            message = f"{source}, line {reader.line_num}: {e.message}"
            if skip_invalid:
                logging.warning(f"Skipping player. {message}")
                continue
            raise PartyFileError(message, path=source, line=reader.line_num) from e

    logger.info("Read %d players from %s", len(players), source)
    return players


def write_party(path: PathLike, party: Sequence[Player]) -> None:
    """Write players to a party file that read_party can load back."""
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(PARTY_FILE_HEADER)
        for player in party:
            writer.writerow(player.to_row())


# =============================================================================
# FILE DISCOVERY
# =============================================================================

def find_repo_root(start: PathLike = ".", max_levels: int = REPO_SEARCH_MAX_LEVELS) -> Path:
    """
    Walk up from `start` looking for the directory that holds `.git`.

    Gives up after `max_levels` parents and returns `start` itself.
    """
    start = Path(start).resolve()
    current = start
    for _ in range(max_levels + 1):
        if (current / ".git").is_dir():
            return current
        if current.parent == current:
            break
        current = current.parent
    return start


def find_party_files(root: PathLike) -> List[Path]:
    """Every party file (.csv) below `root`, sorted."""
    return sorted(p for p in Path(root).rglob(f"*{PARTY_FILE_SUFFIX}") if p.is_file())


def select_party_file(candidates: Sequence[Path], choice: Optional[str] = None) -> Path:
    """
    Pick the party file to use.

    With one candidate it is used directly. With several, `choice` is used
    if it names one of them, otherwise the first candidate.

    Raises:
        PartyFileError: if there are no candidates
    """
    if not candidates:
        raise PartyFileError(
            "No party files found. Please save party info in a .csv file "
            "using the schema used in Party.csv in the repository.")

    if len(candidates) == 1 or not choice:
        selected = candidates[0]
    else:
        by_name = {str(c): c for c in candidates}
        selected = by_name.get(choice.strip())
        if selected is None:
            chosen = Path(choice.strip())
            selected = next((c for c in candidates if c.resolve() == chosen.resolve()), candidates[0])

    logger.info("Using party file %s", selected)
    return selected
