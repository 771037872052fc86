"""Roster entries and a loader for Showdown team export text.

A team file holds one block per roster member, separated by blank lines:

    Sparky (Pikachu) (M) @ Light Ball
    Ability: Static
    Level: 50
    EVs: 252 SpA / 4 SpD / 252 Spe
    Timid Nature
    - Thunderbolt
    - Protect

Unrecognized lines (Tera Type, Shiny, ...) are skipped.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pokebattle.game.mechanics.random_source import RandomSource, SeededRandomSource

_GENDER_SUFFIXES = (" (M)", " (F)")
_STAT_ENTRY = re.compile(r"(\d+)\s+(\w+)")


@dataclass
class RosterEntry:
    """One roster member as a player submits it, before validation.

    ivs and evs are keyed by stat label ("HP", "Atk", "SpA", ...); missing
    IVs default to 31 and missing EVs to 0.
    """

    species: str
    moves: List[str]
    level: int = 100
    nature: str = "Serious"
    ability: str = ""
    item: Optional[str] = None
    nickname: Optional[str] = None
    ivs: Dict[str, int] = field(default_factory=dict)
    evs: Dict[str, int] = field(default_factory=dict)


def _parse_header(line: str) -> Tuple[str, Optional[str], Optional[str]]:
    """Split "Nickname (Species) (M) @ Item" into species, nickname and item."""
    name, _, item = line.partition(" @ ")
    name = name.strip()
    for suffix in _GENDER_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break

    nickname = None
    if name.endswith(")") and " (" in name:
        nickname, name = name[:-1].rsplit(" (", 1)
    return name.strip(), nickname, item.strip() or None


def _parse_stats(stats_str: str) -> Dict[str, int]:
    """Parse "252 SpA / 4 SpD" into {"SpA": 252, "SpD": 4}."""
    stats = {}
    for part in stats_str.split("/"):
        match = _STAT_ENTRY.match(part.strip())
        if match:
            value, stat = match.groups()
            stats[stat] = int(value)
    return stats


class TeamLoader:
    """Reads rosters from <teams_dir>/<format_name>/<team>.team files."""

    def __init__(self, teams_dir: str = "data/teams", format_name: str = "sample"):
        self.format_name = format_name
        self.teams_dir = Path(teams_dir)

    def load_team(
        self, team_name: Optional[str] = None, rng: Optional[RandomSource] = None
    ) -> List[RosterEntry]:
        """Load a team by file name, or a random team of the format.

        Raises:
            FileNotFoundError: If the team file or format directory is missing
        """
        if team_name is None:
            return self.get_random_team(rng or SeededRandomSource())

        team_file = self.teams_dir / self.format_name / f"{team_name}.team"
        if not team_file.exists():
            raise FileNotFoundError(f"Team file not found: {team_file}")
        return self.parse_team_file(str(team_file))

    def get_random_team(self, rng: RandomSource) -> List[RosterEntry]:
        format_dir = self.teams_dir / self.format_name
        if not format_dir.exists():
            raise FileNotFoundError(f"Format directory not found: {format_dir}")

        team_files = sorted(format_dir.glob("*.team"))
        if not team_files:
            raise FileNotFoundError(f"No team files found in {format_dir}")

        team_file = team_files[rng.randint(0, len(team_files) - 1)]
        return self.parse_team_file(str(team_file))

    def parse_team_file(self, file_path: str) -> List[RosterEntry]:
        return self.parse_team(Path(file_path).read_text())

    def parse_team(self, content: str) -> List[RosterEntry]:
        blocks = re.split(r"\n\s*\n", content.strip())
        return [self._parse_block(block) for block in blocks if block.strip()]

    def _parse_block(self, block: str) -> RosterEntry:
        lines = [line.strip() for line in block.strip().splitlines() if line.strip()]
        species, nickname, item = _parse_header(lines[0])
        entry = RosterEntry(species=species, moves=[], nickname=nickname, item=item)

        for line in lines[1:]:
            if line.startswith("-"):
                entry.moves.append(line[1:].strip())
            elif line.endswith(" Nature"):
                entry.nature = line[: -len(" Nature")].strip()
            elif ":" in line:
                key, value = (part.strip() for part in line.split(":", 1))
                if key == "Ability":
                    entry.ability = value
                elif key == "Level":
                    entry.level = int(value)
                elif key == "EVs":
                    entry.evs = _parse_stats(value)
                elif key == "IVs":
                    entry.ivs = _parse_stats(value)
        return entry
