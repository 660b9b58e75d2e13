"""Depth chart data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class InjuryStatus(Enum):
    NONE = "NONE"
    OUT = "OUT"
    DAY_TO_DAY = "DAY_TO_DAY"


@dataclass(frozen=True)
class DepthEntry:
    """One occupied slot in a position's depth chart.

    Attributes:
        depth: 1-based rank within the position (1 = starter). Derived from
            the cell's column, so depths can skip numbers where a slot is empty.
        name: Display name exactly as the source lists it.
        external_id: ESPN player id taken from the profile link, if any.
        injury_status: Status flag read from the cell text.
    """

    depth: int
    name: str
    external_id: str | None = None
    injury_status: InjuryStatus = InjuryStatus.NONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "depth": self.depth,
            "name": self.name,
            "external_id": self.external_id,
            "injury_status": self.injury_status.value,
        }


@dataclass(frozen=True)
class DepthChart:
    """A team's depth chart as of one successful parse.

    Attributes:
        team: Uppercase team abbreviation (e.g. "ATL").
        retrieved_at: When the markup was parsed.
        positions: Position label to entries in depth order. Keys follow the
            source table's row order.

    Charts hash by team, timestamp and positions, so equal charts hash equal
    even though ``positions`` is a dict.
    """

    team: str
    retrieved_at: datetime
    positions: dict[str, tuple[DepthEntry, ...]] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash((self.team, self.retrieved_at, frozenset(self.positions.items())))

    def same_content(self, other: "DepthChart") -> bool:
        """Compare team and positions, ignoring when each chart was retrieved."""
        return self.team == other.team and self.positions == other.positions

    def to_dict(self) -> dict[str, Any]:
        return {
            "team": self.team,
            "retrieved_at": self.retrieved_at.isoformat(),
            "positions": {pos: [e.to_dict() for e in entries] for pos, entries in self.positions.items()},
        }


def _slot_summary(entry: DepthEntry) -> dict[str, Any]:
    return {"name": entry.name, "depth": entry.depth, "external_id": entry.external_id}


@dataclass(frozen=True)
class BackupResult:
    """Replacements for a player, taken from the position they were found in.

    Attributes:
        position: Position label the queried player was matched under.
        matched_entry: The queried player's entry.
        primary_backup: The next entry in depth order, or None if the player is last.
        candidates: Up to three entries following the player, in depth order.
    """

    position: str
    matched_entry: DepthEntry
    primary_backup: DepthEntry | None
    candidates: tuple[DepthEntry, ...] = ()

    def summary(self) -> dict[str, Any]:
        """JSON-friendly view: matched depth plus name/depth/id for each backup."""
        return {
            "position": self.position,
            "player": self.matched_entry.name,
            "depth": self.matched_entry.depth,
            "primary_backup": _slot_summary(self.primary_backup) if self.primary_backup else None,
            "candidates": [_slot_summary(e) for e in self.candidates],
        }


@dataclass(frozen=True)
class NotFound:
    """The queried name matched no entry in any position."""

    query: str
