"""Data models for generated bracket structures."""

# Bracket Forge
# Copyright (C) 2025  Bracket Forge developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from bracketforge.exceptions import RoundNotFoundException
from bracketforge.models.match import Match
from bracketforge.models.participant import SeededParticipant
from bracketforge.type_hints import BracketFormat


@dataclass(frozen=True)
class Round:
    """Container for the matches of one round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed) within the structure.
    name : str
        Human readable label, e.g. "Final" or "Group Stage".
    stage : str
        Machine key for the round, e.g. "finals" or "group_stage".
    matches : tuple of Match
        Matches in generation order.
    """

    round_number: int
    name: str
    stage: str
    matches: Tuple[Match, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            "round_number": self.round_number,
            "name": self.name,
            "stage": self.stage,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            round_number=data["round_number"],
            name=data["name"],
            stage=data.get("stage", ""),
            matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
        )


@dataclass(frozen=True)
class BracketStructure:
    """A generated single-elimination, round-robin or hybrid structure.

    Built once per generation call and never mutated afterwards. Advancing
    winners into TBD slots is done by the surrounding system on its own
    copy of the matches.

    Attributes
    ----------
    format : str
        The tournament format that produced this structure.
    rounds : tuple of Round
        Rounds in play order.
    total_rounds : int
        Number of rounds in ``rounds``.
    participants : tuple of SeededParticipant
        Seeded snapshot used to build the structure.
    groups : tuple of tuple of SeededParticipant
        Hybrid groups in group order; empty for other formats.
    """

    format: BracketFormat
    rounds: Tuple[Round, ...]
    total_rounds: int
    participants: Tuple[SeededParticipant, ...]
    groups: Tuple[Tuple[SeededParticipant, ...], ...] = field(default_factory=tuple)

    def all_matches(self) -> List[Match]:
        """Return every match across all rounds in match-number order."""
        return [match for round_ in self.rounds for match in round_.matches]

    @property
    def match_count(self) -> int:
        return sum(len(round_.matches) for round_ in self.rounds)

    def get_round(self, round_number: int) -> Round:
        """Return the round with ``round_number`` (1-indexed)."""
        for round_ in self.rounds:
            if round_.round_number == round_number:
                return round_
        raise RoundNotFoundException(
            f"Round {round_number} not in {self.format} structure"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize structure to dictionary."""
        return {
            "format": self.format,
            "rounds": [r.to_dict() for r in self.rounds],
            "total_rounds": self.total_rounds,
            "participants": [p.to_dict() for p in self.participants],
            "groups": [[p.id for p in group] for group in self.groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketStructure":
        """Deserialize structure from dictionary."""
        participants = tuple(
            SeededParticipant.from_dict(p) for p in data.get("participants", [])
        )
        by_id = {p.id: p for p in participants}
        groups = tuple(
            tuple(by_id[participant_id] for participant_id in group)
            for group in data.get("groups", [])
        )
        return cls(
            format=data["format"],
            rounds=tuple(Round.from_dict(r) for r in data.get("rounds", [])),
            total_rounds=data["total_rounds"],
            participants=participants,
            groups=groups,
        )
