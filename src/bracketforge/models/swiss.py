"""Data models for Swiss-system tournaments."""

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

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bracketforge.exceptions import RoundNotFoundException
from bracketforge.models.config import SwissConfig
from bracketforge.models.match import Match
from bracketforge.models.participant import Participant
from bracketforge.type_hints import Outcome


@dataclass
class SwissMatchRecord:
    """One entry of a participant's per-round match history."""

    round_number: int
    opponent_id: str
    opponent_name: str
    outcome: Outcome
    points: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "opponent_id": self.opponent_id,
            "opponent_name": self.opponent_name,
            "outcome": self.outcome,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissMatchRecord":
        return cls(
            round_number=data["round_number"],
            opponent_id=data["opponent_id"],
            opponent_name=data["opponent_name"],
            outcome=data["outcome"],
            points=data["points"],
        )


@dataclass
class SwissParticipant:
    """A participant's running record in a Swiss tournament.

    Attributes:
        participant: The immutable input record
        points: Cumulative points (win 1, draw 0.5, loss 0)
        buchholz: Sum of the opponents' current points
        opponents: Opponent ids in the order they were met
        history: Per-round match history
    """

    participant: Participant
    points: float = 0.0
    buchholz: float = 0.0
    opponents: List[str] = field(default_factory=list)
    history: List[SwissMatchRecord] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.participant.id

    @property
    def name(self) -> str:
        return self.participant.name

    @property
    def rating(self) -> float:
        return self.participant.rating

    def has_played(self, opponent_id: str) -> bool:
        return opponent_id in self.opponents

    def to_dict(self) -> Dict[str, Any]:
        """Serialize Swiss participant to dictionary."""
        return {
            "participant": self.participant.to_dict(),
            "points": self.points,
            "buchholz": self.buchholz,
            "opponents": list(self.opponents),
            "history": [h.to_dict() for h in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissParticipant":
        """Deserialize Swiss participant from dictionary."""
        return cls(
            participant=Participant.from_dict(data["participant"]),
            points=data.get("points", 0.0),
            buchholz=data.get("buchholz", 0.0),
            opponents=list(data.get("opponents", [])),
            history=[SwissMatchRecord.from_dict(h) for h in data.get("history", [])],
        )


@dataclass
class SwissRound:
    """Pairings (and, once played, results) of one Swiss round.

    Attributes:
        round_number: Round number (1-indexed)
        matches: Scheduled matches in pairing order
        unpaired_ids: Participants left without an opponent this round
        is_completed: Whether every match has a recorded result
    """

    round_number: int
    matches: List[Match] = field(default_factory=list)
    unpaired_ids: List[str] = field(default_factory=list)
    is_completed: bool = False

    def find_match(self, player1_id: str, player2_id: str) -> Optional[int]:
        """Return the index of the (player1, player2) match, or None."""
        for index, match in enumerate(self.matches):
            if match.player1_id == player1_id and match.player2_id == player2_id:
                return index
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
            "unpaired_ids": list(self.unpaired_ids),
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissRound":
        """Deserialize round from dictionary."""
        return cls(
            round_number=data["round_number"],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            unpaired_ids=list(data.get("unpaired_ids", [])),
            is_completed=data.get("is_completed", False),
        )


@dataclass
class SwissStatistics:
    """Aggregate pairing quality figures."""

    average_rating_variance: int = 0
    balance_score: int = 0
    rematch_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average_rating_variance": self.average_rating_variance,
            "balance_score": self.balance_score,
            "rematch_count": self.rematch_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissStatistics":
        return cls(
            average_rating_variance=data.get("average_rating_variance", 0),
            balance_score=data.get("balance_score", 0),
            rematch_count=data.get("rematch_count", 0),
        )


@dataclass
class SwissState:
    """Complete state of one Swiss tournament.

    Swiss operations take a state and return a new one; a state handed to
    an operation is never modified, so any state can be stored as a
    snapshot.
    """

    tournament_id: str
    total_rounds: int
    current_round: int
    participants: List[SwissParticipant]
    rounds: List[SwissRound] = field(default_factory=list)
    fairness_score: float = 0.0
    statistics: SwissStatistics = field(default_factory=SwissStatistics)
    config: SwissConfig = field(default_factory=SwissConfig)

    @property
    def participants_by_id(self) -> Dict[str, SwissParticipant]:
        return {p.id: p for p in self.participants}

    @property
    def is_complete(self) -> bool:
        """True once the last round has been played in full."""
        if self.current_round < self.total_rounds or not self.rounds:
            return False
        return self.rounds[-1].is_completed

    @property
    def next_match_number(self) -> int:
        numbers = [m.match_number for r in self.rounds for m in r.matches]
        return max(numbers, default=0) + 1

    def get_round(self, round_number: int) -> SwissRound:
        """Return the round with ``round_number``.

        Raises:
            RoundNotFoundException: If the round has not been generated
        """
        for round_ in self.rounds:
            if round_.round_number == round_number:
                return round_
        raise RoundNotFoundException(
            f"Round {round_number} has not been generated "
            f"(tournament {self.tournament_id})"
        )

    def copy(self) -> "SwissState":
        """Return a deep copy that shares nothing mutable with this state."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to dictionary."""
        return {
            "tournament_id": self.tournament_id,
            "total_rounds": self.total_rounds,
            "current_round": self.current_round,
            "participants": [p.to_dict() for p in self.participants],
            "rounds": [r.to_dict() for r in self.rounds],
            "fairness_score": self.fairness_score,
            "statistics": self.statistics.to_dict(),
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissState":
        """Deserialize state from dictionary."""
        return cls(
            tournament_id=data["tournament_id"],
            total_rounds=data["total_rounds"],
            current_round=data["current_round"],
            participants=[SwissParticipant.from_dict(p) for p in data["participants"]],
            rounds=[SwissRound.from_dict(r) for r in data.get("rounds", [])],
            fairness_score=data.get("fairness_score", 0.0),
            statistics=SwissStatistics.from_dict(data.get("statistics", {})),
            config=SwissConfig.from_dict(data.get("config", {})),
        )
