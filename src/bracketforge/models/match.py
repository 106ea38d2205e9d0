"""Match and match result data classes."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from bracketforge.constants import OUTCOME_DRAW, OUTCOME_LOSS, OUTCOME_WIN
from bracketforge.type_hints import Outcome, Position

TBD_LABEL = "TBD"


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single match.

    Attributes
    ----------
    player1_id : str
        ID of the first listed player
    player2_id : str
        ID of the second listed player
    winner_id : str or None
        ID of the winner, None for a draw
    is_draw : bool
        Whether the match was drawn
    player1_score : float or None
        Optional game score for player 1 (e.g. sets or points won)
    player2_score : float or None
        Optional game score for player 2
    """

    player1_id: str
    player2_id: str
    winner_id: Optional[str] = None
    is_draw: bool = False
    player1_score: Optional[float] = None
    player2_score: Optional[float] = None

    @property
    def pair(self) -> Tuple[str, str]:
        return (self.player1_id, self.player2_id)

    def outcome_for(self, participant_id: str) -> Outcome:
        """Return 'win', 'draw' or 'loss' from one participant's view."""
        if self.is_draw:
            return OUTCOME_DRAW
        return OUTCOME_WIN if self.winner_id == participant_id else OUTCOME_LOSS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "winner_id": self.winner_id,
            "is_draw": self.is_draw,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        return cls(
            player1_id=data["player1_id"],
            player2_id=data["player2_id"],
            winner_id=data.get("winner_id"),
            is_draw=data.get("is_draw", False),
            player1_score=data.get("player1_score"),
            player2_score=data.get("player2_score"),
        )


@dataclass(frozen=True)
class Match:
    """A single scheduled match.

    A player slot with ``None`` id is TBD: it is filled later by an
    external stage. Hybrid knockout slots carry a placeholder name such as
    ``"Group 1, rank 1"`` while their id stays None.
    """

    match_number: int
    round_name: str
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    player1_name: Optional[str] = None
    player2_name: Optional[str] = None
    player1_rating: Optional[float] = None
    player2_rating: Optional[float] = None
    position: Optional[Position] = None
    is_bye: bool = False
    result: Optional[MatchResult] = None

    @property
    def pair(self) -> Tuple[Optional[str], Optional[str]]:
        return (self.player1_id, self.player2_id)

    @property
    def player1_label(self) -> str:
        return self.player1_name or TBD_LABEL

    @property
    def player2_label(self) -> str:
        return self.player2_name or TBD_LABEL

    @property
    def is_resolved(self) -> bool:
        """Whether both slots hold concrete participants."""
        return self.player1_id is not None and self.player2_id is not None

    @property
    def rating_gap(self) -> Optional[float]:
        if self.player1_rating is None or self.player2_rating is None:
            return None
        return abs(self.player1_rating - self.player2_rating)

    def with_result(self, result: MatchResult) -> "Match":
        """Return a copy of this match carrying ``result``."""
        return replace(self, result=result)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "match_number": self.match_number,
            "round_name": self.round_name,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "player1_name": self.player1_name,
            "player2_name": self.player2_name,
            "player1_rating": self.player1_rating,
            "player2_rating": self.player2_rating,
            "position": self.position,
            "is_bye": self.is_bye,
            "result": self.result.to_dict() if self.result else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        result = data.get("result")
        return cls(
            match_number=data["match_number"],
            round_name=data["round_name"],
            player1_id=data.get("player1_id"),
            player2_id=data.get("player2_id"),
            player1_name=data.get("player1_name"),
            player2_name=data.get("player2_name"),
            player1_rating=data.get("player1_rating"),
            player2_rating=data.get("player2_rating"),
            position=data.get("position"),
            is_bye=data.get("is_bye", False),
            result=MatchResult.from_dict(result) if result else None,
        )
