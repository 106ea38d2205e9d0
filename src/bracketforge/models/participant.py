"""Participant data classes."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple, Union

from dateutil import parser as date_parser

from bracketforge.exceptions import InvalidParticipantDataException
from bracketforge.utils.validation import validate_identifier, validate_rating_strict


def _parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse an ISO date (or datetime) string into a ``date``."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise InvalidParticipantDataException(
            f"Invalid last match date: {value!r}"
        ) from e


def _check_identity(participant_id: Any, name: Any) -> Tuple[str, str]:
    id_result = validate_identifier(participant_id, "id")
    if not id_result:
        raise InvalidParticipantDataException(id_result.error_message)
    name_result = validate_identifier(name, "name")
    if not name_result:
        raise InvalidParticipantDataException(name_result.error_message)
    return id_result.sanitized_value, name_result.sanitized_value


def _required_rating(data: Dict[str, Any]) -> Any:
    if "rating" not in data:
        raise InvalidParticipantDataException(
            f"Missing rating for {data.get('name', data.get('id'))!r}"
        )
    return data["rating"]


@dataclass(frozen=True)
class TeamMember:
    """One of the two players behind a team entry."""

    id: str
    name: str
    rating: float
    tier: str = ""
    province: Optional[str] = None
    district: Optional[str] = None

    def __post_init__(self) -> None:
        member_id, name = _check_identity(self.id, self.name)
        object.__setattr__(self, "id", member_id)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "rating", validate_rating_strict(self.rating))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team member to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "tier": self.tier,
            "province": self.province,
            "district": self.district,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamMember":
        """Deserialize team member from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            rating=_required_rating(data),
            tier=data.get("tier", ""),
            province=data.get("province"),
            district=data.get("district"),
        )


@dataclass(frozen=True)
class Participant:
    """A competitor handed to a generation call.

    A participant is either an individual or a paired team. For teams,
    ``members`` holds the two underlying players and ``rating`` is the
    aggregated team rating supplied by the caller.

    Attributes:
        id: Unique identifier
        name: Display name
        rating: Numeric skill proxy used for seeding and pairing
        tier: Skill tier label
        province: Optional region attribute
        district: Optional region attribute
        prior_match_count: Matches played before this event, if known
        last_match_date: Date of the participant's last match, if known
        members: Two team members for a doubles entry, empty for singles
    """

    id: str
    name: str
    rating: float
    tier: str = ""
    province: Optional[str] = None
    district: Optional[str] = None
    prior_match_count: Optional[int] = None
    last_match_date: Optional[date] = None
    members: Tuple[TeamMember, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        participant_id, name = _check_identity(self.id, self.name)
        object.__setattr__(self, "id", participant_id)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "rating", validate_rating_strict(self.rating))
        object.__setattr__(self, "members", tuple(self.members))
        object.__setattr__(self, "last_match_date", _parse_date(self.last_match_date))
        if self.prior_match_count is not None and self.prior_match_count < 0:
            raise InvalidParticipantDataException(
                f"Prior match count cannot be negative for {self.name}"
            )

    @property
    def is_team(self) -> bool:
        """Whether this entry is a paired team."""
        return len(self.members) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "tier": self.tier,
            "province": self.province,
            "district": self.district,
            "prior_match_count": self.prior_match_count,
            "last_match_date": (
                self.last_match_date.isoformat() if self.last_match_date else None
            ),
            "members": [m.to_dict() for m in self.members],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        Accepts the collaborator field names ``priorMatchCount`` and
        ``lastMatchDate`` as well as their snake_case forms.
        """
        return cls(
            id=data["id"],
            name=data["name"],
            rating=_required_rating(data),
            tier=data.get("tier", ""),
            province=data.get("province"),
            district=data.get("district"),
            prior_match_count=data.get(
                "prior_match_count", data.get("priorMatchCount")
            ),
            last_match_date=data.get("last_match_date", data.get("lastMatchDate")),
            members=tuple(TeamMember.from_dict(m) for m in data.get("members", [])),
        )


@dataclass(frozen=True)
class SeededParticipant:
    """A participant with its assigned seed (1 = highest rated)."""

    participant: Participant
    seed: int

    @property
    def id(self) -> str:
        return self.participant.id

    @property
    def name(self) -> str:
        return self.participant.name

    @property
    def rating(self) -> float:
        return self.participant.rating

    @property
    def tier(self) -> str:
        return self.participant.tier

    def to_dict(self) -> Dict[str, Any]:
        """Serialize seeded participant to dictionary."""
        data = self.participant.to_dict()
        data["seed"] = self.seed
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeededParticipant":
        """Deserialize seeded participant from dictionary."""
        return cls(participant=Participant.from_dict(data), seed=int(data["seed"]))
