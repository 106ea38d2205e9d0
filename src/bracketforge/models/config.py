"""Generation configuration data classes."""

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
from typing import Any, Dict, List

from bracketforge.constants import (
    ALL_FORMATS,
    DEFAULT_ADVANCERS_PER_GROUP,
    DEFAULT_ALLOW_REMATCH,
    DEFAULT_GROUP_SIZE,
    DEFAULT_MAX_RATING_VARIANCE,
    DEFAULT_PREFER_BALANCED,
    DEFAULT_USE_BUCHHOLZ,
    EVENT_DOUBLES,
    EVENT_SINGLES,
    FORMAT_SINGLE_ELIMINATION,
)
from bracketforge.exceptions import InvalidConfigurationException
from bracketforge.models.participant import Participant
from bracketforge.type_hints import EventType, TournamentFormat


@dataclass
class SwissConfig:
    """Swiss pairing settings.

    Attributes
    ----------
    allow_rematch : bool
        Whether two participants may meet more than once.
    max_rating_variance : float
        Largest rating gap accepted for a pairing after round one.
    use_buchholz : bool
        Whether Buchholz breaks ties in the final ranking.
    prefer_balanced : bool
        Pick the closest-rated valid candidate; when False the first
        valid candidate in rating order is taken.
    """

    allow_rematch: bool = DEFAULT_ALLOW_REMATCH
    max_rating_variance: float = DEFAULT_MAX_RATING_VARIANCE
    use_buchholz: bool = DEFAULT_USE_BUCHHOLZ
    prefer_balanced: bool = DEFAULT_PREFER_BALANCED

    def validate(self) -> None:
        """Raise InvalidConfigurationException on impossible settings."""
        if self.max_rating_variance < 0:
            raise InvalidConfigurationException(
                f"max_rating_variance cannot be negative: {self.max_rating_variance}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "allow_rematch": self.allow_rematch,
            "max_rating_variance": self.max_rating_variance,
            "use_buchholz": self.use_buchholz,
            "prefer_balanced": self.prefer_balanced,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissConfig":
        """Deserialize configuration from dictionary.

        Accepts the collaborator camelCase keys as well.
        """
        return cls(
            allow_rematch=data.get(
                "allow_rematch", data.get("allowRematch", DEFAULT_ALLOW_REMATCH)
            ),
            max_rating_variance=float(
                data.get(
                    "max_rating_variance",
                    data.get("maxRatingVariance", DEFAULT_MAX_RATING_VARIANCE),
                )
            ),
            use_buchholz=data.get(
                "use_buchholz", data.get("useBuchholz", DEFAULT_USE_BUCHHOLZ)
            ),
            prefer_balanced=data.get(
                "prefer_balanced", data.get("preferBalanced", DEFAULT_PREFER_BALANCED)
            ),
        )


@dataclass
class HybridConfig:
    """Group stage and knockout sizing for hybrid tournaments."""

    group_size: int = DEFAULT_GROUP_SIZE
    advancers_per_group: int = DEFAULT_ADVANCERS_PER_GROUP

    def validate(self) -> None:
        """Raise InvalidConfigurationException on impossible settings."""
        if self.group_size < 2:
            raise InvalidConfigurationException(
                f"group_size must be at least 2, got {self.group_size}"
            )
        if self.advancers_per_group < 1:
            raise InvalidConfigurationException(
                f"advancers_per_group must be at least 1, got {self.advancers_per_group}"
            )
        if self.advancers_per_group > self.group_size:
            raise InvalidConfigurationException(
                f"advancers_per_group ({self.advancers_per_group}) cannot exceed "
                f"group_size ({self.group_size})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "group_size": self.group_size,
            "advancers_per_group": self.advancers_per_group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HybridConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            group_size=int(
                data.get("group_size", data.get("groupSize", DEFAULT_GROUP_SIZE))
            ),
            advancers_per_group=int(
                data.get(
                    "advancers_per_group",
                    data.get("advancersPerGroup", DEFAULT_ADVANCERS_PER_GROUP),
                )
            ),
        )


@dataclass
class GenerationRequest:
    """Everything needed for one bracket generation call.

    Attributes
    ----------
    participants : list of Participant
        Unordered participant pool.
    format : str
        One of "single_elimination", "round_robin", "hybrid" or "swiss".
    event_type : str
        "singles" or "doubles"; doubles entries are team composites.
    hybrid : HybridConfig
        Group sizing, only read for the hybrid format.
    """

    participants: List[Participant]
    format: TournamentFormat = FORMAT_SINGLE_ELIMINATION
    event_type: EventType = EVENT_SINGLES
    hybrid: HybridConfig = field(default_factory=HybridConfig)

    def validate(self) -> None:
        """Raise InvalidConfigurationException on unknown selectors."""
        if self.format not in ALL_FORMATS:
            raise InvalidConfigurationException(
                f"Unknown tournament format '{self.format}'"
            )
        if self.event_type not in (EVENT_SINGLES, EVENT_DOUBLES):
            raise InvalidConfigurationException(
                f"Unknown event type '{self.event_type}'"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationRequest":
        """Deserialize a request from dictionary."""
        return cls(
            participants=[Participant.from_dict(p) for p in data["participants"]],
            format=data.get("format", FORMAT_SINGLE_ELIMINATION),
            event_type=data.get("event_type", data.get("eventType", EVENT_SINGLES)),
            hybrid=HybridConfig.from_dict(data.get("hybrid", {})),
        )
