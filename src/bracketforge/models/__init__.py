"""Data models for Bracket Forge."""

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

from bracketforge.models.bracket import BracketStructure, Round
from bracketforge.models.config import GenerationRequest, HybridConfig, SwissConfig
from bracketforge.models.match import TBD_LABEL, Match, MatchResult
from bracketforge.models.participant import Participant, SeededParticipant, TeamMember
from bracketforge.models.swiss import (
    SwissMatchRecord,
    SwissParticipant,
    SwissRound,
    SwissState,
    SwissStatistics,
)

__all__ = [
    "BracketStructure",
    "GenerationRequest",
    "HybridConfig",
    "Match",
    "MatchResult",
    "Participant",
    "Round",
    "SeededParticipant",
    "SwissConfig",
    "SwissMatchRecord",
    "SwissParticipant",
    "SwissRound",
    "SwissState",
    "SwissStatistics",
    "TBD_LABEL",
    "TeamMember",
]
