"""Format dispatch for bracket generation."""

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

from typing import Any, Dict, List

from bracketforge.constants import (
    EVENT_DOUBLES,
    FORMAT_HYBRID,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
    MATCH_STATUS_SCHEDULED,
    MIN_PARTICIPANTS,
)
from bracketforge.exceptions import InvalidConfigurationException
from bracketforge.models.bracket import BracketStructure
from bracketforge.models.config import GenerationRequest
from bracketforge.pairing.hybrid import generate_hybrid
from bracketforge.pairing.round_robin import generate_round_robin
from bracketforge.pairing.seeding import seed_participants, seed_teams
from bracketforge.pairing.single_elimination import generate_single_elimination
from bracketforge.tournament.fairness import (
    knockout_start_stage,
    validate_group_fairness,
)
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


def _minimum_for(request: GenerationRequest) -> int:
    if request.format == FORMAT_HYBRID:
        return request.hybrid.group_size
    return MIN_PARTICIPANTS[request.format]


def generate_structure(request: GenerationRequest) -> BracketStructure:
    """Seed the request's participants and build the requested structure.

    Doubles events are seeded as team composites. Swiss tournaments are
    round-by-round and are not built here; use
    :func:`bracketforge.tournament.swiss_tournament.create_swiss_state`.

    Raises:
        InvalidConfigurationException: On an unknown or Swiss format, an
            unknown event type or impossible hybrid settings
        InsufficientParticipantsException: Below the format's minimum
        InvalidParticipantDataException: On duplicate ids or malformed teams
    """
    request.validate()
    if request.format == FORMAT_SWISS:
        raise InvalidConfigurationException(
            "Swiss tournaments are generated round by round, "
            "use create_swiss_state instead"
        )
    if request.format == FORMAT_HYBRID:
        request.hybrid.validate()

    seed = seed_teams if request.event_type == EVENT_DOUBLES else seed_participants
    seeded = seed(
        request.participants, minimum=_minimum_for(request), format_name=request.format
    )

    if request.format == FORMAT_SINGLE_ELIMINATION:
        return generate_single_elimination(seeded)
    if request.format == FORMAT_ROUND_ROBIN:
        return generate_round_robin(seeded)

    structure = generate_hybrid(
        seeded,
        group_size=request.hybrid.group_size,
        advancers_per_group=request.hybrid.advancers_per_group,
    )
    fairness = validate_group_fairness(structure.groups)
    if not fairness.is_valid:
        logger.warning(
            f"Uneven groups (score {fairness.score:.1f}): {'; '.join(fairness.issues)}"
        )
    entrants = len(structure.groups) * request.hybrid.advancers_per_group
    logger.debug(f"Knockout starts at {knockout_start_stage(entrants)}")
    return structure


def flatten_matches(
    structure: BracketStructure, tournament_id: str
) -> List[Dict[str, Any]]:
    """Flatten a structure into match rows for a court/time scheduler.

    Empty slots are exported with None ids; hybrid placeholder names are
    kept in the name columns.
    """
    rows = []
    for round_ in structure.rounds:
        for match in round_.matches:
            rows.append(
                {
                    "tournament_id": tournament_id,
                    "round_name": round_.name,
                    "round_number": round_.round_number,
                    "match_number": match.match_number,
                    "player1_id": match.player1_id,
                    "player2_id": match.player2_id,
                    "player1_name": match.player1_name,
                    "player2_name": match.player2_name,
                    "status": MATCH_STATUS_SCHEDULED,
                }
            )
    return rows
