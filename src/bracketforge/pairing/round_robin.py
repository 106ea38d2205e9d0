"""Round-robin generation."""

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

from itertools import combinations
from typing import List, Sequence

from bracketforge.constants import (
    FORMAT_ROUND_ROBIN,
    MIN_PARTICIPANTS,
    ROUND_NAME_ROUND_ROBIN,
    STAGE_ROUND_ROBIN,
)
from bracketforge.exceptions import InsufficientParticipantsException
from bracketforge.models.bracket import BracketStructure, Round
from bracketforge.models.match import Match
from bracketforge.models.participant import SeededParticipant
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


def expected_match_count(entrants: int) -> int:
    """Matches in a single round robin of ``entrants``: n(n-1)/2."""
    return entrants * (entrants - 1) // 2


def round_robin_matches(
    entries: Sequence[SeededParticipant], start_number: int, round_name: str
) -> List[Match]:
    """Every unordered pair (i, j), i < j, in the given order.

    Match numbers start at ``start_number`` and increase by one.
    """
    return [
        Match(
            match_number=start_number + offset,
            round_name=round_name,
            player1_id=first.id,
            player2_id=second.id,
            player1_name=first.name,
            player2_name=second.name,
            player1_rating=first.rating,
            player2_rating=second.rating,
        )
        for offset, (first, second) in enumerate(combinations(entries, 2))
    ]


def generate_round_robin(seeded: Sequence[SeededParticipant]) -> BracketStructure:
    """Build a single "Round Robin" round holding every pairing.

    Raises:
        InsufficientParticipantsException: With fewer than two participants
    """
    minimum = MIN_PARTICIPANTS[FORMAT_ROUND_ROBIN]
    if len(seeded) < minimum:
        raise InsufficientParticipantsException(minimum, len(seeded), FORMAT_ROUND_ROBIN)

    matches = round_robin_matches(seeded, 1, ROUND_NAME_ROUND_ROBIN)
    logger.info(
        "Generated round robin: %s participants, %s matches",
        len(seeded),
        len(matches),
    )
    return BracketStructure(
        format=FORMAT_ROUND_ROBIN,
        rounds=(
            Round(
                round_number=1,
                name=ROUND_NAME_ROUND_ROBIN,
                stage=STAGE_ROUND_ROBIN,
                matches=tuple(matches),
            ),
        ),
        total_rounds=1,
        participants=tuple(seeded),
    )
