"""Single-elimination bracket generation."""

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

from typing import List, Optional, Sequence

from bracketforge.constants import (
    FORMAT_SINGLE_ELIMINATION,
    MIN_PARTICIPANTS,
    POSITION_LOWER,
    POSITION_UPPER,
)
from bracketforge.exceptions import InsufficientParticipantsException
from bracketforge.models.bracket import BracketStructure, Round
from bracketforge.models.match import Match
from bracketforge.models.participant import SeededParticipant
from bracketforge.pairing.labels import round_label
from bracketforge.pairing.seeding import bracket_size, round_count, sequential_pairs
from bracketforge.type_hints import PairingStrategy
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


def _slot_position(index: int) -> str:
    return POSITION_UPPER if index % 2 == 0 else POSITION_LOWER


def _entry_match(
    number: int,
    round_name: str,
    index: int,
    first: Optional[SeededParticipant],
    second: Optional[SeededParticipant],
) -> Match:
    """Build a round-one match from two (possibly empty) slots."""
    return Match(
        match_number=number,
        round_name=round_name,
        player1_id=first.id if first else None,
        player2_id=second.id if second else None,
        player1_name=first.name if first else None,
        player2_name=second.name if second else None,
        player1_rating=first.rating if first else None,
        player2_rating=second.rating if second else None,
        position=_slot_position(index),
        is_bye=(first is None) != (second is None),
    )


def build_pending_rounds(
    total_rounds: int, first_round: int, start_number: int, round_offset: int = 0
) -> List[Round]:
    """Build knockout rounds ``first_round..total_rounds`` with TBD slots.

    Args:
        total_rounds: Rounds in the knockout
        first_round: First knockout round to build (1-indexed)
        start_number: Match number of the first match built
        round_offset: Added to each round number in the structure

    Returns:
        Rounds whose matches have no participants yet
    """
    rounds = []
    number = start_number
    for knockout_round in range(first_round, total_rounds + 1):
        matches_in_round = 2 ** (total_rounds - knockout_round)
        label = round_label(matches_in_round * 2, knockout_round)
        matches = []
        for index in range(matches_in_round):
            matches.append(
                Match(
                    match_number=number,
                    round_name=label.name,
                    position=_slot_position(index),
                )
            )
            number += 1
        rounds.append(
            Round(
                round_number=knockout_round + round_offset,
                name=label.name,
                stage=label.stage,
                matches=tuple(matches),
            )
        )
    return rounds


def generate_single_elimination(
    seeded: Sequence[SeededParticipant],
    pairing_strategy: PairingStrategy = sequential_pairs,
) -> BracketStructure:
    """Build a single-elimination bracket from a seed-ordered list.

    Round one is filled by ``pairing_strategy``; the default pairs seeds
    1 v 2, 3 v 4 and so on. Every later round is created with TBD slots.
    Round names count back from the final ("Final", "Semi Final",
    "Quarter Final", otherwise "Round k").

    Args:
        seeded: Participants in seed order
        pairing_strategy: Turns the seed list into round-one slot pairs

    Returns:
        The bracket structure

    Raises:
        InsufficientParticipantsException: With fewer than two participants
    """
    minimum = MIN_PARTICIPANTS[FORMAT_SINGLE_ELIMINATION]
    if len(seeded) < minimum:
        raise InsufficientParticipantsException(
            minimum, len(seeded), FORMAT_SINGLE_ELIMINATION
        )

    total_rounds = round_count(len(seeded))
    size = bracket_size(len(seeded))
    first_label = round_label(size, 1)

    slot_pairs = pairing_strategy(seeded)
    first_matches = tuple(
        _entry_match(i + 1, first_label.name, i, first, second)
        for i, (first, second) in enumerate(slot_pairs)
    )
    rounds = [
        Round(
            round_number=1,
            name=first_label.name,
            stage=first_label.stage,
            matches=first_matches,
        )
    ]
    rounds.extend(
        build_pending_rounds(
            total_rounds, first_round=2, start_number=len(first_matches) + 1
        )
    )

    structure = BracketStructure(
        format=FORMAT_SINGLE_ELIMINATION,
        rounds=tuple(rounds),
        total_rounds=total_rounds,
        participants=tuple(seeded),
    )
    logger.info(
        "Generated single elimination bracket: %s participants, %s rounds, %s matches",
        len(seeded),
        total_rounds,
        structure.match_count,
    )
    return structure
