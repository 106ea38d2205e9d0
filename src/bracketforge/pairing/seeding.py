"""Seeding and first-round slot strategies."""

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

from dataclasses import replace
from typing import List, Sequence

from bracketforge.constants import TEAM_SIZE, TEAM_TIER
from bracketforge.exceptions import (
    InsufficientParticipantsException,
    InvalidParticipantDataException,
)
from bracketforge.models.participant import Participant, SeededParticipant
from bracketforge.type_hints import SlotPair, T
from bracketforge.utils import setup_logger
from bracketforge.utils.validation import find_duplicate_ids

logger = setup_logger(__name__)


def round_count(entrants: int) -> int:
    """Number of knockout rounds for ``entrants``: ceil(log2(entrants))."""
    if entrants <= 1:
        return 0
    return (entrants - 1).bit_length()


def bracket_size(entrants: int) -> int:
    """Smallest power of two holding ``entrants``."""
    return 1 << round_count(entrants)


def _check_pool(participants: Sequence[Participant], minimum: int, format_name: str):
    if len(participants) < minimum:
        logger.error(
            "Cannot seed %s participants, %s needs at least %s",
            len(participants),
            format_name or "this format",
            minimum,
        )
        raise InsufficientParticipantsException(minimum, len(participants), format_name)

    duplicates = find_duplicate_ids(p.id for p in participants)
    if duplicates:
        raise InvalidParticipantDataException(
            f"Duplicate participant ids: {', '.join(duplicates)}"
        )


def seed_participants(
    participants: Sequence[Participant], minimum: int = 2, format_name: str = ""
) -> List[SeededParticipant]:
    """Order participants by descending rating and number the seeds.

    The sort is stable, so equal ratings keep their input order.

    Args:
        participants: Participant pool in input order
        minimum: Smallest pool the calling format accepts
        format_name: Used in error messages

    Returns:
        Seeded participants, seed 1 first

    Raises:
        InsufficientParticipantsException: If fewer than ``minimum`` entries
        InvalidParticipantDataException: If two entries share an id
    """
    _check_pool(participants, minimum, format_name)

    ordered = sorted(participants, key=lambda p: -p.rating)
    seeded = [SeededParticipant(participant=p, seed=i + 1) for i, p in enumerate(ordered)]

    logger.debug(
        "Seeded %s participants: %s",
        len(seeded),
        ", ".join(f"{s.seed}. {s.name} ({s.rating:g})" for s in seeded),
    )
    return seeded


def seed_teams(
    teams: Sequence[Participant], minimum: int = 2, format_name: str = ""
) -> List[SeededParticipant]:
    """Seed paired-team entries by their aggregated team rating.

    Every entry must carry exactly two members. Seeded teams are tagged
    with the "team" tier.
    """
    for team in teams:
        if len(team.members) != TEAM_SIZE:
            raise InvalidParticipantDataException(
                f"Team {team.name} must have {TEAM_SIZE} members, "
                f"has {len(team.members)}"
            )

    tagged = [replace(team, tier=TEAM_TIER) for team in teams]
    return seed_participants(tagged, minimum=minimum, format_name=format_name)


# ========== First-round slot strategies ==========


def sequential_pairs(entries: Sequence[T]) -> List[SlotPair]:
    """Pair entries in order: 1 v 2, 3 v 4, ...

    The result always has ``bracket_size / 2`` pairs; slots past the last
    entry are None.
    """
    size = bracket_size(len(entries))
    slots = list(entries) + [None] * (size - len(entries))
    return [(slots[i], slots[i + 1]) for i in range(0, size, 2)]


def standard_bracket_order(size: int) -> List[int]:
    """Seed numbers in standard bracket order, e.g. 1, 8, 4, 5, 2, 7, 3, 6."""
    order = [1]
    while len(order) < size:
        mirror = 2 * len(order) + 1
        order = [seed for top in order for seed in (top, mirror - top)]
    return order


def standard_bracket_pairs(entries: Sequence[T]) -> List[SlotPair]:
    """Pair the top seed with the lowest seed so favourites meet late.

    Missing seeds (when the pool is not a power of two) become empty
    slots, giving the top seeds their byes.
    """
    size = bracket_size(len(entries))
    order = standard_bracket_order(size)
    slots = [entries[seed - 1] if seed <= len(entries) else None for seed in order]
    return [(slots[i], slots[i + 1]) for i in range(0, size, 2)]
