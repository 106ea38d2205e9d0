"""Hybrid tournaments: round-robin groups followed by a knockout."""

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

import math
from typing import List, Optional, Sequence, Tuple

from bracketforge.constants import (
    DEFAULT_ADVANCERS_PER_GROUP,
    DEFAULT_GROUP_SIZE,
    FORMAT_HYBRID,
    POSITION_LOWER,
    POSITION_UPPER,
    ROUND_NAME_GROUP_STAGE,
    STAGE_GROUP,
)
from bracketforge.exceptions import (
    InsufficientParticipantsException,
    InvalidConfigurationException,
)
from bracketforge.models.bracket import BracketStructure, Round
from bracketforge.models.config import HybridConfig
from bracketforge.models.match import Match
from bracketforge.models.participant import SeededParticipant
from bracketforge.pairing.labels import round_label
from bracketforge.pairing.round_robin import round_robin_matches
from bracketforge.pairing.seeding import bracket_size, round_count
from bracketforge.pairing.single_elimination import build_pending_rounds
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


def group_count(entrants: int, group_size: int) -> int:
    return math.ceil(entrants / group_size)


def assign_groups(
    seeded: Sequence[SeededParticipant], num_groups: int
) -> List[List[SeededParticipant]]:
    """Deal participants into groups by ``index mod num_groups``.

    Consecutive seeds land in different groups. This is cyclic dealing,
    not snake seeding, so group strength is not balanced.

    Example with 8 participants and 2 groups:
    Group 1: 1, 3, 5, 7
    Group 2: 2, 4, 6, 8
    """
    groups: List[List[SeededParticipant]] = [[] for _ in range(num_groups)]
    for index, participant in enumerate(seeded):
        groups[index % num_groups].append(participant)
    return groups


def placeholder_name(slot: int, advancers_per_group: int) -> str:
    """Placeholder for knockout slot ``slot`` (0-indexed), e.g. "Group 2, rank 1"."""
    group = slot // advancers_per_group + 1
    rank = slot % advancers_per_group + 1
    return f"Group {group}, rank {rank}"


def _knockout_entry_matches(
    entrants: int, advancers_per_group: int, round_name: str, start_number: int
) -> List[Match]:
    size = bracket_size(entrants)
    slots: List[Optional[str]] = [
        placeholder_name(slot, advancers_per_group) if slot < entrants else None
        for slot in range(size)
    ]
    matches = []
    for index in range(size // 2):
        first, second = slots[index * 2], slots[index * 2 + 1]
        matches.append(
            Match(
                match_number=start_number + index,
                round_name=round_name,
                player1_name=first,
                player2_name=second,
                position=POSITION_UPPER if index % 2 == 0 else POSITION_LOWER,
                is_bye=(first is None) != (second is None),
            )
        )
    return matches


def _build_group_stage(
    groups: Sequence[Sequence[SeededParticipant]],
) -> Tuple[Round, int]:
    matches: List[Match] = []
    for index, group in enumerate(groups):
        group_matches = round_robin_matches(
            group, len(matches) + 1, ROUND_NAME_GROUP_STAGE
        )
        logger.debug(
            "Group %s: %s participants, %s matches (%s)",
            index + 1,
            len(group),
            len(group_matches),
            ", ".join(p.name for p in group),
        )
        matches.extend(group_matches)

    stage = Round(
        round_number=1,
        name=ROUND_NAME_GROUP_STAGE,
        stage=STAGE_GROUP,
        matches=tuple(matches),
    )
    return stage, len(matches) + 1


def generate_hybrid(
    seeded: Sequence[SeededParticipant],
    group_size: int = DEFAULT_GROUP_SIZE,
    advancers_per_group: int = DEFAULT_ADVANCERS_PER_GROUP,
) -> BracketStructure:
    """Build a group stage plus a knockout among the group advancers.

    Participants are dealt cyclically into ``ceil(N / group_size)``
    groups. Each group plays a round robin; all group matches form one
    "Group Stage" round. The knockout has ``groups * advancers_per_group``
    entrants and its first round carries "Group X, rank Y" placeholders
    in place of participant ids. Resolving those placeholders is up to
    the caller once group standings are known.

    Args:
        seeded: Participants in seed order
        group_size: Target participants per group
        advancers_per_group: Participants advancing from each group

    Returns:
        The hybrid structure; ``groups`` holds the group assignment

    Raises:
        InvalidConfigurationException: On impossible group settings, or
            when a built group is smaller than ``advancers_per_group``
        InsufficientParticipantsException: With fewer than ``group_size``
            participants
    """
    config = HybridConfig(group_size=group_size, advancers_per_group=advancers_per_group)
    config.validate()
    if len(seeded) < group_size:
        raise InsufficientParticipantsException(group_size, len(seeded), FORMAT_HYBRID)

    num_groups = group_count(len(seeded), group_size)
    groups = assign_groups(seeded, num_groups)
    smallest = min(len(group) for group in groups)
    if advancers_per_group > smallest:
        logger.error(
            "%s advancers per group but the smallest group has %s participants",
            advancers_per_group,
            smallest,
        )
        raise InvalidConfigurationException(
            f"advancers_per_group ({advancers_per_group}) exceeds the smallest "
            f"group ({smallest} participants)"
        )

    group_stage, next_number = _build_group_stage(groups)
    rounds = [group_stage]

    entrants = num_groups * advancers_per_group
    knockout_rounds = round_count(entrants)
    if knockout_rounds:
        first_label = round_label(bracket_size(entrants), 1)
        entry_matches = _knockout_entry_matches(
            entrants, advancers_per_group, first_label.name, next_number
        )
        rounds.append(
            Round(
                round_number=2,
                name=first_label.name,
                stage=first_label.stage,
                matches=tuple(entry_matches),
            )
        )
        rounds.extend(
            build_pending_rounds(
                knockout_rounds,
                first_round=2,
                start_number=next_number + len(entry_matches),
                round_offset=1,
            )
        )

    structure = BracketStructure(
        format=FORMAT_HYBRID,
        rounds=tuple(rounds),
        total_rounds=len(rounds),
        participants=tuple(seeded),
        groups=tuple(tuple(group) for group in groups),
    )
    logger.info(
        "Generated hybrid bracket: %s participants in %s groups, "
        "%s group matches, %s advancers over %s knockout rounds",
        len(seeded),
        num_groups,
        len(group_stage.matches),
        entrants,
        knockout_rounds,
    )
    return structure
