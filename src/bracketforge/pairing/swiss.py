"""Swiss-system pairing: round count, round one and score-group pairing."""

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

from typing import List, Optional, Sequence, Set, Tuple

from bracketforge.constants import PAIRING_SCORE_BASE, SWISS_ROUND_TABLE
from bracketforge.models.config import SwissConfig
from bracketforge.models.match import Match
from bracketforge.models.swiss import SwissParticipant, SwissRound
from bracketforge.pairing.seeding import round_count
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


def calculate_rounds(num_participants: int) -> int:
    """Number of Swiss rounds for a field of ``num_participants``.

    Small fields follow a fixed table (2 -> 1, 4 -> 2, 8 -> 3, ... 128 -> 7);
    larger fields play ceil(log2(N)) rounds.
    """
    for max_participants, rounds in SWISS_ROUND_TABLE:
        if num_participants <= max_participants:
            return rounds
    return round_count(num_participants)


def swiss_round_name(round_number: int) -> str:
    return f"Round {round_number}"


def _swiss_match(
    number: int, round_number: int, first: SwissParticipant, second: SwissParticipant
) -> Match:
    return Match(
        match_number=number,
        round_name=swiss_round_name(round_number),
        player1_id=first.id,
        player2_id=second.id,
        player1_name=first.name,
        player2_name=second.name,
        player1_rating=first.rating,
        player2_rating=second.rating,
    )


def _by_rating(participants: Sequence[SwissParticipant]) -> List[SwissParticipant]:
    return sorted(participants, key=lambda p: -p.rating)


def pair_first_round(
    participants: Sequence[SwissParticipant], start_number: int = 1
) -> SwissRound:
    """Pair the top half of the rating list against the bottom half.

    With ratings sorted descending, the top ``N // 2`` meet the rest in
    order: 1 v (N/2 + 1), 2 v (N/2 + 2) and so on. With an odd field the
    lowest-rated participant is left unpaired.
    """
    ordered = _by_rating(participants)
    half = len(ordered) // 2
    top, bottom = ordered[:half], ordered[half:]

    matches = [
        _swiss_match(start_number + i, 1, first, second)
        for i, (first, second) in enumerate(zip(top, bottom))
    ]
    unpaired = [p.id for p in bottom[len(top) :]]
    if unpaired:
        logger.info("Round 1: %s sits out (odd field)", ", ".join(unpaired))
    return SwissRound(round_number=1, matches=matches, unpaired_ids=unpaired)


def group_by_points(
    participants: Sequence[SwissParticipant],
) -> List[List[SwissParticipant]]:
    """Score groups, highest points first, each keeping input order."""
    groups = {}
    for participant in participants:
        groups.setdefault(participant.points, []).append(participant)
    return [groups[points] for points in sorted(groups, reverse=True)]


def _find_opponent(
    player: SwissParticipant,
    candidates: Sequence[SwissParticipant],
    used: Set[str],
    config: SwissConfig,
) -> Optional[SwissParticipant]:
    best: Optional[SwissParticipant] = None
    best_score = -1.0
    for candidate in candidates:
        if candidate.id in used:
            continue
        if not config.allow_rematch and player.has_played(candidate.id):
            continue
        gap = abs(player.rating - candidate.rating)
        if gap > config.max_rating_variance:
            continue
        if not config.prefer_balanced:
            return candidate
        score = PAIRING_SCORE_BASE - gap
        if score > best_score:
            best_score = score
            best = candidate
    return best


def pair_within_group(
    group: Sequence[SwissParticipant], config: SwissConfig
) -> List[Tuple[SwissParticipant, SwissParticipant]]:
    """Greedily pair one score group.

    Participants are taken in descending rating order. For each one not
    yet placed, later candidates are scanned and prior opponents (unless
    rematches are allowed) and candidates outside ``max_rating_variance``
    are skipped. Among the rest the smallest rating gap wins, or the first
    valid candidate when ``prefer_balanced`` is off.

    Returns:
        List of (player1, player2) pairs
    """
    ordered = _by_rating(group)
    used: Set[str] = set()
    pairs = []
    for index, player in enumerate(ordered):
        if player.id in used:
            continue
        opponent = _find_opponent(player, ordered[index + 1 :], used, config)
        if opponent is None:
            continue
        used.add(player.id)
        used.add(opponent.id)
        pairs.append((player, opponent))
    return pairs


def pair_score_groups(
    participants: Sequence[SwissParticipant],
    config: SwissConfig,
    round_number: int,
    start_number: int,
) -> SwissRound:
    """Pair a round after the first one inside score groups.

    Participants never meet across score groups. Anyone left over in a
    group is listed in ``unpaired_ids`` and sits the round out.
    """
    matches: List[Match] = []
    unpaired: List[str] = []
    for group in group_by_points(participants):
        paired: Set[str] = set()
        for first, second in pair_within_group(group, config):
            matches.append(
                _swiss_match(start_number + len(matches), round_number, first, second)
            )
            paired.update((first.id, second.id))
        leftovers = [p.id for p in _by_rating(group) if p.id not in paired]
        if leftovers:
            logger.warning(
                "Round %s: no valid opponent in the %s-point group for %s",
                round_number,
                f"{group[0].points:g}",
                ", ".join(leftovers),
            )
            unpaired.extend(leftovers)

    logger.debug(
        "Round %s pairings: %s",
        round_number,
        "; ".join(f"{m.player1_name} v {m.player2_name}" for m in matches),
    )
    return SwissRound(round_number=round_number, matches=matches, unpaired_ids=unpaired)
