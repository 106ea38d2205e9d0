"""Pairing quality measures for Swiss states and hybrid groups."""

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
from typing import Iterable, List, Sequence, Tuple

from bracketforge.constants import (
    BALANCE_GAP_DIVISOR,
    FAIRNESS_GAP_DIVISOR,
    FAIRNESS_MAX_SCORE,
    GROUP_FAIRNESS_DIVISOR,
    GROUP_FAIRNESS_THRESHOLD,
    KNOCKOUT_STAGE_KEYS,
    REMATCH_PENALTY,
    STAGE_QUARTER_FINALS,
    STAGE_ROUND_OF_16,
    STAGE_ROUND_OF_32,
)
from bracketforge.models.match import Match
from bracketforge.models.participant import SeededParticipant
from bracketforge.models.swiss import SwissRound, SwissState, SwissStatistics
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class GroupFairness:
    """Outcome of a group balance check."""

    is_valid: bool
    score: float
    group_averages: List[float] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)


def _rated_matches(rounds: Iterable[SwissRound]) -> List[Tuple[int, Match]]:
    return [
        (round_.round_number, match)
        for round_ in rounds
        for match in round_.matches
        if match.rating_gap is not None
    ]


def count_rematches(rounds: Sequence[SwissRound]) -> int:
    """Matches whose pairing already occurred in an earlier round."""
    seen = set()
    rematches = 0
    for round_ in sorted(rounds, key=lambda r: r.round_number):
        current = []
        for match in round_.matches:
            pair = frozenset(match.pair)
            if pair in seen:
                rematches += 1
            current.append(pair)
        seen.update(current)
    return rematches


def _average_gap(rounds: Sequence[SwissRound]) -> Tuple[float, int]:
    matches = _rated_matches(rounds)
    if not matches:
        return 0.0, 0
    total = sum(match.rating_gap for _, match in matches)
    return total / len(matches), len(matches)


def calculate_fairness_score(state: SwissState) -> float:
    """Score in [0, 100]: 100 - average rating gap / 5, minus 10 per rematch."""
    if not state.rounds:
        return 0.0
    average_gap, _ = _average_gap(state.rounds)
    gap_score = max(0.0, FAIRNESS_MAX_SCORE - average_gap / FAIRNESS_GAP_DIVISOR)
    penalty = count_rematches(state.rounds) * REMATCH_PENALTY
    return max(0.0, min(FAIRNESS_MAX_SCORE, gap_score - penalty))


def calculate_statistics(state: SwissState) -> SwissStatistics:
    """Aggregate figures over every round generated so far."""
    average_gap, match_count = _average_gap(state.rounds)
    if match_count:
        balance = FAIRNESS_MAX_SCORE - min(
            FAIRNESS_MAX_SCORE, average_gap / BALANCE_GAP_DIVISOR
        )
    else:
        balance = 0.0
    return SwissStatistics(
        average_rating_variance=round(average_gap),
        balance_score=round(balance),
        rematch_count=count_rematches(state.rounds),
    )


def validate_group_fairness(
    groups: Sequence[Sequence[SeededParticipant]],
) -> GroupFairness:
    """Compare average ratings across groups.

    score = max(0, 100 - (strongest average - weakest average) / 10);
    the grouping is considered fair when the score is at least 50.
    """
    averages = [
        sum(p.rating for p in group) / len(group) for group in groups if len(group)
    ]
    if len(averages) < 2:
        return GroupFairness(is_valid=True, score=FAIRNESS_MAX_SCORE, group_averages=averages)

    spread = max(averages) - min(averages)
    score = max(0.0, FAIRNESS_MAX_SCORE - spread / GROUP_FAIRNESS_DIVISOR)
    issues = []
    if score < GROUP_FAIRNESS_THRESHOLD:
        issues.append(
            f"Average group ratings differ by {spread:.0f} "
            f"({min(averages):.0f} to {max(averages):.0f})"
        )
    return GroupFairness(
        is_valid=not issues, score=score, group_averages=averages, issues=issues
    )


def knockout_start_stage(entrants: int) -> str:
    """Stage key of the first knockout round for ``entrants`` players.

    >>> knockout_start_stage(4)
    'semi_finals'
    >>> knockout_start_stage(12)
    'round_of_16'
    """
    if entrants in KNOCKOUT_STAGE_KEYS:
        return KNOCKOUT_STAGE_KEYS[entrants]
    if entrants <= 8:
        return STAGE_QUARTER_FINALS
    if entrants <= 16:
        return STAGE_ROUND_OF_16
    return STAGE_ROUND_OF_32
