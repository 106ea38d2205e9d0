"""Swiss tournament lifecycle.

A Swiss tournament is a :class:`SwissState` moved forward by the
functions below. Each function returns a new state and leaves its input
untouched:

    state = create_swiss_state(participants)
    state = apply_results(state, 1, results)
    state, round_2 = generate_next_round(state)
    ...
    ranking = calculate_final_ranking(state)
"""

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
from typing import List, Optional, Sequence, Tuple

from bracketforge.constants import FORMAT_SWISS, MIN_PARTICIPANTS
from bracketforge.exceptions import (
    AllRoundsCompleteException,
    RoundNotCompletedException,
)
from bracketforge.models.config import SwissConfig
from bracketforge.models.match import MatchResult
from bracketforge.models.participant import Participant
from bracketforge.models.swiss import SwissParticipant, SwissRound, SwissState
from bracketforge.pairing.seeding import seed_participants
from bracketforge.pairing.swiss import (
    calculate_rounds,
    pair_first_round,
    pair_score_groups,
)
from bracketforge.tournament.fairness import (
    calculate_fairness_score,
    calculate_statistics,
)
from bracketforge.tournament.result_recorder import ResultRecorder
from bracketforge.tournament.tiebreak_calculator import TiebreakCalculator
from bracketforge.utils import generate_id, setup_logger

logger = setup_logger(__name__)

_recorder = ResultRecorder()
_tiebreaks = TiebreakCalculator()


def _initial_participants(participants: Sequence[Participant]) -> List[SwissParticipant]:
    minimum = MIN_PARTICIPANTS[FORMAT_SWISS]
    seeded = seed_participants(participants, minimum=minimum, format_name=FORMAT_SWISS)
    return [SwissParticipant(participant=s.participant) for s in seeded]


def _mark_empty_round(round_: SwissRound) -> SwissRound:
    # a round without matches has nothing to wait for
    if not round_.matches:
        round_.is_completed = True
    return round_


def create_swiss_state(
    participants: Sequence[Participant],
    config: Optional[SwissConfig] = None,
    tournament_id: Optional[str] = None,
) -> SwissState:
    """Start a Swiss tournament and pair round one.

    Args:
        participants: At least four participants with unique ids
        config: Pairing settings; defaults apply when omitted
        tournament_id: Identifier for the state; generated when omitted

    Returns:
        State awaiting the results of round one

    Raises:
        InsufficientParticipantsException: With fewer than four participants
        InvalidParticipantDataException: On duplicate participant ids
        InvalidConfigurationException: On invalid settings
    """
    config = config or SwissConfig()
    config.validate()

    swiss_participants = _initial_participants(participants)
    total_rounds = calculate_rounds(len(swiss_participants))
    first_round = _mark_empty_round(pair_first_round(swiss_participants))

    state = SwissState(
        tournament_id=tournament_id or generate_id(FORMAT_SWISS),
        total_rounds=total_rounds,
        current_round=1,
        participants=swiss_participants,
        rounds=[first_round],
        config=replace(config),
    )
    state.fairness_score = calculate_fairness_score(state)
    state.statistics = calculate_statistics(state)

    logger.info(
        f"Created Swiss tournament {state.tournament_id}: "
        f"{len(swiss_participants)} participants, {total_rounds} rounds, "
        f"fairness {state.fairness_score:.1f}"
    )
    return state


def generate_next_round(state: SwissState) -> Tuple[SwissState, SwissRound]:
    """Pair the round after ``state.current_round``.

    Returns:
        The new state and the round that was just paired

    Raises:
        AllRoundsCompleteException: If every round has been generated
        RoundNotCompletedException: If the current round still lacks results
    """
    next_round_number = state.current_round + 1
    if next_round_number > state.total_rounds:
        raise AllRoundsCompleteException(
            f"All {state.total_rounds} rounds of {state.tournament_id} "
            "have been generated"
        )

    current = state.get_round(state.current_round)
    if not current.is_completed:
        pending = sum(1 for m in current.matches if m.result is None)
        raise RoundNotCompletedException(
            f"Round {state.current_round} still has {pending} matches without results"
        )

    new_state = state.copy()
    round_ = _mark_empty_round(
        pair_score_groups(
            new_state.participants,
            new_state.config,
            next_round_number,
            new_state.next_match_number,
        )
    )
    new_state.rounds.append(round_)
    new_state.current_round = next_round_number
    new_state.statistics = calculate_statistics(new_state)

    logger.info(
        f"Round {next_round_number} of {new_state.tournament_id}: "
        f"{len(round_.matches)} matches, {len(round_.unpaired_ids)} unpaired"
    )
    return new_state, round_


def apply_results(
    state: SwissState, round_number: int, results: Sequence[MatchResult]
) -> SwissState:
    """Record a batch of results; see :meth:`ResultRecorder.apply_results`."""
    return _recorder.apply_results(state, round_number, results)


def calculate_final_ranking(state: SwissState) -> List[SwissParticipant]:
    """Standings by points, then Buchholz (when enabled), then rating."""
    return _tiebreaks.calculate_final_ranking(state)


def is_complete(state: SwissState) -> bool:
    return state.is_complete


def replay_swiss_state(
    participants: Sequence[Participant],
    rounds: Sequence[SwissRound],
    config: Optional[SwissConfig] = None,
    tournament_id: Optional[str] = None,
) -> SwissState:
    """Rebuild a Swiss state from stored rounds.

    Only the pairings and their results need to be persisted: points,
    opponents, history and Buchholz are recomputed by applying each
    round's results in order.

    Args:
        participants: The tournament's participants
        rounds: Stored rounds in order, matches carrying their results
        config: Settings the tournament was run with
        tournament_id: Identifier of the stored tournament

    Returns:
        The state as it stood after the last stored round
    """
    config = config or SwissConfig()
    config.validate()
    swiss_participants = _initial_participants(participants)

    state = SwissState(
        tournament_id=tournament_id or generate_id(FORMAT_SWISS),
        total_rounds=calculate_rounds(len(swiss_participants)),
        current_round=0,
        participants=swiss_participants,
        config=replace(config),
    )

    for stored in sorted(rounds, key=lambda r: r.round_number):
        results = [m.result for m in stored.matches if m.result is not None]
        state.rounds.append(
            _mark_empty_round(
                SwissRound(
                    round_number=stored.round_number,
                    matches=[replace(m, result=None) for m in stored.matches],
                    unpaired_ids=list(stored.unpaired_ids),
                )
            )
        )
        state.current_round = stored.round_number
        if stored.round_number == 1:
            state.fairness_score = calculate_fairness_score(state)
        if results:
            state = _recorder.apply_results(state, stored.round_number, results)

    state.statistics = calculate_statistics(state)
    logger.info(
        f"Replayed {len(state.rounds)} rounds of {state.tournament_id} "
        f"({len(swiss_participants)} participants)"
    )
    return state
