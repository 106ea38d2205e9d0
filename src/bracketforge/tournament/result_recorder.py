"""Result recording for Swiss tournaments.

This module validates a batch of match results and applies it to a
Swiss state.
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

from typing import Dict, List, Optional, Sequence, Set, Tuple

from bracketforge.constants import OUTCOME_POINTS
from bracketforge.exceptions import (
    DuplicateResultException,
    InvalidResultException,
    MatchNotFoundException,
)
from bracketforge.models.match import MatchResult
from bracketforge.models.swiss import (
    SwissMatchRecord,
    SwissParticipant,
    SwissRound,
    SwissState,
)
from bracketforge.tournament.tiebreak_calculator import TiebreakCalculator
from bracketforge.type_hints import Outcome
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating a whole batch before anything is applied
    - Updating points, opponents and match history
    - Recomputing Buchholz once the batch is in
    - Marking a round completed when every match has a result
    """

    def __init__(self, tiebreak_calculator: Optional[TiebreakCalculator] = None):
        self.tiebreak_calculator = tiebreak_calculator or TiebreakCalculator()

    def apply_results(
        self, state: SwissState, round_number: int, results: Sequence[MatchResult]
    ) -> SwissState:
        """Apply a batch of results to one round.

        Every entry is validated first; if any entry is rejected the
        exception propagates and no result of the batch is applied. The
        input state is never modified.

        Args:
            state: Current Swiss state
            round_number: Round the results belong to
            results: One entry per played match, keyed by (player1, player2)

        Returns:
            A new state with the results applied

        Raises:
            RoundNotFoundException: If the round has not been generated
            MatchNotFoundException: If an entry names an unknown pairing
            DuplicateResultException: If a match appears twice in the batch
                or already has a result
            InvalidResultException: If a winner is not one of the two players
        """
        round_ = state.get_round(round_number)
        indices = self.validate_batch(round_, results)

        new_state = state.copy()
        new_round = new_state.get_round(round_number)
        participants = new_state.participants_by_id

        for index, result in zip(indices, results):
            new_round.matches[index] = new_round.matches[index].with_result(result)
            self._record_match(participants, round_number, result)

        self.tiebreak_calculator.calculate_buchholz_scores(new_state.participants)

        if all(match.result is not None for match in new_round.matches):
            new_round.is_completed = True
            logger.info(f"Round {round_number} completed")
        else:
            pending = sum(1 for m in new_round.matches if m.result is None)
            logger.debug(f"Round {round_number}: {pending} results outstanding")

        return new_state

    def validate_batch(
        self, round_: SwissRound, results: Sequence[MatchResult]
    ) -> List[int]:
        """Check every entry of a batch against the round.

        Returns:
            Index of the matching match in ``round_.matches`` per entry
        """
        seen: Set[Tuple[str, str]] = set()
        indices = []
        for result in results:
            index = round_.find_match(result.player1_id, result.player2_id)
            if index is None:
                logger.error(
                    f"Pairing ({result.player1_id}, {result.player2_id}) not found "
                    f"in round {round_.round_number} pairings"
                )
                raise MatchNotFoundException(
                    round_.round_number, result.player1_id, result.player2_id
                )

            if result.pair in seen:
                raise DuplicateResultException(
                    f"Result for {result.player1_id} vs {result.player2_id} "
                    "appears twice in this batch"
                )
            if round_.matches[index].result is not None:
                raise DuplicateResultException(
                    f"Result for {result.player1_id} vs {result.player2_id} "
                    f"is already recorded in round {round_.round_number}"
                )

            self._validate_outcome(result)
            seen.add(result.pair)
            indices.append(index)
        return indices

    def _validate_outcome(self, result: MatchResult) -> None:
        if result.is_draw:
            if result.winner_id is not None:
                raise InvalidResultException(
                    f"Draw between {result.player1_id} and {result.player2_id} "
                    f"cannot name a winner ({result.winner_id})"
                )
            return
        if result.winner_id not in result.pair:
            logger.error(f"Invalid winner {result.winner_id!r} for {result.pair}")
            raise InvalidResultException(
                f"Winner must be {result.player1_id} or {result.player2_id}, "
                f"got {result.winner_id!r}"
            )

    def _record_match(
        self,
        participants: Dict[str, SwissParticipant],
        round_number: int,
        result: MatchResult,
    ) -> None:
        first = participants[result.player1_id]
        second = participants[result.player2_id]
        self._record_side(first, second, round_number, result.outcome_for(first.id))
        self._record_side(second, first, round_number, result.outcome_for(second.id))
        logger.debug(
            f"Recorded round {round_number}: {first.name} "
            f"{result.outcome_for(first.id)} vs {second.name}"
        )

    def _record_side(
        self,
        participant: SwissParticipant,
        opponent: SwissParticipant,
        round_number: int,
        outcome: Outcome,
    ) -> None:
        points = OUTCOME_POINTS[outcome]
        participant.points += points
        if not participant.has_played(opponent.id):
            participant.opponents.append(opponent.id)
        participant.history.append(
            SwissMatchRecord(
                round_number=round_number,
                opponent_id=opponent.id,
                opponent_name=opponent.name,
                outcome=outcome,
                points=points,
            )
        )
