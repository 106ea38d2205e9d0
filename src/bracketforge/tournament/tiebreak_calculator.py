"""Tiebreak calculation for Swiss tournaments.

This module computes Buchholz scores and the final Swiss ranking.
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

from typing import Dict, List, Sequence, Tuple

from bracketforge.models.swiss import SwissParticipant, SwissState
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


class TiebreakCalculator:
    """Calculates tiebreak scores and standings for Swiss tournaments.

    Buchholz: sum of the current points of every opponent met so far.
    It is always computed from the opponents' points at the moment of the
    recompute, so it changes as later rounds are played.

    Final ranking order:
    1. Points (descending)
    2. Buchholz (descending, only when the tournament uses Buchholz)
    3. Rating (descending)
    """

    def calculate_buchholz_scores(self, participants: Sequence[SwissParticipant]) -> None:
        """Recompute Buchholz for every participant in place.

        Args:
            participants: All participants of one tournament
        """
        points: Dict[str, float] = {p.id: p.points for p in participants}
        for participant in participants:
            participant.buchholz = self.buchholz(participant, points)

    def buchholz(self, participant: SwissParticipant, points: Dict[str, float]) -> float:
        """Sum of opponents' points; unknown opponent ids count as zero."""
        missing = [opp for opp in participant.opponents if opp not in points]
        if missing:
            logger.warning(
                f"Buchholz for {participant.name}: unknown opponents {missing}"
            )
        return sum(points.get(opp, 0.0) for opp in participant.opponents)

    def sort_key(self, participant: SwissParticipant, use_buchholz: bool) -> Tuple:
        buchholz = participant.buchholz if use_buchholz else 0.0
        return (-participant.points, -buchholz, -participant.rating)

    def calculate_final_ranking(self, state: SwissState) -> List[SwissParticipant]:
        """Rank all participants of ``state``.

        The state is not modified; the returned entries are the state's own
        participant records in ranking order.

        Args:
            state: Swiss state to rank

        Returns:
            Participants, first place first
        """
        use_buchholz = state.config.use_buchholz
        ranking = sorted(
            state.participants, key=lambda p: self.sort_key(p, use_buchholz)
        )
        logger.debug(
            "Ranking: "
            + ", ".join(
                f"{i + 1}. {p.name} ({p.points:g} pts, bh {p.buchholz:g})"
                for i, p in enumerate(ranking)
            )
        )
        return ranking
