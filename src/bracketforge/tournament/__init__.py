"""Tournament management for Bracket Forge.

This package drives Swiss tournaments round by round and dispatches
bracket generation requests to the format generators.
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

from bracketforge.tournament.fairness import (
    GroupFairness,
    calculate_fairness_score,
    calculate_statistics,
    knockout_start_stage,
    validate_group_fairness,
)
from bracketforge.tournament.generator import flatten_matches, generate_structure
from bracketforge.tournament.result_recorder import ResultRecorder
from bracketforge.tournament.swiss_tournament import (
    apply_results,
    calculate_final_ranking,
    create_swiss_state,
    generate_next_round,
    is_complete,
    replay_swiss_state,
)
from bracketforge.tournament.tiebreak_calculator import TiebreakCalculator

__all__ = [
    "GroupFairness",
    "ResultRecorder",
    "TiebreakCalculator",
    "apply_results",
    "calculate_fairness_score",
    "calculate_final_ranking",
    "calculate_statistics",
    "create_swiss_state",
    "flatten_matches",
    "generate_next_round",
    "generate_structure",
    "is_complete",
    "knockout_start_stage",
    "replay_swiss_state",
    "validate_group_fairness",
]
