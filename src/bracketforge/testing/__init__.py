"""Testing support for Bracket Forge.

This module provides the Random Tournament Generator (RTG) used to
simulate Swiss tournaments and build reproducible participant pools.
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

from bracketforge.testing.rtg import (
    ParticipantFactory,
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    ResultSimulator,
    RTGConfig,
    run_swiss_simulation,
)

__all__ = [
    "ParticipantFactory",
    "RandomTournamentGenerator",
    "RTGConfig",
    "RatingDistribution",
    "ResultPattern",
    "ResultSimulator",
    "run_swiss_simulation",
]
