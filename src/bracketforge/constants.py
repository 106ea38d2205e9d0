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

# --- Constants ---
LOG_LEVEL_ENV_VAR = "BRACKETFORGE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

# Match outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Outcome keys (stored on match history entries)
OUTCOME_WIN = "win"
OUTCOME_DRAW = "draw"
OUTCOME_LOSS = "loss"

OUTCOME_POINTS = {
    OUTCOME_WIN: WIN_SCORE,
    OUTCOME_DRAW: DRAW_SCORE,
    OUTCOME_LOSS: LOSS_SCORE,
}

# Tournament formats
FORMAT_SINGLE_ELIMINATION = "single_elimination"
FORMAT_ROUND_ROBIN = "round_robin"
FORMAT_HYBRID = "hybrid"
FORMAT_SWISS = "swiss"

BRACKET_FORMATS = (FORMAT_SINGLE_ELIMINATION, FORMAT_ROUND_ROBIN, FORMAT_HYBRID)
ALL_FORMATS = BRACKET_FORMATS + (FORMAT_SWISS,)

# Event composition
EVENT_SINGLES = "singles"
EVENT_DOUBLES = "doubles"
TEAM_TIER = "team"
TEAM_SIZE = 2

# Minimum participants per format (hybrid minimum is the configured group size)
MIN_PARTICIPANTS = {
    FORMAT_SINGLE_ELIMINATION: 2,
    FORMAT_ROUND_ROBIN: 2,
    FORMAT_SWISS: 4,
}

# Round names
ROUND_NAME_ROUND_ROBIN = "Round Robin"
ROUND_NAME_GROUP_STAGE = "Group Stage"
ROUND_NAME_FINAL = "Final"
ROUND_NAME_SEMI_FINAL = "Semi Final"
ROUND_NAME_QUARTER_FINAL = "Quarter Final"

# Stage keys
STAGE_ROUND_ROBIN = "round_robin"
STAGE_GROUP = "group_stage"
STAGE_FINALS = "finals"
STAGE_SEMI_FINALS = "semi_finals"
STAGE_QUARTER_FINALS = "quarter_finals"
STAGE_ROUND_OF_16 = "round_of_16"
STAGE_ROUND_OF_32 = "round_of_32"

# Remaining players -> stage key
KNOCKOUT_STAGE_KEYS = {
    2: STAGE_FINALS,
    4: STAGE_SEMI_FINALS,
    8: STAGE_QUARTER_FINALS,
    16: STAGE_ROUND_OF_16,
    32: STAGE_ROUND_OF_32,
}

# Remaining players -> display name; everything else is "Round k"
KNOCKOUT_ROUND_NAMES = {
    2: ROUND_NAME_FINAL,
    4: ROUND_NAME_SEMI_FINAL,
    8: ROUND_NAME_QUARTER_FINAL,
}

POSITION_UPPER = "upper"
POSITION_LOWER = "lower"

MATCH_STATUS_SCHEDULED = "scheduled"

# Swiss round-count step table: (max participants, rounds)
SWISS_ROUND_TABLE = (
    (2, 1),
    (4, 2),
    (8, 3),
    (16, 4),
    (32, 5),
    (64, 6),
    (128, 7),
)

# Swiss defaults
DEFAULT_ALLOW_REMATCH = False
DEFAULT_MAX_RATING_VARIANCE = 300.0
DEFAULT_USE_BUCHHOLZ = True
DEFAULT_PREFER_BALANCED = True

# Greedy candidate score is PAIRING_SCORE_BASE - rating gap
PAIRING_SCORE_BASE = 1000.0

# Fairness scoring
FAIRNESS_MAX_SCORE = 100.0
FAIRNESS_GAP_DIVISOR = 5.0
REMATCH_PENALTY = 10.0
BALANCE_GAP_DIVISOR = 10.0
GROUP_FAIRNESS_DIVISOR = 10.0
GROUP_FAIRNESS_THRESHOLD = 50.0

# Hybrid defaults
DEFAULT_GROUP_SIZE = 4
DEFAULT_ADVANCERS_PER_GROUP = 1
