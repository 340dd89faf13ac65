"""Centralized constants for the flashdeck engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Levels ----------
MIN_LEVEL = 1
MAX_LEVEL = 5

# Level 1 = 5pts, Level 5 = 1pt
LEVEL_BONUS_NUMERATOR = MAX_LEVEL + 1

# ---------- Card timing (seconds) ----------
MIN_TIME = 0.1
MAX_TIME = 60.0
DEFAULT_TIME = MAX_TIME

# ---------- Scoring ----------
SPEED_BONUS_POINTS = 5
CLOSE_MATCH_SCORE_PERCENTAGE = 0.75

# ---------- Daily bonuses ----------
FIRST_GAME_BONUS = 5
STREAK_GAME_BONUS = 5
STREAK_GAME_INTERVAL = 5

# ---------- Round selection ----------
ROUND_SIZE = 10
MEDIUM_WEIGHTS = (1, 3, 5, 3, 1)

# ---------- Session modes ----------
LOOP_COUNT = 3  # Repetitions of each card in 3-rounds mode

# ---------- Feedback timing (seconds) ----------
AUTO_CLOSE_DURATION = 3.0
BUTTON_DISABLE_DURATION = 3.0
COUNTDOWN_INTERVAL = 1.0

# ---------- Answer checking ----------
LEVENSHTEIN_THRESHOLD = 2
