import os

# =========================
# Tree shape
# =========================
DEFAULT_DEPTH = 3
DEFAULT_BRANCHING_FACTOR = 2

# lower bounds the generator relies on; upper bounds keep the diagram legible
MIN_DEPTH = 3
MAX_DEPTH = 6
MIN_BRANCHING_FACTOR = 2
MAX_BRANCHING_FACTOR = 5

# leaf scores
MIN_VALUE = -20
MAX_VALUE = 20

# =========================
# Playback
# =========================
DEFAULT_STEP_DELAY_MS = 850
MIN_STEP_DELAY_MS = 25
MAX_STEP_DELAY_MS = 1675

LOG_LEVEL = os.environ.get("ABTUTOR_LOG_LEVEL", "WARNING").upper()
