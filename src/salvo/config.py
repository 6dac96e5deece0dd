"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that a
benchmark run or the test-suite can change the board without touching
the CLI. Command-line flags on ``salvo`` take precedence over these.
"""

from __future__ import annotations

import os
from typing import Optional

# ===========================================================================
# Game Constants
# ===========================================================================
# SALVO_BOARD_SIZE: Defines the width and height of the hidden board.
#   Defaults to 12 (for a 12x12 grid).
#   Example: export SALVO_BOARD_SIZE=10
BOARD_SIZE: int = int(os.getenv("SALVO_BOARD_SIZE", "12"))

# SALVO_SEED: Seed for random board generation. Unset means a fresh random
#   layout every run.
#   Example: export SALVO_SEED=42
SEED: Optional[int] = int(os.environ["SALVO_SEED"]) if os.getenv("SALVO_SEED") else None

# SALVO_PLACEMENT_ATTEMPTS: How many random anchors the board generator tries
#   for a single ship before giving up on the whole fleet.
#   Defaults to 10000.
PLACEMENT_ATTEMPTS: int = int(os.getenv("SALVO_PLACEMENT_ATTEMPTS", "10000"))


# ===========================================================================
# Heat Tuning
# ===========================================================================
# Every possible placement adds HEAT_BASE * HEAT_HIT_MULTIPLIER**k to each cell
# it covers, k being the number of confirmed hits the placement overlaps.
# Not read from the environment.
HEAT_BASE: float = 0.001
HEAT_HIT_MULTIPLIER: float = 10.0


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SALVO_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled). Can also be set via the `--debug` CLI flag.
#   Example: export SALVO_DEBUG=1
DEBUG: bool = os.getenv("SALVO_DEBUG", "0") == "1"

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
