# batch_config.py
from __future__ import annotations

# ---------------------------------------------------------------------------
# CPU usage for batch_run.py
# ---------------------------------------------------------------------------
# Each test iteration runs every algorithm as its own task.
# If CPU_COUNT is None, batch_run.py will use min(#algorithms, mp.cpu_count()).
# CPU_COUNT = 1 runs every task inline in the main process (no pool).
#
# Example:
#   CPU_COUNT = 5        # one process per algorithm
#   CPU_COUNT = None     # auto-detect from the machine
CPU_COUNT: int | None = None

# ---------------------------------------------------------------------------
# Size sweep (used when batch_run.py gets no size/numTests arguments)
# ---------------------------------------------------------------------------
# Sizes run SWEEP_START, SWEEP_START + SWEEP_STEP, ... up to SWEEP_MAX.
# SWEEP_MAX = None keeps growing until a size fails (or you hit Ctrl+C).
SWEEP_START: int = 25
SWEEP_STEP: int = 25
SWEEP_MAX: int | None = 500
DEFAULT_NUM_TESTS: int = 10

# ---------------------------------------------------------------------------
# Maze generation
# ---------------------------------------------------------------------------
EXTRA_PASSAGE_DENSITY: float = 0.1   # multi-path mode only
ENDPOINT_POLICY: str = "corners"     # "corners" or "farthest"
BASE_SEED: int = 0                   # iteration i uses BASE_SEED + i

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUTPUT_DIR: str = "data"
CPU_PROFILE_PATH: str = "cpu.prof"
MEM_PROFILE_PATH: str = "mem.prof"
