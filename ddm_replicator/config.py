"""
Configuration for drift-diffusion replication runs.

Only numpy/pandas/tqdm/joblib are assumed available in the environment.
"""

# Trial counts
NUM_REPS = 1_000_000

# Quick mode (dev / smoke test)
NUM_REPS_QUICK = 1_000

# Per-trial step budget
MAX_SAMPLES = 10_000

# Evidence process
DRIFT = 0.1
SDRW = 0.3
CRITERION = 3.0

# Budget sweep range
MAX_SAMPLES_VALUES = [
    5,
    10,
    25,
    50,
    100,
    250,
    1_000,
    10_000,
]

# Randomness (None: fresh OS entropy on every run)
BASE_SEED = None

# Parallel execution
N_JOBS = -1
JOBS_BACKEND = "loky"
