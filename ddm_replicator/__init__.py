"""
Drift-Diffusion Replicator

This package simulates a two-boundary drift-diffusion decision process:
noisy evidence is accumulated step by step until it exceeds +/- criterion
or a per-trial sample budget runs out. Many independent trials are run in
parallel and only those that reach a decision are returned.
"""

from .config import (  # noqa: F401
    BASE_SEED,
    CRITERION,
    DRIFT,
    JOBS_BACKEND,
    MAX_SAMPLES,
    MAX_SAMPLES_VALUES,
    N_JOBS,
    NUM_REPS,
    NUM_REPS_QUICK,
    SDRW,
)
from .experiments import (  # noqa: F401
    ReplicationSummary,
    outcomes_to_frame,
    run_budget_sweep,
    run_replication,
    summarize_outcomes,
)
from .model import (  # noqa: F401
    ConfigurationError,
    EvidenceNoise,
    TrialOutcome,
    simulate_trial,
    validate_parameters,
)
