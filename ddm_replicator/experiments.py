from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, Iterable, Optional, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

from . import config
from .io_utils import LOGGER_NAME
from .model import EvidenceNoise, TrialOutcome, simulate_trial, validate_parameters


@dataclass(frozen=True)
class ReplicationSummary:
    """Lightweight diagnostics for a single replication run."""

    n_requested: int
    n_completed: int
    n_abandoned: int
    frac_completed: float
    frac_positive: float  # NaN if nothing completed
    mean_latency: float  # NaN if nothing completed
    std_latency: float  # NaN if nothing completed
    max_latency: int  # -1 if nothing completed


def _trial_rng(entropy: int, trial_index: int) -> np.random.Generator:
    # Same stream as SeedSequence(entropy).spawn(n)[trial_index], built lazily
    # in the worker so the parent never materialises num_reps seed objects.
    return np.random.default_rng(np.random.SeedSequence(entropy, spawn_key=(trial_index,)))


def _run_trial(
    entropy: int,
    trial_index: int,
    noise: EvidenceNoise,
    max_samples: int,
    criterion: float,
) -> Optional[TrialOutcome]:
    return simulate_trial(
        rng=_trial_rng(entropy, trial_index),
        noise=noise,
        max_samples=max_samples,
        criterion=criterion,
    )


def run_replication(
    num_reps: int,
    max_samples: int,
    drift: float,
    sdrw: float,
    criterion: float,
    *,
    seed: Optional[int] = config.BASE_SEED,
    n_jobs: int = config.N_JOBS,
    backend: str = config.JOBS_BACKEND,
    progress: bool = False,
    warn_hook: Optional[Callable[[str], None]] = None,
) -> list[TrialOutcome]:
    """
    Run `num_reps` independent drift-diffusion trials in parallel and return
    the ones that crossed a boundary within `max_samples` steps.

    Parameters are validated before any work is scheduled; invalid values
    raise ConfigurationError. Trials that exhaust their budget are dropped,
    never retried, and reported once each through `warn_hook` (defaults to
    the package logger's warning). The order of the returned list follows
    completion order and carries no meaning.

    `seed=None` draws fresh OS entropy. With an integer seed, trial k always
    consumes the same random stream, so results are reproducible for a fixed
    parameter set and completions can only grow with `max_samples`.
    """
    validate_parameters(
        num_reps=num_reps,
        max_samples=max_samples,
        drift=drift,
        sdrw=sdrw,
        criterion=criterion,
    )
    if warn_hook is None:
        warn_hook = logging.getLogger(LOGGER_NAME).warning

    noise = EvidenceNoise(mean=float(drift), sd=float(sdrw))
    entropy = np.random.SeedSequence(seed).entropy
    criterion = float(criterion)

    tasks = (
        delayed(_run_trial)(entropy, k, noise, max_samples, criterion)
        for k in range(num_reps)
    )
    completed = Parallel(n_jobs=n_jobs, backend=backend, return_as="generator_unordered")(tasks)

    outcomes: list[TrialOutcome] = []
    for outcome in tqdm(completed, total=num_reps, desc="trials", disable=not progress, leave=True):
        if outcome is None:
            warn_hook(f"Threshold not met within max_samples={max_samples}; trial dropped")
            continue
        outcomes.append(outcome)
    return outcomes


def summarize_outcomes(outcomes: Sequence[TrialOutcome], *, num_reps: int) -> ReplicationSummary:
    n_completed = len(outcomes)
    if n_completed > num_reps:
        raise ValueError(f"{n_completed} outcomes exceed num_reps={num_reps}")

    latencies = np.fromiter((o.latency for o in outcomes), dtype=np.int64, count=n_completed)
    responses = np.fromiter((o.response for o in outcomes), dtype=bool, count=n_completed)

    if n_completed:
        frac_positive = float(np.mean(responses))
        mean_latency = float(np.mean(latencies))
        std_latency = float(np.std(latencies))
        max_latency = int(np.max(latencies))
    else:
        frac_positive = mean_latency = std_latency = float("nan")
        max_latency = -1

    return ReplicationSummary(
        n_requested=int(num_reps),
        n_completed=n_completed,
        n_abandoned=int(num_reps) - n_completed,
        frac_completed=n_completed / num_reps if num_reps else float("nan"),
        frac_positive=frac_positive,
        mean_latency=mean_latency,
        std_latency=std_latency,
        max_latency=max_latency,
    )


def outcomes_to_frame(outcomes: Iterable[TrialOutcome]) -> pd.DataFrame:
    """One row per completed trial: latency, response, final evidence and samples drawn."""
    outcomes = list(outcomes)
    n = len(outcomes)
    latency = np.fromiter((o.latency for o in outcomes), dtype=np.int64, count=n)
    return pd.DataFrame(
        {
            "latency": latency,
            "response": np.fromiter((o.response for o in outcomes), dtype=bool, count=n),
            "final_evidence": np.fromiter((o.evidence[-1] for o in outcomes), dtype=np.float64, count=n),
            "n_samples": latency + 1,
        }
    )


def run_budget_sweep(
    *,
    max_samples_values: Sequence[int],
    num_reps: int,
    drift: float,
    sdrw: float,
    criterion: float,
    seed: Optional[int] = config.BASE_SEED,
    n_jobs: int = config.N_JOBS,
    backend: str = config.JOBS_BACKEND,
    logger_warn: Callable[[str], None],
    logger_info: Callable[[str], None],
) -> pd.DataFrame:
    """
    Sweep the per-trial budget with a shared random sequence.

    Every budget reuses the same per-trial streams, so n_completed is
    non-decreasing along the sweep. Abandoned trials are counted and logged
    once per budget instead of once per trial.
    """
    if not max_samples_values:
        raise ValueError("max_samples_values must not be empty")
    # Reject the whole grid before the first budget runs.
    for max_samples in max_samples_values:
        validate_parameters(
            num_reps=num_reps,
            max_samples=max_samples,
            drift=drift,
            sdrw=sdrw,
            criterion=criterion,
        )

    # Resolve the entropy once so seed=None still pairs the runs.
    shared_seed = np.random.SeedSequence(seed).entropy
    budgets = sorted(int(m) for m in max_samples_values)

    logger_info(
        f"START budget_sweep: max_samples in {budgets}, num_reps={num_reps}, "
        f"drift={drift}, sdrw={sdrw}, criterion={criterion}"
    )

    rows = []
    for max_samples in tqdm(budgets, desc="budget_sweep", leave=True):
        dropped: list[str] = []
        outcomes = run_replication(
            num_reps,
            max_samples,
            drift,
            sdrw,
            criterion,
            seed=shared_seed,
            n_jobs=n_jobs,
            backend=backend,
            warn_hook=dropped.append,
        )
        if dropped:
            logger_warn(f"budget_sweep: max_samples={max_samples} abandoned {len(dropped)}/{num_reps} trials")

        summary = summarize_outcomes(outcomes, num_reps=num_reps)
        rows.append({"max_samples": max_samples, **asdict(summary)})
        logger_info(
            f"budget_sweep: max_samples={max_samples} completed={summary.n_completed} "
            f"frac_positive={summary.frac_positive:.4g} mean_latency={summary.mean_latency:.4g}"
        )

    logger_info("END budget_sweep")
    return pd.DataFrame(rows)
