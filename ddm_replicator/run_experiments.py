from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from . import config
from .experiments import run_budget_sweep, run_replication, summarize_outcomes
from .io_utils import get_logger


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run drift-diffusion replication experiments.")
    p.add_argument(
        "--mode",
        choices=["full", "quick"],
        default="full",
        help="full: NUM_REPS trials; quick: NUM_REPS_QUICK trials for a dev run",
    )
    p.add_argument(
        "--only",
        choices=["scenario", "budget_sweep", "all"],
        default="scenario",
        help="Run the fixed-parameter scenario, the max_samples sweep, or both.",
    )
    p.add_argument("--seed", type=int, default=config.BASE_SEED, help="Base seed (default: fresh entropy)")
    p.add_argument("--n-jobs", type=int, default=config.N_JOBS, help="joblib worker count (-1: all cores)")
    p.add_argument("--backend", choices=["loky", "threading"], default=config.JOBS_BACKEND)
    p.add_argument("--log-dir", type=Path, default=None, help="Also append diagnostics to a log file here")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    mode = args.mode
    only = args.only

    logger = get_logger(mode=mode, log_dir=args.log_dir)
    num_reps = config.NUM_REPS_QUICK if mode == "quick" else config.NUM_REPS

    logger.info(
        f"RUN START mode={mode} num_reps={num_reps} max_samples={config.MAX_SAMPLES} "
        f"drift={config.DRIFT} sdrw={config.SDRW} criterion={config.CRITERION} seed={args.seed}"
    )

    if only in ("all", "scenario"):
        outcomes = run_replication(
            num_reps,
            config.MAX_SAMPLES,
            config.DRIFT,
            config.SDRW,
            config.CRITERION,
            seed=args.seed,
            n_jobs=args.n_jobs,
            backend=args.backend,
            progress=True,
            warn_hook=logger.warning,
        )
        summary = summarize_outcomes(outcomes, num_reps=num_reps)
        logger.info(
            f"scenario: successful samples -> {summary.n_completed}/{summary.n_requested} "
            f"(frac_positive={summary.frac_positive:.4g}, mean_latency={summary.mean_latency:.4g}, "
            f"max_latency={summary.max_latency})"
        )

    if only in ("all", "budget_sweep"):
        df = run_budget_sweep(
            max_samples_values=config.MAX_SAMPLES_VALUES,
            num_reps=config.NUM_REPS_QUICK,
            drift=config.DRIFT,
            sdrw=config.SDRW,
            criterion=config.CRITERION,
            seed=args.seed,
            n_jobs=args.n_jobs,
            backend=args.backend,
            logger_warn=logger.warning,
            logger_info=logger.info,
        )
        logger.info("budget_sweep summary:\n" + df.to_string(index=False))

    logger.info("RUN END")


if __name__ == "__main__":
    main()
