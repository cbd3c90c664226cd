"""
Sanity-check / validation script.

Runs a single quick replication of the default scenario and checks every
returned outcome against the first-crossing invariants, printing key
diagnostics to console.
"""

from __future__ import annotations

import numpy as np

from . import config
from .experiments import outcomes_to_frame, run_replication, summarize_outcomes
from .model import TrialOutcome


def _pct(x: float) -> str:
    return f"{100.0 * x:.2f}%"


def outcome_violations(outcome: TrialOutcome, criterion: float) -> list[str]:
    """Return a description of every structural invariant `outcome` breaks (empty if none)."""
    problems = []
    ev = np.asarray(outcome.evidence, dtype=float)
    lat = outcome.latency

    if ev.shape != (lat + 1,):
        problems.append(f"evidence length {ev.size} != latency + 1 ({lat + 1})")
        return problems
    if not abs(ev[lat]) > criterion:
        problems.append(f"|evidence[{lat}]|={abs(ev[lat]):.6g} does not exceed criterion={criterion}")
    early = np.flatnonzero(np.abs(ev[:lat]) > criterion)
    if early.size:
        problems.append(f"earlier crossing at step {int(early[0])} (latency={lat})")
    if outcome.response != bool(ev[lat] > 0):
        problems.append(f"response={outcome.response} disagrees with sign of evidence[{lat}]={ev[lat]:.6g}")
    return problems


def main() -> None:
    num_reps = config.NUM_REPS_QUICK
    seed = 123

    outcomes = run_replication(
        num_reps,
        config.MAX_SAMPLES,
        config.DRIFT,
        config.SDRW,
        config.CRITERION,
        seed=seed,
        warn_hook=lambda msg: print(f"[VALIDATION][WARN] {msg}"),
    )
    summary = summarize_outcomes(outcomes, num_reps=num_reps)

    print("[VALIDATION] replication stats (quick scenario)")
    print(
        f"num_reps={num_reps}, max_samples={config.MAX_SAMPLES}, drift={config.DRIFT}, "
        f"sdrw={config.SDRW}, criterion={config.CRITERION}, seed={seed}"
    )
    print(f"completed={summary.n_completed} ({_pct(summary.frac_completed)}), abandoned={summary.n_abandoned}")
    print(f"positive responses={_pct(summary.frac_positive)}")
    print(f"mean(latency)={summary.mean_latency:.6g}, std(latency)={summary.std_latency:.6g}")
    print(f"max(latency)={summary.max_latency}")
    print("")

    print("[VALIDATION] latency quantiles by response")
    df = outcomes_to_frame(outcomes)
    for response, grp in df.groupby("response"):
        q = grp["latency"].quantile([0.1, 0.5, 0.9]).to_numpy()
        print(f"response={response}: n={len(grp)}, q10={q[0]:.6g}, q50={q[1]:.6g}, q90={q[2]:.6g}")
    print("")

    print("[VALIDATION] structural invariants")
    n_bad = 0
    for outcome in outcomes:
        problems = outcome_violations(outcome, config.CRITERION)
        if problems:
            n_bad += 1
            print(f"[VALIDATION][FAIL] latency={outcome.latency}: {'; '.join(problems)}")
    print(f"outcomes violating invariants: {n_bad}/{len(outcomes)}")
    print("")

    if n_bad:
        print("[VALIDATION FAILED] See violations above.")
        raise SystemExit(1)
    print("[VALIDATION COMPLETE] Model behaviour consistent with first-crossing semantics.")


if __name__ == "__main__":
    main()
