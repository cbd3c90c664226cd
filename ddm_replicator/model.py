from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np


class ConfigurationError(ValueError):
    """Raised before any sampling when replication parameters are invalid."""


@dataclass(frozen=True)
class EvidenceNoise:
    """
    Normal per-step evidence increment, N(mean, sd).

    Holds no generator state; every call to `sample` draws from the generator
    passed in, so one instance can be shared by all trials of a run.
    """

    mean: float
    sd: float

    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.normal(self.mean, self.sd))


@dataclass(frozen=True, eq=False)
class TrialOutcome:
    """One completed trial: first-crossing step, boundary sign and evidence trace."""

    latency: int
    response: bool
    evidence: np.ndarray  # cumulative evidence, steps 0..latency inclusive

    def __post_init__(self) -> None:
        # Keep a private read-only copy; the caller's array is left untouched.
        evidence = np.array(self.evidence, dtype=np.float64)
        evidence.flags.writeable = False
        object.__setattr__(self, "evidence", evidence)

    def __reduce__(self):
        # Rebuild through __init__ so the trace stays read-only after crossing
        # a process boundary.
        return (self.__class__, (self.latency, self.response, self.evidence))


def _require_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer (got {value!r})")
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0 (got {value})")


def _require_real(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a real number (got {value!r})")


def validate_parameters(
    *,
    num_reps: int,
    max_samples: int,
    drift: float,
    sdrw: float,
    criterion: float,
) -> None:
    """
    Check replication parameters, raising ConfigurationError on the first
    violation. The message names the offending parameter.

    Zero trial or budget counts are rejected rather than yielding an empty
    result.
    """
    _require_count("num_reps", num_reps)
    _require_count("max_samples", max_samples)
    for name, value in (("drift", drift), ("sdrw", sdrw), ("criterion", criterion)):
        _require_real(name, value)
    if not math.isfinite(drift):
        raise ConfigurationError(f"drift must be finite (got {drift})")
    if not math.isfinite(sdrw) or sdrw <= 0:
        raise ConfigurationError(f"sdrw must be finite and > 0 (got {sdrw})")
    if not math.isfinite(criterion) or criterion <= 0:
        raise ConfigurationError(f"criterion must be finite and > 0 (got {criterion})")


def simulate_trial(
    *,
    rng: np.random.Generator,
    noise: EvidenceNoise,
    max_samples: int,
    criterion: float,
) -> Optional[TrialOutcome]:
    """
    Run one bounded random walk.

    Each step draws an increment from `noise`, adds it to the accumulator and
    records the running total. The walk stops at the first step where
    |accumulator| > criterion and returns that step as the latency. Returns
    None if all `max_samples` steps pass without a crossing (abandoned trial).
    """
    acc = 0.0
    trace = np.empty(max_samples, dtype=np.float64)

    for i in range(max_samples):
        acc += noise.sample(rng)
        trace[i] = acc
        if abs(acc) > criterion:
            return TrialOutcome(
                latency=i,
                response=acc > 0,
                evidence=trace[: i + 1],
            )

    return None
