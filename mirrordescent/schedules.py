"""Step-size schedules for mirror descent."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

StepSize = Callable[[int], float]
"""
A StepSize maps the iteration index k = 0, 1, 2, ... to a strictly positive
step size c(k).
"""


def constant_step(value: float) -> StepSize:
    """
    Constant schedule c(k) = value.

    Raises
    ------
    ValueError
        If value is not a finite positive number.
    """
    if not math.isfinite(value) or value <= 0.0:
        raise ValueError("value must be a finite positive number.")

    def schedule(k: int) -> float:
        return float(value)

    return schedule


def harmonic_step(scale: float = 1.0) -> StepSize:
    """
    Harmonic schedule c(k) = scale / (k + 1).

    Non-summable but square-summable: the classical choice for subgradient
    methods on non-smooth objectives.
    """
    return power_step(scale=scale, power=1.0)


def power_step(scale: float = 1.0, power: float = 0.5) -> StepSize:
    """
    Polynomially decaying schedule c(k) = scale / (k + 1)**power.

    Parameters
    ----------
    scale:
        Step size at k = 0. Must be positive.
    power:
        Decay exponent. Must lie in [0, 1]; 0 gives a constant schedule.

    Raises
    ------
    ValueError
        If scale <= 0 or power is outside [0, 1].
    """
    if not math.isfinite(scale) or scale <= 0.0:
        raise ValueError("scale must be a finite positive number.")
    if not 0.0 <= power <= 1.0:
        raise ValueError("power must lie in [0, 1].")

    def schedule(k: int) -> float:
        return scale / (k + 1) ** power

    return schedule


def sample_schedule(schedule: StepSize, num_steps: int) -> np.ndarray:
    """
    Evaluate a schedule on k = 0, ..., num_steps-1.

    Returns
    -------
    np.ndarray
        1D float array of shape (num_steps,).

    Raises
    ------
    ValueError
        If num_steps < 1 or the schedule produces a non-positive or
        non-finite value.
    """
    if num_steps < 1:
        raise ValueError("num_steps must be at least 1.")

    values = np.array([float(schedule(k)) for k in range(num_steps)], dtype=float)

    if not np.all(np.isfinite(values)):
        raise ValueError("schedule returned non-finite step sizes.")
    if np.any(values <= 0.0):
        k = int(np.argmax(values <= 0.0))
        raise ValueError(
            f"schedule must return positive step sizes, but c({k}) = {values[k]}."
        )

    return values


__all__ = [
    "StepSize",
    "constant_step",
    "harmonic_step",
    "power_step",
    "sample_schedule",
]
