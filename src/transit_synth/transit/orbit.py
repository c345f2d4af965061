"""Circular-orbit geometry: observation time to sky-projected separation.

All lengths are expressed in stellar radii before they are combined; the
model's AU / solar-radius / Jupiter-radius inputs are converted by the
PhysicalModel properties.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from transit_synth.errors import InvalidParameterError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from transit_synth.domain.model import PhysicalModel


def _require_orbit(model: PhysicalModel) -> None:
    # Models built with model_construct() skip pydantic validation.
    if not model.period > 0:
        raise InvalidParameterError(
            f"period must be positive, got {model.period}", field="period", value=model.period
        )
    if not model.stellar_radius > 0:
        raise InvalidParameterError(
            f"stellar_radius must be positive, got {model.stellar_radius}",
            field="stellar_radius",
            value=model.stellar_radius,
        )


def orbital_phase(time: ArrayLike, epoch: float, period: float) -> NDArray[np.float64]:
    """Signed orbital phase in [-0.5, 0.5), zero at mid-transit.

    Args:
        time: Observation time(s) in days
        epoch: Mid-transit reference time in days
        period: Orbital period in days

    Returns:
        Phase as a fraction of the period, measured from the nearest transit
    """
    t = np.asarray(time, dtype=np.float64)
    return ((t - epoch) / period + 0.5) % 1.0 - 0.5


def compute_separation(
    model: PhysicalModel, time: ArrayLike
) -> tuple[float | NDArray[np.float64], float]:
    """Projected planet-star separation z and radius ratio p at ``time``.

    Uses the circular-orbit projection

        z = (a/Rs) * sqrt(sin^2(2 pi phase) + cos^2(i))

    Samples on the far half of the orbit (cos(2 pi phase) < 0) have the
    planet behind the star; they are reported with z = inf so they can
    never be mistaken for a transit.

    Args:
        model: System parameters
        time: Observation time(s) in days, same reference as ``model.epoch``

    Returns:
        Tuple of (z, p). ``z`` has the shape of ``time`` (a float for scalar
        input); ``p`` is the planet radius in stellar radii.

    Raises:
        InvalidParameterError: If period or stellar radius is not positive.
    """
    _require_orbit(model)

    scalar = np.ndim(time) == 0
    angle = 2.0 * np.pi * orbital_phase(np.atleast_1d(time), model.epoch, model.period)
    a_rs = model.scaled_separation
    cos_i = math.cos(model.inclination_rad)

    z = a_rs * np.sqrt(np.sin(angle) ** 2 + cos_i**2)
    z = np.where(np.cos(angle) < 0.0, np.inf, z)

    p = model.radius_ratio
    return (float(z[0]) if scalar else z), p


def is_transiting(model: PhysicalModel) -> bool:
    """Whether the planet disk crosses the stellar disk at mid-transit."""
    _require_orbit(model)
    return model.impact_parameter < 1.0 + model.radius_ratio


def transit_duration(model: PhysicalModel) -> float:
    """Total transit duration T14 (first to fourth contact) in days.

    Solves z(phase) = 1 + p for the projection used by
    :func:`compute_separation`. Returns 0.0 for a non-transiting geometry.
    """
    _require_orbit(model)
    a_rs = model.scaled_separation
    b = model.impact_parameter
    p = model.radius_ratio

    chord = (1.0 + p) ** 2 - b**2
    if chord <= 0.0:
        return 0.0
    sin_half = min(math.sqrt(chord) / a_rs, 1.0)
    return model.period * math.asin(sin_half) / math.pi
