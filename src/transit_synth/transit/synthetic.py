"""Synthetic transit light curve generation.

Each observation time is mapped independently through

    orbit geometry -> occulted intensity -> occultation flux

so the output has exactly the length and order of the input times. Inputs are
validated up front; a failed call raises before any sample is computed.

References:
- Mandel & Agol 2002, ApJ, 580, L171
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from transit_synth.config import SynthesisConfig
from transit_synth.constants import SMALL_PLANET_LIMIT
from transit_synth.domain.model import PhysicalModel
from transit_synth.errors import ErrorType, InvalidParameterError
from transit_synth.transit.occultation import regime_labels, transit_flux
from transit_synth.transit.orbit import compute_separation

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)


# =============================================================================
# Result Dataclass
# =============================================================================


@dataclass(frozen=True)
class SyntheticLightCurve:
    """Synthetic light curve with the geometry that produced it.

    Attributes:
        time: Observation times (days), in input order
        flux: Normalized flux, noise included if requested
        z: Projected separation per sample (stellar radii, inf behind the star)
        regime: Occultation regime name per sample
        model: Parameters used for the synthesis
        noise: Standard deviation of the added noise (0.0 for none)
    """

    time: NDArray[np.float64]
    flux: NDArray[np.float64]
    z: NDArray[np.float64]
    regime: NDArray[np.str_]
    model: PhysicalModel
    noise: float

    @property
    def n_points(self) -> int:
        return len(self.time)

    @property
    def depth(self) -> float:
        """Largest flux decrement in the series."""
        return float(1.0 - np.min(self.flux))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "model": self.model.model_dump(mode="json"),
            "noise": self.noise,
            "n_points": self.n_points,
            "radius_ratio": self.model.radius_ratio,
            "time": self.time.tolist(),
            "flux": self.flux.tolist(),
            "z": [None if not np.isfinite(v) else float(v) for v in self.z],
            "regime": self.regime.tolist(),
        }


# =============================================================================
# Validation
# =============================================================================


def _validate_times(times: ArrayLike) -> NDArray[np.float64]:
    try:
        t = np.array(times, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(
            f"times must be numeric: {exc}", error_type=ErrorType.INVALID_DATA, field="times"
        ) from exc

    if t.ndim != 1:
        raise InvalidParameterError(
            f"times must be a 1-D sequence, got shape {t.shape}",
            error_type=ErrorType.INVALID_DATA,
            field="times",
        )
    if t.size == 0:
        raise InvalidParameterError("times must not be empty", field="times")
    if not np.all(np.isfinite(t)):
        n_bad = int(np.count_nonzero(~np.isfinite(t)))
        raise InvalidParameterError(
            f"times contains {n_bad} non-finite value(s)",
            error_type=ErrorType.INVALID_DATA,
            field="times",
            n_bad=n_bad,
        )
    return t


def _validate_model(model: PhysicalModel) -> None:
    if not isinstance(model, PhysicalModel):
        raise InvalidParameterError(
            f"model must be a PhysicalModel, got {type(model).__name__}", field="model"
        )
    checks = (
        ("period", model.period > 0, "must be positive"),
        ("separation", model.separation > 0, "must be positive"),
        ("stellar_radius", model.stellar_radius > 0, "must be positive"),
        ("planet_radius", model.planet_radius >= 0, "must be non-negative"),
        ("inclination", 0 < model.inclination <= 90, "must be in (0, 90] degrees"),
    )
    for field, ok, requirement in checks:
        if not ok:
            value = getattr(model, field)
            raise InvalidParameterError(f"{field} {requirement}, got {value}", field=field, value=value)


def _validate_noise(noise: float | None) -> float:
    if noise is None:
        return 0.0
    noise = float(noise)
    if not (np.isfinite(noise) and noise >= 0.0):
        raise InvalidParameterError(f"noise must be a non-negative number, got {noise}", field="noise")
    return noise


# =============================================================================
# Evaluation
# =============================================================================


def _evaluate(model: PhysicalModel, times: NDArray[np.float64]) -> NDArray[np.float64]:
    z, p = compute_separation(model, times)
    return np.asarray(transit_flux(p, z, model.limb_darkening), dtype=np.float64)


def _evaluate_chunked(
    model: PhysicalModel,
    times: NDArray[np.float64],
    max_workers: int,
    chunk_size: int,
) -> NDArray[np.float64]:
    flux = np.empty_like(times)
    bounds = [(start, min(start + chunk_size, times.size)) for start in range(0, times.size, chunk_size)]

    def _fill(start: int, stop: int) -> None:
        flux[start:stop] = _evaluate(model, times[start:stop])

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(_fill, start, stop) for start, stop in bounds]
        for fut in futures:
            fut.result()
    return flux


def generate_synthetic(
    times: ArrayLike,
    model: PhysicalModel,
    noise: float | None = None,
    *,
    rng: np.random.Generator | None = None,
    config: SynthesisConfig | None = None,
) -> NDArray[np.float64]:
    """Generate a normalized transit light curve.

    Uses the Mandel & Agol (2002) small-planet approximation with
    four-coefficient nonlinear limb darkening. Out-of-transit samples are
    exactly 1.0 before noise is added.

    Args:
        times: Observation times in days, any order and spacing
        model: System parameters
        noise: Standard deviation of additive Gaussian noise. None falls back
            to ``config.noise``; 0 disables noise entirely.
        rng: Random generator for the noise (default: seeded from ``config.seed``)
        config: Synthesis settings (default: ``SynthesisConfig()``)

    Returns:
        New float64 array of fluxes, same length and order as ``times``

    Raises:
        InvalidParameterError: If the model or times are invalid, or noise
            is negative. Raised before any sample is computed.

    Example:
        >>> model = PhysicalModel(period=3.0, epoch=0.0, separation=0.03,
        ...     inclination=89.0, stellar_radius=1.0, planet_radius=0.1)
        >>> flux = generate_synthetic([-0.05, 0.0, 0.05], model)
        >>> flux[1] < 1.0
        True
    """
    cfg = config if config is not None else SynthesisConfig()
    _validate_model(model)
    t = _validate_times(times)
    sigma = _validate_noise(cfg.noise if noise is None else noise)

    p = model.radius_ratio
    if p >= SMALL_PLANET_LIMIT:
        logger.warning(
            "Radius ratio p=%.4f is outside the small-planet approximation (p < %.1f); "
            "flux is approximate",
            p,
            SMALL_PLANET_LIMIT,
        )

    if cfg.max_workers > 1 and t.size > cfg.chunk_size:
        flux = _evaluate_chunked(model, t, cfg.max_workers, cfg.chunk_size)
    else:
        flux = _evaluate(model, t)

    if sigma > 0.0:
        generator = rng if rng is not None else np.random.default_rng(cfg.seed)
        flux = flux + generator.normal(0.0, sigma, size=flux.size)

    logger.debug(
        "Generated %d samples for model %r (p=%.5f, min flux=%.6f, noise=%g)",
        flux.size,
        model.name or model.id,
        p,
        float(np.min(flux)),
        sigma,
    )
    return flux


def generate_from_params(
    times: ArrayLike,
    period: float,
    epoch: float,
    coeffs: Sequence[float],
    separation: float,
    planet_radius: float,
    stellar_radius: float,
    inclination: float,
    noise: float | None = None,
    *,
    rng: np.random.Generator | None = None,
) -> NDArray[np.float64]:
    """Generate a light curve from loose parameters instead of a PhysicalModel.

    Args:
        times: Observation times in days
        period: Orbital period in days
        epoch: Mid-transit reference time in days
        coeffs: Limb-darkening coefficients (c1, c2, c3, c4)
        separation: Orbital separation in AU
        planet_radius: Planet radius in Jupiter radii
        stellar_radius: Stellar radius in solar radii
        inclination: Orbital inclination in degrees
        noise: Standard deviation of additive Gaussian noise

    Returns:
        Normalized flux array, same length and order as ``times``
    """
    if len(coeffs) != 4:
        raise InvalidParameterError(
            f"Expected 4 limb-darkening coefficients, got {len(coeffs)}", field="coeffs"
        )
    c1, c2, c3, c4 = (float(c) for c in coeffs)
    model = PhysicalModel(
        period=period,
        epoch=epoch,
        separation=separation,
        inclination=inclination,
        stellar_radius=stellar_radius,
        planet_radius=planet_radius,
        c1=c1,
        c2=c2,
        c3=c3,
        c4=c4,
    )
    return generate_synthetic(times, model, noise, rng=rng)


def synthesize_lightcurve(
    times: ArrayLike,
    model: PhysicalModel,
    noise: float | None = None,
    *,
    rng: np.random.Generator | None = None,
    config: SynthesisConfig | None = None,
) -> SyntheticLightCurve:
    """Like :func:`generate_synthetic`, keeping the per-sample geometry."""
    flux = generate_synthetic(times, model, noise, rng=rng, config=config)
    t = np.array(times, dtype=np.float64)
    z, p = compute_separation(model, t)
    cfg = config if config is not None else SynthesisConfig()
    return SyntheticLightCurve(
        time=t,
        flux=flux,
        z=np.asarray(z, dtype=np.float64),
        regime=regime_labels(p, z),
        model=model,
        noise=_validate_noise(cfg.noise if noise is None else noise),
    )
