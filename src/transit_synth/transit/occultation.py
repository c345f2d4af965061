"""Small-planet occultation flux (Mandel & Agol 2002, section 5).

The occultation geometry is a closed set of regimes selected by comparing the
normalized separation z with 1 - p, 1 and 1 + p:

- NONE:    z >= 1 + p            planet off the disk, F = 1
- PARTIAL: |1 - p| < z < 1 + p   planet on the limb (ingress/egress)
- FULL:    z <= 1 - p            planet disk entirely on the star
- TOTAL:   z <= p - 1            star entirely covered, only possible for p > 1

Flux in each regime:

    FULL:    F = 1 - p^2 I*(z) / (4 Omega)
    PARTIAL: F = 1 - I*(z) / (4 pi Omega) * [p^2 acos((z-1)/p) - (z-1) sqrt(p^2 - (z-1)^2)]

At z = 1 - p the bracket equals pi p^2 and I*(z) is continuous, so the two
branches join without a step; at z = 1 + p the bracket vanishes.

The approximation treats the surface brightness under the planet as constant
and is accurate for p < 0.1. Larger planets are evaluated anyway; callers
should treat such results as approximate.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

    from transit_synth.transit.limb_darkening import NonlinearLimbDarkening

logger = logging.getLogger(__name__)


class OccultationRegime(str, Enum):
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"
    TOTAL = "total"


def classify_regime(p: float, z: float) -> OccultationRegime:
    """Return the occultation regime of a single (p, z) pair."""
    if z >= 1.0 + p:
        return OccultationRegime.NONE
    if z <= p - 1.0:
        return OccultationRegime.TOTAL
    if z <= 1.0 - p:
        return OccultationRegime.FULL
    return OccultationRegime.PARTIAL


def regime_masks(p: float, z: ArrayLike) -> dict[OccultationRegime, NDArray[np.bool_]]:
    """Boolean masks selecting the samples of ``z`` in each regime.

    The masks are mutually exclusive and together cover every finite sample.
    """
    z_arr = np.asarray(z, dtype=np.float64)
    none = z_arr >= 1.0 + p
    total = ~none & (z_arr <= p - 1.0)
    full = ~none & ~total & (z_arr <= 1.0 - p)
    partial = ~none & ~total & ~full
    return {
        OccultationRegime.NONE: none,
        OccultationRegime.PARTIAL: partial,
        OccultationRegime.FULL: full,
        OccultationRegime.TOTAL: total,
    }


def regime_labels(p: float, z: ArrayLike) -> NDArray[np.str_]:
    """Regime name for every sample of ``z``."""
    z_arr = np.asarray(z, dtype=np.float64)
    labels = np.empty(z_arr.shape, dtype="<U7")
    for regime, mask in regime_masks(p, z_arr).items():
        labels[mask] = regime.value
    return labels


def full_overlap_flux(p: float, istar: ArrayLike, omega: float) -> NDArray[np.float64]:
    """Flux while the whole planet disk lies on the star."""
    return 1.0 - p**2 * np.asarray(istar, dtype=np.float64) / (4.0 * omega)


def partial_overlap_flux(
    p: float,
    z: ArrayLike,
    istar: ArrayLike,
    omega: float,
) -> NDArray[np.float64]:
    """Flux while the planet straddles the stellar limb.

    The arccos argument and the radicand are clamped to their domains so
    samples that land on z = 1 +/- p through rounding stay finite.
    """
    dz = np.asarray(z, dtype=np.float64) - 1.0
    cos_arg = np.clip(dz / p, -1.0, 1.0)
    radicand = np.clip((p - dz) * (p + dz), 0.0, None)
    area = p**2 * np.arccos(cos_arg) - dz * np.sqrt(radicand)
    return 1.0 - np.asarray(istar, dtype=np.float64) * area / (4.0 * np.pi * omega)


def transit_flux(
    p: float,
    z: ArrayLike,
    law: NonlinearLimbDarkening,
) -> float | NDArray[np.float64]:
    """Normalized flux for radius ratio ``p`` at separations ``z``.

    Args:
        p: Planet radius in stellar radii (>= 0).
        z: Sky-projected center separation(s) in stellar radii.
        law: Limb-darkening law of the star.

    Returns:
        Flux normalized to 1.0 out of transit, with the shape of ``z``
        (a float for scalar input). Samples with z >= 1 + p are exactly 1.0.
    """
    scalar = np.ndim(z) == 0
    z_arr = np.atleast_1d(np.asarray(z, dtype=np.float64))
    p = float(p)

    flux = np.ones_like(z_arr)
    masks = regime_masks(p, z_arr)
    omega = law.omega

    full = masks[OccultationRegime.FULL]
    if np.any(full):
        istar = law.occulted_intensity(z_arr[full], p)
        flux[full] = full_overlap_flux(p, istar, omega)

    partial = masks[OccultationRegime.PARTIAL]
    if np.any(partial):
        istar = law.occulted_intensity(z_arr[partial], p)
        flux[partial] = partial_overlap_flux(p, z_arr[partial], istar, omega)

    flux[masks[OccultationRegime.TOTAL]] = 0.0

    logger.debug(
        "transit_flux: p=%.5f n=%d full=%d partial=%d",
        p,
        z_arr.size,
        int(np.count_nonzero(full)),
        int(np.count_nonzero(partial)),
    )
    return float(flux[0]) if scalar else flux
