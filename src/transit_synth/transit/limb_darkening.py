"""Four-coefficient nonlinear limb darkening and occulted-intensity integrals.

The stellar surface brightness follows the Claret (2000) nonlinear law used
by Mandel & Agol (2002):

    I(r) = 1 - sum_{n=1}^{4} c_n (1 - mu^(n/2)),   mu = sqrt(1 - r^2)

which, with c0 = 1 - c1 - c2 - c3 - c4, is I(r) = sum_{n=0}^{4} c_n mu^(n/2).

The disk integral of I(r) 2r dr has the closed form

    F(r) = sum_n c_n * 4/(n+4) * mu^((n+4)/2)

so every annulus integral below is evaluated analytically.

References:
- Mandel & Agol 2002, ApJ, 580, L171 (section 5, small-planet approximation)
- Claret 2000, A&A, 363, 1081
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


# Law orders n = 0..4, their annulus-integral weights 4/(n+4) and exponents (n+4)/4
_ORDERS = np.arange(5, dtype=np.float64)
_WEIGHTS = 4.0 / (_ORDERS + 4.0)
_EXPONENTS = (_ORDERS + 4.0) / 4.0


def _scalar_or_array(values: NDArray[np.float64], scalar: bool) -> float | NDArray[np.float64]:
    return float(values[0]) if scalar else values


def _weighted_powers(
    base: NDArray[np.float64],
    exponents: NDArray[np.float64],
    weights: NDArray[np.float64],
    factors: NDArray[np.float64] | None = None,
) -> NDArray[np.float64]:
    """sum_n weights[n] * base**exponents[n] (* factors[:, n]), summed per sample.

    Accumulates order by order so each sample's value does not depend on how
    many samples are evaluated together.
    """
    total = np.zeros_like(base)
    for n, (exponent, weight) in enumerate(zip(exponents, weights)):
        term = weight * base**exponent
        if factors is not None:
            term = term * factors[:, n]
        total += term
    return total


@dataclass(frozen=True)
class NonlinearLimbDarkening:
    """Nonlinear (four-coefficient) limb-darkening law.

    Attributes:
        c1..c4: Law coefficients; c0 is derived so that I(0) = 1.
    """

    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    c4: float = 0.0

    @property
    def c0(self) -> float:
        return 1.0 - self.c1 - self.c2 - self.c3 - self.c4

    @property
    def coefficients(self) -> NDArray[np.float64]:
        """Coefficients (c0, c1, c2, c3, c4)."""
        return np.array([self.c0, self.c1, self.c2, self.c3, self.c4], dtype=np.float64)

    @property
    def omega(self) -> float:
        """Disk normalization Omega = sum_n c_n / (n + 4).

        The unocculted stellar flux is 4*pi*Omega in units of I(0); a uniform
        disk has Omega = 1/4.
        """
        return float(np.sum(self.coefficients / (_ORDERS + 4.0)))

    def intensity(self, r: ArrayLike) -> float | NDArray[np.float64]:
        """Local surface brightness I(r), normalized to I(0) = 1.

        Zero outside the stellar disk (|r| > 1).
        """
        scalar = np.ndim(r) == 0
        r_arr = np.atleast_1d(np.asarray(r, dtype=np.float64))
        mu = np.sqrt(np.clip(1.0 - r_arr**2, 0.0, None))
        values = _weighted_powers(mu, _ORDERS / 2.0, self.coefficients)
        values = np.where(np.abs(r_arr) <= 1.0, values, 0.0)
        return _scalar_or_array(values, scalar)

    def occulted_intensity(self, z: ArrayLike, p: float) -> float | NDArray[np.float64]:
        """Mean surface brightness I*(z) beneath a planet of radius p at separation z.

        For z <= 1 - p (planet fully inside the disk) this is the mean of I(r)
        over the annulus z - p < r < z + p:

            I* = (4 z p)^-1 * integral_{z-p}^{z+p} I(r) 2r dr

        and for z > 1 - p (planet on the limb) the mean over the part of the
        annulus that lies on the star:

            I* = (1 - (z-p)^2)^-1 * integral_{z-p}^{1} I(r) 2r dr

        The two expressions agree at z = 1 - p. At z = 0 the first one has the
        limit I(p), which is returned directly.
        """
        scalar = np.ndim(z) == 0
        z_arr = np.atleast_1d(np.asarray(z, dtype=np.float64))
        p = float(p)

        result = np.empty_like(z_arr)
        inside = z_arr <= 1.0 - p
        result[inside] = self._annulus_mean(z_arr[inside], p)
        result[~inside] = self._limb_mean(z_arr[~inside], p)
        return _scalar_or_array(result, scalar)

    def _annulus_mean(self, z: NDArray[np.float64], p: float) -> NDArray[np.float64]:
        # mu_a^2 = 1 - (z-p)^2 and mu_b^2 = 1 - (z+p)^2 = mu_a^2 - 4zp, so each
        # term of F(z-p) - F(z+p) is w_n mu_a^(2q) * (1 - (1 - x)^q), x = 4zp / mu_a^2.
        # (1 - (1 - x)^q) / x is evaluated through expm1/log1p to avoid
        # cancellation near the disk center; its x -> 0 limit is q.
        mu_a2 = 1.0 - (z - p) ** 2
        four_zp = 4.0 * z * p
        x = np.divide(four_zp, mu_a2, out=np.zeros_like(z), where=mu_a2 > 0.0)
        x = np.clip(x, 0.0, 1.0)[:, None]

        q = _EXPONENTS[None, :]
        x_safe = np.where(x > 0.0, x, 1.0)
        with np.errstate(divide="ignore"):
            growth = np.where(x > 0.0, -np.expm1(q * np.log1p(-x)) / x_safe, q)

        mu_a2 = np.clip(mu_a2, 0.0, None)
        return _weighted_powers(mu_a2, _ORDERS / 4.0, self.coefficients * _WEIGHTS, growth)

    def _limb_mean(self, z: NDArray[np.float64], p: float) -> NDArray[np.float64]:
        # integral_{z-p}^{1} I(r) 2r dr = F(z-p) = sum_n w_n c_n mu_a^((n+4)/2),
        # divided by 1 - (z-p)^2 = mu_a^2.
        mu_a2 = np.clip(1.0 - (z - p) ** 2, 0.0, None)
        return _weighted_powers(mu_a2, _ORDERS / 4.0, self.coefficients * _WEIGHTS)


def occulted_intensity(
    c1: float,
    c2: float,
    c3: float,
    c4: float,
    z: ArrayLike,
    p: float,
) -> float | NDArray[np.float64]:
    """Evaluate I*(z) for the nonlinear law with coefficients c1..c4.

    Convenience wrapper around :meth:`NonlinearLimbDarkening.occulted_intensity`.
    """
    return NonlinearLimbDarkening(c1, c2, c3, c4).occulted_intensity(z, p)
