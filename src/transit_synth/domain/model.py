"""Physical model of a star-planet system.

This module provides:
- PhysicalModel: immutable orbital, radius and limb-darkening parameters
  in the units the parameter files use (days, AU, degrees, solar and
  Jupiter radii), plus the unit-converted ratios the transit code needs.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from transit_synth.constants import AU_TO_RSUN, DEG_TO_RAD, R_JUP_TO_RSUN, SMALL_PLANET_LIMIT

if TYPE_CHECKING:
    from transit_synth.transit.limb_darkening import NonlinearLimbDarkening


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PhysicalModel(FrozenModel):
    """Parameters of a single transiting planet on a circular orbit.

    Bookkeeping fields (id, name, submodel_id) and auxiliary stellar
    parameters (stellar_mass, teff) are carried for downstream consumers
    and never read by the light curve code.

    Limb darkening follows the four-coefficient nonlinear law; the zeroth
    coefficient is derived as ``c0 = 1 - c1 - c2 - c3 - c4``. Coefficients
    are used as given; physical plausibility is the caller's concern.

    Validation:
    - period, separation and stellar_radius must be positive
    - planet_radius must be non-negative
    - inclination must lie in (0, 90] degrees
    - no field may be NaN or infinite
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Bookkeeping
    id: int = 0
    name: str = ""
    submodel_id: int = Field(default=0, description="Id of a linked subtraction model")

    # Orbit
    period: float = Field(gt=0, description="Orbital period (days)")
    epoch: float = Field(description="Mid-transit reference time (days)")
    separation: float = Field(
        gt=0,
        validation_alias=AliasChoices("separation", "a"),
        description="Orbital separation (AU)",
    )
    inclination: float = Field(
        gt=0,
        le=90,
        validation_alias=AliasChoices("inclination", "i"),
        description="Orbital inclination, 90 is edge-on (degrees)",
    )

    # Radii
    stellar_radius: float = Field(
        gt=0,
        validation_alias=AliasChoices("stellar_radius", "rs"),
        description="Stellar radius (solar radii)",
    )
    planet_radius: float = Field(
        ge=0,
        validation_alias=AliasChoices("planet_radius", "rp"),
        description="Planet radius (Jupiter radii)",
    )

    # Limb darkening
    c1: float = 0.0
    c2: float = 0.0
    c3: float = 0.0
    c4: float = 0.0

    # Auxiliary
    stellar_mass: float | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("stellar_mass", "mstar"),
        description="Stellar mass (solar masses)",
    )
    teff: float | None = Field(default=None, ge=0, description="Effective temperature (K)")

    @property
    def c0(self) -> float:
        return 1.0 - self.c1 - self.c2 - self.c3 - self.c4

    @property
    def radius_ratio(self) -> float:
        """Planet radius in stellar radii (p)."""
        return self.planet_radius * R_JUP_TO_RSUN / self.stellar_radius

    @property
    def scaled_separation(self) -> float:
        """Orbital separation in stellar radii (a/Rs)."""
        return self.separation * AU_TO_RSUN / self.stellar_radius

    @property
    def inclination_rad(self) -> float:
        return self.inclination * DEG_TO_RAD

    @property
    def impact_parameter(self) -> float:
        """Sky-projected separation at mid-transit, in stellar radii."""
        return self.scaled_separation * math.cos(self.inclination_rad)

    @property
    def within_small_planet_limit(self) -> bool:
        return self.radius_ratio < SMALL_PLANET_LIMIT

    @property
    def limb_darkening(self) -> NonlinearLimbDarkening:
        from transit_synth.transit.limb_darkening import NonlinearLimbDarkening

        return NonlinearLimbDarkening(self.c1, self.c2, self.c3, self.c4)
