"""Transit light curve synthesis with the small-planet approximation.

This module provides tools for:
- Orbit geometry: time to projected separation, duration, transit check
- Limb darkening: nonlinear four-coefficient law and occulted intensity
- Occultation flux: regime selection and per-regime flux
- Synthesis: full light curves with optional noise

Exports:
- Geometry: orbital_phase, compute_separation, is_transiting, transit_duration
- Limb darkening: NonlinearLimbDarkening, occulted_intensity
- Occultation: OccultationRegime, classify_regime, regime_masks, regime_labels,
               full_overlap_flux, partial_overlap_flux, transit_flux
- Synthesis: generate_synthetic, generate_from_params, synthesize_lightcurve,
             SyntheticLightCurve
"""

from __future__ import annotations

from transit_synth.transit.limb_darkening import (
    NonlinearLimbDarkening,
    occulted_intensity,
)
from transit_synth.transit.occultation import (
    OccultationRegime,
    classify_regime,
    full_overlap_flux,
    partial_overlap_flux,
    regime_labels,
    regime_masks,
    transit_flux,
)
from transit_synth.transit.orbit import (
    compute_separation,
    is_transiting,
    orbital_phase,
    transit_duration,
)
from transit_synth.transit.synthetic import (
    SyntheticLightCurve,
    generate_from_params,
    generate_synthetic,
    synthesize_lightcurve,
)

__all__ = [
    # Geometry
    "orbital_phase",
    "compute_separation",
    "is_transiting",
    "transit_duration",
    # Limb darkening
    "NonlinearLimbDarkening",
    "occulted_intensity",
    # Occultation
    "OccultationRegime",
    "classify_regime",
    "regime_masks",
    "regime_labels",
    "full_overlap_flux",
    "partial_overlap_flux",
    "transit_flux",
    # Synthesis
    "generate_synthetic",
    "generate_from_params",
    "synthesize_lightcurve",
    "SyntheticLightCurve",
]
