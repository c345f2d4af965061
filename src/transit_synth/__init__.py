"""transit-synth: small-planet transit light curve synthesis."""

from __future__ import annotations

from transit_synth.config import SynthesisConfig
from transit_synth.domain import PhysicalModel
from transit_synth.errors import ErrorEnvelope, ErrorType, InvalidParameterError
from transit_synth.transit import (
    NonlinearLimbDarkening,
    OccultationRegime,
    SyntheticLightCurve,
    compute_separation,
    generate_from_params,
    generate_synthetic,
    synthesize_lightcurve,
    transit_flux,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "PhysicalModel",
    "SynthesisConfig",
    "ErrorEnvelope",
    "ErrorType",
    "InvalidParameterError",
    "NonlinearLimbDarkening",
    "OccultationRegime",
    "SyntheticLightCurve",
    "compute_separation",
    "generate_from_params",
    "generate_synthetic",
    "synthesize_lightcurve",
    "transit_flux",
]
