"""Domain models for transit-synth.

This package is domain-only: parameter records with validation and unit
conversion, no light curve computation.
"""

from transit_synth.domain.model import PhysicalModel

__all__ = [
    "PhysicalModel",
]
