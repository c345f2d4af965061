"""Shared fixtures for transit-synth tests."""

from __future__ import annotations

import pytest

from transit_synth.domain.model import PhysicalModel


@pytest.fixture
def hot_jupiter() -> PhysicalModel:
    """Small-planet system with a strongly limb-darkened host.

    p ~ 0.0103, a/Rs ~ 6.45, b ~ 0.113.
    """
    return PhysicalModel(
        id=7,
        name="synthetic-hj",
        period=3.0,
        epoch=0.0,
        separation=0.03,
        inclination=89.0,
        stellar_radius=1.0,
        planet_radius=0.1,
        c1=0.5,
        c2=0.1,
        c3=0.1,
        c4=-0.1,
        stellar_mass=1.0,
        teff=5800.0,
    )


@pytest.fixture
def uniform_disk_model() -> PhysicalModel:
    """Same orbit as ``hot_jupiter`` with no limb darkening."""
    return PhysicalModel(
        period=3.0,
        epoch=0.0,
        separation=0.03,
        inclination=89.0,
        stellar_radius=1.0,
        planet_radius=0.1,
    )
