"""Tests for circular-orbit geometry."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from transit_synth.domain.model import PhysicalModel
from transit_synth.errors import InvalidParameterError
from transit_synth.transit.orbit import (
    compute_separation,
    is_transiting,
    orbital_phase,
    transit_duration,
)


class TestOrbitalPhase:
    def test_wraps_to_nearest_transit(self) -> None:
        t = np.array([0.0, 0.75, 2.25, 3.0, 6.3, -0.3])
        assert_allclose(orbital_phase(t, 0.0, 3.0), [0.0, 0.25, -0.25, 0.0, 0.1, -0.1], atol=1e-12)

    def test_range(self) -> None:
        phase = orbital_phase(np.linspace(-50.0, 50.0, 1001), 1.3, 2.7)
        assert np.all((phase >= -0.5) & (phase < 0.5))

    def test_epoch_offset(self) -> None:
        assert orbital_phase(12.5, 10.0, 10.0) == pytest.approx(0.25)


class TestComputeSeparation:
    def test_mid_transit_equals_impact_parameter(self, hot_jupiter: PhysicalModel) -> None:
        z, p = compute_separation(hot_jupiter, 0.0)
        assert z == pytest.approx(hot_jupiter.impact_parameter)
        assert p == pytest.approx(hot_jupiter.radius_ratio)

    def test_scalar_returns_float(self, hot_jupiter: PhysicalModel) -> None:
        z, _ = compute_separation(hot_jupiter, 0.01)
        assert isinstance(z, float)

    def test_projection_formula(self, hot_jupiter: PhysicalModel) -> None:
        t = np.array([-0.2, -0.05, 0.0, 0.05, 0.2])
        z, _ = compute_separation(hot_jupiter, t)
        angle = 2.0 * np.pi * t / hot_jupiter.period
        cos_i = math.cos(math.radians(hot_jupiter.inclination))
        expected = hot_jupiter.scaled_separation * np.sqrt(np.sin(angle) ** 2 + cos_i**2)
        assert_allclose(z, expected, rtol=1e-12)

    def test_symmetric_about_epoch(self, hot_jupiter: PhysicalModel) -> None:
        dt = np.linspace(0.0, 0.7, 57)
        z_before, _ = compute_separation(hot_jupiter, -dt)
        z_after, _ = compute_separation(hot_jupiter, dt)
        assert_allclose(z_before, z_after, rtol=1e-12)

    def test_far_side_is_never_a_transit(self, hot_jupiter: PhysicalModel) -> None:
        # Half a period from mid-transit the planet is behind the star.
        z, _ = compute_separation(hot_jupiter, np.array([1.5, 1.45, 4.5]))
        assert np.all(np.isinf(z))

    def test_periodic(self, hot_jupiter: PhysicalModel) -> None:
        t = np.array([0.01, 0.03])
        z0, _ = compute_separation(hot_jupiter, t)
        z5, _ = compute_separation(hot_jupiter, t + 5 * hot_jupiter.period)
        assert_allclose(z0, z5, rtol=1e-9)

    def test_separation_scales_with_stellar_radius(self) -> None:
        small = PhysicalModel(
            period=3.0, epoch=0.0, separation=0.03, inclination=88.0, stellar_radius=1.0, planet_radius=0.1
        )
        large = small.model_copy(update={"stellar_radius": 2.0})
        z_small, p_small = compute_separation(small, 0.02)
        z_large, p_large = compute_separation(large, 0.02)
        assert z_large == pytest.approx(z_small / 2.0)
        assert p_large == pytest.approx(p_small / 2.0)

    @pytest.mark.parametrize(("field", "value"), [("period", 0.0), ("stellar_radius", -1.0)])
    def test_unvalidated_model_rejected(self, hot_jupiter: PhysicalModel, field: str, value: float) -> None:
        bad = PhysicalModel.model_construct(**{**hot_jupiter.model_dump(), field: value})
        with pytest.raises(InvalidParameterError) as exc_info:
            compute_separation(bad, 0.0)
        assert exc_info.value.context["field"] == field


class TestTransitDuration:
    def test_contact_points_reach_one_plus_p(self, hot_jupiter: PhysicalModel) -> None:
        t14 = transit_duration(hot_jupiter)
        z, p = compute_separation(hot_jupiter, np.array([-t14 / 2.0, t14 / 2.0]))
        assert_allclose(z, 1.0 + p, rtol=1e-10)

    def test_hot_jupiter_duration(self, hot_jupiter: PhysicalModel) -> None:
        # a/Rs ~ 6.45, b ~ 0.113: T14 ~ 3.6 hours
        assert transit_duration(hot_jupiter) * 24.0 == pytest.approx(3.58, abs=0.05)

    def test_non_transiting_geometry(self, hot_jupiter: PhysicalModel) -> None:
        grazing_miss = hot_jupiter.model_copy(update={"inclination": 80.0})
        assert not is_transiting(grazing_miss)
        assert transit_duration(grazing_miss) == 0.0

    def test_is_transiting(self, hot_jupiter: PhysicalModel) -> None:
        assert is_transiting(hot_jupiter)
