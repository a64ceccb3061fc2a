"""
Unit tests for the physics engine.

Tests PhysicsEngine.evaluate, which computes the ideal speed and the gravity,
normal, flange and net forces for a train in a banked curve.
"""

import math

import numpy as np
import pytest

from banked_curve import (
    CurveParams,
    DomainError,
    PhysicsEngine,
    SimulationInputs,
    Status,
    evaluate,
    ideal_velocity,
)
from banked_curve.physics import resolve_forces


class TestPhysicsEngine:
    """Test suite for force calculations"""

    @pytest.fixture
    def engine(self) -> PhysicsEngine:
        """Create engine with default constants"""
        return PhysicsEngine()

    def test_ideal_velocity_formula(self) -> None:
        """Test that ideal velocity is sqrt(g r tan(theta))"""
        expected = math.sqrt(9.8 * 600 * math.tan(math.radians(8)))

        assert abs(ideal_velocity(8, 600) - expected) < 1e-9

    def test_ideal_velocity_flat_track(self) -> None:
        """Test that a flat track has ideal velocity 0"""
        assert ideal_velocity(0, 600) == 0.0

    def test_default_scene(self, engine: PhysicsEngine) -> None:
        """Test 25 m/s, 8°, 600 m: ideal ~28.75 m/s so the train is too slow"""
        result = engine.evaluate(25, 8, 600)

        assert result.ideal_velocity == pytest.approx(28.75, abs=0.01)
        assert result.net_force == pytest.approx(1041.67, abs=0.01)
        assert result.status == Status.SLOW
        assert result.flange_force < 0  # Inner rail pushes outward

    def test_stopped_train(self, engine: PhysicsEngine) -> None:
        """Test that a train at rest is stopped regardless of the ideal speed"""
        result = engine.evaluate(0, 10, 500)

        assert result.ideal_velocity == pytest.approx(29.39, abs=0.01)
        assert result.status == Status.STOPPED
        assert result.net_force == 0.0

    def test_balanced_train(self, engine: PhysicsEngine) -> None:
        """Test that running at the ideal speed is perfect with no flange force"""
        ideal = ideal_velocity(15, 1000)
        result = engine.evaluate(ideal, 15, 1000)

        assert ideal == pytest.approx(51.24, abs=0.01)
        assert result.status == Status.PERFECT
        assert abs(result.flange_force) < 1e-6

    @pytest.mark.parametrize("angle", [0.0, 1.0, 8.0, 15.0, 30.0, 45.0, 60.0, 89.0])
    @pytest.mark.parametrize("radius", [100.0, 600.0, 4000.0])
    def test_zero_flange_force_at_ideal_speed(
        self, engine: PhysicsEngine, angle: float, radius: float
    ) -> None:
        """Test that the flange force vanishes at the ideal speed"""
        result = engine.evaluate(ideal_velocity(angle, radius), angle, radius)

        # Relative to the weight, since forces grow with tan(theta) near 90°
        assert abs(result.flange_force) < 1e-6 * max(result.normal_force, 1.0)

    def test_zero_flange_force_default_scenarios(self, engine: PhysicsEngine) -> None:
        """Test the absolute flange force bound on usual slider values"""
        for angle, radius in [(8, 600), (15, 1000), (30, 4000), (0, 100)]:
            result = engine.evaluate(ideal_velocity(angle, radius), angle, radius)
            assert abs(result.flange_force) < 1e-6

    def test_normal_force_flat_track(self, engine: PhysicsEngine) -> None:
        """Test that on a flat track the normal force equals the weight"""
        result = engine.evaluate(30, 0, 600)

        assert abs(result.normal_force - 9800.0) < 1e-6
        assert abs(result.flange_force - result.net_force) < 1e-6

    def test_normal_force_at_rest(self, engine: PhysicsEngine) -> None:
        """Test that at rest N = m g cos(theta) and F = -m g sin(theta)"""
        result = engine.evaluate(0, 20, 500)
        theta = math.radians(20)

        assert abs(result.normal_force - 9800.0 * math.cos(theta)) < 1e-6
        assert abs(result.flange_force + 9800.0 * math.sin(theta)) < 1e-6

    def test_gravity_is_constant(self, engine: PhysicsEngine) -> None:
        """Test that gravity is m g for every input"""
        for velocity, angle, radius in [(0, 0, 100), (40, 12, 800), (83, 30, 4000)]:
            assert engine.evaluate(velocity, angle, radius).gravity == pytest.approx(9800.0)

    def test_normal_force_non_negative(self, engine: PhysicsEngine) -> None:
        """Test that the normal force stays non-negative over the slider ranges"""
        for velocity in np.linspace(0, 83.3, 12):
            for angle in (0, 10, 20, 30):
                for radius in (100, 1000, 4000):
                    assert engine.evaluate(float(velocity), angle, radius).normal_force >= 0

    def test_force_round_trip(self, engine: PhysicsEngine) -> None:
        """Test that normal and flange forces rotate back to net force and gravity"""
        for velocity in (0.0, 5.0, 25.0, 60.0, 83.3):
            for angle in (0.0, 8.0, 22.5, 30.0, 75.0):
                for radius in (100.0, 600.0, 4000.0):
                    result = engine.evaluate(velocity, angle, radius)
                    theta = math.radians(angle)
                    horizontal = (
                        result.normal_force * math.sin(theta)
                        + result.flange_force * math.cos(theta)
                    )
                    vertical = (
                        result.normal_force * math.cos(theta)
                        - result.flange_force * math.sin(theta)
                    )

                    assert horizontal == pytest.approx(result.net_force, rel=1e-6, abs=1e-6)
                    assert vertical == pytest.approx(result.gravity, rel=1e-6)

    def test_flange_force_strictly_increasing(self, engine: PhysicsEngine) -> None:
        """Test that flange force increases strictly with speed"""
        velocities = np.linspace(0, 83.3, 200)
        flange = [engine.evaluate(float(v), 12, 800).flange_force for v in velocities]

        assert np.all(np.diff(flange) > 0)

    def test_idempotence(self, engine: PhysicsEngine) -> None:
        """Test that identical inputs give bit-identical results"""
        result1 = engine.evaluate(37.3, 13.7, 1234.5)
        result2 = engine.evaluate(37.3, 13.7, 1234.5)

        assert result1 == result2
        assert result1.to_dict() == result2.to_dict()

    def test_resolve_forces_scalar_and_array(self, engine: PhysicsEngine) -> None:
        """Test that the force helper gives the engine's values for scalars and arrays"""
        velocities = np.array([0.0, 25.0, 60.0])
        normal, flange, net = resolve_forces(velocities, 8, 600, CurveParams())

        for i, velocity in enumerate(velocities):
            result = engine.evaluate(float(velocity), 8, 600)
            assert normal[i] == pytest.approx(result.normal_force)
            assert flange[i] == pytest.approx(result.flange_force, abs=1e-6)
            assert net[i] == pytest.approx(result.net_force)

    def test_module_level_evaluate(self, engine: PhysicsEngine) -> None:
        """Test that evaluate() matches a default engine"""
        assert evaluate(25, 8, 600) == engine.evaluate(25, 8, 600)

    def test_evaluate_inputs(self, engine: PhysicsEngine) -> None:
        """Test evaluation from a SimulationInputs record"""
        inputs = SimulationInputs(velocity=25, bank_angle_deg=8, radius=600)

        assert engine.evaluate_inputs(inputs) == engine.evaluate(25, 8, 600)
        assert inputs.bank_angle_rad == pytest.approx(math.radians(8))

    def test_mass_scales_forces_not_status(self) -> None:
        """Test that doubling the mass doubles every force and keeps the status"""
        light = PhysicsEngine(CurveParams(train_mass=1000.0)).evaluate(40, 10, 700)
        heavy = PhysicsEngine(CurveParams(train_mass=2000.0)).evaluate(40, 10, 700)

        assert heavy.normal_force == pytest.approx(2 * light.normal_force)
        assert heavy.flange_force == pytest.approx(2 * light.flange_force)
        assert heavy.gravity == pytest.approx(2 * light.gravity)
        assert heavy.net_force == pytest.approx(2 * light.net_force)
        assert heavy.ideal_velocity == light.ideal_velocity
        assert heavy.status == light.status

    def test_to_dict(self, engine: PhysicsEngine) -> None:
        """Test the dictionary form of a result"""
        data = engine.evaluate(25, 8, 600).to_dict()

        assert set(data) == {
            "ideal_velocity",
            "normal_force",
            "flange_force",
            "gravity",
            "net_force",
            "status",
        }
        assert data["status"] == "slow"

    def test_velocity_difference(self, engine: PhysicsEngine) -> None:
        """Test the speed difference used by the status card"""
        result = engine.evaluate(25, 8, 600)

        assert result.velocity_difference(25) == pytest.approx(25 - result.ideal_velocity)


class TestDomainErrors:
    """Test suite for out-of-domain inputs"""

    @pytest.fixture
    def engine(self) -> PhysicsEngine:
        """Create engine with default constants"""
        return PhysicsEngine()

    @pytest.mark.parametrize("velocity, angle, radius", [
        (-1.0, 8.0, 600.0),  # Negative speed
        (25.0, 90.0, 600.0),  # Tangent singularity
        (25.0, 120.0, 600.0),
        (25.0, -5.0, 600.0),
        (25.0, 8.0, 0.0),  # Division by radius
        (25.0, 8.0, -100.0),
        (float("nan"), 8.0, 600.0),
        (25.0, float("inf"), 600.0),
        (25.0, 8.0, float("inf")),
    ])
    def test_out_of_domain_raises(
        self, engine: PhysicsEngine, velocity: float, angle: float, radius: float
    ) -> None:
        """Test that out-of-domain inputs raise DomainError"""
        with pytest.raises(DomainError):
            engine.evaluate(velocity, angle, radius)

    def test_domain_error_is_value_error(self, engine: PhysicsEngine) -> None:
        """Test that DomainError can be caught as ValueError"""
        with pytest.raises(ValueError):
            engine.evaluate(10, 90, 600)

    def test_edge_of_domain_accepted(self, engine: PhysicsEngine) -> None:
        """Test that zero speed, zero angle and angles just below 90° are accepted"""
        assert engine.evaluate(0, 0, 1e-3).status == Status.STOPPED
        result = engine.evaluate(10, 89.9, 100)

        assert np.isfinite(result.ideal_velocity)
        assert np.isfinite(result.normal_force)
