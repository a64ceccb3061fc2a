"""
Banked curve physics engine

Forces are resolved in a frame aligned with the banked track:
- parallel axis along the slope, positive pointing down-slope (toward the curve centre)
- perpendicular axis normal to the slope, positive pointing away from the surface

Newton's second law in that frame gives, for centripetal acceleration a_c = v² / r:
- perpendicular: N - m g cos(theta) = m a_c sin(theta)
- parallel:      m g sin(theta) + F = m a_c cos(theta)
"""

from typing import Optional

import numpy as np

from banked_curve.params import CurveParams
from banked_curve.state import PhysicsResult, SimulationInputs, Status


class DomainError(ValueError):
    """Raised when inputs fall outside the model's physical domain"""


def validate_inputs(velocity: float, bank_angle_deg: float, radius: float) -> None:
    """
    Check that inputs are inside the engine's domain

    Args:
        velocity: Train speed (m/s), must be >= 0
        bank_angle_deg: Bank angle (degrees), must be in [0, 90)
        radius: Curve radius (m), must be > 0

    Raises:
        DomainError: If any input is non-finite or out of range
    """
    for name, value in (
        ("velocity", velocity),
        ("bank_angle_deg", bank_angle_deg),
        ("radius", radius),
    ):
        if not np.isfinite(value):
            raise DomainError(f"{name} must be finite, got {value}")

    if velocity < 0:
        raise DomainError(f"velocity must be >= 0 m/s, got {velocity}")
    if bank_angle_deg < 0 or bank_angle_deg >= 90:
        raise DomainError(f"bank_angle_deg must be in [0, 90), got {bank_angle_deg}")
    if radius <= 0:
        raise DomainError(f"radius must be > 0 m, got {radius}")


def ideal_velocity(bank_angle_deg: float, radius: float, gravity: float = 9.8) -> float:
    """
    Speed at which no flange force is needed: v = sqrt(g r tan(theta))

    A flat track (theta = 0) gives 0. That is the model's reference value even
    though a flat curve has no balancing speed at all.
    """
    theta = np.deg2rad(bank_angle_deg)
    return float(np.sqrt(gravity * radius * np.tan(theta)))


def classify_status(velocity: float, ideal: float, tolerance: float = 0.5) -> Status:
    """
    Classify the train state, first match wins

    The exact zero check comes before the tolerance band, so a train at rest
    on a flat track is stopped, not perfect.
    """
    if velocity == 0:
        return Status.STOPPED
    if abs(velocity - ideal) < tolerance:
        return Status.PERFECT
    if velocity > ideal:
        return Status.FAST
    return Status.SLOW


def resolve_forces(velocity, bank_angle_deg: float, radius: float, params: CurveParams):
    """
    Normal, flange and net forces for a scalar or array of speeds

    Args:
        velocity: Train speed(s) (m/s)
        bank_angle_deg: Bank angle (degrees)
        radius: Curve radius (m)
        params: Physical constants

    Returns:
        Tuple of (normal_force, flange_force, net_force) in Newtons
    """
    g = params.gravity
    m = params.train_mass
    theta = np.deg2rad(bank_angle_deg)
    centripetal_accel = velocity * velocity / radius

    normal_force = m * (g * np.cos(theta) + centripetal_accel * np.sin(theta))
    flange_force = m * (centripetal_accel * np.cos(theta) - g * np.sin(theta))
    return normal_force, flange_force, m * centripetal_accel


class PhysicsEngine:
    """Stateless evaluator of forces on a train in a banked curve"""

    def __init__(self, params: Optional[CurveParams] = None) -> None:
        """
        Initialize physics engine

        Args:
            params: Physical constants (defaults to g = 9.8, m = 1000 kg)
        """
        self.params = params if params is not None else CurveParams()

    def evaluate(self, velocity: float, bank_angle_deg: float, radius: float) -> PhysicsResult:
        """
        Compute forces and status for the given speed, bank angle and radius

        Args:
            velocity: Train speed (m/s)
            bank_angle_deg: Bank angle (degrees)
            radius: Curve radius (m)

        Returns:
            PhysicsResult with all forces in Newtons

        Raises:
            DomainError: If the inputs are outside the model's domain
        """
        validate_inputs(velocity, bank_angle_deg, radius)

        ideal = ideal_velocity(bank_angle_deg, radius, self.params.gravity)
        normal_force, flange_force, net_force = resolve_forces(
            velocity, bank_angle_deg, radius, self.params
        )

        return PhysicsResult(
            ideal_velocity=ideal,
            normal_force=float(normal_force),
            flange_force=float(flange_force),
            gravity=float(self.params.weight),
            net_force=float(net_force),
            status=classify_status(velocity, ideal, self.params.perfect_tolerance),
        )

    def evaluate_inputs(self, inputs: SimulationInputs) -> PhysicsResult:
        """Evaluate a SimulationInputs record"""
        return self.evaluate(inputs.velocity, inputs.bank_angle_deg, inputs.radius)


_default_engine = PhysicsEngine()


def evaluate(velocity: float, bank_angle_deg: float, radius: float) -> PhysicsResult:
    """Evaluate with the default constants"""
    return _default_engine.evaluate(velocity, bank_angle_deg, radius)
