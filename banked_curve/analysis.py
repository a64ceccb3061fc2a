"""
Velocity and bank angle sweeps
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from banked_curve.controls import MAX_SPEED_MS, ms_to_kmh
from banked_curve.params import CurveParams
from banked_curve.physics import DomainError, ideal_velocity, resolve_forces, validate_inputs
from banked_curve.state import Status

logger = logging.getLogger(__name__)


def evaluate_many(
    velocities: np.ndarray,
    bank_angle_deg: float,
    radius: float,
    params: Optional[CurveParams] = None,
) -> Dict[str, np.ndarray]:
    """
    Vectorised engine evaluation over an array of speeds

    Args:
        velocities: Train speeds (m/s)
        bank_angle_deg: Bank angle (degrees)
        radius: Curve radius (m)
        params: Physical constants

    Returns:
        Dictionary of arrays keyed like PhysicsResult fields, status as strings
    """
    params = params if params is not None else CurveParams()
    velocities = np.asarray(velocities, dtype=float)
    validate_inputs(0.0, bank_angle_deg, radius)
    if not np.all(np.isfinite(velocities)):
        raise DomainError("velocities must be finite")
    if np.any(velocities < 0):
        raise DomainError(f"velocities must be >= 0 m/s, got minimum {velocities.min()}")

    ideal = ideal_velocity(bank_angle_deg, radius, params.gravity)
    normal_force, flange_force, net_force = resolve_forces(
        velocities, bank_angle_deg, radius, params
    )

    # Same priority as classify_status: stopped, perfect, fast, slow
    status = np.select(
        [
            velocities == 0,
            np.abs(velocities - ideal) < params.perfect_tolerance,
            velocities > ideal,
        ],
        [Status.STOPPED.value, Status.PERFECT.value, Status.FAST.value],
        default=Status.SLOW.value,
    )

    return {
        "velocity": velocities,
        "ideal_velocity": np.full_like(velocities, ideal),
        "normal_force": normal_force,
        "flange_force": flange_force,
        "gravity": np.full_like(velocities, params.weight),
        "net_force": net_force,
        "status": status,
    }


def run_velocity_sweep(
    bank_angle_deg: float,
    radius: float,
    max_speed: float = MAX_SPEED_MS,
    n_points: int = 301,
    params: Optional[CurveParams] = None,
) -> Dict[str, Any]:
    """
    Evaluate a curve over an evenly spaced range of speeds

    Args:
        bank_angle_deg: Bank angle (degrees)
        radius: Curve radius (m)
        max_speed: Highest speed in the sweep (m/s)
        n_points: Number of speeds, including 0 and max_speed
        params: Physical constants

    Returns:
        Dictionary with force arrays, status array, ideal speed,
        transition speeds and status counts
    """
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")
    params = params if params is not None else CurveParams()

    velocities = np.linspace(0.0, max_speed, n_points)
    results: Dict[str, Any] = evaluate_many(velocities, bank_angle_deg, radius, params)
    ideal = float(results["ideal_velocity"][0])

    statuses, counts = np.unique(results["status"], return_counts=True)
    status_counts = {status.value: 0 for status in Status}
    status_counts.update({str(s): int(c) for s, c in zip(statuses, counts)})

    results["ideal"] = ideal
    results["transition_speeds"] = {
        "slow_to_perfect": max(ideal - params.perfect_tolerance, 0.0),
        "perfect_to_fast": ideal + params.perfect_tolerance,
    }
    results["status_counts"] = status_counts

    logger.debug(
        "Swept %d speeds at %.1f deg, r=%.0f m: ideal %.2f m/s, counts %s",
        n_points, bank_angle_deg, radius, ideal, status_counts,
    )
    return results


def run_angle_sweep(
    angles_deg: list[float],
    radius: float,
    params: Optional[CurveParams] = None,
) -> Dict[float, Dict[str, float]]:
    """
    Ideal speed and at-ideal forces for several bank angles

    Args:
        angles_deg: Bank angles (degrees)
        radius: Curve radius (m)
        params: Physical constants

    Returns:
        Dictionary keyed by angle with ideal speed (m/s and km/h) and normal force
    """
    params = params if params is not None else CurveParams()
    results: Dict[float, Dict[str, float]] = {}

    for angle in angles_deg:
        validate_inputs(0.0, angle, radius)
        ideal = ideal_velocity(angle, radius, params.gravity)
        at_ideal = evaluate_many(np.array([ideal]), angle, radius, params)
        results[angle] = {
            "ideal_velocity": ideal,
            "ideal_velocity_kmh": ms_to_kmh(ideal),
            "normal_force": float(at_ideal["normal_force"][0]),
            "flange_force": float(at_ideal["flange_force"][0]),
        }

    logger.debug("Swept %d bank angles at r=%.0f m", len(angles_deg), radius)
    return results
