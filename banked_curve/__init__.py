"""
Banked Rail Curve Physics

This package models a train running through a banked rail curve, computing the
ideal speed, the gravity, normal, flange and centripetal forces, and whether the
train is balanced, too fast, too slow or stationary.
"""

from banked_curve.params import CurveParams
from banked_curve.state import PhysicsResult, SimulationInputs, Status
from banked_curve.physics import (
    DomainError,
    PhysicsEngine,
    classify_status,
    evaluate,
    ideal_velocity,
    validate_inputs,
)
from banked_curve.geometry import ForceVector, SlopeFrame, layout_force_vectors
from banked_curve.status import StatusDescription, describe_status
from banked_curve.controls import ControlState, kmh_to_ms, ms_to_kmh
from banked_curve.analysis import evaluate_many, run_angle_sweep, run_velocity_sweep

__all__ = [
    "CurveParams",
    "PhysicsResult",
    "SimulationInputs",
    "Status",
    "DomainError",
    "PhysicsEngine",
    "classify_status",
    "evaluate",
    "ideal_velocity",
    "validate_inputs",
    "ForceVector",
    "SlopeFrame",
    "layout_force_vectors",
    "StatusDescription",
    "describe_status",
    "ControlState",
    "kmh_to_ms",
    "ms_to_kmh",
    "evaluate_many",
    "run_angle_sweep",
    "run_velocity_sweep",
]
