"""
Control surface model: slider ranges, unit conversion and snap-to-ideal
"""

from dataclasses import dataclass, replace
from typing import Any, Optional

import numpy as np

from banked_curve.geometry import FORCE_MODES
from banked_curve.physics import PhysicsEngine
from banked_curve.state import PhysicsResult

MS_TO_KMH = 3.6
MAX_SPEED_KMH = 300.0
MAX_SPEED_MS = MAX_SPEED_KMH / MS_TO_KMH  # ~83.3 m/s

ANGLE_MIN_DEG = 0.0
ANGLE_MAX_DEG = 30.0
ANGLE_STEP_DEG = 1.0

RADIUS_MIN = 100.0  # m
RADIUS_MAX = 4000.0  # m
RADIUS_STEP = 50.0  # m


def kmh_to_ms(speed_kmh: float) -> float:
    """Convert km/h to m/s"""
    return speed_kmh / MS_TO_KMH


def ms_to_kmh(speed_ms: float) -> float:
    """Convert m/s to km/h"""
    return speed_ms * MS_TO_KMH


@dataclass(frozen=True)
class ControlState:
    """Values held by the control panel"""

    velocity: float = 25.0  # m/s (90 km/h)
    bank_angle_deg: float = 8.0  # degrees
    radius: float = 600.0  # m
    force_mode: str = "none"  # One of FORCE_MODES
    show_plane: bool = False  # Show the plane of circular motion

    def __post_init__(self) -> None:
        """Validate the force display mode"""
        if self.force_mode not in FORCE_MODES:
            raise ValueError(f"force_mode must be one of {FORCE_MODES}, got {self.force_mode!r}")

    def with_changes(self, **changes: Any) -> "ControlState":
        """Return a copy with some fields replaced"""
        return replace(self, **changes)

    def clamped(self) -> "ControlState":
        """
        Return a copy with bank angle and radius limited to the slider ranges

        Speed is left as is: the speed slider bounds dragged values itself, and a
        snapped ideal speed may lie above the slider maximum. Negative speeds are
        rejected by the engine.
        """
        return replace(
            self,
            bank_angle_deg=float(np.clip(self.bank_angle_deg, ANGLE_MIN_DEG, ANGLE_MAX_DEG)),
            radius=float(np.clip(self.radius, RADIUS_MIN, RADIUS_MAX)),
        )

    @property
    def velocity_kmh(self) -> float:
        """Displayed speed, rounded to whole km/h"""
        return float(round(ms_to_kmh(self.velocity)))

    def evaluate(self, engine: Optional[PhysicsEngine] = None) -> PhysicsResult:
        """
        Clamp bank angle and radius, then evaluate

        Args:
            engine: Engine to use (defaults to standard constants)

        Returns:
            PhysicsResult for the clamped curve at the current speed

        Raises:
            DomainError: If the speed is negative or non-finite
        """
        engine = engine if engine is not None else PhysicsEngine()
        state = self.clamped()
        return engine.evaluate(state.velocity, state.bank_angle_deg, state.radius)

    def snap_to_ideal(self, engine: Optional[PhysicsEngine] = None) -> "ControlState":
        """Return a copy whose velocity is the ideal speed for the current curve"""
        result = self.evaluate(engine)
        return replace(self.clamped(), velocity=result.ideal_velocity)

    @staticmethod
    def ideal_marker_percent(result: PhysicsResult) -> float:
        """Position of the ideal-speed marker on the speed slider (0-100)"""
        return min(ms_to_kmh(result.ideal_velocity) / MAX_SPEED_KMH * 100.0, 100.0)
