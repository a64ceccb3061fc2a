"""
Inputs, results and status of a single evaluation
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

import numpy as np


class Status(str, Enum):
    """Qualitative state of the train in the curve"""

    PERFECT = "perfect"
    FAST = "fast"
    SLOW = "slow"
    STOPPED = "stopped"


@dataclass(frozen=True)
class SimulationInputs:
    """Caller-supplied inputs for one evaluation"""

    velocity: float  # Train speed (m/s)
    bank_angle_deg: float  # Track cross-section angle to horizontal (degrees)
    radius: float  # Curve radius (m)

    @property
    def bank_angle_rad(self) -> float:
        """Bank angle in radians"""
        return float(np.deg2rad(self.bank_angle_deg))


@dataclass(frozen=True)
class PhysicsResult:
    """
    Forces and status for one (velocity, bank angle, radius) triple

    flange_force is signed: positive points down-slope (inward, the outer rail
    pushes the flange in), negative points up-slope (outward, the inner rail
    pushes the flange out).
    """

    ideal_velocity: float  # m/s
    normal_force: float  # N
    flange_force: float  # N, signed
    gravity: float  # N
    net_force: float  # N, horizontal centripetal force
    status: Status

    def velocity_difference(self, velocity: float) -> float:
        """Speed excess over the ideal speed (negative when too slow)"""
        return velocity - self.ideal_velocity

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary form, status as its string value"""
        data = asdict(self)
        data["status"] = self.status.value
        return data
