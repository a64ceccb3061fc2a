"""
Physical constants for the banked curve model
"""

from dataclasses import dataclass


@dataclass
class CurveParams:
    """Fixed physical constants used by the physics engine"""

    gravity: float = 9.8  # m/s²
    train_mass: float = 1000.0  # kg (reference mass, only scales force magnitudes)
    perfect_tolerance: float = 0.5  # m/s (absolute band around the ideal speed)
    weight: float = 0.0  # Will be calculated

    def __post_init__(self) -> None:
        """Validate constants and calculate derived parameters"""
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")
        if self.train_mass <= 0:
            raise ValueError(f"train_mass must be positive, got {self.train_mass}")
        if self.perfect_tolerance < 0:
            raise ValueError(
                f"perfect_tolerance must be non-negative, got {self.perfect_tolerance}"
            )
        self.weight = self.train_mass * self.gravity
