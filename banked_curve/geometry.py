"""
Slope frame rotations and force vector layout for the cross-section view
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from banked_curve.state import PhysicsResult

# Drawing scale and suppression thresholds
FORCE_SCALE = 0.03  # px per N
MIN_ARROW_LENGTH = 5.0  # px, shorter solid arrows are not drawn
MIN_FLANGE_FORCE = 100.0  # N, smaller flange forces are not drawn

# Cross-section dimensions (px) in the track frame: x along the sleeper from the
# inner rail toward the outer rail, y up and perpendicular to the sleeper
TRACK_WIDTH = 240.0
RAIL_HEIGHT = 40.0
WHEEL_TREAD_RADIUS = 25.0
BODY_GAP = 45.0
BODY_HEIGHT = 180.0

AXLE_CENTER = (TRACK_WIDTH / 2, RAIL_HEIGHT + WHEEL_TREAD_RADIUS)
CENTER_OF_MASS = (
    TRACK_WIDTH / 2,
    RAIL_HEIGHT + WHEEL_TREAD_RADIUS + BODY_GAP + BODY_HEIGHT / 2 - 20,
)
INNER_RAIL_X = 0.0
OUTER_RAIL_X = TRACK_WIDTH

FORCE_MODES = ("none", "real", "concurrent")


class SlopeFrame:
    """Rotation between the slope frame and the lab frame"""

    def __init__(self, bank_angle_deg: float) -> None:
        """
        Initialize slope frame

        Args:
            bank_angle_deg: Bank angle of the track (degrees)
        """
        self.bank_angle_deg = bank_angle_deg
        self.theta = float(np.deg2rad(bank_angle_deg))
        cos_t = np.cos(self.theta)
        sin_t = np.sin(self.theta)
        # Columns: down-slope unit vector and surface normal, in (horizontal, vertical)
        # lab coordinates with horizontal positive toward the curve centre
        self.rotation = np.array([
            [cos_t, sin_t],
            [-sin_t, cos_t],
        ])

    def to_lab(self, parallel: float, perpendicular: float) -> Tuple[float, float]:
        """
        Convert slope-frame components to lab-frame components

        Args:
            parallel: Component along the slope, positive down-slope
            perpendicular: Component normal to the slope, positive away from the surface

        Returns:
            Tuple of (horizontal, vertical), horizontal positive toward the curve centre
        """
        horizontal, vertical = self.rotation @ np.array([parallel, perpendicular])
        return float(horizontal), float(vertical)

    def to_slope(self, horizontal: float, vertical: float) -> Tuple[float, float]:
        """Inverse of to_lab"""
        parallel, perpendicular = self.rotation.T @ np.array([horizontal, vertical])
        return float(parallel), float(perpendicular)

    def reconstruct_net_force(self, result: PhysicsResult) -> float:
        """Horizontal force from normal and flange forces, equals result.net_force"""
        return self.to_lab(result.flange_force, result.normal_force)[0]

    def reconstruct_support(self, result: PhysicsResult) -> float:
        """Vertical support from normal and flange forces, equals result.gravity"""
        return self.to_lab(result.flange_force, result.normal_force)[1]


@dataclass(frozen=True)
class ForceVector:
    """A directed segment in the track drawing frame"""

    name: str
    label: str
    origin: Tuple[float, float]
    dx: float
    dy: float
    color: str
    dashed: bool = False

    @property
    def magnitude(self) -> float:
        """Drawn length (px)"""
        return float(np.hypot(self.dx, self.dy))

    @property
    def tip(self) -> Tuple[float, float]:
        """End point of the segment"""
        return self.origin[0] + self.dx, self.origin[1] + self.dy


def layout_force_vectors(
    result: PhysicsResult, bank_angle_deg: float, mode: str = "real"
) -> List[ForceVector]:
    """
    Lay out force arrows for the cross-section drawing

    In "real" mode the normal force starts at the axle and the flange force at
    the rail that pushes; in "concurrent" mode every force starts at the centre
    of mass. Gravity and the net force always start at the centre of mass.

    Args:
        result: Engine output to draw
        bank_angle_deg: Bank angle used for the evaluation (degrees)
        mode: One of "none", "real", "concurrent"

    Returns:
        List of vectors that are large enough to draw
    """
    if mode not in FORCE_MODES:
        raise ValueError(f"mode must be one of {FORCE_MODES}, got {mode!r}")
    if mode == "none":
        return []

    theta = np.deg2rad(bank_angle_deg)
    concurrent = mode == "concurrent"
    vectors: List[ForceVector] = []

    # Normal force: perpendicular to the sleeper
    normal_length = result.normal_force * FORCE_SCALE
    vectors.append(ForceVector(
        name="normal",
        label="Fn",
        origin=CENTER_OF_MASS if concurrent else AXLE_CENTER,
        dx=0.0,
        dy=normal_length,
        color="#9333ea",
    ))

    # Gravity: straight down in the lab frame
    gravity_length = result.gravity * FORCE_SCALE
    vectors.append(ForceVector(
        name="gravity",
        label="G",
        origin=CENTER_OF_MASS,
        dx=float(-gravity_length * np.sin(theta)),
        dy=float(-gravity_length * np.cos(theta)),
        color="#000000",
    ))

    # Flange force: along the sleeper, positive toward the inner rail
    if abs(result.flange_force) > MIN_FLANGE_FORCE:
        flange_length = abs(result.flange_force) * FORCE_SCALE
        pushes_inward = result.flange_force > 0
        if concurrent:
            origin = CENTER_OF_MASS
        elif pushes_inward:
            origin = (OUTER_RAIL_X, AXLE_CENTER[1])
        else:
            origin = (INNER_RAIL_X, AXLE_CENTER[1])
        vectors.append(ForceVector(
            name="flange",
            label="F",
            origin=origin,
            dx=-flange_length if pushes_inward else flange_length,
            dy=0.0,
            color="#ef4444" if pushes_inward else "#f97316",
        ))

    # Net force: horizontal, toward the curve centre
    net_length = result.net_force * FORCE_SCALE
    vectors.append(ForceVector(
        name="net",
        label="Fc",
        origin=CENTER_OF_MASS,
        dx=float(-net_length * np.cos(theta)),
        dy=float(net_length * np.sin(theta)),
        color="#22c55e",
        dashed=True,
    ))

    return [v for v in vectors if v.dashed or v.magnitude >= MIN_ARROW_LENGTH]


def track_to_lab(points: np.ndarray, bank_angle_deg: float) -> np.ndarray:
    """
    Rotate drawing-frame points about the inner rail into lab coordinates

    Args:
        points: Array [N x 2] of (x, y) in the track drawing frame
        bank_angle_deg: Bank angle (degrees), the outer rail is raised

    Returns:
        Array [N x 2] of (x, y) with x to the right (away from the curve centre), y up
    """
    theta = np.deg2rad(bank_angle_deg)
    rotation = np.array([
        [np.cos(theta), -np.sin(theta)],
        [np.sin(theta), np.cos(theta)],
    ])
    return np.atleast_2d(points) @ rotation.T
