"""
Human-readable status descriptions for the status card
"""

from dataclasses import dataclass
from typing import Dict, Union

from banked_curve.state import Status


@dataclass(frozen=True)
class StatusDescription:
    """Title, explanation and card colour for a status"""

    title: str
    description: str
    color: str


STATUS_DESCRIPTIONS: Dict[Status, StatusDescription] = {
    Status.PERFECT: StatusDescription(
        title="Balanced",
        description=(
            "No lateral flange force. The resultant of gravity and the normal "
            "force supplies the centripetal force."
        ),
        color="#15803d",
    ),
    Status.FAST: StatusDescription(
        title="Too fast",
        description=(
            "The train tends to drift outward. The flanges press on the outer "
            "rail, which pushes the wheels inward."
        ),
        color="#b91c1c",
    ),
    Status.SLOW: StatusDescription(
        title="Too slow",
        description=(
            "The train tends to drift inward. The flanges press on the inner "
            "rail, which pushes the wheels outward."
        ),
        color="#c2410c",
    ),
    Status.STOPPED: StatusDescription(
        title="Stationary",
        description=(
            "The train tends to slide down the slope and is held by the inner "
            "rail flange."
        ),
        color="#334155",
    ),
}


def describe_status(status: Union[Status, str]) -> StatusDescription:
    """Look up the description for a status or its string value"""
    return STATUS_DESCRIPTIONS[Status(status)]
