"""
Scene composer: derive dependent sizes, build the chair, base and drive
wheels, and position them according to the drive wheel placement.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple
import logging

from build123d import Shape

from .base import build_base
from .config import ChairConstants, DEFAULT_CONSTANTS
from .geometry import colorize, to_length, translate
from .params import ChairParams, DriveWheelPosition, InvalidParameterError, derive_dimensions
from .seat import assemble_chair
from .wheels import build_driver_wheels

logger = logging.getLogger(__name__)


# Body shift per drive position: -(seat_width * fraction - inset) inches
DRIVE_POSITION_OFFSETS: Dict[DriveWheelPosition, Tuple[float, float]] = {
    DriveWheelPosition.CWD: (0.5, 1.0),
    DriveWheelPosition.FWD: (1.0, 3.0),
    DriveWheelPosition.RWD: (0.0, 0.0),
}


@dataclass(frozen=True)
class SceneItem:
    """One colored assembly of the scene."""
    name: str
    shape: Shape
    color: Tuple[float, float, float]


class Scene(list):
    """Ordered list of scene items."""

    def pairs(self) -> Iterator[Tuple[Shape, Tuple[float, float, float]]]:
        for item in self:
            yield item.shape, item.color

    def get(self, name: str) -> SceneItem:
        for item in self:
            if item.name == name:
                return item
        raise KeyError(name)


def calculate_offset(params: ChairParams) -> float:
    """
    Offset (mm) along Y applied to the chair and base so the drive wheel
    axle lands at the right body position.
    """
    try:
        position = DriveWheelPosition(params.driver_wheel_pos)
        fraction, inset = DRIVE_POSITION_OFFSETS[position]
    except (ValueError, KeyError):
        raise InvalidParameterError(
            f"no body offset mapped for driver_wheel_pos={params.driver_wheel_pos!r}"
        ) from None
    return -(to_length(params.seat_width * fraction) - to_length(inset))


def compose_scene(params: ChairParams,
                  constants: ChairConstants = DEFAULT_CONSTANTS) -> Scene:
    """
    Build the full wheelchair scene.

    Returns [chair, base, driver_wheels]. Raises InvalidParameterError before
    any geometry is built when the parameters are out of range.
    """
    params.validate_or_raise()
    dims = derive_dimensions(params, constants)
    logger.info(
        f"Building chair: seat {params.seat_width:.1f}x{dims.seat_depth:.1f}in, "
        f"drive={params.drive_position.name}, hand={params.hand_side.name}"
    )

    chair = assemble_chair(params, dims, constants)
    base = build_base(params, constants)

    # Adjust the chair and the base to account for the driver wheel position
    offset = calculate_offset(params)
    logger.info(f"Drive position offset: {offset:.1f}mm")
    chair = translate(chair, y=offset)
    base = translate(base, y=offset)

    driver_wheels = build_driver_wheels(params, constants)

    return Scene([
        SceneItem('chair', colorize(chair, constants.chair_color, 'chair'), constants.chair_color),
        SceneItem('base', colorize(base, constants.chair_color, 'base'), constants.chair_color),
        SceneItem('driver_wheels',
                  colorize(driver_wheels, constants.wheel_color, 'driver_wheels'),
                  constants.wheel_color),
    ])
