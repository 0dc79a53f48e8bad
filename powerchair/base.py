"""
Base builders: front and rear castor assemblies and the rear bar frame.

Y is the direction of travel (front is +Y), Z is up. Positions are relative
to the seat reference point until build_base() applies the driver wheel
offset.
"""

import logging
import math

from build123d import Shape

from .config import ChairConstants, DEFAULT_CONSTANTS
from .geometry import (
    cube,
    cuboid,
    mirror_x,
    require_positive,
    rotate_z,
    to_length,
    translate,
    union,
)
from .params import CastorKind, ChairParams
from .wheels import build_castor_wheel

logger = logging.getLogger(__name__)


def _castor_track(params: ChairParams, constants: ChairConstants) -> float:
    track = to_length(params.seat_width - constants.pinch_in)
    return require_positive("castor track width", track)


def build_front_assembly(params: ChairParams,
                         constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Two small castors, pinched in from the drive wheel track."""
    x_offset = _castor_track(params, constants) / 2
    wheel = build_castor_wheel(
        params.small_wheel_diameter, CastorKind.SMALL,
        constants.front_castor_fork_angle, constants,
    )
    return union(translate(wheel, x=x_offset), translate(wheel, x=-x_offset))


def rear_frame_height(params: ChairParams,
                      constants: ChairConstants = DEFAULT_CONSTANTS) -> float:
    """Height (mm) of the rear bar frame, clearing the tilted medium castors."""
    radius = params.medium_wheel_diameter / 2
    fork_angle = math.radians(constants.back_castor_fork_angle)
    return to_length(
        radius + math.cos(fork_angle) * (radius + constants.wheel_gap) + 0.3
    )


def build_rear_frame(params: ChairParams,
                     constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """
    Bent-tube frame joining the rear castors, built from straight bars.

    Two slanted bars at the bend angle meet a straight crossbar; each end is
    capped above its castor.
    """
    width = _castor_track(params, constants)
    bar = to_length(constants.wheel_thickness)
    bend = math.radians(constants.frame_bend_angle)

    slant_length = width / 3 * math.cos(bend) + to_length(constants.wheel_thickness * 0.9)
    slant_bar = translate(
        rotate_z(cuboid(slant_length, bar, bar), constants.frame_bend_angle),
        x=-width / 3 * math.cos(bend),
        y=width / 6 * math.sin(bend),
    )
    straight_bar = translate(cuboid(width / 3, bar, bar), y=width / 3 * math.sin(bend))
    castor_cap = translate(
        cube(to_length(constants.wheel_thickness + 0.4)), x=-width / 2
    )

    frame = union(slant_bar, mirror_x(slant_bar), straight_bar,
                  castor_cap, mirror_x(castor_cap))
    return translate(frame, z=rear_frame_height(params, constants))


def build_rear_assembly(params: ChairParams,
                        constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Two medium castors plus the bar frame connecting them."""
    x_offset = _castor_track(params, constants) / 2
    wheel = build_castor_wheel(
        params.medium_wheel_diameter, CastorKind.MEDIUM,
        -constants.back_castor_fork_angle, constants,
    )
    wheels = union(translate(wheel, x=x_offset), translate(wheel, x=-x_offset))
    return union(wheels, build_rear_frame(params, constants))


def build_base(params: ChairParams,
               constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Undercarriage in the seat's coordinate frame."""
    front_frame = translate(build_front_assembly(params, constants),
                            y=to_length(constants.front_wheel_offset))
    back_frame = translate(build_rear_assembly(params, constants),
                           y=-to_length(constants.back_wheel_offset))
    logger.debug(f"base: driver_wheel_offset={params.driver_wheel_offset:.2f}in")
    # Translate the whole thing according to driver wheel offset
    return translate(union(front_frame, back_frame), y=-to_length(params.driver_wheel_offset))
