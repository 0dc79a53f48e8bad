"""
Wheel builders: drive wheels and castor wheels with their forks.

Wheels are built with the axle along X (perpendicular to the direction of
travel, which is Y). Castor wheels come back standing on the ground plane.
"""

import logging

from build123d import Shape

from .config import ChairConstants, DEFAULT_CONSTANTS
from .geometry import (
    circle,
    cuboid,
    cylinder,
    extrude,
    hull2d,
    mirror_x,
    rotate_x,
    rotate_y,
    rounded_cylinder,
    square,
    subtract,
    to_length,
    translate,
    union,
)
from .params import CastorKind, ChairParams, InvalidParameterError

logger = logging.getLogger(__name__)


def build_drive_wheel(diameter: float,
                      constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Hollow tire plus thin hub disc, axle along X, centered on the origin."""
    radius = to_length(diameter / 2)
    thickness = to_length(constants.wheel_thickness)

    tire = subtract(cylinder(radius, thickness), cylinder(radius * 3 / 4, thickness))
    hub = cylinder(radius, thickness / 4)

    # Flip so the wheel stands upright
    return rotate_y(union(hub, tire), 90)


def _castor_kind(kind) -> CastorKind:
    try:
        return CastorKind(kind)
    except ValueError:
        raise InvalidParameterError(
            f"castor kind must be one of {[k.value for k in CastorKind]}, got {kind!r}"
        ) from None


def build_castor_wheel(diameter: float,
                       kind,
                       tilt_angle: float,
                       constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """
    Build a castor wheel with its fork.

    The fork (top plate plus two side grips) is tilted by tilt_angle about
    the X axis, then the whole castor is lifted so the wheel's lowest point
    sits at z=0.
    """
    kind = _castor_kind(kind)
    radius = to_length(diameter / 2)
    plate = to_length(constants.fork_plate_thickness)

    if kind is CastorKind.MEDIUM:
        castor_width = to_length(1.2 * constants.wheel_thickness + constants.fork_plate_thickness)
        # Axle where the fork grips the wheel
        axle = rotate_y(cylinder(radius / 8, castor_width), 90)
        wheel = union(build_drive_wheel(diameter, constants), axle)
    else:
        castor_width = to_length(constants.wheel_thickness + constants.fork_plate_thickness)
        # Small wheels are one solid piece
        wheel = rotate_y(
            rounded_cylinder(radius, to_length(constants.wheel_thickness), radius / 5), 90
        )

    castor_height = radius + to_length(constants.castor_gap)

    top = cuboid(castor_width, castor_width, plate)
    outline = hull2d([
        circle(castor_width / 2),
        square(castor_width, center=(castor_height - castor_width / 2, 0)),
    ])
    # Stand the grip outline up; its thickness ends up along -X
    side = rotate_y(extrude(outline, plate), 270)
    right_side = translate(side, x=castor_width / 2)

    fork = union(
        translate(top, z=castor_height),
        right_side,
        mirror_x(right_side),
    )
    fork = rotate_x(fork, tilt_angle)

    logger.debug(
        f"castor {kind.value}: d={diameter:.2f}in tilt={tilt_angle:.1f}deg "
        f"fork={castor_width:.1f}x{castor_height:.1f}mm"
    )
    return translate(union(wheel, fork), z=radius)


def build_driver_wheels(params: ChairParams,
                        constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Pair of drive wheels at x = +/- seat_width/2, standing on the ground."""
    wheel = build_drive_wheel(params.large_wheel_diameter, constants)
    half_track = to_length(params.seat_width / 2)
    wheels = union(translate(wheel, x=-half_track), translate(wheel, x=half_track))
    return translate(wheels, z=to_length(params.large_wheel_diameter / 2))
