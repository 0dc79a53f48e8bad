"""
Seat assembly builders: cushion, seat back, arm rests with controls, seat
frame, leg rest, and the composed chair.

Parts are built in the seat frame: cushion centered on the origin, its
underside at z=0. assemble_chair() moves the group into the scene.
"""

import logging
import math

from build123d import Shape

from .config import ChairConstants, DEFAULT_CONSTANTS
from .geometry import (
    DegenerateGeometryError,
    circle,
    cuboid,
    cylinder,
    extrude,
    hull2d,
    mirror_x,
    require_positive,
    rotate_x,
    sphere,
    to_length,
    translate,
    union,
)
from .params import ChairParams, DerivedDimensions, Hand, derive_dimensions

logger = logging.getLogger(__name__)


def build_cushion(params: ChairParams, dims: DerivedDimensions,
                  constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Seat cushion: rounded trapezoid, wider at the front, extruded to seat thickness."""
    r = constants.round_radius
    radius = to_length(r)
    front_x = to_length(params.seat_width / 2 - r)
    back_x = to_length(dims.back_seat_width / 2 - r)
    y = to_length(dims.seat_depth / 2 - r)

    outline = hull2d([
        circle(radius, center=(front_x, y)),
        circle(radius, center=(-front_x, y)),
        circle(radius, center=(back_x, -y)),
        circle(radius, center=(-back_x, -y)),
    ])
    return extrude(outline, to_length(params.seat_thick))


def build_seat_back(params: ChairParams, dims: DerivedDimensions,
                    constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """
    Seat back outline, flat in XY before it is stood up.

    Bottom corners at 85% of the back seat width, widest at a quarter of the
    height, narrowing to 65% at the top.
    """
    r = constants.round_radius
    half = dims.back_seat_width / 2
    if half * 0.65 <= r:
        raise DegenerateGeometryError(
            f"seat back top corners collapse: back seat width {dims.back_seat_width:.2f}in "
            f"too narrow for round radius {r:.2f}in"
        )
    radius = to_length(r)
    bottom_x = to_length(half * 0.85 - r)
    middle_x = to_length(half - r)
    top_x = to_length(half * 0.65 - r)
    middle_y = to_length(params.seat_back_height * 0.25)
    top_y = to_length(params.seat_back_height)

    outline = hull2d([
        circle(radius, center=(-bottom_x, 0)),   # Bottom corners
        circle(radius, center=(bottom_x, 0)),
        circle(radius, center=(-middle_x, middle_y)),   # Middle "corners"
        circle(radius, center=(middle_x, middle_y)),
        circle(radius, center=(-top_x, top_y)),   # Top corners
        circle(radius, center=(top_x, top_y)),
    ])
    return extrude(outline, to_length(params.seat_thick))


def build_controls(params: ChairParams,
                   constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Control panel with joystick, placed on the arm rest matching params.hand."""
    panel = rotate_x(
        cuboid(to_length(constants.arm_rest_width),
               to_length(constants.control_panel_depth),
               to_length(constants.frame_size * 0.75)),
        constants.control_panel_angle,
    )
    stick_height = to_length(constants.joystick_height)
    joystick = union(
        translate(cylinder(to_length(constants.joystick_radius), stick_height), z=stick_height / 2),
        translate(sphere(to_length(constants.joystick_knob_radius)), z=stick_height),
    )
    controls = union(panel, joystick)

    x_offset = to_length(params.seat_width / 2 + constants.arm_rest_width / 2)
    if params.hand_side is Hand.L:
        x_offset = -x_offset
    return translate(
        controls,
        x=x_offset,
        y=to_length(constants.control_panel_depth * 0.45),
        z=to_length(constants.frame_size * 0.45),
    )


def build_arm_rests(params: ChairParams, dims: DerivedDimensions,
                    constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    left_arm_rest = translate(
        cuboid(to_length(constants.arm_rest_width),
               to_length(dims.arm_rest_depth),
               to_length(constants.frame_size)),
        x=-to_length(params.seat_width / 2 + constants.arm_rest_width / 2),
        y=-to_length(dims.arm_rest_depth / 2),
    )
    right_arm_rest = mirror_x(left_arm_rest)
    return union(left_arm_rest, right_arm_rest, build_controls(params, constants))


def build_seat_frame(params: ChairParams, dims: DerivedDimensions,
                     constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """
    Seat support frame, centered on the bar at the back of the seat.

    Back and front crossbars, two side connectors and two vertical posts
    carrying the arm rests.
    """
    w = params.seat_width
    frame = constants.frame_size
    bar = to_length(frame)

    back_horiz = cuboid(to_length(w + 2 * frame), bar, bar)
    front_horiz = translate(cuboid(to_length(w * 0.8), bar, bar), y=to_length(w * 0.8))

    left_connect = translate(
        cuboid(bar, to_length(w * 0.8), bar),
        x=to_length(w * 0.4 - frame / 2),
        y=to_length(w * 0.4),
    )
    right_connect = mirror_x(left_connect)

    post_height = to_length(dims.arm_rest_height)
    left_vert = translate(
        cuboid(bar, bar, post_height),
        x=to_length(w / 2 + frame / 2),
        z=post_height / 2,
    )
    right_vert = mirror_x(left_vert)

    return union(front_horiz, back_horiz, left_connect, right_connect, left_vert, right_vert)


def seat_frame_y(dims: DerivedDimensions,
                 constants: ChairConstants = DEFAULT_CONSTANTS) -> float:
    """Y (inches) of the seat frame's back crossbar in the seat frame."""
    return -(dims.seat_depth / 2 + constants.frame_size)


def build_leg_rest(params: ChairParams, dims: DerivedDimensions,
                   constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """
    Footplate hanging from the front crossbar of the seat frame.

    The plate's back edge sits at the cushion front and, with a level seat,
    its underside at ground clearance height. It is tilted up by
    leg_rest_angle about the axis of its back corners. A bracket runs back
    under the seat to a hanger that ends halfway into the front crossbar.
    """
    frame = constants.frame_size
    quarter = params.seat_width * 0.25
    require_positive("leg rest footplate inner width", quarter - 1.5)
    hanger_height = params.seat_height - constants.clearance - frame / 2
    require_positive("leg rest hanger height", hanger_height)

    bottom = constants.clearance - params.seat_height
    plate_y = dims.seat_depth / 2 + 1

    plate = hull2d([
        circle(to_length(1), center=(-to_length(quarter - 0.5), 0)),
        circle(to_length(1), center=(to_length(quarter - 0.5), 0)),
        circle(to_length(3.5), center=(-to_length(quarter - 1.5), to_length(6))),
        circle(to_length(3.5), center=(to_length(quarter - 1.5), to_length(6))),
    ])
    rest = translate(
        rotate_x(extrude(plate, to_length(0.4)), params.leg_rest_angle),
        y=to_length(plate_y),
        z=to_length(bottom),
    )

    hanger_y = params.seat_width * 0.8 + seat_frame_y(dims, constants)
    hanger = translate(
        cuboid(to_length(frame), to_length(frame), to_length(hanger_height)),
        y=to_length(hanger_y),
        z=to_length(bottom + hanger_height / 2),
    )

    bracket_start = hanger_y - frame / 2
    bracket = translate(
        cuboid(to_length(quarter - 0.5), to_length(plate_y - bracket_start), to_length(1)),
        y=to_length((bracket_start + plate_y) / 2),
        z=to_length(bottom + 0.5),
    )
    return union(rest, bracket, hanger)


def seat_pivot_offsets(params: ChairParams, dims: DerivedDimensions,
                       constants: ChairConstants = DEFAULT_CONSTANTS):
    """
    (y, z) offsets (mm) that place the seat-angle pivot below the seat.

    Empirical: the pivot sits pivot_offset_mm behind and below the cushion,
    nudged by half the recline angle.
    """
    pivot = constants.pivot_offset_mm
    y_offset = (to_length(dims.seat_depth / 2) - pivot
                + pivot * math.tan(math.radians(params.recline_angle / 2)))
    z_offset = -(pivot + to_length(params.seat_thick))
    return y_offset, z_offset


def assemble_chair(params: ChairParams,
                   dims: DerivedDimensions = None,
                   constants: ChairConstants = DEFAULT_CONSTANTS) -> Shape:
    """Compose the upper chair and place it at seat height."""
    dims = dims or derive_dimensions(params, constants)

    # Stand the back up and apply the recline angle
    back = translate(
        rotate_x(build_seat_back(params, dims, constants), 90 + params.recline_angle),
        y=-to_length(dims.seat_depth / 2),
        z=to_length(params.seat_thick / 2),
    )
    cushion = build_cushion(params, dims, constants)
    frame = translate(
        build_seat_frame(params, dims, constants),
        y=to_length(seat_frame_y(dims, constants)),
        z=-to_length(constants.frame_size / 2),
    )
    arm_rests = translate(build_arm_rests(params, dims, constants),
                          z=to_length(dims.arm_rest_height))

    parts = [frame, back, cushion, arm_rests]
    if params.has_leg_rest:
        parts.append(build_leg_rest(params, dims, constants))

    # Apply the seat angle rotation about the pivot
    y_offset, z_offset = seat_pivot_offsets(params, dims, constants)
    chair = rotate_x(
        translate(union(*parts), y=y_offset, z=z_offset),
        params.seat_angle,
    )
    logger.debug(f"chair pivot offsets y={y_offset:.1f}mm z={z_offset:.1f}mm "
                 f"seat_angle={params.seat_angle:.1f}deg")

    # Position the chair vertically
    return translate(
        chair,
        y=-y_offset + to_length(dims.seat_depth / 2),
        z=-z_offset + to_length(params.seat_height),
    )
