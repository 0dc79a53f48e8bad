"""
Geometry module for solid construction using build123d.

Thin wrappers over build123d primitives, booleans, hulls, extrusions and
rigid transforms. All lengths handed to the primitives are in mm; use
to_length() to convert the inch-based chair dimensions.
"""

from copy import copy
from functools import reduce
import operator
from typing import Iterable, Sequence, Tuple

from build123d import (
    Axis,
    Box,
    Circle,
    Color,
    Cylinder,
    GeomType,
    Part,
    Plane,
    Rectangle,
    Shape,
    Sketch,
    Solid,
    Sphere,
    extrude as _extrude,
    make_hull,
)


MM_PER_INCH = 25.4


class DegenerateGeometryError(ValueError):
    """Raised when derived dimensions would produce an empty or inverted solid."""


def to_length(inches: float) -> float:
    """Convert inches to the base unit (mm)."""
    return inches * MM_PER_INCH


def require_positive(name: str, value: float) -> float:
    if not value > 0:
        raise DegenerateGeometryError(f"{name} must be positive, got {value}")
    return value


# --- 3D primitives (centered on the origin) ---

def cylinder(radius: float, height: float) -> Part:
    """Cylinder along Z, centered on the origin."""
    require_positive("cylinder radius", radius)
    require_positive("cylinder height", height)
    return Cylinder(radius, height)


def rounded_cylinder(radius: float, height: float, round_radius: float) -> Solid:
    """Cylinder along Z with both rims rounded by round_radius."""
    require_positive("cylinder radius", radius)
    require_positive("cylinder height", height)
    require_positive("round radius", round_radius)
    if round_radius * 2 >= height or round_radius >= radius:
        raise DegenerateGeometryError(
            f"round radius {round_radius:.3f} too large for cylinder "
            f"r={radius:.3f} h={height:.3f}"
        )
    body = Solid.make_cylinder(radius, height).translate((0, 0, -height / 2))
    rims = body.edges().filter_by(GeomType.CIRCLE)
    return body.fillet(round_radius, rims)


def cuboid(size_x: float, size_y: float, size_z: float) -> Part:
    for name, value in (("x", size_x), ("y", size_y), ("z", size_z)):
        require_positive(f"cuboid {name} size", value)
    return Box(size_x, size_y, size_z)


def cube(size: float) -> Part:
    return cuboid(size, size, size)


def sphere(radius: float) -> Part:
    require_positive("sphere radius", radius)
    return Sphere(radius)


# --- 2D outlines (XY plane) ---

def circle(radius: float, center: Tuple[float, float] = (0.0, 0.0)) -> Sketch:
    require_positive("circle radius", radius)
    return Circle(radius).translate((center[0], center[1], 0))


def square(size: float, center: Tuple[float, float] = (0.0, 0.0)) -> Sketch:
    require_positive("square size", size)
    return Rectangle(size, size).translate((center[0], center[1], 0))


def hull2d(outlines: Sequence[Sketch]) -> Sketch:
    """Convex hull of a set of circle/square outlines."""
    edges = [edge for outline in outlines for edge in outline.edges()]
    return make_hull(edges)


def extrude(outline: Sketch, height: float) -> Part:
    """Linear extrusion of an XY outline along +Z."""
    require_positive("extrusion height", height)
    # Hull face normals may point either way
    return _extrude(outline, amount=height, dir=(0, 0, 1))


# --- Booleans ---

def union(*shapes: Shape) -> Shape:
    if not shapes:
        raise DegenerateGeometryError("union of nothing")
    return reduce(operator.add, shapes)


def subtract(shape: Shape, *tools: Shape) -> Shape:
    return reduce(operator.sub, tools, shape)


# --- Rigid transforms (always return new shapes) ---

def translate(shape: Shape, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Shape:
    return shape.translate((x, y, z))


def rotate_x(shape: Shape, degrees: float) -> Shape:
    return shape.rotate(Axis.X, degrees)


def rotate_y(shape: Shape, degrees: float) -> Shape:
    return shape.rotate(Axis.Y, degrees)


def rotate_z(shape: Shape, degrees: float) -> Shape:
    return shape.rotate(Axis.Z, degrees)


def mirror_x(shape: Shape) -> Shape:
    """Mirror across the YZ plane (x -> -x)."""
    return shape.mirror(Plane.YZ)


def colorize(shape: Shape, rgb: Iterable[float], label: str = "") -> Shape:
    """Return a colored copy of shape; the input is left untouched."""
    colored = copy(shape)
    colored.color = Color(*rgb)
    if label:
        colored.label = label
    return colored
