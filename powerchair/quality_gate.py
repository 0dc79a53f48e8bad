"""
Quality gate module for scene validation.

Provides B-Rep validation of every scene item and the ground contact check
for the wheel-carrying assemblies.
"""

from dataclasses import dataclass
from typing import List, Tuple
from enum import Enum

# Assemblies whose lowest point must touch the ground plane
GROUNDED_ITEMS = ('base', 'driver_wheels')


class ValidationStatus(Enum):
    """Validation result status."""
    VALID = "valid"
    INVALID = "invalid"


@dataclass
class ValidationResult:
    """Result of scene validation."""
    status: ValidationStatus
    is_valid: bool
    errors: List[str]
    warnings: List[str]

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(ValidationStatus.VALID, True, [], [])

    @classmethod
    def invalid(cls, errors: List[str]) -> 'ValidationResult':
        return cls(ValidationStatus.INVALID, False, errors, [])


def check_brep(shape) -> List[str]:
    """Return B-Rep problems of a single shape (empty list when valid)."""
    if shape is None or shape.wrapped is None:
        return ["shape is null"]

    from OCP.BRepCheck import BRepCheck_Analyzer
    errors = []
    if not BRepCheck_Analyzer(shape.wrapped).IsValid():
        errors.append("B-Rep is invalid")
    if shape.volume <= 0:
        errors.append("shape has no volume")
    return errors


def lowest_point(shape) -> float:
    return shape.bounding_box(optimal=True).min.Z


def contact_heights(shape, tolerance: float = 0.05) -> List[Tuple[int, str, float]]:
    """
    Lowest z of each wheel group of a grounded assembly.

    A group is one solid on one side of the centerline (x=0), so the rear
    castors fused to their bar frame still count as two groups. Faces that
    cross the centerline belong to neither side.
    """
    heights = []
    for index, solid in enumerate(shape.solids()):
        lowest = {}
        for face in solid.faces():
            bbox = face.bounding_box(optimal=True)
            if bbox.max.X <= tolerance:
                side = 'left'
            elif bbox.min.X >= -tolerance:
                side = 'right'
            else:
                continue
            lowest[side] = min(lowest.get(side, bbox.min.Z), bbox.min.Z)
        heights.extend((index, side, z) for side, z in sorted(lowest.items()))
    return heights


def validate_scene(scene, tolerance: float = 0.05) -> ValidationResult:
    """
    Validate scene geometry.

    Checks:
    - Every item is a valid, non-empty solid
    - Nothing reaches below the ground plane
    - Every wheel group of the base and drive wheels touches the ground
      (z=0 within tolerance)
    """
    errors = []
    warnings = []

    if not scene:
        return ValidationResult.invalid(["scene is empty"])

    for item in scene:
        problems = check_brep(item.shape)
        if problems:
            errors.extend(f"{item.name}: {problem}" for problem in problems)
            continue

        bottom = lowest_point(item.shape)
        if bottom < -tolerance:
            errors.append(f"{item.name}: reaches below ground (z={bottom:.3f}mm)")
        elif item.name in GROUNDED_ITEMS:
            groups = contact_heights(item.shape, tolerance) or [(0, 'all', bottom)]
            floating = [
                f"solid {index} {side} z={z:.3f}mm"
                for index, side, z in groups if z > tolerance
            ]
            if floating:
                errors.append(f"{item.name}: floats above ground ({', '.join(floating)})")

    names = [item.name for item in scene]
    for name in GROUNDED_ITEMS:
        if name not in names:
            warnings.append(f"no '{name}' item to check ground contact")

    if errors:
        result = ValidationResult.invalid(errors)
        result.warnings = warnings
        return result

    result = ValidationResult.valid()
    result.warnings = warnings
    return result
