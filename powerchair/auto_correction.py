"""
Auto-correction module for parameter projection.

Opt-in alternative to failing fast: ranged parameters are projected into
their declared bounds and unknown choices fall back to their initial value.
"""

from dataclasses import dataclass
from typing import Tuple, List, Optional
import math

from .config import PARAMETER_DEFINITIONS
from .params import ChairParams


@dataclass
class CorrectionResult:
    """Result of auto-correction attempt."""
    success: bool
    original_params: ChairParams
    corrected_params: ChairParams
    corrections_applied: List[str]


def project_to_bounds(value: float,
                      bounds: Tuple[Optional[float], Optional[float]]) -> Tuple[float, bool]:
    """
    Project value to within bounds.

    Returns (projected_value, was_modified).
    """
    min_val, max_val = bounds
    if min_val is not None and value < min_val:
        return min_val, True
    elif max_val is not None and value > max_val:
        return max_val, True
    return value, False


def auto_correct(params: ChairParams) -> CorrectionResult:
    """
    Project every declared parameter into its range or choice set.

    Free lengths (seat width, heights, thickness) have no declared range and
    are never guessed; a non-positive one leaves the result unsuccessful.
    """
    corrections = []
    param_dict = params.to_dict()

    for name, definition in PARAMETER_DEFINITIONS.items():
        original = param_dict[name]
        numeric = isinstance(original, (int, float)) and not isinstance(original, bool)

        if 'values' in definition:
            if not numeric or original not in definition['values']:
                param_dict[name] = definition['initial']
                corrections.append(f"{name}: {original!r} -> {definition['initial']} (initial)")
            continue

        if not numeric or not math.isfinite(original):
            param_dict[name] = definition['initial']
            corrections.append(f"{name}: {original!r} -> {definition['initial']} (initial)")
            continue

        bounds = (definition.get('min'), definition.get('max'))
        if bounds == (None, None):
            continue
        projected, modified = project_to_bounds(original, bounds)
        if modified:
            param_dict[name] = projected
            corrections.append(f"{name}: {original:.4f} -> {projected:.4f}")

    corrected = ChairParams.from_dict(param_dict)
    is_valid, _ = corrected.validate()

    return CorrectionResult(
        success=is_valid,
        original_params=params,
        corrected_params=corrected,
        corrections_applied=corrections,
    )
