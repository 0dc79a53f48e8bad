"""
Chair parameter set and derived dimensions.

ChairParams is the immutable parameter set handed to every builder. All
lengths are in inches; the builders convert with geometry.to_length().
"""

from dataclasses import dataclass, fields, replace
from enum import Enum, IntEnum
from typing import Dict, List, Tuple
import math

from .config import PARAMETER_DEFINITIONS, ChairConstants, DEFAULT_CONSTANTS


class InvalidParameterError(ValueError):
    """Raised when a parameter is out of its declared range or not a declared choice."""


class DriveWheelPosition(IntEnum):
    CWD = 0
    FWD = 1
    RWD = 2


class Hand(IntEnum):
    L = 0
    R = 1


class CastorKind(Enum):
    MEDIUM = "medium"
    SMALL = "small"


# camelCase parameter names accepted by from_dict
_ALIASES: Dict[str, str] = {
    'seatWidth': 'seat_width',
    'seatHeight': 'seat_height',
    'seatBackHeight': 'seat_back_height',
    'seatAngle': 'seat_angle',
    'reclineAngle': 'recline_angle',
    'driverWheelPos': 'driver_wheel_pos',
    'driverWheelOffset': 'driver_wheel_offset',
    'seatThick': 'seat_thick',
    'largeWheelDiameter': 'large_wheel_diameter',
    'mediumWheelDiameter': 'medium_wheel_diameter',
    'smallWheelDiameter': 'small_wheel_diameter',
    'legRest': 'leg_rest',
    'legRestAngle': 'leg_rest_angle',
}


@dataclass(frozen=True)
class ChairParams:
    """
    Parameters defining the wheelchair.

    Lengths in inches, angles in degrees. hand and driver_wheel_pos hold
    the declared choice indices (see Hand and DriveWheelPosition).
    """
    seat_width: float = 16.0
    seat_height: float = 20.0
    seat_back_height: float = 20.0
    seat_angle: float = 0.0
    recline_angle: float = 5.0
    hand: int = Hand.R
    driver_wheel_pos: int = DriveWheelPosition.CWD
    driver_wheel_offset: float = 0.0
    seat_thick: float = 4.0
    large_wheel_diameter: float = 12.0
    medium_wheel_diameter: float = 7.0
    small_wheel_diameter: float = 3.0
    leg_rest: int = 0
    leg_rest_angle: float = 5.0

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate parameters against their declarations."""
        errors = []

        for f in fields(self):
            name = f.name
            value = getattr(self, name)
            definition = PARAMETER_DEFINITIONS[name]

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be numeric, got {value!r}")
                continue
            if not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")
                continue

            if 'values' in definition:
                if value not in definition['values']:
                    errors.append(
                        f"{name}={value} is not one of {definition['values']}"
                    )
                continue

            low = definition.get('min')
            high = definition.get('max')
            if low is None and high is None:
                # Free lengths only need to be positive
                if value <= 0:
                    errors.append(f"{name} must be positive, got {value}")
                continue
            if low is not None and value < low:
                errors.append(f"{name}={value} below minimum {low}")
            if high is not None and value > high:
                errors.append(f"{name}={value} above maximum {high}")

        return len(errors) == 0, errors

    def validate_or_raise(self) -> 'ChairParams':
        is_valid, errors = self.validate()
        if not is_valid:
            raise InvalidParameterError("; ".join(errors))
        return self

    @property
    def hand_side(self) -> Hand:
        return Hand(self.hand)

    @property
    def drive_position(self) -> DriveWheelPosition:
        return DriveWheelPosition(self.driver_wheel_pos)

    @property
    def has_leg_rest(self) -> bool:
        return self.leg_rest == 1

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            d[f.name] = int(value) if isinstance(value, IntEnum) else value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> 'ChairParams':
        """Create from dictionary; accepts snake_case or camelCase keys."""
        known = cls.__dataclass_fields__
        values = {}
        for k, v in d.items():
            key = _ALIASES.get(k, k)
            if key in known:
                values[key] = v
        return cls(**values)

    def with_changes(self, **changes) -> 'ChairParams':
        return replace(self, **changes)


@dataclass(frozen=True)
class DerivedDimensions:
    """Dimensions computed from the raw parameter set (inches)."""
    seat_depth: float
    base_depth: float
    arm_rest_height: float
    arm_rest_depth: float
    back_seat_width: float


def derive_dimensions(params: ChairParams,
                      constants: ChairConstants = DEFAULT_CONSTANTS) -> DerivedDimensions:
    seat_depth = params.seat_width
    return DerivedDimensions(
        seat_depth=seat_depth,
        base_depth=seat_depth * 1.5,
        arm_rest_height=params.seat_back_height * 0.5,
        arm_rest_depth=params.seat_width * 0.5 + 2 * constants.frame_size,
        back_seat_width=params.seat_width - constants.seat_taper,
    )


DEFAULT_PARAMS = ChairParams()
