"""
Configuration module for YAML-based parameter management.

Holds the parameter declarations (captions, ranges, choices), the fixed
chair constants injected into every builder, and reading/writing of
config files with multiple named chairs.
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple
import yaml
import random


# Parameter declarations. Lengths in inches, angles in degrees.
PARAMETER_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    # Core parameters
    'seat_width': {'caption': 'Seat Width', 'type': 'float', 'initial': 16.0,
                   'group': 'core'},
    'seat_height': {'caption': 'Seat Height (from Ground)', 'type': 'float', 'initial': 20.0,
                    'group': 'core'},
    'seat_back_height': {'caption': 'Seat Back Height', 'type': 'float', 'initial': 20.0,
                         'group': 'core'},
    'seat_angle': {'caption': 'Seat Angle (degrees)', 'type': 'float', 'initial': 0.0,
                   'min': 0.0, 'max': 15.0, 'group': 'core'},
    'recline_angle': {'caption': 'Recline Angle (degrees)', 'type': 'float', 'initial': 5.0,
                      'min': 0.0, 'max': 15.0, 'group': 'core'},
    'hand': {'caption': 'Handedness', 'type': 'radio', 'initial': 1,
             'values': [0, 1], 'captions': ['L', 'R'], 'group': 'core'},
    'driver_wheel_pos': {'caption': 'Driver Wheel Position', 'type': 'choice', 'initial': 0,
                         'values': [0, 1, 2],
                         'captions': ['Center Wheel Drive (CWD)', 'Front Wheel Drive (FWD)',
                                      'Rear Wheel Drive (RWD)'],
                         'group': 'core'},
    'driver_wheel_offset': {'caption': 'Driver Wheel Offset', 'type': 'float', 'initial': 0.0,
                            'min': -5.0, 'max': 15.0, 'group': 'core'},
    # Independent parameters
    'seat_thick': {'caption': 'Seat Thickness', 'type': 'float', 'initial': 4.0,
                   'group': 'independent'},
    'large_wheel_diameter': {'caption': 'Driver Wheel Diameter', 'type': 'float', 'initial': 12.0,
                             'min': 12.0, 'max': 14.0, 'group': 'independent'},
    'medium_wheel_diameter': {'caption': 'Medium Wheel Diameter', 'type': 'float', 'initial': 7.0,
                              'min': 6.0, 'max': 8.0, 'group': 'independent'},
    'small_wheel_diameter': {'caption': 'Small Wheel Diameter', 'type': 'float', 'initial': 3.0,
                             'min': 2.0, 'max': 5.0, 'group': 'independent'},
    'leg_rest': {'caption': 'Leg Rest', 'type': 'radio', 'initial': 0,
                 'values': [0, 1], 'captions': ['Off', 'On'], 'group': 'independent'},
    'leg_rest_angle': {'caption': 'Leg Rest Angle', 'type': 'float', 'initial': 5.0,
                       'min': 0.0, 'max': 15.0, 'group': 'independent'},
}

# Sampling span used by random mode for lengths that declare no range
UNBOUNDED_SAMPLE_RANGES: Dict[str, Tuple[float, float]] = {
    'seat_width': (14.0, 22.0),
    'seat_height': (17.0, 23.0),
    'seat_back_height': (16.0, 24.0),
    'seat_thick': (3.0, 5.0),
}


@dataclass(frozen=True)
class ChairConstants:
    """
    Fixed dimensions shared by all builders.

    Lengths in inches unless the name says otherwise, angles in degrees.
    """
    wheel_thickness: float = 1.5        # tire width of every wheel
    wheel_gap: float = 1.5              # drive wheels to body
    castor_gap: float = 1.0             # wheel rim to castor fork top
    fork_plate_thickness: float = 0.2

    front_wheel_offset: float = 20.0    # seat bight to front castor axle
    front_castor_fork_angle: float = 15.0
    back_wheel_offset: float = 15.0     # seat bight to rear castor axle
    back_castor_fork_angle: float = 0.0
    pinch_in: float = 3.0               # castor track narrower than drive track
    frame_bend_angle: float = 30.0      # rear bar frame bend

    clearance: float = 3.0              # body to ground
    round_radius: float = 1.0           # seat outline corner rounding
    seat_taper: float = 2.0             # seat front width minus back width

    frame_size: float = 1.5             # square frame tube side
    arm_rest_width: float = 3.0
    control_panel_depth: float = 5.0
    control_panel_angle: float = 10.0
    joystick_radius: float = 0.5
    joystick_height: float = 2.5
    joystick_knob_radius: float = 1.15

    pivot_offset_mm: float = 100.0      # seat-angle rotation pivot distance

    chair_color: Tuple[float, float, float] = (211 / 255, 211 / 255, 211 / 255)   # lightgrey
    wheel_color: Tuple[float, float, float] = (144 / 255, 238 / 255, 144 / 255)   # lightgreen

    def to_dict(self) -> dict:
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            d[f.name] = list(value) if isinstance(value, tuple) else value
        return d

    @classmethod
    def from_dict(cls, d: dict) -> 'ChairConstants':
        """Create from dictionary; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {}
        for k, v in (d or {}).items():
            if k in known:
                values[k] = tuple(v) if isinstance(v, list) else v
        return replace(DEFAULT_CONSTANTS, **values)


DEFAULT_CONSTANTS = ChairConstants()


@dataclass
class ParameterConfig:
    """Single parameter configuration."""
    value: float
    min: Optional[float]
    max: Optional[float]
    description: str
    values: Optional[List[int]] = None

    def to_dict(self) -> dict:
        d = {
            'description': self.description,
            'value': self.value,
            'min': self.min,
            'max': self.max,
        }
        if self.values is not None:
            d['values'] = list(self.values)
        return d

    @classmethod
    def from_dict(cls, d: dict) -> 'ParameterConfig':
        return cls(
            value=d['value'],
            min=d.get('min'),
            max=d.get('max'),
            description=d.get('description', ''),
            values=d.get('values'),
        )

    def random_value(self, rng: random.Random, fallback: Tuple[float, float]) -> float:
        """Generate random value within range (or among the declared choices)."""
        if self.values is not None:
            return rng.choice(self.values)
        low = self.min if self.min is not None else fallback[0]
        high = self.max if self.max is not None else fallback[1]
        return rng.uniform(low, high)


@dataclass
class ChairConfig:
    """Configuration for a single named chair."""
    name: str
    parameters: Dict[str, ParameterConfig] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'parameters': {k: v.to_dict() for k, v in self.parameters.items()},
        }

    @classmethod
    def from_dict(cls, name: str, d: dict) -> 'ChairConfig':
        params = {}
        for k, v in d.get('parameters', {}).items():
            params[k] = ParameterConfig.from_dict(v)
        return cls(name=name, parameters=params)

    def get_param_dict(self) -> dict:
        """Get parameter values as simple dict."""
        return {k: v.value for k, v in self.parameters.items()}

    def randomize_parameters(self, rng: Optional[random.Random] = None) -> None:
        """Randomize all parameters within their ranges."""
        rng = rng or random.Random()
        for name, param in self.parameters.items():
            fallback = UNBOUNDED_SAMPLE_RANGES.get(name, (1.0, 10.0))
            param.value = param.random_value(rng, fallback)


@dataclass
class Config:
    """Main configuration container for multiple chairs."""
    version: str = "1.0"
    constants: ChairConstants = DEFAULT_CONSTANTS
    chairs: Dict[str, ChairConfig] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'constants': self.constants.to_dict(),
            'chairs': {k: v.to_dict() for k, v in self.chairs.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Config':
        chairs = {}
        for name, chair_data in (d.get('chairs') or {}).items():
            chairs[name] = ChairConfig.from_dict(name, chair_data)
        return cls(
            version=str(d.get('version', '1.0')),
            constants=ChairConstants.from_dict(d.get('constants', {})),
            chairs=chairs,
        )

    def save(self, path: Path) -> None:
        """Save config to YAML file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, allow_unicode=True,
                      default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """Load config from YAML file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    def add_chair(self, name: str, params: dict) -> ChairConfig:
        """Add or update chair configuration."""
        chair_config = create_chair_config(name, params)
        self.chairs[name] = chair_config
        return chair_config


def create_chair_config(name: str, current_params: dict) -> ChairConfig:
    """Create ChairConfig with current values and ranges from PARAMETER_DEFINITIONS."""
    parameters = {}

    for key, definition in PARAMETER_DEFINITIONS.items():
        value = current_params.get(key, definition['initial'])
        parameters[key] = ParameterConfig(
            value=value,
            min=definition.get('min'),
            max=definition.get('max'),
            description=definition['caption'],
            values=definition.get('values'),
        )

    return ChairConfig(name=name, parameters=parameters)


def create_default_config(names: List[str]) -> Config:
    """Create default config holding one default chair per name."""
    from .params import DEFAULT_PARAMS

    config = Config()
    default_params = DEFAULT_PARAMS.to_dict()

    for name in names:
        config.add_chair(name, default_params)

    return config


def get_config_path() -> Path:
    """Get default config file path."""
    return Path('config.yaml')
