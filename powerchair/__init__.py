"""
Powerchair - parametric powered wheelchair generator
"""

from .params import ChairParams, DEFAULT_PARAMS, DriveWheelPosition, Hand, CastorKind, InvalidParameterError
from .geometry import DegenerateGeometryError, to_length
from .scene import Scene, SceneItem, compose_scene, calculate_offset
from .step_generator import generate_step, batch_generate, GenerationStatus, GenerationResult
from .quality_gate import validate_scene, ValidationResult
from .auto_correction import auto_correct, CorrectionResult
from .config import Config, ChairConfig, ChairConstants, DEFAULT_CONSTANTS, PARAMETER_DEFINITIONS

__version__ = "0.1.0"

__all__ = [
    'ChairParams',
    'DEFAULT_PARAMS',
    'DriveWheelPosition',
    'Hand',
    'CastorKind',
    'InvalidParameterError',
    'DegenerateGeometryError',
    'to_length',
    'Scene',
    'SceneItem',
    'compose_scene',
    'calculate_offset',
    'generate_step',
    'batch_generate',
    'GenerationStatus',
    'GenerationResult',
    'validate_scene',
    'ValidationResult',
    'auto_correct',
    'CorrectionResult',
    'Config',
    'ChairConfig',
    'ChairConstants',
    'DEFAULT_CONSTANTS',
    'PARAMETER_DEFINITIONS',
]
