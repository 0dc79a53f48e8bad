"""
STEP generator module - main pipeline from parameters to a STEP assembly.

Integrates parameter validation, scene construction, quality validation and
export.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Tuple
from enum import Enum
import logging
import json
import time
from datetime import datetime

from build123d import Compound, export_step

from .auto_correction import auto_correct, CorrectionResult
from .config import ChairConstants, DEFAULT_CONSTANTS
from .geometry import DegenerateGeometryError, colorize
from .params import ChairParams, InvalidParameterError
from .quality_gate import validate_scene, ValidationResult
from .scene import Scene, compose_scene


logger = logging.getLogger(__name__)


class GenerationStatus(Enum):
    """Status of STEP generation."""
    SUCCESS = "success"
    SUCCESS_WITH_CORRECTION = "success_with_correction"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Result of STEP generation attempt."""
    status: GenerationStatus
    output_path: Optional[Path]
    params_used: ChairParams
    correction_result: Optional[CorrectionResult]
    validation_result: Optional[ValidationResult]
    error_message: Optional[str]
    generation_time_ms: float
    scene: Optional[Scene] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            'status': self.status.value,
            'output_path': str(self.output_path) if self.output_path else None,
            'params_used': self.params_used.to_dict(),
            'corrections_applied': (
                self.correction_result.corrections_applied
                if self.correction_result else []
            ),
            'is_valid': (
                self.validation_result.is_valid
                if self.validation_result else False
            ),
            'warnings': (
                self.validation_result.warnings
                if self.validation_result else []
            ),
            'error': self.error_message,
            'generation_time_ms': self.generation_time_ms,
        }


def scene_to_assembly(scene: Scene, label: str = "powerchair") -> Compound:
    """Wrap copies of the scene items in one labeled assembly, keeping their colors."""
    children = [colorize(item.shape, item.color, item.name) for item in scene]
    return Compound(label=label, children=children)


def export_scene(scene: Scene, output_path: Path, label: str = "powerchair") -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if not export_step(scene_to_assembly(scene, label), str(output_path)):
        raise IOError(f"STEP writer reported failure for {output_path}")
    return output_path


def generate_step(
    params: ChairParams,
    output_path: Path,
    constants: ChairConstants = DEFAULT_CONSTANTS,
    allow_correction: bool = False,
) -> GenerationResult:
    """
    Generate a STEP file from chair parameters.

    Pipeline:
    1. Validate (optionally correct) parameters
    2. Build the scene
    3. Validate geometry
    4. Export STEP
    """
    start_time = time.perf_counter()

    def elapsed() -> float:
        return (time.perf_counter() - start_time) * 1000

    def failed(message: str, used: ChairParams, correction=None, validation=None):
        logger.error(message)
        return GenerationResult(
            status=GenerationStatus.FAILED,
            output_path=None,
            params_used=used,
            correction_result=correction,
            validation_result=validation,
            error_message=message,
            generation_time_ms=elapsed(),
        )

    current_params = params
    correction_result = None

    # Stage 1: Parameter validation and correction
    is_valid, errors = params.validate()
    if not is_valid:
        if not allow_correction:
            return failed(f"Invalid parameters: {errors}", params)

        correction_result = auto_correct(params)
        current_params = correction_result.corrected_params
        logger.info(f"Applied corrections: {correction_result.corrections_applied}")
        if not correction_result.success:
            _, remaining = current_params.validate()
            return failed(f"Invalid parameters after correction: {remaining}",
                          current_params, correction_result)

    # Stage 2: Build geometry
    try:
        scene = compose_scene(current_params, constants)
    except (InvalidParameterError, DegenerateGeometryError) as e:
        return failed(f"Geometry construction failed: {e}", current_params, correction_result)

    # Stage 3: Validate geometry
    validation_result = validate_scene(scene)
    if not validation_result.is_valid:
        return failed(f"Scene validation failed: {validation_result.errors}",
                      current_params, correction_result, validation_result)
    for warning in validation_result.warnings:
        logger.warning(warning)

    # Stage 4: Export STEP
    try:
        output_path = export_scene(scene, output_path, label=Path(output_path).stem)
        logger.info(f"STEP exported to: {output_path}")
    except (IOError, OSError) as e:
        return failed(f"STEP export failed: {e}", current_params,
                      correction_result, validation_result)

    status = (
        GenerationStatus.SUCCESS_WITH_CORRECTION
        if correction_result and correction_result.corrections_applied
        else GenerationStatus.SUCCESS
    )

    return GenerationResult(
        status=status,
        output_path=output_path,
        params_used=current_params,
        correction_result=correction_result,
        validation_result=validation_result,
        error_message=None,
        generation_time_ms=elapsed(),
        scene=scene,
    )


def batch_generate(
    named_params: List[Tuple[str, ChairParams]],
    output_dir: Path,
    constants: ChairConstants = DEFAULT_CONSTANTS,
    allow_correction: bool = False,
) -> List[GenerationResult]:
    """Generate one STEP file per named parameter set."""
    results = []
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for i, (name, params) in enumerate(named_params):
        output_path = output_dir / f"{name}.step"
        result = generate_step(params, output_path, constants, allow_correction)
        results.append(result)

        logger.info(
            f"[{i+1}/{len(named_params)}] {name}: {result.status.value} "
            f"({result.generation_time_ms:.1f}ms)"
        )

    success = sum(1 for r in results if r.status != GenerationStatus.FAILED)
    corrected = sum(
        1 for r in results
        if r.status == GenerationStatus.SUCCESS_WITH_CORRECTION
    )

    logger.info(
        f"Batch complete: {success}/{len(results)} success "
        f"({corrected} with correction)"
    )

    return results


def save_generation_log(
    results: List[GenerationResult],
    log_path: Path
) -> None:
    """Save generation results to JSON log."""
    log_data = {
        'timestamp': datetime.now().isoformat(),
        'total': len(results),
        'success': sum(1 for r in results if r.status != GenerationStatus.FAILED),
        'results': [r.to_dict() for r in results]
    }

    with open(log_path, 'w', encoding='utf-8') as f:
        json.dump(log_data, f, indent=2, ensure_ascii=False)
