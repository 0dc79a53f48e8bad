"""
Powerchair - parametric powered wheelchair generator

CLI entry point with four modes:
  -i : Init mode - write a config YAML holding the default chair
  -e : Edit mode - build every chair in the config YAML
  --random N : Random mode - sample N chairs within the declared ranges
  (none) : Default mode - build the default chair (or --chair NAME from the config)
"""

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional, Tuple
import logging

from .config import Config, create_default_config, get_config_path
from .params import ChairParams, DEFAULT_PARAMS
from .step_generator import (
    GenerationResult, GenerationStatus, batch_generate, save_generation_log,
)


logger = logging.getLogger(__name__)


def write_previews(results: List[GenerationResult], output_dir: Path) -> None:
    from .visualizer import plot_scene_views

    for result in results:
        if result.scene is None:
            continue
        image_path = output_dir / f"{result.output_path.stem}_views.png"
        plot_scene_views(result.scene, image_path)
        logger.info(f"Preview saved to: {image_path}")


def run_batch(header: str, named_params: List[Tuple[str, ChairParams]], config: Config,
              output_dir: Path, allow_correction: bool, preview: bool) -> int:
    results = batch_generate(named_params, output_dir, config.constants, allow_correction)
    save_generation_log(results, output_dir / "generation_log.json")
    if preview:
        write_previews(results, output_dir)

    success_count = sum(1 for r in results if r.status != GenerationStatus.FAILED)
    for (name, _), result in zip(named_params, results):
        if result.status == GenerationStatus.FAILED:
            logger.error(f"  {name} -> FAILED: {result.error_message}")

    print(f"\n[{header}]")
    print(f"  Success: {success_count}/{len(results)}")
    print(f"  Output: {output_dir}")
    return 0 if success_count == len(results) else 1


def run_init_mode(config_path: Path) -> int:
    """Init mode (-i): write a config file holding the default chair."""
    logger.info("=== Init Mode ===")
    config = create_default_config(['default'])
    config.save(config_path)
    logger.info(f"Config saved to: {config_path}")

    print(f"\n[Init Complete]")
    print(f"  Config file: {config_path}")
    print(f"\nEdit the config file to set desired parameter values,")
    print(f"then run with -e option to generate STEP files.")
    return 0


def run_edit_mode(config_path: Path, output_dir: Path,
                  allow_correction: bool, preview: bool) -> int:
    """Edit mode (-e): build every chair in the config file."""
    logger.info("=== Edit Mode ===")

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        logger.error("Run with -i option first to generate config file.")
        return 1

    config = Config.load(config_path)
    logger.info(f"Loaded config from: {config_path}")
    if not config.chairs:
        logger.error("Config holds no chairs")
        return 1

    named_params = [
        (name, ChairParams.from_dict(chair.get_param_dict()))
        for name, chair in config.chairs.items()
    ]
    return run_batch("Edit Complete", named_params, config, output_dir, allow_correction, preview)


def run_random_mode(count: int, config_path: Path, output_dir: Path,
                    seed: Optional[int], preview: bool) -> int:
    """Random mode (--random N): sample chairs within the declared ranges."""
    logger.info("=== Random Mode ===")
    rng = random.Random(seed)

    config = Config()
    for i in range(count):
        chair_config = config.add_chair(f"random_{i:04d}", DEFAULT_PARAMS.to_dict())
        chair_config.randomize_parameters(rng)

    # Save config for reference
    config.save(config_path)
    logger.info(f"Randomized config saved to: {config_path}")

    named_params = [
        (name, ChairParams.from_dict(chair.get_param_dict()))
        for name, chair in config.chairs.items()
    ]
    return run_batch("Random Generation Complete", named_params, config, output_dir, False, preview)


def run_default_mode(config_path: Path, chair_name: Optional[str], output_dir: Path,
                     allow_correction: bool, preview: bool) -> int:
    """Default mode: build the default chair, or one named chair of the config file."""
    logger.info("=== Default Mode ===")
    if chair_name is None:
        return run_batch("Default Chair Complete", [('powerchair', DEFAULT_PARAMS)], Config(),
                         output_dir, allow_correction, preview)

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        return 1
    config = Config.load(config_path)
    if chair_name not in config.chairs:
        logger.error(f"No chair named '{chair_name}' in {config_path}")
        return 1
    params = ChairParams.from_dict(config.chairs[chair_name].get_param_dict())
    return run_batch("Chair Complete", [(chair_name, params)], config, output_dir,
                     allow_correction, preview)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Parametric powered wheelchair generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  -i          Init mode: write config.yaml with the default chair
  -e          Edit mode: build every chair in config.yaml
  --random N  Random mode: sample N chairs within the declared ranges
  (none)      Default mode: build the default chair

Examples:
  python -m powerchair.main -i            # Generate config.yaml
  python -m powerchair.main -e --preview  # Build chairs from config.yaml
  python -m powerchair.main --random 5    # Random chairs
  python -m powerchair.main --chair wide   # One chair from config.yaml
"""
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-i', '--init-config',
        action='store_true',
        help='Init mode: write a config with the default chair'
    )
    mode.add_argument(
        '-e', '--edit',
        action='store_true',
        help='Edit mode: build every chair in the config file'
    )
    mode.add_argument(
        '--random',
        type=int,
        metavar='N',
        help='Random mode: sample N chairs within the declared ranges'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for --random'
    )
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('output'),
        help='Output directory for generated STEP files (default: output/)'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=get_config_path(),
        help='Config file path (default: config.yaml)'
    )
    parser.add_argument(
        '--chair',
        default=None,
        help='Default mode: build only this chair from the config file'
    )
    parser.add_argument(
        '--preview',
        action='store_true',
        help='Also write a three-view PNG preview per chair'
    )
    parser.add_argument(
        '--clamp',
        action='store_true',
        help='Clamp out-of-range parameters instead of failing'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    if args.init_config:
        return run_init_mode(args.config)
    elif args.edit:
        return run_edit_mode(args.config, args.output_dir, args.clamp, args.preview)
    elif args.random is not None:
        if args.random < 1:
            logger.error("--random needs a positive count")
            return 1
        return run_random_mode(args.random, args.config, args.output_dir,
                               args.seed, args.preview)
    else:
        return run_default_mode(args.config, args.chair, args.output_dir,
                                args.clamp, args.preview)


if __name__ == '__main__':
    sys.exit(main())
