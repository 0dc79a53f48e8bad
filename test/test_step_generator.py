import json
import tempfile
import unittest
import logging
from pathlib import Path

from powerchair.main import main, parse_args
from powerchair.params import DEFAULT_PARAMS, ChairParams
from powerchair.step_generator import (
    GenerationStatus,
    batch_generate,
    generate_step,
    save_generation_log,
    scene_to_assembly,
)
from powerchair.visualizer import plot_scene_views

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("TestStepGenerator")


class TestGenerateStep(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.tmpdir = tempfile.TemporaryDirectory()
        cls.output_dir = Path(cls.tmpdir.name)
        cls.result = generate_step(DEFAULT_PARAMS, cls.output_dir / 'default.step')

    @classmethod
    def tearDownClass(cls):
        cls.tmpdir.cleanup()

    def test_01_default_chair_exported(self):
        result = self.result
        logger.info(f"default chair: {result.status.value} in {result.generation_time_ms:.0f}ms")
        self.assertEqual(result.status, GenerationStatus.SUCCESS, result.error_message)
        self.assertTrue(result.output_path.exists())
        with open(result.output_path, 'r', encoding='utf-8', errors='replace') as f:
            self.assertTrue(f.readline().startswith('ISO-10303-21'))

    def test_02_assembly_keeps_items(self):
        assembly = scene_to_assembly(self.result.scene, 'default')
        self.assertEqual(assembly.label, 'default')
        self.assertEqual([child.label for child in assembly.children],
                         ['chair', 'base', 'driver_wheels'])

    def test_03_invalid_params_fail_without_output(self):
        path = self.output_dir / 'invalid.step'
        result = generate_step(ChairParams(seat_angle=40), path)
        self.assertEqual(result.status, GenerationStatus.FAILED)
        self.assertIsNone(result.output_path)
        self.assertIn('seat_angle', result.error_message)
        self.assertFalse(path.exists())

    def test_04_correction_is_opt_in(self):
        path = self.output_dir / 'corrected.step'
        result = generate_step(ChairParams(seat_angle=40), path, allow_correction=True)
        self.assertEqual(result.status, GenerationStatus.SUCCESS_WITH_CORRECTION)
        self.assertEqual(result.params_used.seat_angle, 15.0)
        self.assertTrue(path.exists())

    def test_05_degenerate_geometry_reported(self):
        result = generate_step(ChairParams(seat_width=4), self.output_dir / 'narrow.step')
        self.assertEqual(result.status, GenerationStatus.FAILED)
        self.assertIn('Geometry construction failed', result.error_message)

    def test_06_generation_log(self):
        failed = generate_step(ChairParams(hand=5), self.output_dir / 'bad_hand.step')
        log_path = self.output_dir / 'generation_log.json'
        save_generation_log([self.result, failed], log_path)
        with open(log_path, 'r', encoding='utf-8') as f:
            log = json.load(f)
        self.assertEqual(log['total'], 2)
        self.assertEqual(log['success'], 1)
        self.assertEqual(log['results'][0]['status'], 'success')
        self.assertTrue(log['results'][0]['is_valid'])
        self.assertIsNotNone(log['results'][1]['error'])

    def test_07_preview_image(self):
        image = plot_scene_views(self.result.scene, self.output_dir / 'previews' / 'default.png')
        self.assertTrue(image.exists())
        self.assertGreater(image.stat().st_size, 0)


class TestBatchGenerate(unittest.TestCase):
    def test_01_one_file_per_chair(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_dir = Path(tmpdir) / 'batch'
            results = batch_generate(
                [('good', DEFAULT_PARAMS), ('bad', ChairParams(recline_angle=-5))],
                output_dir,
            )
            self.assertEqual([r.status for r in results],
                             [GenerationStatus.SUCCESS, GenerationStatus.FAILED])
            self.assertTrue((output_dir / 'good.step').exists())
            self.assertFalse((output_dir / 'bad.step').exists())


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.tmpdir.name) / 'config.yaml'
        self.output_dir = Path(self.tmpdir.name) / 'output'

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_01_defaults(self):
        args = parse_args([])
        self.assertFalse(args.init_config)
        self.assertFalse(args.edit)
        self.assertIsNone(args.random)
        self.assertEqual(args.output_dir, Path('output'))
        self.assertFalse(args.clamp)

    def test_02_modes_exclusive(self):
        with self.assertRaises(SystemExit):
            parse_args(['-i', '-e'])

    def test_03_init_then_edit(self):
        self.assertEqual(main(['-i', '--config', str(self.config_path)]), 0)
        self.assertTrue(self.config_path.exists())

        code = main(['-e', '--config', str(self.config_path),
                     '--output-dir', str(self.output_dir)])
        self.assertEqual(code, 0)
        self.assertTrue((self.output_dir / 'default.step').exists())
        self.assertTrue((self.output_dir / 'generation_log.json').exists())

    def test_04_edit_without_config(self):
        self.assertEqual(main(['-e', '--config', str(self.config_path)]), 1)

    def test_05_random_needs_positive_count(self):
        self.assertEqual(main(['--random', '0', '--config', str(self.config_path)]), 1)

    def test_06_unknown_chair_name(self):
        main(['-i', '--config', str(self.config_path)])
        code = main(['--chair', 'missing', '--config', str(self.config_path),
                     '--output-dir', str(self.output_dir)])
        self.assertEqual(code, 1)
        self.assertFalse(self.output_dir.exists())


if __name__ == '__main__':
    unittest.main()
