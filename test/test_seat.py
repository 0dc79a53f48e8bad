import math
import unittest
import logging

from powerchair.geometry import DegenerateGeometryError, to_length
from powerchair.params import DEFAULT_PARAMS, ChairParams, Hand, derive_dimensions
from powerchair.seat import (
    assemble_chair,
    build_arm_rests,
    build_controls,
    build_cushion,
    build_leg_rest,
    build_seat_back,
    build_seat_frame,
    seat_pivot_offsets,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("TestSeat")


class TestSeatParts(unittest.TestCase):
    def setUp(self):
        self.params = DEFAULT_PARAMS
        self.dims = derive_dimensions(self.params)

    def test_01_cushion_size(self):
        """Cushion is seat_width wide at the front and seat_depth deep."""
        bbox = build_cushion(self.params, self.dims).bounding_box(optimal=True)
        self.assertAlmostEqual(bbox.size.X, to_length(16), delta=0.05)
        self.assertAlmostEqual(bbox.size.Y, to_length(16), delta=0.05)
        self.assertAlmostEqual(bbox.size.Z, to_length(4), delta=0.05)
        self.assertAlmostEqual(bbox.min.Z, 0, delta=0.05)

    def test_02_cushion_tapers_to_back(self):
        cushion = build_cushion(self.params, self.dims)
        trapezoid = to_length(16) * (to_length(16) + to_length(14)) / 2 * to_length(4)
        self.assertLess(cushion.volume, trapezoid)
        self.assertGreater(cushion.volume, to_length(14) * to_length(16) * to_length(4) * 0.9)

    def test_03_cushion_grows_with_seat_width(self):
        wider = ChairParams(seat_width=18)
        narrow_box = build_cushion(self.params, self.dims).bounding_box(optimal=True)
        wide_box = build_cushion(wider, derive_dimensions(wider)).bounding_box(optimal=True)
        self.assertGreater(wide_box.size.X, narrow_box.size.X)
        self.assertGreater(wide_box.size.Y, narrow_box.size.Y)

    def test_04_seat_back_outline(self):
        """Widest at a quarter height, rounded corners past both ends."""
        bbox = build_seat_back(self.params, self.dims).bounding_box(optimal=True)
        self.assertAlmostEqual(bbox.size.X, to_length(14), delta=0.05)
        self.assertAlmostEqual(bbox.min.Y, -to_length(1), delta=0.05)
        self.assertAlmostEqual(bbox.max.Y, to_length(21), delta=0.05)

    def test_05_seat_back_too_narrow(self):
        params = ChairParams(seat_width=4)
        with self.assertRaises(DegenerateGeometryError):
            build_seat_back(params, derive_dimensions(params))

    def test_06_seat_frame(self):
        bbox = build_seat_frame(self.params, self.dims).bounding_box(optimal=True)
        self.assertAlmostEqual(bbox.size.X, to_length(16 + 3), delta=0.05)
        self.assertAlmostEqual(bbox.min.Z, -to_length(0.75), delta=0.05)
        self.assertAlmostEqual(bbox.max.Z, to_length(self.dims.arm_rest_height), delta=0.05)


class TestHandedness(unittest.TestCase):
    def test_01_controls_follow_hand(self):
        right = build_controls(ChairParams(hand=Hand.R)).bounding_box(optimal=True)
        left = build_controls(ChairParams(hand=Hand.L)).bounding_box(optimal=True)
        self.assertGreater(right.min.X, to_length(8) - 0.05)
        self.assertLess(left.max.X, -to_length(8) + 0.05)
        self.assertAlmostEqual(right.center().X, -left.center().X, delta=0.05)

    def test_02_joystick_on_one_arm_rest_only(self):
        """The tallest solid of the arm rests is the control side."""
        for hand, sign in ((Hand.R, 1), (Hand.L, -1)):
            with self.subTest(hand=hand):
                params = ChairParams(hand=hand)
                arm_rests = build_arm_rests(params, derive_dimensions(params))
                tallest = max(arm_rests.solids(),
                              key=lambda s: s.bounding_box(optimal=True).max.Z)
                center_x = tallest.bounding_box(optimal=True).center().X
                logger.info(f"hand={hand.name}: control side x={center_x:.1f}mm")
                self.assertGreater(center_x * sign, 0)


class TestChairAssembly(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.chair = assemble_chair(DEFAULT_PARAMS)

    def test_01_pivot_offsets(self):
        dims = derive_dimensions(DEFAULT_PARAMS)
        y_offset, z_offset = seat_pivot_offsets(DEFAULT_PARAMS, dims)
        expected_y = to_length(8) - 100 + 100 * math.tan(math.radians(2.5))
        self.assertAlmostEqual(y_offset, expected_y)
        self.assertAlmostEqual(z_offset, -(100 + to_length(4)))

    def test_02_level_seat_height(self):
        """With no seat angle the frame underside sits frame_size below seat height."""
        bbox = self.chair.bounding_box(optimal=True)
        self.assertAlmostEqual(bbox.min.Z, to_length(20 - 1.5), delta=0.05)

    def test_03_symmetric_apart_from_controls(self):
        bbox = self.chair.bounding_box(optimal=True)
        # Arm rests are mirrored, the control panel is no wider than an arm rest
        self.assertAlmostEqual(bbox.min.X, -bbox.max.X, delta=0.05)

    def test_04_seat_angle_changes_pose(self):
        tilted = assemble_chair(DEFAULT_PARAMS.with_changes(seat_angle=10))
        level_box = self.chair.bounding_box(optimal=True)
        tilted_box = tilted.bounding_box(optimal=True)
        self.assertNotAlmostEqual(level_box.min.Z, tilted_box.min.Z, delta=1.0)
        self.assertAlmostEqual(level_box.size.X, tilted_box.size.X, delta=0.05)

    def test_05_taller_back(self):
        taller = assemble_chair(DEFAULT_PARAMS.with_changes(seat_back_height=24))
        self.assertGreater(taller.bounding_box(optimal=True).max.Z,
                           self.chair.bounding_box(optimal=True).max.Z)


class TestLegRest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.params = ChairParams(leg_rest=1, leg_rest_angle=0)
        cls.dims = derive_dimensions(cls.params)
        cls.leg_rest = build_leg_rest(cls.params, cls.dims)
        cls.chair = assemble_chair(cls.params)
        cls.bare_chair = assemble_chair(cls.params.with_changes(leg_rest=0))

    def test_01_plate_starts_at_cushion_front(self):
        """The 10.5in footplate reaches forward from the cushion front edge."""
        bare = self.bare_chair.bounding_box(optimal=True)
        with_rest = self.chair.bounding_box(optimal=True)
        logger.info(f"cushion front y={bare.max.Y / 25.4:.2f}in, "
                    f"footplate front y={with_rest.max.Y / 25.4:.2f}in")
        self.assertAlmostEqual(bare.max.Y, to_length(16), delta=0.05)
        self.assertAlmostEqual(with_rest.max.Y, to_length(16 + 10.5), delta=0.05)

    def test_02_hanger_ends_in_front_crossbar(self):
        """Fusing the leg rest removes the hanger tip buried in the crossbar."""
        overlap = to_length(1.5) ** 2 * to_length(0.75)
        fused_away = self.bare_chair.volume + self.leg_rest.volume - self.chair.volume
        self.assertAlmostEqual(fused_away, overlap, delta=overlap * 0.01)

    def test_03_plate_at_ground_clearance(self):
        bbox = self.chair.bounding_box(optimal=True)
        self.assertAlmostEqual(bbox.min.Z, to_length(3), delta=0.05)
        local = self.leg_rest.bounding_box(optimal=True)
        self.assertAlmostEqual(local.max.Z, -to_length(0.75), delta=0.05)
        self.assertAlmostEqual(local.min.Y, to_length(16 * 0.8 - 9.5 - 0.75), delta=0.05)

    def test_04_angle_tilts_plate(self):
        tilted = build_leg_rest(self.params.with_changes(leg_rest_angle=15), self.dims)
        self.assertLess(tilted.bounding_box(optimal=True).max.Y,
                        self.leg_rest.bounding_box(optimal=True).max.Y)
    def test_05_narrow_seat_fails_fast(self):
        params = ChairParams(seat_width=5, leg_rest=1)
        with self.assertRaises(DegenerateGeometryError):
            build_leg_rest(params, derive_dimensions(params))


if __name__ == '__main__':
    unittest.main()
