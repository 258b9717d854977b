from __future__ import annotations

import unittest

import numpy as np

from scatter_simplify import SimplifyConfigError, disk_mask


class DiskMaskTests(unittest.TestCase):
    def test_zero_radius_is_single_pixel(self) -> None:
        mask = disk_mask(0)
        self.assertEqual(mask.offsets(), [(0, 0)])
        self.assertEqual(mask.reach, 0)

    def test_unit_radius_is_plus_shape(self) -> None:
        mask = disk_mask(1.0)
        self.assertEqual(mask.offsets(), [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)])

    def test_fractional_radius_below_one_keeps_only_center(self) -> None:
        mask = disk_mask(0.5)
        self.assertEqual(mask.offsets(), [(0, 0)])
        self.assertEqual(mask.reach, 1)

    def test_radius_covers_diagonals_when_large_enough(self) -> None:
        self.assertEqual(disk_mask(1.5).size, 9)

    def test_default_marker_footprint_size(self) -> None:
        mask = disk_mask(4.5)
        self.assertEqual(mask.size, 69)
        self.assertTrue(np.all(mask.dx**2 + mask.dy**2 <= 4.5**2))

    def test_mask_is_symmetric(self) -> None:
        offsets = set(disk_mask(3.2).offsets())
        self.assertEqual(offsets, {(-dx, dy) for dx, dy in offsets})
        self.assertEqual(offsets, {(dy, dx) for dx, dy in offsets})

    def test_mask_is_deterministic(self) -> None:
        self.assertEqual(disk_mask(2.7).offsets(), disk_mask(2.7).offsets())

    def test_invalid_radius_rejected(self) -> None:
        for radius in (-1.0, float("nan"), float("inf")):
            with self.assertRaises(SimplifyConfigError):
                disk_mask(radius)


if __name__ == "__main__":
    unittest.main()
