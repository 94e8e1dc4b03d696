import math
import unittest

from region_utils.regions.bounds import Bounds, clean_coordinates, compute_bounds, iter_positions


class TestComputeBounds(unittest.TestCase):
    def test_polygon_bounds(self):
        coords = [[(-118.5, 34.0), (-118.0, 34.0), (-118.0, 34.2), (-118.5, 34.2), (-118.5, 34.0)]]
        self.assertEqual(compute_bounds(coords), Bounds(-118.5, 34.0, -118.0, 34.2))

    def test_multipolygon_bounds(self):
        coords = [
            [[(0, 0), (1, 0), (1, 1), (0, 0)]],
            [[(5, -3), (6, -3), (6, 2), (5, -3)]],
        ]
        self.assertEqual(compute_bounds(coords), Bounds(0, -3, 6, 2))

    def test_nan_pair_is_ignored(self):
        self.assertEqual(compute_bounds([[math.nan, 34.0], [-118.0, 35.0]]), Bounds(-118.0, 35.0, -118.0, 35.0))

    def test_non_numeric_components_are_ignored(self):
        coords = [[("a", 1.0), (2.0, None), (True, 3.0), (4.0, 5.0)]]
        self.assertEqual(compute_bounds(coords), Bounds(4.0, 5.0, 4.0, 5.0))

    def test_all_invalid_returns_none(self):
        self.assertIsNone(compute_bounds([[math.nan, math.nan], ["x", 1.0]]))
        self.assertIsNone(compute_bounds([]))
        self.assertIsNone(compute_bounds(None))

    def test_extra_dimensions_are_ignored(self):
        self.assertEqual(compute_bounds([[(1.0, 2.0, 99.0), (3.0, 4.0, -99.0)]]), Bounds(1.0, 2.0, 3.0, 4.0))

    def test_iter_positions_flattens_rings(self):
        coords = [[[(0, 0), (1, 1)]], [[(2, 2)]]]
        self.assertEqual(list(iter_positions(coords)), [(0, 0), (1, 1), (2, 2)])


class TestCleanCoordinates(unittest.TestCase):
    def test_drops_invalid_positions_and_empty_parts(self):
        coords = [
            [[[0.0, 0.0], [math.nan, 1.0], [1.0, None], [1.0, 1.0]]],
            [[[None, None]]],
        ]
        self.assertEqual(clean_coordinates(coords), [[[[0.0, 0.0], [1.0, 1.0]]]])

    def test_non_sequence_is_empty(self):
        self.assertEqual(clean_coordinates(None), [])


class TestBoundsUnion(unittest.TestCase):
    def test_union_is_componentwise(self):
        a = Bounds(-118.4, 34.0, -118.3, 34.1)
        b = Bounds(-118.45, 34.05, -118.35, 34.2)
        self.assertEqual(a.union(b), Bounds(-118.45, 34.0, -118.3, 34.2))
        self.assertEqual(a.union(b), b.union(a))


if __name__ == "__main__":
    unittest.main()
