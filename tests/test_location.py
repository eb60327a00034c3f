import unittest

import numpy as np

from nine_mens_morris.errors import InvalidLocationError, LocationErrorReason
from nine_mens_morris.location import VALID_LOCATIONS, Location, is_adjacent, is_valid


class TestValidLocations(unittest.TestCase):
    def test_mask_has_24_intersections(self):
        self.assertEqual(int(np.count_nonzero(VALID_LOCATIONS)), 24)

    def test_centre_is_not_an_intersection(self):
        self.assertFalse(VALID_LOCATIONS[3, 3])
        self.assertFalse(is_valid(3, 3))

    def test_mask_is_read_only(self):
        with self.assertRaises(ValueError):
            VALID_LOCATIONS[0, 1] = True

    def test_is_valid_out_of_bounds(self):
        self.assertFalse(is_valid(-1, 0))
        self.assertFalse(is_valid(0, 7))
        self.assertTrue(is_valid(6, 6))

    def test_all_yields_each_intersection_once(self):
        locations = list(Location.all())
        self.assertEqual(len(locations), 24)
        self.assertEqual(len(set(locations)), 24)
        self.assertEqual([str(loc) for loc in locations[:3]], ["a1", "d1", "g1"])


class TestLocationParsing(unittest.TestCase):
    def test_valid_location(self):
        loc = Location.from_string("d7")
        self.assertEqual(loc.x, 3)
        self.assertEqual(loc.y, 6)

    def test_corners(self):
        self.assertEqual(Location.from_string("a1"), Location(0, 0))
        self.assertEqual(Location.from_string("g7"), Location(6, 6))

    def test_round_trip_text(self):
        self.assertEqual(str(Location.from_string("e4")), "e4")

    def test_malformed_length(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("abc123")
        self.assertEqual(ctx.exception.reason, LocationErrorReason.MALFORMED)

    def test_empty_string(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("")
        self.assertEqual(ctx.exception.reason, LocationErrorReason.MALFORMED)

    def test_swapped_format(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("7g")
        self.assertEqual(ctx.exception.reason, LocationErrorReason.OUT_OF_RANGE)

    def test_out_of_bounds(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("h9")
        self.assertEqual(ctx.exception.reason, LocationErrorReason.OUT_OF_RANGE)

    def test_uppercase_column_rejected(self):
        with self.assertRaises(InvalidLocationError):
            Location.from_string("A1")

    def test_non_intersection(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("a2")
        self.assertEqual(
            ctx.exception.reason, LocationErrorReason.NOT_AN_INTERSECTION
        )

    def test_centre_rejected(self):
        with self.assertRaises(InvalidLocationError) as ctx:
            Location.from_string("d4")
        self.assertEqual(
            ctx.exception.reason, LocationErrorReason.NOT_AN_INTERSECTION
        )

    def test_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Location.from_string("zz")

    def test_coordinates_validated(self):
        with self.assertRaises(InvalidLocationError):
            Location(1, 0)
        with self.assertRaises(InvalidLocationError):
            Location(7, 0)

    def test_equality_and_hash(self):
        a = Location.from_string("b2")
        b = Location(1, 1)
        self.assertEqual(a, b)
        self.assertEqual(len({a, b}), 1)


class TestAdjacency(unittest.TestCase):
    def loc(self, text):
        return Location.from_string(text)

    def test_outer_ring_neighbours(self):
        self.assertTrue(is_adjacent(self.loc("a1"), self.loc("d1")))
        self.assertTrue(is_adjacent(self.loc("a1"), self.loc("a4")))
        self.assertFalse(is_adjacent(self.loc("a1"), self.loc("g1")))

    def test_spokes_connect_rings(self):
        self.assertTrue(is_adjacent(self.loc("d1"), self.loc("d2")))
        self.assertTrue(is_adjacent(self.loc("d2"), self.loc("d3")))
        self.assertFalse(is_adjacent(self.loc("d1"), self.loc("d3")))

    def test_corners_are_not_joined_diagonally(self):
        self.assertFalse(is_adjacent(self.loc("a1"), self.loc("b2")))

    def test_no_adjacency_through_centre(self):
        self.assertFalse(is_adjacent(self.loc("c4"), self.loc("e4")))
        self.assertFalse(is_adjacent(self.loc("d3"), self.loc("d5")))

    def test_not_adjacent_to_itself(self):
        self.assertFalse(is_adjacent(self.loc("d2"), self.loc("d2")))

    def test_symmetric_for_all_pairs(self):
        locations = list(Location.all())
        for a in locations:
            for b in locations:
                self.assertEqual(is_adjacent(a, b), is_adjacent(b, a), f"{a} {b}")

    def test_every_intersection_has_two_to_four_neighbours(self):
        locations = list(Location.all())
        total = 0
        for a in locations:
            count = sum(1 for b in locations if is_adjacent(a, b))
            self.assertIn(count, (2, 3, 4), str(a))
            total += count
        # 32 lines on the board, each counted from both ends
        self.assertEqual(total, 64)


if __name__ == "__main__":
    unittest.main()
