import threading
import unittest
from datetime import datetime

from stampwalk.ledger import CollectionError, StampLedger, collect_stamp
from stampwalk.models import Category, Coordinate, PointOfInterest

METERS_PER_DEGREE = 111_194.92664455873


def north_of(coord, meters):
    return Coordinate(coord.latitude + meters / METERS_PER_DEGREE, coord.longitude)


SHRINE = PointOfInterest("shrine", "Shrine", Coordinate(0.0, 0.0), Category.SHRINE, stamp_value=1)
DECK = PointOfInterest("deck", "Deck", Coordinate(0.01, 0.0), Category.VIEWPOINT, stamp_value=3)
CAFE = PointOfInterest("cafe", "Cafe", Coordinate(0.02, 0.0), Category.CAFE, stamp_value=1, has_coupon=True)
STORE = PointOfInterest("store", "Store", Coordinate(0.03, 0.0), Category.CONVENIENCE)


class TestCollectStamp(unittest.TestCase):
    def setUp(self):
        self.now = datetime(2024, 1, 1, 10, 30)
        self.ledger = StampLedger(clock=lambda: self.now)

    def test_too_far(self):
        result = collect_stamp(SHRINE, north_of(SHRINE.coordinate, 100), self.ledger)
        self.assertFalse(result.ok)
        self.assertEqual(result.error, CollectionError.TOO_FAR)
        self.assertAlmostEqual(result.distance_m, 100, delta=0.5)
        self.assertEqual(len(self.ledger), 0)
        self.assertEqual(self.ledger.total_stamps, 0)

    def test_collect_then_already_collected(self):
        user = north_of(SHRINE.coordinate, 10)
        first = collect_stamp(SHRINE, user, self.ledger)
        self.assertTrue(first.ok)
        self.assertIsNone(first.error)
        self.assertEqual(first.entry.point_id, "shrine")
        self.assertEqual(first.entry.stamp_value, 1)
        self.assertEqual(first.entry.collected_at, self.now)
        self.assertEqual(self.ledger.total_stamps, 1)

        second = collect_stamp(SHRINE, user, self.ledger)
        self.assertFalse(second.ok)
        self.assertEqual(second.error, CollectionError.ALREADY_COLLECTED)
        self.assertEqual(len(self.ledger), 1)
        self.assertEqual(self.ledger.total_stamps, 1)

    def test_not_collectible(self):
        result = self.ledger.collect(STORE, STORE.coordinate)
        self.assertEqual(result.error, CollectionError.NOT_COLLECTIBLE)
        zero = PointOfInterest("zero", "Zero", Coordinate(0, 0), Category.NATURE, stamp_value=0)
        self.assertEqual(self.ledger.collect(zero, zero.coordinate).error, CollectionError.NOT_COLLECTIBLE)

    def test_checks_run_in_order(self):
        # no stamp beats a missing location
        self.assertEqual(self.ledger.collect(STORE, None).error, CollectionError.NOT_COLLECTIBLE)
        self.assertEqual(self.ledger.collect(SHRINE, None).error, CollectionError.LOCATION_UNAVAILABLE)
        self.ledger.collect(SHRINE, SHRINE.coordinate)
        # already collected beats a missing location
        self.assertEqual(self.ledger.collect(SHRINE, None).error, CollectionError.ALREADY_COLLECTED)

    def test_boundary_radius(self):
        self.assertTrue(self.ledger.collect(SHRINE, north_of(SHRINE.coordinate, 49.9)).ok)
        self.assertEqual(
            self.ledger.collect(DECK, north_of(DECK.coordinate, 51)).error, CollectionError.TOO_FAR
        )
        self.assertTrue(self.ledger.collect(DECK, north_of(DECK.coordinate, 51), radius_m=60).ok)

    def test_total_is_sum_of_entries(self):
        for point in (SHRINE, DECK, CAFE):
            self.ledger.collect(point, point.coordinate)
            self.assertEqual(self.ledger.total_stamps, sum(e.stamp_value for e in self.ledger.entries))
        self.assertEqual(self.ledger.total_stamps, 5)
        self.assertEqual([e.point_id for e in self.ledger.entries], ["shrine", "deck", "cafe"])
        self.assertIn("deck", self.ledger)
        self.assertEqual(self.ledger.get("deck").stamp_value, 3)

    def test_progress_and_coupons(self):
        catalog = [SHRINE, DECK, CAFE, STORE]
        self.assertEqual(self.ledger.progress(12), 0.0)
        self.assertEqual(self.ledger.coupon_count(catalog), 0)
        self.ledger.collect(DECK, DECK.coordinate)
        self.ledger.collect(CAFE, CAFE.coordinate)
        self.assertAlmostEqual(self.ledger.progress(12), 4 / 12)
        self.assertEqual(self.ledger.progress(2), 1.0)
        self.assertEqual(self.ledger.progress(0), 0.0)
        self.assertEqual(self.ledger.coupon_count(catalog), 1)

    def test_clear(self):
        self.ledger.collect(SHRINE, SHRINE.coordinate)
        self.ledger.clear()
        self.assertEqual(len(self.ledger), 0)
        self.assertEqual(self.ledger.total_stamps, 0)

    def test_concurrent_collection_records_once(self):
        results = []

        def worker():
            results.append(self.ledger.collect(DECK, DECK.coordinate))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(sum(1 for r in results if r.ok), 1)
        self.assertEqual(len(self.ledger), 1)
        self.assertEqual(self.ledger.total_stamps, 3)


if __name__ == "__main__":
    unittest.main()
