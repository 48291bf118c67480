import random
import unittest

from stampwalk.ledger import StampLedger
from stampwalk.models import Category, Coordinate, PointOfInterest
from stampwalk.planner import RouteConstraints, generate_plans


class TestSimulation(unittest.TestCase):
    def test_random_cases(self):
        # Run a handful of random sessions near the town centre to verify
        # that planning and collection hold together end-to-end.
        rng = random.Random(1234)
        categories = list(Category)
        for _ in range(10):
            n = rng.randint(3, 15)
            points = []
            for i in range(n):
                lat = 33.58 + rng.random() * 0.03
                lon = 130.39 + rng.random() * 0.03
                stamps = rng.choice([None, 0, 1, 2, 3])
                points.append(PointOfInterest(f"p{i}", f"Spot {i}", Coordinate(lat, lon), rng.choice(categories), stamp_value=stamps))
            user = Coordinate(33.58 + rng.random() * 0.03, 130.39 + rng.random() * 0.03)
            plans = generate_plans(points, user, RouteConstraints(max_time_minutes=rng.randint(30, 300)))
            # the exhaustive plan is always offered
            self.assertTrue(any(p.theme == "everything" for p in plans))
            ids = {p.id for p in points}
            for plan in plans:
                stop_ids = [s.id for s in plan.ordered_stops]
                self.assertEqual(len(stop_ids), len(set(stop_ids)))
                self.assertTrue(set(stop_ids) <= ids)
            self.assertEqual([p.estimated_minutes for p in plans], sorted(p.estimated_minutes for p in plans))

            ledger = StampLedger()
            for point in points * 2:
                ledger.collect(point, point.coordinate)
            collectible = [p for p in points if p.stamp_value]
            self.assertEqual(len(ledger), len(collectible))
            self.assertEqual(ledger.total_stamps, sum(p.stamp_value for p in collectible))


if __name__ == "__main__":
    unittest.main()
