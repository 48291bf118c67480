import json
import os
import tempfile
import unittest

from stampwalk.catalog import CatalogError, find_point, load_catalog, parse_catalog
from stampwalk.models import Category


class TestCatalog(unittest.TestCase):
    def test_bundled_catalog(self):
        catalog = load_catalog()
        self.assertEqual(len(catalog), 9)
        self.assertEqual(catalog[0].id, "hankyou-shrine")
        shrine = find_point(catalog, "hankyou-shrine")
        self.assertEqual(shrine.category, Category.SHRINE)
        self.assertEqual(shrine.stamp_value, 1)
        store = find_point(catalog, "seven-eleven")
        self.assertIsNone(store.stamp_value)
        self.assertFalse(store.is_collectible)
        self.assertTrue(find_point(catalog, "kominka-cafe").has_coupon)
        self.assertIsNone(find_point(catalog, "missing"))

    def test_load_from_path(self):
        records = [{"id": "x", "name": "X", "lat": 1.0, "lng": 2.0, "category": "nature", "stamps": 2}]
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "spots.json")
            with open(path, "w", encoding="utf-8") as fh:
                json.dump(records, fh)
            catalog = load_catalog(path)
        self.assertEqual(len(catalog), 1)
        self.assertEqual(catalog[0].coordinate.as_tuple(), (1.0, 2.0))
        self.assertEqual(catalog[0].description, "")

    def test_rejects_bad_records(self):
        base = {"id": "x", "name": "X", "lat": 1.0, "lng": 2.0, "category": "nature"}
        with self.assertRaises(CatalogError):
            parse_catalog([{k: v for k, v in base.items() if k != "lat"}])
        with self.assertRaises(CatalogError):
            parse_catalog([dict(base, category="museum")])
        with self.assertRaises(CatalogError):
            parse_catalog([dict(base, lat=123.0)])
        with self.assertRaises(CatalogError):
            parse_catalog([dict(base, stamps=-1)])
        for stamps in (1.5, True, "2"):
            with self.assertRaises(CatalogError):
                parse_catalog([dict(base, stamps=stamps)])
        with self.assertRaises(CatalogError):
            parse_catalog([base, dict(base)])


if __name__ == "__main__":
    unittest.main()
