import unittest
from types import SimpleNamespace
from unittest import mock

from geopy.exc import GeocoderServiceError, GeocoderTimedOut

from stampwalk import geocode
from stampwalk.models import Coordinate


class TestGeocodePlace(unittest.TestCase):
    def setUp(self):
        geocode.geocode_place.cache_clear()
        self.geocoder = mock.Mock()
        patcher = mock.patch.object(geocode, "_get_geocoder", return_value=self.geocoder)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_found(self):
        self.geocoder.geocode.return_value = SimpleNamespace(latitude=33.16, longitude=130.40)
        self.assertEqual(geocode.geocode_place("Yanagawa"), Coordinate(33.16, 130.40))

    def test_not_found(self):
        self.geocoder.geocode.return_value = None
        self.assertIsNone(geocode.geocode_place("nowhere at all"))

    def test_blank_query(self):
        self.assertIsNone(geocode.geocode_place("   "))
        self.geocoder.geocode.assert_not_called()

    def test_retries_once_after_timeout(self):
        self.geocoder.geocode.side_effect = [
            GeocoderTimedOut(),
            SimpleNamespace(latitude=1.0, longitude=2.0),
        ]
        self.assertEqual(geocode.geocode_place("slow"), Coordinate(1.0, 2.0))
        self.assertEqual(self.geocoder.geocode.call_count, 2)

    def test_service_error(self):
        self.geocoder.geocode.side_effect = GeocoderServiceError("down")
        with self.assertLogs("stampwalk.geocode", level="WARNING"):
            self.assertIsNone(geocode.geocode_place("anywhere"))


if __name__ == "__main__":
    unittest.main()
