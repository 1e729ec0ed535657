"""
Tests for the Google geocoding client with a mocked HTTP session.
"""
import unittest
from unittest.mock import MagicMock

import requests

from store_locator.exception import ConfigurationError, GeocodingError, NoMatchError
from store_locator.services import Coordinates, GeocodingClient, google_maps_search_url


def response_with(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


OK_PAYLOAD = {
    "status": "OK",
    "results": [
        {"geometry": {"location": {"lat": -1.29, "lng": 36.82}}},
        {"geometry": {"location": {"lat": 0.5, "lng": 35.0}}},
    ],
}


class TestGeocodingClient(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.http = MagicMock()
        self.client = GeocodingClient(
            api_key="test-key",
            country="Kenya",
            base_url="https://geocode.example/json",
            timeout=5,
            http=self.http,
        )

    async def test_resolve_uses_first_candidate(self):
        self.http.get.return_value = response_with(OK_PAYLOAD)

        coords = await self.client.resolve("123 Main St")

        self.assertEqual(coords, Coordinates(latitude=-1.29, longitude=36.82))
        self.http.get.assert_called_once_with(
            "https://geocode.example/json",
            params={"address": "123 Main St, Kenya", "key": "test-key"},
            timeout=5,
        )

    async def test_missing_key_makes_no_request(self):
        client = GeocodingClient(api_key="", http=self.http)

        with self.assertRaises(ConfigurationError):
            await client.resolve("123 Main St")
        self.http.get.assert_not_called()

    async def test_zero_results(self):
        self.http.get.return_value = response_with({"status": "ZERO_RESULTS", "results": []})

        with self.assertRaises(NoMatchError) as ctx:
            await self.client.resolve("Nowhere")
        self.assertEqual(ctx.exception.detail, "Zero results")

    async def test_ok_status_without_results(self):
        self.http.get.return_value = response_with({"status": "OK", "results": []})

        with self.assertRaises(NoMatchError):
            await self.client.resolve("Nowhere")

    async def test_denied_request(self):
        self.http.get.return_value = response_with({"status": "REQUEST_DENIED"})

        with self.assertRaises(NoMatchError):
            await self.client.resolve("123 Main St")

    async def test_network_failure_is_not_a_no_match(self):
        self.http.get.side_effect = requests.ConnectionError("offline")

        with self.assertRaises(GeocodingError) as ctx:
            await self.client.resolve("123 Main St")
        self.assertNotIsInstance(ctx.exception, NoMatchError)
        self.assertEqual(self.http.get.call_count, 1)

    async def test_malformed_candidate(self):
        self.http.get.return_value = response_with({"status": "OK", "results": [{"geometry": {}}]})

        with self.assertRaises(GeocodingError):
            await self.client.resolve("123 Main St")

    async def test_non_object_payload(self):
        for payload in (None, [], ["OK"]):
            with self.subTest(payload=payload):
                self.http.get.return_value = response_with(payload)

                with self.assertRaises(GeocodingError) as ctx:
                    await self.client.resolve("123 Main St")
                self.assertNotIsInstance(ctx.exception, NoMatchError)

    def test_qualify_without_country(self):
        client = GeocodingClient(api_key="k", country="", http=self.http)
        self.assertEqual(client.qualify("Moi Avenue"), "Moi Avenue")

    def test_maps_search_url(self):
        self.assertEqual(
            google_maps_search_url("Sarit Centre, Nairobi"),
            "https://www.google.com/maps/search/?api=1&query=Sarit%20Centre%2C%20Nairobi",
        )


if __name__ == "__main__":
    unittest.main()
