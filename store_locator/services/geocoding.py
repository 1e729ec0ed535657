"""Google Geocoding API client.

Addresses are qualified with the deployment country before lookup so that
short street names resolve locally. Only the first candidate is used and
nothing is retried.
"""
from typing import NamedTuple, Optional
from urllib.parse import quote

import requests
from fastapi.concurrency import run_in_threadpool

from store_locator.core.config import settings
from store_locator.exception import ConfigurationError, GeocodingError, NoMatchError
from store_locator.logger import logging

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

STATUS_MESSAGES = {
    "ZERO_RESULTS": "Zero results",
    "OVER_QUERY_LIMIT": "Over query limit",
    "REQUEST_DENIED": "Request denied",
    "INVALID_REQUEST": "Invalid request",
}


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


def google_maps_search_url(address: str) -> str:
    return MAPS_SEARCH_URL + quote(address or "", safe="")


class GeocodingClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        country: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GOOGLE_MAPS_API_KEY
        self.country = country if country is not None else settings.GEOCODING_COUNTRY
        self.base_url = base_url or settings.GEOCODING_URL
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT
        self.http = http or requests.Session()

    def qualify(self, address: str) -> str:
        if not self.country:
            return address
        return f"{address}, {self.country}"

    async def resolve(self, address: str) -> Coordinates:
        # no request is issued without a key
        if not self.api_key:
            raise ConfigurationError("Missing Google Maps API key")
        return await run_in_threadpool(self._resolve, self.qualify(address))

    def _resolve(self, formatted_address: str) -> Coordinates:
        params = {"address": formatted_address, "key": self.api_key}
        try:
            response = self.http.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logging.error(f"Geocoding request failed for '{formatted_address}': {e}")
            raise GeocodingError("Failed to geocode address", detail=str(e))

        if not isinstance(data, dict):
            logging.error(f"Unexpected geocoding payload for '{formatted_address}': {data!r}")
            raise GeocodingError("Failed to geocode address", detail="Parse error")

        status = data.get("status")
        results = data.get("results") or []
        logging.debug(f"Geocode status {status} with {len(results)} result(s) for '{formatted_address}'")

        if status != "OK" or not results:
            reason = STATUS_MESSAGES.get(status, status or "Empty results")
            raise NoMatchError("Could not find coordinates for this address", detail=reason)

        try:
            location = results[0]["geometry"]["location"]
            coords = Coordinates(latitude=float(location["lat"]), longitude=float(location["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            logging.error(f"Unexpected geocoding payload for '{formatted_address}': {e}")
            raise GeocodingError("Failed to geocode address", detail="Parse error")

        logging.info(f"Geocoded '{formatted_address}' to {coords.latitude}, {coords.longitude}")
        return coords
