# Contains the adapter classes for communicating with the Google Maps web services.

import json
import logging
import os
from abc import ABC, abstractmethod

import requests
from dotenv import load_dotenv

# --- API Configuration ---
load_dotenv()
REQUEST_TIMEOUT = float(os.getenv("SHOWCASE_TIMEOUT", "30"))

logger = logging.getLogger(__name__)


class ApiAdapter(ABC):
    """
    Abstract Base Class (blueprint) for the mapping API clients.
    Both calls hand back the raw response body; parsing is left to the caller.
    """
    @abstractmethod
    def geocode_address(self, api_key: str, street: str, postalcode: str,
                        city: str, state: str, country: str) -> str:
        """Geocodes an address and returns the raw JSON response."""
        pass

    @abstractmethod
    def get_travel_times(self, api_key: str, locations_json: str) -> str:
        """Calculates travel times between all locations and returns the raw JSON response."""
        pass


class GoogleMapsAdapter(ApiAdapter):
    """The adapter for the Google Geocoding and Distance Matrix APIs."""
    GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout

    def geocode_address(self, api_key: str, street: str, postalcode: str,
                        city: str, state: str, country: str) -> str:
        # Google is fine with empty parts, they are simply left out of the query.
        address = ', '.join(
            part for part in (street, postalcode, city, state, country) if part)
        logger.debug("Geocoding address: '%s'", address)
        params = {
            'address': address,
            'key': api_key
        }
        response = requests.get(
            self.GEOCODING_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def get_travel_times(self, api_key: str, locations_json: str) -> str:
        locations = json.loads(locations_json)
        # The same list is used for both axes, giving a full N x N matrix.
        coordinates = '|'.join(
            f"{loc['lat']},{loc['lng']}" for loc in locations)
        logger.debug("Requesting distance matrix for %d locations",
                     len(locations))
        params = {
            'origins': coordinates,
            'destinations': coordinates,
            'key': api_key
        }
        response = requests.get(
            self.DISTANCE_MATRIX_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.text
