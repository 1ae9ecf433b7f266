# Keeps track of the locations used for the travel times calculation.

import json
from dataclasses import asdict

from api_structures import Location


class LocationRegistry:
    """
    Ordered collection of locations. Ids are handed out by a counter that only
    ever goes up, so an id is never reused, not even after clear().
    """

    def __init__(self):
        self._locations: list[Location] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._locations)

    def add(self, lat: float = 0, lng: float = 0) -> int:
        location_id = self._next_id
        self._next_id += 1
        self._locations.append(Location(id=location_id, lat=lat, lng=lng))
        return location_id

    def add_from_geocode(self, lat: float, lng: float) -> int:
        """Adds the coordinates of a successful geocode result."""
        return self.add(lat, lng)

    def remove(self, location_id: int) -> None:
        for index, loc in enumerate(self._locations):
            if loc.id == location_id:
                del self._locations[index]
                return

    def update(self, location_id: int, lat: float, lng: float) -> None:
        for index, loc in enumerate(self._locations):
            if loc.id == location_id:
                self._locations[index] = Location(id=loc.id, lat=lat, lng=lng)
                return

    def clear(self) -> None:
        self._locations = []

    def list(self) -> list[Location]:
        return list(self._locations)

    def to_json(self) -> str:
        return json.dumps([asdict(loc) for loc in self._locations])
