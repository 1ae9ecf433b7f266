# Defines the standardized, internal data structures for the application.

from dataclasses import dataclass


@dataclass
class Address:
    """A free-text postal address, as entered in the geocoding form."""
    street: str = ''
    postalcode: str = ''
    city: str = ''
    state: str = ''
    country: str = ''


# The example address the form starts out with.
DEFAULT_ADDRESS = Address(
    street='Leidseplein 2',
    postalcode='1017 PT',
    city='Amsterdam',
    state='Noord-Holland',
    country='Netherlands',
)


@dataclass(frozen=True)
class Location:
    """A coordinate pair tracked by id, used as both origin and destination."""
    id: int
    lat: float
    lng: float

    def as_coordinate(self) -> str:
        """Renders "lat,lng"; whole numbers drop the trailing ".0" (0.0 becomes "0")."""
        return f"{_format_number(self.lat)},{_format_number(self.lng)}"


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class DistanceResult:
    """One origin/destination pair of a travel times calculation, ready for display."""
    id: int
    status: str
    from_coordinate: str
    from_address: str
    to_coordinate: str
    to_address: str
    duration: str
    distance: str
