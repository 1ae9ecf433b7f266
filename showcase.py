# Form state and handlers for geocoding addresses and calculating travel times,
# plus an interactive console front end.

import argparse
import json
import logging
import os
from dataclasses import replace
from enum import Enum

import requests
from dotenv import load_dotenv

from api_adapters import ApiAdapter, GoogleMapsAdapter
from api_structures import DEFAULT_ADDRESS, Address, DistanceResult
from key_store import FileKeyStore, KeyStore
from location_registry import LocationRegistry
from notifications import ConsoleNotifier, Notifier, Variant
from result_reshaper import calc_distance_matrix

logger = logging.getLogger(__name__)

API_KEY_NAME = 'GoogleAPIKey'
REMEMBER_DAYS = 365

# Everything that can go wrong between sending a request and reading its result.
CALL_ERRORS = (requests.exceptions.RequestException,
               ValueError, KeyError, IndexError, TypeError, AttributeError)


class Tab(Enum):
    API_KEY = 'apiKey'
    GEOCODE = 'geocode'
    TRAVEL_TIMES = 'travelTimes'


class FormField(Enum):
    STREET = 'street'
    POSTAL_CODE = 'postalcode'
    CITY = 'city'
    STATE = 'state'
    COUNTRY = 'country'
    API_KEY = 'googleapikey'
    REMEMBER_API_KEY = 'rememberAPIKey'


class GoogleApiShowcase:
    """
    The state behind the showcase form: API key, address, active tab,
    the locations to calculate travel times for and the latest results.
    """

    def __init__(self, adapter: ApiAdapter, key_store: KeyStore,
                 notifier: Notifier, api_key: str = ''):
        self.adapter = adapter
        self.key_store = key_store
        self.notifier = notifier

        self.api_key = api_key
        self.remember_api_key = False
        self.address = replace(DEFAULT_ADDRESS)
        self.active_tab = Tab.API_KEY
        self.locations = LocationRegistry()

        # Google API call results
        self.geo_results: str | None = None
        self.matrix_results: str | None = None
        self.distance_matrix: list[DistanceResult] = []

        self._field_handlers = {
            FormField.STREET: self._update_street,
            FormField.POSTAL_CODE: self._update_postalcode,
            FormField.CITY: self._update_city,
            FormField.STATE: self._update_state,
            FormField.COUNTRY: self._update_country,
            FormField.API_KEY: self._update_api_key,
            FormField.REMEMBER_API_KEY: self._update_remember_api_key,
        }

        remembered = self.key_store.get(API_KEY_NAME)
        if remembered:
            self.api_key = remembered
            self.remember_api_key = True

    # --- Form handling ---

    def set_active_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    def update_field(self, field: FormField, value) -> None:
        self._field_handlers[field](value)

    def _update_street(self, value: str) -> None:
        self.address.street = value

    def _update_postalcode(self, value: str) -> None:
        self.address.postalcode = value

    def _update_city(self, value: str) -> None:
        self.address.city = value

    def _update_state(self, value: str) -> None:
        self.address.state = value

    def _update_country(self, value: str) -> None:
        self.address.country = value

    def _update_api_key(self, value: str) -> None:
        self.api_key = value
        if self.remember_api_key:
            self._store_api_key()

    def _update_remember_api_key(self, checked: bool) -> None:
        self.remember_api_key = checked
        if self.remember_api_key:
            self._store_api_key()
        else:
            self._forget_api_key()

    def _store_api_key(self) -> None:
        try:
            self.key_store.set(API_KEY_NAME, self.api_key, REMEMBER_DAYS)
        except OSError as e:
            self._report_failure(e, "Remembering the API key")

    def _forget_api_key(self) -> None:
        try:
            self.key_store.clear(API_KEY_NAME)
        except OSError as e:
            self._report_failure(e, "Forgetting the API key")

    def replace_address(self, address: Address) -> None:
        self.address = replace(address)

    def clear_address(self) -> None:
        self.address = Address()

    # --- Locations ---

    def add_location(self) -> int:
        return self.locations.add()

    def remove_location(self, location_id: int) -> None:
        self.locations.remove(location_id)

    def update_location(self, location_id: int, lat: float, lng: float) -> None:
        self.locations.update(location_id, lat, lng)

    def clear_locations(self) -> None:
        self.locations.clear()

    # --- Google API calls ---

    def validate_api_key(self) -> bool:
        if not self.api_key:
            self.notifier.notify(
                'Error', 'Please provide a valid Google API Key', Variant.ERROR)
            self.active_tab = Tab.API_KEY
            return False
        return True

    def _report_failure(self, error: Exception, action: str = "Google API call") -> None:
        logger.error("%s failed: %s", action, error)
        self.notifier.notify('Error', f"Error:{error}", Variant.ERROR)

    def submit_geocode(self) -> int | None:
        """Geocodes the current address and adds it as a location. Returns the new location id."""
        if not self.validate_api_key():
            return None

        try:
            result = self.adapter.geocode_address(
                self.api_key,
                self.address.street,
                self.address.postalcode,
                self.address.city,
                self.address.state,
                self.address.country,
            )
            self.geo_results = result
            data = json.loads(result)
            if data['status'] != 'OK':
                self.notifier.notify(
                    'Geocoding Results',
                    f"Google API status is not OK: {data['status']}",
                    Variant.ERROR)
                return None
            location = data['results'][0]['geometry']['location']
            lat, lng = location['lat'], location['lng']
        except CALL_ERRORS as e:
            self._report_failure(e)
            return None

        self.notifier.notify(
            'Geocoding Results',
            'Address successfully geocoded and added as location for travel time calculation.',
            Variant.SUCCESS)
        location_id = self.locations.add_from_geocode(lat, lng)
        self.active_tab = Tab.TRAVEL_TIMES
        return location_id

    def submit_travel_times(self) -> list[DistanceResult] | None:
        """Calculates travel times between all locations. Returns the reshaped results."""
        if not self.validate_api_key():
            return None

        # The results are matched against the locations the query was made with.
        queried = self.locations.list()
        try:
            result = self.adapter.get_travel_times(
                self.api_key, self.locations.to_json())
            self.matrix_results = result
            data = json.loads(result)
            # Per-element failures still show up as N/A cells below.
            if data.get('status', 'OK') != 'OK':
                self.notifier.notify(
                    'Travel Times Results',
                    f"Google API status is not OK: {data['status']}",
                    Variant.ERROR)
                return None
            self.distance_matrix = calc_distance_matrix(data, queried)
        except CALL_ERRORS as e:
            self._report_failure(e)
            return None

        self.notifier.notify(
            'Travel Times Results', 'See the results for the details...', Variant.SUCCESS)
        return self.distance_matrix


# --- Console front end ---

MENU = """
[{tab}] Choose an action:
 1. Set Google API key
 2. Toggle remember API key (currently: {remember})
 3. Edit address
 4. Clear address
 5. Geocode address
 6. Add empty location
 7. Edit location
 8. Remove location
 9. Clear locations
10. Calculate travel times
11. Show locations
12. Show travel times results
13. Show raw Google API responses
 0. Quit"""


def prompt(label: str, default: str = '') -> str:
    return input(f"{label} [{default}]: ") or default


def prompt_number(label: str, cast=float):
    while True:
        try:
            return cast(input(f"{label}: "))
        except ValueError:
            print("Invalid input. Please enter a number.")


def edit_address(showcase: GoogleApiShowcase) -> None:
    showcase.set_active_tab(Tab.GEOCODE)
    address = showcase.address
    showcase.update_field(FormField.STREET, prompt("Street", address.street))
    showcase.update_field(FormField.POSTAL_CODE, prompt("Postal code", address.postalcode))
    showcase.update_field(FormField.CITY, prompt("City", address.city))
    showcase.update_field(FormField.STATE, prompt("State", address.state))
    showcase.update_field(FormField.COUNTRY, prompt("Country", address.country))


def display_locations(showcase: GoogleApiShowcase) -> None:
    locations = showcase.locations.list()
    if not locations:
        print("\nNo locations yet. Geocode an address or add one manually.")
        return
    print("\n| Id  | Latitude     | Longitude    |")
    for loc in locations:
        print(f"| {loc.id:<3} | {loc.lat:<12} | {loc.lng:<12} |")


def display_results(results: list[DistanceResult]) -> None:
    """Formats and prints the travel times table."""
    if not results:
        print("\nNo travel times calculated yet.")
        return

    header = "| Id  | Status       | From                           | To                             | Duration        | Distance        |"
    divider = "-" * len(header)
    print(header)
    print(divider)
    for r in results:
        print(f"| {r.id:<3} | {r.status:<12} | "
              f"{r.from_address[:30]:<30} | {r.to_address[:30]:<30} | "
              f"{r.duration:<15} | {r.distance:<15} |")
    print(divider)


def display_raw_responses(showcase: GoogleApiShowcase) -> None:
    for title, raw in (('Geocoding', showcase.geo_results),
                       ('Distance Matrix', showcase.matrix_results)):
        print(f"\n--- {title} ---")
        print(raw if raw is not None else "No response yet.")


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Google API Showcase: geocode addresses and calculate travel times.")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose mode to see the API calls being made.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    showcase = GoogleApiShowcase(
        adapter=GoogleMapsAdapter(),
        key_store=FileKeyStore(),
        notifier=ConsoleNotifier(),
        api_key=os.getenv("GOOGLE_API_KEY", ''),
    )

    print("Welcome to the Google API Showcase.")
    print("Geocode addresses and calculate the travel times between them.")
    print("This is an example, not intended for production use.")

    while True:
        print(MENU.format(tab=showcase.active_tab.value,
                          remember='on' if showcase.remember_api_key else 'off'))
        choice = input("Enter your choice: ").strip()

        if choice == '0':
            break
        elif choice == '1':
            showcase.set_active_tab(Tab.API_KEY)
            showcase.update_field(FormField.API_KEY, input("Google API key: ").strip())
        elif choice == '2':
            showcase.update_field(FormField.REMEMBER_API_KEY, not showcase.remember_api_key)
        elif choice == '3':
            edit_address(showcase)
        elif choice == '4':
            showcase.clear_address()
        elif choice == '5':
            showcase.submit_geocode()
        elif choice == '6':
            print(f"Added location {showcase.add_location()}.")
        elif choice == '7':
            location_id = prompt_number("Location id", int)
            showcase.update_location(location_id,
                                     prompt_number("Latitude"),
                                     prompt_number("Longitude"))
        elif choice == '8':
            showcase.remove_location(prompt_number("Location id", int))
        elif choice == '9':
            showcase.clear_locations()
        elif choice == '10':
            showcase.set_active_tab(Tab.TRAVEL_TIMES)
            display_results(showcase.submit_travel_times() or [])
        elif choice == '11':
            display_locations(showcase)
        elif choice == '12':
            display_results(showcase.distance_matrix)
        elif choice == '13':
            display_raw_responses(showcase)
        else:
            print("Invalid choice.")


if __name__ == '__main__':
    main()
