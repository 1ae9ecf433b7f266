import json

import pytest
import requests

from key_store import KeyStore
from notifications import Notifier


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self.text = payload if isinstance(payload, str) else json.dumps(payload)
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


class MemoryKeyStore(KeyStore):
    def __init__(self):
        self.values = {}

    def set(self, name, value, days):
        self.values[name] = (value, days)

    def get(self, name):
        entry = self.values.get(name)
        return entry[0] if entry else None

    def clear(self, name):
        self.values.pop(name, None)


class RecordingNotifier(Notifier):
    def __init__(self):
        self.messages = []

    def notify(self, title, message, variant):
        self.messages.append((title, message, variant))


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def key_store():
    return MemoryKeyStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def matrix_response():
    """A 2 x 2 Distance Matrix response where every element is OK."""
    def element(duration, distance):
        return {
            "status": "OK",
            "duration": {"value": duration, "text": f"{duration // 60} mins"},
            "distance": {"value": distance, "text": f"{distance / 1000} km"},
        }

    return {
        "status": "OK",
        "origin_addresses": ["Leidseplein, Amsterdam", "Binnenhof, Den Haag"],
        "destination_addresses": ["Leidseplein, Amsterdam", "Binnenhof, Den Haag"],
        "rows": [
            {"elements": [element(600, 1000), element(900, 2000)]},
            {"elements": [element(1200, 3000), element(300, 4000)]},
        ],
    }
