import json
import os
from pathlib import Path

import httpx
import pytest
from geoip2.errors import AddressNotFoundError

DATA_DIR = Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def baseline_settings_env():
    """Provide baseline env vars so tests are not affected by local .env.

    Pydantic-settings precedence: init args > env vars > .env > defaults.
    Setting these ensures stable defaults regardless of any .env present.
    """
    os.environ.update({
        # App
        "APP_NAME": "VisitorMap",
        "APP_VERSION": "0.1.0",
        "APP_DEBUG": "false",
        "APP_ENVIRONMENT": "development",
        # API
        "API_HOST": "0.0.0.0",
        "API_PORT": "3001",
        "API_WORKERS": "1",
        "API_RELOAD": "false",
        "API_LOG_LEVEL": "INFO",
        # Static assets are not served in tests
        "STATIC_ENABLED": "false",
    })


@pytest.fixture(autouse=True)
def refresh_settings_cache():
    """Clear settings cache so env changes take effect per test.

    Ensures tests using monkeypatch.setenv() get a fresh Settings instance.
    """
    from visitormap.config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def load_valid_log() -> list[str]:
    """Load the contents of the valid access log file."""
    with open(DATA_DIR / "valid_access_log.txt", "r", encoding="utf-8") as f:
        return f.readlines()


@pytest.fixture
def load_invalid_log() -> list[str]:
    """Load the contents of the invalid access log file."""
    with open(DATA_DIR / "invalid_access_log.txt", "r", encoding="utf-8") as f:
        return f.readlines()


def log_line(ip: str, url: str = "/", status: int = 200, size: int = 512) -> str:
    """Build a combined log format line."""
    return (
        f'{ip} - - [10/Oct/2024:13:55:36 +0000] "GET {url} HTTP/1.1" {status} {size} '
        f'"https://example.com/" "Mozilla/5.0 (X11; Linux x86_64)"'
    )


class FakeBatchAPI:
    """httpx transport handler emulating the ip-api.com batch endpoint.

    Addresses listed in ``locations`` resolve successfully, all others fail.
    """

    def __init__(self, locations: dict[str, dict] | None = None, fail_with: Exception | None = None) -> None:
        self.locations = locations or {}
        self.fail_with = fail_with
        self.requests: list[list[dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        if self.fail_with is not None:
            raise self.fail_with
        results = []
        for item in payload:
            ip = item["query"]
            if ip in self.locations:
                results.append({"status": "success", "query": ip, **self.locations[ip]})
            else:
                results.append({"status": "fail", "message": "reserved range", "query": ip})
        return httpx.Response(200, json=results)

    @property
    def queried_ips(self) -> list[str]:
        return [item["query"] for chunk in self.requests for item in chunk]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


PARIS = {
    "city": "Paris",
    "country": "France",
    "countryCode": "FR",
    "regionName": "Île-de-France",
    "lat": 48.8566,
    "lon": 2.3522,
}


@pytest.fixture
def fake_batch_api() -> FakeBatchAPI:
    return FakeBatchAPI({"1.1.1.1": PARIS})


class StubGeoIPReader:
    """Minimal stand-in for geoip2.database.Reader.city()."""

    def __init__(self, known: set[str] | None = None) -> None:
        self.known = known
        self.closed = False

    def city(self, ip: str):
        if self.known is not None and ip not in self.known:
            raise AddressNotFoundError(f"The address {ip} is not in the database.")

        class Country:
            iso_code = "US"
            name = "United States"
        class City:
            name = "Test City"
        class SubdivisionsMostSpecific:
            name = "California"
            iso_code = "CA"
        class Subdivisions:
            most_specific = SubdivisionsMostSpecific()
        class Location:
            latitude = 37.751
            longitude = -97.822
            time_zone = "UTC"
        class IPData:
            country = Country()
            city = City()
            subdivisions = Subdivisions()
            location = Location()

        return IPData()

    def close(self) -> None:
        self.closed = True
