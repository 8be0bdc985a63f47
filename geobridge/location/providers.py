"""Position providers for GeoBridge.

Each provider reads a last-known position from one source. Providers never
request a fresh fix; they report what their source already has.
"""

import json
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

import requests

from geobridge.constants import (
    DEFAULT_NETWORK_FALLBACK_URL,
    DEFAULT_NETWORK_PRIMARY_URL,
    GPS_PROVIDER,
    NETWORK_PROVIDER,
    PASSIVE_PROVIDER,
)
from geobridge.location.types import Coordinate
from geobridge.logging import GEOBRIDGE_LOGGER


class AbstractPositionProvider(ABC):
    """Abstract base class for a named source of position data."""

    # Passive providers only piggyback on positions gathered elsewhere; they do not
    # count as "location services enabled" on their own.
    passive: bool = False

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether this provider is switched on for the host."""

    @abstractmethod
    def last_known_fix(self) -> Optional[Coordinate]:
        """
        Return the most recent position this provider knows about.

        Returns:
            Coordinate, or None if the provider has no fix. May raise on faults;
            callers treat a raised error as "no fix".
        """


class GpsdProvider(AbstractPositionProvider):
    """GPS-based provider reading gpsd's report stream through gpspipe."""

    def __init__(self, enabled: bool = True, timeout: float = 5.0, message_count: int = 10):
        """
        Initialize gpsd provider.

        Args:
            enabled: Whether GPS is switched on in settings
            timeout: Seconds to wait for gpspipe
            message_count: Number of gpsd JSON reports to read per query
        """
        self.enabled = enabled
        self.timeout = timeout
        self.message_count = message_count
        self._available: Optional[bool] = None

    @property
    def name(self) -> str:
        return GPS_PROVIDER

    def is_available(self) -> bool:
        """
        Check if gpspipe is installed. The result is cached after the first check.

        Returns:
            True if the gpspipe command exists, False otherwise.
        """
        if self._available is None:
            try:
                result = subprocess.run(
                    ["which", "gpspipe"],
                    capture_output=True,
                    timeout=2,
                )
                self._available = result.returncode == 0
            except (OSError, subprocess.SubprocessError):
                self._available = False
        return self._available

    def is_enabled(self) -> bool:
        return self.enabled and self.is_available()

    def last_known_fix(self) -> Optional[Coordinate]:
        """
        Read the latest position from gpsd's report stream.

        Blocks until gpspipe has printed ``message_count`` reports or ``timeout``
        seconds pass (5 s by default). gpsd emits reports about once a second, so a
        query usually takes a few seconds.
        """
        try:
            result = subprocess.run(
                ["gpspipe", "-w", "-n", str(self.message_count)],
                capture_output=True,
                timeout=self.timeout,
                text=True,
            )
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            GEOBRIDGE_LOGGER.debug(f"Could not query gpsd: {e}")
            return None

        if result.returncode != 0:
            return None

        return self.parse_reports(result.stdout)

    @staticmethod
    def parse_reports(output: str) -> Optional[Coordinate]:
        """
        Extract the last TPV position from gpsd JSON lines.

        Args:
            output: Newline-separated gpsd JSON reports

        Returns:
            Coordinate from the latest TPV report carrying both lat and lon, or None.
        """
        fix = None
        for line in output.strip().split("\n"):
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError:
                continue

            if not isinstance(data, dict) or data.get("class") != "TPV":
                continue
            if "lat" in data and "lon" in data:
                fix = Coordinate(float(data["lat"]), float(data["lon"]))
        return fix


class NetworkProvider(AbstractPositionProvider):
    """Network-based provider using IP geolocation services."""

    def __init__(
        self,
        enabled: bool = True,
        primary_url: str = DEFAULT_NETWORK_PRIMARY_URL,
        fallback_url: str = DEFAULT_NETWORK_FALLBACK_URL,
        timeout: float = 4.0,
        session: Optional[requests.Session] = None,
    ):
        self.enabled = enabled
        self.primary_url = primary_url
        self.fallback_url = fallback_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return NETWORK_PROVIDER

    def is_enabled(self) -> bool:
        return self.enabled

    def last_known_fix(self) -> Optional[Coordinate]:
        """
        Look up the host's position from its public IP address.

        Makes up to two blocking HTTP requests, each bounded by ``timeout``.
        """
        # ipinfo.io reports "loc": "lat,lon"; fall through to ipapi.co on any fault
        try:
            response = self.session.get(self.primary_url, timeout=self.timeout)
            response.raise_for_status()
            loc = response.json().get("loc")
            if loc:
                lat_s, lon_s = loc.split(",")
                return Coordinate(float(lat_s), float(lon_s))
        except (requests.RequestException, ValueError, AttributeError) as e:
            GEOBRIDGE_LOGGER.debug(f"Primary geolocation lookup failed: {e}")

        response = self.session.get(self.fallback_url, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()
        if data.get("latitude") is None or data.get("longitude") is None:
            return None
        return Coordinate(float(data["latitude"]), float(data["longitude"]))


class PassiveProvider(AbstractPositionProvider):
    """Coarse provider returning a configured static position."""

    passive = True

    def __init__(self, latitude: Optional[float] = None, longitude: Optional[float] = None):
        self.latitude = latitude
        self.longitude = longitude

    @property
    def name(self) -> str:
        return PASSIVE_PROVIDER

    def is_enabled(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def last_known_fix(self) -> Optional[Coordinate]:
        if not self.is_enabled():
            return None
        return Coordinate(float(self.latitude), float(self.longitude))
