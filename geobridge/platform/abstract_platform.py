"""Positioning platform capability.

A platform bundles the two host services the location bridge depends on: the
permission authority and the ordered set of position providers.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

from geobridge.location.providers import AbstractPositionProvider
from geobridge.location.types import PermissionState

PermissionCallback = Callable[[bool], None]


class AbstractPositioningPlatform(ABC):
    """Abstract base for a host's permission authority and position providers."""

    @abstractmethod
    def permission_state(self) -> Optional[PermissionState]:
        """
        Observe the current location permission.

        Returns:
            The current PermissionState, or None if the host reports a state
            that maps to none of them.
        """

    @abstractmethod
    def request_permission(self, callback: PermissionCallback) -> None:
        """
        Ask the user for location permission.

        Must not block on the user's answer. The decision is delivered later by
        calling ``callback(granted)`` from the platform's event delivery.
        """

    @abstractmethod
    def providers(self) -> list[AbstractPositionProvider]:
        """Position providers in priority order (GPS, network, passive)."""

    def process_events(self) -> None:  # noqa: B027
        """Deliver queued permission decisions. Optional for platforms with their own event loop."""
