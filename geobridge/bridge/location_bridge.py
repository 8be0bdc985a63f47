"""Location bridge for GeoBridge.

Answers ``getCurrentLocation`` by checking the location permission, asking
for it when undecided, and replying with the last-known fix from the
platform's providers.
"""

import threading
from typing import Optional

from geobridge.channel.method_channel import MethodCall, MethodChannel
from geobridge.channel.method_result import MethodResult
from geobridge.constants import (
    ERROR_BUSY,
    ERROR_PERMISSION_DENIED,
    ERROR_UNAVAILABLE,
    ERROR_UNKNOWN,
    GET_CURRENT_LOCATION,
    MESSAGE_BUSY,
    MESSAGE_PERMISSION_DENIED,
    MESSAGE_UNAVAILABLE,
    MESSAGE_UNKNOWN,
)
from geobridge.location.types import Coordinate, PermissionState
from geobridge.logging import GEOBRIDGE_LOGGER
from geobridge.platform.abstract_platform import AbstractPositioningPlatform


class LocationBridge:
    """
    Bridges the ``getCurrentLocation`` call to a positioning platform.

    At most one request waits on a permission prompt at a time. It is held in
    ``_pending_result`` until the platform calls back; a second request arriving
    meanwhile is rejected with BUSY.
    """

    def __init__(self, platform: AbstractPositioningPlatform):
        self.platform = platform
        self._pending_result: Optional[MethodResult] = None
        self._lock = threading.Lock()

    @property
    def has_pending_request(self) -> bool:
        with self._lock:
            return self._pending_result is not None

    def register(self, channel: MethodChannel) -> None:
        """Install this bridge as the channel's method call handler."""
        channel.set_method_call_handler(self._on_method_call)
        GEOBRIDGE_LOGGER.info(f"Location bridge registered on channel {channel.name}")

    def _on_method_call(self, call: MethodCall, result: MethodResult) -> None:
        self.handle(call.method, result)

    def handle(self, method_name: str, result: MethodResult) -> None:
        """
        Handle one method call, replying on ``result`` now or after the permission prompt.

        Args:
            method_name: Name of the called method
            result: Write-once reply channel for this call
        """
        if method_name != GET_CURRENT_LOCATION:
            result.not_implemented()
            return

        # Platform calls stay outside the lock; a platform may re-enter the bridge
        state = self.platform.permission_state()

        with self._lock:
            busy = self._pending_result is not None
            if not busy and state is PermissionState.UNDETERMINED:
                self._pending_result = result
        if busy:
            GEOBRIDGE_LOGGER.warning("Location request rejected: another request is awaiting permission")
            result.error(ERROR_BUSY, MESSAGE_BUSY)
            return

        if state is PermissionState.UNDETERMINED:
            GEOBRIDGE_LOGGER.info("Location permission undetermined; requesting it")
            try:
                self.platform.request_permission(self.on_permission_result)
            except Exception:
                # Free the slot so later requests are not rejected as BUSY
                with self._lock:
                    if self._pending_result is result:
                        self._pending_result = None
                raise
        elif state is PermissionState.DENIED:
            result.error(ERROR_PERMISSION_DENIED, MESSAGE_PERMISSION_DENIED)
        elif state is PermissionState.GRANTED:
            self._reply_with_location(result)
        else:
            GEOBRIDGE_LOGGER.error(f"Unexpected location permission state: {state!r}")
            result.error(ERROR_UNKNOWN, MESSAGE_UNKNOWN)

    def on_permission_result(self, granted: bool) -> None:
        """Continuation for the platform's permission decision. No-op when nothing is pending."""
        with self._lock:
            result, self._pending_result = self._pending_result, None

        if result is None:
            GEOBRIDGE_LOGGER.debug("Permission decision arrived with no pending request")
            return

        if granted:
            self._reply_with_location(result)
        else:
            GEOBRIDGE_LOGGER.info("Location permission denied by user")
            result.error(ERROR_PERMISSION_DENIED, MESSAGE_PERMISSION_DENIED)

    def fetch_last_known_location(self) -> Optional[Coordinate]:
        """
        Read the best last-known fix from the platform's providers.

        Providers are tried in the platform's priority order and the first fix
        wins. A provider that raises counts as having no fix.

        Returns:
            Coordinate, or None if permission is not granted, no non-passive
            provider is enabled, or no provider has a fix.
        """
        if self.platform.permission_state() is not PermissionState.GRANTED:
            return None

        try:
            providers = [p for p in self.platform.providers() if p.is_enabled()]
        except Exception as e:
            GEOBRIDGE_LOGGER.debug(f"Could not enumerate position providers: {e}")
            return None

        if not any(not p.passive for p in providers):
            GEOBRIDGE_LOGGER.warning("No location provider is enabled")
            return None

        for provider in providers:
            try:
                fix = provider.last_known_fix()
            except Exception as e:
                GEOBRIDGE_LOGGER.debug(f"Provider {provider.name} failed: {e}")
                continue
            if fix is not None:
                GEOBRIDGE_LOGGER.debug(f"Using {provider.name} fix: lat={fix.latitude:.6f}, lon={fix.longitude:.6f}")
                return fix

        return None

    def _reply_with_location(self, result: MethodResult) -> None:
        fix = self.fetch_last_known_location()
        if fix is not None:
            result.success(fix.to_dict())
        else:
            result.error(ERROR_UNAVAILABLE, MESSAGE_UNAVAILABLE)
