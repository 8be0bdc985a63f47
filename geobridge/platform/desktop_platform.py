"""Desktop/headless positioning platform.

Permission decisions are kept in a PermissionStore and asked for on the
console; positions come from gpsd, IP geolocation and a configured fallback.
"""

from collections import deque
from collections.abc import Callable
from typing import Optional

import click

from geobridge.location.providers import (
    AbstractPositionProvider,
    GpsdProvider,
    NetworkProvider,
    PassiveProvider,
)
from geobridge.location.types import PermissionState
from geobridge.logging import GEOBRIDGE_LOGGER
from geobridge.platform.abstract_platform import AbstractPositioningPlatform, PermissionCallback
from geobridge.platform.permission_store import PermissionStore
from geobridge.settings.geobridge_settings import GeoBridgeSettings

PROMPT_TEXT = "Allow GeoBridge to access this device's location?"


def console_prompter() -> Optional[bool]:
    """
    Ask on the terminal. Prompts go to stderr so stdout stays a clean reply stream.

    Returns:
        The user's answer, or None when the prompt was aborted (closed input, Ctrl-C).
    """
    try:
        return click.confirm(PROMPT_TEXT, default=False, err=True)
    except click.Abort:
        GEOBRIDGE_LOGGER.warning("Permission prompt aborted; denying this request without remembering it")
        return None


def deny_prompter() -> bool:
    GEOBRIDGE_LOGGER.info("Non-interactive permission mode; denying location access")
    return False


PROMPTERS: dict[str, Callable[[], Optional[bool]]] = {
    "console": console_prompter,
    "deny": deny_prompter,
}


class DesktopPlatform(AbstractPositioningPlatform):
    """Platform adapter for a desktop or headless host."""

    def __init__(
        self,
        permission_store: PermissionStore,
        providers: list[AbstractPositionProvider],
        prompter: Callable[[], Optional[bool]] = console_prompter,
    ):
        self.permission_store = permission_store
        self._providers = list(providers)
        self.prompter = prompter
        self._pending_callbacks: deque[PermissionCallback] = deque()
        self._unsaved_state: Optional[PermissionState] = None

    @classmethod
    def from_settings(
        cls, settings: GeoBridgeSettings, permission_store: Optional[PermissionStore] = None
    ) -> "DesktopPlatform":
        """Build the platform with providers in priority order: GPS, network, passive."""
        providers: list[AbstractPositionProvider] = [
            GpsdProvider(enabled=settings.gps_enabled, timeout=settings.gpspipe_timeout),
            NetworkProvider(
                enabled=settings.network_enabled,
                primary_url=settings.network_primary_url,
                fallback_url=settings.network_fallback_url,
                timeout=settings.network_timeout,
            ),
            PassiveProvider(settings.passive_latitude, settings.passive_longitude),
        ]
        return cls(
            permission_store=permission_store or PermissionStore(),
            providers=providers,
            prompter=PROMPTERS[settings.permission_prompt],
        )

    def permission_state(self) -> Optional[PermissionState]:
        if self._unsaved_state is not None:
            return self._unsaved_state
        return self.permission_store.get_state()

    def request_permission(self, callback: PermissionCallback) -> None:
        GEOBRIDGE_LOGGER.debug("Location permission requested")
        self._pending_callbacks.append(callback)

    def providers(self) -> list[AbstractPositionProvider]:
        return list(self._providers)

    def has_pending_events(self) -> bool:
        return bool(self._pending_callbacks)

    def process_events(self) -> None:
        """
        Prompt for each queued permission request and deliver the decision.

        Every dequeued callback is called exactly once. A prompt that fails or
        gets no answer denies the request but is not remembered, and a decision
        that cannot be saved is still delivered.
        """
        while self._pending_callbacks:
            callback = self._pending_callbacks.popleft()
            answer: Optional[bool] = None
            try:
                answer = self.prompter()
                if answer is not None:
                    self._remember(bool(answer))
            except Exception as e:
                GEOBRIDGE_LOGGER.error(f"Location permission prompt failed: {e}", exc_info=True)
            finally:
                callback(bool(answer))

    def _remember(self, granted: bool) -> None:
        state = PermissionState.GRANTED if granted else PermissionState.DENIED
        try:
            self.permission_store.set_state(state)
        except (IOError, OSError) as e:
            GEOBRIDGE_LOGGER.error(f"Could not save location permission ({state.value}): {e}")
            # Keep the decision for this process so the answer still takes effect
            self._unsaved_state = state
            return
        self._unsaved_state = None
