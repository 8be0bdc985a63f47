from typing import Optional

from geobridge.location.providers import AbstractPositionProvider, PassiveProvider
from geobridge.location.types import Coordinate, PermissionState
from geobridge.logging import GEOBRIDGE_LOGGER
from geobridge.platform.abstract_platform import AbstractPositioningPlatform, PermissionCallback


class StaticProvider(AbstractPositionProvider):
    """In-memory provider with a settable fix."""

    def __init__(self, name: str, fix: Optional[Coordinate] = None, enabled: bool = True, passive: bool = False):
        self._name = name
        self.fix = fix
        self.enabled = enabled
        self.passive = passive
        self.queries = 0

    @property
    def name(self) -> str:
        return self._name

    def is_enabled(self) -> bool:
        return self.enabled

    def last_known_fix(self) -> Optional[Coordinate]:
        self.queries += 1
        return self.fix


class DummyPlatform(AbstractPositioningPlatform):
    """
    Scriptable platform for development and tests.

    Permission requests are held until ``grant()`` or ``deny()`` is called,
    mimicking an OS prompt the user answers later.
    """

    def __init__(
        self,
        state: Optional[PermissionState] = PermissionState.UNDETERMINED,
        providers: Optional[list[AbstractPositionProvider]] = None,
        auto_answer: Optional[bool] = None,
    ):
        """
        Args:
            state: Initial permission state (None simulates an unrecognised state)
            providers: Providers in priority order; defaults to a GPS provider at (0, 0)
            auto_answer: If set, ``process_events()`` answers pending requests with this value
        """
        self.state = state
        self._providers = providers if providers is not None else [StaticProvider("gps", Coordinate(0.0, 0.0))]
        self.auto_answer = auto_answer
        self.pending_callbacks: list[PermissionCallback] = []
        self.permission_requests = 0

    def permission_state(self) -> Optional[PermissionState]:
        return self.state

    def request_permission(self, callback: PermissionCallback) -> None:
        self.permission_requests += 1
        self.pending_callbacks.append(callback)

    def providers(self) -> list[AbstractPositionProvider]:
        return list(self._providers)

    def grant(self) -> None:
        self._answer(True)

    def deny(self) -> None:
        self._answer(False)

    def process_events(self) -> None:
        if self.auto_answer is not None and self.pending_callbacks:
            self._answer(self.auto_answer)

    def _answer(self, granted: bool) -> None:
        self.state = PermissionState.GRANTED if granted else PermissionState.DENIED
        callbacks, self.pending_callbacks = self.pending_callbacks, []
        GEOBRIDGE_LOGGER.debug(f"Dummy platform answering {len(callbacks)} permission request(s): granted={granted}")
        for callback in callbacks:
            callback(granted)

    @classmethod
    def demo(cls) -> "DummyPlatform":
        """A platform that grants on first prompt and reports a fixed position."""
        return cls(
            state=PermissionState.UNDETERMINED,
            providers=[
                StaticProvider("gps", Coordinate(52.52, 13.405)),
                StaticProvider("network", Coordinate(52.5, 13.4)),
                PassiveProvider(52.0, 13.0),
            ],
            auto_answer=True,
        )
