"""Host platform adapters: permission authority plus ordered position providers."""

from geobridge.platform.abstract_platform import AbstractPositioningPlatform, PermissionCallback
from geobridge.platform.desktop_platform import DesktopPlatform
from geobridge.platform.dummy_platform import DummyPlatform, StaticProvider
from geobridge.platform.permission_store import PermissionStore

__all__ = [
    "AbstractPositioningPlatform",
    "DesktopPlatform",
    "DummyPlatform",
    "PermissionCallback",
    "PermissionStore",
    "StaticProvider",
]
