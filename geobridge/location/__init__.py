"""Location value types and position providers for GeoBridge."""

from geobridge.location.providers import AbstractPositionProvider, GpsdProvider, NetworkProvider, PassiveProvider
from geobridge.location.types import Coordinate, PermissionState

__all__ = [
    "AbstractPositionProvider",
    "Coordinate",
    "GpsdProvider",
    "NetworkProvider",
    "PassiveProvider",
    "PermissionState",
]
