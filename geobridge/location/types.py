"""Value types shared by the bridge, the providers and the platforms."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees, passed through unvalidated."""

    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": float(self.latitude), "longitude": float(self.longitude)}


class PermissionState(Enum):
    """Location permission as observed on the host platform."""

    UNDETERMINED = "undetermined"
    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def parse(cls, value: object) -> Optional["PermissionState"]:
        """Map a stored value to a state, or None when it is not a recognised state."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None
