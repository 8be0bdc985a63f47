from geobridge.bridge.location_bridge import LocationBridge

__all__ = ["LocationBridge"]
