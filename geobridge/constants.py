"""Application-wide constants for GeoBridge.

Channel names, method names and reply codes shared between the bridge, the
method channel and the CLI live here to avoid circular imports.
"""

# ============================================================================
# METHOD CHANNEL
# ============================================================================
DEFAULT_CHANNEL_NAME = "com.geobridge.location"
GET_CURRENT_LOCATION = "getCurrentLocation"

# ============================================================================
# REPLY ERROR CODES
# ============================================================================
ERROR_UNAVAILABLE = "UNAVAILABLE"
ERROR_PERMISSION_DENIED = "PERMISSION_DENIED"
ERROR_UNKNOWN = "UNKNOWN"
ERROR_BUSY = "BUSY"

# Channel-level codes, produced outside the bridge
ERROR_HANDLER_FAILED = "ERROR"
ERROR_MALFORMED_CALL = "MALFORMED_CALL"

MESSAGE_UNAVAILABLE = "Location not available."
MESSAGE_PERMISSION_DENIED = "Location permission was denied."
MESSAGE_UNKNOWN = "Unknown authorization status."
MESSAGE_BUSY = "A location request is already pending."

# ============================================================================
# POSITION PROVIDERS (priority order)
# ============================================================================
GPS_PROVIDER = "gps"
NETWORK_PROVIDER = "network"
PASSIVE_PROVIDER = "passive"

DEFAULT_NETWORK_PRIMARY_URL = "https://ipinfo.io/json"
DEFAULT_NETWORK_FALLBACK_URL = "https://ipapi.co/json/"

# ============================================================================
# PERMISSION STORE
# ============================================================================
LOCATION_PERMISSION_KEY = "location"
PERMISSIONS_FILE_NAME = "permissions.json"
