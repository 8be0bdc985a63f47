"""GeoBridge: answers location method calls from an application layer."""

__version__ = "0.1.0"
