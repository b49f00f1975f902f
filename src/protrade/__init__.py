"""ProTrade leverage position calculator."""

__version__ = "1.0.0"
