"""Version information for gymfit-access."""

__version__ = "0.1.0"
