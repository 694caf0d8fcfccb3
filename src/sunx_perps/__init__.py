"""SunX perpetual futures API connector."""

__version__ = "0.1.0"
