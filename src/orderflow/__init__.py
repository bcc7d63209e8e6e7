"""OrderFlow - merchandise order and product dashboard API."""

__version__ = "1.0.0"
