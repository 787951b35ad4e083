"""Build-numbered aliases for WAR artifacts."""

__version__ = "0.1.0"
