"""Library version, reported as the client version in every request."""

__version__ = "0.1.0"
