"""Base exception for service-layer failures."""


class PostboardError(Exception):
    """Base class for errors raised by the service layer."""
