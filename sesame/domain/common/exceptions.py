"""Root of the application's exception hierarchy."""


class SesameError(Exception):
    """Base class for all domain errors raised by the service."""
