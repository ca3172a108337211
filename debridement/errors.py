# debridement/errors.py


class DebridementError(Exception):
    """Base class for cleanup engine errors."""


class ReferenceUnavailable(DebridementError):
    """The home body reference vector has not been resolved yet."""


class VesselGone(DebridementError):
    """The vessel was already removed from its world."""
