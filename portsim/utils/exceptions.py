"""Exceptions raised by the port simulator."""


class PortSimError(Exception):
    """Base class for simulator errors."""


class BadEncodingError(PortSimError):
    """A snapshot or entity encoding does not follow the expected format."""


class NoSuchShipError(PortSimError, LookupError):
    """No ship is registered under the requested IMO number."""


class NoSuchCargoError(PortSimError, LookupError):
    """No cargo is registered under the requested id."""
