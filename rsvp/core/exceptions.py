"""
Custom exceptions

Every error carries the HTTP status it maps to and a short, fixed message
that is safe to show to the client.
"""
from typing import Iterable, Tuple


class RSVPError(Exception):
    """Base error for the service"""
    status_code = 500
    message = "Internal Server Error"


class ValidationError(RSVPError):
    """Missing or invalid form fields"""
    status_code = 400
    message = "Bad Request"


class ConflictError(RSVPError):
    """Duplicate or reserved event id"""
    status_code = 409
    message = "Conflict"


class DuplicateKeyError(ConflictError):
    """A document already exists at the requested key"""
    pass


class VersionConflictError(ConflictError):
    """The document changed between read and conditional write"""
    pass


class NotFoundError(RSVPError):
    """Unknown event id or route"""
    status_code = 404
    message = "Not Found"


class MethodNotAllowedError(RSVPError):
    """Route exists but does not accept the request method"""
    status_code = 405
    message = "Method Not Allowed"

    def __init__(self, allowed: Iterable[str] = ()):
        super().__init__(self.message)
        self.allowed: Tuple[str, ...] = tuple(allowed)


class NotImplementedRouteError(RSVPError):
    """Route is recognised but has no handler yet"""
    status_code = 501
    message = "Not Implemented"


class InternalError(RSVPError):
    """Unexpected failure; details stay in the server log"""
    pass


class StoreError(InternalError):
    """Document store or transport failure"""
    pass


class RenderError(InternalError):
    """Template rendering failed"""
    pass


class MalformedFormError(InternalError):
    """Request body could not be parsed as a form"""
    pass
