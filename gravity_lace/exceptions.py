"""Exception types raised at the simulation boundary."""


class GravityLaceError(Exception):
    """Base class for all gravity-lace errors."""
    pass


class InvalidBodyError(GravityLaceError, ValueError):
    """Body state rejected at creation: negative or non-finite mass, non-finite vectors."""
    pass


class InvalidTimeStepError(GravityLaceError, ValueError):
    """Elapsed time handed to a tick is negative or not finite."""
    pass


class DuplicateBodyError(GravityLaceError, ValueError):
    """A body is already registered."""
    pass


class StaleHandleError(GravityLaceError, KeyError):
    """Handle does not refer to a live body (never issued, or already destroyed)."""
    pass
