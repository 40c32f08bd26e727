"""Exception types raised by the AssetForge core.

The API layer maps each type to an HTTP status:

- :class:`ValidationError` -> 400, raised before any generation call
- :class:`GenerationError` -> 502, a generation service call failed
- :class:`PersistenceError` -> 500, the asset store could not save a record
"""


class AssetForgeError(Exception):
    """Base class for all AssetForge errors."""

    pass


class ValidationError(AssetForgeError):
    """User-friendly validation error.

    This exception is raised when request input fails validation.
    The message is intended to be returned directly to the caller.
    """

    pass


class GenerationError(AssetForgeError):
    """A generation service call (image or metadata) failed."""

    pass


class PersistenceError(GenerationError):
    """Saving a generated asset failed.

    Subclasses :class:`GenerationError` because a failed save fails the
    generation attempt it belongs to.
    """

    pass
