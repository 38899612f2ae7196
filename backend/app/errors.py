class CartError(Exception):
    """Base class for failures the API layer turns into an HTTP status."""

    status_code = 500


class InvalidArgument(CartError):
    status_code = 400


class NotFound(CartError):
    status_code = 404


class Conflict(CartError):
    status_code = 409


class LostUpdate(CartError):
    status_code = 409


class StorageError(CartError):
    status_code = 500
