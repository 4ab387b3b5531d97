"""
core/exceptions.py -- Error taxonomy shared by the services and the API layer.

Services raise these; api/main.py maps every InventoryError to the JSON error
envelope using the status_code and code carried on the class. Nothing here
knows about HTTP frameworks.
"""


class InventoryError(Exception):
    """Base exception for all inventory API errors."""

    status_code = 500
    code = "internal_error"
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(InventoryError):
    """Raised when a request body or path parameter cannot be parsed."""

    status_code = 400
    code = "invalid_input"
    default_message = "Invalid request"


class Unauthenticated(InventoryError):
    """Raised when no token is presented, or it is invalid or expired."""

    status_code = 401
    code = "unauthorized"
    default_message = "Authentication required."


class Forbidden(InventoryError):
    """Raised when a valid token carries an insufficient role."""

    status_code = 403
    code = "forbidden"
    default_message = "Admin access required"


class NotFound(InventoryError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class Conflict(InventoryError):
    """Raised when a write would duplicate a unique key."""

    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class InternalError(InventoryError):
    pass
