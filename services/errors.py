"""
Error kinds raised by the validation gate, the registry and the stores.
Each carries the HTTP status and the client-facing message; the API layer
turns them into ``{"message": ...}`` responses.
"""


class ApplicationError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingField(ApplicationError):
    status_code = 400
    message = "Please provide all required fields."


class InvalidAmount(ApplicationError):
    status_code = 400
    message = "Loan amount must be a positive number."


class InvalidStatus(ApplicationError):
    status_code = 400
    message = "Status must be one of: Pending, Approved, Rejected."


class NotFound(ApplicationError):
    status_code = 404
    message = "Application not found."


class StoreUnavailable(ApplicationError):
    """Persistence failure. The message stays generic; the cause is chained for logs."""

    status_code = 500
    message = "Internal server error."
