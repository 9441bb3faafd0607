"""
Error taxonomy surfaced through the response envelope.

Every error carries the HTTP status and the message placed in the envelope;
exception handlers in ``storekeeper.api.exception_handlers`` do the rendering.
"""

NOT_AUTHENTICATED_MESSAGE = "Not Authenticated"
NOT_FOUND_MESSAGE = "Not Found"
UNEXPECTED_MESSAGE = "Something went wrong"


class ApiError(Exception):
    status_code = 500
    default_message = UNEXPECTED_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 422
    default_message = "The given data was invalid."


class AuthenticationError(ApiError):
    status_code = 401
    default_message = NOT_AUTHENTICATED_MESSAGE


class NotFoundError(ApiError):
    status_code = 404
    default_message = NOT_FOUND_MESSAGE


class UnexpectedError(ApiError):
    status_code = 500
    default_message = UNEXPECTED_MESSAGE
