class ApiError(Exception):
    """Base error rendered as `{"error": message}` with `status_code`."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class MethodNotAllowed(ApiError):
    status_code = 405
    default_message = "Method not allowed"


class UnexpectedError(ApiError):
    status_code = 500
    default_message = "Unexpected error"
