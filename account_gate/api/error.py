from account_gate.libs.result import Error

LOGIN_REQUIRED_MESSAGE = "You must be logged in to do that."


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class LoginRequired(Exception):
    """Raised by require_authenticated; rendered as a flash + redirect to /login."""

    def __init__(self, message: str = LOGIN_REQUIRED_MESSAGE):
        self.message = message
        super().__init__(message)
