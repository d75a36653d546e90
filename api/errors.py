class ChatError(Exception):
    """Base error for request failures that map to a specific HTTP status."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChatError):
    status_code = 400


class AuthError(ChatError):
    status_code = 401


class NotFoundError(ChatError):
    status_code = 404
