"""
Error taxonomy for the AI Pipe service.

Every error is terminal for the request. The API layer renders each one as
`{"ok": false, "error": <message>}` with the error's status code.
"""


class AIPipeError(Exception):
    """Base class: carries the HTTP status and the client-facing message."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AIPipeError):
    """Input missing, not a string, or empty after trimming."""

    status_code = 400
    default_message = "Missing 'input' (string) in JSON body"


class MalformedBodyError(AIPipeError):
    """Body declared as JSON but could not be decoded."""

    status_code = 400
    default_message = "Invalid JSON body"


class AuthorizationError(AIPipeError):
    """Credential gate enabled and the bearer token did not match."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AIPipeError):
    status_code = 404
    default_message = "Not found"


class PayloadTooLargeError(AIPipeError):
    status_code = 413
    default_message = "Payload too large"
