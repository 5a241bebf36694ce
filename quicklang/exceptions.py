class QuicklangError(Exception):
    """Base exception for bot errors."""

    pass


class AuthenticationError(QuicklangError):
    """Raised when the Google service-account handshake fails. Fatal at startup."""

    pass


class GoogleApiError(QuicklangError):
    """Raised when a Google API call fails."""

    def __init__(self, operation: str, status_code: int | None, message: str):
        self.operation = operation
        self.status_code = status_code
        self.message = message
        super().__init__(f"{operation} failed ({status_code}): {message}")


class TelegramApiError(QuicklangError):
    """Raised when the Bot API answers with ok=false."""

    def __init__(self, method: str, error_code: int | None, description: str):
        self.method = method
        self.error_code = error_code
        self.description = description
        super().__init__(f"Telegram {method} failed ({error_code}): {description}")


class DuplicateCommandError(QuicklangError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Command /{name} is already registered")
