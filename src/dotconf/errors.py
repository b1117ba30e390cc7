"""The one error kind this library raises."""


class DotconfError(Exception):
    """Raise when a dotenv file cannot be opened or read.

    The message is the operating system's own description of the
    failure, kept verbatim so callers can display it as-is.
    """

    def __init__(self, message: str) -> None:
        """Store *message* as the error text."""
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return the wrapped message unchanged."""
        return self.message
