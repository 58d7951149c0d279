from typing import Optional


class CliCommandException(Exception):
    """
    Raised by a CLI command to stop with a message and an exit code.

    Attributes:
        error_code: Process exit code
        docs_url: Where to read more, printed with the message
    """

    def __init__(
        self,
        message: str,
        error_code: int = -1,
        docs_url: Optional[str] = None,
        raiser: Optional[Exception] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.docs_url = docs_url
        self.raiser = raiser
        super().__init__(message)
